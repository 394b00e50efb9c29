"""
Statistics recorder fed through the broker broadcast pipe
"""

import json

import matplotlib
matplotlib.use("Agg")

import pytest
import simpy

from analyzer.statistics import Statistics
from simulator.core.direction import UP


@pytest.fixture
def recorded(make_sim, broker):
    statistics = Statistics(broker.env, broker.get_broadcast_pipe())
    broker.env.process(statistics.start_listening())
    sim = make_sim(num_cars=2, broker=broker)
    return sim, statistics


def test_service_time_and_stops(recorded):
    sim, statistics = recorded

    sim.call(3, UP)
    sim.run_ticks(10)

    summary = statistics.summary()
    assert summary['hall_calls'] == 1
    assert summary['service_time']['count'] == 1
    # Called at t=0, car 0 stops on the 4th pass
    assert summary['service_time']['mean_ms'] == pytest.approx(4000.0)
    assert summary['service_time']['max_ms'] == pytest.approx(4000.0)
    assert summary['stops'] == 1
    assert summary['external_stops'] == 1
    assert summary['stops_per_car'] == {'Car_0': 1}
    assert statistics.assignments[0][3] == 'Car_0'


def test_empty_summary():
    statistics = Statistics(env=None, broadcast_pipe=None)
    summary = statistics.summary()
    assert summary['service_time'] == {'count': 0, 'mean_ms': 0.0, 'p95_ms': 0.0, 'max_ms': 0.0}
    assert summary['stops'] == 0


def test_trajectory_follows_car_floors(recorded):
    sim, statistics = recorded

    sim.press_in_car_button(1, 2)
    sim.run_ticks(4)

    # First status goes out when the car starts moving
    trajectory = statistics.car_trajectories['Car_1']
    assert list(trajectory)[:2] == [(1000, 1), (2000, 2)]
    assert statistics.arrivals[0][1:3] == ('Car_1', 2)
    assert 'Car_0' not in statistics.car_trajectories


def test_event_log_saved_as_json_lines(recorded, tmp_path):
    sim, statistics = recorded
    statistics.set_simulation_metadata(sim.config.to_dict())

    sim.call(2, UP)
    sim.run_ticks(8)
    sim.reset()
    sim.run_ticks(1)

    path = statistics.save_event_log(str(tmp_path / "log.jsonl"))
    with open(path, encoding='utf-8') as f:
        lines = [json.loads(line) for line in f]

    assert lines[0]['type'] == 'metadata'
    types = {line['type'] for line in lines[1:]}
    assert {'hall_call_on', 'hall_call_off', 'assignment', 'arrival', 'door_closed', 'reset'} <= types
    assert statistics.events_since(len(statistics.event_log)) == []


def test_trajectory_diagram_written(recorded, tmp_path):
    sim, statistics = recorded
    sim.call(4, UP)
    sim.run_ticks(6)

    output = statistics.plot_trajectory_diagram(str(tmp_path / "diagram.png"))

    assert (tmp_path / "diagram.png").exists()
    assert output.endswith("diagram.png")


def test_trajectory_returns_to_ground_floor_after_reset(recorded):
    sim, statistics = recorded

    sim.press_in_car_button(0, 3)
    sim.run(until=8000)
    assert sim.cars[0].state == "IDLE"
    assert statistics.car_trajectories['Car_0'][-1][1] == 3

    sim.reset()
    sim.run(until=15000)

    assert statistics.car_trajectories['Car_0'][-1][1] == 0


def test_bounded_history_keeps_recent_events_with_absolute_indices():
    env = simpy.Environment()
    statistics = Statistics(env, broadcast_pipe=None, max_events=3)

    for floor in range(5):
        statistics.record('car/Car_0/status', {'timestamp': floor * 1000, 'current_floor': floor})

    assert statistics.events_recorded == 5
    assert len(statistics.event_log) == 3
    assert [event['data']['floor'] for event in statistics.events_since(0)] == [2, 3, 4]
    assert [event['data']['floor'] for event in statistics.events_since(4)] == [4]
    assert statistics.events_since(5) == []
    assert list(statistics.car_trajectories['Car_0']) == [(2000, 2), (3000, 3), (4000, 4)]


def test_unbounded_by_default(recorded):
    sim, statistics = recorded
    assert statistics.max_events is None
    assert statistics.event_log.maxlen is None
