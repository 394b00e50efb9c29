"""
SimulationConfig validation and YAML loading
"""

import pytest
import yaml

from config import (
    BuildingConfig,
    ConfigLoader,
    DispatchConfig,
    ElevatorConfig,
    SimulationConfig,
    TimingConfig,
    TrafficConfig,
    load_simulation_config,
    save_simulation_config,
)


def test_defaults():
    config = SimulationConfig()
    assert config.building.num_floors == 10
    assert config.elevator.num_elevators == 3
    assert config.timing.tick_ms == 1000.0
    assert config.timing.door_ms == 3000.0
    assert config.dispatch.strategy == "TripCost"
    config.validate()


@pytest.mark.parametrize("factory, message", [
    (lambda: BuildingConfig(num_floors=1), "num_floors"),
    (lambda: ElevatorConfig(num_elevators=0), "num_elevators"),
    (lambda: TimingConfig(tick_ms=0), "tick_ms"),
    (lambda: TimingConfig(door_ms=-5), "door_ms"),
    (lambda: TrafficConfig(pattern="rush"), "pattern"),
    (lambda: TrafficConfig(in_car_probability=1.5), "in_car_probability"),
    (lambda: DispatchConfig(strategy=""), "dispatch.strategy"),
    (lambda: SimulationConfig(realtime_factor=-1), "realtime_factor"),
])
def test_invalid_values_raise(factory, message):
    with pytest.raises(ValueError, match=message):
        factory()


def test_validate_rejects_door_shorter_than_tick():
    config = SimulationConfig(timing=TimingConfig(tick_ms=1000, door_ms=500))
    with pytest.raises(ValueError, match="door_ms"):
        config.validate()


def test_validate_rejects_unknown_strategy():
    config = SimulationConfig(dispatch=DispatchConfig(strategy="Genetic"))
    with pytest.raises(ValueError, match="Unknown dispatch.strategy"):
        config.validate()


def test_from_dict_fills_missing_sections_with_defaults():
    config = SimulationConfig.from_dict({'simulation': {'building': {'num_floors': 20}, 'random_seed': 3}})
    assert config.building.num_floors == 20
    assert config.elevator.num_elevators == 3
    assert config.random_seed == 3


def test_yaml_round_trip(tmp_path):
    config = SimulationConfig(
        building=BuildingConfig(num_floors=15),
        elevator=ElevatorConfig(num_elevators=4),
        timing=TimingConfig(tick_ms=800, door_ms=2400),
        dispatch=DispatchConfig(strategy="NearestCar"),
        random_seed=11,
        realtime_factor=0.0,
    )
    path = tmp_path / "nested" / "sim.yaml"

    save_simulation_config(config, path)
    loaded = load_simulation_config(path)

    assert loaded == config
    with open(path, encoding='utf-8') as f:
        raw = yaml.safe_load(f)
    assert raw['simulation']['timing'] == {'tick_ms': 800, 'door_ms': 2400}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_simulation_config(tmp_path / "absent.yaml")


def test_shipped_scenarios_load_by_name():
    names = ConfigLoader.available_scenarios()
    assert {'default', 'realtime_demo'} <= set(names)
    for name in names:
        config = load_simulation_config(name)
        assert config.building.num_floors >= 2

    demo = load_simulation_config("realtime_demo.yaml")
    assert demo.traffic.pattern == "none"


def test_empty_file_means_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding='utf-8')
    assert load_simulation_config(path) == SimulationConfig()
