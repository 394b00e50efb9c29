"""
Shared fixtures for the dispatch engine tests.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import simpy

from config import BuildingConfig, DispatchConfig, ElevatorConfig, SimulationConfig, TimingConfig
from simulator.infrastructure.message_broker import MessageBroker
from simulator.simulation import ElevatorSimulation


def build_config(num_floors=10, num_cars=3, tick_ms=1000, door_ms=3000, strategy="TripCost"):
    return SimulationConfig(
        building=BuildingConfig(num_floors=num_floors),
        elevator=ElevatorConfig(num_elevators=num_cars),
        timing=TimingConfig(tick_ms=tick_ms, door_ms=door_ms),
        dispatch=DispatchConfig(strategy=strategy),
        realtime_factor=0.0,
        verbose=False,
    )


@pytest.fixture
def make_sim():
    """Factory for a simulation on a plain simpy.Environment"""
    def _make(num_floors=10, num_cars=3, tick_ms=1000, door_ms=3000, strategy="TripCost", broker=None, env=None):
        config = build_config(num_floors, num_cars, tick_ms, door_ms, strategy)
        env = env if env is not None else (broker.env if broker is not None else simpy.Environment())
        return ElevatorSimulation(config, env=env, broker=broker)
    return _make


@pytest.fixture
def broker():
    env = simpy.Environment()
    return MessageBroker(env, verbose=False)
