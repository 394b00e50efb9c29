"""
Configuration management package

Provides configuration classes for the simulation and its dispatcher.
"""

from .dispatch import DispatchConfig

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    ElevatorConfig,
    TimingConfig,
    TrafficConfig
)

from .config_loader import (
    ConfigLoader,
    load_simulation_config,
    save_simulation_config
)

__all__ = [
    # Dispatch
    'DispatchConfig',

    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'ElevatorConfig',
    'TimingConfig',
    'TrafficConfig',

    # Loader
    'ConfigLoader',
    'load_simulation_config',
    'save_simulation_config',
]
