"""
Simulation Configuration

Building size, fleet size, timing and demo traffic. All values are fixed
when the simulation is constructed; times are in milliseconds.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .dispatch import DispatchConfig


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 10

    def __post_init__(self):
        if self.num_floors < 2:
            raise ValueError("num_floors must be at least 2")


@dataclass
class ElevatorConfig:
    """Fleet specifications"""
    num_elevators: int = 3

    def __post_init__(self):
        if self.num_elevators < 1:
            raise ValueError("num_elevators must be at least 1")


@dataclass
class TimingConfig:
    """Clock period and door-open duration"""
    tick_ms: float = 1000.0
    door_ms: float = 3000.0

    def __post_init__(self):
        if self.tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        if self.door_ms <= 0:
            raise ValueError("door_ms must be positive")


@dataclass
class TrafficConfig:
    """Random demo traffic (hall calls and in-car presses)"""
    pattern: str = "random"  # random, none
    simulation_duration_ms: float = 120000.0
    call_rate_per_min: float = 6.0  # hall calls per minute
    in_car_probability: float = 1.0  # chance a summoned stop is followed by an in-car press

    def __post_init__(self):
        if self.pattern not in ("random", "none"):
            raise ValueError("pattern must be 'random' or 'none'")
        if self.simulation_duration_ms <= 0:
            raise ValueError("simulation_duration_ms must be positive")
        if self.call_rate_per_min < 0:
            raise ValueError("call_rate_per_min cannot be negative")
        if not (0.0 <= self.in_car_probability <= 1.0):
            raise ValueError("in_car_probability must be between 0 and 1")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, fleet, timing, dispatch and traffic settings.
    """
    building: BuildingConfig = field(default_factory=BuildingConfig)
    elevator: ElevatorConfig = field(default_factory=ElevatorConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    traffic: TrafficConfig = field(default_factory=TrafficConfig)

    # Simulation control
    random_seed: Optional[int] = None
    realtime_factor: float = 1.0  # 1.0 = realtime, 0.0 = as fast as possible
    verbose: bool = True

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data) or {}

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 10)
        )

        elevator_data = sim_data.get('elevator', {})
        elevator = ElevatorConfig(
            num_elevators=elevator_data.get('num_elevators', 3)
        )

        timing_data = sim_data.get('timing', {})
        timing = TimingConfig(
            tick_ms=timing_data.get('tick_ms', 1000.0),
            door_ms=timing_data.get('door_ms', 3000.0)
        )

        dispatch = DispatchConfig.from_dict(sim_data.get('dispatch', {}))

        traffic_data = sim_data.get('traffic', {})
        traffic = TrafficConfig(
            pattern=traffic_data.get('pattern', 'random'),
            simulation_duration_ms=traffic_data.get('simulation_duration_ms', 120000.0),
            call_rate_per_min=traffic_data.get('call_rate_per_min', 6.0),
            in_car_probability=traffic_data.get('in_car_probability', 1.0)
        )

        return cls(
            building=building,
            elevator=elevator,
            timing=timing,
            dispatch=dispatch,
            traffic=traffic,
            random_seed=sim_data.get('random_seed'),
            realtime_factor=sim_data.get('realtime_factor', 1.0),
            verbose=sim_data.get('verbose', True)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'elevator': {
                    'num_elevators': self.elevator.num_elevators
                },
                'timing': {
                    'tick_ms': self.timing.tick_ms,
                    'door_ms': self.timing.door_ms
                },
                'dispatch': self.dispatch.to_dict(),
                'traffic': {
                    'pattern': self.traffic.pattern,
                    'simulation_duration_ms': self.traffic.simulation_duration_ms,
                    'call_rate_per_min': self.traffic.call_rate_per_min,
                    'in_car_probability': self.traffic.in_car_probability
                },
                'realtime_factor': self.realtime_factor,
                'verbose': self.verbose
            }
        }

        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    def validate(self):
        """Validate configuration consistency"""
        # Doors must stay open for at least one full tick, otherwise a
        # stop could open and close between two passes unseen.
        if self.timing.door_ms < self.timing.tick_ms:
            raise ValueError(f"timing.door_ms ({self.timing.door_ms}) cannot be shorter than timing.tick_ms ({self.timing.tick_ms})")
        self.dispatch.validate()
