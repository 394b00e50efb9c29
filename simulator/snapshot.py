from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class CarSnapshot:
    """Read-only view of one car for observers."""

    car_id: int
    name: str
    current_floor: int
    direction: str
    targets: Tuple[int, ...]
    doors_open: bool
    moving: bool
    floor_buttons: FrozenSet[int]
    state: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["targets"] = list(self.targets)
        data["floor_buttons"] = sorted(self.floor_buttons)
        return data


@dataclass(frozen=True)
class FloorSnapshot:
    """Pending hall-call flags of one floor."""

    floor: int
    up: bool
    down: bool

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SimulationSnapshot:
    """Consistent view of the whole engine at one instant."""

    time: float
    tick: int
    cars: Tuple[CarSnapshot, ...]
    floors: Tuple[FloorSnapshot, ...]

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "tick": self.tick,
            "cars": [car.to_dict() for car in self.cars],
            "floors": [floor.to_dict() for floor in self.floors],
        }
