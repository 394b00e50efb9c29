"""Core simulation entities"""

from .direction import UP, DOWN, IDLE
from .entity import Entity
from .hall_button import HallButton
from .call_board import FloorCallBoard
from .target_queue import TargetQueue
from .car import Car
from .clock import SimulationClock

__all__ = [
    'UP',
    'DOWN',
    'IDLE',
    'Entity',
    'HallButton',
    'FloorCallBoard',
    'TargetQueue',
    'Car',
    'SimulationClock',
]
