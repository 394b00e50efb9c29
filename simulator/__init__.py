"""
Elevator Dispatch Simulator - Core simulation engine

This package provides the engine entities (cars, call board, target
queues, clock) and the infrastructure they run on. The assembled engine
lives in simulator.simulation.ElevatorSimulation.
"""

__version__ = "0.1.0"

from .core.car import Car
from .core.call_board import FloorCallBoard
from .core.target_queue import TargetQueue
from .core.clock import SimulationClock
from .core.hall_button import HallButton
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment

__all__ = [
    'Car',
    'FloorCallBoard',
    'TargetQueue',
    'SimulationClock',
    'HallButton',
    'Entity',
    'MessageBroker',
    'RealtimeEnvironment',
]
