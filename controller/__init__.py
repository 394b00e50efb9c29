"""
Elevator Dispatch Controller

Hall-call allocation for the simulated fleet: the dispatcher and the
pluggable cost strategies it uses.
"""

__version__ = "0.1.0"

from .dispatcher import CallDispatcher

__all__ = ['CallDispatcher']
