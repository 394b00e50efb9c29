"""
FloorCallBoard - pending hall calls per floor and direction

One HallButton per floor and direction. A car stopping at a floor
clears both directions together: one stop serves everybody waiting there.
"""

from typing import Dict, List

import simpy

from ..infrastructure.message_broker import MessageBroker
from .direction import DOWN, HALL_DIRECTIONS, UP
from .hall_button import HallButton


class FloorCallBoard:
    """Hall-call lamps for every floor of the building."""

    def __init__(self, env: simpy.Environment, num_floors: int, broker: MessageBroker):
        self.env = env
        self.num_floors = num_floors
        self.broker = broker
        self.buttons: List[Dict[str, HallButton]] = [
            {direction: HallButton(env, floor, direction, broker) for direction in HALL_DIRECTIONS}
            for floor in range(num_floors)
        ]

    def in_range(self, floor: int) -> bool:
        return 0 <= floor < self.num_floors

    def raise_call(self, floor: int, direction: str) -> bool:
        """
        Light the hall button for (floor, direction).

        Out-of-range floors are ignored.

        Returns:
            bool: True if the floor was in range (the flag is set afterwards)
        """
        if not self.in_range(floor):
            return False
        self.buttons[floor][direction].press()
        return True

    def clear(self, floor: int, car_name: str = None):
        """Reset both flags of a floor."""
        if not self.in_range(floor):
            return
        for button in self.buttons[floor].values():
            button.serve(car_name)

    def is_pending(self, floor: int) -> bool:
        """Whether either direction has a pending call at this floor."""
        if not self.in_range(floor):
            return False
        return any(button.is_lit() for button in self.buttons[floor].values())

    def is_lit(self, floor: int, direction: str) -> bool:
        if not self.in_range(floor):
            return False
        return self.buttons[floor][direction].is_lit()

    def pending_floors(self) -> List[int]:
        return [floor for floor in range(self.num_floors) if self.is_pending(floor)]

    def reset(self):
        for floor_buttons in self.buttons:
            for button in floor_buttons.values():
                button.reset()

    def snapshot(self):
        """Per-floor (up, down) flags, bottom floor first."""
        return [
            (floor_buttons[UP].is_lit(), floor_buttons[DOWN].is_lit())
            for floor_buttons in self.buttons
        ]
