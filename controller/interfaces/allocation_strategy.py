"""
Allocation Strategy Interface

Defines how the dispatcher prices a hall call for each car.
"""

from abc import ABC, abstractmethod


class IAllocationStrategy(ABC):
    """
    Interface for car allocation strategies

    A strategy only prices a (car, call) pair. Picking the winner is the
    dispatcher's job: the strictly smallest cost wins and ties go to the
    first car in car-id order, so every strategy shares one tie-break rule.
    """

    @abstractmethod
    def cost(self, car, floor: int, direction: str) -> int:
        """
        Price a hall call for one car

        Args:
            car: Car (or any object exposing current_floor, direction, targets)
            floor: Call floor
            direction: 'UP' or 'DOWN'

        Returns:
            int: Non-negative cost, lower is better
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """
        Get the name of this strategy

        Returns:
            str: Strategy name (for logging and debugging)
        """
        pass
