"""
Nearest Car Strategy

Plain distance-based allocation, ignoring direction and queued work.
"""

from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestCarStrategy(IAllocationStrategy):
    """
    Nearest car allocation strategy

    Cost is the distance between the car and the call floor, whatever the
    car is doing. Useful as a baseline against TripCostStrategy.
    """

    def cost(self, car, floor: int, direction: str) -> int:
        return abs(car.current_floor - floor)

    def get_strategy_name(self) -> str:
        return "Nearest Car (Distance-based)"
