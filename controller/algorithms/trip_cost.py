"""
Trip Cost Strategy

Default allocation heuristic of the dispatcher. Its three branches are part
of the dispatcher's observable behaviour and are kept exactly as they are.
"""

from simulator.core.direction import DOWN, IDLE, UP

from ..interfaces.allocation_strategy import IAllocationStrategy


class TripCostStrategy(IAllocationStrategy):
    """
    Trip cost allocation strategy

    Cost Logic:
    - IDLE car: distance to the call floor
    - Same direction and still ahead of the call (current <= call floor
      going UP, current >= call floor going DOWN): distance to the call
      floor, the call is picked up en route
    - Anything else: distance to the last queued target plus the distance
      from there back to the call floor (finish the trip, then come back)
    """

    def cost(self, car, floor: int, direction: str) -> int:
        current = car.current_floor

        if car.direction == IDLE:
            return abs(current - floor)

        if car.direction == direction and (
            (direction == UP and current <= floor) or (direction == DOWN and current >= floor)
        ):
            return abs(current - floor)

        last_target = car.targets.last()
        if last_target is None:
            # Doors still open after the final stop: the trip ends here
            last_target = current
        return abs(current - last_target) + abs(last_target - floor)

    def get_strategy_name(self) -> str:
        return "Trip Cost (Finish-Trip-then-Return)"
