"""
TargetQueue - the ordered set of floors a car still has to visit

The car always services the head of the queue next. The only ordering
rule is the sort applied on insert: ascending while the car travels up,
descending while it travels down, none while it is idle. There is no
nearest-floor insertion.
"""

from typing import Iterator, List, Optional, Tuple

from .direction import DOWN, UP


class TargetQueue:
    """Duplicate-free, direction-sorted list of target floors."""

    def __init__(self):
        self._floors: List[int] = []

    def insert(self, floor: int, direction: str) -> bool:
        """
        Add a floor to the queue.

        Args:
            floor: Floor to visit
            direction: Current travel direction of the owning car

        Returns:
            bool: False if the floor was already queued (nothing changes)
        """
        if floor in self._floors:
            return False
        self._floors.append(floor)
        if direction == UP:
            self._floors.sort()
        elif direction == DOWN:
            self._floors.sort(reverse=True)
        return True

    def peek(self) -> Optional[int]:
        return self._floors[0] if self._floors else None

    def pop_next(self) -> int:
        return self._floors.pop(0)

    def last(self) -> Optional[int]:
        return self._floors[-1] if self._floors else None

    def clear(self):
        self._floors.clear()

    def as_tuple(self) -> Tuple[int, ...]:
        return tuple(self._floors)

    def __contains__(self, floor) -> bool:
        return floor in self._floors

    def __len__(self) -> int:
        return len(self._floors)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._floors))

    def __bool__(self) -> bool:
        return bool(self._floors)

    def __repr__(self) -> str:
        return f"TargetQueue({self._floors})"
