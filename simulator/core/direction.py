"""
Travel direction values shared by cars, hall buttons and the dispatcher.

Directions are plain strings so they can travel through broker messages and
JSON snapshots unchanged.
"""

UP = "UP"
DOWN = "DOWN"
IDLE = "IDLE"

HALL_DIRECTIONS = (UP, DOWN)


def direction_toward(current_floor: int, target_floor: int) -> str:
    """Return UP / DOWN for the move from current_floor to target_floor, IDLE if equal"""
    if target_floor > current_floor:
        return UP
    if target_floor < current_floor:
        return DOWN
    return IDLE


def normalize_hall_direction(direction) -> str:
    """
    Normalize a hall-call direction ('up', 'Down', 'UP') to UP or DOWN.

    Raises:
        ValueError: If the value is not a hall-call direction
    """
    value = str(direction).upper()
    if value not in HALL_DIRECTIONS:
        raise ValueError(f"direction must be one of {HALL_DIRECTIONS}, got {direction!r}")
    return value
