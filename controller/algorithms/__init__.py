"""Allocation strategies available to the dispatcher"""

from typing import Dict, Type

from ..interfaces.allocation_strategy import IAllocationStrategy
from .nearest_car import NearestCarStrategy
from .trip_cost import TripCostStrategy

STRATEGY_REGISTRY: Dict[str, Type[IAllocationStrategy]] = {
    "tripcost": TripCostStrategy,
    "nearestcar": NearestCarStrategy,
}


def get_strategy(name: str, **kwargs) -> IAllocationStrategy:
    """
    Build an allocation strategy from its configured name.

    Names are matched case-insensitively, ignoring '_' and '-'
    ('TripCost', 'trip_cost' and 'trip-cost' are the same strategy).

    Raises:
        ValueError: If no strategy has that name
    """
    key = name.lower().replace("_", "").replace("-", "")
    cls = STRATEGY_REGISTRY.get(key)
    if cls is None:
        raise ValueError(f"Unknown allocation strategy '{name}'. Available: {', '.join(STRATEGY_REGISTRY)}")
    return cls(**kwargs)


__all__ = [
    'NearestCarStrategy',
    'TripCostStrategy',
    'STRATEGY_REGISTRY',
    'get_strategy',
]
