"""
Dispatch Configuration

Control-logic settings only: which allocation strategy prices hall calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class DispatchConfig:
    """Configuration for hall-call allocation"""
    strategy: str = "TripCost"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.strategy:
            raise ValueError("dispatch.strategy cannot be empty")

    @classmethod
    def from_dict(cls, data: dict) -> 'DispatchConfig':
        """Create DispatchConfig from dictionary"""
        data = data or {}
        return cls(
            strategy=data.get('strategy', 'TripCost'),
            parameters=data.get('parameters', {}) or {}
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'strategy': self.strategy,
            'parameters': self.parameters
        }

    def validate(self):
        """Validate that the strategy name is known"""
        from controller.algorithms import STRATEGY_REGISTRY

        key = self.strategy.lower().replace("_", "").replace("-", "")
        if key not in STRATEGY_REGISTRY:
            raise ValueError(f"Unknown dispatch.strategy '{self.strategy}'. Available: {', '.join(STRATEGY_REGISTRY)}")
