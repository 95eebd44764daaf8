from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import RoundingPolicy
from .base import RoundingStrategy
from .exact_strategy import ExactRounding
from .increment_strategy import IncrementRounding


@dataclass
class RoundingStrategyFactory:
    """Factory Pattern: choose the rounding strategy for a rule set's policy."""

    def for_policy(self, policy: RoundingPolicy) -> RoundingStrategy:
        if policy == RoundingPolicy.NONE:
            return ExactRounding()
        return IncrementRounding(policy.increment)
