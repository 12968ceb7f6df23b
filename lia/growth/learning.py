"""Learning engine: reinforcement weights over expressed neural patterns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Response

logger = logging.getLogger(__name__)


class LearningEngine:
    """EMA of (activation * awareness) per pattern name.

    Patterns expressed while the agent was highly aware are learned faster.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.pattern_weights: dict[str, float] = {}
        self.experiences = 0

    async def integrate_experience(self, response: "Response") -> None:
        for pattern in response.neural_patterns:
            current = self.pattern_weights.get(pattern.name, 0.0)
            target = pattern.activation * response.consciousness_level
            self.pattern_weights[pattern.name] = current + self.learning_rate * (target - current)
        self.experiences += 1

    def preferred_patterns(self, n: int = 3) -> list[str]:
        ranked = sorted(self.pattern_weights.items(), key=lambda item: (-item[1], item[0]))
        return [name for name, _ in ranked[:n]]
