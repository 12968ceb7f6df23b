"""Growth tracking: running statistics over folded responses."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Response


class GrowthTracker:
    """Running means, peaks, and a bounded awareness history.

    Attributes:
        count: Number of responses recorded
        mean_coherence: Running mean of quantum coherence
        mean_consciousness: Running mean of consciousness level
        peak_consciousness: Highest consciousness level seen
    """

    def __init__(self, config: "SystemConfiguration"):
        self.count = 0
        self.mean_coherence = 0.0
        self.mean_consciousness = 0.0
        self.peak_consciousness = 0.0
        self.history: deque[float] = deque(maxlen=config.history_size)

    def record_growth(self, response: "Response") -> None:
        self.count += 1
        self.mean_coherence += (response.quantum_coherence - self.mean_coherence) / self.count
        self.mean_consciousness += (response.consciousness_level - self.mean_consciousness) / self.count
        self.peak_consciousness = max(self.peak_consciousness, response.consciousness_level)
        self.history.append(response.consciousness_level)

    def growth_rate(self) -> float:
        """Least-squares slope of consciousness level per response, 0.0 if < 2 points."""
        if len(self.history) < 2:
            return 0.0
        x = np.arange(len(self.history), dtype=float)
        slope, _ = np.polyfit(x, np.array(self.history), 1)
        return float(slope)

    def summary(self) -> dict[str, float]:
        return {
            "count": self.count,
            "mean_coherence": self.mean_coherence,
            "mean_consciousness": self.mean_consciousness,
            "peak_consciousness": self.peak_consciousness,
            "growth_rate": self.growth_rate(),
        }
