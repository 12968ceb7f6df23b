"""Evolution metrics: fold counts, recently folded response ids, dimensional history."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Optional
from uuid import UUID

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.dimensional import DimensionalState
    from lia.schemas import Response


class EvolutionMetrics:
    """Tracks every completed fold.

    Only the last ``history_size`` folded ids are retained; the agent keeps
    its own exactly-once ledger outside the staged registry.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.folds = 0
        self.recent_ids: deque[UUID] = deque(maxlen=config.history_size)
        self.folded_ids: set[UUID] = set()
        self.dimensional_history: deque["DimensionalState"] = deque(maxlen=config.history_size)

    def record_evolution(self, response: "Response") -> None:
        self.folds += 1
        if len(self.recent_ids) == self.recent_ids.maxlen:
            self.folded_ids.discard(self.recent_ids[0])
        self.recent_ids.append(response.id)
        self.folded_ids.add(response.id)

    def has_folded(self, response_id: UUID) -> bool:
        """True if the response is among the recently folded ones."""
        return response_id in self.folded_ids

    def record_dimensional_change(self, state: "DimensionalState") -> None:
        self.dimensional_history.append(state)

    @property
    def latest(self) -> Optional["DimensionalState"]:
        return self.dimensional_history[-1] if self.dimensional_history else None

    def drift(self) -> float:
        """Distance between the oldest and newest retained dimensional states."""
        if len(self.dimensional_history) < 2:
            return 0.0
        return self.dimensional_history[0].distance(self.dimensional_history[-1])
