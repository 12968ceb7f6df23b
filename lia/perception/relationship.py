"""Per-participant relationship tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Response

logger = logging.getLogger(__name__)

# Interactions after which familiarity reaches ~63%
FAMILIARITY_HALF_SCALE = 10.0


@dataclass
class Relationship:
    """What the agent has accumulated about one participant.

    Attributes:
        interactions: Number of folded responses addressed to the participant
        rapport: EMA of response valence (-1 to 1)
        last_seen: Creation time of the latest folded response
    """

    participant: str
    interactions: int = 0
    rapport: float = 0.0
    last_seen: Optional[datetime] = None

    @property
    def familiarity(self) -> float:
        return self.interactions / (self.interactions + FAMILIARITY_HALF_SCALE)


class RelationshipManager:
    """Tracks familiarity and rapport per participant."""

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.relationships: dict[str, Relationship] = {}

    def familiarity(self, participant: str) -> float:
        rel = self.relationships.get(participant)
        return rel.familiarity if rel else 0.0

    def get(self, participant: str) -> Optional[Relationship]:
        return self.relationships.get(participant)

    def record(self, response: "Response") -> None:
        """Fold one response into the participant's relationship."""
        rel = self.relationships.setdefault(response.participant, Relationship(response.participant))
        rel.interactions += 1
        valence = response.emotional_layer.valence
        rel.rapport += (valence - rel.rapport) * self.learning_rate
        rel.last_seen = response.created_at
