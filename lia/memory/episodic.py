"""Episodic memory: individual experiences with similarity recall."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID

import numpy as np

from lia.perception.text import cosine_similarity, hashed_embedding, tokenize

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Experience

logger = logging.getLogger(__name__)

# Recall score = similarity * (IMPORTANCE_FLOOR + (1 - IMPORTANCE_FLOOR) * importance)
IMPORTANCE_FLOOR = 0.5


@dataclass
class Episode:
    """One remembered experience."""

    experience_id: UUID
    content: str
    participant: str
    kind: str
    importance: float
    embedding: np.ndarray
    timestamp: datetime


class EpisodicMemorySystem:
    """Bounded store of episodes.

    When full, the least important episode is evicted (oldest first on ties).
    """

    def __init__(self, config: "SystemConfiguration"):
        self.capacity = config.memory_capacity
        self.embedding_dim = config.embedding_dim
        self.episodes: list[Episode] = []

    def __len__(self) -> int:
        return len(self.episodes)

    async def integrate_experience(self, experience: "Experience") -> None:
        """Store an experience as an episode.

        Raises:
            ValueError: If the experience has no content
        """
        if not experience.content.strip():
            raise ValueError("cannot remember an empty experience")

        episode = Episode(
            experience_id=experience.id,
            content=experience.content,
            participant=experience.participant,
            kind=experience.kind,
            importance=experience.importance,
            embedding=hashed_embedding(tokenize(experience.content), self.embedding_dim),
            timestamp=experience.timestamp,
        )
        self.episodes.append(episode)

        if len(self.episodes) > self.capacity:
            evicted = min(self.episodes, key=lambda e: (e.importance, e.timestamp))
            self.episodes.remove(evicted)
            logger.debug("Evicted episode %s (importance=%.2f)", evicted.experience_id, evicted.importance)

    def recall(self, query: str, k: int = 5, participant: Optional[str] = None) -> list[tuple[Episode, float]]:
        """Return up to k episodes most similar to the query, best first."""
        query_vec = hashed_embedding(tokenize(query), self.embedding_dim)
        scored = []
        for episode in self.episodes:
            if participant is not None and episode.participant != participant:
                continue
            similarity = cosine_similarity(query_vec, episode.embedding)
            if similarity <= 0:
                continue
            weight = IMPORTANCE_FLOOR + (1 - IMPORTANCE_FLOOR) * episode.importance
            scored.append((episode, similarity * weight))
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:k]
