"""Semantic memory: concept frequencies and co-occurrence."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import TYPE_CHECKING

from lia.perception.text import tokenize

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Experience

STOPWORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "your", "with", "this",
        "that", "have", "was", "were", "has", "had", "its", "it's", "from", "they",
        "them", "then", "than", "what", "when", "where", "who", "how", "why", "can",
        "all", "any", "our", "out", "about", "into", "just", "been", "i'm", "don't",
    }
)

MIN_CONCEPT_LENGTH = 3

# Concepts per experience considered for co-occurrence pairs
MAX_PAIR_CONCEPTS = 20


def extract_concepts(text: str) -> list[str]:
    """Unique content words of a text, in first-seen order."""
    seen: dict[str, None] = {}
    for token in tokenize(text):
        if len(token) >= MIN_CONCEPT_LENGTH and token not in STOPWORDS and not token.isdigit():
            seen.setdefault(token, None)
    return list(seen)


class SemanticMemorySystem:
    """Accumulates general knowledge as weighted concepts and associations."""

    def __init__(self, config: "SystemConfiguration"):
        self.concepts: Counter[str] = Counter()
        self.associations: Counter[tuple[str, str]] = Counter()

    async def integrate_knowledge(self, experience: "Experience") -> None:
        concepts = extract_concepts(experience.content)
        self.concepts.update(concepts)
        for a, b in combinations(sorted(concepts[:MAX_PAIR_CONCEPTS]), 2):
            self.associations[(a, b)] += 1

    def top_concepts(self, n: int = 10) -> list[tuple[str, int]]:
        return self.concepts.most_common(n)

    def related(self, concept: str, n: int = 5) -> list[tuple[str, int]]:
        """Concepts that co-occurred with ``concept``, most frequent first."""
        related: Counter[str] = Counter()
        for (a, b), count in self.associations.items():
            if a == concept:
                related[b] += count
            elif b == concept:
                related[a] += count
        return related.most_common(n)
