"""Context analysis: feature extraction and lexical motif recognition."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

from lia.perception.text import hashed_embedding, lexicon_sentiment, tokenize

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Interaction

logger = logging.getLogger(__name__)

# Longest content accepted by the interaction processor
MAX_CONTENT_LENGTH = 20_000

# Motif name -> trigger words
MOTIF_LEXICON: dict[str, frozenset[str]] = {
    "greeting": frozenset({"hello", "hi", "hey", "greetings", "morning", "evening"}),
    "gratitude": frozenset({"thanks", "thank", "grateful", "appreciate"}),
    "distress": frozenset({"sad", "afraid", "scared", "worried", "hurt", "lonely", "anxious", "upset"}),
    "curiosity": frozenset({"why", "how", "wonder", "curious", "explore", "what"}),
    "self_reference": frozenset({"you", "your", "yourself", "lia"}),
    "memory": frozenset({"remember", "recall", "forget", "yesterday", "before"}),
    "creativity": frozenset({"imagine", "create", "dream", "story", "idea", "invent"}),
}


@dataclass
class InteractionFeatures:
    """Raw features of one interaction's content."""

    text: str
    tokens: list[str]
    embedding: np.ndarray
    sentiment: float


class InteractionProcessor:
    """Extracts tokens, a hashed embedding, and lexicon sentiment."""

    def __init__(self, config: "SystemConfiguration"):
        self.embedding_dim = config.embedding_dim

    def extract(self, interaction: "Interaction") -> InteractionFeatures:
        """Extract features from an interaction.

        Raises:
            ValueError: If the content is empty, whitespace, or too long
        """
        text = interaction.content.strip()
        if not text:
            raise ValueError("interaction content is empty")
        if len(text) > MAX_CONTENT_LENGTH:
            raise ValueError(f"interaction content exceeds {MAX_CONTENT_LENGTH} characters")

        tokens = tokenize(text)
        return InteractionFeatures(
            text=text,
            tokens=tokens,
            embedding=hashed_embedding(tokens, self.embedding_dim),
            sentiment=lexicon_sentiment(tokens),
        )


def recognize_motifs(tokens: Sequence[str], text: str = "") -> list[str]:
    """Return the sorted motifs present in the tokens.

    A "?" anywhere in the text adds the "question" motif.
    """
    token_set = set(tokens)
    motifs = {name for name, words in MOTIF_LEXICON.items() if token_set & words}
    if "?" in text:
        motifs.add("question")
    return sorted(motifs)


class PatternRecognitionEngine:
    """Recognizes lexical motifs and remembers how often each was seen.

    Novelty of a motif decays as 1 / (1 + times_seen), so the first
    occurrence is fully novel.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.seen: Counter[str] = Counter()

    def recognize(self, tokens: Sequence[str], text: str = "") -> list[str]:
        return recognize_motifs(tokens, text)

    def novelty(self, motifs: Sequence[str]) -> float:
        """Mean novelty of the motifs; 1.0 when there are none."""
        if not motifs:
            return 1.0
        return float(np.mean([1.0 / (1 + self.seen[m]) for m in motifs]))

    def observe(self, motifs: Sequence[str]) -> None:
        self.seen.update(motifs)
