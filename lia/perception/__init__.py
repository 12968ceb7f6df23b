"""Perception: feature extraction, motif recognition, relationship tracking."""
from lia.perception.context import (
    InteractionFeatures,
    InteractionProcessor,
    MOTIF_LEXICON,
    PatternRecognitionEngine,
    recognize_motifs,
)
from lia.perception.relationship import Relationship, RelationshipManager
from lia.perception.text import cosine_similarity, hashed_embedding, lexicon_sentiment, tokenize

__all__ = [
    "InteractionFeatures",
    "InteractionProcessor",
    "MOTIF_LEXICON",
    "PatternRecognitionEngine",
    "Relationship",
    "RelationshipManager",
    "cosine_similarity",
    "hashed_embedding",
    "lexicon_sentiment",
    "recognize_motifs",
    "tokenize",
]
