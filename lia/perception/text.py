"""Text utilities shared by perception and memory.

Embeddings are hashed bag-of-words vectors: deterministic across processes,
no vocabulary to maintain, and cheap enough to compute per interaction.
"""

from __future__ import annotations

import hashlib
import re
from typing import Iterable, Sequence

import numpy as np

_TOKEN_RE = re.compile(r"[a-z0-9']+")

POSITIVE_WORDS = frozenset(
    {
        "good", "great", "love", "happy", "glad", "wonderful", "thanks", "thank",
        "beautiful", "excited", "joy", "enjoy", "nice", "calm", "hope", "grateful",
        "fun", "amazing", "kind", "appreciate",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "bad", "sad", "hate", "angry", "afraid", "scared", "worried", "terrible",
        "awful", "hurt", "lonely", "anxious", "upset", "tired", "lost", "fear",
        "wrong", "broken", "cry", "pain",
    }
)


def tokenize(text: str) -> list[str]:
    """Lower-case word tokens of a text."""
    return _TOKEN_RE.findall(text.lower())


def _token_hash(token: str) -> int:
    return int.from_bytes(hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest(), "big")


def hashed_embedding(tokens: Iterable[str], dim: int) -> np.ndarray:
    """Signed feature-hashing embedding, L2-normalized.

    Returns a zero vector when there are no tokens.
    """
    vec = np.zeros(dim, dtype=float)
    for token in tokens:
        h = _token_hash(token)
        sign = 1.0 if (h >> 32) & 1 else -1.0
        vec[h % dim] += sign
    norm = np.linalg.norm(vec)
    if norm > 0:
        vec /= norm
    return vec


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity, 0.0 when either vector is zero."""
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na == 0 or nb == 0:
        return 0.0
    return float(np.dot(a, b) / (na * nb))


def lexicon_sentiment(tokens: Sequence[str]) -> float:
    """Sentiment in [-1, 1] from positive/negative word counts."""
    pos = sum(1 for t in tokens if t in POSITIVE_WORDS)
    neg = sum(1 for t in tokens if t in NEGATIVE_WORDS)
    if pos + neg == 0:
        return 0.0
    return (pos - neg) / (pos + neg)
