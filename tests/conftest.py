"""Pytest configuration and fixtures."""

from uuid import uuid4

import numpy as np
import pytest

from lia.config import SystemConfiguration
from lia.schemas import Context, EmotionalResponse, Interaction, PatternDescriptor, Response


@pytest.fixture
def config():
    """Small deterministic configuration."""
    return SystemConfiguration(embedding_dim=16, seed=7)


@pytest.fixture
def make_context(config):
    """Factory for contexts with sensible defaults."""

    def _make(motifs=None, sentiment=0.0, novelty=1.0, familiarity=0.0, text="hello there"):
        embedding = np.zeros(config.embedding_dim)
        embedding[0] = 1.0
        return Context(
            interaction_id=uuid4(),
            participant="user",
            text=text,
            tokens=text.split(),
            embedding=embedding,
            motifs=list(motifs or []),
            sentiment=sentiment,
            novelty=novelty,
            familiarity=familiarity,
        )

    return _make


@pytest.fixture
def make_response():
    """Factory for responses with sensible defaults."""

    def _make(
        coherence=0.6,
        awareness=0.7,
        patterns=(("inquiry", 0.8), ("care", 0.6)),
        affect=None,
        valence=0.2,
        intensity=0.3,
        participant="user",
    ):
        return Response(
            interaction_id=uuid4(),
            participant=participant,
            content="I'd like to work it out with you.",
            quantum_coherence=coherence,
            neural_patterns=[PatternDescriptor(name=n, activation=a) for n, a in patterns],
            consciousness_level=awareness,
            emotional_layer=EmotionalResponse(
                affect=affect or {"joy": 0.6, "trust": 0.6, "anticipation": 0.7, "surprise": 0.2},
                dominant="joy",
                valence=valence,
                intensity=intensity,
            ),
            thought_count=len(patterns),
        )

    return _make


@pytest.fixture
def interaction():
    return Interaction(content="Hello Lia, why do you remember yesterday?", participant="ana")
