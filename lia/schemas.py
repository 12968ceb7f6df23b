"""Data model for interactions, responses, and agent snapshots.

Boundary records (what callers hand in and get back) are frozen pydantic
models. Per-call intermediates produced by the pipeline stages are plain
dataclasses: they live for one ``process_interaction`` call and are never
stored on the agent.

Boundary records:
- Interaction: one inbound stimulus
- Experience: one inbound unit destined for long-term memory
- Response: the aggregated, immutable result of one interaction
- AgentIdentity: immutable id/name/birth time
- ConsciousnessState: point-in-time read-only view of the agent

Per-call intermediates:
- Context, QuantumState, NeuralResponse, ThoughtPattern, ConsciousnessResponse
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from lia.dimensional import DimensionalState


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(timezone.utc)


class Interaction(BaseModel):
    """One inbound stimulus for the interaction pipeline."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    content: str
    participant: str = "user"
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)


class Experience(BaseModel):
    """One inbound unit destined for long-term memory.

    Attributes:
        kind: Free-form category ("conversation", "observation", "skill", ...)
        importance: How strongly the experience should be retained (0-1)
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    content: str
    participant: str = "user"
    kind: str = "conversation"
    importance: float = Field(default=0.5, ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utc_now)

    def to_interaction(self) -> Interaction:
        """Convert to an Interaction carrying the same payload and timestamp."""
        return Interaction(
            id=self.id,
            content=self.content,
            participant=self.participant,
            metadata={**self.metadata, "experience_kind": self.kind},
            timestamp=self.timestamp,
        )


class PatternDescriptor(BaseModel):
    """A named neural pattern and how strongly it fired."""

    model_config = ConfigDict(frozen=True)

    name: str
    activation: float


class EmotionalResponse(BaseModel):
    """Affect descriptor over the eight Plutchik primaries.

    Attributes:
        affect: Primary emotion name -> value (0-1)
        dominant: Intensity label of the most prominent primary, or "neutral"
        valence: Pleasantness (-1 to 1)
        intensity: Overall activation (0-1)
    """

    model_config = ConfigDict(frozen=True)

    affect: dict[str, float]
    dominant: str = "neutral"
    valence: float = Field(default=0.0, ge=-1.0, le=1.0)
    intensity: float = Field(default=0.0, ge=0.0, le=1.0)


class Response(BaseModel):
    """Aggregated result of one interaction.

    ``quantum_coherence``, ``neural_patterns``, ``consciousness_level`` and
    ``emotional_layer`` are copied verbatim from the stage outputs.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    interaction_id: UUID
    participant: str = "user"
    content: str
    quantum_coherence: float = Field(ge=0.0, le=1.0)
    neural_patterns: list[PatternDescriptor] = Field(default_factory=list)
    consciousness_level: float = Field(ge=0.0, le=1.0)
    emotional_layer: EmotionalResponse
    thought_count: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class AgentIdentity(BaseModel):
    """Immutable identity of one agent instance."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = "Lia"
    birth_time: datetime = Field(default_factory=utc_now)

    @property
    def age(self) -> timedelta:
        return utc_now() - self.birth_time


class ConsciousnessState(BaseModel):
    """Read-only snapshot of the agent at one instant. Never stored by the agent."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    evolution_stage: int = Field(ge=1)
    dimensional_state: DimensionalState
    quantum_coherence: float = Field(ge=0.0, le=1.0)
    consciousness_level: float = Field(ge=0.0, le=1.0)
    emotional_state: EmotionalResponse
    captured_at: datetime = Field(default_factory=utc_now)


# ─────────────────────────────────────────────────────────────────────────────
# Per-call intermediates
# ─────────────────────────────────────────────────────────────────────────────


@dataclass
class Context:
    """Situational frame derived from one interaction.

    Attributes:
        tokens: Lower-cased word tokens of the content
        embedding: Unit-norm hashed bag-of-words vector
        motifs: Lexical motifs recognized in the content
        sentiment: Lexicon sentiment (-1 to 1)
        novelty: How unfamiliar the recognized motifs are (0-1)
        familiarity: How well the agent knows the participant (0-1)
    """

    interaction_id: UUID
    participant: str
    text: str
    tokens: list[str]
    embedding: np.ndarray
    motifs: list[str] = field(default_factory=list)
    sentiment: float = 0.0
    novelty: float = 1.0
    familiarity: float = 0.0
    timestamp: datetime = field(default_factory=utc_now)

    @property
    def is_question(self) -> bool:
        return "question" in self.motifs


@dataclass
class QuantumState:
    """Primary-transform output.

    Attributes:
        coherence: Bounded coherence of the transform (0-1)
        amplitudes: Normalized amplitude vector over the embedding space
        entropy: Shannon entropy of the squared amplitudes
    """

    coherence: float
    amplitudes: np.ndarray
    entropy: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.coherence <= 1.0:
            raise ValueError(f"coherence must be in [0, 1], got {self.coherence}")


@dataclass
class NeuralResponse:
    """Secondary-transform output: patterns ordered by activation, strongest first."""

    patterns: list[PatternDescriptor] = field(default_factory=list)

    @property
    def strongest(self) -> Optional[PatternDescriptor]:
        return self.patterns[0] if self.patterns else None


@dataclass
class ThoughtPattern:
    """One intermediate ideation unit."""

    descriptor: str
    strength: float


@dataclass
class ConsciousnessResponse:
    """Field-integration output.

    Attributes:
        awareness_level: Bounded awareness (0-1)
        focus: Descriptor of the thought the field settled on, if any
        integration: How much of the thought mass was integrated (0-1)
    """

    awareness_level: float
    focus: Optional[str] = None
    integration: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.awareness_level <= 1.0:
            raise ValueError(f"awareness_level must be in [0, 1], got {self.awareness_level}")
