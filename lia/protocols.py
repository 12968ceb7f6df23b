"""Capability interfaces for the agent's collaborators.

Each collaborator owns private state and exposes a narrow contract to the
orchestrator: a process-shaped operation, an evolve-shaped fold where it has
persistent state, and a pure snapshot accessor. Any object satisfying the
protocol can be substituted, which is how tests inject fakes.

Collaborators held in ``Subsystems`` must support ``copy.deepcopy``: every
mutation runs on a staged copy that replaces the committed one on success.
Objects that cannot be copied (locks, open handles) must either be kept
outside the collaborator or shared via ``__deepcopy__``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from lia.dimensional import DimensionalState
    from lia.perception.context import InteractionFeatures
    from lia.schemas import (
        ConsciousnessResponse,
        ConsciousnessState,
        Context,
        EmotionalResponse,
        Experience,
        Interaction,
        NeuralResponse,
        QuantumState,
        Response,
        ThoughtPattern,
    )


class ContextAnalyzer(Protocol):
    """Extracts raw features from an interaction."""

    def extract(self, interaction: "Interaction") -> "InteractionFeatures":
        ...


class PatternRecognizer(Protocol):
    """Recognizes lexical motifs and reports their novelty."""

    def recognize(self, tokens: Sequence[str], text: str = "") -> list[str]:
        ...

    def novelty(self, motifs: Sequence[str]) -> float:
        ...

    def observe(self, motifs: Sequence[str]) -> None:
        ...


class RelationshipTracker(Protocol):
    """Tracks how well the agent knows each participant."""

    def familiarity(self, participant: str) -> float:
        ...

    def record(self, response: "Response") -> None:
        ...


class QuantumProcessor(Protocol):
    """Primary transform (stage 2)."""

    async def process(self, context: "Context") -> "QuantumState":
        ...

    async def evolve(self, response: "Response") -> None:
        ...

    def coherence(self) -> float:
        ...


class NeuralProcessor(Protocol):
    """Secondary transform (stage 3)."""

    async def process_with_quantum_state(
        self, quantum_state: "QuantumState", context: "Context"
    ) -> "NeuralResponse":
        ...

    async def evolve_patterns(self, response: "Response") -> None:
        ...


class ThoughtGenerator(Protocol):
    """Pattern/thought generation (stage 4)."""

    async def generate_thoughts(
        self, neural_response: "NeuralResponse", quantum_state: "QuantumState"
    ) -> list["ThoughtPattern"]:
        ...


class ConsciousnessIntegrator(Protocol):
    """Field integration (stage 5)."""

    async def process_experience(
        self, context: "Context", thoughts: Sequence["ThoughtPattern"]
    ) -> "ConsciousnessResponse":
        ...

    async def evolve(self, response: "Response") -> None:
        ...

    def process_dimensional_change(self, state: "DimensionalState") -> None:
        ...

    def awareness_level(self) -> float:
        ...


class EmotionalProcessor(Protocol):
    """Affect scoring (stage 6)."""

    async def process_emotion(
        self, context: "Context", consciousness: "ConsciousnessResponse"
    ) -> "EmotionalResponse":
        ...

    async def evolve(self, response: "Response") -> None:
        ...

    def current_state(self) -> "EmotionalResponse":
        ...


class ResponseSynthesizerProtocol(Protocol):
    """Natural-language synthesis over every upstream artifact (stage 7)."""

    def create_natural_response(
        self,
        interaction: "Interaction",
        context: "Context",
        quantum_state: "QuantumState",
        neural_response: "NeuralResponse",
        thoughts: Sequence["ThoughtPattern"],
        consciousness: "ConsciousnessResponse",
        emotion: "EmotionalResponse",
    ) -> str:
        ...


class GrowthRecorder(Protocol):
    def record_growth(self, response: "Response") -> None:
        ...


class LearningIntegrator(Protocol):
    async def integrate_experience(self, response: "Response") -> None:
        ...


class EvolutionRecorder(Protocol):
    def record_evolution(self, response: "Response") -> None:
        ...

    def record_dimensional_change(self, state: "DimensionalState") -> None:
        ...

    def has_folded(self, response_id) -> bool:
        ...


class DimensionalImpactCalculator(Protocol):
    def calculate_impacts(self, response: "Response") -> dict[str, float]:
        ...


class EpisodicStore(Protocol):
    async def integrate_experience(self, experience: "Experience") -> None:
        ...


class SemanticStore(Protocol):
    async def integrate_knowledge(self, experience: "Experience") -> None:
        ...


class ProceduralStore(Protocol):
    async def integrate_learning(self, experience: "Experience") -> None:
        ...


class StatePersister(Protocol):
    """Persisted-state manager. Failures surface as PersistenceFailure."""

    async def update_state(self, state: "ConsciousnessState") -> None:
        ...

    async def record_evolution(self, stage: int) -> None:
        ...


class ConsciousnessCapable(ABC):
    """Interface satisfied by any concrete agent implementation."""

    @abstractmethod
    async def process_experience(self, experience: "Experience") -> "Response":
        """Run an experience through the interaction pipeline."""
        ...

    @abstractmethod
    async def evolve(self) -> None:
        """Advance the evolution stage by one."""
        ...

    @abstractmethod
    def current_state(self) -> "ConsciousnessState":
        """Return a read-only snapshot of the agent."""
        ...
