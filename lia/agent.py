"""Lia: the long-lived agent and its interaction pipeline.

Every interaction passes through a fixed chain of stages:

    context → quantum → neural → thought → consciousness → emotion → synthesis

and the resulting Response is then folded back into the agent's long-lived
subsystems (the evolution fold):

    growth → transforms → learning → dimensional → persistence

State model:
    The agent holds one committed ``_AgentState`` (subsystem registry,
    dimensional state, evolution stage). A mutating call deep-copies the
    registry, runs every stage and fold step against the copy, and commits by
    swapping the single reference. A failure or cancellation before the swap
    discards the copy, so a partially applied fold is never observable.
    Persistence runs after the swap; a PersistenceFailure leaves the
    in-memory state committed.

Concurrency:
    All mutating operations (process_interaction, evolve_consciousness,
    process_memory, evolve) hold one asyncio.Lock for their whole duration.
    current_state() takes no lock: it has no await points and reads one
    committed reference, so it sees either the pre- or post-state of any
    mutation.

Evolution stage:
    ``evolution_stage`` counts completed evolution events. A fold is one
    event (the increment commits together with the dimensional update); an
    explicit evolve() is another, with no response attached. Both record the
    new stage with the state manager.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from lia.config import SystemConfiguration
from lia.dimensional import DimensionalState
from lia.errors import ConfigurationError, EvolutionFailure, PersistenceFailure, StageFailure
from lia.protocols import ConsciousnessCapable
from lia.registry import (
    MemorySystems,
    Subsystems,
    build_memory_systems,
    build_state_manager,
    build_subsystems,
)
from lia.schemas import AgentIdentity, ConsciousnessState, Context, Response

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from lia.memory.episodic import Episode
    from lia.protocols import StatePersister
    from lia.schemas import (
        ConsciousnessResponse,
        EmotionalResponse,
        Experience,
        Interaction,
        NeuralResponse,
        QuantumState,
        ThoughtPattern,
    )

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Stages of the interaction pipeline, in execution order."""

    CONTEXT = "context"
    QUANTUM = "quantum"
    NEURAL = "neural"
    THOUGHT = "thought"
    CONSCIOUSNESS = "consciousness"
    EMOTION = "emotion"
    SYNTHESIS = "synthesis"


class FoldStep(str, Enum):
    """Steps of the evolution fold, in execution order."""

    GROWTH = "growth"
    TRANSFORMS = "transforms"
    LEARNING = "learning"
    DIMENSIONAL = "dimensional"
    PERSISTENCE = "persistence"


@dataclass(frozen=True)
class _AgentState:
    """Everything a fold may change, committed as one reference."""

    subsystems: Subsystems
    dimensional_state: DimensionalState
    evolution_stage: int

    def staged(self) -> "_AgentState":
        return replace(self, subsystems=self.subsystems.staged())


async def _call(func: Callable[..., Any], *args: Any) -> Any:
    """Call a collaborator method that may be sync or async."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class Lia(ConsciousnessCapable):
    """The agent: owns every collaborator and sequences them.

    Usage:
        agent = Lia(SystemConfiguration(name="Lia"))
        response = await agent.process_interaction(Interaction(content="Hello?"))
        snapshot = agent.current_state()
    """

    def __init__(
        self,
        config: Optional[SystemConfiguration] = None,
        *,
        subsystems: Optional[Subsystems] = None,
        memory: Optional[MemorySystems] = None,
        state_manager: Optional["StatePersister"] = None,
        identity: Optional[AgentIdentity] = None,
    ):
        """Create the agent and its collaborators.

        Args:
            config: Validated configuration (defaults used when None)
            subsystems: Pipeline collaborators (built from config when None)
            memory: Memory stores (built from config when None)
            state_manager: Persisted-state manager (built from config when None)
            identity: Identity to adopt (a fresh one when None)

        Raises:
            ConfigurationError: If config is invalid or a collaborator cannot be built
        """
        if config is None:
            config = SystemConfiguration()
        elif not isinstance(config, SystemConfiguration):
            raise ConfigurationError(f"expected SystemConfiguration, got {type(config).__name__}")

        self._config = config
        self._identity = identity or AgentIdentity(name=config.name)
        self._memory = memory or build_memory_systems(config)
        self._state_manager = state_manager or build_state_manager(config)
        subsystems = subsystems or build_subsystems(config)
        try:
            subsystems.staged()
        except Exception as e:
            logger.error("Subsystems cannot be staged: %s", e)
            raise ConfigurationError(f"subsystems must support copy.deepcopy: {e}") from e
        self._state = _AgentState(
            subsystems=subsystems,
            dimensional_state=DimensionalState.from_config(config),
            evolution_stage=config.initial_evolution_stage,
        )
        # Ids of every committed fold; lives outside the staged registry
        self._folded_ids: set["UUID"] = set()
        self._write_lock = asyncio.Lock()

        logger.info(
            "%s initialized: id=%s, stage=%d, axes=%s",
            self._identity.name,
            self._identity.id,
            self._state.evolution_stage,
            ",".join(self._state.dimensional_state.axes),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Identity and read-only views
    # ─────────────────────────────────────────────────────────────────────

    @property
    def identity(self) -> AgentIdentity:
        return self._identity

    @property
    def id(self) -> "UUID":
        return self._identity.id

    @property
    def name(self) -> str:
        return self._identity.name

    @property
    def birth_time(self) -> "datetime":
        return self._identity.birth_time

    @property
    def config(self) -> SystemConfiguration:
        return self._config

    @property
    def evolution_stage(self) -> int:
        return self._state.evolution_stage

    @property
    def dimensional_state(self) -> DimensionalState:
        return self._state.dimensional_state

    @property
    def subsystems(self) -> Subsystems:
        """Committed collaborators. Treat as read-only."""
        return self._state.subsystems

    @property
    def memory(self) -> MemorySystems:
        return self._memory

    @property
    def state_manager(self) -> "StatePersister":
        return self._state_manager

    def current_state(self) -> ConsciousnessState:
        """Snapshot of the committed state. Pure; safe to call at any time."""
        state = self._state
        subsystems = state.subsystems
        return ConsciousnessState(
            id=self._identity.id,
            name=self._identity.name,
            evolution_stage=state.evolution_stage,
            dimensional_state=state.dimensional_state,
            quantum_coherence=subsystems.quantum_core.coherence(),
            consciousness_level=subsystems.consciousness_field.awareness_level(),
            emotional_state=subsystems.emotional_resonance.current_state(),
        )

    def has_folded(self, response_id: "UUID") -> bool:
        """True if a response with this id was ever folded into the agent."""
        return response_id in self._folded_ids

    def recall(self, query: str, k: int = 5) -> list[tuple["Episode", float]]:
        """Episodes most similar to the query, best first."""
        return self._memory.episodic.recall(query, k)

    # ─────────────────────────────────────────────────────────────────────
    # Mutating operations
    # ─────────────────────────────────────────────────────────────────────

    async def process_interaction(self, interaction: "Interaction") -> Response:
        """Run the full pipeline and fold the resulting response.

        Returns:
            The single Response produced for this interaction

        Raises:
            StageFailure: A stage failed; nothing was committed
            EvolutionFailure: A fold step failed; nothing was committed
            PersistenceFailure: In-memory state is committed; the response is attached
        """
        async with self._write_lock:
            staged = self._stage(StageFailure)
            response = await self._run_pipeline(staged.subsystems, interaction)
            self._commit(await self._fold(staged, response), response)
            logger.info(
                "Interaction %s folded: stage=%d, coherence=%.3f, awareness=%.3f",
                interaction.id,
                self._state.evolution_stage,
                response.quantum_coherence,
                response.consciousness_level,
            )
            await self._persist(response)
        return response

    async def process_experience(self, experience: "Experience") -> Response:
        """Run an experience through the interaction pipeline."""
        return await self.process_interaction(experience.to_interaction())

    async def evolve_consciousness(self, response: Response) -> None:
        """Fold a response produced elsewhere into the agent, exactly once.

        Raises:
            EvolutionFailure: If the response was already folded or a step failed
            PersistenceFailure: In-memory state is committed
        """
        async with self._write_lock:
            if self.has_folded(response.id):
                raise EvolutionFailure("admission", f"response {response.id} was already folded")
            self._commit(await self._fold(self._stage(EvolutionFailure), response), response)
            await self._persist(response)

    async def process_memory(self, experience: "Experience") -> None:
        """Feed an experience to the episodic, semantic, and procedural stores.

        The three stores run concurrently. Memory integration is not staged:
        stores that succeeded keep the experience even if another failed.

        Raises:
            StageFailure: Named "memory.<store>" for the first failing store;
                every failing store is logged
        """
        async with self._write_lock:
            memory = self._memory
            calls = [
                ("episodic", memory.episodic.integrate_experience),
                ("semantic", memory.semantic.integrate_knowledge),
                ("procedural", memory.procedural.integrate_learning),
            ]
            results = await asyncio.gather(
                *(_call(func, experience) for _, func in calls),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException) and not isinstance(result, Exception):
                    raise result
            failures = [(store, result) for (store, _), result in zip(calls, results) if isinstance(result, Exception)]
            for store, error in failures:
                logger.warning("Memory store %s failed for %s: %s", store, experience.id, error)
            if failures:
                store, error = failures[0]
                raise StageFailure(f"memory.{store}", str(error)) from error
            logger.debug("Experience %s integrated into memory", experience.id)

    async def evolve(self) -> None:
        """Advance the evolution stage by one and record it.

        Raises:
            PersistenceFailure: The new stage is committed in memory
        """
        async with self._write_lock:
            stage = self._state.evolution_stage + 1
            self._state = replace(self._state, evolution_stage=stage)
            logger.info("%s evolved to stage %d", self._identity.name, stage)
            await self._persist_call("record_evolution", self._state_manager.record_evolution, stage)

    # ─────────────────────────────────────────────────────────────────────
    # Staging and commit
    # ─────────────────────────────────────────────────────────────────────

    def _stage(self, error: type[StageFailure] | type[EvolutionFailure]) -> _AgentState:
        """Deep-copy the committed state; a copy failure is raised as ``error("staging")``."""
        try:
            return self._state.staged()
        except Exception as e:
            logger.error("Failed to stage subsystems: %s", e)
            raise error("staging", str(e)) from e

    def _commit(self, state: _AgentState, response: Response) -> None:
        # No await between the swap and the ledger update
        self._state = state
        self._folded_ids.add(response.id)

    # ─────────────────────────────────────────────────────────────────────
    # Interaction pipeline
    # ─────────────────────────────────────────────────────────────────────

    async def _run_stage(self, stage: PipelineStage, func: Callable[..., Any], *args: Any) -> Any:
        logger.debug("Stage %s", stage.value)
        try:
            return await _call(func, *args)
        except Exception as e:
            logger.warning("Stage %s failed: %s", stage.value, e)
            raise StageFailure(stage.value, str(e)) from e

    async def _run_pipeline(self, subsystems: Subsystems, interaction: "Interaction") -> Response:
        context = await self._run_stage(PipelineStage.CONTEXT, self._analyze_context, subsystems, interaction)
        quantum_state = await self._run_stage(PipelineStage.QUANTUM, subsystems.quantum_core.process, context)
        neural_response = await self._run_stage(
            PipelineStage.NEURAL,
            subsystems.neural_matrix.process_with_quantum_state,
            quantum_state,
            context,
        )
        thoughts = await self._run_stage(
            PipelineStage.THOUGHT,
            subsystems.quantum_thought_processor.generate_thoughts,
            neural_response,
            quantum_state,
        )
        consciousness = await self._run_stage(
            PipelineStage.CONSCIOUSNESS,
            subsystems.consciousness_field.process_experience,
            context,
            thoughts,
        )
        emotion = await self._run_stage(
            PipelineStage.EMOTION,
            subsystems.emotional_resonance.process_emotion,
            context,
            consciousness,
        )
        return await self._run_stage(
            PipelineStage.SYNTHESIS,
            self._generate_response,
            subsystems,
            interaction,
            context,
            quantum_state,
            neural_response,
            thoughts,
            consciousness,
            emotion,
        )

    def _analyze_context(self, subsystems: Subsystems, interaction: "Interaction") -> Context:
        features = subsystems.interaction_processor.extract(interaction)
        recognizer = subsystems.pattern_recognition
        motifs = recognizer.recognize(features.tokens, features.text)
        novelty = recognizer.novelty(motifs)
        recognizer.observe(motifs)
        return Context(
            interaction_id=interaction.id,
            participant=interaction.participant,
            text=features.text,
            tokens=features.tokens,
            embedding=features.embedding,
            motifs=motifs,
            sentiment=features.sentiment,
            novelty=novelty,
            familiarity=subsystems.relationship_manager.familiarity(interaction.participant),
            timestamp=interaction.timestamp,
        )

    def _generate_response(
        self,
        subsystems: Subsystems,
        interaction: "Interaction",
        context: Context,
        quantum_state: "QuantumState",
        neural_response: "NeuralResponse",
        thoughts: list["ThoughtPattern"],
        consciousness: "ConsciousnessResponse",
        emotion: "EmotionalResponse",
    ) -> Response:
        content = subsystems.response_synthesizer.create_natural_response(
            interaction,
            context,
            quantum_state,
            neural_response,
            thoughts,
            consciousness,
            emotion,
        )
        return Response(
            interaction_id=interaction.id,
            participant=interaction.participant,
            content=content,
            quantum_coherence=quantum_state.coherence,
            neural_patterns=list(neural_response.patterns),
            consciousness_level=consciousness.awareness_level,
            emotional_layer=emotion,
            thought_count=len(thoughts),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Evolution fold
    # ─────────────────────────────────────────────────────────────────────

    async def _run_step(self, step: FoldStep, func: Callable[..., Any], *args: Any) -> Any:
        logger.debug("Fold step %s", step.value)
        try:
            return await _call(func, *args)
        except Exception as e:
            logger.warning("Fold step %s failed: %s", step.value, e)
            raise EvolutionFailure(step.value, str(e)) from e

    async def _fold(self, staged: _AgentState, response: Response) -> _AgentState:
        """Apply fold steps 1-4 to a staged state and return it for commit."""
        subsystems = staged.subsystems
        await self._run_step(FoldStep.GROWTH, subsystems.growth_tracker.record_growth, response)
        await self._run_step(FoldStep.TRANSFORMS, self._fold_transforms, subsystems, response)
        await self._run_step(FoldStep.LEARNING, self._fold_learning, subsystems, response)
        dimensional_state = await self._run_step(
            FoldStep.DIMENSIONAL,
            self._update_dimensional_state,
            subsystems,
            staged.dimensional_state,
            response,
        )
        return _AgentState(
            subsystems=subsystems,
            dimensional_state=dimensional_state,
            evolution_stage=staged.evolution_stage + 1,
        )

    async def _fold_transforms(self, subsystems: Subsystems, response: Response) -> None:
        folds = [
            subsystems.quantum_core.evolve,
            subsystems.neural_matrix.evolve_patterns,
            subsystems.consciousness_field.evolve,
            subsystems.emotional_resonance.evolve,
        ]
        if not self._config.parallel_fold:
            for fold in folds:
                await _call(fold, response)
            return

        # All four finish before the first error is raised
        results = await asyncio.gather(*(_call(fold, response) for fold in folds), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _fold_learning(self, subsystems: Subsystems, response: Response) -> None:
        await _call(subsystems.learning_engine.integrate_experience, response)
        subsystems.relationship_manager.record(response)

    def _update_dimensional_state(
        self,
        subsystems: Subsystems,
        current: DimensionalState,
        response: Response,
    ) -> DimensionalState:
        impacts = subsystems.dimensional_processor.calculate_impacts(response)
        updated = current.update(impacts)
        subsystems.consciousness_field.process_dimensional_change(updated)
        subsystems.evolution_metrics.record_dimensional_change(updated)
        subsystems.evolution_metrics.record_evolution(response)
        return updated

    async def _persist(self, response: Response) -> None:
        """Fold step 5: push the fresh snapshot, then the new stage."""
        logger.debug("Fold step %s", FoldStep.PERSISTENCE.value)
        snapshot = self.current_state()
        await self._persist_call("update_state", self._state_manager.update_state, snapshot, response)
        await self._persist_call(
            "record_evolution", self._state_manager.record_evolution, snapshot.evolution_stage, response
        )

    async def _persist_call(
        self,
        operation: str,
        func: Callable[[Any], Any],
        arg: Any,
        response: Optional[Response] = None,
    ) -> None:
        try:
            await _call(func, arg)
        except PersistenceFailure as e:
            if e.response is None:
                e.response = response
            raise
        except Exception as e:
            logger.error("Persistence %s failed: %s", operation, e)
            raise PersistenceFailure(operation, str(e), response=response) from e
