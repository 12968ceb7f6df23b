"""Registry of collaborators owned by the orchestrator.

The orchestrator never holds collaborators as loose fields; it holds one
``Subsystems`` record (pipeline and fold collaborators) and one
``MemorySystems`` record. Tests substitute fakes field by field with
``dataclasses.replace``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lia.affect.resonance import EmotionalResonanceEngine
from lia.dimensional import DimensionalProcessor
from lia.errors import ConfigurationError
from lia.growth.learning import LearningEngine
from lia.growth.metrics import EvolutionMetrics
from lia.growth.tracker import GrowthTracker
from lia.memory.episodic import EpisodicMemorySystem
from lia.memory.procedural import ProceduralMemorySystem
from lia.memory.semantic import SemanticMemorySystem
from lia.perception.context import InteractionProcessor, PatternRecognitionEngine
from lia.perception.relationship import RelationshipManager
from lia.processing.consciousness import ConsciousnessField
from lia.processing.neural import NeuralMatrix
from lia.processing.quantum import QuantumCore
from lia.processing.synthesis import ResponseSynthesizer
from lia.processing.thought import QuantumThoughtProcessor
from lia.state.manager import StateManager

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.protocols import (
        ConsciousnessIntegrator,
        ContextAnalyzer,
        DimensionalImpactCalculator,
        EmotionalProcessor,
        EpisodicStore,
        EvolutionRecorder,
        GrowthRecorder,
        LearningIntegrator,
        NeuralProcessor,
        PatternRecognizer,
        ProceduralStore,
        QuantumProcessor,
        RelationshipTracker,
        ResponseSynthesizerProtocol,
        SemanticStore,
        StatePersister,
        ThoughtGenerator,
    )

logger = logging.getLogger(__name__)


@dataclass
class Subsystems:
    """Collaborators used by the interaction pipeline and the evolution fold."""

    interaction_processor: "ContextAnalyzer"
    pattern_recognition: "PatternRecognizer"
    relationship_manager: "RelationshipTracker"
    quantum_core: "QuantumProcessor"
    neural_matrix: "NeuralProcessor"
    quantum_thought_processor: "ThoughtGenerator"
    consciousness_field: "ConsciousnessIntegrator"
    emotional_resonance: "EmotionalProcessor"
    response_synthesizer: "ResponseSynthesizerProtocol"
    growth_tracker: "GrowthRecorder"
    learning_engine: "LearningIntegrator"
    evolution_metrics: "EvolutionRecorder"
    dimensional_processor: "DimensionalImpactCalculator"

    def staged(self) -> "Subsystems":
        """Deep copy for staged mutation; the original is left untouched."""
        return copy.deepcopy(self)


@dataclass
class MemorySystems:
    """Long-term memory stores fed by the memory-integration path."""

    episodic: "EpisodicStore"
    semantic: "SemanticStore"
    procedural: "ProceduralStore"


def build_subsystems(config: "SystemConfiguration") -> Subsystems:
    """Construct the default pipeline collaborators.

    Raises:
        ConfigurationError: If any collaborator rejects the configuration
    """
    try:
        return Subsystems(
            interaction_processor=InteractionProcessor(config),
            pattern_recognition=PatternRecognitionEngine(config),
            relationship_manager=RelationshipManager(config),
            quantum_core=QuantumCore(config),
            neural_matrix=NeuralMatrix(config),
            quantum_thought_processor=QuantumThoughtProcessor(config),
            consciousness_field=ConsciousnessField(config),
            emotional_resonance=EmotionalResonanceEngine(config),
            response_synthesizer=ResponseSynthesizer(config),
            growth_tracker=GrowthTracker(config),
            learning_engine=LearningEngine(config),
            evolution_metrics=EvolutionMetrics(config),
            dimensional_processor=DimensionalProcessor(config),
        )
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error("Failed to construct subsystems: %s", e)
        raise ConfigurationError(f"failed to construct subsystems: {e}") from e


def build_memory_systems(config: "SystemConfiguration") -> MemorySystems:
    """Construct the default memory stores.

    Raises:
        ConfigurationError: If any store rejects the configuration
    """
    try:
        return MemorySystems(
            episodic=EpisodicMemorySystem(config),
            semantic=SemanticMemorySystem(config),
            procedural=ProceduralMemorySystem(config),
        )
    except Exception as e:
        logger.error("Failed to construct memory systems: %s", e)
        raise ConfigurationError(f"failed to construct memory systems: {e}") from e


def build_state_manager(config: "SystemConfiguration") -> "StatePersister":
    """Construct the default state manager.

    Raises:
        ConfigurationError: If the manager rejects the configuration
    """
    try:
        return StateManager(config)
    except Exception as e:
        logger.error("Failed to construct state manager: %s", e)
        raise ConfigurationError(f"failed to construct state manager: {e}") from e
