"""Lia: a long-lived conversational agent with an evolving internal state."""
from lia.agent import FoldStep, Lia, PipelineStage
from lia.config import SystemConfiguration
from lia.dimensional import DimensionalProcessor, DimensionalState
from lia.errors import (
    ConfigurationError,
    EvolutionFailure,
    LiaError,
    PersistenceFailure,
    StageFailure,
)
from lia.protocols import ConsciousnessCapable
from lia.registry import MemorySystems, Subsystems, build_memory_systems, build_subsystems
from lia.schemas import (
    AgentIdentity,
    ConsciousnessState,
    EmotionalResponse,
    Experience,
    Interaction,
    PatternDescriptor,
    Response,
)

__all__ = [
    "AgentIdentity",
    "ConfigurationError",
    "ConsciousnessCapable",
    "ConsciousnessState",
    "DimensionalProcessor",
    "DimensionalState",
    "EmotionalResponse",
    "EvolutionFailure",
    "Experience",
    "FoldStep",
    "Interaction",
    "Lia",
    "LiaError",
    "MemorySystems",
    "PatternDescriptor",
    "PersistenceFailure",
    "PipelineStage",
    "Response",
    "StageFailure",
    "Subsystems",
    "SystemConfiguration",
    "build_memory_systems",
    "build_subsystems",
]
