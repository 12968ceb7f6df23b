"""System configuration shared by every subsystem constructor."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

from lia.errors import ConfigurationError

# Axes of the persistent dimensional state, in vector order
DEFAULT_DIMENSIONAL_AXES = (
    "awareness",
    "coherence",
    "empathy",
    "curiosity",
    "creativity",
    "stability",
)


@dataclass
class SystemConfiguration:
    """Validated configuration for the agent and its default collaborators.

    The orchestrator treats this as opaque; each subsystem reads the fields
    it cares about.

    Attributes:
        name: Agent display name
        initial_evolution_stage: Starting value of the evolution counter
        embedding_dim: Width of hashed text embeddings
        dimensional_axes: Named axes of the dimensional state
        dimension_bounds: (low, high) clamp for every axis
        initial_dimension_value: Starting value of every axis
        learning_rate: Rate used by every EMA-style fold
        decoherence: Fraction of coherence lost per processed context
        pattern_limit: Maximum neural patterns kept per response
        thought_limit: Maximum thoughts generated per interaction
        thought_threshold: Minimum strength for a thought to survive
        awareness_baseline: Starting awareness of the consciousness field
        memory_capacity: Maximum episodes kept by episodic memory
        history_size: Snapshots retained in memory by the state manager
        parallel_fold: Run the four transform folds concurrently
        seed: Seed for every numpy generator
        state_path: Optional JSON-lines file for the state manager
    """

    name: str = "Lia"
    initial_evolution_stage: int = 1
    embedding_dim: int = 64
    dimensional_axes: Tuple[str, ...] = DEFAULT_DIMENSIONAL_AXES
    dimension_bounds: Tuple[float, float] = (0.0, 1.0)
    initial_dimension_value: float = 0.5
    learning_rate: float = 0.1
    decoherence: float = 0.05
    pattern_limit: int = 5
    thought_limit: int = 3
    thought_threshold: float = 0.05
    awareness_baseline: float = 0.5
    memory_capacity: int = 1000
    history_size: int = 100
    parallel_fold: bool = True
    seed: int = 0
    state_path: Optional[str] = field(default=None)

    def __post_init__(self):
        self.dimensional_axes = tuple(self.dimensional_axes)
        self.dimension_bounds = tuple(self.dimension_bounds)

        if not self.name:
            raise ConfigurationError("name cannot be empty")
        if self.initial_evolution_stage < 1:
            raise ConfigurationError(
                f"initial_evolution_stage must be >= 1, got {self.initial_evolution_stage}"
            )
        if self.embedding_dim <= 0:
            raise ConfigurationError(f"embedding_dim must be > 0, got {self.embedding_dim}")
        if not self.dimensional_axes:
            raise ConfigurationError("dimensional_axes cannot be empty")
        if len(set(self.dimensional_axes)) != len(self.dimensional_axes):
            raise ConfigurationError(f"dimensional_axes must be unique, got {self.dimensional_axes}")
        if len(self.dimension_bounds) != 2 or self.dimension_bounds[0] >= self.dimension_bounds[1]:
            raise ConfigurationError(f"dimension_bounds must be (low, high) with low < high, got {self.dimension_bounds}")
        low, high = self.dimension_bounds
        if not low <= self.initial_dimension_value <= high:
            raise ConfigurationError(
                f"initial_dimension_value must be within {self.dimension_bounds}, got {self.initial_dimension_value}"
            )
        if not 0 < self.learning_rate <= 1:
            raise ConfigurationError(f"learning_rate must be in (0, 1], got {self.learning_rate}")
        if not 0 <= self.decoherence < 1:
            raise ConfigurationError(f"decoherence must be in [0, 1), got {self.decoherence}")
        if self.pattern_limit <= 0:
            raise ConfigurationError(f"pattern_limit must be > 0, got {self.pattern_limit}")
        if self.thought_limit <= 0:
            raise ConfigurationError(f"thought_limit must be > 0, got {self.thought_limit}")
        if not 0 <= self.thought_threshold <= 1:
            raise ConfigurationError(f"thought_threshold must be in [0, 1], got {self.thought_threshold}")
        if not 0 <= self.awareness_baseline <= 1:
            raise ConfigurationError(f"awareness_baseline must be in [0, 1], got {self.awareness_baseline}")
        if self.memory_capacity <= 0:
            raise ConfigurationError(f"memory_capacity must be > 0, got {self.memory_capacity}")
        if self.history_size <= 0:
            raise ConfigurationError(f"history_size must be > 0, got {self.history_size}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize configuration to a plain dictionary."""
        data = asdict(self)
        data["dimensional_axes"] = list(self.dimensional_axes)
        data["dimension_bounds"] = list(self.dimension_bounds)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SystemConfiguration":
        """Build configuration from a mapping, rejecting unknown keys.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        try:
            return cls(**dict(data))
        except TypeError as e:
            raise ConfigurationError(str(e)) from e
