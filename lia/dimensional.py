"""Persistent dimensional state and the impact calculator that drives it.

The dimensional state is a small named vector describing the agent's
accumulated condition. It is a value object: ``update`` returns a new
state, so the orchestrator can stage a change and commit it with a single
reference swap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from lia.config import DEFAULT_DIMENSIONAL_AXES

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Response

logger = logging.getLogger(__name__)

# Responses at this level leave awareness/coherence axes unchanged
NEUTRAL_LEVEL = 0.5

# Pattern count at which the creativity impact saturates
CREATIVITY_PATTERN_SATURATION = 5


class DimensionalState(BaseModel):
    """Named axes mapped to bounded scalar values."""

    model_config = ConfigDict(frozen=True)

    values: dict[str, float] = Field(default_factory=dict)
    bounds: tuple[float, float] = (0.0, 1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "DimensionalState":
        low, high = self.bounds
        if low >= high:
            raise ValueError(f"bounds must satisfy low < high, got {self.bounds}")
        for axis, value in self.values.items():
            if not low <= value <= high:
                raise ValueError(f"axis '{axis}'={value} outside bounds {self.bounds}")
        return self

    @classmethod
    def initial(
        cls,
        axes=DEFAULT_DIMENSIONAL_AXES,
        value: float = 0.5,
        bounds: tuple[float, float] = (0.0, 1.0),
    ) -> "DimensionalState":
        """Create a state with every axis at the same starting value."""
        return cls(values={axis: value for axis in axes}, bounds=bounds)

    @classmethod
    def from_config(cls, config: "SystemConfiguration") -> "DimensionalState":
        return cls.initial(
            axes=config.dimensional_axes,
            value=config.initial_dimension_value,
            bounds=config.dimension_bounds,
        )

    @property
    def axes(self) -> tuple[str, ...]:
        return tuple(self.values)

    def __getitem__(self, axis: str) -> float:
        return self.values[axis]

    def as_vector(self) -> np.ndarray:
        """Return axis values as a float vector in axis order."""
        return np.array(list(self.values.values()), dtype=float)

    def update(self, impacts: Mapping[str, float]) -> "DimensionalState":
        """Apply per-axis deltas and return the clamped result.

        Args:
            impacts: Delta per axis; axes not present are left unchanged

        Returns:
            A new DimensionalState; self is not modified

        Raises:
            KeyError: If an impact names an axis this state does not have
        """
        unknown = set(impacts) - set(self.values)
        if unknown:
            raise KeyError(f"Unknown dimensional axes: {sorted(unknown)}")

        low, high = self.bounds
        updated = {
            axis: float(np.clip(value + impacts.get(axis, 0.0), low, high))
            for axis, value in self.values.items()
        }
        return DimensionalState(values=updated, bounds=self.bounds)

    def distance(self, other: "DimensionalState") -> float:
        """Euclidean distance to another state over the shared axes."""
        shared = [a for a in self.values if a in other.values]
        if not shared:
            return 0.0
        a = np.array([self.values[k] for k in shared])
        b = np.array([other.values[k] for k in shared])
        return float(np.linalg.norm(a - b))


class DimensionalProcessor:
    """Turns one response into per-axis impacts.

    Impacts are a pure function of the response and the learning rate, so
    the same response always moves the state by the same amount.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.axes = tuple(config.dimensional_axes)

    def calculate_impacts(self, response: "Response") -> dict[str, float]:
        """Compute the delta for each configured axis.

        Axes without a known mapping receive no impact.
        """
        affect = response.emotional_layer.affect
        raw = {
            "awareness": response.consciousness_level - NEUTRAL_LEVEL,
            "coherence": response.quantum_coherence - NEUTRAL_LEVEL,
            "empathy": (affect.get("trust", 0.5) + affect.get("joy", 0.5)) / 2 - NEUTRAL_LEVEL,
            "curiosity": (affect.get("anticipation", 0.5) + affect.get("surprise", 0.0)) / 2
            - NEUTRAL_LEVEL / 2,
            "creativity": min(len(response.neural_patterns), CREATIVITY_PATTERN_SATURATION)
            / CREATIVITY_PATTERN_SATURATION
            - NEUTRAL_LEVEL,
            "stability": NEUTRAL_LEVEL - response.emotional_layer.intensity,
        }
        return {axis: raw[axis] * self.learning_rate for axis in self.axes if axis in raw}
