"""Plutchik affective state used by the emotional resonance engine.

The 8 primary emotions:
1. Joy (serenity → joy → ecstasy)
2. Trust (acceptance → trust → admiration)
3. Fear (apprehension → fear → terror)
4. Surprise (distraction → surprise → amazement)
5. Sadness (pensiveness → sadness → grief)
6. Disgust (boredom → disgust → loathing)
7. Anger (annoyance → anger → rage)
8. Anticipation (interest → anticipation → vigilance)

Joy, trust, and anticipation rest at a 0.5 baseline; the others rest at 0.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import List, Mapping

import numpy as np

PLUTCHIK_PRIMARIES = [
    "joy", "trust", "fear", "surprise",
    "sadness", "disgust", "anger", "anticipation"
]

INTENSITY_LABELS = {
    "joy": ("serenity", "joy", "ecstasy"),
    "trust": ("acceptance", "trust", "admiration"),
    "fear": ("apprehension", "fear", "terror"),
    "surprise": ("distraction", "surprise", "amazement"),
    "sadness": ("pensiveness", "sadness", "grief"),
    "disgust": ("boredom", "disgust", "loathing"),
    "anger": ("annoyance", "anger", "rage"),
    "anticipation": ("interest", "anticipation", "vigilance"),
}

# Secondary emotions from adjacent primaries (both above threshold)
SECONDARY_EMOTIONS = {
    ("joy", "trust"): "love",
    ("trust", "fear"): "submission",
    ("fear", "surprise"): "awe",
    ("surprise", "sadness"): "disapproval",
    ("sadness", "disgust"): "remorse",
    ("disgust", "anger"): "contempt",
    ("anger", "anticipation"): "aggressiveness",
    ("anticipation", "joy"): "optimism",
}

NEUTRAL_BASELINE = 0.5

# Resting value per primary, in PLUTCHIK_PRIMARIES order
BASELINE_VECTOR = np.array([NEUTRAL_BASELINE, NEUTRAL_BASELINE, 0.0, 0.0, 0.0, 0.0, 0.0, NEUTRAL_BASELINE])

INTENSITY_THRESHOLD_MILD = 0.33
INTENSITY_THRESHOLD_INTENSE = 0.67
SECONDARY_EMOTION_THRESHOLD = 0.3

# Maps mean deviation from baseline into 0-1
INTENSITY_SCALE_FACTOR = 2

# Below this deviation the dominant emotion is "neutral"
DOMINANT_EMOTION_MIN_DEVIATION = 0.1

# Valence contribution per primary (pleasant positive, unpleasant negative)
VALENCE_WEIGHTS = np.array([1.0, 0.5, -0.5, 0.0, -1.0, -0.5, -0.5, 0.25])


@dataclass
class AffectiveState:
    """Current affect over Plutchik's 8 primaries, each clamped to 0-1."""

    joy: float = 0.5
    trust: float = 0.5
    fear: float = 0.0
    surprise: float = 0.0
    sadness: float = 0.0
    disgust: float = 0.0
    anger: float = 0.0
    anticipation: float = 0.5

    def __post_init__(self):
        for f in fields(self):
            setattr(self, f.name, max(0.0, min(1.0, float(getattr(self, f.name)))))

    def to_vector(self) -> list[float]:
        """Order: [joy, trust, fear, surprise, sadness, disgust, anger, anticipation]"""
        return [getattr(self, name) for name in PLUTCHIK_PRIMARIES]

    def to_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in PLUTCHIK_PRIMARIES}

    @classmethod
    def from_vector(cls, vec: List[float]) -> "AffectiveState":
        """Create from an 8D vector; short vectors are padded with 0.0."""
        vec = list(vec)[:8] + [0.0] * max(0, 8 - len(vec))
        return cls(*vec)

    @classmethod
    def from_mapping(cls, affect: Mapping[str, float]) -> "AffectiveState":
        """Create from a name -> value mapping; missing primaries take their baseline."""
        return cls(**{name: affect[name] for name in PLUTCHIK_PRIMARIES if name in affect})

    @classmethod
    def neutral(cls) -> "AffectiveState":
        return cls()

    def _deviations(self) -> np.ndarray:
        return np.abs(np.array(self.to_vector()) - BASELINE_VECTOR)

    def intensity(self) -> float:
        """Overall emotional activation, 0-1."""
        return float(min(1.0, self._deviations().mean() * INTENSITY_SCALE_FACTOR))

    def valence(self) -> float:
        """Pleasantness relative to baseline, -1 to 1."""
        delta = np.array(self.to_vector()) - BASELINE_VECTOR
        return float(np.clip(np.dot(delta, VALENCE_WEIGHTS), -1.0, 1.0))

    def dominant_primary(self) -> str:
        """Primary with the largest deviation from baseline, or "neutral"."""
        deviations = self._deviations()
        idx = int(np.argmax(deviations))
        if deviations[idx] < DOMINANT_EMOTION_MIN_DEVIATION:
            return "neutral"
        return PLUTCHIK_PRIMARIES[idx]

    def intensity_label(self, dimension: str) -> str:
        """Return the mild/moderate/intense name for a primary (e.g. "serenity")."""
        if dimension not in INTENSITY_LABELS:
            return dimension
        value = getattr(self, dimension)
        labels = INTENSITY_LABELS[dimension]
        if value < INTENSITY_THRESHOLD_MILD:
            return labels[0]
        elif value < INTENSITY_THRESHOLD_INTENSE:
            return labels[1]
        return labels[2]

    def dominant_emotion(self) -> str:
        """Intensity label of the dominant primary, or "neutral"."""
        primary = self.dominant_primary()
        if primary == "neutral":
            return primary
        return self.intensity_label(primary)

    def detect_secondary_emotions(self) -> List[str]:
        """Secondary emotions from adjacent primaries that are both elevated."""
        vec = self.to_vector()
        secondaries = []
        for i in range(8):
            next_i = (i + 1) % 8
            if vec[i] > SECONDARY_EMOTION_THRESHOLD and vec[next_i] > SECONDARY_EMOTION_THRESHOLD:
                secondaries.append(SECONDARY_EMOTIONS[(PLUTCHIK_PRIMARIES[i], PLUTCHIK_PRIMARIES[next_i])])
        return secondaries

    def blend(self, other: "AffectiveState", weight: float = 0.5) -> "AffectiveState":
        """Blend two states; weight is how much of ``other`` to include (0-1)."""
        weight = max(0.0, min(1.0, weight))
        mixed = np.array(self.to_vector()) * (1 - weight) + np.array(other.to_vector()) * weight
        return AffectiveState.from_vector(mixed.tolist())
