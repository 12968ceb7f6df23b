"""Affect: Plutchik state model and the emotional resonance engine."""
from lia.affect.affective_state import AffectiveState, PLUTCHIK_PRIMARIES, INTENSITY_LABELS
from lia.affect.resonance import EmotionalResonanceEngine, to_emotional_response

__all__ = [
    "AffectiveState",
    "PLUTCHIK_PRIMARIES",
    "INTENSITY_LABELS",
    "EmotionalResonanceEngine",
    "to_emotional_response",
]
