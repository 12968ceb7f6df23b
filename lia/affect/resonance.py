"""Emotional resonance engine: stage 6 of the interaction pipeline.

Appraises the context into a Plutchik state, then blends it with the
engine's standing mood. Higher awareness makes the agent more responsive to
the moment; lower awareness leaves it closer to its mood.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lia.affect.affective_state import AffectiveState, NEUTRAL_BASELINE
from lia.schemas import EmotionalResponse

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import ConsciousnessResponse, Context, Response

logger = logging.getLogger(__name__)

# Blend weight toward the appraisal at zero awareness
MIN_RESPONSIVENESS = 0.3
# Additional blend weight at full awareness
AWARENESS_RESPONSIVENESS = 0.5

# Cue boosts applied when a motif is present
GRATITUDE_TRUST_BOOST = 0.2
GRATITUDE_JOY_BOOST = 0.1
DISTRESS_FEAR_BOOST = 0.3
DISTRESS_SADNESS_BOOST = 0.2
INQUIRY_ANTICIPATION_BOOST = 0.3
NOVELTY_SURPRISE_FACTOR = 0.6


def to_emotional_response(state: AffectiveState) -> EmotionalResponse:
    return EmotionalResponse(
        affect=state.to_dict(),
        dominant=state.dominant_emotion(),
        valence=state.valence(),
        intensity=state.intensity(),
    )


class EmotionalResonanceEngine:
    """Scores affect per interaction and carries a slowly evolving mood."""

    def __init__(self, config: "SystemConfiguration"):
        self.learning_rate = config.learning_rate
        self.mood = AffectiveState.neutral()

    def appraise(self, context: "Context") -> AffectiveState:
        """Translate context cues into a raw Plutchik appraisal."""
        positive = max(context.sentiment, 0.0)
        negative = max(-context.sentiment, 0.0)
        motifs = set(context.motifs)

        joy = NEUTRAL_BASELINE + 0.4 * positive - 0.3 * negative
        trust = NEUTRAL_BASELINE + 0.3 * positive + 0.2 * context.familiarity - 0.2 * negative
        fear = 0.2 * negative
        sadness = 0.5 * negative
        anger = 0.2 * negative
        surprise = NOVELTY_SURPRISE_FACTOR * context.novelty * 0.5
        anticipation = NEUTRAL_BASELINE

        if "gratitude" in motifs:
            trust += GRATITUDE_TRUST_BOOST
            joy += GRATITUDE_JOY_BOOST
        if "distress" in motifs:
            fear += DISTRESS_FEAR_BOOST
            sadness += DISTRESS_SADNESS_BOOST
        if motifs & {"question", "curiosity"}:
            anticipation += INQUIRY_ANTICIPATION_BOOST

        return AffectiveState(
            joy=joy,
            trust=trust,
            fear=fear,
            surprise=surprise,
            sadness=sadness,
            disgust=0.0,
            anger=anger,
            anticipation=anticipation,
        )

    async def process_emotion(
        self, context: "Context", consciousness: "ConsciousnessResponse"
    ) -> EmotionalResponse:
        appraisal = self.appraise(context)
        weight = MIN_RESPONSIVENESS + AWARENESS_RESPONSIVENESS * consciousness.awareness_level
        felt = self.mood.blend(appraisal, weight)
        logger.debug("Appraised %s (weight=%.2f)", felt.dominant_emotion(), weight)
        return to_emotional_response(felt)

    async def evolve(self, response: "Response") -> None:
        """Drift the standing mood toward the folded response's affect."""
        target = AffectiveState.from_mapping(response.emotional_layer.affect)
        self.mood = self.mood.blend(target, self.learning_rate)

    def current_state(self) -> EmotionalResponse:
        return to_emotional_response(self.mood)
