"""Response synthesis (stage 7): natural language from every upstream artifact."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from lia.affect.affective_state import AffectiveState

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import (
        ConsciousnessResponse,
        Context,
        EmotionalResponse,
        Interaction,
        NeuralResponse,
        QuantumState,
        ThoughtPattern,
    )

logger = logging.getLogger(__name__)

OPENINGS = {
    "joy": "I'm glad you brought this to me.",
    "trust": "I hear you, and I'm with you.",
    "fear": "That sounds unsettling.",
    "surprise": "Oh, I didn't see that coming.",
    "sadness": "I'm sorry, that sounds heavy.",
    "disgust": "Hm, that doesn't sit right with me.",
    "anger": "That's frustrating.",
    "anticipation": "I'm curious where this goes.",
    "neutral": "Let me think about that.",
}

THOUGHT_PHRASES = {
    "inquiry": "There is a question underneath this worth following",
    "reflection": "It makes me look back at what I already know",
    "connection": "It feels like a chance to understand each other better",
    "exploration": "I want to explore where this leads",
    "caution": "I want to go carefully here",
    "play": "There is something playful in it",
    "care": "What matters most right now is how you are doing",
    "synthesis": "A few threads seem to come together here",
}

LOW_COHERENCE = 0.3
REFLECTIVE_AWARENESS = 0.6


class ResponseSynthesizer:
    """Deterministic template synthesis.

    Reads the interaction, context, transform outputs, thoughts, awareness,
    and affect; never mutates any of them.
    """

    def __init__(self, config: "SystemConfiguration"):
        self.name = config.name

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
        parts: list[str] = []

        if "greeting" in context.motifs:
            who = interaction.participant if interaction.participant != "user" else "there"
            parts.append(f"Hello {who}, it's {self.name}.")

        primary = AffectiveState.from_mapping(emotion.affect).dominant_primary()
        parts.append(OPENINGS.get(primary, OPENINGS["neutral"]))

        if quantum_state.coherence < LOW_COHERENCE:
            parts.append("My thoughts feel scattered on this, so bear with me.")

        if consciousness.focus:
            phrase = THOUGHT_PHRASES.get(consciousness.focus, f"I keep coming back to {consciousness.focus}")
            parts.append(f"{phrase}.")

        strongest = neural_response.strongest
        if strongest is not None and strongest.name != consciousness.focus and len(thoughts) > 1:
            parts.append(f"It also feels like a moment for {strongest.name}.")

        if context.is_question:
            parts.append("I don't have a settled answer yet, but I'd like to work it out with you.")
        elif consciousness.awareness_level >= REFLECTIVE_AWARENESS:
            parts.append("What does it mean to you?")

        return " ".join(parts)
