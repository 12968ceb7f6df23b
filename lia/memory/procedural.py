"""Procedural memory: how experiences of each kind tend to unfold."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING, Optional

from lia.perception.context import recognize_motifs
from lia.perception.text import tokenize

if TYPE_CHECKING:
    from lia.config import SystemConfiguration
    from lia.schemas import Experience


class ProceduralMemorySystem:
    """Counts motif usage per experience kind and motif-to-motif transitions.

    Transitions link the motifs of a participant's previous experience to
    those of the current one, giving a crude "what usually comes next".
    """

    def __init__(self, config: "SystemConfiguration"):
        self.skills: defaultdict[str, Counter[str]] = defaultdict(Counter)
        self.transitions: Counter[tuple[str, str]] = Counter()
        self._last_motifs: dict[str, list[str]] = {}

    async def integrate_learning(self, experience: "Experience") -> None:
        motifs = recognize_motifs(tokenize(experience.content), experience.content)
        self.skills[experience.kind].update(motifs)

        previous = self._last_motifs.get(experience.participant, [])
        for a in previous:
            for b in motifs:
                self.transitions[(a, b)] += 1
        self._last_motifs[experience.participant] = motifs

    def skill_strength(self, kind: str) -> int:
        """Total motif observations recorded for an experience kind."""
        return sum(self.skills[kind].values()) if kind in self.skills else 0

    def suggest_next(self, motif: str) -> Optional[str]:
        """Most frequent motif to follow ``motif``, or None if never seen."""
        candidates = [(b, count) for (a, b), count in self.transitions.items() if a == motif]
        if not candidates:
            return None
        return max(candidates, key=lambda item: (item[1], item[0]))[0]
