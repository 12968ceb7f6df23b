"""Long-term memory stores fed by the memory-integration path."""
from lia.memory.episodic import Episode, EpisodicMemorySystem
from lia.memory.procedural import ProceduralMemorySystem
from lia.memory.semantic import SemanticMemorySystem, extract_concepts

__all__ = [
    "Episode",
    "EpisodicMemorySystem",
    "ProceduralMemorySystem",
    "SemanticMemorySystem",
    "extract_concepts",
]
