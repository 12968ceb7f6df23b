"""Growth and learning trackers folded after every response."""
from lia.growth.learning import LearningEngine
from lia.growth.metrics import EvolutionMetrics
from lia.growth.tracker import GrowthTracker

__all__ = ["EvolutionMetrics", "GrowthTracker", "LearningEngine"]
