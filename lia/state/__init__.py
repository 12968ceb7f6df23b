"""Persisted-state management."""
from lia.state.manager import EvolutionRecord, StateManager

__all__ = ["EvolutionRecord", "StateManager"]
