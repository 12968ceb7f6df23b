"""Fixtures for orchestrator tests: plain-class fakes and agent factories.

Fakes are ordinary classes rather than mocks because the agent deep-copies
its subsystems before every mutation.
"""

from dataclasses import replace
from types import SimpleNamespace

import numpy as np
import pytest

from lia.agent import Lia
from lia.registry import MemorySystems, build_subsystems
from lia.schemas import (
    ConsciousnessResponse,
    EmotionalResponse,
    NeuralResponse,
    PatternDescriptor,
    QuantumState,
    ThoughtPattern,
)


class FakeQuantumCore:
    """Fixed-output primary transform that counts calls."""

    def __init__(self, coherence=0.8, dim=16):
        self.value = coherence
        self.dim = dim
        self.processed = 0
        self.evolved = 0

    async def process(self, context):
        self.processed += 1
        amplitudes = np.ones(self.dim) / np.sqrt(self.dim)
        return QuantumState(coherence=self.value, amplitudes=amplitudes, entropy=0.5)

    async def evolve(self, response):
        self.evolved += 1

    def coherence(self):
        return self.value


class FakeNeuralMatrix:
    def __init__(self, patterns=(("inquiry", 0.9), ("care", 0.4))):
        self.patterns = [PatternDescriptor(name=n, activation=a) for n, a in patterns]
        self.evolved = 0

    async def process_with_quantum_state(self, quantum_state, context):
        return NeuralResponse(patterns=list(self.patterns))

    async def evolve_patterns(self, response):
        self.evolved += 1


class FakeThoughtProcessor:
    def __init__(self, fail=False):
        self.fail = fail

    async def generate_thoughts(self, neural_response, quantum_state):
        if self.fail:
            raise RuntimeError("no thoughts today")
        return [ThoughtPattern(descriptor=p.name, strength=p.activation) for p in neural_response.patterns]


class FakeConsciousnessField:
    def __init__(self, awareness=0.65):
        self.awareness = awareness
        self.evolved = 0
        self.dimensional_changes = 0

    async def process_experience(self, context, thoughts):
        return ConsciousnessResponse(awareness_level=self.awareness, focus=thoughts[0].descriptor if thoughts else None)

    async def evolve(self, response):
        self.evolved += 1

    def process_dimensional_change(self, state):
        self.dimensional_changes += 1

    def awareness_level(self):
        return self.awareness


class FakeEmotionalEngine:
    def __init__(self, fail_evolve=False):
        self.fail_evolve = fail_evolve
        self.evolved = 0

    async def process_emotion(self, context, consciousness):
        return EmotionalResponse(affect={"joy": 0.7, "trust": 0.6}, dominant="joy", valence=0.3, intensity=0.2)

    async def evolve(self, response):
        if self.fail_evolve:
            raise RuntimeError("mood stuck")
        self.evolved += 1

    def current_state(self):
        return EmotionalResponse(affect={"joy": 0.5, "trust": 0.5}, dominant="neutral")


class FakeImpactCalculator:
    def __init__(self, impacts=None, fail=False):
        self.impacts = impacts if impacts is not None else {"awareness": 0.1}
        self.fail = fail

    def calculate_impacts(self, response):
        if self.fail:
            raise RuntimeError("impact overflow")
        return dict(self.impacts)


class FakeStateManager:
    """Records calls; optionally fails one operation."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.states = []
        self.stages = []

    async def update_state(self, state):
        if self.fail_on == "update_state":
            raise OSError("disk full")
        self.states.append(state)

    async def record_evolution(self, stage):
        if self.fail_on == "record_evolution":
            raise OSError("disk full")
        self.stages.append(stage)


class FakeStore:
    def __init__(self, fail=False):
        self.fail = fail
        self.seen = []

    async def _integrate(self, experience):
        if self.fail:
            raise RuntimeError("store offline")
        self.seen.append(experience.id)

    integrate_experience = _integrate
    integrate_knowledge = _integrate
    integrate_learning = _integrate


@pytest.fixture
def fakes():
    """Namespace of fake collaborator classes."""
    return SimpleNamespace(
        QuantumCore=FakeQuantumCore,
        NeuralMatrix=FakeNeuralMatrix,
        ThoughtProcessor=FakeThoughtProcessor,
        ConsciousnessField=FakeConsciousnessField,
        EmotionalEngine=FakeEmotionalEngine,
        ImpactCalculator=FakeImpactCalculator,
        StateManager=FakeStateManager,
        Store=FakeStore,
    )


@pytest.fixture
def state_manager():
    return FakeStateManager()


@pytest.fixture
def make_agent(config, state_manager):
    """Build an agent on default subsystems with selected fields replaced."""

    def _make(cfg=None, memory=None, manager=None, **overrides):
        cfg = cfg or config
        subsystems = replace(build_subsystems(cfg), **overrides) if overrides else None
        return Lia(cfg, subsystems=subsystems, memory=memory, state_manager=manager or state_manager)

    return _make


@pytest.fixture
def fake_agent(config, state_manager):
    """Agent whose transforms are deterministic fakes with known outputs."""

    def _make(manager=None, memory=None, **overrides):
        fields = {
            "quantum_core": FakeQuantumCore(dim=config.embedding_dim),
            "neural_matrix": FakeNeuralMatrix(),
            "quantum_thought_processor": FakeThoughtProcessor(),
            "consciousness_field": FakeConsciousnessField(),
            "emotional_resonance": FakeEmotionalEngine(),
        }
        fields.update(overrides)
        subsystems = replace(build_subsystems(config), **fields)
        return Lia(config, subsystems=subsystems, memory=memory, state_manager=manager or state_manager)

    return _make


@pytest.fixture
def fake_memory():
    def _make(episodic=None, semantic=None, procedural=None):
        return MemorySystems(
            episodic=episodic or FakeStore(),
            semantic=semantic or FakeStore(),
            procedural=procedural or FakeStore(),
        )

    return _make
