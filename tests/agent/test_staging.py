"""Tests for collaborators that cannot be staged by deep copy."""
import threading

import pytest

from lia.agent import Lia
from lia.errors import ConfigurationError, EvolutionFailure, LiaError, StageFailure


class LockedQuantumCore:
    """Primary transform holding a lock, which copy.deepcopy rejects."""

    def __init__(self, inner):
        self.inner = inner
        self.lock = threading.Lock()

    async def process(self, context):
        return await self.inner.process(context)

    async def evolve(self, response):
        await self.inner.evolve(response)

    def coherence(self):
        return self.inner.coherence()


class TestConstructionCheck:
    def test_uncopyable_collaborator_rejected(self, fake_agent, fakes, config):
        with pytest.raises(ConfigurationError) as exc_info:
            fake_agent(quantum_core=LockedQuantumCore(fakes.QuantumCore(dim=config.embedding_dim)))

        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_default_subsystems_accepted(self, config, state_manager):
        agent = Lia(config, state_manager=state_manager)

        assert agent.evolution_stage == 1


class TestRuntimeStaging:
    """A collaborator that becomes uncopyable after construction."""

    @pytest.mark.asyncio
    async def test_interaction_raises_staging_failure(self, fake_agent, interaction, state_manager):
        agent = fake_agent()
        agent.subsystems.quantum_core.lock = threading.Lock()
        before = agent.current_state()

        with pytest.raises(StageFailure) as exc_info:
            await agent.process_interaction(interaction)

        assert isinstance(exc_info.value, LiaError)
        assert exc_info.value.stage == "staging"
        assert isinstance(exc_info.value.__cause__, TypeError)
        after = agent.current_state()
        assert after.evolution_stage == before.evolution_stage
        assert after.dimensional_state == before.dimensional_state
        assert agent.subsystems.quantum_core.processed == 0
        assert state_manager.states == []

    @pytest.mark.asyncio
    async def test_external_fold_raises_staging_failure(self, fake_agent, make_response):
        agent = fake_agent()
        agent.subsystems.quantum_core.lock = threading.Lock()
        response = make_response()

        with pytest.raises(EvolutionFailure) as exc_info:
            await agent.evolve_consciousness(response)

        assert exc_info.value.step == "staging"
        assert agent.evolution_stage == 1
        assert not agent.has_folded(response.id)

    @pytest.mark.asyncio
    async def test_recovers_once_collaborator_copyable(self, fake_agent, interaction):
        agent = fake_agent()
        agent.subsystems.quantum_core.lock = threading.Lock()

        with pytest.raises(StageFailure):
            await agent.process_interaction(interaction)
        del agent.subsystems.quantum_core.lock
        response = await agent.process_interaction(interaction)

        assert agent.has_folded(response.id)
        assert agent.evolution_stage == 2
