"""Tests for current_state snapshots and agent construction."""
import pytest
from pydantic import ValidationError

from lia.agent import Lia
from lia.errors import ConfigurationError
from lia.schemas import AgentIdentity, ConsciousnessState, Interaction


class TestCurrentState:
    def test_snapshot_reflects_agent(self, make_agent):
        agent = make_agent()

        state = agent.current_state()

        assert isinstance(state, ConsciousnessState)
        assert state.id == agent.id
        assert state.name == agent.name
        assert state.evolution_stage == 1
        assert state.dimensional_state == agent.dimensional_state
        assert state.quantum_coherence == agent.subsystems.quantum_core.coherence()
        assert state.consciousness_level == agent.subsystems.consciousness_field.awareness_level()
        assert state.emotional_state == agent.subsystems.emotional_resonance.current_state()

    def test_snapshot_is_pure(self, make_agent):
        agent = make_agent()

        first = agent.current_state()
        second = agent.current_state()

        assert first.model_dump(exclude={"captured_at"}) == second.model_dump(exclude={"captured_at"})

    def test_snapshot_is_frozen(self, make_agent):
        state = make_agent().current_state()

        with pytest.raises(ValidationError):
            state.evolution_stage = 9

    @pytest.mark.asyncio
    async def test_snapshot_does_not_follow_agent(self, make_agent, interaction):
        agent = make_agent()
        state = agent.current_state()

        await agent.process_interaction(interaction)

        assert state.evolution_stage == 1
        assert agent.current_state().evolution_stage == 2

    @pytest.mark.asyncio
    async def test_values_stay_in_range(self, make_agent):
        agent = make_agent()
        texts = ["I am so sad and afraid", "thank you, this is wonderful!", "why?", "story idea: a dream"]

        for text in texts * 3:
            await agent.process_interaction(Interaction(content=text))
            state = agent.current_state()
            assert 0.0 <= state.quantum_coherence <= 1.0
            assert 0.0 <= state.consciousness_level <= 1.0
            low, high = state.dimensional_state.bounds
            assert all(low <= v <= high for v in state.dimensional_state.values.values())


class TestConstruction:
    def test_rejects_non_configuration(self):
        with pytest.raises(ConfigurationError):
            Lia({"name": "Lia"})

    def test_adopts_identity(self, config, state_manager):
        identity = AgentIdentity(name="Echo")

        agent = Lia(config, identity=identity, state_manager=state_manager)

        assert agent.identity is identity
        assert agent.current_state().name == "Echo"

    def test_name_from_config(self, state_manager):
        from lia.config import SystemConfiguration

        agent = Lia(SystemConfiguration(name="Nova"), state_manager=state_manager)

        assert agent.name == "Nova"

    def test_custom_axes(self, state_manager):
        from lia.config import SystemConfiguration

        config = SystemConfiguration(dimensional_axes=["awareness", "wonder"], initial_dimension_value=0.2)
        agent = Lia(config, state_manager=state_manager)

        assert agent.dimensional_state.axes == ("awareness", "wonder")
        assert agent.dimensional_state["wonder"] == 0.2

    @pytest.mark.asyncio
    async def test_custom_axes_fold(self, state_manager):
        from lia.config import SystemConfiguration

        config = SystemConfiguration(dimensional_axes=["awareness", "wonder"])
        agent = Lia(config, state_manager=state_manager)

        await agent.process_interaction(Interaction(content="hello"))

        assert agent.dimensional_state["wonder"] == 0.5
        assert agent.evolution_stage == 2
