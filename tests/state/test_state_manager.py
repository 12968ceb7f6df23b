"""Tests for the persisted-state manager."""
import pytest

from lia.dimensional import DimensionalState
from lia.errors import PersistenceFailure
from lia.schemas import AgentIdentity, ConsciousnessState, EmotionalResponse
from lia.state.manager import StateManager


@pytest.fixture
def snapshot():
    identity = AgentIdentity()
    return ConsciousnessState(
        id=identity.id,
        name=identity.name,
        evolution_stage=2,
        dimensional_state=DimensionalState.initial(),
        quantum_coherence=0.5,
        consciousness_level=0.6,
        emotional_state=EmotionalResponse(affect={"joy": 0.5}),
    )


class TestStateManagerMemory:
    @pytest.mark.asyncio
    async def test_update_state(self, config, snapshot):
        manager = StateManager(config)

        await manager.update_state(snapshot)

        assert manager.latest == snapshot
        assert manager.path is None

    @pytest.mark.asyncio
    async def test_record_evolution(self, config):
        manager = StateManager(config)
        assert manager.latest_stage is None

        await manager.record_evolution(3)

        assert manager.latest_stage == 3

    @pytest.mark.asyncio
    async def test_invalid_stage_rejected(self, config):
        manager = StateManager(config)

        with pytest.raises(PersistenceFailure) as exc_info:
            await manager.record_evolution(0)

        assert exc_info.value.operation == "record_evolution"
        assert manager.latest_stage is None

    @pytest.mark.asyncio
    async def test_history_bounded(self, config, snapshot):
        config.history_size = 2
        manager = StateManager(config)
        for _ in range(4):
            await manager.update_state(snapshot)
        assert len(manager.history) == 2


class TestStateManagerLog:
    @pytest.mark.asyncio
    async def test_jsonl_log(self, config, snapshot, tmp_path):
        config.state_path = str(tmp_path / "state" / "lia.jsonl")
        manager = StateManager(config)

        await manager.update_state(snapshot)
        await manager.record_evolution(2)

        records = manager.read_log()
        assert [r["type"] for r in records] == ["state", "evolution"]
        assert records[0]["state"]["evolution_stage"] == 2
        assert records[0]["state"]["id"] == str(snapshot.id)
        assert records[1]["stage"] == 2

    def test_missing_log_reads_empty(self, config, tmp_path):
        config.state_path = str(tmp_path / "absent.jsonl")
        assert StateManager(config).read_log() == []

    @pytest.mark.asyncio
    async def test_unwritable_path_fails(self, config, snapshot, tmp_path):
        config.state_path = str(tmp_path)
        manager = StateManager(config)

        with pytest.raises(PersistenceFailure) as exc_info:
            await manager.update_state(snapshot)

        assert exc_info.value.operation == "update_state"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_corrupt_log_fails(self, config, tmp_path):
        path = tmp_path / "lia.jsonl"
        path.write_text("{not json\n")
        config.state_path = str(path)

        with pytest.raises(PersistenceFailure):
            StateManager(config).read_log()


class TestAgentPersistence:
    @pytest.mark.asyncio
    async def test_agent_writes_log(self, config, tmp_path):
        from lia.agent import Lia
        from lia.schemas import Interaction

        config.state_path = str(tmp_path / "lia.jsonl")
        agent = Lia(config)

        await agent.process_interaction(Interaction(content="hello"))
        await agent.evolve()

        records = agent.state_manager.read_log()
        assert [r["type"] for r in records] == ["state", "evolution", "evolution"]
        assert [r["stage"] for r in records[1:]] == [2, 3]
