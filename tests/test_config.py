"""Tests for SystemConfiguration validation."""
import pytest

from lia.config import DEFAULT_DIMENSIONAL_AXES, SystemConfiguration
from lia.errors import ConfigurationError


class TestDefaults:
    def test_defaults_valid(self):
        config = SystemConfiguration()
        assert config.name == "Lia"
        assert config.initial_evolution_stage == 1
        assert config.dimensional_axes == DEFAULT_DIMENSIONAL_AXES

    def test_sequences_become_tuples(self):
        config = SystemConfiguration(dimensional_axes=["a", "b"], dimension_bounds=[-1.0, 1.0], initial_dimension_value=0.0)
        assert config.dimensional_axes == ("a", "b")
        assert config.dimension_bounds == (-1.0, 1.0)


class TestValidation:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": ""},
            {"initial_evolution_stage": 0},
            {"embedding_dim": 0},
            {"dimensional_axes": ()},
            {"dimensional_axes": ("a", "a")},
            {"dimension_bounds": (1.0, 0.0)},
            {"initial_dimension_value": 1.5},
            {"learning_rate": 0.0},
            {"decoherence": 1.0},
            {"pattern_limit": 0},
            {"thought_limit": 0},
            {"thought_threshold": 2.0},
            {"awareness_baseline": -0.1},
            {"memory_capacity": 0},
            {"history_size": 0},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            SystemConfiguration(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            SystemConfiguration(learning_rate=5.0)


class TestSerialization:
    def test_round_trip(self):
        config = SystemConfiguration(name="Nova", seed=3, state_path="/tmp/nova.jsonl")
        assert SystemConfiguration.from_dict(config.to_dict()) == config

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown configuration keys: colour"):
            SystemConfiguration.from_dict({"colour": "blue"})

    def test_invalid_value_from_dict(self):
        with pytest.raises(ConfigurationError):
            SystemConfiguration.from_dict({"pattern_limit": -1})
