"""Tests for growth tracking, learning, and evolution metrics."""
import pytest

from lia.dimensional import DimensionalState
from lia.growth.learning import LearningEngine
from lia.growth.metrics import EvolutionMetrics
from lia.growth.tracker import GrowthTracker


class TestGrowthTracker:
    def test_running_means(self, config, make_response):
        tracker = GrowthTracker(config)

        tracker.record_growth(make_response(coherence=0.2, awareness=0.4))
        tracker.record_growth(make_response(coherence=0.6, awareness=0.8))

        assert tracker.count == 2
        assert tracker.mean_coherence == pytest.approx(0.4)
        assert tracker.mean_consciousness == pytest.approx(0.6)
        assert tracker.peak_consciousness == 0.8

    def test_growth_rate(self, config, make_response):
        tracker = GrowthTracker(config)
        assert tracker.growth_rate() == 0.0

        for level in (0.1, 0.2, 0.3, 0.4):
            tracker.record_growth(make_response(awareness=level))

        assert tracker.growth_rate() == pytest.approx(0.1)

    def test_history_bounded(self, config, make_response):
        config.history_size = 3
        tracker = GrowthTracker(config)
        for _ in range(5):
            tracker.record_growth(make_response())
        assert len(tracker.history) == 3
        assert tracker.summary()["count"] == 5


class TestLearningEngine:
    @pytest.mark.asyncio
    async def test_pattern_weights(self, config, make_response):
        engine = LearningEngine(config)

        await engine.integrate_experience(make_response(awareness=0.5, patterns=[("care", 0.8)]))

        assert engine.pattern_weights["care"] == pytest.approx(0.1 * 0.4)
        assert engine.experiences == 1

    @pytest.mark.asyncio
    async def test_preferred_patterns(self, config, make_response):
        engine = LearningEngine(config)

        await engine.integrate_experience(make_response(patterns=[("care", 0.9), ("play", 0.2), ("inquiry", 0.5)]))

        assert engine.preferred_patterns(2) == ["care", "inquiry"]


class TestEvolutionMetrics:
    def test_records_folds(self, config, make_response):
        metrics = EvolutionMetrics(config)
        response = make_response()

        assert not metrics.has_folded(response.id)
        metrics.record_evolution(response)

        assert metrics.has_folded(response.id)
        assert metrics.folds == 1

    def test_drift(self, config):
        metrics = EvolutionMetrics(config)
        start = DimensionalState.initial(axes=("a",), value=0.2)

        metrics.record_dimensional_change(start)
        assert metrics.drift() == 0.0
        metrics.record_dimensional_change(start.update({"a": 0.3}))

        assert metrics.drift() == pytest.approx(0.3)
        assert metrics.latest["a"] == pytest.approx(0.5)

    def test_folded_ids_bounded(self, config, make_response):
        config.history_size = 3
        metrics = EvolutionMetrics(config)
        responses = [make_response() for _ in range(5)]

        for response in responses:
            metrics.record_evolution(response)

        assert metrics.folds == 5
        assert len(metrics.folded_ids) == 3
        assert not metrics.has_folded(responses[0].id)
        assert all(metrics.has_folded(r.id) for r in responses[2:])
