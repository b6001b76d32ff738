"""
Tests for score aggregation and zones.
"""

import pytest

from wellness_engine.models.explanations import ScoreResult, ScoreStatus, Zone
from wellness_engine.scoring.aggregate import aggregate_scores, determine_zone, wellness_percentage
from wellness_engine.scoring.deviation import FactorContribution
from wellness_engine.scoring.factors import get_factor


def _contribution(burnout, readiness, key="sleep_hours"):
    return FactorContribution(spec=get_factor(key), actual=0.0, burnout=burnout, readiness=readiness)


class TestAggregateScores:
    """Test centering, scaling and clamping."""

    def test_no_contributions_is_neutral(self, settings):
        scores = aggregate_scores([], settings)

        assert scores.burnout == 50.0
        assert scores.readiness == 50.0

    def test_scaling(self, settings):
        scores = aggregate_scores(
            [_contribution(1.3, -1.04), _contribution(-0.4, 0.48, key="exercise_minutes")],
            settings,
        )

        assert scores.burnout == pytest.approx(59.0)
        assert scores.readiness == pytest.approx(44.4)

    def test_scores_are_clamped(self, settings):
        high = aggregate_scores([_contribution(10, -10)], settings)
        low = aggregate_scores([_contribution(-10, 10)], settings)

        assert high.burnout == 100.0
        assert high.readiness == 0.0
        assert low.burnout == 0.0
        assert low.readiness == 100.0

    def test_rounded_to_one_decimal(self, settings):
        scores = aggregate_scores([_contribution(0.123456, 0.0)], settings)

        assert scores.burnout == 51.2


class TestDetermineZone:
    """Test fixed zone thresholds."""

    @pytest.mark.parametrize("score,zone", [
        (100.0, Zone.RED),
        (70.0, Zone.RED),
        (69.9, Zone.YELLOW),
        (40.0, Zone.YELLOW),
        (39.9, Zone.GREEN),
        (0.0, Zone.GREEN),
    ])
    def test_thresholds(self, score, zone):
        assert determine_zone(score) == zone


class TestWellnessPercentage:
    """Test the single derived wellness view."""

    def test_inverse_of_burnout(self):
        assert wellness_percentage(34.7) == 65.3

    def test_from_score_result(self):
        result = ScoreResult(status=ScoreStatus.SCORED, burnout_score=80.0, zone=Zone.RED)

        assert wellness_percentage(result) == 20.0

    def test_unscored_day(self):
        assert wellness_percentage(ScoreResult.insufficient_data()) is None
