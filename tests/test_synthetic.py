"""
Tests for synthetic archetype data.
"""

from datetime import date
from statistics import mean

import pytest

from wellness_engine.models.explanations import Zone
from wellness_engine.scoring import evaluate
from wellness_engine.synthetic import (
    ARCHETYPES,
    calculate_baseline,
    generate_series,
    mean_day,
    population_baseline,
)


END = date(2026, 3, 10)


class TestArchetypeZones:
    """Static archetypes land in their expected zone against the population."""

    @pytest.mark.parametrize("archetype,zone", [
        ("peak_performer", Zone.GREEN),
        ("moderate_stress", Zone.YELLOW),
        ("high_burnout", Zone.RED),
    ])
    def test_mean_day_zone(self, archetype, zone, settings):
        health, work = mean_day(archetype, END)

        result = evaluate(health, work, population_baseline(), settings=settings)

        assert ARCHETYPES[archetype].expected_zone == zone
        assert result.zone == zone

    def test_dynamic_archetypes_have_no_mean_day(self):
        assert not ARCHETYPES["recovering"].is_static
        with pytest.raises(ValueError):
            mean_day("variable", END)


class TestGenerateSeries:
    """Test generated histories."""

    def test_length_and_order(self):
        series = generate_series("peak_performer", days=10, end_date=END)

        assert len(series.health) == 10
        assert len(series.work) == 10
        assert series.health[0].metric_date == date(2026, 3, 1)
        assert series.latest[0].metric_date == END

    def test_seeded_output_is_reproducible(self):
        first = generate_series("variable", days=14, end_date=END, seed=7)
        second = generate_series("variable", days=14, end_date=END, seed=7)
        other = generate_series("variable", days=14, end_date=END, seed=8)

        assert first.health == second.health
        assert first.work == second.work
        assert first.health != other.health

    def test_recovering_sleep_improves(self):
        series = generate_series("recovering", days=30, end_date=END)

        first_week = mean(h.sleep_hours for h in series.health[:7])
        last_week = mean(h.sleep_hours for h in series.health[-7:])

        assert last_week > first_week

    def test_generated_rows_are_valid(self, settings):
        series = generate_series("high_burnout", days=30, end_date=END)
        health, work = series.latest

        result = evaluate(
            health,
            work,
            calculate_baseline(series.health[:-1], series.work[:-1]),
            work_history=series.work,
            settings=settings,
        )

        assert result.is_scored


class TestCalculateBaseline:
    """Test baselines derived from history."""

    def test_baseline_from_history(self):
        series = generate_series("peak_performer", days=20, end_date=END)

        baseline = calculate_baseline(series.health, series.work)

        assert 6.5 < baseline.sleep_hours < 9.5
        assert 40 < baseline.hrv < 70
        assert baseline.steps > 0

    def test_short_history_leaves_baseline_unset(self):
        series = generate_series("peak_performer", days=2, end_date=END)

        baseline = calculate_baseline(series.health, series.work)

        assert baseline.sleep_hours is None
        assert baseline.hours_worked is None
        assert baseline.steps is None
