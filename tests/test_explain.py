"""
Tests for explanation synthesis and recommendations.
"""

from datetime import date

import pytest

from wellness_engine.models.explanations import Factor, ImpactType, Zone
from wellness_engine.models.inputs import DailyWorkMetrics, PersonalPreferences
from wellness_engine.scoring.baselines import BaselineTarget
from wellness_engine.scoring.deviation import FactorContribution, contribution_for
from wellness_engine.scoring.explain import (
    build_factors,
    calibration_notes,
    classify_impact,
    days_since_rest_day,
    format_value,
    rank_contributions,
)
from wellness_engine.scoring.factors import FactorCategory, TargetSource, get_factor
from wellness_engine.scoring.personalization import apply_personalization
from wellness_engine.scoring.recommendations import (
    MAX_LEADERSHIP,
    MAX_PERSONAL,
    dominant_negative_category,
    generate_recommendations,
    lookup_rule,
)


def _target(key, value, source=TargetSource.BASELINE, band=0.2, adjusted=False):
    return BaselineTarget(key=key, target=value, band=band, source=source, adjusted=adjusted)


def _factor(category, impact=ImpactType.NEGATIVE, key="sleep_hours"):
    return Factor(
        key=key,
        name=key,
        category=category,
        impact=impact,
        value="",
        description="",
        weight=1.0,
    )


# ============================================================================
# Value formatting and impact
# ============================================================================

class TestFormatValue:
    """Test human-readable factor values."""

    def test_against_baseline(self):
        contribution = FactorContribution(
            spec=get_factor("sleep_hours"), actual=5.5, target=_target("sleep_hours", 7.0)
        )

        assert format_value(contribution) == "5.5 hrs vs 7.0 hrs baseline (-21%)"

    def test_stable_value_has_no_change(self):
        contribution = FactorContribution(
            spec=get_factor("sleep_hours"), actual=7.1, target=_target("sleep_hours", 7.0)
        )

        assert format_value(contribution) == "7.1 hrs vs 7.0 hrs baseline"

    def test_adjusted_baseline(self):
        contribution = FactorContribution(
            spec=get_factor("sleep_hours"),
            actual=5.5,
            target=_target("sleep_hours", 4.9, adjusted=True),
        )

        assert format_value(contribution) == "5.5 hrs vs 4.9 hrs adjusted baseline (+12%)"

    def test_ratio_as_percentage(self):
        contribution = FactorContribution(
            spec=get_factor("task_completion"),
            actual=0.5,
            target=_target("task_completion", 1.0, source=TargetSource.REFERENCE),
        )

        assert format_value(contribution) == "50% vs 100% typical"

    def test_goal_and_thousands(self):
        exercise = FactorContribution(
            spec=get_factor("exercise_minutes"),
            actual=20,
            target=_target("exercise_minutes", 45, source=TargetSource.PREFERENCE),
        )
        steps = FactorContribution(spec=get_factor("steps"), actual=12500)

        assert format_value(exercise).startswith("20 min vs 45 min goal")
        assert format_value(steps) == "12,500 steps"


class TestClassifyImpact:
    """Test impact labelling."""

    def test_negative_and_positive(self):
        spec = get_factor("sleep_hours")
        worse = contribution_for(spec, 5.0, _target("sleep_hours", 7.0), 1.0)
        better = contribution_for(spec, 9.0, _target("sleep_hours", 7.0), 1.0)

        assert classify_impact(worse, 0.25) == ImpactType.NEGATIVE
        assert classify_impact(better, 0.25) == ImpactType.POSITIVE

    def test_small_contribution_is_neutral(self):
        contribution = contribution_for(
            get_factor("sleep_hours"), 6.6, _target("sleep_hours", 7.0), 1.0
        )

        assert classify_impact(contribution, 0.25) == ImpactType.NEUTRAL

    def test_informational_is_neutral(self):
        contribution = FactorContribution(spec=get_factor("core_sleep_hours"), actual=3.5)

        assert classify_impact(contribution, 0.25) == ImpactType.NEUTRAL


# ============================================================================
# Ranking and factors
# ============================================================================

class TestRanking:
    """Test factor ordering."""

    def test_largest_driver_first(self):
        small = FactorContribution(spec=get_factor("hrv"), actual=0, burnout=0.3)
        large = FactorContribution(spec=get_factor("hours_worked"), actual=0, burnout=1.5)

        ranked = rank_contributions([small, large])

        assert [c.key for c in ranked] == ["hours_worked", "hrv"]

    def test_ties_follow_category_priority(self):
        meetings = FactorContribution(spec=get_factor("meeting_load"), actual=0, burnout=1.0)
        sleep = FactorContribution(spec=get_factor("sleep_hours"), actual=0, burnout=1.0)
        workload = FactorContribution(spec=get_factor("hours_worked"), actual=0, burnout=-1.0)

        ranked = rank_contributions([meetings, workload, sleep])

        assert [c.key for c in ranked] == ["sleep_hours", "hours_worked", "meeting_load"]


class TestBuildFactors:
    """Test factor entries shown to the user."""

    def test_contributions_in_score_points(self, standard_baseline, settings):
        personalization = apply_personalization(standard_baseline, settings=settings)
        contribution = contribution_for(
            get_factor("sleep_hours"), 5.5, _target("sleep_hours", 7.0), 1.0
        )

        (factor,) = build_factors([contribution], personalization, settings)

        assert factor.name == "Sleep Duration"
        assert factor.impact == ImpactType.NEGATIVE
        assert factor.burnout_contribution == 13.0
        assert factor.readiness_contribution == -10.4
        assert factor.weight == 1.0
        assert factor.description == "You slept noticeably less than is normal for you."

    def test_life_event_description(self, standard_baseline, new_baby_event, score_day, settings):
        personalization = apply_personalization(
            standard_baseline, life_events=[new_baby_event], as_of=score_day, settings=settings
        )
        contribution = contribution_for(
            get_factor("sleep_hours"), 4.0, _target("sleep_hours", 4.9, adjusted=True), 1.0
        )

        (factor,) = build_factors([contribution], personalization, settings)

        assert factor.impact == ImpactType.NEGATIVE
        assert "New Baby" in factor.description


# ============================================================================
# Context
# ============================================================================

def _work(day, hours):
    return DailyWorkMetrics(date=day, hours_worked=hours)


class TestDaysSinceRestDay:
    """Test rest-day tracking."""

    def test_counts_from_last_rest_day(self):
        history = [_work(date(2026, 1, 10), 0)] + [
            _work(date(2026, 1, day), 8) for day in range(11, 15)
        ]

        assert days_since_rest_day(history, date(2026, 1, 14)) == 4

    def test_light_day_counts_as_rest(self):
        history = [_work(date(2026, 1, 10), 0.5), _work(date(2026, 1, 12), 9)]

        assert days_since_rest_day(history, date(2026, 1, 12)) == 2

    def test_future_records_ignored(self):
        history = [_work(date(2026, 1, 8), 0), _work(date(2026, 1, 20), 0)]

        assert days_since_rest_day(history, date(2026, 1, 14)) == 6

    def test_undated_and_unknown_days_skipped(self):
        history = [
            DailyWorkMetrics(hours_worked=0),
            DailyWorkMetrics(date=date(2026, 1, 11)),
            _work(date(2026, 1, 9), 0),
        ]

        assert days_since_rest_day(history, None) == 2

    def test_no_rest_day_found(self):
        history = [_work(date(2026, 1, 12), 8)]

        assert days_since_rest_day(history, date(2026, 1, 14)) is None
        assert days_since_rest_day(None, date(2026, 1, 14)) is None


class TestCalibrationNotes:
    """Test personalization notes."""

    def test_life_event_notes(self, standard_baseline, new_baby_event, score_day, settings):
        personalization = apply_personalization(
            standard_baseline, life_events=[new_baby_event], as_of=score_day, settings=settings
        )

        notes = calibration_notes(personalization)

        assert notes[0] == "Expected sleep lowered 30% (7.0 → 4.9 hrs) for New Baby"
        assert "Expected work hours lowered 20% (8.0 → 6.4 hrs) for New Baby" in notes
        assert "Stress-marker tolerance widened 30% for New Baby" in notes

    def test_preference_notes(self, settings):
        prefs = PersonalPreferences(weight_sleep=100, social_energy_type="introvert")

        notes = calibration_notes(apply_personalization(None, prefs, settings=settings))

        assert "Sleep factors weighted x2.00 by preference" in notes
        assert "Meeting capacity set to 3.0 hrs for an introvert profile" in notes

    def test_no_personalization(self, standard_baseline, settings):
        assert calibration_notes(apply_personalization(standard_baseline, settings=settings)) == []


# ============================================================================
# Recommendations
# ============================================================================

class TestRecommendations:
    """Test rule lookup and personalization of recommendations."""

    def test_dominant_negative_category(self):
        factors = [
            _factor("stress", ImpactType.POSITIVE, key="hrv"),
            _factor("workload", key="hours_worked"),
            _factor("sleep"),
        ]

        assert dominant_negative_category(factors) == FactorCategory.WORKLOAD
        assert dominant_negative_category([]) is None

    def test_fallback_rule(self):
        assert lookup_rule(Zone.GREEN, FactorCategory.MEETINGS) == lookup_rule(Zone.GREEN, None)

    def test_red_sleep(self, standard_baseline, settings):
        personalization = apply_personalization(standard_baseline, settings=settings)

        recs = generate_recommendations(Zone.RED, [_factor("sleep")], personalization)

        assert recs.personal[0].startswith("Make sleep the priority tonight")
        assert 1 <= len(recs.personal) <= MAX_PERSONAL
        assert 1 <= len(recs.leadership) <= MAX_LEADERSHIP

    def test_green_without_drivers(self, standard_baseline, settings):
        personalization = apply_personalization(standard_baseline, settings=settings)

        recs = generate_recommendations(Zone.GREEN, [], personalization)

        assert recs.personal[0] == "This is a great time to tackle challenging projects."
        assert recs.leadership[0].startswith("OPPORTUNITY")

    def test_life_event_lines(self, standard_baseline, new_baby_event, score_day, settings):
        personalization = apply_personalization(
            standard_baseline, life_events=[new_baby_event], as_of=score_day, settings=settings
        )

        recs = generate_recommendations(Zone.RED, [_factor("sleep")], personalization)

        assert recs.personal[1] == "During New Baby, focus on essentials and be gentle with yourself."
        assert recs.leadership == [
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
            'CONTEXT: Employee is experiencing "New Baby" - expectations adjusted.',
        ]

    def test_lists_are_capped(self, standard_baseline, new_baby_event, preferences, score_day, settings):
        personalization = apply_personalization(
            standard_baseline, preferences, [new_baby_event], as_of=score_day, settings=settings
        )

        recs = generate_recommendations(Zone.RED, [_factor("sleep")], personalization)

        assert len(recs.personal) == MAX_PERSONAL
        assert len(recs.leadership) == MAX_LEADERSHIP
        assert "Aim for your ideal of 8 hours of sleep tonight." in recs.personal

    @pytest.mark.parametrize("zone", list(Zone))
    def test_every_zone_has_recommendations(self, zone, settings):
        personalization = apply_personalization(None, settings=settings)

        recs = generate_recommendations(zone, [], personalization)

        assert recs.personal
        assert recs.leadership
