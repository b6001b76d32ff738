"""
Tests for the personalization adjuster.
"""

import pytest
from datetime import date

from wellness_engine.models.inputs import LifeEvent, PersonalBaseline, PersonalPreferences
from wellness_engine.scoring.factors import PreferenceGroup
from wellness_engine.scoring.personalization import (
    apply_personalization,
    derive_weights,
    select_active_events,
    sum_adjustments,
)


def _event(label, sleep=0, work=0, exercise=0, stress=0, start=date(2026, 3, 1), end=None):
    return LifeEvent(
        label=label,
        start_date=start,
        end_date=end,
        sleep_adjustment=sleep,
        work_adjustment=work,
        exercise_adjustment=exercise,
        stress_tolerance_adjustment=stress,
    )


class TestSelectActiveEvents:
    """Test selection of events in effect on a day."""

    def test_window_selection(self):
        march = _event("March", start=date(2026, 3, 1), end=date(2026, 3, 31))
        april = _event("April", start=date(2026, 4, 1), end=date(2026, 4, 30))

        active = select_active_events([march, april], date(2026, 3, 15))

        assert [e.label for e in active] == ["March"]

    def test_no_date_uses_active_flag(self):
        on = _event("On")
        off = LifeEvent(label="Off", start_date=date(2026, 3, 1), is_active=False)

        active = select_active_events([on, off], None)

        assert [e.label for e in active] == ["On"]

    def test_no_events(self):
        assert select_active_events(None, date(2026, 3, 15)) == []
        assert select_active_events([], date(2026, 3, 15)) == []


class TestSumAdjustments:
    """Test summing and clamping of overlapping events."""

    def test_adjustments_are_summed(self):
        events = [_event("A", sleep=-10, work=-20), _event("B", sleep=-15, work=10)]

        adjustments, contributions, notes = sum_adjustments(events, max_pct=50)

        assert adjustments.sleep == -25
        assert adjustments.work == -10
        assert len(contributions) == 2
        assert notes == []

    def test_sum_is_clamped_and_recorded(self):
        events = [_event("A", sleep=-30), _event("B", sleep=-30)]

        adjustments, _, notes = sum_adjustments(events, max_pct=50)

        assert adjustments.sleep == -50
        assert len(notes) == 1
        assert "-60%" in notes[0]
        assert "-50%" in notes[0]

    def test_no_events_is_zero(self):
        adjustments, contributions, notes = sum_adjustments([], max_pct=50)

        assert adjustments.is_zero()
        assert contributions == []
        assert notes == []


class TestDeriveWeights:
    """Test preference weights turning into multipliers."""

    def test_no_preferences_is_neutral(self):
        weights = derive_weights(None)

        for group in PreferenceGroup:
            assert weights.for_group(group) == 1.0
        assert weights.changed_groups() == {}

    def test_weights_relative_to_fifty(self):
        prefs = PersonalPreferences(weight_sleep=100, weight_meetings=0, weight_exercise=25)

        weights = derive_weights(prefs)

        assert weights.sleep == 2.0
        assert weights.meetings == 0.0
        assert weights.exercise == 0.5
        assert weights.workload == 1.0

    def test_unweighted_factor_group(self):
        assert derive_weights(PersonalPreferences()).for_group(None) == 1.0


class TestApplyPersonalization:
    """Test the effective baseline."""

    def test_passthrough_without_events(self, standard_baseline, settings):
        result = apply_personalization(standard_baseline, settings=settings)

        assert result.baseline.sleep_hours == 7
        assert result.baseline.hours_worked == 8
        assert result.baseline.exercise_minutes == 30
        assert result.baseline.max_meeting_hours == 4.0
        assert not result.baseline.is_adjusted("sleep_hours")
        assert not result.personalized

    def test_life_event_lowers_expectations(self, standard_baseline, new_baby_event, score_day, settings):
        result = apply_personalization(
            standard_baseline, life_events=[new_baby_event], as_of=score_day, settings=settings
        )

        assert result.baseline.sleep_hours == pytest.approx(4.9)
        assert result.baseline.hours_worked == pytest.approx(6.4)
        assert result.baseline.exercise_minutes == pytest.approx(18.0)
        assert result.baseline.stress_tolerance_pct == -30
        assert result.baseline.is_adjusted("sleep_hours")
        assert result.baseline.original["sleep_hours"] == 7
        assert result.primary_event_label() == "New Baby"
        assert result.personalized

    def test_inactive_event_ignored(self, standard_baseline, new_baby_event, settings):
        result = apply_personalization(
            standard_baseline,
            life_events=[new_baby_event],
            as_of=date(2026, 2, 1),
            settings=settings,
        )

        assert result.baseline.sleep_hours == 7
        assert result.active_events == []

    def test_expected_sleep_floored(self, settings):
        baseline = PersonalBaseline(sleep_hours=4.0)
        events = [_event("A", sleep=-30), _event("B", sleep=-30)]

        result = apply_personalization(baseline, life_events=events, as_of=date(2026, 3, 5), settings=settings)

        assert result.baseline.sleep_hours == 3.0
        assert any("limited" in note for note in result.notes)
        assert any("minimum" in note for note in result.notes)

    def test_social_energy_scales_meeting_capacity(self, settings):
        introvert = apply_personalization(
            None, PersonalPreferences(social_energy_type="introvert"), settings=settings
        )
        extrovert = apply_personalization(
            None, PersonalPreferences(social_energy_type="extrovert"), settings=settings
        )

        assert introvert.baseline.max_meeting_hours == 3.0
        assert extrovert.baseline.max_meeting_hours == 5.0

    def test_exercise_goal_from_preferences(self, preferences, settings):
        result = apply_personalization(None, preferences, settings=settings)

        assert result.baseline.exercise_minutes == 45
        assert result.personalized

    def test_missing_baseline_values_stay_missing(self, new_baby_event, score_day, settings):
        result = apply_personalization(
            PersonalBaseline(hrv=50), life_events=[new_baby_event], as_of=score_day, settings=settings
        )

        assert result.baseline.sleep_hours is None
        assert result.baseline.hours_worked is None
        assert result.baseline.hrv == 50

    def test_unrounded_baseline_not_flagged_without_events(self, settings):
        result = apply_personalization(PersonalBaseline(sleep_hours=7.3333), settings=settings)

        assert result.baseline.sleep_hours == 7.3333
        assert not result.baseline.is_adjusted("sleep_hours")
        assert not result.baseline.is_adjusted("hours_worked")
        assert not result.baseline.is_adjusted("exercise_minutes")

    def test_only_shifted_dimensions_flagged(self, settings):
        baseline = PersonalBaseline(sleep_hours=7.3333, hours_worked=8.1234)

        result = apply_personalization(
            baseline, life_events=[_event("Move", work=-10)], as_of=date(2026, 3, 5), settings=settings
        )

        assert result.baseline.sleep_hours == 7.3333
        assert not result.baseline.is_adjusted("sleep_hours")
        assert result.baseline.is_adjusted("hours_worked")
        assert result.baseline.hours_worked == pytest.approx(7.31)
