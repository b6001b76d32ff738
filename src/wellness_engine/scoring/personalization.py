"""
Personalization adjuster.

Shifts a person's rolling baseline for their active life events and turns
their stated factor weights into multipliers. Runs before every other stage
and records what it changed so the explanation can say so.

Life-event adjustments for the same dimension are summed across events,
then clamped. Adjusted expectations are floored at physical minimums.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from ..config import Settings, get_settings
from ..models.inputs import (
    LifeEvent,
    NEUTRAL_WEIGHT,
    PersonalBaseline,
    PersonalPreferences,
    SocialEnergyType,
)
from .factors import PreferenceGroup


logger = logging.getLogger(__name__)


# Used when no preferences were supplied
DEFAULT_EXERCISE_MINUTES = 30.0
DEFAULT_MAX_MEETING_HOURS = 4.0

# Adjusted expectations never drop below these values
MIN_EXPECTED_SLEEP_HOURS = 3.0
MIN_EXPECTED_WORK_HOURS = 1.0
MIN_EXPECTED_EXERCISE_MINUTES = 0.0

SOCIAL_MEETING_MULTIPLIERS: Dict[SocialEnergyType, float] = {
    SocialEnergyType.INTROVERT: 0.75,
    SocialEnergyType.AMBIVERT: 1.0,
    SocialEnergyType.EXTROVERT: 1.25,
}

ADJUSTMENT_DIMENSIONS = ("sleep", "work", "exercise", "stress_tolerance")


@dataclass
class LifeEventContribution:
    """How much one active event shifted each dimension (percent)."""
    label: str
    event_type: str
    sleep: float = 0.0
    work: float = 0.0
    exercise: float = 0.0
    stress_tolerance: float = 0.0

    def summary(self) -> str:
        """Short human-readable summary, e.g. 'sleep -30%, work -20%'."""
        parts = []
        for dimension in ADJUSTMENT_DIMENSIONS:
            value = getattr(self, dimension)
            if value:
                name = dimension.replace("_", " ")
                parts.append(f"{name} {value:+.0f}%")
        return ", ".join(parts) if parts else "no expectation changes"


@dataclass
class LifeEventAdjustments:
    """Summed and clamped percentage adjustments per dimension."""
    sleep: float = 0.0
    work: float = 0.0
    exercise: float = 0.0
    stress_tolerance: float = 0.0

    def is_zero(self) -> bool:
        return not any(getattr(self, d) for d in ADJUSTMENT_DIMENSIONS)


@dataclass
class EffectiveWeights:
    """Multipliers per preference group; 1.0 means unchanged."""
    sleep: float = 1.0
    exercise: float = 1.0
    workload: float = 1.0
    meetings: float = 1.0
    heart_metrics: float = 1.0

    def for_group(self, group: Optional[PreferenceGroup]) -> float:
        if group is None:
            return 1.0
        return getattr(self, group.value)

    def changed_groups(self) -> Dict[str, float]:
        return {
            g.value: self.for_group(g)
            for g in PreferenceGroup
            if self.for_group(g) != 1.0
        }


@dataclass
class EffectiveBaseline:
    """Baseline values after personalization.

    ``original`` keeps the pre-adjustment values for calibration notes and
    ``adjusted_fields`` names the values a life event or floor changed.
    """
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[float] = None
    hrv: Optional[float] = None
    resting_hr: Optional[float] = None
    hours_worked: Optional[float] = None
    steps: Optional[float] = None
    exercise_minutes: float = DEFAULT_EXERCISE_MINUTES
    max_meeting_hours: float = DEFAULT_MAX_MEETING_HOURS
    stress_tolerance_pct: float = 0.0
    original: Dict[str, Optional[float]] = field(default_factory=dict)
    adjusted_fields: Set[str] = field(default_factory=set)

    def is_adjusted(self, name: str) -> bool:
        return name in self.adjusted_fields


@dataclass
class PersonalizationResult:
    """Everything downstream stages need from personalization."""
    baseline: EffectiveBaseline
    weights: EffectiveWeights
    adjustments: LifeEventAdjustments
    active_events: List[LifeEvent] = field(default_factory=list)
    contributions: List[LifeEventContribution] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    preferences: Optional[PersonalPreferences] = None

    @property
    def personalized(self) -> bool:
        return self.preferences is not None or bool(self.active_events)

    def primary_event_label(self) -> Optional[str]:
        return self.active_events[0].label if self.active_events else None


def select_active_events(
    events: Optional[Iterable[LifeEvent]],
    as_of: Optional[date],
) -> List[LifeEvent]:
    """Return the events in effect on ``as_of``.

    Without a date only the ``is_active`` flag is consulted.
    """
    if not events:
        return []
    if as_of is None:
        return [e for e in events if e.is_active]
    return [e for e in events if e.is_active_on(as_of)]


def sum_adjustments(
    events: List[LifeEvent],
    max_pct: float,
) -> tuple[LifeEventAdjustments, List[LifeEventContribution], List[str]]:
    """Sum adjustments per dimension across events and clamp the totals.

    Returns:
        Tuple of (clamped adjustments, per-event contributions, clamp notes)
    """
    totals = {d: 0.0 for d in ADJUSTMENT_DIMENSIONS}
    contributions = []
    for event in events:
        contribution = LifeEventContribution(
            label=event.label,
            event_type=event.event_type,
            sleep=event.sleep_adjustment,
            work=event.work_adjustment,
            exercise=event.exercise_adjustment,
            stress_tolerance=event.stress_tolerance_adjustment,
        )
        contributions.append(contribution)
        for dimension in ADJUSTMENT_DIMENSIONS:
            totals[dimension] += getattr(contribution, dimension)

    notes = []
    for dimension, total in totals.items():
        clamped = max(-max_pct, min(max_pct, total))
        if clamped != total:
            name = dimension.replace("_", " ")
            notes.append(
                f"Combined {name} adjustment of {total:+.0f}% was limited to {clamped:+.0f}%."
            )
            totals[dimension] = clamped

    return LifeEventAdjustments(**totals), contributions, notes


def derive_weights(preferences: Optional[PersonalPreferences]) -> EffectiveWeights:
    """Turn 0-100 preference weights into multipliers around a neutral 50."""
    if preferences is None:
        return EffectiveWeights()
    return EffectiveWeights(
        sleep=preferences.weight_sleep / NEUTRAL_WEIGHT,
        exercise=preferences.weight_exercise / NEUTRAL_WEIGHT,
        workload=preferences.weight_workload / NEUTRAL_WEIGHT,
        meetings=preferences.weight_meetings / NEUTRAL_WEIGHT,
        heart_metrics=preferences.weight_heart_metrics / NEUTRAL_WEIGHT,
    )


def _shift(
    value: Optional[float],
    pct: float,
    floor: float,
    name: str,
    notes: List[str],
) -> Optional[float]:
    """Apply a percentage shift and floor the result.

    A zero shift returns the value untouched, unrounded and unfloored.
    """
    if value is None or not pct:
        return value
    shifted = value * (1 + pct / 100)
    if shifted < floor:
        notes.append(
            f"Expected {name} was held at the minimum of {floor:g} instead of {shifted:.1f}."
        )
        shifted = floor
    return round(shifted, 2)


def apply_personalization(
    baseline: Optional[PersonalBaseline],
    preferences: Optional[PersonalPreferences] = None,
    life_events: Optional[Iterable[LifeEvent]] = None,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> PersonalizationResult:
    """
    Build the effective baseline and weights for one evaluation.

    Args:
        baseline: Rolling personal baseline (may be None for new employees)
        preferences: Stated preferences, None if never set up
        life_events: All known life events; inactive ones are filtered out
        as_of: Day being scored, used to select active events
        settings: Engine settings (defaults to cached settings)

    Returns:
        PersonalizationResult with effective baseline, weights and notes
    """
    settings = settings or get_settings()
    baseline = baseline or PersonalBaseline()

    active = select_active_events(life_events, as_of)
    adjustments, contributions, notes = sum_adjustments(
        active, settings.max_life_event_adjustment_pct
    )

    exercise_target = (
        preferences.ideal_exercise_minutes if preferences else DEFAULT_EXERCISE_MINUTES
    )
    meeting_capacity = DEFAULT_MAX_MEETING_HOURS
    if preferences:
        meeting_capacity = (
            preferences.max_meeting_hours_daily
            * SOCIAL_MEETING_MULTIPLIERS[preferences.social_energy_type]
        )

    original = {
        "sleep_hours": baseline.sleep_hours,
        "hours_worked": baseline.hours_worked,
        "exercise_minutes": exercise_target,
    }

    effective = EffectiveBaseline(
        sleep_hours=_shift(
            baseline.sleep_hours, adjustments.sleep,
            MIN_EXPECTED_SLEEP_HOURS, "sleep hours", notes,
        ),
        sleep_quality=baseline.sleep_quality,
        hrv=baseline.hrv,
        resting_hr=baseline.resting_hr,
        hours_worked=_shift(
            baseline.hours_worked, adjustments.work,
            MIN_EXPECTED_WORK_HOURS, "work hours", notes,
        ),
        steps=baseline.steps,
        exercise_minutes=_shift(
            exercise_target, adjustments.exercise,
            MIN_EXPECTED_EXERCISE_MINUTES, "exercise minutes", notes,
        ),
        max_meeting_hours=round(meeting_capacity, 2),
        stress_tolerance_pct=adjustments.stress_tolerance,
        original=original,
    )
    effective.adjusted_fields = {
        name for name, pct in (
            ("sleep_hours", adjustments.sleep),
            ("hours_worked", adjustments.work),
            ("exercise_minutes", adjustments.exercise),
        )
        if pct and original[name] is not None
    }

    if active:
        logger.debug(
            "Applied %d active life event(s): %s",
            len(active),
            "; ".join(c.summary() for c in contributions),
        )

    return PersonalizationResult(
        baseline=effective,
        weights=derive_weights(preferences),
        adjustments=adjustments,
        active_events=active,
        contributions=contributions,
        notes=notes,
        preferences=preferences,
    )
