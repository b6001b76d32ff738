"""
Explanation synthesizer.

Turns scored contributions into the human-facing explanation: ranked
factors with formatted values and descriptions, recommendations, and the
context annotations that explain how the day was personalized.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional

from ..config import Settings, get_settings
from ..models.explanations import (
    Explanation,
    ExplanationContext,
    Factor,
    ImpactType,
    LifeEventNote,
    Zone,
)
from ..models.inputs import DailyWorkMetrics, SocialEnergyType
from .aggregate import AggregateScores
from .baselines import calculate_direction
from .deviation import FactorContribution
from .factors import FACTOR_TABLE, Direction, FactorCategory, TargetSource, category_rank
from .personalization import PersonalizationResult
from .recommendations import generate_recommendations


TARGET_LABELS: Dict[TargetSource, str] = {
    TargetSource.BASELINE: "baseline",
    TargetSource.SLEEP_SHARE: "target",
    TargetSource.PREFERENCE: "goal",
    TargetSource.REFERENCE: "typical",
}

_TABLE_ORDER = {spec.key: index for index, spec in enumerate(FACTOR_TABLE)}

NO_BASELINE_DESCRIPTION = "No baseline yet for this metric, so it is shown for context and not scored."

# Dimension name -> (calibrated baseline field, wording, unit)
_CALIBRATED_FIELDS = {
    "sleep": ("sleep_hours", "sleep", "hrs"),
    "work": ("hours_worked", "work hours", "hrs"),
    "exercise": ("exercise_minutes", "exercise", "min"),
}


def _format_number(value: float, precision: int, unit: str) -> str:
    if unit == "steps":
        return f"{value:,.0f}"
    return f"{value:.{precision}f}"


def format_value(contribution: FactorContribution) -> str:
    """Format a factor's value for display, e.g. '5.5 hrs vs 7.0 hrs baseline'."""
    spec = contribution.spec
    if spec.unit == "%":
        actual = f"{contribution.actual * 100:.0f}%"
        if contribution.target is None:
            return actual
        return f"{actual} vs {contribution.target.target * 100:.0f}% {TARGET_LABELS[contribution.target.source]}"

    actual = f"{_format_number(contribution.actual, spec.precision, spec.unit)} {spec.unit}".strip()
    target = contribution.target
    if target is None:
        return actual

    label = TARGET_LABELS[target.source]
    if target.adjusted:
        label = f"adjusted {label}"
    display = (
        f"{actual} vs "
        f"{_format_number(target.target, spec.precision, spec.unit)} {spec.unit} {label}"
    )

    indicator = calculate_direction(
        contribution.actual,
        target.target,
        inverse=spec.direction is Direction.HIGHER_IS_WORSE,
    )
    if indicator is not None and indicator.direction != "stable":
        display += f" ({indicator.change_pct:+.0f}%)"
    return display


def classify_impact(contribution: FactorContribution, threshold: float) -> ImpactType:
    """Impact of a contribution; anything below ``threshold`` is neutral."""
    if not contribution.scored or contribution.magnitude < threshold:
        return ImpactType.NEUTRAL
    if contribution.burnout > 0 or contribution.readiness < 0:
        return ImpactType.NEGATIVE
    return ImpactType.POSITIVE


def _event_label_for(
    contribution: FactorContribution,
    personalization: PersonalizationResult,
) -> Optional[str]:
    """Life event worth mentioning in this factor's description, if any."""
    label = personalization.primary_event_label()
    if label is None or contribution.target is None:
        return None
    if contribution.target.adjusted:
        return label
    if (
        contribution.spec.category is FactorCategory.STRESS
        and personalization.adjustments.stress_tolerance
    ):
        return label
    return None


def describe_contribution(
    contribution: FactorContribution,
    impact: ImpactType,
    personalization: PersonalizationResult,
) -> str:
    spec = contribution.spec
    if not contribution.scored and not spec.informational:
        return NO_BASELINE_DESCRIPTION
    return spec.describe(impact, _event_label_for(contribution, personalization))


def rank_contributions(contributions: Iterable[FactorContribution]) -> List[FactorContribution]:
    """Sort largest driver first; ties by category priority then table order."""
    return sorted(
        contributions,
        key=lambda c: (
            -round(c.magnitude, 6),
            category_rank(c.spec.category),
            _TABLE_ORDER[c.key],
        ),
    )


def build_factors(
    contributions: Iterable[FactorContribution],
    personalization: PersonalizationResult,
    settings: Optional[Settings] = None,
) -> List[Factor]:
    """
    Build ranked Factor entries from scored contributions.

    Contributions are reported in score points so a reader can see how far
    each factor moved each score.
    """
    settings = settings or get_settings()
    factors = []
    for contribution in rank_contributions(contributions):
        spec = contribution.spec
        impact = classify_impact(contribution, settings.materiality_threshold)
        factors.append(
            Factor(
                key=spec.key,
                name=spec.label,
                category=spec.category.value,
                impact=impact,
                value=format_value(contribution),
                description=describe_contribution(contribution, impact, personalization),
                weight=round(spec.burnout_weight * contribution.multiplier, 3),
                burnout_contribution=round(contribution.burnout * settings.score_scaling, 1),
                readiness_contribution=round(contribution.readiness * settings.readiness_scaling, 1),
            )
        )
    return factors


def days_since_rest_day(
    work_history: Optional[Iterable[DailyWorkMetrics]],
    as_of: Optional[date],
    rest_day_max_hours: float = 1.0,
) -> Optional[int]:
    """
    Calculate days since the last rest day.

    A day counts as a rest day when it has a work record with at most
    ``rest_day_max_hours`` hours worked. Days without a record are unknown,
    not rest.

    Args:
        work_history: Validated work records; undated ones are ignored
        as_of: Day being scored; defaults to the latest dated record
        rest_day_max_hours: Hours threshold for a rest day

    Returns:
        Days since the last rest day, or None if none is found
    """
    if not work_history:
        return None

    dated = [r for r in work_history if r.metric_date is not None]
    if not dated:
        return None
    reference = as_of or max(r.metric_date for r in dated)

    last_rest = None
    for record in dated:
        record_date = record.metric_date
        if record_date > reference:
            continue
        hours = record.hours_worked
        if hours is not None and hours <= rest_day_max_hours:
            if last_rest is None or record_date > last_rest:
                last_rest = record_date

    if last_rest is None:
        return None
    return (reference - last_rest).days


def _events_for(dimension: str, personalization: PersonalizationResult) -> str:
    labels = [c.label for c in personalization.contributions if getattr(c, dimension)]
    return " and ".join(labels)


def calibration_notes(personalization: PersonalizationResult) -> List[str]:
    """Describe every way the expectations were personalized for this day."""
    notes = []
    baseline = personalization.baseline
    adjustments = personalization.adjustments

    for dimension, (field_name, wording, unit) in _CALIBRATED_FIELDS.items():
        if not baseline.is_adjusted(field_name):
            continue
        pct = getattr(adjustments, dimension)
        before = baseline.original[field_name]
        after = getattr(baseline, field_name)
        verb = "lowered" if after < before else "raised"
        notes.append(
            f"Expected {wording} {verb} {abs(pct):.0f}% "
            f"({before:.1f} → {after:.1f} {unit}) for {_events_for(dimension, personalization)}"
        )

    if adjustments.stress_tolerance:
        verb = "widened" if adjustments.stress_tolerance < 0 else "narrowed"
        notes.append(
            f"Stress-marker tolerance {verb} {abs(adjustments.stress_tolerance):.0f}% "
            f"for {_events_for('stress_tolerance', personalization)}"
        )

    notes.extend(personalization.notes)

    for group, multiplier in personalization.weights.changed_groups().items():
        name = group.replace("_", " ")
        notes.append(f"{name.capitalize()} factors weighted x{multiplier:.2f} by preference")

    preferences = personalization.preferences
    if preferences is not None and preferences.social_energy_type != SocialEnergyType.AMBIVERT:
        notes.append(
            f"Meeting capacity set to {baseline.max_meeting_hours:.1f} hrs "
            f"for an {preferences.social_energy_type.value} profile"
        )

    return notes


def build_context(
    personalization: PersonalizationResult,
    work_history: Optional[Iterable[DailyWorkMetrics]] = None,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> ExplanationContext:
    """Build informational annotations; none of these affect the scores."""
    settings = settings or get_settings()
    preferences = personalization.preferences
    return ExplanationContext(
        days_since_rest_day=days_since_rest_day(
            work_history, as_of, settings.rest_day_max_hours
        ),
        active_life_events=[
            LifeEventNote(label=c.label, impact=f"Expected {c.summary()}")
            for c in personalization.contributions
        ],
        calibration_notes=calibration_notes(personalization),
        personalized=personalization.personalized,
        chronotype=preferences.chronotype.value if preferences else None,
    )


def synthesize_explanation(
    contributions: List[FactorContribution],
    scores: AggregateScores,
    zone: Zone,
    personalization: PersonalizationResult,
    work_history: Optional[Iterable[DailyWorkMetrics]] = None,
    as_of: Optional[date] = None,
    settings: Optional[Settings] = None,
) -> Explanation:
    """
    Assemble the complete explanation for a scored day.

    Args:
        contributions: Factor contributions from the deviation calculator
        scores: Aggregated scores
        zone: Zone derived from the burnout score
        personalization: Personalization applied to the evaluation
        work_history: Optional recent work records for rest-day tracking
        as_of: Day being scored
        settings: Engine settings

    Returns:
        Explanation with ranked factors, recommendations and context
    """
    settings = settings or get_settings()
    factors = build_factors(contributions, personalization, settings)
    return Explanation(
        zone=zone,
        burnout_score=scores.burnout,
        readiness_score=scores.readiness,
        factors=factors,
        recommendations=generate_recommendations(zone, factors, personalization),
        context=build_context(personalization, work_history, as_of, settings),
    )
