"""Baseline resolution for every scored factor.

The guiding rule: compare a person to *their own* normal, not a population
norm. The rolling personal baseline (already shifted for life events) is the
comparison point. Stated ideals are kept alongside for advice but never move
the target. Factors that have no rolling baseline fall back to a preference
target or a fixed reference from the factor table.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Tuple

from ..models.inputs import PersonalPreferences, SleepFlexibility
from .factors import FACTOR_TABLE, FactorCategory, FactorSpec, TargetSource
from .personalization import EffectiveBaseline, PersonalizationResult


# Night-to-night sleep noise tolerated before a deviation counts
SLEEP_FLEXIBILITY_BANDS: Dict[SleepFlexibility, float] = {
    SleepFlexibility.RIGID: 0.1,
    SleepFlexibility.MODERATE: 0.2,
    SleepFlexibility.FLEXIBLE: 0.3,
}

# Expected sleep when no baseline exists; only used for sleep-stage shares
REFERENCE_SLEEP_HOURS = 7.0

# Factors whose comparison point is a preference rather than a baseline
PREFERENCE_TARGETS: Dict[str, str] = {
    "exercise_minutes": "exercise_minutes",
    "meeting_load": "max_meeting_hours",
}


@dataclass
class DirectionIndicator:
    """Direction indicator showing change from baseline."""
    direction: str  # 'up', 'down', 'stable'
    change_pct: float
    baseline: float
    current: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BaselineTarget:
    """Resolved comparison point for one factor."""
    key: str
    target: float
    band: float
    source: TargetSource
    ideal: Optional[float] = None  # stated preference, advisory only
    original: Optional[float] = None  # target before life-event adjustment
    adjusted: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["source"] = self.source.value
        return data


def calculate_rolling_average(values: List[Optional[float]], days: int = 7) -> Optional[float]:
    """Calculate rolling average for the last N days.

    Args:
        values: List of values, most recent first (may contain None)
        days: Number of days to include in average

    Returns:
        Rolling average or None if insufficient data
    """
    valid_values = [v for v in values[:days] if v is not None]

    if len(valid_values) < 3:  # Require at least 3 data points
        return None

    return round(sum(valid_values) / len(valid_values), 2)


def calculate_direction(
    current: Optional[float],
    baseline: Optional[float],
    threshold_pct: float = 5.0,
    inverse: bool = False
) -> Optional[DirectionIndicator]:
    """Calculate direction indicator comparing current value to baseline.

    Args:
        current: Current value
        baseline: Baseline value to compare against
        threshold_pct: Percentage change required to register as up/down (default 5%)
        inverse: If True, lower is better (e.g., for RHR, stress)

    Returns:
        DirectionIndicator or None if insufficient data
    """
    if current is None or baseline is None or baseline == 0:
        return None

    change_pct = ((current - baseline) / baseline) * 100

    if abs(change_pct) < threshold_pct:
        direction = 'stable'
    elif change_pct > 0:
        direction = 'down' if inverse else 'up'
    else:
        direction = 'up' if inverse else 'down'

    return DirectionIndicator(
        direction=direction,
        change_pct=round(change_pct, 1),
        baseline=baseline,
        current=current
    )


def _band_for(
    spec: FactorSpec,
    preferences: Optional[PersonalPreferences],
    stress_tolerance_pct: float,
) -> float:
    if spec.band == 0:
        return 0.0
    if spec.category is FactorCategory.SLEEP and preferences is not None:
        return SLEEP_FLEXIBILITY_BANDS[preferences.sleep_flexibility]
    if spec.category is FactorCategory.STRESS:
        # Lowered stress tolerance widens the band (more strain is expected)
        return round(spec.band * max(0.0, 1 - stress_tolerance_pct / 100), 4)
    return spec.band


def _ideal_for(key: str, preferences: Optional[PersonalPreferences]) -> Optional[float]:
    if preferences is None:
        return None
    return {
        "sleep_hours": preferences.ideal_sleep_hours,
        "hours_worked": preferences.ideal_work_hours,
        "exercise_minutes": preferences.ideal_exercise_minutes,
        "meeting_load": preferences.max_meeting_hours_daily,
    }.get(key)


def _target_for(
    spec: FactorSpec,
    baseline: EffectiveBaseline,
) -> Tuple[Optional[float], TargetSource]:
    """Return the target value and where it actually came from."""
    source = spec.target_source
    if source is TargetSource.BASELINE:
        value = getattr(baseline, spec.baseline_field)
        if value is not None:
            return value, source
        return spec.reference, TargetSource.REFERENCE
    if source is TargetSource.SLEEP_SHARE:
        sleep = baseline.sleep_hours if baseline.sleep_hours is not None else REFERENCE_SLEEP_HOURS
        return round(sleep * spec.sleep_share, 2), source
    if source is TargetSource.PREFERENCE:
        return getattr(baseline, PREFERENCE_TARGETS[spec.key]), source
    if source is TargetSource.REFERENCE:
        return spec.reference, source
    return None, source


def resolve_targets(personalization: PersonalizationResult) -> Dict[str, BaselineTarget]:
    """
    Resolve the comparison target and tolerance band for each factor.

    Factors with no resolvable target (missing baseline and no reference,
    or informational factors) are left out.

    Args:
        personalization: Output of the personalization adjuster

    Returns:
        Dictionary of factor key to BaselineTarget
    """
    baseline = personalization.baseline
    preferences = personalization.preferences
    targets: Dict[str, BaselineTarget] = {}

    for spec in FACTOR_TABLE:
        if spec.informational:
            continue
        target, source = _target_for(spec, baseline)
        if target is None:
            continue

        field_name = spec.baseline_field or PREFERENCE_TARGETS.get(spec.key)
        adjusted = bool(field_name) and baseline.is_adjusted(field_name)
        original = baseline.original.get(field_name) if adjusted else target

        targets[spec.key] = BaselineTarget(
            key=spec.key,
            target=target,
            band=_band_for(spec, preferences, baseline.stress_tolerance_pct),
            source=source,
            ideal=_ideal_for(spec.key, preferences),
            original=original,
            adjusted=adjusted,
        )

    return targets
