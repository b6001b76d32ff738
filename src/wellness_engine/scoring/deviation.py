"""
Deviation calculator.

Turns each present metric into a signed, bounded contribution to the
burnout and readiness sums. A positive burnout contribution raises burnout
risk; a positive readiness contribution raises readiness. Missing metrics
produce no contribution at all. Present metrics with nothing to compare
against are kept as unscored contributions so they still get reported.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.inputs import DailyHealthMetrics, DailyWorkMetrics
from .baselines import BaselineTarget
from .factors import FACTOR_TABLE, FactorSpec, HOURS_PER_MEETING
from .personalization import EffectiveWeights


@dataclass
class FactorContribution:
    """One factor's effect on the raw score sums."""
    spec: FactorSpec
    actual: float
    target: Optional[BaselineTarget] = None
    deviation: float = 0.0
    burnout: float = 0.0
    readiness: float = 0.0
    multiplier: float = 1.0

    @property
    def key(self) -> str:
        return self.spec.key

    @property
    def scored(self) -> bool:
        """Informational and target-less factors are reported but never scored."""
        return self.target is not None

    @property
    def magnitude(self) -> float:
        """Size of the larger of the two contributions."""
        return max(abs(self.burnout), abs(self.readiness))


def extract_value(
    spec: FactorSpec,
    health: Optional[DailyHealthMetrics],
    work: Optional[DailyWorkMetrics],
) -> Optional[float]:
    """Read a factor's value for the day, deriving composite metrics."""
    if spec.metric == "task_completion_ratio":
        if work is None or work.tasks_completed is None or not work.tasks_assigned:
            return None
        return work.tasks_completed / work.tasks_assigned
    if spec.metric == "meeting_load_hours":
        if work is None:
            return None
        if work.meeting_hours is not None:
            return work.meeting_hours
        if work.meetings_attended is not None:
            return work.meetings_attended * HOURS_PER_MEETING
        return None

    record = health if spec.source == "health" else work
    if record is None:
        return None
    value = getattr(record, spec.metric)
    return float(value) if value is not None else None


def calculate_deviation(actual: float, target: float, scale: float, band: float = 0.0) -> float:
    """
    Normalized signed deviation of ``actual`` from ``target``.

    The result is in units of ``scale``. The first ``band`` units either side
    of the target are treated as noise and removed.
    """
    raw = (actual - target) / scale
    magnitude = abs(raw) - band
    if magnitude <= 0:
        return 0.0
    return magnitude if raw > 0 else -magnitude


def contribution_for(
    spec: FactorSpec,
    actual: float,
    target: BaselineTarget,
    multiplier: float,
) -> FactorContribution:
    """Score one factor against its resolved target."""
    deviation = calculate_deviation(actual, target.target, spec.scale, target.band)
    push = max(-spec.relief_cap, min(spec.cap, spec.direction.burnout_sign * deviation))
    return FactorContribution(
        spec=spec,
        actual=actual,
        target=target,
        deviation=round(deviation, 4),
        burnout=push * spec.burnout_weight * multiplier,
        readiness=-push * spec.readiness_weight * multiplier,
        multiplier=multiplier,
    )


def compute_contributions(
    health: Optional[DailyHealthMetrics],
    work: Optional[DailyWorkMetrics],
    targets: Dict[str, BaselineTarget],
    weights: Optional[EffectiveWeights] = None,
) -> List[FactorContribution]:
    """
    Compute contributions for every present metric, in factor-table order.

    Args:
        health: Health metrics for the day (may be None)
        work: Work metrics for the day (may be None)
        targets: Resolved baseline targets by factor key
        weights: Preference multipliers (defaults to neutral)

    Returns:
        List of FactorContribution; informational factors and factors
        without a resolved target carry no target
    """
    weights = weights or EffectiveWeights()
    contributions = []

    for spec in FACTOR_TABLE:
        actual = extract_value(spec, health, work)
        if actual is None:
            continue
        target = targets.get(spec.key)
        if target is None:
            contributions.append(FactorContribution(spec=spec, actual=actual))
            continue
        contributions.append(
            contribution_for(spec, actual, target, weights.for_group(spec.preference_group))
        )

    return contributions
