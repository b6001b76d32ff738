"""
Factor policy table.

Every scored metric is described here once: where its value comes from,
what it is compared against, which direction is healthy, how deviations are
normalized and bounded, how much it weighs in each score and how it is
explained. The rest of the pipeline reads this table instead of carrying
per-metric conditionals.

Normalization: ``scale`` is the shift treated as clinically noticeable, so
a deviation of 1.0 means "one noticeable step away from normal". ``cap``
bounds how far a single metric can push burnout up; ``relief_cap`` bounds
how far it can pull burnout down. ``band`` is a dead zone (in normalized
units) inside which day-to-day noise is ignored.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..models.explanations import ImpactType


class FactorCategory(str, Enum):
    """Category used for recommendation selection and tie-breaking."""
    SLEEP = "sleep"
    WORKLOAD = "workload"
    STRESS = "stress"
    EXERCISE = "exercise"
    MEETINGS = "meetings"


# Ties between equally dominant factors resolve in this order
CATEGORY_PRIORITY: Tuple[FactorCategory, ...] = (
    FactorCategory.SLEEP,
    FactorCategory.WORKLOAD,
    FactorCategory.STRESS,
    FactorCategory.EXERCISE,
    FactorCategory.MEETINGS,
)


class Direction(str, Enum):
    """Which way a metric has to move to be healthier."""
    HIGHER_IS_BETTER = "higher_is_better"
    HIGHER_IS_WORSE = "higher_is_worse"

    @property
    def burnout_sign(self) -> int:
        """Sign applied to a raw deviation to get its burnout push."""
        return -1 if self is Direction.HIGHER_IS_BETTER else 1


class TargetSource(str, Enum):
    """Where a factor's comparison target comes from."""
    BASELINE = "baseline"          # personal rolling baseline, reference as fallback
    SLEEP_SHARE = "sleep_share"    # fraction of the expected sleep duration
    PREFERENCE = "preference"      # stated preference (exercise, meeting capacity)
    REFERENCE = "reference"        # fixed population reference
    NONE = "none"                  # informational, never scored


class PreferenceGroup(str, Enum):
    """Preference weight that scales a factor."""
    SLEEP = "sleep"
    EXERCISE = "exercise"
    WORKLOAD = "workload"
    MEETINGS = "meetings"
    HEART_METRICS = "heart_metrics"


@dataclass(frozen=True)
class FactorSpec:
    """Declarative description of one factor."""
    key: str
    label: str
    category: FactorCategory
    source: str  # "health" or "work"
    metric: str  # attribute on the source record, or a derived metric name
    direction: Direction
    target_source: TargetSource
    scale: float = 1.0
    cap: float = 2.0
    relief_cap: float = 1.0
    band: float = 0.2
    burnout_weight: float = 0.0
    readiness_weight: float = 0.0
    preference_group: Optional[PreferenceGroup] = None
    baseline_field: Optional[str] = None
    reference: Optional[float] = None
    sleep_share: Optional[float] = None
    unit: str = ""
    precision: int = 1
    templates: Dict[ImpactType, str] = field(default_factory=dict)
    event_template: Optional[str] = None

    @property
    def informational(self) -> bool:
        return self.target_source is TargetSource.NONE

    def describe(self, impact: ImpactType, event_label: Optional[str] = None) -> str:
        """Pick the description sentence for ``impact``."""
        if impact is ImpactType.NEGATIVE and event_label and self.event_template:
            return self.event_template.format(event=event_label)
        return self.templates.get(impact, DEFAULT_TEMPLATES[impact])


DEFAULT_TEMPLATES: Dict[ImpactType, str] = {
    ImpactType.NEGATIVE: "This factor is weighing on you today.",
    ImpactType.POSITIVE: "This factor is working in your favor today.",
    ImpactType.NEUTRAL: "This factor is within your normal range.",
}

# Meeting load falls back to this many hours per meeting attended
HOURS_PER_MEETING = 0.75


FACTOR_TABLE: List[FactorSpec] = [
    # ------------------------------------------------------------------ sleep
    FactorSpec(
        key="sleep_hours",
        label="Sleep Duration",
        category=FactorCategory.SLEEP,
        source="health",
        metric="sleep_hours",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.BASELINE,
        baseline_field="sleep_hours",
        scale=1.0, cap=2.0, relief_cap=1.5,
        burnout_weight=1.0, readiness_weight=0.8,
        preference_group=PreferenceGroup.SLEEP,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "You slept noticeably less than is normal for you.",
            ImpactType.POSITIVE: "You got more sleep than your usual amount.",
            ImpactType.NEUTRAL: "Your sleep duration is consistent with your baseline.",
        },
        event_template="Your sleep is below even your adjusted expectation during {event}.",
    ),
    FactorSpec(
        key="sleep_quality",
        label="Sleep Quality",
        category=FactorCategory.SLEEP,
        source="health",
        metric="sleep_quality_score",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.BASELINE,
        baseline_field="sleep_quality",
        scale=10.0, cap=2.0, relief_cap=1.5,
        burnout_weight=0.6, readiness_weight=1.0,
        preference_group=PreferenceGroup.SLEEP,
        unit="pts", precision=0,
        templates={
            ImpactType.NEGATIVE: "Your sleep was more restless than usual.",
            ImpactType.POSITIVE: "Your sleep quality was excellent for you.",
            ImpactType.NEUTRAL: "Your sleep quality is at your usual level.",
        },
    ),
    FactorSpec(
        key="deep_sleep_hours",
        label="Deep Sleep",
        category=FactorCategory.SLEEP,
        source="health",
        metric="deep_sleep_hours",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.SLEEP_SHARE,
        sleep_share=0.20,
        scale=0.3, cap=2.0, relief_cap=1.0,
        burnout_weight=0.3, readiness_weight=0.6,
        preference_group=PreferenceGroup.SLEEP,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "You got less restorative deep sleep than your body needs.",
            ImpactType.POSITIVE: "You got plenty of restorative deep sleep.",
            ImpactType.NEUTRAL: "Your deep sleep is meeting your needs.",
        },
    ),
    FactorSpec(
        key="rem_sleep_hours",
        label="REM Sleep",
        category=FactorCategory.SLEEP,
        source="health",
        metric="rem_sleep_hours",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.SLEEP_SHARE,
        sleep_share=0.22,
        scale=0.3, cap=2.0, relief_cap=1.0,
        burnout_weight=0.2, readiness_weight=0.4,
        preference_group=PreferenceGroup.SLEEP,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "REM sleep was short, which can affect focus and mood.",
            ImpactType.POSITIVE: "You had a healthy amount of REM sleep.",
            ImpactType.NEUTRAL: "Your REM sleep is in its usual range.",
        },
    ),
    FactorSpec(
        key="awake_sleep_hours",
        label="Awake Time",
        category=FactorCategory.SLEEP,
        source="health",
        metric="awake_sleep_hours",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.REFERENCE,
        reference=0.5,
        scale=0.25, cap=2.0, relief_cap=0.5,
        burnout_weight=0.2, readiness_weight=0.2,
        preference_group=PreferenceGroup.SLEEP,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "You spent a lot of the night awake.",
            ImpactType.POSITIVE: "Your sleep was largely uninterrupted.",
            ImpactType.NEUTRAL: "Night-time wakefulness was typical.",
        },
    ),
    FactorSpec(
        key="core_sleep_hours",
        label="Core Sleep",
        category=FactorCategory.SLEEP,
        source="health",
        metric="core_sleep_hours",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.NONE,
        unit="hrs",
        templates={
            ImpactType.NEUTRAL: "Core sleep is shown for context and is not scored.",
        },
    ),
    # --------------------------------------------------------------- workload
    FactorSpec(
        key="hours_worked",
        label="Work Hours",
        category=FactorCategory.WORKLOAD,
        source="work",
        metric="hours_worked",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.BASELINE,
        baseline_field="hours_worked",
        scale=1.0, cap=2.0, relief_cap=0.5,
        burnout_weight=1.0, readiness_weight=0.5,
        preference_group=PreferenceGroup.WORKLOAD,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "You worked well beyond your usual hours.",
            ImpactType.POSITIVE: "You kept your working day shorter than usual.",
            ImpactType.NEUTRAL: "Your work hours are consistent with your normal pattern.",
        },
        event_template="You are working more than the adjusted expectation for {event}.",
    ),
    FactorSpec(
        key="overtime_hours",
        label="Overtime",
        category=FactorCategory.WORKLOAD,
        source="work",
        metric="overtime_hours",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.REFERENCE,
        reference=0.0,
        scale=1.0, cap=2.0, relief_cap=0.0, band=0.0,
        burnout_weight=0.6, readiness_weight=0.4,
        preference_group=PreferenceGroup.WORKLOAD,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "Overtime is eating into your recovery time.",
            ImpactType.NEUTRAL: "No meaningful overtime today.",
        },
    ),
    FactorSpec(
        key="task_completion",
        label="Task Completion",
        category=FactorCategory.WORKLOAD,
        source="work",
        metric="task_completion_ratio",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.REFERENCE,
        reference=1.0,
        scale=0.2, cap=2.0, relief_cap=0.5,
        burnout_weight=0.4, readiness_weight=0.3,
        preference_group=PreferenceGroup.WORKLOAD,
        unit="%", precision=0,
        templates={
            ImpactType.NEGATIVE: "More work was assigned than could be completed.",
            ImpactType.POSITIVE: "You are keeping on top of your assigned work.",
            ImpactType.NEUTRAL: "Your workload and output are in balance.",
        },
    ),
    FactorSpec(
        key="focus_time_hours",
        label="Focus Time",
        category=FactorCategory.WORKLOAD,
        source="work",
        metric="focus_time_hours",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.REFERENCE,
        reference=2.0,
        scale=1.0, cap=2.0, relief_cap=0.5,
        burnout_weight=0.2, readiness_weight=0.3,
        preference_group=PreferenceGroup.WORKLOAD,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "You had little uninterrupted time for deep work.",
            ImpactType.POSITIVE: "You protected good blocks of focus time.",
            ImpactType.NEUTRAL: "Your focus time is typical.",
        },
    ),
    # ----------------------------------------------------------------- stress
    FactorSpec(
        key="hrv",
        label="Heart Rate Variability",
        category=FactorCategory.STRESS,
        source="health",
        metric="hrv",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.BASELINE,
        baseline_field="hrv",
        scale=10.0, cap=2.0, relief_cap=1.5,
        burnout_weight=0.8, readiness_weight=1.2,
        preference_group=PreferenceGroup.HEART_METRICS,
        unit="ms", precision=0,
        templates={
            ImpactType.NEGATIVE: "Your HRV is below your baseline, a sign of elevated stress.",
            ImpactType.POSITIVE: "Your HRV shows good recovery and low stress.",
            ImpactType.NEUTRAL: "Your HRV is within your normal range.",
        },
        event_template="Your HRV indicates elevated stress, which is expected during {event}.",
    ),
    FactorSpec(
        key="resting_hr",
        label="Resting Heart Rate",
        category=FactorCategory.STRESS,
        source="health",
        metric="resting_hr",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.BASELINE,
        baseline_field="resting_hr",
        scale=5.0, cap=2.0, relief_cap=1.0,
        burnout_weight=0.6, readiness_weight=0.8,
        preference_group=PreferenceGroup.HEART_METRICS,
        unit="bpm", precision=0,
        templates={
            ImpactType.NEGATIVE: "Your resting heart rate is elevated compared to your norm.",
            ImpactType.POSITIVE: "Your resting heart rate is lower than usual, a good recovery signal.",
            ImpactType.NEUTRAL: "Your resting heart rate is at its usual level.",
        },
    ),
    FactorSpec(
        key="recovery_score",
        label="Recovery",
        category=FactorCategory.STRESS,
        source="health",
        metric="recovery_score",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.REFERENCE,
        reference=60.0,
        scale=15.0, cap=2.0, relief_cap=1.5,
        burnout_weight=0.6, readiness_weight=1.2,
        preference_group=PreferenceGroup.HEART_METRICS,
        unit="pts", precision=0,
        templates={
            ImpactType.NEGATIVE: "Your recovery metrics indicate you need more rest.",
            ImpactType.POSITIVE: "Your body is showing strong recovery signals.",
            ImpactType.NEUTRAL: "Your recovery is at a typical level.",
        },
    ),
    FactorSpec(
        key="stress_level",
        label="Stress Level",
        category=FactorCategory.STRESS,
        source="health",
        metric="stress_level",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.REFERENCE,
        reference=40.0,
        scale=15.0, cap=2.0, relief_cap=1.0,
        burnout_weight=0.6, readiness_weight=0.6,
        unit="pts", precision=0,
        templates={
            ImpactType.NEGATIVE: "Measured stress was high through the day.",
            ImpactType.POSITIVE: "Measured stress stayed low.",
            ImpactType.NEUTRAL: "Measured stress was moderate.",
        },
    ),
    # --------------------------------------------------------------- exercise
    FactorSpec(
        key="exercise_minutes",
        label="Activity Level",
        category=FactorCategory.EXERCISE,
        source="health",
        metric="exercise_minutes",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.PREFERENCE,
        scale=15.0, cap=2.0, relief_cap=1.0,
        burnout_weight=0.5, readiness_weight=0.6,
        preference_group=PreferenceGroup.EXERCISE,
        unit="min", precision=0,
        templates={
            ImpactType.NEGATIVE: "Your activity level is below your goal.",
            ImpactType.POSITIVE: "You're hitting your personal activity goals.",
            ImpactType.NEUTRAL: "Your activity is within your target range.",
        },
    ),
    FactorSpec(
        key="steps",
        label="Daily Steps",
        category=FactorCategory.EXERCISE,
        source="health",
        metric="steps",
        direction=Direction.HIGHER_IS_BETTER,
        target_source=TargetSource.BASELINE,
        baseline_field="steps",
        reference=7000.0,
        scale=2000.0, cap=2.0, relief_cap=1.0,
        burnout_weight=0.2, readiness_weight=0.3,
        preference_group=PreferenceGroup.EXERCISE,
        unit="steps", precision=0,
        templates={
            ImpactType.NEGATIVE: "You moved much less than usual today.",
            ImpactType.POSITIVE: "You stayed more active than usual.",
            ImpactType.NEUTRAL: "Your step count is typical.",
        },
    ),
    # --------------------------------------------------------------- meetings
    FactorSpec(
        key="meeting_load",
        label="Meeting Load",
        category=FactorCategory.MEETINGS,
        source="work",
        metric="meeting_load_hours",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.PREFERENCE,
        scale=1.0, cap=2.0, relief_cap=0.5,
        burnout_weight=0.5, readiness_weight=0.3,
        preference_group=PreferenceGroup.MEETINGS,
        unit="hrs",
        templates={
            ImpactType.NEGATIVE: "Meetings took more of your day than you can comfortably absorb.",
            ImpactType.POSITIVE: "Your meeting load left room for other work.",
            ImpactType.NEUTRAL: "Your meeting load is within your comfort range.",
        },
    ),
    FactorSpec(
        key="emails_sent",
        label="Email Volume",
        category=FactorCategory.MEETINGS,
        source="work",
        metric="emails_sent",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.REFERENCE,
        reference=25.0,
        scale=10.0, cap=2.0, relief_cap=0.5,
        burnout_weight=0.2, readiness_weight=0.1,
        preference_group=PreferenceGroup.MEETINGS,
        unit="emails", precision=0,
        templates={
            ImpactType.NEGATIVE: "A heavy email load kept you reactive today.",
            ImpactType.POSITIVE: "Email traffic was light.",
            ImpactType.NEUTRAL: "Email volume was typical.",
        },
    ),
    FactorSpec(
        key="avg_response_time_minutes",
        label="Response Time",
        category=FactorCategory.MEETINGS,
        source="work",
        metric="avg_response_time_minutes",
        direction=Direction.HIGHER_IS_WORSE,
        target_source=TargetSource.NONE,
        unit="min", precision=0,
        templates={
            ImpactType.NEUTRAL: "Average response time is shown for context and is not scored.",
        },
    ),
]

FACTORS_BY_KEY: Dict[str, FactorSpec] = {spec.key: spec for spec in FACTOR_TABLE}


def get_factor(key: str) -> FactorSpec:
    """Look up a factor spec by key."""
    return FACTORS_BY_KEY[key]


def category_rank(category: FactorCategory) -> int:
    """Position of ``category`` in the tie-break order (lower wins)."""
    return CATEGORY_PRIORITY.index(category)
