"""
Input records consumed by the scoring engine.

All records are immutable and validated on construction. Field names are
snake_case; the camelCase aliases used on the wire (``sleepHours``,
``restingHr`` ...) are accepted as well.

Every metric is optional. ``None`` means "not measured today" and is
excluded from scoring rather than treated as zero.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..exceptions import RatingOutOfRangeError


def check_rating(field: str, value: Optional[float], minimum: float, maximum: float) -> Optional[float]:
    """Reject a rating outside its declared scale. ``None`` passes through."""
    if value is None:
        return None
    if value < minimum or value > maximum:
        raise RatingOutOfRangeError(field, value, minimum, maximum)
    return value


class InputRecord(BaseModel):
    """Base for engine input records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary using snake_case keys."""
        return self.model_dump(mode="json")


# ============================================================================
# Daily metrics
# ============================================================================

class DailyHealthMetrics(InputRecord):
    """One employee's biometric readings for one day."""

    metric_date: Optional[date] = Field(None, alias="date")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    sleep_quality_score: Optional[float] = None  # 0-100 rating
    deep_sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    rem_sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    core_sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    awake_sleep_hours: Optional[float] = Field(None, ge=0, le=24)
    resting_hr: Optional[float] = Field(None, ge=20, le=250)
    hrv: Optional[float] = Field(None, ge=0, le=300)
    steps: Optional[int] = Field(None, ge=0)
    exercise_minutes: Optional[float] = Field(None, ge=0, le=1440)
    stress_level: Optional[float] = None  # 0-100 rating
    recovery_score: Optional[float] = None  # 0-100 rating

    @field_validator("sleep_quality_score", "stress_level", "recovery_score")
    @classmethod
    def _rating_0_100(cls, value: Optional[float], info) -> Optional[float]:
        return check_rating(info.field_name, value, 0, 100)


class DailyWorkMetrics(InputRecord):
    """One employee's workplace telemetry for one day."""

    metric_date: Optional[date] = Field(None, alias="date")
    hours_worked: Optional[float] = Field(None, ge=0, le=24)
    overtime_hours: Optional[float] = Field(None, ge=0, le=24)
    tasks_completed: Optional[int] = Field(None, ge=0)
    tasks_assigned: Optional[int] = Field(None, ge=0)
    meetings_attended: Optional[int] = Field(None, ge=0)
    meeting_hours: Optional[float] = Field(None, ge=0, le=24)
    emails_sent: Optional[int] = Field(None, ge=0)
    avg_response_time_minutes: Optional[float] = Field(None, ge=0)
    focus_time_hours: Optional[float] = Field(None, ge=0, le=24)


# ============================================================================
# Baselines and preferences
# ============================================================================

class PersonalBaseline(InputRecord):
    """Rolling "normal" values for one employee, computed upstream."""

    sleep_hours: Optional[float] = Field(None, gt=0, le=24)
    sleep_quality: Optional[float] = None  # 0-100 rating
    hrv: Optional[float] = Field(None, gt=0, le=300)
    resting_hr: Optional[float] = Field(None, ge=20, le=250)
    hours_worked: Optional[float] = Field(None, gt=0, le=24)
    steps: Optional[int] = Field(None, gt=0)

    @field_validator("sleep_quality")
    @classmethod
    def _quality_rating(cls, value: Optional[float], info) -> Optional[float]:
        return check_rating(info.field_name, value, 0, 100)


class SleepFlexibility(str, Enum):
    """How much night-to-night sleep variation a person tolerates."""
    RIGID = "rigid"
    MODERATE = "moderate"
    FLEXIBLE = "flexible"


class Chronotype(str, Enum):
    """When a person does their best work."""
    EARLY_BIRD = "early_bird"
    NEUTRAL = "neutral"
    NIGHT_OWL = "night_owl"


class SocialEnergyType(str, Enum):
    """How meetings and collaboration affect a person's energy."""
    INTROVERT = "introvert"
    AMBIVERT = "ambivert"
    EXTROVERT = "extrovert"


NEUTRAL_WEIGHT = 50


class PersonalPreferences(InputRecord):
    """
    What "normal" means to one employee.

    The five weights are relative multipliers in [0, 100]; 50 leaves a
    factor group unchanged, 0 silences it and 100 doubles it. The defaults
    describe an employee who has not completed setup.
    """

    ideal_sleep_hours: float = Field(7.5, gt=0, le=24)
    ideal_work_hours: float = Field(8.0, gt=0, le=24)
    ideal_exercise_minutes: float = Field(30, ge=0, le=1440)
    max_meeting_hours_daily: float = Field(4.0, gt=0, le=24)
    sleep_flexibility: SleepFlexibility = SleepFlexibility.MODERATE
    chronotype: Chronotype = Chronotype.NEUTRAL
    social_energy_type: SocialEnergyType = SocialEnergyType.AMBIVERT
    weight_sleep: float = NEUTRAL_WEIGHT
    weight_exercise: float = NEUTRAL_WEIGHT
    weight_workload: float = NEUTRAL_WEIGHT
    weight_meetings: float = NEUTRAL_WEIGHT
    weight_heart_metrics: float = NEUTRAL_WEIGHT
    setup_completed: bool = False

    @field_validator(
        "weight_sleep",
        "weight_exercise",
        "weight_workload",
        "weight_meetings",
        "weight_heart_metrics",
    )
    @classmethod
    def _weight_rating(cls, value: float, info) -> float:
        return check_rating(info.field_name, value, 0, 100)


# ============================================================================
# Life events
# ============================================================================

class LifeEvent(InputRecord):
    """
    A time-bounded circumstance that temporarily shifts expectations.

    Adjustments are percentages: ``sleep_adjustment=-30`` means expect 30%
    less sleep than usual. An event without ``end_date`` is ongoing until
    it is closed.
    """

    event_type: str = "custom"
    label: str
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    sleep_adjustment: float = Field(0, ge=-100, le=100)
    work_adjustment: float = Field(0, ge=-100, le=100)
    exercise_adjustment: float = Field(0, ge=-100, le=100)
    stress_tolerance_adjustment: float = Field(0, ge=-100, le=100)

    @model_validator(mode="after")
    def _check_window(self) -> "LifeEvent":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def is_active_on(self, day: date) -> bool:
        """Whether the event applies on ``day``."""
        if not self.is_active or self.start_date > day:
            return False
        return self.end_date is None or self.end_date >= day

    @classmethod
    def from_template(
        cls,
        event_type: str,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> "LifeEvent":
        """Create an event pre-filled from ``LIFE_EVENT_TEMPLATES``."""
        template = LIFE_EVENT_TEMPLATES.get(event_type)
        if template is None:
            raise KeyError(f"Unknown life event type: {event_type}")
        return cls(
            event_type=event_type,
            label=template["label"],
            start_date=start_date,
            end_date=end_date,
            sleep_adjustment=template["sleep"],
            work_adjustment=template["work"],
            exercise_adjustment=template["exercise"],
            stress_tolerance_adjustment=template["stress_tolerance"],
        )


# Common circumstances with their suggested adjustments
LIFE_EVENT_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "new_baby": {
        "label": "New Baby", "category": "family", "suggested_duration_days": 90,
        "sleep": -30, "work": -20, "exercise": -40, "stress_tolerance": -30,
    },
    "moving": {
        "label": "Moving/Relocating", "category": "life_change", "suggested_duration_days": 30,
        "sleep": -20, "work": -10, "exercise": -30, "stress_tolerance": -20,
    },
    "major_deadline": {
        "label": "Major Deadline", "category": "work", "suggested_duration_days": 14,
        "sleep": -10, "work": 20, "exercise": -20, "stress_tolerance": -20,
    },
    "health_issue": {
        "label": "Health Issue", "category": "health", "suggested_duration_days": None,
        "sleep": -20, "work": -30, "exercise": -50, "stress_tolerance": -30,
    },
    "family_care": {
        "label": "Caring for Family", "category": "family", "suggested_duration_days": None,
        "sleep": -20, "work": -20, "exercise": -30, "stress_tolerance": -20,
    },
    "bereavement": {
        "label": "Loss/Bereavement", "category": "life_change", "suggested_duration_days": 30,
        "sleep": -30, "work": -40, "exercise": -40, "stress_tolerance": -40,
    },
    "wedding_planning": {
        "label": "Wedding Planning", "category": "life_change", "suggested_duration_days": 60,
        "sleep": -10, "work": 0, "exercise": -10, "stress_tolerance": -10,
    },
    "new_job_role": {
        "label": "New Job/Role", "category": "work", "suggested_duration_days": 30,
        "sleep": -10, "work": 10, "exercise": 0, "stress_tolerance": -15,
    },
    "vacation_recovery": {
        "label": "Post-Vacation", "category": "recovery", "suggested_duration_days": 7,
        "sleep": -10, "work": -10, "exercise": -10, "stress_tolerance": 0,
    },
    "illness_recovery": {
        "label": "Recovering from Illness", "category": "health", "suggested_duration_days": 14,
        "sleep": -20, "work": -30, "exercise": -40, "stress_tolerance": -20,
    },
}
