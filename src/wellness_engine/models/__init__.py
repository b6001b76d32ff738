"""Input records and output models for the scoring engine."""

from .inputs import (
    DailyHealthMetrics,
    DailyWorkMetrics,
    PersonalBaseline,
    PersonalPreferences,
    LifeEvent,
    LIFE_EVENT_TEMPLATES,
    SleepFlexibility,
    Chronotype,
    SocialEnergyType,
)
from .explanations import (
    ImpactType,
    Zone,
    ScoreStatus,
    Factor,
    Recommendations,
    LifeEventNote,
    ExplanationContext,
    Explanation,
    ScoreResult,
)

__all__ = [
    "DailyHealthMetrics",
    "DailyWorkMetrics",
    "PersonalBaseline",
    "PersonalPreferences",
    "LifeEvent",
    "LIFE_EVENT_TEMPLATES",
    "SleepFlexibility",
    "Chronotype",
    "SocialEnergyType",
    "ImpactType",
    "Zone",
    "ScoreStatus",
    "Factor",
    "Recommendations",
    "LifeEventNote",
    "ExplanationContext",
    "Explanation",
    "ScoreResult",
]
