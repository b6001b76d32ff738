"""Explainable burnout and readiness scoring for employee wellness data."""

__version__ = "0.1.0"

from .exceptions import (
    WellnessEngineError,
    ValidationError,
    InvalidInputError,
    RatingOutOfRangeError,
    InsufficientDataError,
)
from .models import (
    DailyHealthMetrics,
    DailyWorkMetrics,
    PersonalBaseline,
    PersonalPreferences,
    LifeEvent,
    ScoreResult,
    Explanation,
    Factor,
    Zone,
)
from .scoring import evaluate, wellness_percentage
from .services import score_batch, EvaluationRequest, BatchResult
from .history import to_history_record, from_history_record

__all__ = [
    "__version__",
    "evaluate",
    "wellness_percentage",
    "score_batch",
    "EvaluationRequest",
    "BatchResult",
    "to_history_record",
    "from_history_record",
    "DailyHealthMetrics",
    "DailyWorkMetrics",
    "PersonalBaseline",
    "PersonalPreferences",
    "LifeEvent",
    "ScoreResult",
    "Explanation",
    "Factor",
    "Zone",
    "WellnessEngineError",
    "ValidationError",
    "InvalidInputError",
    "RatingOutOfRangeError",
    "InsufficientDataError",
]
