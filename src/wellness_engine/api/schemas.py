"""
Request and response schemas for the scoring API.

Metric records are accepted as plain objects and validated by the engine
itself, so malformed records and out-of-range ratings are reported with the
engine's error codes instead of a generic 422.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ScoreRequest(BaseModel):
    """Inputs for scoring one employee-day."""
    health: Optional[Dict[str, Any]] = None
    work: Optional[Dict[str, Any]] = None
    baseline: Optional[Dict[str, Any]] = None
    preferences: Optional[Dict[str, Any]] = None
    life_events: List[Dict[str, Any]] = Field(default_factory=list)
    as_of: Optional[date] = None
    work_history: List[Dict[str, Any]] = Field(default_factory=list)


class BatchScoreItem(ScoreRequest):
    """One employee in a batch request."""
    employee_id: str = Field(..., min_length=1)


class BatchScoreRequest(BaseModel):
    """Organisation-wide scoring request."""
    employees: List[BatchScoreItem] = Field(..., min_length=1)
    max_workers: Optional[int] = Field(None, ge=1, le=64)


class BatchScoreResponse(BaseModel):
    """Batch results keyed by employee id."""
    results: Dict[str, Dict[str, Any]]
    errors: Dict[str, Dict[str, Any]]
    zone_counts: Dict[str, int]


class WellnessResponse(BaseModel):
    """Employee-facing wellness view of a scored day."""
    status: str
    wellness_percentage: Optional[float] = None
    burnout_score: Optional[float] = None
    zone: Optional[str] = None
    as_of: Optional[date] = None


class LifeEventTemplateResponse(BaseModel):
    """A life event template with its suggested adjustments."""
    event_type: str
    label: str
    category: str
    suggested_duration_days: Optional[int] = None
    sleep_adjustment: float
    work_adjustment: float
    exercise_adjustment: float
    stress_tolerance_adjustment: float
