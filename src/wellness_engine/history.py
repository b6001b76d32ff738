"""
Zone history records.

Converts a ScoreResult to the flat row shape stored by the surrounding
application (one row per employee-day, explanation as a JSON document) and
back again.
"""

import json
from datetime import date
from typing import Any, Dict, Optional, Union

from .exceptions import InsufficientDataError, ValidationError
from .models.explanations import Explanation, ScoreResult, ScoreStatus, Zone


def to_history_record(
    result: ScoreResult,
    employee_id: str,
    day: date,
    previous_zone: Optional[Union[Zone, str]] = None,
) -> Dict[str, Any]:
    """
    Flatten a scored result into a history row.

    Args:
        result: Scored result for the day
        employee_id: Employee the result belongs to
        day: Day the result describes
        previous_zone: Zone recorded for the previous day, if any

    Returns:
        Dictionary with zone-change tracking and the serialized explanation

    Raises:
        InsufficientDataError: If the result was not scored
    """
    if not result.is_scored:
        raise InsufficientDataError(
            "Cannot record history for a day without a score",
            details={"date": day.isoformat()},
        )

    previous = Zone(previous_zone) if previous_zone is not None else None
    return {
        "employee_id": employee_id,
        "date": day.isoformat(),
        "zone": result.zone.value,
        "previous_zone": previous.value if previous else None,
        "zone_changed": previous is not None and previous != result.zone,
        "burnout_score": result.burnout_score,
        "readiness_score": result.readiness_score,
        "explanation": json.dumps(result.explanation.to_dict()),
    }


def from_history_record(record: Dict[str, Any]) -> ScoreResult:
    """Restore a ScoreResult from a history row."""
    try:
        explanation_data = record["explanation"]
        if isinstance(explanation_data, str):
            explanation_data = json.loads(explanation_data)
        return ScoreResult(
            status=ScoreStatus.SCORED,
            burnout_score=record["burnout_score"],
            readiness_score=record["readiness_score"],
            zone=Zone(record["zone"]),
            explanation=Explanation.from_dict(explanation_data),
            as_of=date.fromisoformat(record["date"]),
        )
    except (KeyError, ValueError, TypeError) as exc:
        raise ValidationError(f"Malformed history record: {exc}") from exc
