"""
Scoring API Routes

Score one employee-day, a whole organisation, or just the wellness view.
Nothing is persisted; callers own storage of the returned results.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...config import Settings, get_settings
from ...models.inputs import LIFE_EVENT_TEMPLATES
from ...scoring.aggregate import wellness_percentage
from ...scoring.engine import evaluate
from ...services.batch import EvaluationRequest, score_batch
from ..schemas import (
    BatchScoreRequest,
    BatchScoreResponse,
    LifeEventTemplateResponse,
    ScoreRequest,
    WellnessResponse,
)


router = APIRouter()


def _evaluate(request: ScoreRequest, settings: Settings):
    return evaluate(
        request.health,
        request.work,
        baseline=request.baseline,
        preferences=request.preferences,
        life_events=request.life_events,
        as_of=request.as_of,
        work_history=request.work_history,
        settings=settings,
    )


@router.post("/scores")
def score_day(
    request: ScoreRequest,
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Score one employee-day and return the full explanation."""
    return _evaluate(request, settings).to_dict()


@router.post("/scores/batch", response_model=BatchScoreResponse)
def score_organisation(
    request: BatchScoreRequest,
    settings: Settings = Depends(get_settings),
) -> BatchScoreResponse:
    """Score many employees at once; per-employee errors are reported, not raised."""
    batch = score_batch(
        [
            EvaluationRequest(
                employee_id=item.employee_id,
                health=item.health,
                work=item.work,
                baseline=item.baseline,
                preferences=item.preferences,
                life_events=item.life_events,
                as_of=item.as_of,
                work_history=item.work_history,
            )
            for item in request.employees
        ],
        max_workers=request.max_workers,
        settings=settings,
    )
    data = batch.to_dict()
    return BatchScoreResponse(
        results=data["results"],
        errors=data["errors"],
        zone_counts=batch.zone_counts(),
    )


@router.post("/scores/wellness", response_model=WellnessResponse)
def score_wellness(
    request: ScoreRequest,
    settings: Settings = Depends(get_settings),
) -> WellnessResponse:
    """Score a day and return only the wellness percentage view."""
    result = _evaluate(request, settings)
    return WellnessResponse(
        status=result.status.value,
        wellness_percentage=wellness_percentage(result),
        burnout_score=result.burnout_score,
        zone=result.zone.value if result.zone else None,
        as_of=result.as_of,
    )


@router.get("/life-event-templates", response_model=List[LifeEventTemplateResponse])
def list_life_event_templates() -> List[LifeEventTemplateResponse]:
    """List the built-in life event templates."""
    return [
        LifeEventTemplateResponse(
            event_type=event_type,
            label=template["label"],
            category=template["category"],
            suggested_duration_days=template["suggested_duration_days"],
            sleep_adjustment=template["sleep"],
            work_adjustment=template["work"],
            exercise_adjustment=template["exercise"],
            stress_tolerance_adjustment=template["stress_tolerance"],
        )
        for event_type, template in LIFE_EVENT_TEMPLATES.items()
    ]
