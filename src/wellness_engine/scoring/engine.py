"""
Scoring engine entry point.

Runs the full pipeline for one employee-day:

    personalization -> baseline resolution -> deviations -> aggregation
    -> explanation

The engine is pure and synchronous: the same inputs always give the same
result and nothing is stored between calls.
"""

import logging
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, get_settings
from ..exceptions import InvalidInputError
from ..models.explanations import ScoreResult, ScoreStatus
from ..models.inputs import (
    DailyHealthMetrics,
    DailyWorkMetrics,
    LifeEvent,
    PersonalBaseline,
    PersonalPreferences,
)
from .aggregate import aggregate_scores, determine_zone
from .baselines import resolve_targets
from .deviation import compute_contributions
from .explain import synthesize_explanation
from .personalization import apply_personalization


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_record(
    model_cls: Type[ModelT],
    value: Union[ModelT, Mapping[str, Any], None],
    record: str,
) -> Optional[ModelT]:
    """
    Accept a model instance or a plain mapping and return a validated model.

    Raises:
        InvalidInputError: If the mapping fails validation or the value has
            an unsupported type
        RatingOutOfRangeError: If a rating is outside its scale
    """
    if value is None or isinstance(value, model_cls):
        return value
    if isinstance(value, Mapping):
        try:
            return model_cls.model_validate(dict(value))
        except PydanticValidationError as exc:
            raise InvalidInputError.from_pydantic(record, exc) from exc
    raise InvalidInputError(
        f"Expected {record} record, got {type(value).__name__}",
        record=record,
    )


def coerce_life_events(
    events: Optional[Iterable[Union[LifeEvent, Mapping[str, Any]]]],
) -> List[LifeEvent]:
    if not events:
        return []
    return [coerce_record(LifeEvent, event, "life_event") for event in events]


def coerce_work_history(
    records: Optional[Iterable[Union[DailyWorkMetrics, Mapping[str, Any]]]],
) -> List[DailyWorkMetrics]:
    if not records:
        return []
    return [coerce_record(DailyWorkMetrics, record, "work_history") for record in records]


def evaluate(
    health: Union[DailyHealthMetrics, Mapping[str, Any], None],
    work: Union[DailyWorkMetrics, Mapping[str, Any], None],
    baseline: Union[PersonalBaseline, Mapping[str, Any], None] = None,
    preferences: Union[PersonalPreferences, Mapping[str, Any], None] = None,
    life_events: Optional[Iterable[Union[LifeEvent, Mapping[str, Any]]]] = None,
    as_of: Optional[date] = None,
    work_history: Optional[Iterable[Union[DailyWorkMetrics, Mapping[str, Any]]]] = None,
    settings: Optional[Settings] = None,
) -> ScoreResult:
    """
    Score one employee-day.

    Args:
        health: Biometric readings for the day
        work: Workplace telemetry for the day
        baseline: Rolling personal baseline
        preferences: Personal preferences, None if never set up
        life_events: Known life events; only those active on the day apply
        as_of: Day being scored; defaults to the date on the metric records
        work_history: Recent work records, used only for rest-day context
        settings: Engine settings (defaults to cached settings)

    Returns:
        ScoreResult; the insufficient-data variant when neither record
        holds a metric. Metrics without a baseline are listed unscored.

    Raises:
        InvalidInputError: If an input record is malformed
        RatingOutOfRangeError: If a rating is outside its declared scale
    """
    settings = settings or get_settings()

    health = coerce_record(DailyHealthMetrics, health, "health")
    work = coerce_record(DailyWorkMetrics, work, "work")
    baseline = coerce_record(PersonalBaseline, baseline, "baseline")
    preferences = coerce_record(PersonalPreferences, preferences, "preferences")
    events = coerce_life_events(life_events)
    history = coerce_work_history(work_history)

    if as_of is None:
        as_of = (health.metric_date if health else None) or (work.metric_date if work else None)

    personalization = apply_personalization(
        baseline, preferences, events, as_of=as_of, settings=settings
    )
    targets = resolve_targets(personalization)
    contributions = compute_contributions(health, work, targets, personalization.weights)

    if not contributions:
        logger.debug("No metrics recorded for %s, returning insufficient data", as_of)
        return ScoreResult.insufficient_data(as_of)
    if not any(c.scored for c in contributions):
        logger.debug("No baselines for the metrics recorded on %s, scoring neutral", as_of)

    scores = aggregate_scores(contributions, settings)
    zone = determine_zone(scores.burnout)
    explanation = synthesize_explanation(
        contributions,
        scores,
        zone,
        personalization,
        work_history=history,
        as_of=as_of,
        settings=settings,
    )

    logger.debug(
        "Scored %s: burnout=%.1f readiness=%.1f zone=%s factors=%d",
        as_of,
        scores.burnout,
        scores.readiness,
        zone.value,
        len(explanation.factors),
    )

    return ScoreResult(
        status=ScoreStatus.SCORED,
        burnout_score=scores.burnout,
        readiness_score=scores.readiness,
        zone=zone,
        explanation=explanation,
        as_of=as_of,
    )
