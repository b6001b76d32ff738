"""Score aggregation and zone classification."""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..config import Settings, get_settings
from ..models.explanations import ScoreResult, Zone
from .deviation import FactorContribution


NEUTRAL_SCORE = 50.0

# Zone thresholds on the burnout score
RED_THRESHOLD = 70.0
YELLOW_THRESHOLD = 40.0


@dataclass
class AggregateScores:
    """Final scores for a day."""
    burnout: float
    readiness: float
    burnout_sum: float
    readiness_sum: float


def _clamp_score(value: float) -> float:
    return round(max(0.0, min(100.0, value)), 1)


def aggregate_scores(
    contributions: Iterable[FactorContribution],
    settings: Optional[Settings] = None,
) -> AggregateScores:
    """
    Combine factor contributions into burnout and readiness scores.

    Both start at a neutral 50 and move by the summed contributions times the
    configured scaling, clamped to [0, 100] and rounded to one decimal.
    """
    settings = settings or get_settings()
    contributions = list(contributions)
    burnout_sum = sum(c.burnout for c in contributions)
    readiness_sum = sum(c.readiness for c in contributions)

    return AggregateScores(
        burnout=_clamp_score(NEUTRAL_SCORE + burnout_sum * settings.score_scaling),
        readiness=_clamp_score(NEUTRAL_SCORE + readiness_sum * settings.readiness_scaling),
        burnout_sum=burnout_sum,
        readiness_sum=readiness_sum,
    )


def determine_zone(burnout_score: float) -> Zone:
    """Map a burnout score to its zone (>= 70 red, >= 40 yellow, else green)."""
    if burnout_score >= RED_THRESHOLD:
        return Zone.RED
    if burnout_score >= YELLOW_THRESHOLD:
        return Zone.YELLOW
    return Zone.GREEN


def wellness_percentage(result: Union[ScoreResult, float]) -> Optional[float]:
    """
    Wellness view shown to employees: the inverse of burnout risk.

    Accepts a ScoreResult or a raw burnout score. Returns None for an
    unscored day.
    """
    burnout = result.burnout_score if isinstance(result, ScoreResult) else result
    if burnout is None:
        return None
    return round(100.0 - burnout, 1)
