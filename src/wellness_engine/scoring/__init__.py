"""Scoring pipeline: personalization, baselines, deviations, aggregation, explanation."""

from .aggregate import aggregate_scores, determine_zone, wellness_percentage
from .baselines import BaselineTarget, DirectionIndicator, calculate_direction, resolve_targets
from .deviation import FactorContribution, calculate_deviation, compute_contributions
from .engine import evaluate
from .factors import CATEGORY_PRIORITY, FACTOR_TABLE, FactorCategory, FactorSpec
from .personalization import PersonalizationResult, apply_personalization
from .recommendations import RECOMMENDATION_RULES, generate_recommendations

__all__ = [
    "evaluate",
    "apply_personalization",
    "PersonalizationResult",
    "resolve_targets",
    "BaselineTarget",
    "calculate_direction",
    "DirectionIndicator",
    "calculate_deviation",
    "compute_contributions",
    "FactorContribution",
    "aggregate_scores",
    "determine_zone",
    "wellness_percentage",
    "generate_recommendations",
    "RECOMMENDATION_RULES",
    "FACTOR_TABLE",
    "FactorSpec",
    "FactorCategory",
    "CATEGORY_PRIORITY",
]
