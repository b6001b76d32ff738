"""
Recommendation policy.

Recommendations are chosen from a declarative rule table keyed by
``(zone, dominant negative category)``. A ``None`` category is the zone's
fallback, used when no factor is weighing on the person or the category has
no dedicated rule. Personalization lines (life events, chronotype, social
energy, stated ideals) are appended afterwards and the lists are capped.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models.explanations import Factor, ImpactType, Recommendations, Zone
from ..models.inputs import Chronotype, SocialEnergyType
from .factors import FactorCategory
from .personalization import PersonalizationResult


MAX_PERSONAL = 3
MAX_LEADERSHIP = 2


@dataclass(frozen=True)
class RecommendationRule:
    personal: Tuple[str, ...]
    leadership: Tuple[str, ...]


RECOMMENDATION_RULES: Dict[Tuple[Zone, Optional[FactorCategory]], RecommendationRule] = {
    # ------------------------------------------------------------------- red
    (Zone.RED, FactorCategory.SLEEP): RecommendationRule(
        personal=(
            "Make sleep the priority tonight: set a bedtime alarm and keep screens out of the bedroom.",
            "Take short breaks every 90 minutes to prevent mental fatigue.",
        ),
        leadership=(
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
            "PROTECT: Avoid early or late meetings until sleep recovers.",
        ),
    ),
    (Zone.RED, FactorCategory.WORKLOAD): RecommendationRule(
        personal=(
            "Log off at a fixed time today and leave non-urgent work for tomorrow.",
            "Take short breaks every 90 minutes to prevent mental fatigue.",
        ),
        leadership=(
            "DIVERSION: Reassign non-critical tasks to reduce workload by 20-30%.",
            "PROTECT: Shield from new project requests until recovery.",
        ),
    ),
    (Zone.RED, FactorCategory.STRESS): RecommendationRule(
        personal=(
            "Your body is showing signs of strain; plan a lighter day and a proper rest evening.",
            "Try a short breathing or mindfulness session between tasks.",
        ),
        leadership=(
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
            "PROTECT: Shield from new project requests until recovery.",
        ),
    ),
    (Zone.RED, FactorCategory.EXERCISE): RecommendationRule(
        personal=(
            "A 20-minute walk today will help both recovery and focus.",
            "Take short breaks every 90 minutes to prevent mental fatigue.",
        ),
        leadership=(
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
            "FLEXIBILITY: Encourage time away from the desk during the day.",
        ),
    ),
    (Zone.RED, FactorCategory.MEETINGS): RecommendationRule(
        personal=(
            "Decline or shorten meetings that don't need you today.",
            "Block quiet time on your calendar to recharge between meetings.",
        ),
        leadership=(
            "MEETINGS: Cut recurring meetings and make attendance optional where possible.",
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
        ),
    ),
    (Zone.RED, None): RecommendationRule(
        personal=(
            "Take short breaks every 90 minutes to prevent mental fatigue.",
            "Consider using the wellness resources available to you.",
        ),
        leadership=(
            "SUPPORT: Schedule a 1:1 check-in to discuss priorities.",
            "PROTECT: Shield from new project requests until recovery.",
        ),
    ),
    # ---------------------------------------------------------------- yellow
    (Zone.YELLOW, FactorCategory.SLEEP): RecommendationRule(
        personal=(
            "Focus on a consistent sleep schedule this week.",
        ),
        leadership=(
            "MONITOR: Keep standard workload, watch for trend changes.",
        ),
    ),
    (Zone.YELLOW, FactorCategory.WORKLOAD): RecommendationRule(
        personal=(
            "Plan tomorrow's priorities before you log off so the day ends on time.",
        ),
        leadership=(
            "BALANCE: Review upcoming deadlines and rebalance where possible.",
        ),
    ),
    (Zone.YELLOW, FactorCategory.STRESS): RecommendationRule(
        personal=(
            "Build a short recovery break into your afternoon.",
        ),
        leadership=(
            "CHECK-IN: Brief weekly sync to gauge wellbeing.",
        ),
    ),
    (Zone.YELLOW, FactorCategory.EXERCISE): RecommendationRule(
        personal=(
            "Fit some movement into your day, even a short walk between meetings.",
        ),
        leadership=(
            "MONITOR: Keep standard workload, watch for trend changes.",
        ),
    ),
    (Zone.YELLOW, FactorCategory.MEETINGS): RecommendationRule(
        personal=(
            "Protect at least one meeting-free block tomorrow.",
        ),
        leadership=(
            "MEETINGS: Check whether every recurring meeting still needs this person.",
        ),
    ),
    (Zone.YELLOW, None): RecommendationRule(
        personal=(
            "Maintain your current routine and monitor trends.",
        ),
        leadership=(
            "MONITOR: Keep standard workload, watch for trend changes.",
            "BALANCE: Ensure mix of challenging and routine tasks.",
        ),
    ),
    # ----------------------------------------------------------------- green
    (Zone.GREEN, FactorCategory.SLEEP): RecommendationRule(
        personal=(
            "You're in good shape; keep an eye on your sleep so it stays that way.",
        ),
        leadership=(
            "OPPORTUNITY: Assign high-impact, challenging projects.",
        ),
    ),
    (Zone.GREEN, None): RecommendationRule(
        personal=(
            "This is a great time to tackle challenging projects.",
            "Maintain your current wellness routine - it's working!",
        ),
        leadership=(
            "OPPORTUNITY: Assign high-impact, challenging projects.",
            "RECOGNITION: Acknowledge their strong performance state.",
        ),
    ),
}


def dominant_negative_category(factors: List[Factor]) -> Optional[FactorCategory]:
    """Category of the strongest negative factor. Factors must be ranked."""
    for factor in factors:
        if factor.impact == ImpactType.NEGATIVE:
            return FactorCategory(factor.category)
    return None


def lookup_rule(zone: Zone, category: Optional[FactorCategory]) -> RecommendationRule:
    """Find the rule for ``(zone, category)``, falling back to the zone default."""
    return RECOMMENDATION_RULES.get((zone, category)) or RECOMMENDATION_RULES[(zone, None)]


def _personal_extras(
    zone: Zone,
    category: Optional[FactorCategory],
    personalization: PersonalizationResult,
) -> List[str]:
    lines = []
    event_label = personalization.primary_event_label()
    preferences = personalization.preferences

    if event_label:
        if zone == Zone.GREEN:
            lines.append(f"You're managing {event_label} well; keep protecting what's working.")
        else:
            lines.append(
                f"During {event_label}, focus on essentials and be gentle with yourself."
            )

    if preferences is None:
        return lines

    if zone != Zone.GREEN and category is FactorCategory.SLEEP:
        lines.append(
            f"Aim for your ideal of {preferences.ideal_sleep_hours:g} hours of sleep tonight."
        )
    if zone != Zone.GREEN and category is FactorCategory.WORKLOAD:
        lines.append(
            f"Try to keep tomorrow close to your ideal {preferences.ideal_work_hours:g}-hour day."
        )

    if preferences.chronotype == Chronotype.NIGHT_OWL:
        lines.append(
            "As a night owl, protect your evening productivity hours."
            if zone != Zone.GREEN
            else "Schedule your creative work in the evening when you peak."
        )
    elif preferences.chronotype == Chronotype.EARLY_BIRD:
        lines.append(
            "As an early bird, prioritize your most important work in the morning."
            if zone != Zone.GREEN
            else "Tackle your hardest problems in the morning."
        )

    if preferences.social_energy_type == SocialEnergyType.INTROVERT and zone != Zone.GREEN:
        lines.append("Block quiet time on your calendar to recharge between meetings.")
    elif preferences.social_energy_type == SocialEnergyType.EXTROVERT and zone == Zone.GREEN:
        lines.append("Great time for collaborative work and team projects.")

    return lines


def _leadership_extras(
    zone: Zone,
    personalization: PersonalizationResult,
) -> List[str]:
    lines = []
    event_label = personalization.primary_event_label()
    preferences = personalization.preferences

    if event_label and zone != Zone.GREEN:
        lines.append(f'CONTEXT: Employee is experiencing "{event_label}" - expectations adjusted.')
    if (
        preferences is not None
        and preferences.social_energy_type == SocialEnergyType.INTROVERT
        and zone == Zone.RED
    ):
        lines.append("MEETINGS: Reduce meeting load - this person recharges with alone time.")
    return lines


def _merge(base: Tuple[str, ...], extras: List[str], limit: int) -> List[str]:
    """Keep the first base line, then personalization, then remaining base lines."""
    ordered = list(base[:1]) + extras + list(base[1:])
    merged: List[str] = []
    for line in ordered:
        if line not in merged:
            merged.append(line)
    return merged[:limit]


def generate_recommendations(
    zone: Zone,
    factors: List[Factor],
    personalization: PersonalizationResult,
) -> Recommendations:
    """
    Build recommendations for a scored day.

    Args:
        zone: Zone of the day
        factors: Factors ranked largest driver first
        personalization: Personalization applied to this evaluation

    Returns:
        Recommendations with 1-3 personal and 1-2 leadership lines
    """
    category = dominant_negative_category(factors)
    rule = lookup_rule(zone, category)
    return Recommendations(
        personal=_merge(rule.personal, _personal_extras(zone, category, personalization), MAX_PERSONAL),
        leadership=_merge(rule.leadership, _leadership_extras(zone, personalization), MAX_LEADERSHIP),
    )
