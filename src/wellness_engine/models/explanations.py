"""
Explanation models for transparent wellness scores.

These models carry the reasoning behind every score: which factors pushed
burnout risk up or down, by how much, and what the employee and their
manager can do about it. They serialize losslessly to plain dictionaries
so a result can be stored as JSON and restored later.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class ImpactType(str, Enum):
    """Impact direction of a factor on the employee's wellbeing."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Zone(str, Enum):
    """Discrete burnout-risk category."""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


class ScoreStatus(str, Enum):
    """Whether the engine could score the day."""
    SCORED = "scored"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass
class Factor:
    """
    A single named contributor to the scores.

    ``burnout_contribution`` and ``readiness_contribution`` are in score
    points; a negative factor raised burnout or lowered readiness.
    """
    key: str  # e.g. "sleep_hours"
    name: str  # e.g. "Sleep Duration"
    category: str  # sleep, workload, stress, exercise, meetings
    impact: ImpactType
    value: str  # e.g. "5.5 hrs vs 7.0 hrs baseline"
    description: str
    weight: float  # effective weight used for this factor
    burnout_contribution: float = 0.0
    readiness_contribution: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "key": self.key,
            "name": self.name,
            "category": self.category,
            "impact": self.impact.value,
            "value": self.value,
            "description": self.description,
            "weight": self.weight,
            "burnout_contribution": self.burnout_contribution,
            "readiness_contribution": self.readiness_contribution,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Factor":
        return cls(
            key=data["key"],
            name=data["name"],
            category=data["category"],
            impact=ImpactType(data["impact"]),
            value=data["value"],
            description=data["description"],
            weight=data["weight"],
            burnout_contribution=data.get("burnout_contribution", 0.0),
            readiness_contribution=data.get("readiness_contribution", 0.0),
        )


@dataclass
class Recommendations:
    """Suggested actions for the employee and for their manager."""
    personal: List[str] = field(default_factory=list)
    leadership: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personal": list(self.personal),
            "leadership": list(self.leadership),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recommendations":
        return cls(
            personal=list(data.get("personal", [])),
            leadership=list(data.get("leadership", [])),
        )


@dataclass
class LifeEventNote:
    """An active life event as shown alongside the explanation."""
    label: str
    impact: str  # e.g. "Expected sleep lowered 30%"

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "impact": self.impact}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifeEventNote":
        return cls(label=data["label"], impact=data["impact"])


@dataclass
class ExplanationContext:
    """Informational annotations that do not affect the scores."""
    days_since_rest_day: Optional[int] = None
    active_life_events: List[LifeEventNote] = field(default_factory=list)
    calibration_notes: List[str] = field(default_factory=list)
    personalized: bool = False
    chronotype: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days_since_rest_day": self.days_since_rest_day,
            "active_life_events": [e.to_dict() for e in self.active_life_events],
            "calibration_notes": list(self.calibration_notes),
            "personalized": self.personalized,
            "chronotype": self.chronotype,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExplanationContext":
        return cls(
            days_since_rest_day=data.get("days_since_rest_day"),
            active_life_events=[
                LifeEventNote.from_dict(e) for e in data.get("active_life_events", [])
            ],
            calibration_notes=list(data.get("calibration_notes", [])),
            personalized=data.get("personalized", False),
            chronotype=data.get("chronotype"),
        )


@dataclass
class Explanation:
    """
    Complete explanation of one scored day.

    Factors are ordered largest driver first.
    """
    zone: Zone
    burnout_score: float
    readiness_score: float
    factors: List[Factor]
    recommendations: Recommendations
    context: ExplanationContext = field(default_factory=ExplanationContext)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "zone": self.zone.value,
            "burnout_score": self.burnout_score,
            "readiness_score": self.readiness_score,
            "factors": [f.to_dict() for f in self.factors],
            "recommendations": self.recommendations.to_dict(),
            "context": self.context.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Explanation":
        return cls(
            zone=Zone(data["zone"]),
            burnout_score=data["burnout_score"],
            readiness_score=data["readiness_score"],
            factors=[Factor.from_dict(f) for f in data.get("factors", [])],
            recommendations=Recommendations.from_dict(data.get("recommendations", {})),
            context=ExplanationContext.from_dict(data.get("context", {})),
        )

    def get_positive_factors(self) -> List[Factor]:
        """Get all factors with positive impact."""
        return [f for f in self.factors if f.impact == ImpactType.POSITIVE]

    def get_negative_factors(self) -> List[Factor]:
        """Get all factors with negative impact."""
        return [f for f in self.factors if f.impact == ImpactType.NEGATIVE]

    def get_key_driver(self) -> Optional[Factor]:
        """Get the most influential factor (if any)."""
        return self.factors[0] if self.factors else None


@dataclass
class ScoreResult:
    """
    Engine output for one employee-day.

    The insufficient-data variant carries no scores, zone or explanation so
    callers can tell "no data today" apart from "doing fine".
    """
    status: ScoreStatus
    burnout_score: Optional[float] = None
    readiness_score: Optional[float] = None
    zone: Optional[Zone] = None
    explanation: Optional[Explanation] = None
    as_of: Optional[date] = None

    @property
    def is_scored(self) -> bool:
        return self.status == ScoreStatus.SCORED

    @classmethod
    def insufficient_data(cls, as_of: Optional[date] = None) -> "ScoreResult":
        return cls(status=ScoreStatus.INSUFFICIENT_DATA, as_of=as_of)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value,
            "burnout_score": self.burnout_score,
            "readiness_score": self.readiness_score,
            "zone": self.zone.value if self.zone else None,
            "explanation": self.explanation.to_dict() if self.explanation else None,
            "as_of": self.as_of.isoformat() if self.as_of else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreResult":
        zone = data.get("zone")
        explanation = data.get("explanation")
        as_of = data.get("as_of")
        return cls(
            status=ScoreStatus(data["status"]),
            burnout_score=data.get("burnout_score"),
            readiness_score=data.get("readiness_score"),
            zone=Zone(zone) if zone else None,
            explanation=Explanation.from_dict(explanation) if explanation else None,
            as_of=date.fromisoformat(as_of) if as_of else None,
        )
