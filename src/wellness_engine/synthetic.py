"""
Synthetic employee data for demos and acceptance checks.

Five archetypes describe typical wellness patterns. Static archetypes
(peak performer, moderate stress, high burnout) draw every day from one
distribution and carry the zone the engine is expected to place their
average day in. The recovering archetype moves from high burnout to peak
performance over three weeks; the variable archetype cycles between states
weekly. Neither has a single expected zone.

Generation is seeded so demo data is reproducible.
"""

import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from .models.explanations import Zone
from .models.inputs import DailyHealthMetrics, DailyWorkMetrics, PersonalBaseline
from .scoring.baselines import calculate_rolling_average


# Metric name -> (mean, standard deviation)
Distribution = Dict[str, Tuple[float, float]]

# Trailing window used to derive an archetype's baseline
BASELINE_WINDOW_DAYS = 14


@dataclass
class ArchetypeProfile:
    """Distribution of daily metrics for one kind of employee."""
    key: str
    name: str
    description: str
    health: Distribution = field(default_factory=dict)
    work: Distribution = field(default_factory=dict)
    expected_zone: Optional[Zone] = None
    # Trajectory profiles: interpolate start -> end over transition_days
    start_profile: Optional[str] = None
    end_profile: Optional[str] = None
    transition_days: int = 21
    # Oscillating profiles: cycle through pattern, cycle_days each
    pattern: Tuple[str, ...] = ()
    cycle_days: int = 7

    @property
    def is_static(self) -> bool:
        return not self.pattern and self.start_profile is None


ARCHETYPES: Dict[str, ArchetypeProfile] = {
    "peak_performer": ArchetypeProfile(
        key="peak_performer",
        name="Peak Performer",
        description="Consistently well-rested with good work-life balance",
        health={
            "resting_hr": (58, 3),
            "hrv": (55, 5),
            "sleep_hours": (7.8, 0.3),
            "sleep_quality_score": (85, 5),
            "deep_sleep_hours": (1.6, 0.2),
            "rem_sleep_hours": (1.8, 0.2),
            "steps": (9000, 1500),
            "exercise_minutes": (45, 15),
        },
        work={
            "hours_worked": (7.5, 0.5),
            "overtime_hours": (0, 0.2),
            "tasks_completed": (8, 2),
            "tasks_assigned": (7, 1),
            "meetings_attended": (3, 1),
            "emails_sent": (15, 5),
        },
        expected_zone=Zone.GREEN,
    ),
    "moderate_stress": ArchetypeProfile(
        key="moderate_stress",
        name="Moderate Stress",
        description="Moderate stress with irregular patterns",
        health={
            "resting_hr": (68, 5),
            "hrv": (42, 8),
            "sleep_hours": (6.5, 0.7),
            "sleep_quality_score": (65, 10),
            "deep_sleep_hours": (1.2, 0.3),
            "rem_sleep_hours": (1.4, 0.3),
            "steps": (6000, 2000),
            "exercise_minutes": (20, 15),
        },
        work={
            "hours_worked": (8.5, 1),
            "overtime_hours": (0.5, 0.5),
            "tasks_completed": (6, 2),
            "tasks_assigned": (7, 2),
            "meetings_attended": (5, 2),
            "emails_sent": (25, 10),
        },
        expected_zone=Zone.YELLOW,
    ),
    "high_burnout": ArchetypeProfile(
        key="high_burnout",
        name="High Burnout",
        description="High burnout risk with declining metrics",
        health={
            "resting_hr": (75, 5),
            "hrv": (32, 6),
            "sleep_hours": (5.5, 0.8),
            "sleep_quality_score": (50, 15),
            "deep_sleep_hours": (0.8, 0.3),
            "rem_sleep_hours": (1.0, 0.3),
            "steps": (4000, 1500),
            "exercise_minutes": (10, 10),
        },
        work={
            "hours_worked": (10.5, 1.5),
            "overtime_hours": (2.5, 1),
            "tasks_completed": (5, 2),
            "tasks_assigned": (10, 2),
            "meetings_attended": (7, 2),
            "emails_sent": (40, 15),
        },
        expected_zone=Zone.RED,
    ),
    "recovering": ArchetypeProfile(
        key="recovering",
        name="Recovering",
        description="Recovering from burnout, improving over time",
        start_profile="high_burnout",
        end_profile="peak_performer",
        transition_days=21,
    ),
    "variable": ArchetypeProfile(
        key="variable",
        name="Variable",
        description="Erratic patterns, fluctuates between states",
        pattern=("moderate_stress", "peak_performer", "moderate_stress", "high_burnout"),
        cycle_days=7,
    ),
}

# Population reference used when an archetype is scored against a shared
# baseline instead of its own history
POPULATION_BASELINE = {
    "sleep_hours": 7.0,
    "sleep_quality": 70,
    "hrv": 45,
    "resting_hr": 65,
    "hours_worked": 8.0,
}


def population_baseline() -> PersonalBaseline:
    """Shared reference baseline for comparing archetypes with each other."""
    return PersonalBaseline(**POPULATION_BASELINE)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _interpolate(start: Distribution, end: Distribution, progress: float) -> Distribution:
    return {
        key: (
            start[key][0] + (end[key][0] - start[key][0]) * progress,
            start[key][1] + (end[key][1] - start[key][1]) * progress,
        )
        for key in start
    }


def effective_distributions(
    profile: ArchetypeProfile,
    day_index: int,
    days: int,
) -> Tuple[Distribution, Distribution]:
    """
    Health and work distributions for ``day_index`` (0 = oldest day).

    Trajectory profiles progress from start to end over the final
    ``transition_days``; oscillating profiles switch state every
    ``cycle_days``.
    """
    if profile.start_profile and profile.end_profile:
        start = ARCHETYPES[profile.start_profile]
        end = ARCHETYPES[profile.end_profile]
        days_left = days - 1 - day_index
        progress = 1 - min(1.0, days_left / profile.transition_days)
        return (
            _interpolate(start.health, end.health, progress),
            _interpolate(start.work, end.work, progress),
        )
    if profile.pattern:
        position = (day_index // profile.cycle_days) % len(profile.pattern)
        state = ARCHETYPES[profile.pattern[position]]
        return state.health, state.work
    return profile.health, profile.work


def _health_row(health: Distribution, day: date, rng: random.Random, noise: bool) -> DailyHealthMetrics:
    def draw(key: str, low: float, high: float, digits: int = 1) -> float:
        mean, std = health[key]
        value = rng.gauss(mean, std) if noise else mean
        return round(_clamp(value, low, high), digits)

    weekend = day.weekday() >= 5 and noise
    sleep = draw("sleep_hours", 3, 12)
    if weekend:
        sleep = round(min(12.0, sleep * 1.1), 1)
    deep = draw("deep_sleep_hours", 0.3, 3)
    rem = draw("rem_sleep_hours", 0.3, 3)
    awake = round(_clamp(rng.gauss(0.3, 0.15), 0.1, 1), 1) if noise else 0.3

    return DailyHealthMetrics(
        date=day,
        sleep_hours=sleep,
        sleep_quality_score=draw("sleep_quality_score", 20, 100, 0),
        deep_sleep_hours=deep,
        rem_sleep_hours=rem,
        core_sleep_hours=round(max(0.0, sleep - deep - rem - awake), 1),
        awake_sleep_hours=awake,
        resting_hr=draw("resting_hr", 45, 100, 0),
        hrv=draw("hrv", 15, 80),
        steps=int(draw("steps", 1000, 20000, 0)),
        exercise_minutes=draw("exercise_minutes", 0, 120, 0),
    )


def _work_row(work: Distribution, day: date, rng: random.Random, noise: bool) -> DailyWorkMetrics:
    # Much less work on weekends
    factor = 0.2 if noise and day.weekday() >= 5 else 1.0

    def draw(key: str, low: float, high: float, digits: int = 1) -> float:
        mean, std = work[key]
        value = rng.gauss(mean * factor, std) if noise else mean
        return round(_clamp(value, low, high), digits)

    meetings = int(draw("meetings_attended", 0, 12, 0))
    meeting_mean = work["meetings_attended"][0] * 0.5 * factor
    meeting_hours = (
        round(_clamp(rng.gauss(meeting_mean, 0.5), 0, 8), 1) if noise else round(meeting_mean, 1)
    )
    focus = round(_clamp(rng.gauss(3 * factor, 1), 0, 8), 1) if noise else 3.0
    response = round(_clamp(rng.gauss(30, 15), 5, 180)) if noise else 30

    return DailyWorkMetrics(
        date=day,
        hours_worked=draw("hours_worked", 0, 16),
        overtime_hours=draw("overtime_hours", 0, 6),
        tasks_completed=int(draw("tasks_completed", 0, 20, 0)),
        tasks_assigned=int(draw("tasks_assigned", 0, 20, 0)),
        meetings_attended=meetings,
        meeting_hours=meeting_hours,
        emails_sent=int(draw("emails_sent", 0, 100, 0)),
        avg_response_time_minutes=response,
        focus_time_hours=focus,
    )


@dataclass
class EmployeeSeries:
    """Generated history for one archetype, oldest day first."""
    profile: ArchetypeProfile
    health: List[DailyHealthMetrics]
    work: List[DailyWorkMetrics]

    @property
    def latest(self) -> Tuple[DailyHealthMetrics, DailyWorkMetrics]:
        return self.health[-1], self.work[-1]


def generate_series(
    archetype: str,
    days: int = 30,
    end_date: Optional[date] = None,
    seed: int = 42,
) -> EmployeeSeries:
    """
    Generate ``days`` of daily metrics for an archetype.

    Args:
        archetype: Key in ARCHETYPES
        days: Number of days to generate
        end_date: Last generated day (defaults to today)
        seed: Random seed for reproducible output

    Returns:
        EmployeeSeries with health and work rows, oldest first
    """
    profile = ARCHETYPES[archetype]
    end_date = end_date or date.today()
    rng = random.Random(seed)

    health_rows = []
    work_rows = []
    for index in range(days):
        day = end_date - timedelta(days=days - 1 - index)
        health, work = effective_distributions(profile, index, days)
        health_rows.append(_health_row(health, day, rng, noise=True))
        work_rows.append(_work_row(work, day, rng, noise=True))

    return EmployeeSeries(profile=profile, health=health_rows, work=work_rows)


def mean_day(
    archetype: str,
    day: Optional[date] = None,
) -> Tuple[DailyHealthMetrics, DailyWorkMetrics]:
    """Noise-free day at an archetype's means (static archetypes only)."""
    profile = ARCHETYPES[archetype]
    if not profile.is_static:
        raise ValueError(f"{archetype} has no single mean day")
    day = day or date.today()
    rng = random.Random(0)
    return (
        _health_row(profile.health, day, rng, noise=False),
        _work_row(profile.work, day, rng, noise=False),
    )


def calculate_baseline(
    health: List[DailyHealthMetrics],
    work: List[DailyWorkMetrics],
    window: int = BASELINE_WINDOW_DAYS,
) -> PersonalBaseline:
    """
    Baseline from the trailing ``window`` days of history (oldest first).

    Metrics with fewer than three readings in the window stay unset.
    """
    recent_health = list(reversed(health))[:window]
    recent_work = list(reversed(work))[:window]

    def average(rows, attr: str, digits: int = 1) -> Optional[float]:
        value = calculate_rolling_average([getattr(r, attr) for r in rows], days=window)
        return round(value, digits) if value is not None else None

    steps = average(recent_health, "steps", 0)
    return PersonalBaseline(
        sleep_hours=average(recent_health, "sleep_hours"),
        sleep_quality=average(recent_health, "sleep_quality_score", 0),
        hrv=average(recent_health, "hrv"),
        resting_hr=average(recent_health, "resting_hr", 0),
        hours_worked=average(recent_work, "hours_worked"),
        steps=int(steps) if steps else None,
    )
