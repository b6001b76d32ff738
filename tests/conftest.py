"""Shared fixtures for wellness engine tests."""

from datetime import date

import pytest

from wellness_engine.config import Settings
from wellness_engine.models.inputs import (
    DailyHealthMetrics,
    DailyWorkMetrics,
    LifeEvent,
    PersonalBaseline,
    PersonalPreferences,
)


SCORE_DAY = date(2026, 3, 10)


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def score_day():
    return SCORE_DAY


# ============================================================================
# Archetype scenarios
# ============================================================================

@pytest.fixture
def green_health():
    """A well-rested, recovered day."""
    return DailyHealthMetrics(
        date=SCORE_DAY,
        sleep_hours=7.8,
        sleep_quality_score=85,
        hrv=55,
        resting_hr=58,
        exercise_minutes=45,
        recovery_score=80,
    )


@pytest.fixture
def green_work():
    return DailyWorkMetrics(
        date=SCORE_DAY,
        hours_worked=7.5,
        overtime_hours=0,
        tasks_completed=8,
        tasks_assigned=7,
        meetings_attended=3,
    )


@pytest.fixture
def green_baseline():
    """Baseline matching the green day's actuals."""
    return PersonalBaseline(
        sleep_hours=7.8,
        sleep_quality=85,
        hrv=55,
        resting_hr=58,
        hours_worked=7.5,
    )


@pytest.fixture
def red_health():
    """A short-sleep, high-strain day."""
    return DailyHealthMetrics(
        date=SCORE_DAY,
        sleep_hours=5.5,
        sleep_quality_score=50,
        hrv=32,
        resting_hr=75,
        exercise_minutes=10,
        recovery_score=40,
    )


@pytest.fixture
def red_work():
    return DailyWorkMetrics(
        date=SCORE_DAY,
        hours_worked=10.5,
        overtime_hours=2.5,
        tasks_completed=5,
        tasks_assigned=10,
        meetings_attended=7,
    )


@pytest.fixture
def standard_baseline():
    return PersonalBaseline(
        sleep_hours=7,
        sleep_quality=70,
        hrv=45,
        resting_hr=65,
        hours_worked=8,
    )


# ============================================================================
# Personalization
# ============================================================================

@pytest.fixture
def new_baby_event():
    """New baby: sleep -30%, work -20%, exercise -40%, stress tolerance -30%."""
    return LifeEvent.from_template("new_baby", start_date=date(2026, 3, 1))


@pytest.fixture
def preferences():
    return PersonalPreferences(
        ideal_sleep_hours=8.0,
        ideal_exercise_minutes=45,
        chronotype="early_bird",
        social_energy_type="introvert",
        setup_completed=True,
    )
