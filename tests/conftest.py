"""Shared test fixtures: race goals, athlete profiles and generated plans."""

from __future__ import annotations

import itertools
from datetime import date, timedelta
from typing import Callable

import pytest

from factories import TODAY
from triathlon_engine.generator import PlanGenerator
from triathlon_engine.models.athlete import (
    AthleteProfile,
    DisciplineSplit,
    Injury,
    StrengthWeakness,
    create_default_profile,
)
from triathlon_engine.models.enums import Discipline, ExperienceLevel, InjurySeverity
from triathlon_engine.models.plan import TrainingPlan
from triathlon_engine.models.race import RACE_DISTANCES, RaceConfig, TargetTime


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def olympic_race() -> RaceConfig:
    """Olympic-distance race exactly 12 weeks out, 10 h/week ceiling."""
    return RaceConfig(
        distance=RACE_DISTANCES["olympic"],
        race_name="Spring Olympic",
        race_date=TODAY + timedelta(weeks=12),
        target_time=TargetTime(2, 45),
        max_weekly_hours=10.0,
    )


@pytest.fixture
def ironman_race() -> RaceConfig:
    """Full-distance race 20 weeks out, 15 h/week ceiling."""
    return RaceConfig(
        distance=RACE_DISTANCES["full"],
        race_name="Summer Ironman",
        race_date=TODAY + timedelta(weeks=20),
        target_time=TargetTime(12, 30),
        max_weekly_hours=15.0,
    )


@pytest.fixture
def default_profile() -> AthleteProfile:
    """Wizard profile: default split, Monday/Friday rest preference."""
    return create_default_profile("athlete-1")


@pytest.fixture
def detailed_profile() -> AthleteProfile:
    """Intermediate athlete with baselines, a weak swim and no rest preference."""
    return AthleteProfile(
        user_id="athlete-2",
        experience_level=ExperienceLevel.INTERMEDIATE,
        age=35,
        swim_css="1:45",
        bike_ftp=250,
        run_threshold_pace="4:30",
        discipline_split=DisciplineSplit(swim=25, bike=45, run=30),
        strength_weakness=StrengthWeakness(strongest=Discipline.BIKE, weakest=Discipline.SWIM),
    )


@pytest.fixture
def injured_profile() -> AthleteProfile:
    """Athlete with an active knee injury and an inactive shoulder one."""
    return AthleteProfile(
        user_id="athlete-3",
        injuries=(
            Injury(id="inj-1", body_part="Left knee", severity=InjurySeverity.MODERATE),
            Injury(id="inj-2", body_part="Shoulder", severity=InjurySeverity.MINOR,
                   is_active=False),
        ),
    )


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic workout ids: w1, w2, ..."""
    counter = itertools.count(1)
    return lambda: f"w{next(counter)}"


@pytest.fixture
def olympic_plan(olympic_race: RaceConfig, id_factory: Callable[[], str]) -> TrainingPlan:
    """12-week plan without a profile."""
    return PlanGenerator(id_factory=id_factory).generate(olympic_race, today=TODAY)
