"""Data models for the triathlon engine."""

from triathlon_engine.models.athlete import (
    DEFAULT_DISCIPLINE_SPLIT,
    DEFAULT_REST_DAYS,
    AthleteProfile,
    DisciplineSplit,
    HeartRateZone,
    HeartRateZones,
    Injury,
    StrengthWeakness,
    create_default_profile,
)
from triathlon_engine.models.enums import (
    CompletionStatus,
    Discipline,
    ExperienceLevel,
    Intensity,
    TrainingPhase,
    Weekday,
)
from triathlon_engine.models.library import LibraryWorkout, WorkoutVariation
from triathlon_engine.models.plan import (
    Completion,
    PhaseLengths,
    TrainingDay,
    TrainingPlan,
    TrainingWeek,
    Workout,
    WorkoutStep,
)
from triathlon_engine.models.race import RACE_DISTANCES, RaceConfig, RaceDistance, TargetTime

__all__ = [
    "DEFAULT_DISCIPLINE_SPLIT",
    "DEFAULT_REST_DAYS",
    "RACE_DISTANCES",
    "AthleteProfile",
    "Completion",
    "CompletionStatus",
    "Discipline",
    "DisciplineSplit",
    "ExperienceLevel",
    "HeartRateZone",
    "HeartRateZones",
    "Injury",
    "Intensity",
    "LibraryWorkout",
    "PhaseLengths",
    "RaceConfig",
    "RaceDistance",
    "StrengthWeakness",
    "TargetTime",
    "TrainingDay",
    "TrainingPhase",
    "TrainingPlan",
    "TrainingWeek",
    "Weekday",
    "Workout",
    "WorkoutStep",
    "WorkoutVariation",
    "create_default_profile",
]
