"""Training plan aggregate: plan, weeks, days, workouts, steps, completions.

Every model is frozen. Mutations build new values with
``dataclasses.replace`` so a plan held by a caller is never changed in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator

from triathlon_engine.models.enums import (
    CompletionStatus,
    Discipline,
    Intensity,
    TrainingPhase,
)
from triathlon_engine.models.race import RaceConfig


@dataclass(frozen=True)
class WorkoutStep:
    """A single step of a workout.

    ``duration`` is display text ("20 min", "3 sets x 12 reps"); only its
    leading integer is ever read back, for visualisation ratios.
    """

    name: str
    duration: str
    intensity: Intensity
    instructions: str
    target_heart_rate_zone: int | None = None
    target_pace: str | None = None
    cadence: str | None = None


@dataclass(frozen=True)
class Completion:
    """Logged outcome of a workout. Immutable history once attached."""

    status: CompletionStatus
    completed_at: datetime
    actual_duration: int | None          # minutes, 0 when skipped, None if not recorded
    perceived_effort: int | None         # RPE 1-10, None when skipped
    target_effort: int                   # intensity-implied RPE
    notes: str | None = None


@dataclass(frozen=True)
class Workout:
    id: str
    discipline: Discipline
    title: str
    description: str
    total_duration: int  # minutes
    steps: tuple[WorkoutStep, ...]
    tips: tuple[str, ...] = ()
    completion: Completion | None = None
    library_workout_id: str | None = None
    variation_id: str | None = None

    @property
    def is_logged(self) -> bool:
        return self.completion is not None


@dataclass(frozen=True)
class TrainingDay:
    date: date
    day_of_week: str  # derived from ``date``, e.g. "Monday"
    is_rest_day: bool
    workouts: tuple[Workout, ...]


@dataclass(frozen=True)
class TrainingWeek:
    week_number: int   # 1-indexed
    phase: TrainingPhase
    phase_week: int    # 1-indexed position within the phase
    focus: str
    total_hours: float  # derived from days, see recalculate_week_summary
    days: tuple[TrainingDay, ...]


@dataclass(frozen=True)
class PhaseLengths:
    """Week count per phase; sums to the plan's total weeks."""

    base: int
    build: int
    peak: int
    taper: int

    def __getitem__(self, phase: TrainingPhase) -> int:
        return getattr(self, phase.name.lower())

    @property
    def total(self) -> int:
        return self.base + self.build + self.peak + self.taper


@dataclass(frozen=True)
class TrainingPlan:
    id: str
    created_at: datetime
    race_config: RaceConfig
    total_weeks: int
    phases: PhaseLengths
    weeks: tuple[TrainingWeek, ...]

    def iter_days(self) -> Iterator[TrainingDay]:
        for week in self.weeks:
            yield from week.days

    def day(self, on: date) -> TrainingDay | None:
        """Return the day scheduled on *on*, or None."""
        for day in self.iter_days():
            if day.date == on:
                return day
        return None
