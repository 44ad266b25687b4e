"""Workout library models: reusable sessions with fixed-length variations."""

from __future__ import annotations

from dataclasses import dataclass

from triathlon_engine.models.enums import (
    Difficulty,
    Discipline,
    Intensity,
    WorkoutCategory,
)
from triathlon_engine.models.plan import WorkoutStep


@dataclass(frozen=True)
class WorkoutVariation:
    id: str
    duration: int  # minutes
    label: str     # e.g. "45 min"
    steps: tuple[WorkoutStep, ...]


@dataclass(frozen=True)
class LibraryWorkout:
    id: str
    discipline: Discipline
    category: WorkoutCategory
    title: str
    description: str
    difficulty: Difficulty
    intensity: Intensity  # primary intensity of the session
    variations: tuple[WorkoutVariation, ...]
    equipment: tuple[str, ...] = ()
    tips: tuple[str, ...] = ()

    def variation(self, variation_id: str) -> WorkoutVariation | None:
        for v in self.variations:
            if v.id == variation_id:
                return v
        return None
