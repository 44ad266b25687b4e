"""Workout builder: session templates, weekly synthesis and the workout library."""

from triathlon_engine.workout_builder.builder import WorkoutBuilder
from triathlon_engine.workout_builder.synthesizer import WeekContext, WorkoutSynthesizer

__all__ = ["WeekContext", "WorkoutBuilder", "WorkoutSynthesizer"]
