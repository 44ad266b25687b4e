"""Best-effort reading of free-text step durations, and target effort.

Step durations are display strings ("20 min", "6x400m", "As needed").
Only a leading integer is ever extracted, and only to size visual bars.
"""

from __future__ import annotations

import re

from triathlon_engine.models.enums import DEFAULT_TARGET_RPE, INTENSITY_TARGET_RPE
from triathlon_engine.models.plan import Workout, WorkoutStep

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_step_minutes(duration: str) -> int | None:
    """Leading integer of a duration string, or None if there is none.

    ``"20 min"`` -> 20, ``"2-3 min"`` -> 2, ``"As needed"`` -> None.
    """
    match = _LEADING_INT.match(duration)
    return int(match.group(1)) if match else None


def step_weights(steps: tuple[WorkoutStep, ...]) -> list[float]:
    """Relative share of each step for proportional display.

    Unparseable or zero durations weigh 1.
    """
    raw = [parse_step_minutes(s.duration) or 1 for s in steps]
    total = sum(raw)
    if total == 0:
        return []
    return [w / total for w in raw]


def target_effort(workout: Workout) -> int:
    """Expected RPE for a workout, from its hardest step."""
    if not workout.steps:
        return DEFAULT_TARGET_RPE
    hardest = max(step.intensity for step in workout.steps)
    return INTENSITY_TARGET_RPE.get(hardest, DEFAULT_TARGET_RPE)
