"""Plan mutations: edit, library swap, drag-move and completion logging.

Every function takes a plan and returns a new one; the input is never
changed.  Each touched week has its total hours recalculated before the
plan is returned.  A workout with a completion record is history: it can
be moved to another day, but never swapped out or silently re-logged.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from typing import Callable

from triathlon_engine.errors import PlanMutationError, WorkoutNotFoundError
from triathlon_engine.math.dates import get_day_of_week
from triathlon_engine.math.durations import target_effort
from triathlon_engine.math.periodization import round_half_up
from triathlon_engine.models.athlete import DisciplineSplit
from triathlon_engine.models.enums import (
    MAX_RPE,
    MIN_RPE,
    CompletionStatus,
    Discipline,
)
from triathlon_engine.models.library import LibraryWorkout
from triathlon_engine.models.plan import Completion, TrainingDay, TrainingPlan, Workout
from triathlon_engine.planning.summary import recalculate_week_summary
from triathlon_engine.workout_builder.builder import new_workout_id, rest_workout
from triathlon_engine.workout_builder.library import closest_variation, instantiate

logger = logging.getLogger(__name__)

_SPLIT_ORDER = (Discipline.SWIM, Discipline.BIKE, Discipline.RUN)


# ---------------------------------------------------------------------------
# Addressing helpers
# ---------------------------------------------------------------------------


def find_workout(plan: TrainingPlan, workout_id: str) -> tuple[int, int, int]:
    """Locate a workout by id.

    Returns:
        (week_index, day_index, workout_index), all 0-based.

    Raises:
        WorkoutNotFoundError: If no workout has that id.
    """
    for wi, week in enumerate(plan.weeks):
        for di, day in enumerate(week.days):
            for xi, workout in enumerate(day.workouts):
                if workout.id == workout_id:
                    return wi, di, xi
    raise WorkoutNotFoundError(f"No workout with id {workout_id!r}")


def find_day(plan: TrainingPlan, on: date) -> tuple[int, int]:
    """Locate the day scheduled on *on*.

    Raises:
        WorkoutNotFoundError: If the plan has no such day.
    """
    for wi, week in enumerate(plan.weeks):
        for di, day in enumerate(week.days):
            if day.date == on:
                return wi, di
    raise WorkoutNotFoundError(f"Plan has no day on {on.isoformat()}")


def _with_workouts(day: TrainingDay, workouts: tuple[Workout, ...]) -> TrainingDay:
    is_rest = bool(workouts) and all(w.discipline == Discipline.REST for w in workouts)
    return dataclasses.replace(day, workouts=workouts, is_rest_day=is_rest)


def _replace_days(
    plan: TrainingPlan, changes: dict[tuple[int, int], TrainingDay]
) -> TrainingPlan:
    """Apply day replacements keyed by (week_index, day_index)."""
    weeks = list(plan.weeks)
    for wi in sorted({wi for wi, _ in changes}):
        days = list(weeks[wi].days)
        for (cwi, di), day in changes.items():
            if cwi == wi:
                days[di] = day
        weeks[wi] = recalculate_week_summary(dataclasses.replace(weeks[wi], days=tuple(days)))
    return dataclasses.replace(plan, weeks=tuple(weeks))


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def update_plan_with_workout(
    plan: TrainingPlan,
    workout: Workout,
    week_index: int,
    day_index: int,
    workout_index: int,
    new_date: date | None = None,
) -> TrainingPlan:
    """Replace one workout in place, optionally re-dating its day.

    Args:
        plan: Plan to edit.
        workout: Replacement workout.
        week_index: 0-based week position.
        day_index: 0-based day position within the week.
        workout_index: 0-based workout position within the day.
        new_date: New date for the day; its weekday label follows.

    Raises:
        WorkoutNotFoundError: If any index is out of range.
        PlanMutationError: If the edit would change a logged completion.
    """
    missing = WorkoutNotFoundError(
        f"No workout at week {week_index}, day {day_index}, index {workout_index}"
    )
    if min(week_index, day_index, workout_index) < 0:
        raise missing
    try:
        day = plan.weeks[week_index].days[day_index]
        existing = day.workouts[workout_index]
    except IndexError:
        raise missing from None

    if existing.completion is not None and workout.completion != existing.completion:
        raise PlanMutationError(f"Workout {existing.id} is logged; its completion is fixed")

    workouts = list(day.workouts)
    workouts[workout_index] = workout
    day = _with_workouts(day, tuple(workouts))
    if new_date is not None:
        day = dataclasses.replace(day, date=new_date, day_of_week=get_day_of_week(new_date))
    return _replace_days(plan, {(week_index, day_index): day})


def swap_workout(
    plan: TrainingPlan,
    workout_id: str,
    library_workout: LibraryWorkout,
    variation_id: str | None = None,
) -> TrainingPlan:
    """Replace a planned workout with a library workout, keeping its id.

    Without *variation_id* the variation closest in length to the current
    workout is used.

    Raises:
        WorkoutNotFoundError: If the workout or variation does not exist.
        PlanMutationError: If the workout is already logged.
    """
    wi, di, xi = find_workout(plan, workout_id)
    day = plan.weeks[wi].days[di]
    existing = day.workouts[xi]
    if existing.completion is not None:
        raise PlanMutationError(f"Workout {workout_id} is logged and cannot be swapped")

    if variation_id is None:
        variation = closest_variation(library_workout, existing.total_duration)
    else:
        variation = library_workout.variation(variation_id)
        if variation is None:
            raise WorkoutNotFoundError(
                f"{library_workout.id} has no variation {variation_id!r}"
            )

    replacement = instantiate(library_workout, variation, workout_id=existing.id)
    workouts = list(day.workouts)
    workouts[xi] = replacement
    logger.debug("Swapped %s for library workout %s", workout_id, variation.id)
    return _replace_days(plan, {(wi, di): _with_workouts(day, tuple(workouts))})


def move_workout(
    plan: TrainingPlan,
    workout_id: str,
    target_date: date,
    id_factory: Callable[[], str] = new_workout_id,
) -> TrainingPlan:
    """Drag a workout onto another day, possibly in another week.

    Unlogged rest placeholders on the target day are removed.  A source
    day left empty becomes a rest day.

    Raises:
        WorkoutNotFoundError: If the workout or target day does not exist.
    """
    swi, sdi, sxi = find_workout(plan, workout_id)
    twi, tdi = find_day(plan, target_date)
    if (swi, sdi) == (twi, tdi):
        return plan

    source = plan.weeks[swi].days[sdi]
    target = plan.weeks[twi].days[tdi]
    moved = source.workouts[sxi]

    remaining = source.workouts[:sxi] + source.workouts[sxi + 1:]
    if not remaining:
        remaining = (rest_workout(id_factory()),)

    kept = tuple(
        w for w in target.workouts
        if w.discipline != Discipline.REST or w.completion is not None
    )

    return _replace_days(plan, {
        (swi, sdi): _with_workouts(source, remaining),
        (twi, tdi): _with_workouts(target, kept + (moved,)),
    })


def log_completion(
    plan: TrainingPlan,
    workout_id: str,
    status: CompletionStatus,
    actual_duration: int | None = None,
    perceived_effort: int | None = None,
    notes: str | None = None,
    completed_at: datetime | None = None,
    replace: bool = False,
) -> TrainingPlan:
    """Attach a completion record to a workout.

    Skipped workouts record 0 minutes and no effort.  Completed workouts
    default to their planned duration.  The target effort is derived from
    the workout's hardest step.

    Raises:
        WorkoutNotFoundError: If the workout does not exist.
        PlanMutationError: If the workout is already logged and not *replace*.
        ValueError: If a partial completion has no duration or the RPE is
            outside 1-10.
    """
    wi, di, xi = find_workout(plan, workout_id)
    day = plan.weeks[wi].days[di]
    workout = day.workouts[xi]
    if workout.completion is not None and not replace:
        raise PlanMutationError(f"Workout {workout_id} is already logged")

    if status == CompletionStatus.SKIPPED:
        actual_duration, perceived_effort = 0, None
    else:
        if actual_duration is None:
            if status == CompletionStatus.PARTIAL:
                raise ValueError("A partial completion needs an actual duration")
            actual_duration = workout.total_duration
        if actual_duration < 0:
            raise ValueError(f"Actual duration must be >= 0, got {actual_duration}")
        if perceived_effort is not None and not MIN_RPE <= perceived_effort <= MAX_RPE:
            raise ValueError(
                f"Perceived effort must be {MIN_RPE}-{MAX_RPE}, got {perceived_effort}"
            )

    completion = Completion(
        status=status,
        completed_at=completed_at or datetime.now(),
        actual_duration=actual_duration,
        perceived_effort=perceived_effort,
        target_effort=target_effort(workout),
        notes=notes,
    )
    workouts = list(day.workouts)
    workouts[xi] = dataclasses.replace(workout, completion=completion)
    logger.debug("Logged %s as %s", workout_id, status.name.lower())
    return _replace_days(plan, {(wi, di): _with_workouts(day, tuple(workouts))})


# ---------------------------------------------------------------------------
# Discipline split
# ---------------------------------------------------------------------------


def rebalance_discipline_split(
    split: DisciplineSplit, discipline: Discipline, value: int
) -> DisciplineSplit:
    """Set one discipline's share and rescale the other two to keep 100 %.

    The other two keep their relative proportions (equal halves if both
    were 0).  Any rounding residue goes to the first of them in swim, bike,
    run order.

    Raises:
        ValueError: If discipline is not swim/bike/run or value is not 0-100.
    """
    if discipline not in _SPLIT_ORDER:
        raise ValueError(f"Split has no {discipline.name.lower()} share")
    if not 0 <= value <= 100:
        raise ValueError(f"Split value must be 0-100, got {value}")

    others = [d for d in _SPLIT_ORDER if d != discipline]
    remaining = 100 - value
    other_total = sum(split.share(d) for d in others)

    shares = {discipline: value}
    for d in others:
        if other_total == 0:
            shares[d] = remaining // len(others)
        else:
            shares[d] = int(round_half_up(split.share(d) / other_total * remaining))
    shares[others[0]] += remaining - sum(shares[d] for d in others)

    return DisciplineSplit(
        swim=shares[Discipline.SWIM],
        bike=shares[Discipline.BIKE],
        run=shares[Discipline.RUN],
    )
