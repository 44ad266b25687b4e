"""Weekly workout synthesis.

Lays a fixed weekly pattern over each plan week, weights every session from
the athlete's discipline split, then fits the week to its hour target:

====  ===========================  ==============================
Day   BASE                         BUILD / PEAK
====  ===========================  ==============================
Mon   technique swim               swim intervals
Tue   endurance ride               bike intervals
Wed   easy run + strength          tempo run + strength
Thu   endurance swim               endurance swim
Fri   rest                         easy run
Sat   long ride                    long ride, brick on even weeks
Sun   long run                     long run
====  ===========================  ==============================

TAPER keeps the same days with short, easy sessions and no strength or
bricks.  Active injuries downgrade quality sessions of the affected
discipline to endurance work.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Callable

from triathlon_engine.math.dates import add_days, get_day_of_week
from triathlon_engine.models.athlete import (
    DEFAULT_DISCIPLINE_SPLIT,
    AthleteProfile,
    DisciplineSplit,
    Injury,
    StrengthWeakness,
)
from triathlon_engine.models.enums import (
    BRICK_MIN_BIKE_MINUTES,
    BRICK_MIN_RUN_MINUTES,
    BRICK_TRANSITION_MINUTES,
    DEFAULT_STRENGTH_SESSIONS_PER_WEEK,
    DISTANCE_VOLUME_MULTIPLIER,
    MAX_STRENGTH_SESSIONS_PER_WEEK,
    MIN_SESSION_MINUTES,
    STRENGTH_TIME_SHARE,
    STRONGEST_DISCIPLINE_REDUCTION,
    WEAKEST_DISCIPLINE_BONUS,
    Discipline,
    SessionKind,
    TrainingPhase,
    Weekday,
)
from triathlon_engine.models.plan import TrainingDay, Workout
from triathlon_engine.workout_builder.builder import WorkoutBuilder, new_workout_id
from triathlon_engine.workout_builder.templates import get_template

logger = logging.getLogger(__name__)

# Body part keywords -> disciplines that load them
_INJURY_DISCIPLINES: dict[str, tuple[Discipline, ...]] = {
    "achilles": (Discipline.RUN,),
    "ankle": (Discipline.RUN,),
    "calf": (Discipline.RUN,),
    "foot": (Discipline.RUN,),
    "hamstring": (Discipline.RUN, Discipline.BIKE),
    "hip": (Discipline.RUN, Discipline.BIKE),
    "knee": (Discipline.RUN, Discipline.BIKE),
    "shin": (Discipline.RUN,),
    "it band": (Discipline.RUN,),
    "back": (Discipline.BIKE, Discipline.RUN),
    "neck": (Discipline.SWIM, Discipline.BIKE),
    "shoulder": (Discipline.SWIM,),
    "elbow": (Discipline.SWIM,),
    "wrist": (Discipline.SWIM,),
}

# Quality session -> endurance replacement when its discipline is injured
_INJURY_DOWNGRADE: dict[SessionKind, SessionKind] = {
    SessionKind.SWIM_INTERVALS: SessionKind.SWIM_ENDURANCE,
    SessionKind.BIKE_INTERVALS: SessionKind.BIKE_ENDURANCE,
    SessionKind.BIKE_TEMPO: SessionKind.BIKE_ENDURANCE,
    SessionKind.RUN_INTERVALS: SessionKind.RUN_EASY,
    SessionKind.RUN_TEMPO: SessionKind.RUN_EASY,
}

# Days that take a strength session, in order of preference
_STRENGTH_SLOTS = (Weekday.WEDNESDAY, Weekday.MONDAY, Weekday.THURSDAY)

# Relative weight of each taper session; the week is scaled to its target
_TAPER_SESSIONS: dict[Weekday, tuple[SessionKind, float]] = {
    Weekday.MONDAY: (SessionKind.SWIM_TECHNIQUE, 0.08),
    Weekday.TUESDAY: (SessionKind.BIKE_ENDURANCE, 0.10),
    Weekday.WEDNESDAY: (SessionKind.RUN_EASY, 0.08),
    Weekday.THURSDAY: (SessionKind.SWIM_ENDURANCE, 0.06),
    Weekday.SATURDAY: (SessionKind.BIKE_ENDURANCE, 0.15),
    Weekday.SUNDAY: (SessionKind.RUN_EASY, 0.10),
}

_FRIDAY_EASY_RUN_FRACTION = 0.08

# Float noise allowance when flooring fitted minutes
_FLOOR_EPSILON = 1e-6


@dataclass(frozen=True)
class WeekContext:
    """Inputs for synthesizing one plan week."""

    week_number: int
    phase: TrainingPhase
    weekly_hours: float
    distance_id: str
    start_date: date  # the week's Monday


@dataclass(frozen=True)
class PlannedSession:
    """A session placed on a weekday, weighted but not yet sized.

    ``kind`` is None for a bike-to-run brick, whose run leg is weighted by
    ``run_weight``.
    """

    weekday: Weekday
    kind: SessionKind | None
    weight: float
    run_weight: float = 0.0


def discipline_shares(
    split: DisciplineSplit,
    strength_weakness: StrengthWeakness | None = None,
) -> dict[Discipline, float]:
    """Fraction of weekly time for swim, bike and run.

    The weakest discipline gets a bonus and the strongest a reduction, then
    all three are rescaled to share what is left after STRENGTH_TIME_SHARE.

    Returns:
        Dict mapping SWIM/BIKE/RUN to fractions summing to 1 - STRENGTH_TIME_SHARE.
    """
    shares = {d: split.share(d) / 100 for d in (Discipline.SWIM, Discipline.BIKE, Discipline.RUN)}
    if strength_weakness is not None:
        shares[strength_weakness.weakest] += WEAKEST_DISCIPLINE_BONUS
        shares[strength_weakness.strongest] -= STRONGEST_DISCIPLINE_REDUCTION

    total = sum(shares.values())
    if total <= 0:
        raise ValueError(f"Discipline split must be positive, got {split}")
    scale = (1 - STRENGTH_TIME_SHARE) / total
    return {d: share * scale for d, share in shares.items()}


def affected_disciplines(injuries: tuple[Injury, ...]) -> frozenset[Discipline]:
    """Disciplines loaded by any active injury's body part."""
    affected: set[Discipline] = set()
    for injury in injuries:
        if not injury.is_active:
            continue
        part = injury.body_part.lower()
        for keyword, disciplines in _INJURY_DISCIPLINES.items():
            if keyword in part:
                affected.update(disciplines)
    return frozenset(affected)


def fit_to_budget(weights: list[float], minimums: list[int], budget: float) -> list[int]:
    """Size sessions in proportion to *weights* so they fill *budget* minutes.

    A session whose proportional share would fall below its minimum is
    pinned at that minimum and the others share what is left.  Lengths are
    floored to whole minutes, so the total never exceeds *budget* unless
    the minimums alone do.

    Args:
        weights: Relative size of each session (>= 0).
        minimums: Minimum whole minutes for each session.
        budget: Minutes available for the whole set.

    Returns:
        Whole minutes per session, in input order.
    """
    if len(weights) != len(minimums):
        raise ValueError("weights and minimums must have the same length")

    pinned: set[int] = set()
    scale = 0.0
    while True:
        free = [i for i in range(len(weights)) if i not in pinned]
        free_weight = sum(weights[i] for i in free)
        remaining = budget - sum(minimums[i] for i in pinned)
        scale = remaining / free_weight if free_weight > 0 else 0.0
        short = {i for i in free if weights[i] * scale < minimums[i]}
        if not short:
            break
        pinned |= short

    return [
        minimums[i] if i in pinned
        else max(minimums[i], math.floor(weights[i] * scale + _FLOOR_EPSILON))
        for i in range(len(weights))
    ]


class WorkoutSynthesizer:
    """Generates the seven days of a plan week.

    Usage::

        synth = WorkoutSynthesizer(profile, strength_sessions_per_week=2)
        days = synth.synthesize_week(context)
    """

    def __init__(
        self,
        profile: AthleteProfile | None = None,
        strength_sessions_per_week: int = DEFAULT_STRENGTH_SESSIONS_PER_WEEK,
        id_factory: Callable[[], str] = new_workout_id,
    ) -> None:
        if not 0 <= strength_sessions_per_week <= MAX_STRENGTH_SESSIONS_PER_WEEK:
            raise ValueError(
                f"strength_sessions_per_week must be 0-{MAX_STRENGTH_SESSIONS_PER_WEEK}, "
                f"got {strength_sessions_per_week}"
            )
        self.profile = profile
        self.builder = WorkoutBuilder(profile, id_factory)
        self.strength_days = frozenset(_STRENGTH_SLOTS[:strength_sessions_per_week])

        split = profile.discipline_split if profile else DEFAULT_DISCIPLINE_SPLIT
        weakness = profile.strength_weakness if profile else None
        self.shares = discipline_shares(split, weakness)
        self.injured = affected_disciplines(profile.injuries) if profile else frozenset()
        if self.injured:
            logger.debug(
                "Downgrading quality sessions for injured disciplines: %s",
                sorted(d.name for d in self.injured),
            )

    def synthesize_week(self, ctx: WeekContext) -> tuple[TrainingDay, ...]:
        """Build the seven days of one week, Monday first.

        Session minutes add up to the week's hour target, except when the
        minimum session lengths alone exceed it.  Rest-day preferences are
        not applied here; see adjust_rest_days().
        """
        planned = self.plan_week(ctx)
        workouts = self._size_sessions(planned, ctx)

        days: list[TrainingDay] = []
        for weekday in Weekday:
            day_date = add_days(ctx.start_date, weekday)
            day_workouts = workouts.get(weekday) or [self.builder.build_rest()]
            days.append(TrainingDay(
                date=day_date,
                day_of_week=get_day_of_week(day_date),
                is_rest_day=all(w.discipline == Discipline.REST for w in day_workouts),
                workouts=tuple(day_workouts),
            ))
        return tuple(days)

    # ------------------------------------------------------------------
    # Day layout
    # ------------------------------------------------------------------

    def plan_week(self, ctx: WeekContext) -> list[PlannedSession]:
        """Place and weight the week's sessions, Monday first."""
        phase = ctx.phase
        if phase == TrainingPhase.TAPER:
            return [
                PlannedSession(weekday, self._injury_safe(kind), weight)
                for weekday, (kind, weight) in _TAPER_SESSIONS.items()
            ]

        base = phase == TrainingPhase.BASE
        long_multiplier = DISTANCE_VOLUME_MULTIPLIER.get(ctx.distance_id, 1.0)
        swim = self.shares[Discipline.SWIM]
        bike = self.shares[Discipline.BIKE]
        run = self.shares[Discipline.RUN]

        def session(weekday: Weekday, kind: SessionKind, weight: float) -> PlannedSession:
            return PlannedSession(weekday, self._injury_safe(kind), weight)

        planned = [
            session(
                Weekday.MONDAY,
                SessionKind.SWIM_TECHNIQUE if base else SessionKind.SWIM_INTERVALS,
                swim * 0.5,
            ),
            session(
                Weekday.TUESDAY,
                SessionKind.BIKE_ENDURANCE if base else SessionKind.BIKE_INTERVALS,
                bike * 0.35,
            ),
            session(
                Weekday.WEDNESDAY,
                SessionKind.RUN_EASY if base else SessionKind.RUN_TEMPO,
                run * 0.4,
            ),
            session(Weekday.THURSDAY, SessionKind.SWIM_ENDURANCE, swim * 0.5),
        ]
        if not base:
            planned.append(
                session(Weekday.FRIDAY, SessionKind.RUN_EASY, _FRIDAY_EASY_RUN_FRACTION)
            )

        bike_long = bike * 0.65 * long_multiplier
        if not base and ctx.week_number % 2 == 0 and Discipline.RUN not in self.injured:
            planned.append(PlannedSession(Weekday.SATURDAY, None, bike_long, run * 0.25))
        else:
            planned.append(session(Weekday.SATURDAY, SessionKind.BIKE_ENDURANCE, bike_long))
        planned.append(session(Weekday.SUNDAY, SessionKind.RUN_LONG, run * 0.6 * long_multiplier))

        strength = SessionKind.STRENGTH_FULL if base else SessionKind.STRENGTH_CORE
        for weekday in sorted(self.strength_days):
            planned.append(session(weekday, strength, STRENGTH_TIME_SHARE))

        return planned

    def _size_sessions(
        self, planned: list[PlannedSession], ctx: WeekContext
    ) -> dict[Weekday, list[Workout]]:
        weights: list[float] = []
        minimums: list[int] = []
        budget = ctx.weekly_hours * 60
        for item in planned:
            if item.kind is None:
                weights += [item.weight, item.run_weight]
                minimums += [BRICK_MIN_BIKE_MINUTES, BRICK_MIN_RUN_MINUTES]
                budget -= BRICK_TRANSITION_MINUTES
            else:
                weights.append(item.weight)
                minimums.append(MIN_SESSION_MINUTES[get_template(item.kind).discipline])

        minutes = iter(fit_to_budget(weights, minimums, budget))
        workouts: dict[Weekday, list[Workout]] = {}
        for item in planned:
            if item.kind is None:
                workout = self.builder.build_brick(next(minutes), next(minutes))
            else:
                workout = self.builder.build(item.kind, next(minutes), ctx.phase)
            workouts.setdefault(item.weekday, []).append(workout)
        return workouts

    def _injury_safe(self, kind: SessionKind) -> SessionKind:
        replacement = _INJURY_DOWNGRADE.get(kind)
        if replacement is not None and get_template(kind).discipline in self.injured:
            return replacement
        return kind
