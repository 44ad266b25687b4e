"""PlanGenerator: builds a periodized training plan from a race goal.

Pipeline per week: phase lookup -> weekly hour target -> workout synthesis
-> rest-day reconciliation -> week summary.  Week 1 starts on the Monday of
the week containing ``today``; the last week contains the race, or ends the
day before it when the race falls on a Monday.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime
from typing import Callable

from triathlon_engine.errors import PlanValidationError
from triathlon_engine.math.dates import add_days, get_local_today, get_weeks_between, start_of_week
from triathlon_engine.math.periodization import (
    allocate_phases,
    get_phase_spec,
    get_weekly_hours_target,
    phase_specs,
)
from triathlon_engine.models.athlete import AthleteProfile
from triathlon_engine.models.enums import (
    DEFAULT_STRENGTH_SESSIONS_PER_WEEK,
    MAX_WEEKLY_HOURS,
    MIN_DAYS_TO_RACE,
    MIN_PLAN_WEEKS,
    MIN_WEEKLY_HOURS,
    PHASE_FOCUS,
)
from triathlon_engine.models.plan import TrainingPlan, TrainingWeek
from triathlon_engine.models.race import RaceConfig
from triathlon_engine.planning.rest_days import adjust_rest_days
from triathlon_engine.planning.summary import recalculate_week_summary
from triathlon_engine.workout_builder.builder import new_workout_id
from triathlon_engine.workout_builder.synthesizer import WeekContext, WorkoutSynthesizer

logger = logging.getLogger(__name__)


def validate_race_config(config: RaceConfig, today: date) -> dict[str, str]:
    """Check a race goal before generating a plan.

    Returns:
        Field name -> message for every problem found; empty when valid.
    """
    errors: dict[str, str] = {}
    if not config.race_name.strip():
        errors["race_name"] = "Race name is required"

    if (config.race_date - today).days < MIN_DAYS_TO_RACE:
        errors["race_date"] = "Race date must be in the future"

    target = config.target_time
    if target.hours < 0 or not 0 <= target.minutes < 60:
        errors["target_time"] = "Target time must be hours and minutes (0-59)"
    elif target.total_minutes == 0:
        errors["target_time"] = "Target time is required"

    if not MIN_WEEKLY_HOURS <= config.max_weekly_hours <= MAX_WEEKLY_HOURS:
        errors["max_weekly_hours"] = (
            f"Weekly hours must be between {MIN_WEEKLY_HOURS:g} and {MAX_WEEKLY_HOURS:g}"
        )
    return errors


class PlanGenerator:
    """Generates training plans.

    Usage::

        generator = PlanGenerator(strength_sessions_per_week=2)
        plan = generator.generate(race_config, profile)
    """

    def __init__(
        self,
        strength_sessions_per_week: int = DEFAULT_STRENGTH_SESSIONS_PER_WEEK,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.strength_sessions_per_week = strength_sessions_per_week
        self.id_factory = id_factory or new_workout_id

    def generate(
        self,
        race_config: RaceConfig,
        athlete_profile: AthleteProfile | None = None,
        *,
        today: date | None = None,
    ) -> TrainingPlan:
        """Generate a full plan from today until race week.

        Args:
            race_config: The race goal.
            athlete_profile: Optional profile; without one the default split
                is used with no rest preferences or injuries.
            today: Local date the plan is generated on (defaults to today).

        Returns:
            A new TrainingPlan with week totals filled in.

        Raises:
            PlanValidationError: If the race config is invalid.
        """
        today = today or get_local_today()
        errors = validate_race_config(race_config, today)
        if errors:
            raise PlanValidationError(errors)

        # Counted from week 1's Monday so a late-week today still reaches race week
        first_monday = start_of_week(today)
        total_weeks = get_weeks_between(first_monday, race_config.race_date)
        if total_weeks < MIN_PLAN_WEEKS:
            logger.warning(
                "Race %s is only %d week(s) away; skipping the earliest phases",
                race_config.race_name, total_weeks,
            )

        lengths = allocate_phases(total_weeks)
        specs = phase_specs(lengths)
        synthesizer = WorkoutSynthesizer(
            athlete_profile, self.strength_sessions_per_week, self.id_factory
        )
        rest_preferences = athlete_profile.rest_day_preferences if athlete_profile else ()

        weeks: list[TrainingWeek] = []
        for week_number in range(1, total_weeks + 1):
            spec = get_phase_spec(week_number, specs)
            context = WeekContext(
                week_number=week_number,
                phase=spec.phase,
                weekly_hours=get_weekly_hours_target(
                    week_number, specs, race_config.max_weekly_hours
                ),
                distance_id=race_config.distance.id,
                start_date=add_days(first_monday, 7 * (week_number - 1)),
            )
            days = synthesizer.synthesize_week(context)
            days = adjust_rest_days(days, rest_preferences, self.id_factory)
            weeks.append(recalculate_week_summary(TrainingWeek(
                week_number=week_number,
                phase=spec.phase,
                phase_week=week_number - spec.start_week + 1,
                focus=PHASE_FOCUS[spec.phase],
                total_hours=0.0,
                days=days,
            )))

        plan = TrainingPlan(
            id=str(uuid.uuid4()),
            created_at=datetime.now(),
            race_config=race_config,
            total_weeks=total_weeks,
            phases=lengths,
            weeks=tuple(weeks),
        )
        logger.info(
            "Generated %d-week plan %s for %s (%s: base %d, build %d, peak %d, taper %d)",
            total_weeks, plan.id, race_config.race_name, race_config.distance.id,
            lengths.base, lengths.build, lengths.peak, lengths.taper,
        )
        return plan
