"""Plan regeneration merge.

Reconciles a freshly generated plan with the one it replaces:

- a day whose old version holds any logged workout keeps its old workouts
  and rest flag, all or nothing;
- every other day takes the new content;
- weekday labels are always recomputed from the date, which heals labels
  stored under a wrong timezone;
- days that only exist in the old plan are dropped.

The new plan's id, timestamp, race config and phases are kept.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date

from triathlon_engine.math.dates import get_day_of_week
from triathlon_engine.models.plan import TrainingDay, TrainingPlan
from triathlon_engine.planning.summary import recalculate_week_summary

logger = logging.getLogger(__name__)


def is_logged_day(day: TrainingDay) -> bool:
    """Whether any workout on *day* carries a completion record."""
    return any(w.completion is not None for w in day.workouts)


def merge_plans(old_plan: TrainingPlan, new_plan: TrainingPlan) -> TrainingPlan:
    """Merge *new_plan* over *old_plan*, preserving logged history.

    Args:
        old_plan: The previously saved plan. Read only.
        new_plan: The freshly generated plan. Read only.

    Returns:
        A new TrainingPlan with week totals recalculated.
    """
    logged: dict[date, TrainingDay] = {
        day.date: day for day in old_plan.iter_days() if is_logged_day(day)
    }

    preserved = 0
    weeks = []
    for week in new_plan.weeks:
        days = []
        for day in week.days:
            old_day = logged.get(day.date)
            if old_day is not None:
                preserved += 1
                day = dataclasses.replace(
                    day, workouts=old_day.workouts, is_rest_day=old_day.is_rest_day
                )
            days.append(dataclasses.replace(day, day_of_week=get_day_of_week(day.date)))
        weeks.append(recalculate_week_summary(dataclasses.replace(week, days=tuple(days))))

    new_dates = {day.date for day in new_plan.iter_days()}
    dropped = sum(1 for d in logged if d not in new_dates)
    logger.info(
        "Merged plan %s: preserved %d logged day(s), dropped %d outside the new range",
        new_plan.id, preserved, dropped,
    )
    return dataclasses.replace(new_plan, weeks=tuple(weeks))
