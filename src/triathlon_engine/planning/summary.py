"""Week summary recalculation.

A week's ``total_hours`` is derived data.  Every mutation path (edit, swap,
drag-move, merge) ends by recalculating the weeks it touched.
"""

from __future__ import annotations

import dataclasses

from triathlon_engine.math.periodization import round_half_up
from triathlon_engine.models.plan import TrainingPlan, TrainingWeek


def week_minutes(week: TrainingWeek) -> int:
    """Planned minutes across every workout of the week."""
    return sum(w.total_duration for day in week.days for w in day.workouts)


def recalculate_week_summary(week: TrainingWeek) -> TrainingWeek:
    """Return *week* with total_hours recomputed from its workouts.

    ``total_hours = round(minutes / 60, 1)``, halves rounded up.  Idempotent.
    """
    total_hours = round_half_up(week_minutes(week) / 60, 1)
    if total_hours == week.total_hours:
        return week
    return dataclasses.replace(week, total_hours=total_hours)


def recalculate_plan_summaries(plan: TrainingPlan) -> TrainingPlan:
    """Return *plan* with every week's total_hours recomputed."""
    return dataclasses.replace(
        plan, weeks=tuple(recalculate_week_summary(w) for w in plan.weeks)
    )
