"""Rest-day reconciliation.

Forces an athlete's preferred rest weekdays to actually be rest days in a
generated week.  Each preferred day, taken in Monday..Sunday order:

1. is skipped if the week has no day with that weekday label;
2. is left alone if it is already a rest day;
3. otherwise swaps content with another rest day that is not itself a
   preferred rest day, so the displaced training moves there;
4. otherwise becomes rest anyway and its planned workouts are dropped.
   An explicit rest preference always wins.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterable

from triathlon_engine.math.dates import weekday_from_label
from triathlon_engine.models.enums import Weekday
from triathlon_engine.models.plan import TrainingDay
from triathlon_engine.workout_builder.builder import new_workout_id, rest_workout

logger = logging.getLogger(__name__)


def _label_matches(day: TrainingDay, weekday: Weekday) -> bool:
    return day.day_of_week.strip().lower() == weekday.name.lower()


def adjust_rest_days(
    days: tuple[TrainingDay, ...],
    preferred: Iterable[Weekday],
    id_factory: Callable[[], str] = new_workout_id,
) -> tuple[TrainingDay, ...]:
    """Move rest onto the preferred weekdays of one week.

    Args:
        days: The week's days. Not modified.
        preferred: Preferred rest weekdays, in any order.
        id_factory: Id generator for synthetic rest workouts.

    Returns:
        A new tuple of days with the same dates and labels.
    """
    preferred_set = frozenset(preferred)
    if not preferred_set:
        return days

    result = list(days)
    for weekday in sorted(preferred_set):
        target_idx = next(
            (i for i, d in enumerate(result) if _label_matches(d, weekday)), None
        )
        if target_idx is None:
            continue
        target = result[target_idx]
        if target.is_rest_day:
            continue

        swap_idx = next(
            (
                i for i, d in enumerate(result)
                if i != target_idx
                and d.is_rest_day
                and not any(_label_matches(d, p) for p in preferred_set)
            ),
            None,
        )

        if swap_idx is not None:
            candidate = result[swap_idx]
            logger.debug(
                "Swapping %s training onto %s", target.day_of_week, candidate.day_of_week
            )
            result[swap_idx] = dataclasses.replace(
                candidate, workouts=target.workouts, is_rest_day=False
            )
            result[target_idx] = dataclasses.replace(
                target, workouts=candidate.workouts, is_rest_day=True
            )
        else:
            logger.debug(
                "No rest day to swap with; dropping %d workout(s) on %s %s",
                len(target.workouts), target.day_of_week, target.date,
            )
            result[target_idx] = dataclasses.replace(
                target, workouts=(rest_workout(id_factory()),), is_rest_day=True
            )

    return tuple(result)


def parse_rest_day_preferences(labels: Iterable[str]) -> tuple[Weekday, ...]:
    """Convert weekday labels such as ``["monday", "Friday"]`` to Weekdays.

    Raises:
        ValueError: If a label is not a weekday name.
    """
    return tuple(sorted({weekday_from_label(label) for label in labels}))
