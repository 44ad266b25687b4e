"""Tests for rest-day reconciliation against athlete preferences."""

import itertools

import pytest

from factories import TODAY, make_rest, make_week, make_workout
from triathlon_engine.models.enums import Discipline, Weekday
from triathlon_engine.planning.rest_days import adjust_rest_days, parse_rest_day_preferences


def _factory():
    counter = itertools.count(1)
    return lambda: f"rest-new-{next(counter)}"


def _workout_ids(days) -> list[list[str]]:
    return [[w.id for w in d.workouts] for d in days]


def _week(rest_on: tuple[int, ...] = (4,)):
    """Training every day except *rest_on* (day indexes, Monday = 0)."""
    return make_week(TODAY, workouts_by_day={
        i: (make_workout(f"t{i}", 40),) for i in range(7) if i not in rest_on
    })


class TestAdjustRestDays:
    def test_no_preferences_is_noop(self) -> None:
        days = _week().days
        assert adjust_rest_days(days, ()) is days

    def test_already_rest(self) -> None:
        days = _week().days
        result = adjust_rest_days(days, (Weekday.FRIDAY,), _factory())
        assert result == days

    def test_swaps_with_non_preferred_rest_day(self) -> None:
        days = _week(rest_on=(4,)).days
        result = adjust_rest_days(days, (Weekday.MONDAY,), _factory())
        assert result[0].is_rest_day
        assert result[0].workouts[0].discipline == Discipline.REST
        assert not result[4].is_rest_day
        assert [w.id for w in result[4].workouts] == ["t0"]

    def test_dates_and_labels_unchanged(self) -> None:
        days = _week(rest_on=(4,)).days
        result = adjust_rest_days(days, (Weekday.MONDAY,), _factory())
        assert [(d.date, d.day_of_week) for d in result] == [
            (d.date, d.day_of_week) for d in days
        ]

    def test_drops_training_when_no_swap_available(self) -> None:
        days = _week(rest_on=(4,)).days
        result = adjust_rest_days(days, (Weekday.MONDAY, Weekday.FRIDAY), _factory())
        assert result[0].is_rest_day
        assert result[4].is_rest_day
        assert [w.id for w in result[0].workouts] == ["rest-new-1"]
        training = [w.id for d in result for w in d.workouts
                    if w.discipline != Discipline.REST]
        assert "t0" not in training

    def test_preferred_rest_day_never_used_as_swap_target(self) -> None:
        days = _week(rest_on=(0, 4)).days
        result = adjust_rest_days(days, (Weekday.MONDAY, Weekday.TUESDAY), _factory())
        assert result[0].is_rest_day
        assert result[1].is_rest_day
        assert not result[4].is_rest_day
        assert [w.id for w in result[4].workouts] == ["t1"]

    def test_unmatched_label_skipped(self) -> None:
        days = tuple(d for d in _week().days if d.day_of_week != "Sunday")
        result = adjust_rest_days(days, (Weekday.SUNDAY,), _factory())
        assert result == days

    def test_input_not_mutated(self) -> None:
        days = _week().days
        before = _workout_ids(days)
        adjust_rest_days(days, (Weekday.MONDAY,), _factory())
        assert _workout_ids(days) == before

    def test_rest_placeholder_moves_with_swap(self) -> None:
        week = make_week(TODAY, workouts_by_day={
            0: (make_workout("t0", 40),),
            1: (make_workout("t1", 40),),
            2: (make_rest("r2"),),
            3: (make_workout("t3", 40),),
            4: (make_workout("t4", 40),),
            5: (make_workout("t5", 40),),
            6: (make_workout("t6", 40),),
        })
        result = adjust_rest_days(week.days, (Weekday.MONDAY,), _factory())
        assert [w.id for w in result[0].workouts] == ["r2"]
        assert [w.id for w in result[2].workouts] == ["t0"]


class TestParseRestDayPreferences:
    def test_sorted_unique(self) -> None:
        assert parse_rest_day_preferences(["friday", "Monday", "FRIDAY"]) == (
            Weekday.MONDAY, Weekday.FRIDAY,
        )

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_rest_day_preferences(["someday"])
