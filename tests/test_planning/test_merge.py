"""Tests for regeneration merge: logged days survive, the rest is replaced."""

import dataclasses
from datetime import timedelta

from factories import (
    TODAY,
    make_completion,
    make_day,
    make_plan,
    make_week,
    make_workout,
)
from triathlon_engine.models.enums import Discipline
from triathlon_engine.planning.merge import is_logged_day, merge_plans


def _old_plan():
    return make_plan(make_week(TODAY, workouts_by_day={
        0: (make_workout("old-mon", 90, completion=make_completion(actual=85)),),
        1: (make_workout("old-tue", 40),),
    }))


def _new_plan():
    plan = make_plan(make_week(TODAY, workouts_by_day={
        0: (make_workout("new-mon", 30),),
        1: (make_workout("new-tue", 50, discipline=Discipline.BIKE),),
    }))
    return dataclasses.replace(plan, id="plan-2")


class TestIsLoggedDay:
    def test_logged(self) -> None:
        day = make_day(TODAY, make_workout("a"), make_workout("b", completion=make_completion()))
        assert is_logged_day(day)

    def test_unlogged(self) -> None:
        assert not is_logged_day(make_day(TODAY, make_workout("a")))


class TestMergePlans:
    def test_logged_day_kept_whole(self) -> None:
        merged = merge_plans(_old_plan(), _new_plan())
        monday = merged.weeks[0].days[0]
        assert [w.id for w in monday.workouts] == ["old-mon"]
        assert monday.workouts[0].completion.actual_duration == 85

    def test_unlogged_day_takes_new_content(self) -> None:
        merged = merge_plans(_old_plan(), _new_plan())
        assert [w.id for w in merged.weeks[0].days[1].workouts] == ["new-tue"]

    def test_new_plan_identity_kept(self) -> None:
        new = _new_plan()
        merged = merge_plans(_old_plan(), new)
        assert merged.id == "plan-2"
        assert merged.created_at == new.created_at
        assert merged.race_config == new.race_config

    def test_week_hours_recalculated(self) -> None:
        merged = merge_plans(_old_plan(), _new_plan())
        # 90 kept from the logged Monday + 50 new Tuesday
        assert merged.weeks[0].total_hours == 2.3

    def test_rest_flag_follows_kept_workouts(self) -> None:
        old = make_plan(make_week(TODAY, workouts_by_day={
            2: (make_workout("old-wed", 30, completion=make_completion(actual=30)),),
        }))
        merged = merge_plans(old, make_plan(make_week(TODAY)))
        assert not merged.weeks[0].days[2].is_rest_day

    def test_labels_recomputed_from_date(self) -> None:
        new = _new_plan()
        wrong = tuple(
            dataclasses.replace(d, day_of_week="Sunday") for d in new.weeks[0].days
        )
        new = dataclasses.replace(
            new, weeks=(dataclasses.replace(new.weeks[0], days=wrong),)
        )
        merged = merge_plans(_old_plan(), new)
        assert [d.day_of_week for d in merged.weeks[0].days] == [
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        ]

    def test_days_outside_new_range_dropped(self) -> None:
        earlier = TODAY - timedelta(weeks=1)
        old = make_plan(
            make_week(earlier, workouts_by_day={
                0: (make_workout("gone", 30, completion=make_completion(actual=30)),),
            }),
            make_week(TODAY, week_number=2),
        )
        merged = merge_plans(old, _new_plan())
        ids = [w.id for day in merged.iter_days() for w in day.workouts]
        assert "gone" not in ids
        assert merged.weeks[0].days[0].date == TODAY

    def test_inputs_untouched(self) -> None:
        old, new = _old_plan(), _new_plan()
        merge_plans(old, new)
        assert old.weeks[0].days[1].workouts[0].id == "old-tue"
        assert new.weeks[0].days[0].workouts[0].id == "new-mon"

    def test_merge_with_itself_is_stable(self) -> None:
        old = _old_plan()
        merged = merge_plans(old, old)
        assert [d.workouts for d in merged.iter_days()] == [d.workouts for d in old.iter_days()]
