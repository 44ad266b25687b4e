"""Tests for plan mutations: edit, swap, move, completion logging, split rebalance."""

import dataclasses
import itertools
from datetime import date, datetime, timedelta

import pytest

from factories import (
    TODAY,
    make_completion,
    make_plan,
    make_week,
    make_workout,
)
from triathlon_engine.errors import PlanMutationError, WorkoutNotFoundError
from triathlon_engine.models.athlete import DisciplineSplit
from triathlon_engine.models.enums import CompletionStatus, Discipline, Intensity
from triathlon_engine.planning.edits import (
    find_day,
    find_workout,
    log_completion,
    move_workout,
    rebalance_discipline_split,
    swap_workout,
    update_plan_with_workout,
)
from triathlon_engine.workout_builder.library import get_workout_by_id


def _plan(weeks: int = 1):
    """Mon run a (45), Tue swim b (30) + strength c (20), Wed logged run d (45)."""
    first = make_week(TODAY, workouts_by_day={
        0: (make_workout("a", 45),),
        1: (make_workout("b", 30, Discipline.SWIM),
            make_workout("c", 20, Discipline.STRENGTH)),
        2: (make_workout("d", 45, completion=make_completion()),),
    })
    rest = [
        make_week(TODAY + timedelta(weeks=n), week_number=n + 1)
        for n in range(1, weeks)
    ]
    return make_plan(first, *rest)


def _ids(plan, on: date) -> list[str]:
    return [w.id for w in plan.day(on).workouts]


def _training_ids(plan) -> list[str]:
    return sorted(
        w.id for d in plan.iter_days() for w in d.workouts if w.discipline != Discipline.REST
    )


def _id_factory():
    counter = itertools.count(1)
    return lambda: f"new-{next(counter)}"


class TestAddressing:
    def test_find_workout(self) -> None:
        assert find_workout(_plan(), "c") == (0, 1, 1)

    def test_find_workout_missing(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            find_workout(_plan(), "zzz")

    def test_not_found_is_a_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            find_workout(_plan(), "zzz")

    def test_find_day(self) -> None:
        assert find_day(_plan(2), TODAY + timedelta(days=9)) == (1, 2)

    def test_find_day_missing(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            find_day(_plan(), TODAY + timedelta(weeks=3))


class TestUpdatePlanWithWorkout:
    def test_replaces_and_recalculates(self) -> None:
        plan = _plan()
        result = update_plan_with_workout(plan, make_workout("a", 60), 0, 0, 0)
        assert result.weeks[0].days[0].workouts[0].total_duration == 60
        # 60 + 30 + 20 + 45 minutes
        assert result.weeks[0].total_hours == 2.6

    def test_original_untouched(self) -> None:
        plan = _plan()
        update_plan_with_workout(plan, make_workout("a", 60), 0, 0, 0)
        assert plan.weeks[0].days[0].workouts[0].total_duration == 45

    def test_new_date_relabels_day(self) -> None:
        result = update_plan_with_workout(
            _plan(), make_workout("a", 45), 0, 0, 0, new_date=TODAY + timedelta(days=1)
        )
        day = result.weeks[0].days[0]
        assert day.date == TODAY + timedelta(days=1)
        assert day.day_of_week == "Tuesday"

    def test_bad_index(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            update_plan_with_workout(_plan(), make_workout("a"), 0, 0, 5)
        with pytest.raises(WorkoutNotFoundError):
            update_plan_with_workout(_plan(), make_workout("a"), 3, 0, 0)

    @pytest.mark.parametrize("indices", [(-1, 0, 0), (0, -1, 0), (0, 0, -1)])
    def test_negative_index_does_not_wrap(self, indices) -> None:
        with pytest.raises(WorkoutNotFoundError):
            update_plan_with_workout(_plan(), make_workout("a"), *indices)

    def test_logged_completion_is_fixed(self) -> None:
        with pytest.raises(PlanMutationError):
            update_plan_with_workout(_plan(), make_workout("d", 45), 0, 2, 0)

    def test_logged_workout_other_fields_editable(self) -> None:
        plan = _plan()
        logged = plan.weeks[0].days[2].workouts[0]
        result = update_plan_with_workout(
            plan, dataclasses.replace(logged, title="Renamed"), 0, 2, 0
        )
        assert result.weeks[0].days[2].workouts[0].title == "Renamed"

    def test_replacing_with_rest_marks_rest_day(self) -> None:
        result = update_plan_with_workout(
            _plan(), make_workout("a", discipline=Discipline.REST), 0, 0, 0
        )
        assert result.weeks[0].days[0].is_rest_day


class TestSwapWorkout:
    def test_closest_variation_keeps_id(self) -> None:
        result = swap_workout(_plan(), "a", get_workout_by_id("run-tempo"))
        swapped = result.weeks[0].days[0].workouts[0]
        assert swapped.id == "a"
        assert swapped.title == "Tempo Run"
        assert swapped.library_workout_id == "run-tempo"
        assert swapped.variation_id == "run-tempo-45"

    def test_explicit_variation(self) -> None:
        result = swap_workout(_plan(), "a", get_workout_by_id("run-tempo"), "run-tempo-30")
        assert result.weeks[0].days[0].workouts[0].total_duration == 30
        # 30 + 30 + 20 + 45 minutes
        assert result.weeks[0].total_hours == 2.1

    def test_unknown_variation(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            swap_workout(_plan(), "a", get_workout_by_id("run-tempo"), "run-tempo-99")

    def test_logged_workout_cannot_be_swapped(self) -> None:
        with pytest.raises(PlanMutationError):
            swap_workout(_plan(), "d", get_workout_by_id("run-tempo"))

    def test_cross_discipline_swap(self) -> None:
        result = swap_workout(_plan(), "b", get_workout_by_id("strength-core"))
        tuesday = result.weeks[0].days[1]
        assert tuesday.workouts[0].discipline == Discipline.STRENGTH
        assert tuesday.workouts[0].total_duration == 30
        assert [w.id for w in tuesday.workouts] == ["b", "c"]


class TestMoveWorkout:
    def test_move_onto_rest_day(self) -> None:
        thursday = TODAY + timedelta(days=3)
        result = move_workout(_plan(), "a", thursday, _id_factory())
        assert _ids(result, thursday) == ["a"]
        assert not result.day(thursday).is_rest_day

    def test_emptied_day_becomes_rest(self) -> None:
        result = move_workout(_plan(), "a", TODAY + timedelta(days=3), _id_factory())
        monday = result.day(TODAY)
        assert monday.is_rest_day
        assert [w.id for w in monday.workouts] == ["new-1"]
        assert monday.workouts[0].discipline == Discipline.REST

    def test_partial_source_keeps_others(self) -> None:
        result = move_workout(_plan(), "c", TODAY + timedelta(days=2), _id_factory())
        assert _ids(result, TODAY + timedelta(days=1)) == ["b"]
        assert _ids(result, TODAY + timedelta(days=2)) == ["d", "c"]

    def test_same_day_is_noop(self) -> None:
        plan = _plan()
        assert move_workout(plan, "b", TODAY + timedelta(days=1)) is plan

    def test_logged_workout_can_move(self) -> None:
        result = move_workout(_plan(), "d", TODAY + timedelta(days=4), _id_factory())
        moved = result.day(TODAY + timedelta(days=4)).workouts[0]
        assert moved.id == "d"
        assert moved.completion is not None

    def test_across_weeks_recalculates_both(self) -> None:
        target = TODAY + timedelta(weeks=1, days=2)
        result = move_workout(_plan(2), "a", target, _id_factory())
        assert _ids(result, target) == ["a"]
        # 30 + 20 + 45 left in week 1
        assert result.weeks[0].total_hours == 1.6
        assert result.weeks[1].total_hours == 0.8

    def test_unknown_target_date(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            move_workout(_plan(), "a", TODAY + timedelta(weeks=5))

    def test_workout_count_preserved(self) -> None:
        plan = _plan()
        result = move_workout(plan, "b", TODAY + timedelta(days=6), _id_factory())
        assert _training_ids(result) == _training_ids(plan)


class TestLogCompletion:
    def test_completed_defaults_to_planned_duration(self) -> None:
        at = datetime(2025, 1, 6, 7, 30)
        result = log_completion(_plan(), "a", CompletionStatus.COMPLETED,
                                perceived_effort=4, completed_at=at)
        completion = result.day(TODAY).workouts[0].completion
        assert completion.actual_duration == 45
        assert completion.perceived_effort == 4
        assert completion.target_effort == 3
        assert completion.completed_at == at

    def test_skipped_records_nothing(self) -> None:
        result = log_completion(_plan(), "a", CompletionStatus.SKIPPED,
                                actual_duration=30, perceived_effort=6, notes="Sick")
        completion = result.day(TODAY).workouts[0].completion
        assert completion.actual_duration == 0
        assert completion.perceived_effort is None
        assert completion.notes == "Sick"

    def test_partial_needs_duration(self) -> None:
        with pytest.raises(ValueError):
            log_completion(_plan(), "a", CompletionStatus.PARTIAL)

    def test_partial(self) -> None:
        result = log_completion(_plan(), "a", CompletionStatus.PARTIAL, actual_duration=20)
        assert result.day(TODAY).workouts[0].completion.actual_duration == 20

    def test_rpe_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            log_completion(_plan(), "a", CompletionStatus.COMPLETED, perceived_effort=11)
        with pytest.raises(ValueError):
            log_completion(_plan(), "a", CompletionStatus.COMPLETED, perceived_effort=0)

    def test_negative_duration(self) -> None:
        with pytest.raises(ValueError):
            log_completion(_plan(), "a", CompletionStatus.COMPLETED, actual_duration=-5)

    def test_already_logged(self) -> None:
        with pytest.raises(PlanMutationError):
            log_completion(_plan(), "d", CompletionStatus.SKIPPED)

    def test_replace_existing(self) -> None:
        result = log_completion(_plan(), "d", CompletionStatus.SKIPPED, replace=True)
        completion = result.day(TODAY + timedelta(days=2)).workouts[0].completion
        assert completion.status == CompletionStatus.SKIPPED

    def test_target_effort_from_hardest_step(self) -> None:
        plan = _plan()
        tempo = make_workout("a", 45, intensity=Intensity.THRESHOLD)
        plan = update_plan_with_workout(plan, tempo, 0, 0, 0)
        result = log_completion(plan, "a", CompletionStatus.COMPLETED)
        assert result.day(TODAY).workouts[0].completion.target_effort == 7

    def test_unknown_workout(self) -> None:
        with pytest.raises(WorkoutNotFoundError):
            log_completion(_plan(), "zzz", CompletionStatus.COMPLETED)


class TestRebalanceDisciplineSplit:
    def test_others_keep_proportions(self) -> None:
        split = rebalance_discipline_split(DisciplineSplit(20, 50, 30), Discipline.SWIM, 40)
        assert split == DisciplineSplit(40, 37, 23)

    def test_others_zero_split_evenly(self) -> None:
        split = rebalance_discipline_split(DisciplineSplit(0, 0, 100), Discipline.RUN, 40)
        assert split == DisciplineSplit(30, 30, 40)

    def test_all_to_one(self) -> None:
        split = rebalance_discipline_split(DisciplineSplit(20, 45, 35), Discipline.RUN, 100)
        assert split == DisciplineSplit(0, 0, 100)

    def test_unchanged_value(self) -> None:
        split = rebalance_discipline_split(DisciplineSplit(20, 45, 35), Discipline.BIKE, 45)
        assert split == DisciplineSplit(20, 45, 35)

    def test_always_sums_to_100(self) -> None:
        base = DisciplineSplit(17, 46, 37)
        for discipline in (Discipline.SWIM, Discipline.BIKE, Discipline.RUN):
            for value in range(0, 101):
                s = rebalance_discipline_split(base, discipline, value)
                assert s.swim + s.bike + s.run == 100
                assert min(s.swim, s.bike, s.run) >= 0

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            rebalance_discipline_split(DisciplineSplit(20, 45, 35), Discipline.BRICK, 10)
        with pytest.raises(ValueError):
            rebalance_discipline_split(DisciplineSplit(20, 45, 35), Discipline.SWIM, 101)
