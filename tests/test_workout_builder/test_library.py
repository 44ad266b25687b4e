"""Tests for the built-in workout library."""

from triathlon_engine.math.durations import parse_step_minutes
from triathlon_engine.models.enums import Discipline, WorkoutCategory
from triathlon_engine.workout_builder.library import (
    WORKOUT_LIBRARY,
    closest_variation,
    get_variation_by_id,
    get_workout_by_id,
    get_workouts_by_category,
    get_workouts_by_discipline,
    instantiate,
)


class TestCatalogue:
    def test_ids_unique(self) -> None:
        ids = [w.id for w in WORKOUT_LIBRARY]
        assert len(ids) == len(set(ids))
        variation_ids = [v.id for w in WORKOUT_LIBRARY for v in w.variations]
        assert len(variation_ids) == len(set(variation_ids))

    def test_every_discipline_covered(self) -> None:
        for discipline in (Discipline.SWIM, Discipline.BIKE, Discipline.RUN,
                           Discipline.BRICK, Discipline.STRENGTH):
            assert get_workouts_by_discipline(discipline)
        assert get_workouts_by_discipline(Discipline.REST) == []

    def test_variation_steps_sum_to_duration(self) -> None:
        for workout in WORKOUT_LIBRARY:
            for variation in workout.variations:
                total = sum(parse_step_minutes(s.duration) for s in variation.steps)
                assert total == variation.duration, variation.id

    def test_variation_labels(self) -> None:
        ride = get_variation_by_id("bike-endurance-base", "bike-endurance-base-120")
        assert ride.label == "2 hours"
        assert get_variation_by_id("brick-long", "brick-long-150").label == "2.5 hours"
        assert get_variation_by_id("run-long", "run-long-90").label == "90 min"

    def test_css_test_structure(self) -> None:
        variation = get_variation_by_id("swim-css-test", "swim-css-test-45")
        assert [s.duration for s in variation.steps] == [
            "10 min", "5 min", "8 min", "5 min", "4 min", "13 min",
        ]


class TestLookups:
    def test_by_id(self) -> None:
        workout = get_workout_by_id("run-tempo")
        assert workout is not None
        assert workout.discipline == Discipline.RUN

    def test_missing_id(self) -> None:
        assert get_workout_by_id("nope") is None
        assert get_variation_by_id("nope", "nope-30") is None
        assert get_variation_by_id("run-tempo", "run-tempo-99") is None

    def test_by_category(self) -> None:
        tests = {w.id for w in get_workouts_by_category(WorkoutCategory.TEST)}
        assert tests == {"swim-css-test", "bike-ftp-test"}
        speed = [w.id for w in get_workouts_by_category(WorkoutCategory.SPEED)]
        assert speed == ["run-strides"]


class TestClosestVariation:
    def test_nearest(self) -> None:
        workout = get_workout_by_id("run-aerobic-base")
        assert closest_variation(workout, 50).duration == 45
        assert closest_variation(workout, 200).duration == 60

    def test_tie_goes_shorter(self) -> None:
        workout = get_workout_by_id("bike-endurance-base")
        assert closest_variation(workout, 75).duration == 60


class TestInstantiate:
    def test_plan_workout_from_variation(self) -> None:
        library_workout = get_workout_by_id("swim-intervals-100s")
        variation = library_workout.variations[0]
        workout = instantiate(library_workout, variation, workout_id="w9")
        assert workout.id == "w9"
        assert workout.discipline == Discipline.SWIM
        assert workout.total_duration == variation.duration
        assert workout.steps == variation.steps
        assert workout.library_workout_id == "swim-intervals-100s"
        assert workout.variation_id == "swim-intervals-100s-30"
        assert workout.tips == library_workout.tips
        assert workout.completion is None
