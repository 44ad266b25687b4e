"""End-to-end: generate -> log -> edit -> regenerate -> merge -> persist."""

import dataclasses
import itertools
from datetime import timedelta

from factories import TODAY
from triathlon_engine import merge
from triathlon_engine.analysis.advisor import (
    calculate_compliance_stats,
    generate_recommendations,
)
from triathlon_engine.generator import PlanGenerator
from triathlon_engine.math.periodization import round_half_up
from triathlon_engine.models.enums import CompletionStatus, Discipline
from triathlon_engine.planning.edits import log_completion, move_workout, swap_workout
from triathlon_engine.planning.summary import week_minutes
from triathlon_engine.serialization import plan_from_json_string, plan_to_json_string
from triathlon_engine.workout_builder.library import get_workout_by_id


def _generator(prefix: str) -> PlanGenerator:
    counter = itertools.count(1)
    return PlanGenerator(id_factory=lambda: f"{prefix}{next(counter)}")


def _training(day):
    return [w for w in day.workouts if w.discipline != Discipline.REST]


class TestTrainingCycle:
    def test_log_then_regenerate_keeps_history(self, olympic_race, default_profile) -> None:
        plan = _generator("a").generate(olympic_race, default_profile, today=TODAY)
        week = plan.weeks[0]
        tuesday, wednesday = week.days[1], week.days[2]
        ride = _training(tuesday)[0]
        run = _training(wednesday)[0]

        plan = log_completion(plan, ride.id, CompletionStatus.COMPLETED, perceived_effort=4)
        plan = log_completion(plan, run.id, CompletionStatus.SKIPPED)

        harder = dataclasses.replace(olympic_race, max_weekly_hours=14.0)
        fresh = _generator("b").generate(harder, default_profile, today=TODAY)
        merged = merge(plan, fresh)

        assert merged.id == fresh.id
        assert merged.race_config.max_weekly_hours == 14.0
        assert merged.weeks[0].days[1].workouts == plan.weeks[0].days[1].workouts
        assert merged.weeks[0].days[2].workouts == plan.weeks[0].days[2].workouts
        # unlogged days take the regenerated content
        assert merged.weeks[0].days[3] == fresh.weeks[0].days[3]
        assert merged.weeks[5] == fresh.weeks[5]
        for merged_week in merged.weeks:
            assert merged_week.total_hours == round_half_up(week_minutes(merged_week) / 60, 1)

    def test_compliance_and_advice_after_logging(self, olympic_race, default_profile) -> None:
        plan = _generator("a").generate(olympic_race, default_profile, today=TODAY)
        week = plan.weeks[0]
        ride = _training(week.days[1])[0]
        wednesday = _training(week.days[2])

        plan = log_completion(plan, ride.id, CompletionStatus.COMPLETED, perceived_effort=8)
        plan = log_completion(plan, wednesday[0].id, CompletionStatus.SKIPPED)

        stats = calculate_compliance_stats(plan, TODAY + timedelta(days=2))
        assert stats.due_workouts == 1 + len(wednesday)
        assert (stats.completed, stats.skipped) == (1, 1)
        assert stats.unlogged == len(wednesday) - 1
        assert stats.score == 100 / stats.due_workouts

        # too few due workouts for compliance advice
        advice = generate_recommendations(plan, TODAY + timedelta(days=2))
        assert all(r.title != "Focus on Consistency" for r in advice)

    def test_edits_survive_persistence(self, olympic_race, default_profile) -> None:
        plan = _generator("a").generate(olympic_race, default_profile, today=TODAY)
        week = plan.weeks[0]
        swim = _training(week.days[3])[0]
        friday = week.days[4].date
        assert week.days[4].is_rest_day

        moved = move_workout(plan, swim.id, friday, id_factory=lambda: "rest-x")
        thursday, new_friday = moved.weeks[0].days[3], moved.weeks[0].days[4]
        assert thursday.is_rest_day
        assert [w.id for w in thursday.workouts] == ["rest-x"]
        assert [w.id for w in new_friday.workouts] == [swim.id]
        assert moved.weeks[0].total_hours == plan.weeks[0].total_hours

        long_run = _training(week.days[6])[0]
        swapped = swap_workout(moved, long_run.id, get_workout_by_id("run-tempo"))
        sunday = swapped.weeks[0].days[6].workouts[0]
        assert sunday.id == long_run.id
        assert sunday.title != long_run.title

        restored = plan_from_json_string(plan_to_json_string(swapped))
        assert restored == swapped

    def test_unlogged_edits_are_replaced_on_regenerate(
        self, olympic_race, default_profile
    ) -> None:
        plan = _generator("a").generate(olympic_race, default_profile, today=TODAY)
        swim = _training(plan.weeks[0].days[3])[0]
        moved = move_workout(plan, swim.id, plan.weeks[0].days[4].date)

        fresh = _generator("b").generate(olympic_race, default_profile, today=TODAY)
        merged = merge(moved, fresh)
        assert merged.weeks[0].days[4].is_rest_day
        assert merged.weeks == fresh.weeks

    def test_later_race_extends_plan(self, olympic_race, default_profile) -> None:
        plan = _generator("a").generate(olympic_race, default_profile, today=TODAY)
        ride = _training(plan.weeks[0].days[1])[0]
        plan = log_completion(plan, ride.id, CompletionStatus.PARTIAL, actual_duration=20)

        later = dataclasses.replace(
            olympic_race, race_date=olympic_race.race_date + timedelta(weeks=4)
        )
        merged = merge(plan, _generator("b").generate(later, default_profile, today=TODAY))
        assert merged.total_weeks == 16
        kept = merged.weeks[0].days[1].workouts[0]
        assert kept.completion.actual_duration == 20
