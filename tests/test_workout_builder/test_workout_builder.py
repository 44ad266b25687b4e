"""Tests for WorkoutBuilder: generated sessions, bricks and rest days."""

import itertools

import pytest

from triathlon_engine.math.durations import parse_step_minutes
from triathlon_engine.models.athlete import AthleteProfile
from triathlon_engine.models.enums import Discipline, Intensity, SessionKind, TrainingPhase
from triathlon_engine.workout_builder.builder import WorkoutBuilder, rest_workout


def _builder(profile: AthleteProfile | None = None) -> WorkoutBuilder:
    counter = itertools.count(1)
    return WorkoutBuilder(profile, id_factory=lambda: f"id-{next(counter)}")


def _baselines() -> AthleteProfile:
    return AthleteProfile(
        user_id="u1", swim_css="1:45", bike_ftp=250, run_threshold_pace="4:30"
    )


class TestBuild:
    def test_basic_fields(self) -> None:
        workout = _builder().build(SessionKind.RUN_TEMPO, 45, TrainingPhase.BUILD)
        assert workout.id == "id-1"
        assert workout.discipline == Discipline.RUN
        assert workout.title == "Tempo Run"
        assert workout.total_duration == 45
        assert workout.completion is None

    def test_steps_sum_to_total(self) -> None:
        workout = _builder().build(SessionKind.BIKE_TEMPO, 75, TrainingPhase.BUILD)
        assert sum(parse_step_minutes(s.duration) for s in workout.steps) == 75

    def test_run_pace_from_threshold(self) -> None:
        workout = _builder(_baselines()).build(SessionKind.RUN_TEMPO, 45, TrainingPhase.BUILD)
        assert workout.steps[1].target_pace == "4:35-4:45/km"

    def test_swim_pace_from_css(self) -> None:
        workout = _builder(_baselines()).build(
            SessionKind.SWIM_INTERVALS, 45, TrainingPhase.BUILD
        )
        assert workout.steps[2].target_pace == "1:45-1:48/100m"

    def test_bike_power_from_ftp(self) -> None:
        workout = _builder(_baselines()).build(
            SessionKind.BIKE_INTERVALS, 60, TrainingPhase.PEAK
        )
        main = workout.steps[2]
        assert main.target_pace == "106-120% FTP (265-300 W)"
        assert main.instructions.startswith("7x3 min")

    def test_no_profile_keeps_template_targets(self) -> None:
        workout = _builder().build(SessionKind.RUN_TEMPO, 45, TrainingPhase.BUILD)
        assert workout.steps[1].target_pace == "10K Race Pace"

    def test_phase_specific_tips(self) -> None:
        taper = _builder().build(SessionKind.SWIM_ENDURANCE, 30, TrainingPhase.TAPER)
        assert "Focus on feeling smooth, not fast" in taper.tips

    def test_too_short_raises(self) -> None:
        with pytest.raises(ValueError):
            _builder().build(SessionKind.STRENGTH_FULL, 10, TrainingPhase.BASE)


class TestBuildBrick:
    def test_total_includes_transition(self) -> None:
        brick = _builder().build_brick(60, 30)
        assert brick.discipline == Discipline.BRICK
        assert brick.total_duration == 93
        assert sum(parse_step_minutes(s.duration) for s in brick.steps) == 93

    def test_leg_structure(self) -> None:
        brick = _builder().build_brick(60, 30)
        assert [s.duration for s in brick.steps] == [
            "10 min", "45 min", "5 min", "3 min", "8 min", "17 min", "5 min",
        ]
        assert brick.steps[3].name == "T2 Transition Practice"

    def test_run_target_from_threshold(self) -> None:
        brick = _builder(_baselines()).build_brick(60, 30)
        assert brick.steps[5].target_pace == "4:35-4:45/km"

    def test_short_legs_raise(self) -> None:
        with pytest.raises(ValueError):
            _builder().build_brick(19, 30)
        with pytest.raises(ValueError):
            _builder().build_brick(60, 13)


class TestRestWorkout:
    def test_zero_planned_minutes(self) -> None:
        rest = rest_workout("r1")
        assert rest.id == "r1"
        assert rest.discipline == Discipline.REST
        assert rest.total_duration == 0
        assert rest.title == "Rest Day"

    def test_suggestions_are_recovery(self) -> None:
        rest = _builder().build_rest()
        assert all(s.intensity == Intensity.RECOVERY for s in rest.steps)
        assert rest.steps[1].duration == "As needed"
