"""Tests for the dashboard helpers: formatting, form parsing and persistence."""

import dataclasses
from datetime import timedelta

import pytest

import helpers
from factories import TODAY
from triathlon_engine.models.athlete import DEFAULT_DISCIPLINE_SPLIT, DisciplineSplit
from triathlon_engine.models.enums import (
    CompletionStatus,
    Discipline,
    ExperienceLevel,
    InjurySeverity,
    Weekday,
)
from triathlon_engine.models.race import TargetTime
from triathlon_engine.planning.edits import log_completion


@pytest.fixture
def storage(tmp_path, monkeypatch):
    monkeypatch.setattr(helpers, "_PROFILES_DIR", tmp_path / "profiles")
    monkeypatch.setattr(helpers, "_PLANS_DIR", tmp_path / "plans")
    return tmp_path


class TestFormatting:
    def test_format_duration(self) -> None:
        assert helpers.format_duration(0) == "0m"
        assert helpers.format_duration(45) == "45m"
        assert helpers.format_duration(60) == "1h"
        assert helpers.format_duration(90.0) == "1h 30m"

    def test_format_hours(self) -> None:
        assert helpers.format_hours(7.5) == "7.5 h"
        assert helpers.format_hours(8.0) == "8 h"

    def test_format_target_time(self) -> None:
        assert helpers.format_target_time(TargetTime(2, 5)) == "2:05"

    def test_step_bars_cover_workout(self, olympic_plan) -> None:
        workout = olympic_plan.weeks[0].days[1].workouts[0]
        bars = helpers.step_bars(workout)
        assert len(bars) == len(workout.steps)
        assert sum(width for _, width, _ in bars) == pytest.approx(100, abs=0.5)


class TestForms:
    def test_build_race_config(self) -> None:
        config = helpers.build_race_config({
            "distance": "half",
            "race_name": "Autumn 70.3",
            "race_date": "2025-09-14",
            "target_hours": 5,
            "target_minutes": 30,
            "max_weekly_hours": "12",
        })
        assert config.distance.id == "half"
        assert config.race_date.isoformat() == "2025-09-14"
        assert config.target_time == TargetTime(5, 30)
        assert config.max_weekly_hours == 12.0

    def test_build_profile_defaults(self) -> None:
        profile = helpers.build_profile({})
        assert profile.experience_level == ExperienceLevel.INTERMEDIATE
        assert profile.bike_ftp is None
        assert profile.swim_css is None
        assert profile.rest_day_preferences == ()
        assert profile.discipline_split == DEFAULT_DISCIPLINE_SPLIT
        assert profile.strength_weakness is None

    def test_build_profile_full(self) -> None:
        profile = helpers.build_profile({
            "experience_level": "advanced",
            "age": 41,
            "bike_ftp": 0,
            "swim_css": " 1:50 ",
            "rest_days": ["friday", "Monday"],
            "discipline_split": {"swim": 30, "bike": 40, "run": 30},
            "strongest": "run",
            "weakest": "swim",
            "injuries": ["Left knee", "  "],
            "injury_severity": "severe",
        })
        assert profile.experience_level == ExperienceLevel.ADVANCED
        assert profile.age == 41
        assert profile.bike_ftp is None
        assert profile.swim_css == "1:50"
        assert profile.rest_day_preferences == (Weekday.MONDAY, Weekday.FRIDAY)
        assert profile.discipline_split == DisciplineSplit(swim=30, bike=40, run=30)
        assert profile.strength_weakness.weakest == Discipline.SWIM
        assert [i.body_part for i in profile.injuries] == ["Left knee"]
        assert profile.injuries[0].severity == InjurySeverity.SEVERE

    def test_same_strongest_and_weakest_ignored(self) -> None:
        profile = helpers.build_profile({"strongest": "bike", "weakest": "bike"})
        assert profile.strength_weakness is None


class TestRegeneratePlan:
    def test_without_saved_plan(self, olympic_race) -> None:
        plan = helpers.regenerate_plan(olympic_race, None, today=TODAY)
        assert plan.total_weeks == 12

    def test_keeps_logged_days(self, olympic_race, default_profile) -> None:
        saved = helpers.regenerate_plan(olympic_race, default_profile, today=TODAY)
        ride = saved.weeks[0].days[1].workouts[0]
        saved = log_completion(saved, ride.id, CompletionStatus.COMPLETED)

        shorter = dataclasses.replace(
            olympic_race, race_date=olympic_race.race_date - timedelta(weeks=2)
        )
        plan = helpers.regenerate_plan(shorter, default_profile, saved, today=TODAY)
        assert plan.total_weeks == 10
        assert plan.weeks[0].days[1].workouts[0] == saved.weeks[0].days[1].workouts[0]


class TestPersistence:
    def test_profile_round_trip(self, storage, detailed_profile) -> None:
        path = helpers.save_profile("Jo's profile", detailed_profile)
        assert path.parent == storage / "profiles"
        assert path.name == "Jos profile.json"
        assert helpers.list_profiles() == ["Jos profile"]
        assert helpers.load_profile("Jos profile") == detailed_profile

    def test_plan_round_trip(self, storage, olympic_plan) -> None:
        helpers.save_plan("spring", olympic_plan)
        helpers.save_plan("", olympic_plan)
        assert helpers.list_plans() == ["plan", "spring"]
        assert helpers.load_plan("spring") == olympic_plan

    def test_empty_listing(self, storage) -> None:
        assert helpers.list_plans() == []
        assert helpers.list_profiles() == []

    def test_missing_plan(self, storage) -> None:
        with pytest.raises(FileNotFoundError):
            helpers.load_plan("nope")
