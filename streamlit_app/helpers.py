"""Utility helpers bridging the Streamlit UI and the triathlon engine.

Pure functions for formatting, form -> model construction, plan
regeneration, and JSON persistence of profiles and plans.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from triathlon_engine import merge
from triathlon_engine.generator import PlanGenerator
from triathlon_engine.math.durations import step_weights
from triathlon_engine.models.athlete import (
    DEFAULT_DISCIPLINE_SPLIT,
    AthleteProfile,
    DisciplineSplit,
    Injury,
    StrengthWeakness,
)
from triathlon_engine.models.enums import (
    Discipline,
    ExperienceLevel,
    Intensity,
    InjurySeverity,
    TrainingPhase,
)
from triathlon_engine.models.plan import TrainingPlan, Workout, WorkoutStep
from triathlon_engine.models.race import RACE_DISTANCES, RaceConfig, TargetTime
from triathlon_engine.planning.rest_days import parse_rest_day_preferences
from triathlon_engine.serialization import (
    plan_from_dict,
    plan_to_dict,
    profile_from_dict,
    profile_to_dict,
)
from triathlon_engine.workout_builder.builder import new_workout_id

from config import PLANS_DIR, PROFILES_DIR

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(minutes: float) -> str:
    """Convert minutes to human string. e.g. 90.0 -> '1h 30m'."""
    if minutes <= 0:
        return "0m"
    h = int(minutes) // 60
    m = int(minutes) % 60
    if h > 0 and m > 0:
        return f"{h}h {m}m"
    if h > 0:
        return f"{h}h"
    return f"{m}m"


def format_hours(hours: float) -> str:
    """Week total for display. e.g. 7.5 -> '7.5 h'."""
    return f"{hours:g} h"


def format_target_time(target: TargetTime) -> str:
    """e.g. TargetTime(2, 45) -> '2:45'."""
    return f"{target.hours}:{target.minutes:02d}"


# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

DISCIPLINE_COLORS: dict[Discipline, str] = {
    Discipline.SWIM: "#4A90D9",      # blue
    Discipline.BIKE: "#F5B041",      # amber
    Discipline.RUN: "#2ECC71",       # green
    Discipline.BRICK: "#8E44AD",     # purple
    Discipline.STRENGTH: "#E74C3C",  # red
    Discipline.REST: "#D5DBDB",      # grey
}

INTENSITY_COLORS: dict[Intensity, str] = {
    Intensity.RECOVERY: "#AED6F1",
    Intensity.EASY: "#82E0AA",
    Intensity.MODERATE: "#F9E79F",
    Intensity.TEMPO: "#F5B041",
    Intensity.THRESHOLD: "#E67E22",
    Intensity.INTERVALS: "#E74C3C",
    Intensity.RACE: "#8E44AD",
}

PHASE_LABELS: dict[TrainingPhase, str] = {
    TrainingPhase.BASE: "Base",
    TrainingPhase.BUILD: "Build",
    TrainingPhase.PEAK: "Peak",
    TrainingPhase.TAPER: "Taper",
}

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def step_bars(workout: Workout) -> list[tuple[WorkoutStep, float, str]]:
    """(step, width %, colour) for each step's proportional bar."""
    return [
        (step, round(weight * 100, 1), INTENSITY_COLORS.get(step.intensity, "#CCCCCC"))
        for step, weight in zip(workout.steps, step_weights(workout.steps))
    ]


# ---------------------------------------------------------------------------
# Form -> model construction
# ---------------------------------------------------------------------------


def build_race_config(form: dict) -> RaceConfig:
    """Convert the race form dict into a RaceConfig.

    Dates may be ``date`` objects or ISO strings.
    """
    race_date = form["race_date"]
    if isinstance(race_date, str):
        race_date = date.fromisoformat(race_date)
    return RaceConfig(
        distance=RACE_DISTANCES[form.get("distance", "olympic")],
        race_name=form.get("race_name", ""),
        race_date=race_date,
        target_time=TargetTime(
            int(form.get("target_hours", 0)), int(form.get("target_minutes", 0))
        ),
        max_weekly_hours=float(form.get("max_weekly_hours", 10.0)),
    )


def build_profile(form: dict) -> AthleteProfile:
    """Convert the athlete form dict into an AthleteProfile.

    0 and empty strings mean "not provided" for optional baselines.
    """
    def opt_int(key: str) -> int | None:
        v = form.get(key, 0)
        return int(v) if v else None

    def opt_str(key: str) -> str | None:
        v = (form.get(key) or "").strip()
        return v or None

    split = form.get("discipline_split")
    strongest, weakest = form.get("strongest"), form.get("weakest")
    strength_weakness = None
    if strongest and weakest and strongest != weakest:
        strength_weakness = StrengthWeakness(
            Discipline[strongest.upper()], Discipline[weakest.upper()]
        )

    injuries = tuple(
        Injury(
            id=new_workout_id(),
            body_part=part.strip(),
            severity=InjurySeverity[form.get("injury_severity", "minor").upper()],
        )
        for part in form.get("injuries", ())
        if part.strip()
    )

    return AthleteProfile(
        user_id=form.get("user_id", "local"),
        experience_level=ExperienceLevel[form.get("experience_level", "intermediate").upper()],
        age=opt_int("age"),
        training_years=opt_int("training_years"),
        swim_css=opt_str("swim_css"),
        bike_ftp=opt_int("bike_ftp"),
        run_threshold_pace=opt_str("run_threshold_pace"),
        lactate_threshold_hr=opt_int("lactate_threshold_hr"),
        injuries=injuries,
        rest_day_preferences=parse_rest_day_preferences(form.get("rest_days", ())),
        discipline_split=DisciplineSplit(**split) if split else DEFAULT_DISCIPLINE_SPLIT,
        strength_weakness=strength_weakness,
    )


def regenerate_plan(
    race_config: RaceConfig,
    profile: AthleteProfile | None,
    saved_plan: TrainingPlan | None = None,
    strength_sessions_per_week: int = 1,
    today: date | None = None,
) -> TrainingPlan:
    """Generate a fresh plan and merge it over *saved_plan* when there is one."""
    generator = PlanGenerator(strength_sessions_per_week=strength_sessions_per_week)
    plan = generator.generate(race_config, profile, today=today)
    if saved_plan is None:
        return plan
    return merge(saved_plan, plan)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

_PROFILES_DIR = PROFILES_DIR
_PLANS_DIR = PLANS_DIR


def _safe_name(name: str, fallback: str) -> str:
    safe = "".join(c if c.isalnum() or c in "-_ " else "" for c in name).strip()
    return safe or fallback


def _write_json(directory: Path, name: str, data: dict) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.json"
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.debug("Wrote %s", path)
    return path


def _list_json(directory: Path) -> list[str]:
    directory.mkdir(parents=True, exist_ok=True)
    return sorted(p.stem for p in directory.glob("*.json"))


def save_profile(name: str, profile: AthleteProfile) -> Path:
    """Save a profile as JSON. Returns the file path."""
    return _write_json(_PROFILES_DIR, _safe_name(name, "profile"), profile_to_dict(profile))


def load_profile(name: str) -> AthleteProfile:
    """Load a profile saved by save_profile()."""
    with open(_PROFILES_DIR / f"{name}.json") as f:
        return profile_from_dict(json.load(f))


def list_profiles() -> list[str]:
    """List available profile names (without .json extension)."""
    return _list_json(_PROFILES_DIR)


def save_plan(name: str, plan: TrainingPlan) -> Path:
    """Save a plan as JSON. Returns the file path."""
    return _write_json(_PLANS_DIR, _safe_name(name, "plan"), plan_to_dict(plan))


def load_plan(name: str) -> TrainingPlan:
    """Load a plan saved by save_plan()."""
    with open(_PLANS_DIR / f"{name}.json") as f:
        return plan_from_dict(json.load(f))


def list_plans() -> list[str]:
    """List available plan names (without .json extension)."""
    return _list_json(_PLANS_DIR)
