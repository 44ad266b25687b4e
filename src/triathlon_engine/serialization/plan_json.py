"""JSON serialization for plans, race configs and athlete profiles.

Produces plain dicts with camelCase keys (``raceConfig``, ``weekNumber``,
``isRestDay``, ``totalDuration`` ...) so stored plans stay readable by the
web client.  Enums are written as lowercase member names, dates as ISO
``YYYY-MM-DD`` and timestamps as ISO datetimes.  Optional fields are left
out when unset, and loading tolerates their absence.

All functions are pure (no file I/O).
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import IntEnum
from typing import Any, TypeVar

from triathlon_engine.math.dates import format_local_date, parse_local_date
from triathlon_engine.models.athlete import (
    DEFAULT_DISCIPLINE_SPLIT,
    AthleteProfile,
    DisciplineSplit,
    HeartRateZone,
    HeartRateZones,
    Injury,
    StrengthWeakness,
)
from triathlon_engine.models.enums import (
    CompletionStatus,
    Discipline,
    ExperienceLevel,
    Intensity,
    InjurySeverity,
    TrainingPhase,
    Weekday,
    ZoneMethod,
)
from triathlon_engine.models.plan import (
    Completion,
    PhaseLengths,
    TrainingDay,
    TrainingPlan,
    TrainingWeek,
    Workout,
    WorkoutStep,
)
from triathlon_engine.models.race import (
    RACE_DISTANCES,
    RaceConfig,
    RaceDistance,
    TargetTime,
    TypicalTimes,
)

E = TypeVar("E", bound=IntEnum)


def _enum_key(member: IntEnum) -> str:
    return member.name.lower()


def _enum(cls: type[E], value: str) -> E:
    try:
        return cls[value.upper()]
    except KeyError:
        raise ValueError(f"Unknown {cls.__name__} value: {value!r}") from None


def _optional(data: dict[str, Any], **fields: Any) -> dict[str, Any]:
    """Add *fields* to *data*, skipping None values."""
    data.update({k: v for k, v in fields.items() if v is not None})
    return data


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


# ---------------------------------------------------------------------------
# Race config
# ---------------------------------------------------------------------------


def race_config_to_dict(config: RaceConfig) -> dict:
    distance = config.distance
    return {
        "distance": {
            "id": distance.id,
            "name": distance.name,
            "swim": distance.swim,
            "bike": distance.bike,
            "run": distance.run,
            "typicalTimes": {
                "beginner": distance.typical_times.beginner,
                "intermediate": distance.typical_times.intermediate,
                "advanced": distance.typical_times.advanced,
            },
        },
        "raceName": config.race_name,
        "raceDate": format_local_date(config.race_date),
        "targetTime": {
            "hours": config.target_time.hours,
            "minutes": config.target_time.minutes,
        },
        "maxWeeklyHours": config.max_weekly_hours,
    }


def _distance_from_dict(data: dict | str) -> RaceDistance:
    # A bare id, or a partial dict, falls back to the standard distance.
    if isinstance(data, str):
        data = {"id": data}
    standard = RACE_DISTANCES.get(data["id"])
    times = data.get("typicalTimes")
    if times is not None:
        typical = TypicalTimes(times["beginner"], times["intermediate"], times["advanced"])
    elif standard is not None:
        typical = standard.typical_times
    else:
        typical = TypicalTimes("", "", "")

    def field(name: str) -> str:
        if name in data:
            return data[name]
        return getattr(standard, name) if standard else ""

    return RaceDistance(
        id=data["id"],
        name=field("name"),
        swim=field("swim"),
        bike=field("bike"),
        run=field("run"),
        typical_times=typical,
    )


def race_config_from_dict(data: dict) -> RaceConfig:
    target = data.get("targetTime") or {}
    return RaceConfig(
        distance=_distance_from_dict(data["distance"]),
        race_name=data.get("raceName", ""),
        race_date=parse_local_date(data["raceDate"]),
        target_time=TargetTime(int(target.get("hours", 0)), int(target.get("minutes", 0))),
        max_weekly_hours=float(data["maxWeeklyHours"]),
    )


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


def _step_to_dict(step: WorkoutStep) -> dict:
    return _optional(
        {
            "name": step.name,
            "duration": step.duration,
            "intensity": _enum_key(step.intensity),
            "instructions": step.instructions,
        },
        targetHeartRateZone=step.target_heart_rate_zone,
        targetPace=step.target_pace,
        cadence=step.cadence,
    )


def _completion_to_dict(completion: Completion) -> dict:
    return _optional(
        {
            "status": _enum_key(completion.status),
            "completedAt": completion.completed_at.isoformat(),
            "actualDuration": completion.actual_duration,
            "targetEffort": completion.target_effort,
        },
        perceivedEffort=completion.perceived_effort,
        notes=completion.notes,
    )


def _workout_to_dict(workout: Workout) -> dict:
    data = {
        "id": workout.id,
        "discipline": _enum_key(workout.discipline),
        "title": workout.title,
        "description": workout.description,
        "totalDuration": workout.total_duration,
        "steps": [_step_to_dict(s) for s in workout.steps],
        "tips": list(workout.tips),
    }
    return _optional(
        data,
        completion=_completion_to_dict(workout.completion) if workout.completion else None,
        libraryWorkoutId=workout.library_workout_id,
        variationId=workout.variation_id,
    )


def plan_to_dict(plan: TrainingPlan) -> dict:
    """Convert a TrainingPlan to a JSON-compatible dict."""
    return {
        "id": plan.id,
        "createdAt": plan.created_at.isoformat(),
        "raceConfig": race_config_to_dict(plan.race_config),
        "totalWeeks": plan.total_weeks,
        "phases": {
            "base": plan.phases.base,
            "build": plan.phases.build,
            "peak": plan.phases.peak,
            "taper": plan.phases.taper,
        },
        "weeks": [
            {
                "weekNumber": week.week_number,
                "phase": _enum_key(week.phase),
                "phaseWeek": week.phase_week,
                "focus": week.focus,
                "totalHours": week.total_hours,
                "days": [
                    {
                        "date": format_local_date(day.date),
                        "dayOfWeek": day.day_of_week,
                        "isRestDay": day.is_rest_day,
                        "workouts": [_workout_to_dict(w) for w in day.workouts],
                    }
                    for day in week.days
                ],
            }
            for week in plan.weeks
        ],
    }


def _step_from_dict(data: dict) -> WorkoutStep:
    return WorkoutStep(
        name=data["name"],
        duration=str(data.get("duration", "")),
        intensity=_enum(Intensity, data.get("intensity", "moderate")),
        instructions=data.get("instructions", ""),
        target_heart_rate_zone=data.get("targetHeartRateZone"),
        target_pace=data.get("targetPace"),
        cadence=data.get("cadence"),
    )


def _completion_from_dict(data: dict) -> Completion:
    return Completion(
        status=_enum(CompletionStatus, data["status"]),
        completed_at=datetime.fromisoformat(data["completedAt"]),
        actual_duration=_optional_int(data.get("actualDuration")),
        perceived_effort=data.get("perceivedEffort"),
        target_effort=int(data.get("targetEffort", 0)),
        notes=data.get("notes"),
    )


def _workout_from_dict(data: dict) -> Workout:
    completion = data.get("completion")
    return Workout(
        id=data["id"],
        discipline=_enum(Discipline, data["discipline"]),
        title=data.get("title", ""),
        description=data.get("description", ""),
        total_duration=int(data.get("totalDuration", 0)),
        steps=tuple(_step_from_dict(s) for s in data.get("steps", ())),
        tips=tuple(data.get("tips") or ()),
        completion=_completion_from_dict(completion) if completion else None,
        library_workout_id=data.get("libraryWorkoutId"),
        variation_id=data.get("variationId"),
    )


def _day_from_dict(data: dict) -> TrainingDay:
    workouts = tuple(_workout_from_dict(w) for w in data.get("workouts", ()))
    return TrainingDay(
        date=parse_local_date(data["date"]),
        day_of_week=data.get("dayOfWeek", ""),
        is_rest_day=bool(data.get("isRestDay", False)),
        workouts=workouts,
    )


def plan_from_dict(data: dict) -> TrainingPlan:
    """Rebuild a TrainingPlan from plan_to_dict() output.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a date or enum value is malformed.
    """
    phases = data.get("phases") or {}
    weeks = tuple(
        TrainingWeek(
            week_number=int(w["weekNumber"]),
            phase=_enum(TrainingPhase, w["phase"]),
            phase_week=int(w.get("phaseWeek", 1)),
            focus=w.get("focus", ""),
            total_hours=float(w.get("totalHours", 0.0)),
            days=tuple(_day_from_dict(d) for d in w.get("days", ())),
        )
        for w in data.get("weeks", ())
    )
    return TrainingPlan(
        id=data["id"],
        created_at=datetime.fromisoformat(data["createdAt"]),
        race_config=race_config_from_dict(data["raceConfig"]),
        total_weeks=int(data.get("totalWeeks", len(weeks))),
        phases=PhaseLengths(
            base=int(phases.get("base", 0)),
            build=int(phases.get("build", 0)),
            peak=int(phases.get("peak", 0)),
            taper=int(phases.get("taper", 0)),
        ),
        weeks=weeks,
    )


def plan_to_json_string(plan: TrainingPlan, indent: int = 2) -> str:
    """Serialize a TrainingPlan to a JSON string."""
    return json.dumps(plan_to_dict(plan), indent=indent)


def plan_from_json_string(text: str) -> TrainingPlan:
    """Parse a JSON string produced by plan_to_json_string()."""
    return plan_from_dict(json.loads(text))


# ---------------------------------------------------------------------------
# Athlete profile
# ---------------------------------------------------------------------------


def _zone_to_dict(zone: HeartRateZone) -> dict:
    return {
        "name": zone.name,
        "minHR": zone.min_hr,
        "maxHR": zone.max_hr,
        "description": zone.description,
    }


def _zone_from_dict(data: dict) -> HeartRateZone:
    return HeartRateZone(
        name=data["name"],
        min_hr=int(data["minHR"]),
        max_hr=int(data["maxHR"]),
        description=data.get("description", ""),
    )


def profile_to_dict(profile: AthleteProfile) -> dict:
    """Convert an AthleteProfile to a JSON-compatible dict."""
    data: dict[str, Any] = {
        "userId": profile.user_id,
        "experienceLevel": _enum_key(profile.experience_level),
        "injuries": [
            _optional(
                {
                    "id": i.id,
                    "bodyPart": i.body_part,
                    "severity": _enum_key(i.severity),
                    "isActive": i.is_active,
                },
                notes=i.notes,
            )
            for i in profile.injuries
        ],
        "restDayPreferences": [_enum_key(d) for d in profile.rest_day_preferences],
        "disciplineSplit": {
            "swim": profile.discipline_split.swim,
            "bike": profile.discipline_split.bike,
            "run": profile.discipline_split.run,
        },
    }
    sw = profile.strength_weakness
    zones = profile.heart_rate_zones
    return _optional(
        data,
        age=profile.age,
        trainingYearsExperience=profile.training_years,
        swimCSS=profile.swim_css,
        bikeFTP=profile.bike_ftp,
        runThresholdPace=profile.run_threshold_pace,
        lactateThresholdHR=profile.lactate_threshold_hr,
        strengthWeakness=(
            {"strongest": _enum_key(sw.strongest), "weakest": _enum_key(sw.weakest)}
            if sw else None
        ),
        heartRateZones=(
            {
                "maxHR": zones.max_hr,
                "restingHR": zones.resting_hr,
                "lthr": zones.lthr,
                "method": _enum_key(zones.method),
                **{
                    f"zone{n}": _zone_to_dict(z)
                    for n, z in enumerate(zones.zones, start=1)
                },
            }
            if zones else None
        ),
    )


def profile_from_dict(data: dict) -> AthleteProfile:
    """Rebuild an AthleteProfile; absent optional fields take their defaults."""
    split = data.get("disciplineSplit")
    sw = data.get("strengthWeakness")
    zones = data.get("heartRateZones")
    return AthleteProfile(
        user_id=data["userId"],
        experience_level=_enum(ExperienceLevel, data.get("experienceLevel", "intermediate")),
        age=data.get("age"),
        training_years=data.get("trainingYearsExperience"),
        swim_css=data.get("swimCSS"),
        bike_ftp=data.get("bikeFTP"),
        run_threshold_pace=data.get("runThresholdPace"),
        lactate_threshold_hr=data.get("lactateThresholdHR"),
        injuries=tuple(
            Injury(
                id=i["id"],
                body_part=i["bodyPart"],
                severity=_enum(InjurySeverity, i.get("severity", "minor")),
                is_active=bool(i.get("isActive", True)),
                notes=i.get("notes"),
            )
            for i in data.get("injuries", ())
        ),
        rest_day_preferences=tuple(
            _enum(Weekday, d) for d in data.get("restDayPreferences", ())
        ),
        discipline_split=(
            DisciplineSplit(int(split["swim"]), int(split["bike"]), int(split["run"]))
            if split else DEFAULT_DISCIPLINE_SPLIT
        ),
        strength_weakness=(
            StrengthWeakness(_enum(Discipline, sw["strongest"]), _enum(Discipline, sw["weakest"]))
            if sw else None
        ),
        heart_rate_zones=(
            HeartRateZones(
                max_hr=int(zones["maxHR"]),
                resting_hr=int(zones["restingHR"]),
                lthr=int(zones["lthr"]),
                method=_enum(ZoneMethod, zones.get("method", "lthr")),
                zone1=_zone_from_dict(zones["zone1"]),
                zone2=_zone_from_dict(zones["zone2"]),
                zone3=_zone_from_dict(zones["zone3"]),
                zone4=_zone_from_dict(zones["zone4"]),
                zone5=_zone_from_dict(zones["zone5"]),
            )
            if zones else None
        ),
    )
