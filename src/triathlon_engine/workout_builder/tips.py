"""Session tips and baseline-derived targets.

Tips are short, phase-aware reminders attached to each generated workout.
Targets turn an athlete's tested baselines (swim CSS, bike FTP, run
threshold pace) into concrete pace or power text for key-effort steps.
"""

from __future__ import annotations

import re

from triathlon_engine.models.athlete import AthleteProfile
from triathlon_engine.models.enums import Discipline, Intensity, SessionKind, TrainingPhase

_PACE_RE = re.compile(r"^\s*(\d{1,2}):([0-5]\d)\s*$")

# Offsets from threshold pace in seconds (negative = faster)
_RUN_PACE_OFFSETS_S: dict[Intensity, tuple[int, int]] = {
    Intensity.TEMPO: (5, 15),
    Intensity.THRESHOLD: (-5, 5),
    Intensity.INTERVALS: (-20, -10),
}
_SWIM_PACE_OFFSETS_S: dict[Intensity, tuple[int, int]] = {
    Intensity.TEMPO: (3, 6),
    Intensity.THRESHOLD: (0, 3),
    Intensity.INTERVALS: (-4, -1),
}
# Coggan power zones as fraction of FTP
_BIKE_FTP_RANGE: dict[Intensity, tuple[float, float]] = {
    Intensity.TEMPO: (0.76, 0.90),
    Intensity.THRESHOLD: (0.91, 1.05),
    Intensity.INTERVALS: (1.06, 1.20),
}


def parse_pace(value: str | None) -> int | None:
    """Parse an ``"m:ss"`` pace string to seconds, or None if malformed."""
    if not value:
        return None
    match = _PACE_RE.match(value)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def format_pace(seconds: int) -> str:
    """Format seconds as ``"m:ss"``, e.g. 330 -> ``"5:30"``."""
    return f"{seconds // 60}:{seconds % 60:02d}"


def target_for(
    profile: AthleteProfile | None,
    discipline: Discipline,
    intensity: Intensity,
) -> str | None:
    """Pace or power target for a key-effort step, if a baseline exists."""
    if profile is None:
        return None

    if discipline == Discipline.RUN and intensity in _RUN_PACE_OFFSETS_S:
        threshold = parse_pace(profile.run_threshold_pace)
        if threshold is None:
            return None
        fast, slow = (threshold + o for o in _RUN_PACE_OFFSETS_S[intensity])
        return f"{format_pace(fast)}-{format_pace(slow)}/km"

    if discipline == Discipline.SWIM and intensity in _SWIM_PACE_OFFSETS_S:
        css = parse_pace(profile.swim_css)
        if css is None:
            return None
        fast, slow = (css + o for o in _SWIM_PACE_OFFSETS_S[intensity])
        return f"{format_pace(fast)}-{format_pace(slow)}/100m"

    if discipline == Discipline.BIKE and intensity in _BIKE_FTP_RANGE:
        if not profile.bike_ftp:
            return None
        low, high = _BIKE_FTP_RANGE[intensity]
        return (
            f"{round(low * 100)}-{round(high * 100)}% FTP "
            f"({round(profile.bike_ftp * low)}-{round(profile.bike_ftp * high)} W)"
        )

    return None


def session_tips(kind: SessionKind, phase: TrainingPhase) -> tuple[str, ...]:
    """Tips for a generated single-discipline session."""
    if kind in (SessionKind.SWIM_ENDURANCE, SessionKind.SWIM_INTERVALS,
                SessionKind.SWIM_TECHNIQUE):
        return (
            "Stay hydrated - drink water before and after",
            "If sharing lanes, follow circle swimming etiquette",
            "Focus on feeling smooth, not fast"
            if phase == TrainingPhase.TAPER
            else "Challenge yourself but maintain good form",
        )
    if kind in (SessionKind.BIKE_ENDURANCE, SessionKind.BIKE_INTERVALS,
                SessionKind.BIKE_TEMPO):
        return (
            "Fuel with 30-60g carbs per hour for rides over 90 minutes",
            "Check tire pressure and brakes before every ride",
            "Push through discomfort but respect early signs of injury"
            if phase in (TrainingPhase.BUILD, TrainingPhase.PEAK)
            else "Focus on consistency over intensity",
        )
    if kind in (SessionKind.STRENGTH_CORE, SessionKind.STRENGTH_FULL):
        return (
            "Quality over quantity - maintain good form throughout",
            "Breathe steadily, don't hold your breath",
            "Increase difficulty gradually over weeks",
        )
    return (
        "Run on softer surfaces when possible to reduce impact",
        "Practice your race-day nutrition strategy"
        if kind == SessionKind.RUN_LONG
        else "Focus on form, especially when tired",
        "Strength training helps prevent running injuries",
    )


BRICK_TIPS = (
    "Set up transition area before starting bike",
    "Elastic laces make shoe transitions faster",
    "Brick legs get better with practice - trust the process",
    "Hydrate and take in nutrition during the bike to fuel the run",
)

REST_TIPS = (
    "Rest is not laziness - it's essential for improvement",
    "Monitor for signs of overtraining: persistent fatigue, elevated resting HR, "
    "poor sleep",
    "Use this time to prep gear and plan upcoming workouts",
)
