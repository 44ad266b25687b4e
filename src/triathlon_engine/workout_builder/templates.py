"""Session templates: step structure for every generated session kind.

Each template lists its steps in order.  A step is sized one of three ways:

- ``fixed_minutes``: a set length (pre-sets, drills, strength warm-ups)
- ``share`` + ``cap``: a fraction of the whole session, capped
  (warm-ups and cool-downs)
- ``split``: a fraction of whatever time the fixed and shared steps leave;
  the last split step takes the remainder so step minutes always add up to
  the session length exactly.

Interval steps carry a ``rep_minutes`` pace so their instructions can state
a rep count that fits the time available.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from triathlon_engine.models.enums import Discipline, Intensity, SessionKind


@dataclass(frozen=True)
class StepTemplate:
    """Template for a single step within a session.

    Attributes:
        name: Step name shown to the athlete.
        intensity: Step intensity label.
        instructions: Coaching text; may contain ``{reps}``.
        zone: Target heart-rate zone (1-5), if any.
        cadence: Target cadence text, if any.
        target_pace: Target pace text, if any.
        fixed_minutes: Fixed step length.
        share: Fraction of the whole session (warm-up / cool-down).
        cap: Upper bound in minutes for ``share`` steps.
        split: Fraction of the flexible main-set time.
        rep_minutes: Minutes per work+recovery rep, for ``{reps}``.
        min_reps: Lower bound on the rep count.
        max_reps: Upper bound on the rep count (0 = unbounded).
        key_effort: Whether baseline pace/power targets apply to this step.
    """

    name: str
    intensity: Intensity
    instructions: str
    zone: int | None = None
    cadence: str | None = None
    target_pace: str | None = None
    fixed_minutes: int = 0
    share: float = 0.0
    cap: int = 0
    split: float = 0.0
    rep_minutes: float = 0.0
    min_reps: int = 0
    max_reps: int = 0
    key_effort: bool = False


@dataclass(frozen=True)
class SessionTemplate:
    """Complete template for a generated session kind."""

    discipline: Discipline
    title: str
    description: str
    steps: tuple[StepTemplate, ...]


def size_steps(template: SessionTemplate, total_minutes: int) -> list[int]:
    """Minutes for each step of *template*, summing to *total_minutes*.

    Raises:
        ValueError: If the fixed and shared steps leave no main-set time.
    """
    sizes = [0] * len(template.steps)
    split_indices: list[int] = []
    for i, step in enumerate(template.steps):
        if step.fixed_minutes:
            sizes[i] = step.fixed_minutes
        elif step.share:
            sizes[i] = min(step.cap, math.floor(total_minutes * step.share))
        else:
            split_indices.append(i)

    flexible = total_minutes - sum(sizes)
    if flexible <= 0 or not split_indices:
        raise ValueError(
            f"{template.title}: {total_minutes} min is too short for its structure"
        )

    allocated = 0
    for i in split_indices[:-1]:
        sizes[i] = math.floor(flexible * template.steps[i].split)
        allocated += sizes[i]
    sizes[split_indices[-1]] = flexible - allocated
    return sizes


def rep_count(step: StepTemplate, minutes: int) -> int:
    """Rep count that fits *minutes* for an interval step."""
    if not step.rep_minutes:
        return 0
    reps = max(step.min_reps, math.floor(minutes / step.rep_minutes))
    if step.max_reps:
        reps = min(reps, step.max_reps)
    return reps


def _warmup(instructions: str, cap: int, zone: int | None = 1, cadence: str | None = None,
            name: str = "Warm-up") -> StepTemplate:
    return StepTemplate(
        name=name, intensity=Intensity.EASY, instructions=instructions,
        zone=zone, cadence=cadence, share=0.15, cap=cap,
    )


def _cooldown(instructions: str, share: float, cap: int, zone: int | None = 1,
              cadence: str | None = None) -> StepTemplate:
    return StepTemplate(
        name="Cool-down", intensity=Intensity.RECOVERY, instructions=instructions,
        zone=zone, cadence=cadence, share=share, cap=cap,
    )


# ---------------------------------------------------------------------------
# Template definitions
# ---------------------------------------------------------------------------

SESSION_TEMPLATES: dict[SessionKind, SessionTemplate] = {
    # SWIM_ENDURANCE: warm-up | steady Z2 swim | cool-down
    SessionKind.SWIM_ENDURANCE: SessionTemplate(
        discipline=Discipline.SWIM,
        title="Endurance Swim",
        description="Build aerobic base with steady-state swimming",
        steps=(
            _warmup(
                "Easy freestyle, focus on long strokes and relaxed breathing. "
                "Alternate 50m freestyle with 25m drill (catch-up or fingertip drag).",
                cap=10,
            ),
            StepTemplate(
                name="Main Set - Steady Swim", intensity=Intensity.MODERATE,
                instructions=(
                    "Swim continuously at conversational pace. Focus on bilateral "
                    "breathing (every 3 strokes). Maintain stroke count per length. "
                    "If needed, take 10-second breaks at the wall every 200m."
                ),
                zone=2, split=1.0,
            ),
            _cooldown(
                "Easy backstroke or freestyle with focus on full exhale underwater. "
                "Stretch shoulders at the wall.",
                share=0.15, cap=10,
            ),
        ),
    ),

    # SWIM_INTERVALS: warm-up | 4 min build | threshold 100s | cool-down
    SessionKind.SWIM_INTERVALS: SessionTemplate(
        discipline=Discipline.SWIM,
        title="Swim Intervals",
        description="Build speed and lactate threshold with structured intervals",
        steps=(
            _warmup(
                "200m easy freestyle, 4x50m drill/swim by 25m (catch-up drill, then "
                "swim). Rest 10 seconds between 50s.",
                cap=10,
            ),
            StepTemplate(
                name="Pre-set", intensity=Intensity.MODERATE,
                instructions="4x25m build: start easy, finish at 80% effort. "
                "10 seconds rest between each.",
                zone=2, fixed_minutes=4,
            ),
            StepTemplate(
                name="Main Set - Threshold Intervals", intensity=Intensity.THRESHOLD,
                instructions=(
                    "{reps}x100m at threshold pace (comfortably hard, can speak a few "
                    "words). Take 15-20 seconds rest between each 100m. Focus on high "
                    "elbow catch and strong kick."
                ),
                zone=4, split=1.0, rep_minutes=2.5, min_reps=4, key_effort=True,
            ),
            _cooldown(
                "100m easy backstroke, 100m easy freestyle with long glide. "
                "Focus on releasing tension.",
                share=0.15, cap=10,
            ),
        ),
    ),

    # SWIM_TECHNIQUE: warm-up | catch drills | balance drills | application | cool-down
    SessionKind.SWIM_TECHNIQUE: SessionTemplate(
        discipline=Discipline.SWIM,
        title="Technique Swim",
        description="Improve swim efficiency with drills and focused practice",
        steps=(
            _warmup(
                "Easy freestyle with focus on exhaling fully underwater. "
                "Count strokes per length.",
                cap=10,
            ),
            StepTemplate(
                name="Drill Set - Catch", intensity=Intensity.EASY,
                instructions=(
                    "6x50m alternating: Catch-up drill (touch hands before next "
                    "stroke) and Fingertip drag drill. 15 seconds rest between each. "
                    "Focus on high elbow and feeling the water."
                ),
                zone=1, split=0.3,
            ),
            StepTemplate(
                name="Drill Set - Balance", intensity=Intensity.EASY,
                instructions=(
                    "4x50m side-kick drill (kick on your side, bottom arm extended, "
                    "top arm at side). Switch sides each 25m. 15 seconds rest."
                ),
                zone=1, split=0.3,
            ),
            StepTemplate(
                name="Technique Application", intensity=Intensity.MODERATE,
                instructions=(
                    "Swim freestyle applying drill focus. Every 25m, consciously check: "
                    "high elbow catch, hip rotation, steady kick. Count strokes and try "
                    "to reduce by 1-2 per length."
                ),
                zone=2, split=0.4,
            ),
            _cooldown(
                "Easy backstroke, focus on relaxation and breathing.",
                share=0.15, cap=10,
            ),
        ),
    ),

    # BIKE_ENDURANCE: warm-up | steady Z2 ride | cool-down
    SessionKind.BIKE_ENDURANCE: SessionTemplate(
        discipline=Discipline.BIKE,
        title="Endurance Ride",
        description="Build aerobic base with steady-state cycling",
        steps=(
            _warmup(
                "Easy spinning in a light gear. Gradually increase cadence from 75 to "
                "90 rpm. Stay seated, keep upper body relaxed.",
                cap=15, cadence="75-90 rpm",
            ),
            StepTemplate(
                name="Main Set - Steady Ride", intensity=Intensity.MODERATE,
                instructions=(
                    "Maintain steady effort at conversational pace. Keep cadence "
                    "between 85-95 rpm. On hills, shift to maintain cadence rather than "
                    "grinding. Stay aero when safe on flats. Drink every 15-20 minutes."
                ),
                zone=2, cadence="85-95 rpm", split=1.0,
            ),
            _cooldown(
                "Easy spinning in light gear. Let heart rate drop. Spin out the legs "
                "with high cadence, low resistance.",
                share=0.12, cap=10, cadence="90-100 rpm",
            ),
        ),
    ),

    # BIKE_INTERVALS: warm-up | 5 min activation | VO2max repeats | cool-down
    SessionKind.BIKE_INTERVALS: SessionTemplate(
        discipline=Discipline.BIKE,
        title="Bike Intervals",
        description="Build power and VO2max with high-intensity efforts",
        steps=(
            _warmup(
                "Progressive warm-up: 5 min very easy, then 5 min moderate with "
                "3x30-second spin-ups to open the legs. Recover 30 seconds between "
                "spin-ups.",
                cap=15, cadence="75-95 rpm",
            ),
            StepTemplate(
                name="Pre-set Activation", intensity=Intensity.MODERATE,
                instructions="2x1 min at tempo effort with 1 min easy between. "
                "Prepares legs for hard efforts.",
                zone=3, cadence="90-95 rpm", fixed_minutes=5,
            ),
            StepTemplate(
                name="Main Set - VO2max Intervals", intensity=Intensity.INTERVALS,
                instructions=(
                    "{reps}x3 min at hard effort (can't hold a conversation, but not "
                    "all-out). Recovery: 2 min easy spinning between each. Maintain "
                    "high cadence throughout. Stay seated for power, stand briefly if "
                    "needed to reset."
                ),
                zone=5, cadence="95-105 rpm", split=1.0,
                rep_minutes=5, min_reps=3, max_reps=8, key_effort=True,
            ),
            _cooldown(
                "Very easy spinning. Let heart rate drop below 60% max. Deep "
                "breathing, relax shoulders and grip.",
                share=0.12, cap=10, cadence="85-95 rpm",
            ),
        ),
    ),

    # BIKE_TEMPO: warm-up | tempo block | 5 min easy | tempo block | cool-down
    SessionKind.BIKE_TEMPO: SessionTemplate(
        discipline=Discipline.BIKE,
        title="Tempo Ride",
        description="Build sustained power at race-like intensity",
        steps=(
            _warmup(
                "Progressive warm-up with gradual increase in effort. Include 2x1 min "
                "at moderate effort to open legs.",
                cap=15, cadence="80-90 rpm",
            ),
            StepTemplate(
                name="Main Set - Tempo Block 1", intensity=Intensity.TEMPO,
                instructions=(
                    "Steady tempo effort - comfortably hard, can speak in short "
                    "sentences. Maintain consistent power regardless of terrain. "
                    "Focus on smooth pedaling circles."
                ),
                zone=3, cadence="85-95 rpm", split=0.5, key_effort=True,
            ),
            StepTemplate(
                name="Active Recovery", intensity=Intensity.EASY,
                instructions="Easy spinning, shake out legs, hydrate.",
                zone=1, cadence="90-100 rpm", fixed_minutes=5,
            ),
            StepTemplate(
                name="Main Set - Tempo Block 2", intensity=Intensity.TEMPO,
                instructions=(
                    "Return to tempo effort. Practice race-day focus: check position, "
                    "nutrition, pacing. Maintain effort even when legs feel heavy."
                ),
                zone=3, cadence="85-95 rpm", split=0.5, key_effort=True,
            ),
            _cooldown(
                "Easy spinning to flush legs. Reflect on the session - how did pacing "
                "feel?",
                share=0.12, cap=10, cadence="85-95 rpm",
            ),
        ),
    ),

    # RUN_EASY: walk/jog warm-up | conversational run | cool-down
    SessionKind.RUN_EASY: SessionTemplate(
        discipline=Discipline.RUN,
        title="Easy Run",
        description="Recovery and aerobic base building",
        steps=(
            _warmup(
                "Start with 3 min brisk walk, then transition to very easy jog. "
                "Include leg swings and high knees for 30 seconds each. Build into "
                "your running rhythm gradually.",
                cap=12, name="Warm-up Walk/Jog",
            ),
            StepTemplate(
                name="Main Run", intensity=Intensity.EASY,
                instructions=(
                    "Run at conversational pace - you should be able to speak in full "
                    "sentences. Focus on relaxed form: shoulders down, arms loose, "
                    "quick light steps. Cadence around 170-180 steps per minute."
                ),
                zone=2, target_pace="Conversational", split=1.0,
            ),
            _cooldown(
                "Slow jog transitioning to walk, then gentle stretching: calf, quad "
                "and hip flexor (30 seconds each leg).",
                share=0.12, cap=10,
            ),
        ),
    ),

    # RUN_LONG: walk/jog warm-up | long aerobic run | cool-down
    SessionKind.RUN_LONG: SessionTemplate(
        discipline=Discipline.RUN,
        title="Long Run",
        description="Build endurance with extended aerobic running",
        steps=(
            _warmup(
                "Start with 3 min brisk walk, then transition to very easy jog. "
                "Include leg swings and high knees for 30 seconds each. Build into "
                "your running rhythm gradually.",
                cap=12, name="Warm-up Walk/Jog",
            ),
            StepTemplate(
                name="Main Run", intensity=Intensity.MODERATE,
                instructions=(
                    "Run at conversational pace - you should be able to speak in full "
                    "sentences. Take walk breaks if needed (1 min walk every 15-20 min "
                    "is fine). Practice race-day nutrition by consuming gels/water. "
                    "Cadence around 170-180 steps per minute."
                ),
                zone=2, target_pace="Conversational", split=1.0,
            ),
            _cooldown(
                "Slow jog transitioning to walk, then gentle stretching: calf, quad "
                "and hip flexor (30 seconds each leg).",
                share=0.12, cap=10,
            ),
        ),
    ),

    # RUN_INTERVALS: warm-up | 3 min drills | speed repeats | cool-down
    SessionKind.RUN_INTERVALS: SessionTemplate(
        discipline=Discipline.RUN,
        title="Run Intervals",
        description="Build speed and running economy with structured intervals",
        steps=(
            _warmup(
                "Easy jog building from very slow to moderate. Last 2 min include "
                "4x15-second strides with 30-second easy jog between.",
                cap=12, name="Warm-up Jog",
            ),
            StepTemplate(
                name="Dynamic Drills", intensity=Intensity.EASY,
                instructions="High knees (30 sec), butt kicks (30 sec), A-skips "
                "(30 sec), B-skips (30 sec). Walk back between each drill.",
                zone=1, fixed_minutes=3,
            ),
            StepTemplate(
                name="Main Set - Speed Intervals", intensity=Intensity.INTERVALS,
                instructions=(
                    "{reps}x2 min at hard effort (can say a few words, not more). "
                    "Recovery: 90 seconds easy jog between each. Focus on quick "
                    "turnover and strong arm drive. Stay tall and relaxed even when "
                    "tired."
                ),
                zone=4, target_pace="Comfortably Hard", split=1.0,
                rep_minutes=3.5, min_reps=4, max_reps=10, key_effort=True,
            ),
            _cooldown(
                "Easy jog, then walk. Stretch: standing quad, calf on step, seated "
                "hamstring. Hold each 30-45 seconds.",
                share=0.12, cap=10,
            ),
        ),
    ),

    # RUN_TEMPO: warm-up | sustained tempo block | cool-down
    SessionKind.RUN_TEMPO: SessionTemplate(
        discipline=Discipline.RUN,
        title="Tempo Run",
        description="Build lactate threshold with sustained race-pace effort",
        steps=(
            _warmup(
                "Easy jog progressively building effort. Include 4x20-second pickups "
                "in the last 3 min to prime legs.",
                cap=12,
            ),
            StepTemplate(
                name="Main Set - Tempo Block", intensity=Intensity.TEMPO,
                instructions=(
                    'Run at "comfortably hard" pace - you can speak a few words but '
                    "prefer not to. This is near your 10K race pace or slightly slower. "
                    "Maintain consistent effort on hills. Focus: relaxed shoulders, "
                    "forward lean, quick feet."
                ),
                zone=3, target_pace="10K Race Pace", split=1.0, key_effort=True,
            ),
            _cooldown(
                "Gradually slow to easy jog, then walk. Include standing stretches "
                "and foam roll if available.",
                share=0.12, cap=10,
            ),
        ),
    ),

    # STRENGTH_CORE: warm-up | two stability circuits | glute work | stretch
    SessionKind.STRENGTH_CORE: SessionTemplate(
        discipline=Discipline.STRENGTH,
        title="Core Strength",
        description="Build core stability for better swim, bike, and run performance",
        steps=(
            StepTemplate(
                name="Warm-up", intensity=Intensity.EASY,
                instructions="Light cardio: jumping jacks, high knees, arm circles. "
                "Get blood flowing.",
                fixed_minutes=5,
            ),
            StepTemplate(
                name="Plank Circuit", intensity=Intensity.MODERATE,
                instructions=(
                    "3 sets x 45 sec forearm plank, then 2 sets x 30 sec side plank "
                    "each side. Keep hips level and core tight. Rest 30 sec between sets."
                ),
                split=0.4,
            ),
            StepTemplate(
                name="Anti-Rotation Circuit", intensity=Intensity.MODERATE,
                instructions=(
                    "3 sets x 10 reps each side of dead bug and bird dog. Keep the "
                    "lower back pressed down and hips square."
                ),
                split=0.35,
            ),
            StepTemplate(
                name="Glute Bridge", intensity=Intensity.MODERATE,
                instructions="3 sets x 15 reps. Drive hips up squeezing glutes, hold 2 "
                "seconds at top. Don't hyperextend the lower back.",
                split=0.25,
            ),
            StepTemplate(
                name="Cool-down Stretch", intensity=Intensity.RECOVERY,
                instructions="Cat-cow stretches, child's pose, and gentle spinal "
                "twists. Breathe deeply.",
                fixed_minutes=5,
            ),
        ),
    ),

    # STRENGTH_FULL: warm-up | lower body | single-leg | upper body | stretch
    SessionKind.STRENGTH_FULL: SessionTemplate(
        discipline=Discipline.STRENGTH,
        title="Full Body Strength",
        description="Build overall strength to improve power and prevent injuries",
        steps=(
            StepTemplate(
                name="Warm-up", intensity=Intensity.EASY,
                instructions="Dynamic stretches and light cardio to prepare muscles.",
                fixed_minutes=5,
            ),
            StepTemplate(
                name="Squats & Lunges", intensity=Intensity.MODERATE,
                instructions=(
                    "3 sets x 12 squats and 3 sets x 10 lunges each leg. Chest up, "
                    "knees tracking over toes. Rest 60 sec between sets."
                ),
                split=0.4,
            ),
            StepTemplate(
                name="Single-Leg Deadlift", intensity=Intensity.MODERATE,
                instructions="3 sets x 8 reps each leg. Hinge at the hip, keep the back "
                "flat. Use a wall for balance if needed.",
                split=0.3,
            ),
            StepTemplate(
                name="Push-ups & Plank", intensity=Intensity.MODERATE,
                instructions="3 sets x 10-15 push-ups, then 3 sets x 45 sec plank. "
                "Modify on knees if needed.",
                split=0.3,
            ),
            StepTemplate(
                name="Cool-down", intensity=Intensity.RECOVERY,
                instructions="Full body stretching: quads, hamstrings, hip flexors, "
                "chest, shoulders. Hold each 30 seconds.",
                fixed_minutes=5,
            ),
        ),
    ),
}


def get_template(kind: SessionKind) -> SessionTemplate:
    """Look up the template for a session kind."""
    return SESSION_TEMPLATES[kind]
