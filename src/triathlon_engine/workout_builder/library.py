"""Built-in workout library.

Reusable sessions an athlete can browse or swap into a plan.  Each entry
offers one or more fixed-length variations; variation steps are sized from
a session template so their minutes always add up to the variation length.
Entries that match a generated session kind share its template.
"""

from __future__ import annotations

from triathlon_engine.models.enums import (
    Difficulty,
    Discipline,
    Intensity,
    SessionKind,
    WorkoutCategory,
)
from triathlon_engine.models.library import LibraryWorkout, WorkoutVariation
from triathlon_engine.models.plan import Workout
from triathlon_engine.workout_builder.builder import render_steps
from triathlon_engine.workout_builder.templates import (
    SessionTemplate,
    StepTemplate,
    get_template,
)


def _label(minutes: int) -> str:
    if minutes >= 120 and minutes % 30 == 0:
        hours = minutes / 60
        return f"{hours:g} hours"
    return f"{minutes} min"


def _entry(
    workout_id: str,
    category: WorkoutCategory,
    difficulty: Difficulty,
    intensity: Intensity,
    template: SessionTemplate,
    durations: tuple[int, ...],
    equipment: tuple[str, ...] = (),
    tips: tuple[str, ...] = (),
    title: str | None = None,
    description: str | None = None,
) -> LibraryWorkout:
    variations = tuple(
        WorkoutVariation(
            id=f"{workout_id}-{minutes}",
            duration=minutes,
            label=_label(minutes),
            steps=render_steps(template, minutes),
        )
        for minutes in durations
    )
    return LibraryWorkout(
        id=workout_id,
        discipline=template.discipline,
        category=category,
        title=title or template.title,
        description=description or template.description,
        difficulty=difficulty,
        intensity=intensity,
        variations=variations,
        equipment=equipment,
        tips=tips,
    )


# ---------------------------------------------------------------------------
# Library-only templates
# ---------------------------------------------------------------------------

_CSS_TEST = SessionTemplate(
    discipline=Discipline.SWIM,
    title="CSS Test (Critical Swim Speed)",
    description="Determine your threshold pace for structured swim training",
    steps=(
        StepTemplate(name="Warm-up", intensity=Intensity.EASY,
                     instructions="400m easy freestyle with focus on form",
                     zone=1, fixed_minutes=10),
        StepTemplate(name="Drill Set", intensity=Intensity.EASY,
                     instructions="4x50m drills: catch-up, fingertip drag, fist swim, normal",
                     zone=1, fixed_minutes=5),
        StepTemplate(name="400m Time Trial", intensity=Intensity.THRESHOLD,
                     instructions="All-out 400m effort. Record your time.",
                     zone=4, fixed_minutes=8),
        StepTemplate(name="Recovery", intensity=Intensity.RECOVERY,
                     instructions="Easy backstroke", zone=1, fixed_minutes=5),
        StepTemplate(name="200m Time Trial", intensity=Intensity.THRESHOLD,
                     instructions="All-out 200m effort. Record your time.",
                     zone=5, fixed_minutes=4),
        StepTemplate(name="Cool-down", intensity=Intensity.RECOVERY,
                     instructions="Easy swim, stretch at wall", zone=1, split=1.0),
    ),
)

_FTP_TEST = SessionTemplate(
    discipline=Discipline.BIKE,
    title="FTP Test (20 min)",
    description="Estimate functional threshold power from a 20 minute effort",
    steps=(
        StepTemplate(name="Warm-up", intensity=Intensity.EASY,
                     instructions="Progressive spin from easy to moderate",
                     zone=1, cadence="85-95 rpm", fixed_minutes=15),
        StepTemplate(name="Openers", intensity=Intensity.THRESHOLD,
                     instructions="3x1 min hard with 1 min easy between",
                     zone=4, cadence="95-105 rpm", fixed_minutes=5),
        StepTemplate(name="Recovery", intensity=Intensity.EASY,
                     instructions="Easy spinning before the test",
                     zone=1, fixed_minutes=5),
        StepTemplate(name="20 min Time Trial", intensity=Intensity.THRESHOLD,
                     instructions="Hardest sustainable 20 minute effort. Record average "
                     "power. FTP is about 95% of it.",
                     zone=4, cadence="90-100 rpm", fixed_minutes=20),
        StepTemplate(name="Cool-down", intensity=Intensity.RECOVERY,
                     instructions="Very easy spinning", zone=1, split=1.0),
    ),
)

_RECOVERY_RIDE = SessionTemplate(
    discipline=Discipline.BIKE,
    title="Active Recovery Ride",
    description="Very easy spinning to promote blood flow and recovery",
    steps=(
        StepTemplate(name="Easy Spin", intensity=Intensity.RECOVERY,
                     instructions="Light gear, high cadence, no pressure on the pedals",
                     zone=1, cadence="90-100 rpm", split=1.0),
    ),
)

_RECOVERY_RUN = SessionTemplate(
    discipline=Discipline.RUN,
    title="Easy Recovery Run",
    description="Gentle running to aid recovery between harder sessions",
    steps=(
        StepTemplate(name="Walk", intensity=Intensity.RECOVERY,
                     instructions="Brisk walk to loosen up", zone=1, fixed_minutes=3),
        StepTemplate(name="Easy Jog", intensity=Intensity.RECOVERY,
                     instructions="Very easy jog, slower than feels natural",
                     zone=1, target_pace="Very easy", split=1.0),
        StepTemplate(name="Walk", intensity=Intensity.RECOVERY,
                     instructions="Walk and stretch calves and quads",
                     zone=1, fixed_minutes=2),
    ),
)

_STRIDES = SessionTemplate(
    discipline=Discipline.RUN,
    title="Strides & Form",
    description="Short, fast, relaxed strides to sharpen running economy",
    steps=(
        StepTemplate(name="Warm-up Jog", intensity=Intensity.EASY,
                     instructions="Easy jog with leg swings at the end",
                     zone=1, fixed_minutes=10),
        StepTemplate(name="Strides", intensity=Intensity.INTERVALS,
                     instructions="6-8x20 sec fast but relaxed strides, full walk-back "
                     "recovery. Quick feet, tall posture.",
                     zone=4, split=0.5),
        StepTemplate(name="Easy Running", intensity=Intensity.EASY,
                     instructions="Conversational running, holding the stride form",
                     zone=2, split=0.5),
        StepTemplate(name="Cool-down", intensity=Intensity.RECOVERY,
                     instructions="Walk and stretch", zone=1, fixed_minutes=5),
    ),
)

_RUNNER_STRENGTH = SessionTemplate(
    discipline=Discipline.STRENGTH,
    title="Runner's Strength",
    description="Build running-specific strength and injury prevention",
    steps=(
        StepTemplate(name="Warm-up", intensity=Intensity.EASY,
                     instructions="Dynamic stretches, leg swings", fixed_minutes=5),
        StepTemplate(name="Squats & Lunges", intensity=Intensity.MODERATE,
                     instructions="3x12 squats, 3x10 lunges each leg", split=0.4),
        StepTemplate(name="Single-Leg Work", intensity=Intensity.MODERATE,
                     instructions="3x8 single-leg deadlifts each leg, 3x15 calf raises",
                     split=0.35),
        StepTemplate(name="Hip Thrusts", intensity=Intensity.MODERATE,
                     instructions="3x12, back on bench or floor", split=0.25),
        StepTemplate(name="Stretch", intensity=Intensity.RECOVERY,
                     instructions="Hip flexors, quads, calves", fixed_minutes=5),
    ),
)


def _brick(title: str, description: str, main: Intensity, zone: int,
           run_instructions: str) -> SessionTemplate:
    return SessionTemplate(
        discipline=Discipline.BRICK,
        title=title,
        description=description,
        steps=(
            StepTemplate(name="Bike Warm-up", intensity=Intensity.EASY,
                         instructions="Easy spinning", zone=1, cadence="85-95 rpm",
                         fixed_minutes=10),
            StepTemplate(name="Bike Main", intensity=main,
                         instructions="Steady effort, fuel as you would on race day. "
                         "Last 5 min increase cadence.",
                         zone=zone, cadence="85-95 rpm", split=0.7),
            StepTemplate(name="T2", intensity=Intensity.RECOVERY,
                         instructions="Quick change to run gear", zone=1, fixed_minutes=2),
            StepTemplate(name="Run", intensity=main, instructions=run_instructions,
                         zone=zone, split=0.3),
            StepTemplate(name="Cool-down", intensity=Intensity.RECOVERY,
                         instructions="Walk/jog", zone=1, fixed_minutes=5),
        ),
    )


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

SWIM_WORKOUTS: tuple[LibraryWorkout, ...] = (
    _entry("swim-css-test", WorkoutCategory.TEST, Difficulty.INTERMEDIATE,
           Intensity.THRESHOLD, _CSS_TEST, (45,), equipment=("pool", "stopwatch"),
           tips=("CSS = (400m time - 200m time) / 2 = your pace per 100m",
                 "Retest every 6-8 weeks to track progress")),
    _entry("swim-endurance-steady", WorkoutCategory.ENDURANCE, Difficulty.BEGINNER,
           Intensity.MODERATE, get_template(SessionKind.SWIM_ENDURANCE), (30, 45, 60),
           equipment=("pool",), title="Steady State Endurance",
           tips=("Focus on stroke efficiency over speed",
                 "Count strokes per length to monitor fatigue")),
    _entry("swim-intervals-100s", WorkoutCategory.INTERVALS, Difficulty.INTERMEDIATE,
           Intensity.THRESHOLD, get_template(SessionKind.SWIM_INTERVALS), (30, 45),
           equipment=("pool", "pace clock"), title="100m Repeats",
           tips=("Hold the same pace on every repeat",)),
    _entry("swim-technique-drills", WorkoutCategory.TECHNIQUE, Difficulty.BEGINNER,
           Intensity.EASY, get_template(SessionKind.SWIM_TECHNIQUE), (30, 45),
           equipment=("pool", "fins (optional)"), title="Technique & Drill Focus",
           tips=("Slow down to get each drill right",)),
)

BIKE_WORKOUTS: tuple[LibraryWorkout, ...] = (
    _entry("bike-ftp-test", WorkoutCategory.TEST, Difficulty.ADVANCED,
           Intensity.THRESHOLD, _FTP_TEST, (60,), equipment=("bike", "power meter"),
           tips=("Start the time trial slightly conservative",
                 "Retest every 6-8 weeks")),
    _entry("bike-endurance-base", WorkoutCategory.ENDURANCE, Difficulty.BEGINNER,
           Intensity.MODERATE, get_template(SessionKind.BIKE_ENDURANCE),
           (45, 60, 90, 120), equipment=("bike",), title="Aerobic Base Ride",
           tips=("Keep it conversational", "Eat and drink on rides over 90 minutes")),
    _entry("bike-vo2max-intervals", WorkoutCategory.INTERVALS, Difficulty.ADVANCED,
           Intensity.INTERVALS, get_template(SessionKind.BIKE_INTERVALS), (45, 60),
           equipment=("bike", "trainer (optional)"), title="VO2max Intervals",
           tips=("Hard but controlled, not all-out",)),
    _entry("bike-tempo-cruise", WorkoutCategory.TEMPO, Difficulty.INTERMEDIATE,
           Intensity.TEMPO, get_template(SessionKind.BIKE_TEMPO), (60, 90),
           equipment=("bike",), title="Tempo Cruise",
           tips=("Practice race-day position and fuelling",)),
    _entry("bike-recovery", WorkoutCategory.RECOVERY, Difficulty.BEGINNER,
           Intensity.RECOVERY, _RECOVERY_RIDE, (30, 45), equipment=("bike",),
           tips=("If it feels like training, go easier",)),
)

RUN_WORKOUTS: tuple[LibraryWorkout, ...] = (
    _entry("run-easy-recovery", WorkoutCategory.RECOVERY, Difficulty.BEGINNER,
           Intensity.RECOVERY, _RECOVERY_RUN, (20, 30), equipment=("running shoes",),
           tips=("Soft surfaces are ideal",)),
    _entry("run-aerobic-base", WorkoutCategory.ENDURANCE, Difficulty.BEGINNER,
           Intensity.EASY, get_template(SessionKind.RUN_EASY), (30, 45, 60),
           equipment=("running shoes",), title="Aerobic Base Run",
           tips=("You should be able to hold a conversation",)),
    _entry("run-tempo", WorkoutCategory.TEMPO, Difficulty.INTERMEDIATE,
           Intensity.TEMPO, get_template(SessionKind.RUN_TEMPO), (30, 45),
           equipment=("running shoes",),
           tips=("Even effort beats even pace on hills",)),
    _entry("run-track-intervals", WorkoutCategory.INTERVALS, Difficulty.INTERMEDIATE,
           Intensity.INTERVALS, get_template(SessionKind.RUN_INTERVALS), (35, 45),
           equipment=("running shoes", "track (optional)"), title="Track Intervals",
           tips=("Keep the last rep as fast as the first",)),
    _entry("run-strides", WorkoutCategory.SPEED, Difficulty.BEGINNER,
           Intensity.INTERVALS, _STRIDES, (30, 40), equipment=("running shoes",),
           tips=("Strides are fast, never a sprint",)),
    _entry("run-long", WorkoutCategory.ENDURANCE, Difficulty.INTERMEDIATE,
           Intensity.MODERATE, get_template(SessionKind.RUN_LONG), (60, 75, 90),
           equipment=("running shoes", "nutrition"),
           tips=("Time on feet matters more than pace",
                 "Practice race nutrition")),
)

BRICK_WORKOUTS: tuple[LibraryWorkout, ...] = (
    _entry("brick-short", WorkoutCategory.TEMPO, Difficulty.BEGINNER,
           Intensity.MODERATE,
           _brick("Short Brick", "Quick bike-to-run transition practice",
                  Intensity.MODERATE, 2, "Start easy, find your rhythm by 5 min"),
           (45,), equipment=("bike", "running shoes"),
           tips=("Practice fast transitions",
                 "Expect heavy legs - they will come around")),
    _entry("brick-race-sim", WorkoutCategory.TEMPO, Difficulty.ADVANCED,
           Intensity.TEMPO,
           _brick("Race Simulation Brick", "Race-pace bike and run simulation",
                  Intensity.TEMPO, 3, "Patient build, then settle into race effort"),
           (90,), equipment=("bike", "running shoes", "race nutrition"),
           tips=("Practice everything as you would race",
                 "Test your nutrition strategy")),
    _entry("brick-long", WorkoutCategory.ENDURANCE, Difficulty.ADVANCED,
           Intensity.MODERATE,
           _brick("Long Endurance Brick", "Extended bike-to-run for half/full distance prep",
                  Intensity.MODERATE, 2, "Start easy, settle into steady effort"),
           (150,), equipment=("bike", "running shoes", "nutrition"),
           tips=("This is about time on feet, not speed",
                 "Recovery is crucial after long bricks")),
)

STRENGTH_WORKOUTS: tuple[LibraryWorkout, ...] = (
    _entry("strength-core", WorkoutCategory.STRENGTH, Difficulty.BEGINNER,
           Intensity.MODERATE, get_template(SessionKind.STRENGTH_CORE), (20, 30),
           equipment=("mat",), title="Core Circuit",
           tips=("Quality over quantity", "Breathe steadily throughout")),
    _entry("strength-runner", WorkoutCategory.STRENGTH, Difficulty.INTERMEDIATE,
           Intensity.MODERATE, _RUNNER_STRENGTH, (30,),
           equipment=("mat", "optional dumbbells"),
           tips=("Focus on single-leg strength",)),
    _entry("strength-full-body", WorkoutCategory.STRENGTH, Difficulty.INTERMEDIATE,
           Intensity.MODERATE, get_template(SessionKind.STRENGTH_FULL), (40,),
           equipment=("mat", "dumbbells or resistance bands"),
           tips=("Rest 60-90 sec between sets", "Increase weight progressively")),
)

WORKOUT_LIBRARY: tuple[LibraryWorkout, ...] = (
    SWIM_WORKOUTS + BIKE_WORKOUTS + RUN_WORKOUTS + BRICK_WORKOUTS + STRENGTH_WORKOUTS
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_workouts_by_discipline(discipline: Discipline) -> list[LibraryWorkout]:
    return [w for w in WORKOUT_LIBRARY if w.discipline == discipline]


def get_workouts_by_category(category: WorkoutCategory) -> list[LibraryWorkout]:
    return [w for w in WORKOUT_LIBRARY if w.category == category]


def get_workout_by_id(workout_id: str) -> LibraryWorkout | None:
    for workout in WORKOUT_LIBRARY:
        if workout.id == workout_id:
            return workout
    return None


def get_variation_by_id(workout_id: str, variation_id: str) -> WorkoutVariation | None:
    workout = get_workout_by_id(workout_id)
    return workout.variation(variation_id) if workout else None


def closest_variation(library_workout: LibraryWorkout, minutes: int) -> WorkoutVariation:
    """Variation whose length is nearest *minutes*; ties go to the shorter."""
    return min(library_workout.variations, key=lambda v: (abs(v.duration - minutes), v.duration))


def instantiate(
    library_workout: LibraryWorkout,
    variation: WorkoutVariation,
    workout_id: str,
) -> Workout:
    """Turn a library variation into a plan workout carrying *workout_id*."""
    return Workout(
        id=workout_id,
        discipline=library_workout.discipline,
        title=library_workout.title,
        description=library_workout.description,
        total_duration=variation.duration,
        steps=variation.steps,
        tips=library_workout.tips,
        library_workout_id=library_workout.id,
        variation_id=variation.id,
    )
