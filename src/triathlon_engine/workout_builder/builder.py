"""WorkoutBuilder: turns a session kind and a duration into a Workout.

Sizes each step from its template so the step minutes add up to the
session length, fills rep counts into interval instructions, and applies
baseline pace/power targets to key-effort steps.
"""

from __future__ import annotations

import uuid
from typing import Callable

from triathlon_engine.models.athlete import AthleteProfile
from triathlon_engine.models.enums import (
    BRICK_TRANSITION_MINUTES,
    Discipline,
    Intensity,
    SessionKind,
    TrainingPhase,
)
from triathlon_engine.models.plan import Workout, WorkoutStep
from triathlon_engine.workout_builder.templates import (
    SessionTemplate,
    get_template,
    rep_count,
    size_steps,
)
from triathlon_engine.workout_builder.tips import BRICK_TIPS, REST_TIPS, session_tips, target_for


def new_workout_id() -> str:
    """Opaque, collision-resistant workout id."""
    return uuid.uuid4().hex


class WorkoutBuilder:
    """Builds plan workouts from session templates.

    Usage::

        builder = WorkoutBuilder(profile)
        workout = builder.build(SessionKind.RUN_TEMPO, 45, TrainingPhase.BUILD)
    """

    def __init__(
        self,
        profile: AthleteProfile | None = None,
        id_factory: Callable[[], str] = new_workout_id,
    ) -> None:
        self.profile = profile
        self.id_factory = id_factory

    def build(self, kind: SessionKind, minutes: int, phase: TrainingPhase) -> Workout:
        """Build a single-discipline workout of exactly *minutes* minutes.

        Args:
            kind: Session kind to build.
            minutes: Total session length.
            phase: Training phase, used to pick tips.

        Returns:
            A Workout whose step minutes sum to ``minutes``.

        Raises:
            ValueError: If minutes is too short for the session structure.
        """
        template = get_template(kind)
        steps = render_steps(
            template, minutes,
            key_target=lambda intensity: target_for(self.profile, template.discipline, intensity),
        )
        return Workout(
            id=self.id_factory(),
            discipline=template.discipline,
            title=template.title,
            description=template.description,
            total_duration=minutes,
            steps=steps,
            tips=session_tips(kind, phase),
        )

    def build_brick(self, bike_minutes: int, run_minutes: int) -> Workout:
        """Build a bike-to-run brick: bike, a T2 transition, then run.

        Total duration is ``bike_minutes + BRICK_TRANSITION_MINUTES + run_minutes``.

        Raises:
            ValueError: If either leg is too short for its fixed segments.
        """
        if bike_minutes < 20 or run_minutes < 14:
            raise ValueError(
                f"Brick legs too short: bike {bike_minutes} min, run {run_minutes} min"
            )
        race_target = target_for(self.profile, Discipline.RUN, Intensity.TEMPO)
        steps = (
            WorkoutStep(
                name="Bike Warm-up", duration="10 min", intensity=Intensity.EASY,
                instructions="Easy spinning building to moderate effort. Focus on "
                "getting legs moving smoothly.",
                target_heart_rate_zone=1, cadence="85-95 rpm",
            ),
            WorkoutStep(
                name="Bike Main Set", duration=f"{bike_minutes - 15} min",
                intensity=Intensity.MODERATE,
                instructions="Steady ride at race effort. Last 10 min, increase "
                "cadence to 95+ rpm to prepare legs for the run. Stay hydrated.",
                target_heart_rate_zone=2, cadence="90-100 rpm",
            ),
            WorkoutStep(
                name="Bike Wind-down", duration="5 min", intensity=Intensity.EASY,
                instructions="Easy spinning, high cadence. Mentally prepare for "
                "transition. Have run gear ready.",
                target_heart_rate_zone=1, cadence="95-100 rpm",
            ),
            WorkoutStep(
                name="T2 Transition Practice",
                duration=f"{BRICK_TRANSITION_MINUTES} min",
                intensity=Intensity.RECOVERY,
                instructions="Quick transition! Rack bike, helmet off, running shoes "
                "on. Practice race-day efficiency. Target under 2 minutes.",
            ),
            WorkoutStep(
                name="Run - First Mile", duration="8 min", intensity=Intensity.EASY,
                instructions="Your legs will feel heavy and awkward - this is normal! "
                "Start EASY. Focus on quick, short steps. Cadence 175+ steps/min.",
                target_heart_rate_zone=2,
            ),
            WorkoutStep(
                name="Run - Settle In", duration=f"{run_minutes - 13} min",
                intensity=Intensity.MODERATE,
                instructions="Gradually find your rhythm. Build to a comfortable "
                "sustainable pace. Stay relaxed and patient.",
                target_heart_rate_zone=2, target_pace=race_target,
            ),
            WorkoutStep(
                name="Run Cool-down", duration="5 min", intensity=Intensity.RECOVERY,
                instructions="Easy jog slowing to walk. Stretch quads, hip flexors, "
                "and calves well.",
                target_heart_rate_zone=1,
            ),
        )
        return Workout(
            id=self.id_factory(),
            discipline=Discipline.BRICK,
            title="Brick Workout (Bike + Run)",
            description="Practice bike-to-run transition with back-to-back workouts",
            total_duration=bike_minutes + BRICK_TRANSITION_MINUTES + run_minutes,
            steps=steps,
            tips=BRICK_TIPS,
        )

    def build_rest(self) -> Workout:
        """Build a rest-day placeholder workout (zero planned minutes)."""
        return rest_workout(self.id_factory())


def rest_workout(workout_id: str) -> Workout:
    """Rest-day workout; its steps are optional suggestions, not planned time."""
    return Workout(
        id=workout_id,
        discipline=Discipline.REST,
        title="Rest Day",
        description="Recovery is when your body adapts and gets stronger",
        total_duration=0,
        steps=(
            WorkoutStep(
                name="Active Recovery (Optional)",
                duration="20-30 min",
                intensity=Intensity.RECOVERY,
                instructions="Very easy activity if desired: gentle walk, light "
                "stretching, yoga, or foam rolling. Listen to your body - if "
                "fatigued, complete rest is best.",
            ),
            WorkoutStep(
                name="Self-Care",
                duration="As needed",
                intensity=Intensity.RECOVERY,
                instructions="Prioritize sleep (8+ hours). Eat nutritious meals. Stay "
                "hydrated. Mental recovery matters too!",
            ),
        ),
        tips=REST_TIPS,
    )


def render_steps(
    template: SessionTemplate,
    minutes: int,
    key_target: Callable[[Intensity], str | None] | None = None,
) -> tuple[WorkoutStep, ...]:
    """Size and render a template's steps for a session of *minutes* minutes.

    Rep counts are filled into interval instructions.  ``key_target`` maps an
    intensity to a pace/power target for key-effort steps; without one, or
    when it returns None, the template's own target text is kept.

    Raises:
        ValueError: If minutes is too short for the session structure.
    """
    steps: list[WorkoutStep] = []
    for step, step_minutes in zip(template.steps, size_steps(template, minutes)):
        instructions = step.instructions
        if step.rep_minutes:
            instructions = instructions.format(reps=rep_count(step, step_minutes))

        target_pace = step.target_pace
        if step.key_effort and key_target is not None:
            target_pace = key_target(step.intensity) or target_pace

        steps.append(WorkoutStep(
            name=step.name,
            duration=f"{step_minutes} min",
            intensity=step.intensity,
            instructions=instructions,
            target_heart_rate_zone=step.zone,
            target_pace=target_pace,
            cadence=step.cadence,
        ))
    return tuple(steps)
