"""Triathlon training-plan engine.

Entry points::

    from triathlon_engine import generate, merge

    plan = generate(race_config, profile)
    plan = merge(saved_plan, generate(race_config, profile))
"""

from __future__ import annotations

from datetime import date

from triathlon_engine.generator import PlanGenerator, validate_race_config
from triathlon_engine.models.athlete import AthleteProfile
from triathlon_engine.models.plan import TrainingPlan
from triathlon_engine.models.race import RaceConfig
from triathlon_engine.planning.merge import merge_plans
from triathlon_engine.planning.summary import recalculate_week_summary


def generate(
    race_config: RaceConfig,
    athlete_profile: AthleteProfile | None = None,
    *,
    today: date | None = None,
) -> TrainingPlan:
    """Generate a plan with default settings; see PlanGenerator.generate."""
    return PlanGenerator().generate(race_config, athlete_profile, today=today)


def merge(old_plan: TrainingPlan, new_plan: TrainingPlan) -> TrainingPlan:
    """Regenerate over *old_plan*, keeping every day with logged history."""
    return merge_plans(old_plan, new_plan)


__all__ = [
    "PlanGenerator",
    "generate",
    "merge",
    "recalculate_week_summary",
    "validate_race_config",
]
