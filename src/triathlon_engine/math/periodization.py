"""Periodization math: phase allocation, weekly hour targets, recovery weeks.

Implements a proportional four-phase triathlon macrocycle:
- BASE / BUILD / PEAK / TAPER at roughly 40/30/20/10 % of the plan
- Every phase gets at least one week once the plan reaches MIN_PLAN_WEEKS
- Weekly hours ramp through BASE and BUILD, sit near the ceiling in PEAK,
  and decay exponentially through TAPER
- Recovery weeks every 4th week of BASE/BUILD with a cross-boundary guard

References:
    Friel (2016), The Triathlete's Training Bible, 4th ed.
    Bosquet et al. (2007), Effects of tapering on performance: a meta-analysis.
    Mujika & Padilla (2003), Scientific bases for precompetition tapering.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from triathlon_engine.models.enums import (
    MIN_PLAN_WEEKS,
    PHASE_RATIOS,
    PHASE_VOLUME_RANGE,
    RECOVERY_WEEK_INTERVAL,
    RECOVERY_WEEK_VOLUME_FRACTION,
    TrainingPhase,
)
from triathlon_engine.models.plan import PhaseLengths


@dataclass(frozen=True)
class PhaseSpec:
    """Week range of a single training phase within the macrocycle."""

    phase: TrainingPhase
    start_week: int  # 1-indexed
    end_week: int  # inclusive
    duration_weeks: int


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a spreadsheet: halves always go up (2.5 -> 3, 0.25 -> 0.3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def allocate_phases(total_weeks: int) -> PhaseLengths:
    """Split the macrocycle into BASE / BUILD / PEAK / TAPER week counts.

    TAPER, PEAK and BUILD are sized from their ratios (rounded half-up,
    minimum one week each); BASE absorbs whatever remains so the counts
    always sum to *total_weeks*.

    Plans shorter than MIN_PLAN_WEEKS drop phases from the front, one week
    each, so the last week is always TAPER: 3 weeks -> build/peak/taper,
    2 -> peak/taper, 1 -> taper.

    Args:
        total_weeks: Total weeks in the training plan (minimum 1).

    Returns:
        PhaseLengths summing to total_weeks.

    Raises:
        ValueError: If total_weeks < 1.
    """
    if total_weeks < 1:
        raise ValueError(f"Plan must be at least 1 week, got {total_weeks}")

    if total_weeks < MIN_PLAN_WEEKS:
        kept = list(TrainingPhase)[-total_weeks:]
        return PhaseLengths(**{p.name.lower(): int(p in kept) for p in TrainingPhase})

    def sized(phase: TrainingPhase) -> int:
        return max(1, int(round_half_up(total_weeks * PHASE_RATIOS[phase])))

    taper = sized(TrainingPhase.TAPER)
    peak = sized(TrainingPhase.PEAK)
    build = sized(TrainingPhase.BUILD)
    base = total_weeks - taper - peak - build

    return PhaseLengths(base=base, build=build, peak=peak, taper=taper)


def phase_specs(lengths: PhaseLengths) -> list[PhaseSpec]:
    """Lay the phase lengths out as consecutive week ranges."""
    specs: list[PhaseSpec] = []
    current_week = 1
    for phase in TrainingPhase:
        duration = lengths[phase]
        if duration > 0:
            specs.append(
                PhaseSpec(
                    phase=phase,
                    start_week=current_week,
                    end_week=current_week + duration - 1,
                    duration_weeks=duration,
                )
            )
            current_week += duration
    return specs


def get_phase_spec(week: int, phases: list[PhaseSpec]) -> PhaseSpec:
    """Find the phase a given week falls in.

    Raises:
        ValueError: If week is outside the plan range.
    """
    for spec in phases:
        if spec.start_week <= week <= spec.end_week:
            return spec
    raise ValueError(
        f"Week {week} is outside plan range "
        f"(1-{phases[-1].end_week if phases else 0})"
    )


def get_phase_for_week(week: int, phases: list[PhaseSpec]) -> TrainingPhase:
    return get_phase_spec(week, phases).phase


def is_recovery_week(week: int, phases: list[PhaseSpec]) -> bool:
    """Determine if a given week is a recovery (deload) week.

    Recovery weeks occur every 4th week within BASE and BUILD.  A global
    guard ensures no more than RECOVERY_WEEK_INTERVAL consecutive hard weeks
    across the BASE/BUILD boundary, and a week straight after a recovery week
    is never another one.

    PEAK and TAPER are never recovery weeks.

    Args:
        week: 1-indexed week number.
        phases: Phase layout from phase_specs().

    Returns:
        True if this is a recovery week.
    """
    if get_phase_for_week(week, phases) in (TrainingPhase.PEAK, TrainingPhase.TAPER):
        return False

    consecutive_hard = 0
    for w in range(1, week + 1):
        spec = get_phase_spec(w, phases)
        if spec.phase in (TrainingPhase.PEAK, TrainingPhase.TAPER):
            consecutive_hard = 0
            continue

        w_in_phase = w - spec.start_week  # 0-indexed within phase
        is_phase_recovery = (w_in_phase + 1) % (RECOVERY_WEEK_INTERVAL + 1) == 0

        if (is_phase_recovery and consecutive_hard > 0) or (
            consecutive_hard >= RECOVERY_WEEK_INTERVAL
        ):
            if w == week:
                return True
            consecutive_hard = 0
        else:
            consecutive_hard += 1

    return False


def get_weekly_hours_target(
    week: int,
    phases: list[PhaseSpec],
    max_weekly_hours: float,
) -> float:
    """Calculate the target training hours for a given week.

    Hours ramp linearly through each of BASE, BUILD and PEAK between the
    bounds in PHASE_VOLUME_RANGE, then decay exponentially through TAPER
    (Bosquet et al. 2007).  Recovery weeks are cut to
    RECOVERY_WEEK_VOLUME_FRACTION of the normal target.

    Args:
        week: 1-indexed week number.
        phases: Phase layout from phase_specs().
        max_weekly_hours: The athlete's weekly ceiling (reached in PEAK).

    Returns:
        Target hours, rounded to the nearest whole minute.
    """
    spec = get_phase_spec(week, phases)
    start_fraction, end_fraction = PHASE_VOLUME_RANGE[spec.phase]
    progress = (week - spec.start_week) / max(1, spec.duration_weeks - 1)

    if spec.phase == TrainingPhase.TAPER:
        decay_rate = -math.log(end_fraction / start_fraction)
        fraction = start_fraction * math.exp(-decay_rate * progress)
    else:
        fraction = start_fraction + (end_fraction - start_fraction) * progress

    if is_recovery_week(week, phases):
        fraction *= RECOVERY_WEEK_VOLUME_FRACTION

    return round_half_up(max_weekly_hours * fraction * 60) / 60
