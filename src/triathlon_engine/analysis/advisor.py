"""Training advisor: completion statistics, compliance and recommendations.

Compliance scoring only looks at non-rest workouts dated on or before
``today``; a workout scheduled in the future never counts, logged or not.
Each due workout earns COMPLETION_POINTS for its status (completed 1.0,
partial 0.75, skipped 0) and nothing when unlogged.

Recommendations compare perceived effort (RPE) with the effort each workout
was planned at over the most recent weeks, then look at compliance and
recent skips.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from triathlon_engine.math.dates import get_local_today
from triathlon_engine.models.enums import (
    COMPLETION_POINTS,
    HIGH_COMPLIANCE_PCT,
    LOW_COMPLIANCE_PCT,
    MIN_WORKOUTS_FOR_COMPLIANCE_ADVICE,
    RECENT_SKIPS_THRESHOLD,
    RECENT_WEEKS_WINDOW,
    RPE_DRIFT_FATIGUE,
    RPE_DRIFT_OVERREACHING,
    RPE_DRIFT_UNDERLOADED,
    CompletionStatus,
    Discipline,
    RecommendationType,
)
from triathlon_engine.models.plan import TrainingDay, TrainingPlan, TrainingWeek, Workout


@dataclass(frozen=True)
class TrainingStats:
    """Completion totals over a set of non-rest workouts."""

    total_workouts: int
    completed_workouts: int
    partial_workouts: int
    skipped_workouts: int
    completion_rate: float       # % of workouts completed or partial
    average_rpe: float           # 0 when no RPE was logged
    rpe_vs_target_diff: float    # mean (perceived - target), 0 when none
    total_planned_minutes: int
    total_actual_minutes: int

    @property
    def has_rpe(self) -> bool:
        return self.average_rpe > 0


@dataclass(frozen=True)
class ComplianceStats:
    """Points earned against workouts that are already due."""

    due_workouts: int
    earned_points: float
    completed: int
    partial: int
    skipped: int
    unlogged: int

    @property
    def score(self) -> float:
        """Compliance percentage; 0 when nothing is due yet."""
        if self.due_workouts == 0:
            return 0.0
        return 100 * self.earned_points / self.due_workouts


@dataclass(frozen=True)
class Recommendation:
    type: RecommendationType
    title: str
    message: str
    priority: int  # 1-3, higher is more important


def _training_workouts(days: list[TrainingDay] | tuple[TrainingDay, ...]) -> list[Workout]:
    return [w for day in days for w in day.workouts if w.discipline != Discipline.REST]


def _stats(workouts: list[Workout]) -> TrainingStats:
    completed = partial = skipped = 0
    planned = actual = 0
    rpe_total = rpe_diff_total = rpe_count = 0

    for workout in workouts:
        planned += workout.total_duration
        completion = workout.completion
        if completion is None:
            continue
        if completion.status == CompletionStatus.COMPLETED:
            completed += 1
            if completion.actual_duration is None:
                actual += workout.total_duration
            else:
                actual += completion.actual_duration
        elif completion.status == CompletionStatus.PARTIAL:
            partial += 1
            actual += completion.actual_duration or 0
        else:
            skipped += 1

        if completion.perceived_effort:
            rpe_total += completion.perceived_effort
            rpe_diff_total += completion.perceived_effort - completion.target_effort
            rpe_count += 1

    total = len(workouts)
    return TrainingStats(
        total_workouts=total,
        completed_workouts=completed,
        partial_workouts=partial,
        skipped_workouts=skipped,
        completion_rate=100 * (completed + partial) / total if total else 0.0,
        average_rpe=rpe_total / rpe_count if rpe_count else 0.0,
        rpe_vs_target_diff=rpe_diff_total / rpe_count if rpe_count else 0.0,
        total_planned_minutes=planned,
        total_actual_minutes=actual,
    )


def calculate_training_stats(plan: TrainingPlan) -> TrainingStats:
    """Totals across every non-rest workout in the plan."""
    return _stats(_training_workouts(list(plan.iter_days())))


def get_week_stats(week: TrainingWeek) -> TrainingStats:
    """Totals across one week's non-rest workouts."""
    return _stats(_training_workouts(week.days))


def calculate_compliance_stats(plan: TrainingPlan, today: date) -> ComplianceStats:
    """Score logged completions against workouts due on or before *today*.

    Args:
        plan: The training plan.
        today: Local date; later days are ignored entirely.

    Returns:
        ComplianceStats for the due workouts.
    """
    due = _training_workouts([d for d in plan.iter_days() if d.date <= today])

    counts = {status: 0 for status in CompletionStatus}
    points = 0.0
    for workout in due:
        if workout.completion is not None:
            counts[workout.completion.status] += 1
            points += COMPLETION_POINTS[workout.completion.status]

    logged = sum(counts.values())
    return ComplianceStats(
        due_workouts=len(due),
        earned_points=points,
        completed=counts[CompletionStatus.COMPLETED],
        partial=counts[CompletionStatus.PARTIAL],
        skipped=counts[CompletionStatus.SKIPPED],
        unlogged=len(due) - logged,
    )


def recent_weeks(plan: TrainingPlan, today: date) -> tuple[TrainingWeek, ...]:
    """The last RECENT_WEEKS_WINDOW weeks that have started by *today*."""
    started = [w for w in plan.weeks if w.days and w.days[0].date <= today]
    return tuple(started[-RECENT_WEEKS_WINDOW:])


def generate_recommendations(
    plan: TrainingPlan, today: date | None = None
) -> list[Recommendation]:
    """Adaptive advice from logged completions, most important first.

    Args:
        plan: The training plan.
        today: Local date (defaults to today).

    Returns:
        Recommendations sorted by descending priority.
    """
    today = today or get_local_today()
    recommendations: list[Recommendation] = []

    window = [get_week_stats(w) for w in recent_weeks(plan, today)]
    with_rpe = [s for s in window if s.has_rpe]
    drift = sum(s.rpe_vs_target_diff for s in with_rpe) / max(len(with_rpe), 1)

    if drift >= RPE_DRIFT_OVERREACHING:
        recommendations.append(Recommendation(
            RecommendationType.RECOVERY,
            "Consider More Recovery",
            "Your recent workouts have felt harder than planned. Consider adding "
            "extra recovery time or reducing intensity.",
            priority=3,
        ))
    elif drift >= RPE_DRIFT_FATIGUE:
        recommendations.append(Recommendation(
            RecommendationType.RECOVERY,
            "Monitor Fatigue",
            "Workouts are feeling slightly harder than expected. Make sure you're "
            "getting enough rest and nutrition.",
            priority=2,
        ))
    elif drift <= RPE_DRIFT_UNDERLOADED and with_rpe:
        recommendations.append(Recommendation(
            RecommendationType.PROGRESSION,
            "Ready for More Challenge",
            "You're handling workouts well! Consider increasing intensity or "
            "adding volume.",
            priority=2,
        ))

    compliance = calculate_compliance_stats(plan, today)
    if compliance.due_workouts >= MIN_WORKOUTS_FOR_COMPLIANCE_ADVICE:
        if compliance.score < LOW_COMPLIANCE_PCT:
            recommendations.append(Recommendation(
                RecommendationType.CONSISTENCY,
                "Focus on Consistency",
                f"You're at {compliance.score:.0f}% compliance. Try to maintain at "
                "least 80% for optimal progress.",
                priority=3,
            ))
        elif compliance.score >= HIGH_COMPLIANCE_PCT:
            recommendations.append(Recommendation(
                RecommendationType.INFO,
                "Great Consistency!",
                f"You're at {compliance.score:.0f}% compliance. Excellent adherence "
                "to your training plan, keep it up!",
                priority=1,
            ))

    if sum(s.skipped_workouts for s in window) >= RECENT_SKIPS_THRESHOLD:
        recommendations.append(Recommendation(
            RecommendationType.CONSISTENCY,
            "Getting Back on Track",
            "You've missed a few workouts recently. Consider adjusting your "
            "schedule or workout times.",
            priority=2,
        ))

    recommendations.sort(key=lambda r: r.priority, reverse=True)
    return recommendations
