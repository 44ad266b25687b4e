"""Custom exception hierarchy for the triathlon engine."""

from __future__ import annotations


class PlanEngineError(Exception):
    """Base exception for all triathlon_engine errors."""


class PlanValidationError(PlanEngineError, ValueError):
    """A race configuration cannot produce a plan.

    ``errors`` maps the offending field name to a user-facing message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)


class PlanMutationError(PlanEngineError):
    """An edit would rewrite logged history or break plan structure."""


class WorkoutNotFoundError(PlanMutationError, LookupError):
    """No workout, week or day matches the requested address."""
