"""Race goal models: standard distances and the race configuration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TypicalTimes:
    """Typical finish times by athlete level, e.g. "1:15:00"."""

    beginner: str
    intermediate: str
    advanced: str


@dataclass(frozen=True)
class RaceDistance:
    """A triathlon distance descriptor.

    ``id`` is one of ``sprint``, ``olympic``, ``half`` or ``full`` and
    drives the long-session volume multiplier.
    """

    id: str
    name: str
    swim: str
    bike: str
    run: str
    typical_times: TypicalTimes


RACE_DISTANCES: dict[str, RaceDistance] = {
    "sprint": RaceDistance(
        id="sprint",
        name="Sprint",
        swim="750m",
        bike="20km",
        run="5km",
        typical_times=TypicalTimes("1:30:00", "1:15:00", "1:00:00"),
    ),
    "olympic": RaceDistance(
        id="olympic",
        name="Olympic",
        swim="1.5km",
        bike="40km",
        run="10km",
        typical_times=TypicalTimes("3:30:00", "2:45:00", "2:00:00"),
    ),
    "half": RaceDistance(
        id="half",
        name="70.3 (Half Ironman)",
        swim="1.9km",
        bike="90km",
        run="21.1km",
        typical_times=TypicalTimes("7:00:00", "5:30:00", "4:30:00"),
    ),
    "full": RaceDistance(
        id="full",
        name="Full Ironman",
        swim="3.8km",
        bike="180km",
        run="42.2km",
        typical_times=TypicalTimes("15:00:00", "12:00:00", "10:00:00"),
    ),
}


@dataclass(frozen=True)
class TargetTime:
    hours: int
    minutes: int

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


@dataclass(frozen=True)
class RaceConfig:
    """Immutable race goal that a training plan is generated from."""

    distance: RaceDistance
    race_name: str
    race_date: date
    target_time: TargetTime
    max_weekly_hours: float  # peak-week ceiling
