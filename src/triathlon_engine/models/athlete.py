"""Athlete profile models: baselines, preferences, injuries and HR zones."""

from __future__ import annotations

from dataclasses import dataclass

from triathlon_engine.models.enums import (
    Discipline,
    ExperienceLevel,
    InjurySeverity,
    Weekday,
    ZoneMethod,
)


@dataclass(frozen=True)
class DisciplineSplit:
    """Share of weekly endurance time per discipline, in percent (sums to 100)."""

    swim: int
    bike: int
    run: int

    def share(self, discipline: Discipline) -> int:
        return {
            Discipline.SWIM: self.swim,
            Discipline.BIKE: self.bike,
            Discipline.RUN: self.run,
        }[discipline]


@dataclass(frozen=True)
class StrengthWeakness:
    """The athlete's strongest and weakest of swim / bike / run."""

    strongest: Discipline
    weakest: Discipline


@dataclass(frozen=True)
class Injury:
    id: str
    body_part: str
    severity: InjurySeverity
    is_active: bool = True
    notes: str | None = None


@dataclass(frozen=True)
class HeartRateZone:
    name: str
    min_hr: int
    max_hr: int
    description: str


@dataclass(frozen=True)
class HeartRateZones:
    """A five-zone HR set plus the anchors it was derived from."""

    max_hr: int
    resting_hr: int
    lthr: int
    method: ZoneMethod
    zone1: HeartRateZone
    zone2: HeartRateZone
    zone3: HeartRateZone
    zone4: HeartRateZone
    zone5: HeartRateZone

    @property
    def zones(self) -> tuple[HeartRateZone, ...]:
        return (self.zone1, self.zone2, self.zone3, self.zone4, self.zone5)


DEFAULT_DISCIPLINE_SPLIT = DisciplineSplit(swim=20, bike=45, run=35)
DEFAULT_REST_DAYS: tuple[Weekday, ...] = (Weekday.MONDAY, Weekday.FRIDAY)


@dataclass(frozen=True)
class AthleteProfile:
    """Optional athlete data that personalises plan generation.

    Baselines are kept in the form athletes enter them: swim CSS and run
    threshold pace as ``"m:ss"`` strings (per 100 m and per km), bike FTP
    in watts.
    """

    user_id: str
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    age: int | None = None
    training_years: int | None = None
    swim_css: str | None = None
    bike_ftp: int | None = None
    run_threshold_pace: str | None = None
    lactate_threshold_hr: int | None = None
    injuries: tuple[Injury, ...] = ()
    rest_day_preferences: tuple[Weekday, ...] = ()
    discipline_split: DisciplineSplit = DEFAULT_DISCIPLINE_SPLIT
    strength_weakness: StrengthWeakness | None = None
    heart_rate_zones: HeartRateZones | None = None

    @property
    def active_injuries(self) -> tuple[Injury, ...]:
        return tuple(i for i in self.injuries if i.is_active)


def create_default_profile(user_id: str) -> AthleteProfile:
    """Profile used when an athlete first signs up."""
    return AthleteProfile(
        user_id=user_id,
        rest_day_preferences=DEFAULT_REST_DAYS,
        discipline_split=DEFAULT_DISCIPLINE_SPLIT,
    )
