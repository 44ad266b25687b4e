"""Heart rate zone derivation.

Two zone models are supported, matching the two ways an athlete can set up
a profile:

- LTHR-based: Friel 5-zone %LTHR bands, anchored on a field-tested LTHR.
- Age-based: max HR from the Tanaka formula, LTHR estimated at 89 % of max,
  and Karvonen bands as a percentage of heart-rate reserve.

References:
    Tanaka, Monahan & Seals (2001), Age-predicted maximal heart rate revisited.
    Karvonen, Kentala & Mustala (1957), The effects of training on heart rate.
    Friel (2016), The Triathlete's Training Bible.
"""

from __future__ import annotations

from triathlon_engine.math.periodization import round_half_up
from triathlon_engine.models.athlete import HeartRateZone, HeartRateZones
from triathlon_engine.models.enums import (
    DEFAULT_RESTING_HR,
    LTHR_FRACTION_OF_MAX_HR,
    MAX_HR_AGE_COEFFICIENT,
    MAX_HR_INTERCEPT,
    RESTING_HR_FRACTION_OF_MAX_HR,
    ZONE_BOUNDARIES_PCT_HRR,
    ZONE_BOUNDARIES_PCT_LTHR,
    ZONE_DESCRIPTIONS,
    ZONE_NAMES,
    ZoneMethod,
)


def _r(value: float) -> int:
    return int(round_half_up(value))


def estimate_max_hr(age: int) -> int:
    """Tanaka estimate of max HR: 208 - 0.7 x age, e.g. 30 -> 187."""
    return _r(MAX_HR_INTERCEPT - MAX_HR_AGE_COEFFICIENT * age)


def estimate_lthr(max_hr: int) -> int:
    """Estimate LTHR at 89 % of max HR, e.g. 180 -> 160."""
    return _r(max_hr * LTHR_FRACTION_OF_MAX_HR)


def lthr_zone_bands(lthr: int) -> list[HeartRateZone]:
    """Friel %LTHR zones. Zone 4 runs from round(0.94 x LTHR) to LTHR."""
    return [
        HeartRateZone(
            name=name,
            min_hr=_r(lthr * low),
            max_hr=_r(lthr * high),
            description=description,
        )
        for (low, high), name, description in zip(
            ZONE_BOUNDARIES_PCT_LTHR, ZONE_NAMES, ZONE_DESCRIPTIONS
        )
    ]


def karvonen_zone_bands(max_hr: int, resting_hr: int) -> list[HeartRateZone]:
    """Karvonen zones: resting HR + pct x (max HR - resting HR)."""
    reserve = max_hr - resting_hr
    return [
        HeartRateZone(
            name=name,
            min_hr=_r(resting_hr + reserve * low),
            max_hr=_r(resting_hr + reserve * high),
            description=description,
        )
        for (low, high), name, description in zip(
            ZONE_BOUNDARIES_PCT_HRR, ZONE_NAMES, ZONE_DESCRIPTIONS
        )
    ]


def calculate_zones_from_lthr(lthr: int) -> HeartRateZones:
    """Build a zone set from a tested LTHR.

    Max HR is back-calculated from the 89 % relation and resting HR is a
    rough 35 % of max, both for display only.

    Raises:
        ValueError: If lthr is not positive.
    """
    if lthr <= 0:
        raise ValueError(f"LTHR must be positive, got {lthr}")
    max_hr = _r(lthr / LTHR_FRACTION_OF_MAX_HR)
    z1, z2, z3, z4, z5 = lthr_zone_bands(lthr)
    return HeartRateZones(
        max_hr=max_hr,
        resting_hr=_r(max_hr * RESTING_HR_FRACTION_OF_MAX_HR),
        lthr=lthr,
        method=ZoneMethod.LTHR,
        zone1=z1,
        zone2=z2,
        zone3=z3,
        zone4=z4,
        zone5=z5,
    )


def calculate_zones_from_age(
    age: int, resting_hr: int = DEFAULT_RESTING_HR
) -> HeartRateZones:
    """Build a Karvonen zone set from age and resting HR.

    Raises:
        ValueError: If age is not positive or resting HR is not below max HR.
    """
    if age <= 0:
        raise ValueError(f"Age must be positive, got {age}")
    max_hr = estimate_max_hr(age)
    if not 0 < resting_hr < max_hr:
        raise ValueError(
            f"Resting HR must be between 0 and max HR ({max_hr}), got {resting_hr}"
        )
    z1, z2, z3, z4, z5 = karvonen_zone_bands(max_hr, resting_hr)
    return HeartRateZones(
        max_hr=max_hr,
        resting_hr=resting_hr,
        lthr=estimate_lthr(max_hr),
        method=ZoneMethod.KARVONEN,
        zone1=z1,
        zone2=z2,
        zone3=z3,
        zone4=z4,
        zone5=z5,
    )
