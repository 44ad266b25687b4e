"""Calendar arithmetic on local dates.

Plans are scheduled on calendar days, never instants: every function here
works on ``datetime.date`` so no timezone can shift a day across midnight.
"""

from __future__ import annotations

import math
from datetime import date, timedelta

from triathlon_engine.models.enums import Weekday


def parse_local_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string as a local calendar date.

    Raises:
        ValueError: If *value* is not a valid ISO calendar date.
    """
    return date.fromisoformat(value)


def format_local_date(d: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return d.isoformat()


def get_local_today() -> date:
    """Today's date on the local wall clock."""
    return date.today()


def get_day_of_week(d: date) -> str:
    """Full English weekday name, e.g. ``"Monday"``."""
    return Weekday(d.weekday()).name.title()


def weekday_from_label(label: str) -> Weekday:
    """Map a weekday name in any case ("monday", "Monday") to a Weekday.

    Raises:
        ValueError: If *label* is not a weekday name.
    """
    try:
        return Weekday[label.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown weekday: {label!r}") from None


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def start_of_week(d: date) -> date:
    """The Monday on or before *d*."""
    return d - timedelta(days=d.weekday())


def get_weeks_between(start: date, end: date) -> int:
    """Whole weeks from *start* to *end*, rounded up, never less than 1."""
    days = (end - start).days
    return max(1, math.ceil(days / 7))


def _as_date(value: date | str) -> date:
    return parse_local_date(value) if isinstance(value, str) else value


def format_display_date(value: date | str) -> str:
    """Short display form, e.g. ``"Dec 13"``."""
    d = _as_date(value)
    return f"{d.strftime('%b')} {d.day}"


def format_display_date_with_year(value: date | str) -> str:
    """Display form with year, e.g. ``"Dec 13, 2025"``."""
    d = _as_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"
