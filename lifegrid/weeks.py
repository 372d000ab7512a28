"""Week arithmetic for the life grid.

Keep pure functions here for easy testing and reuse. Nothing is cached:
"now" is read on every call so a render never straddles a stale week count.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

COLS = 52  # weeks per grid row (one row = one year of life)
WEEK = timedelta(weeks=1)

COUNTRY_LIFE_EXPECTANCY = {
    "US": ("United States", 77),
    "UK": ("United Kingdom", 81),
    "CA": ("Canada", 82),
    "AU": ("Australia", 83),
    "DE": ("Germany", 81),
    "FR": ("France", 83),
    "JP": ("Japan", 84),
    "IT": ("Italy", 83),
    "ES": ("Spain", 83),
    "BR": ("Brazil", 76),
    "MX": ("Mexico", 75),
    "IN": ("India", 70),
    "CN": ("China", 78),
    "KR": ("South Korea", 83),
    "SG": ("Singapore", 84),
    "NL": ("Netherlands", 82),
    "SE": ("Sweden", 83),
    "CH": ("Switzerland", 84),
    "NZ": ("New Zealand", 82),
    "OTHER": ("Other", 73),
}

Moment = Union[date, datetime]


def total_weeks(life_expectancy: int) -> int:
    """Number of week cells for a lifespan in years."""
    return life_expectancy * COLS


def grid_rows(weeks: int) -> int:
    return math.ceil(weeks / COLS)


def _as_utc(moment: Moment) -> datetime:
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)
    return datetime.combine(moment, time.min, tzinfo=timezone.utc)


def weeks_lived(birth_date: date, now: Optional[Moment] = None) -> int:
    """Whole weeks elapsed since midnight UTC of ``birth_date``.

    Args:
        birth_date: Calendar date of birth
        now: Reference moment (defaults to the current UTC time). Dates are
            taken at midnight UTC, naive datetimes are treated as UTC.

    Returns:
        Floor of the elapsed weeks, never negative (future birth dates give 0)
    """
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    elapsed = current - _as_utc(birth_date)
    return max(0, elapsed // WEEK)


def percent_lived(lived: int, total: int) -> int:
    """Rounded share of the grid already lived, capped to 0..100."""
    if total <= 0:
        return 0
    return max(0, min(100, round(lived * 100 / total)))


def life_expectancy_for(country_code: Optional[str]) -> int:
    """Life expectancy preset for a country code ('OTHER' for unknown codes)."""
    key = (country_code or "").strip().upper()
    _, years = COUNTRY_LIFE_EXPECTANCY.get(key, COUNTRY_LIFE_EXPECTANCY["OTHER"])
    return years
