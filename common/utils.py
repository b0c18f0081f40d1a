"""Shared season, date and record helpers for the gallery and studio apps."""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any

from django.utils.dateparse import parse_date, parse_datetime

# Calendar order of a season year; winter closes the year it is labelled with
SEASON_CYCLE: tuple[str, ...] = ('spring', 'summer', 'autumn', 'winter')
ALLOWED_SEASONS = frozenset(SEASON_CYCLE)

SEASON_LABELS = {season: season.title() for season in SEASON_CYCLE}

# Years outside this range are treated as invalid; the timeline walks every season up to the latest photo
MIN_YEAR = 1900
MAX_YEAR = 2999

_SEASON_BY_MONTH = {
    3: 'spring', 4: 'spring', 5: 'spring',
    6: 'summer', 7: 'summer', 8: 'summer',
    9: 'autumn', 10: 'autumn', 11: 'autumn',
    12: 'winter', 1: 'winter', 2: 'winter',
}


def normalize_season(value: Any) -> str:
    """Lower-case a season value; anything that is not a string becomes ''."""
    if not isinstance(value, str):
        return ''
    return value.strip().lower()


def parse_year(value: Any) -> int | None:
    """Parse a stored year into an int.

    Returns None unless the value is a finite whole number between
    ``MIN_YEAR`` and ``MAX_YEAR``.
    """
    if isinstance(value, bool) or value is None:
        return None
    year: int | None = None
    if isinstance(value, int):
        year = value
    elif isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            year = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            year = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
            if math.isfinite(number) and number.is_integer():
                year = int(number)
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        return None
    return year


def season_progress(year: int | None, season: str) -> float:
    """Position of a (season, year) bucket on the timeline.

    Unknown seasons and missing years sort below every real bucket.
    """
    if year is None or season not in ALLOWED_SEASONS:
        return -math.inf
    return year * 4 + SEASON_CYCLE.index(season)


def season_for_month(month: int) -> str:
    return _SEASON_BY_MONTH[month]


def next_bucket(season: str, year: int) -> tuple[str, int]:
    """Return the bucket one season after (season, year)."""
    index = SEASON_CYCLE.index(season)
    if index == len(SEASON_CYCLE) - 1:
        return SEASON_CYCLE[0], year + 1
    return SEASON_CYCLE[index + 1], year


def safe_timestamp(value: Any) -> float:
    """Return a POSIX timestamp for an ISO date or datetime string, 0 when unparseable."""
    if not isinstance(value, str) or not value.strip():
        return 0.0
    text = value.strip()
    try:
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                return 0.0
            parsed = datetime(day.year, day.month, day.day)
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def season_for_date(day: date) -> tuple[str, int]:
    """Map a calendar date to its (season, year) bucket."""
    return season_for_month(day.month), day.year


def clip(value: Any, limit: int) -> str:
    """Coerce *value* to a stripped string of at most *limit* characters."""
    if value is None:
        return ''
    return str(value).strip()[:limit]


def utc_now_iso() -> str:
    """Current UTC time in the ISO form stored on records (millisecond precision, Z suffix)."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
