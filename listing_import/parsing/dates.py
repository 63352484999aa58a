from __future__ import annotations

import re
from datetime import date, timedelta

"""US listing dates (M/D/YYYY) to ISO dates and back.

Calendar dates are built with ``datetime.date`` which carries no timezone, so
no local offset can shift a day.
"""

__all__ = [
    "normalize_date",
    "add_days",
    "format_us_date",
]

_US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
MIN_YEAR = 1000


def normalize_date(value: str) -> str:
    """Convert ``M/D/YYYY`` or ``MM/DD/YYYY`` to ``YYYY-MM-DD``.

    Returns an empty string when the text does not match the pattern or names
    a day that does not exist (``2/30/2024``, ``13/1/2024``). Years before
    1000 (``1/1/0050``) are rejected as well.
    """
    match = _US_DATE_RE.match((value or "").strip())
    if not match:
        return ""
    month, day, year = (int(g) for g in match.groups())
    # 4 桁で書き戻せない年は扱わない
    if year < MIN_YEAR:
        return ""
    try:
        parsed = date(year, month, day)
    except ValueError:
        return ""
    return parsed.isoformat()


def add_days(iso_date: str, days: int) -> str:
    """Shift an ISO date by ``days``; empty string if the date is not ISO."""
    try:
        start = date.fromisoformat(iso_date)
        return (start + timedelta(days=days)).isoformat()
    except (ValueError, OverflowError):
        return ""


def format_us_date(iso_date: str) -> str:
    """Reverse of ``normalize_date``: ``2024-01-05`` -> ``1/5/2024``."""
    try:
        parsed = date.fromisoformat(iso_date)
    except ValueError:
        return ""
    return f"{parsed.month}/{parsed.day}/{parsed.year}"
