"""Human-friendly rendering of annotation timestamps.

`format_relative` turns a pair of instants into strings such as
"5 seconds ago" or "3 days ago". It never reads the clock itself, so callers
pass `now` explicitly and tests can pin it.

Units are approximate on purpose: a month is 30 days and a year 365 days.
"""

from __future__ import annotations

import math
from datetime import datetime

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
MONTH = 30 * DAY
YEAR = 365 * DAY

JUST_NOW = "just now"

# Coarsest first; seconds are handled separately as the fallback unit.
_UNITS: tuple[tuple[str, int], ...] = (
    ("year", YEAR),
    ("month", MONTH),
    ("day", DAY),
    ("hour", HOUR),
    ("minute", MINUTE),
)


def _ago(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def elapsed_seconds(created_at: datetime, now: datetime) -> int:
    """Whole seconds between the two instants, clamped at zero."""
    return max(0, math.floor((now - created_at).total_seconds()))


def format_relative(created_at: datetime, now: datetime) -> str:
    """Describe how long ago `created_at` was, seen from `now`.

    Clock skew that puts `created_at` after `now` is reported as "just now".

    >>> from datetime import timedelta
    >>> t = datetime(2024, 1, 1)
    >>> format_relative(t, t + timedelta(seconds=65))
    '1 minute ago'
    """
    delta = elapsed_seconds(created_at, now)
    if delta == 0:
        return JUST_NOW
    for unit, size in _UNITS:
        n = delta // size
        if n >= 1:
            return _ago(n, unit)
    return _ago(delta, "second")


def format_absolute(created_at: datetime) -> str:
    """Render the exact creation time in the local timezone."""
    return created_at.astimezone().strftime("%Y-%m-%d %H:%M:%S")


__all__ = ["format_relative", "format_absolute", "elapsed_seconds", "JUST_NOW"]
