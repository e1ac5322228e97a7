"""Datetime helpers shared by the matching services.

Photo timestamps come from EXIF (naive, local time) while request timestamps
may carry a timezone. Everything is compared as naive local time.
"""

from __future__ import annotations

from datetime import datetime, timedelta

ONE_DAY = timedelta(days=1)


def normalize(dt: datetime) -> datetime:
    """Convert aware datetimes to naive local time; naive ones pass through."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def resolve_now(now: datetime | None) -> datetime:
    """Return the normalized `now`, defaulting to the current local time."""
    return normalize(now) if now is not None else datetime.now()


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days from `earlier` to `later`, clamped at zero."""
    delta = normalize(later) - normalize(earlier)
    if delta.total_seconds() <= 0:
        return 0
    return delta // ONE_DAY
