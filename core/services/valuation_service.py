"""Potential-value estimate for a seller's photo library.

Drives the "Potential Value" stat and the per-day value report shown before a
seller starts submitting photos.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from core.models import PhotoRecord
from core.timeutil import normalize, resolve_now

BASE_VALUE = 5
REPORT_DATE_FMT = "%b %d, %Y"

# (pixel count strictly above, bonus)
RESOLUTION_BONUSES: tuple[tuple[int, int], ...] = ((12_000_000, 3), (8_000_000, 2))
# (age strictly below, bonus)
FRESHNESS_BONUSES: tuple[tuple[timedelta, int], ...] = (
    (timedelta(hours=24), 2),
    (timedelta(hours=72), 1),
)


def estimate_photo_value(photo: PhotoRecord, now: datetime | None = None) -> int:
    """Estimated coupon value of a single photo."""
    value = BASE_VALUE
    pixels = max(photo.width, 0) * max(photo.height, 0)
    for limit, bonus in RESOLUTION_BONUSES:
        if pixels > limit:
            value += bonus
            break
    age = resolve_now(now) - normalize(photo.capture_time)
    for limit, bonus in FRESHNESS_BONUSES:
        if age < limit:
            value += bonus
            break
    return value


@dataclass
class ValuedPhoto:
    photo: PhotoRecord
    value: int


@dataclass
class ValueReportGroup:
    """Photos taken on the same calendar day."""

    day: date
    items: list[ValuedPhoto] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.day.strftime(REPORT_DATE_FMT)

    @property
    def total_value(self) -> int:
        return sum(it.value for it in self.items)


@dataclass
class PhotoValueReport:
    groups: list[ValueReportGroup] = field(default_factory=list)

    @property
    def total_value(self) -> int:
        return sum(g.total_value for g in self.groups)

    @property
    def photo_count(self) -> int:
        return sum(len(g.items) for g in self.groups)


def build_value_report(
    photos: Iterable[PhotoRecord],
    now: datetime | None = None,
    require_location: bool = True,
) -> PhotoValueReport:
    """Value each photo and group them by capture day, newest day first.

    With `require_location`, photos without GPS data are left out since they
    can never be matched to a location-based request.
    """
    now = resolve_now(now)
    by_day: dict[date, list[ValuedPhoto]] = defaultdict(list)
    for photo in photos:
        if require_location and photo.location is None:
            continue
        day = normalize(photo.capture_time).date()
        by_day[day].append(ValuedPhoto(photo=photo, value=estimate_photo_value(photo, now)))
    groups = [ValueReportGroup(day=d, items=items) for d, items in by_day.items()]
    groups.sort(key=lambda g: g.day, reverse=True)
    return PhotoValueReport(groups=groups)
