"""Photo scoring against a single request.

The score is the sum of three independent categories (location, recency,
resolution). Within a category only the best matching band contributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from core.geo import distance_between
from core.models import Coordinates, PhotoRecord, RequestCriteria
from core.rules.bands import (
    LOCATION_BANDS,
    RECENCY_BANDS,
    RESOLUTION_BANDS,
    Band,
    best_band_at_least,
    best_band_at_most,
)
from core.timeutil import days_between, resolve_now


@dataclass(frozen=True)
class ScoreBreakdown:
    """Score of one photo with per-category points and ordered reasons."""

    location_points: int = 0
    recency_points: int = 0
    resolution_points: int = 0
    reasons: tuple[str, ...] = ()
    distance_km: float | None = None

    @property
    def score(self) -> int:
        return self.location_points + self.recency_points + self.resolution_points


def _points(band: Band | None) -> int:
    return band.points if band else 0


def photo_distance_km(photo: PhotoRecord, target: Coordinates | None) -> float | None:
    """Distance to `target`, or None when either side has no location."""
    if photo.location is None or target is None:
        return None
    return distance_between(photo.location, target)


def location_band(distance: float | None) -> Band | None:
    if distance is None:
        return None
    return best_band_at_most(LOCATION_BANDS, distance)


def recency_band(capture_time: datetime, now: datetime) -> Band | None:
    return best_band_at_most(RECENCY_BANDS, days_between(capture_time, now))


def resolution_band(photo: PhotoRecord) -> Band | None:
    return best_band_at_least(RESOLUTION_BANDS, photo.megapixels)


def score_photo(
    photo: PhotoRecord,
    request: RequestCriteria,  # pylint: disable=unused-argument
    resolved_location: Coordinates | None,
    now: datetime | None = None,
    distance: float | None = None,
) -> ScoreBreakdown:
    """Score `photo` for `request` whose location resolved to `resolved_location`.

    `request` does not influence the score today; category is a display and
    filter attribute only. Pass a precomputed `distance` to avoid computing it
    twice.
    """
    now = resolve_now(now)
    if distance is None:
        distance = photo_distance_km(photo, resolved_location)

    bands = (
        location_band(distance),
        recency_band(photo.capture_time, now),
        resolution_band(photo),
    )
    reasons = tuple(b.reason for b in bands if b is not None)
    loc, rec, res = (_points(b) for b in bands)
    return ScoreBreakdown(
        location_points=loc,
        recency_points=rec,
        resolution_points=res,
        reasons=reasons,
        distance_km=distance,
    )
