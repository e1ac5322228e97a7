"""Scoring band tables used by the photo scorer.

Each category is a list of bands ordered from best to worst; the first band
whose threshold is satisfied contributes its points and reason, the rest are
ignored.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Distance thresholds in kilometres
EXACT_DISTANCE_KM = 0.5
CLOSE_DISTANCE_KM = 1.0
NEARBY_DISTANCE_KM = 3.0
MAX_DISTANCE_KM = 5.0

# Recency thresholds in days
RECENT_DAYS = 7
MEDIUM_DAYS = 30
MAX_DAYS = 90

# Summary badges use a tighter notion of "exact" than the scoring bands
SUMMARY_EXACT_DISTANCE_KM = 0.2
SUMMARY_RECENT_DAYS = 30


@dataclass(frozen=True)
class Band:
    """One scoring step: `threshold` is an upper bound or a lower bound."""

    threshold: float
    points: int
    reason: str


LOCATION_BANDS: tuple[Band, ...] = (
    Band(EXACT_DISTANCE_KM, 50, "Exact location match"),
    Band(CLOSE_DISTANCE_KM, 40, "Very close to location"),
    Band(NEARBY_DISTANCE_KM, 30, "Nearby location"),
    Band(MAX_DISTANCE_KM, 20, "Within area"),
)

RECENCY_BANDS: tuple[Band, ...] = (
    Band(RECENT_DAYS, 30, "Taken within last week"),
    Band(MEDIUM_DAYS, 20, "Taken within last month"),
    Band(MAX_DAYS, 10, "Taken within last 3 months"),
)

# Thresholds in megapixels
RESOLUTION_BANDS: tuple[Band, ...] = (
    Band(12, 20, "High resolution (12MP+)"),
    Band(8, 15, "Good resolution (8MP+)"),
    Band(4, 10, "Decent resolution (4MP+)"),
)


def best_band_at_most(bands: Sequence[Band], value: float) -> Band | None:
    """First band whose threshold is >= `value` (smaller is better)."""
    for band in bands:
        if value <= band.threshold:
            return band
    return None


def best_band_at_least(bands: Sequence[Band], value: float) -> Band | None:
    """First band whose threshold is <= `value` (larger is better)."""
    for band in bands:
        if value >= band.threshold:
            return band
    return None
