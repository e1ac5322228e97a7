"""Badge-level aggregation of match results."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from core.models import MatchResult, MatchSummary, PhotoRecord, RequestCriteria
from core.rules.bands import SUMMARY_EXACT_DISTANCE_KM, SUMMARY_RECENT_DAYS
from core.services.location_service import Gazetteer
from core.services.matching_service import find_matches
from core.timeutil import normalize, resolve_now

# (upper bound in days, description); the last entry catches everything else
TIME_RANGE_BANDS: tuple[tuple[int, str], ...] = (
    (7, "within the last week"),
    (30, "within the last month"),
    (90, "within the last 3 months"),
    (365, "within the last year"),
)
OVER_A_YEAR = "over the past year"


def describe_time_range(oldest: datetime, newest: datetime) -> str:
    """Describe the spread between the oldest and newest match."""
    gap_days = abs(normalize(newest) - normalize(oldest)) / timedelta(days=1)
    for limit, text in TIME_RANGE_BANDS:
        if gap_days < limit:
            return text
    return OVER_A_YEAR


def is_exact(match: MatchResult) -> bool:
    return match.distance_km is not None and match.distance_km <= SUMMARY_EXACT_DISTANCE_KM


def summarize_matches(matches: Sequence[MatchResult], now: datetime | None = None) -> MatchSummary:
    """Reduce already-computed matches to badge counts.

    Every match that is not exact counts as nearby, including matches whose
    distance is unknown, so exact + nearby always equals the number of matches.
    Recency and the time range are taken over the exact matches only.
    """
    now = resolve_now(now)
    exact = [m for m in matches if is_exact(m)]
    recent_cutoff = now - timedelta(days=SUMMARY_RECENT_DAYS)
    recent = sum(1 for m in exact if normalize(m.capture_time) >= recent_cutoff)

    if not exact:
        return MatchSummary(nearby_match_count=len(matches))

    times = [normalize(m.capture_time) for m in exact]
    oldest, newest = min(times), max(times)
    return MatchSummary(
        exact_match_count=len(exact),
        nearby_match_count=len(matches) - len(exact),
        recent_match_count=recent,
        oldest_match_time=oldest,
        newest_match_time=newest,
        time_range_description=describe_time_range(oldest, newest),
    )


def summarize(
    photos: Iterable[PhotoRecord],
    request: RequestCriteria,
    now: datetime | None = None,
    gazetteer: Gazetteer | None = None,
) -> MatchSummary:
    """Run the matching engine and summarize its output."""
    now = resolve_now(now)
    return summarize_matches(find_matches(photos, request, now=now, gazetteer=gazetteer), now=now)
