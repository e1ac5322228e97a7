"""Match a seller's photos against one buyer request.

The engine is a pure function of its inputs: it filters out photos that are
too far away or outside the request's time window, scores the rest, and
returns them ranked by score. Expired requests never match.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from loguru import logger

from core.models import MatchResult, PhotoRecord, RequestCriteria, TimeRequirement
from core.rules.bands import MAX_DISTANCE_KM
from core.services.location_service import Gazetteer, resolve_location
from core.services.scoring_service import photo_distance_km, score_photo
from core.timeutil import normalize, resolve_now


def is_request_expired(request: RequestCriteria, now: datetime | None = None) -> bool:
    return request.is_expired(resolve_now(now))


def is_within_time_requirement(
    capture_time: datetime, requirement: TimeRequirement, now: datetime | None = None
) -> bool:
    """Check a capture time against a request's time requirement.

    Preset windows cover the last N hours before `now`; photos stamped slightly
    in the future count as zero hours old. Custom windows are inclusive.
    """
    if not requirement.is_constrained:
        return True
    taken = normalize(capture_time)
    if requirement.hours is not None:
        age = resolve_now(now) - taken
        return max(age, timedelta(0)) <= timedelta(hours=requirement.hours)
    # custom: start/end are guaranteed by TimeRequirement
    return normalize(requirement.start) <= taken <= normalize(requirement.end)


def find_matches(
    photos: Iterable[PhotoRecord],
    request: RequestCriteria,
    now: datetime | None = None,
    gazetteer: Gazetteer | None = None,
) -> list[MatchResult]:
    """Return qualifying photos sorted by score, best first.

    Ties keep their input order.
    """
    now = resolve_now(now)
    if request.is_expired(now):
        logger.info("Request expired at {}; no matches", request.expires_at)
        return []

    target = resolve_location(request, gazetteer)
    results: list[MatchResult] = []
    skipped_far = skipped_time = 0
    for photo in photos:
        distance = photo_distance_km(photo, target)
        if distance is not None and distance > MAX_DISTANCE_KM:
            skipped_far += 1
            continue
        if not is_within_time_requirement(photo.capture_time, request.time_requirement, now):
            skipped_time += 1
            continue
        breakdown = score_photo(photo, request, target, now=now, distance=distance)
        results.append(
            MatchResult(
                photo=photo,
                score=breakdown.score,
                distance_km=distance,
                match_reasons=breakdown.reasons,
            )
        )

    # list.sort is stable, so equal scores stay in input order
    results.sort(key=lambda m: m.score, reverse=True)
    logger.debug(
        "Matched {} photos ({} too far, {} outside time window)",
        len(results),
        skipped_far,
        skipped_time,
    )
    return results

