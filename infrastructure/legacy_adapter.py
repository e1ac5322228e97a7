"""Conversions between the UI's historical dict shapes and core models.

Older screens pass requests as loose dicts (`location` as a landmark name,
`budget` or `rewards`, `deadline` strings such as "3 days") and expect match
lists with camelCase keys. These helpers keep that vocabulary at the edge.
"""

from __future__ import annotations

from datetime import datetime
import re
from typing import Any

from loguru import logger

from core.models import (
    Coordinates,
    MatchResult,
    MatchSummary,
    PhotoRecord,
    PhotoRequest,
    RequestCriteria,
    RequestStatus,
    TimeRequirement,
    TimeRequirementKind,
)
from infrastructure.utils import parse_js_timestamp

_DEADLINE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(hour|hr|h|day|d|week|wk|w)s?\s*$", re.I)
_UNIT_HOURS = {"hour": 1, "hr": 1, "h": 1, "day": 24, "d": 24, "week": 168, "wk": 168, "w": 168}


def parse_deadline_hours(value: Any) -> int | None:
    """Parse "3 days", "1 week", "24 hours" or a bare hour count."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        hours = int(value)
        return hours if hours > 0 else None
    text = str(value).strip()
    if text.isdigit():
        return int(text) or None
    m = _DEADLINE_RE.match(text)
    if not m:
        return None
    hours = int(float(m.group(1)) * _UNIT_HOURS[m.group(2).lower()])
    return hours or None


def _coords(value: Any) -> Coordinates | None:
    if not isinstance(value, dict):
        return None
    try:
        return Coordinates(float(value["latitude"]), float(value["longitude"]))
    except (KeyError, TypeError, ValueError):
        return None


def parse_time_requirement(value: Any) -> TimeRequirement:
    """Accept None/"none", an hour count (24/168/720), a kind name, or {start, end}."""
    if value is None or value == "" or value == "none":
        return TimeRequirement.none()
    if isinstance(value, dict):
        start = parse_js_timestamp(value.get("start"))
        end = parse_js_timestamp(value.get("end"))
        if start is None or end is None:
            raise ValueError(f"custom time requirement needs start and end: {value!r}")
        return TimeRequirement.custom(start, end)
    if isinstance(value, str) and not value.strip().isdigit():
        return TimeRequirement(kind=TimeRequirementKind(value.strip()))
    return TimeRequirement.within_hours(int(value))


def _expiration_hours(data: dict[str, Any], default_hours: int) -> int:
    for key in ("expirationHours", "expiration", "deadline"):
        hours = parse_deadline_hours(data.get(key))
        if hours is not None:
            return hours
    return default_hours


def criteria_from_legacy(
    data: dict[str, Any], default_expiration_hours: int = 72, now: datetime | None = None
) -> RequestCriteria:
    """Build `RequestCriteria` from a legacy request dict."""
    selected = data.get("selectedLocation") or {}
    coords = _coords(data.get("locationCoordinates")) or _coords(
        selected.get("coordinates") if isinstance(selected, dict) else None
    )
    name = data.get("location") or (selected.get("value") if isinstance(selected, dict) else None)
    created = parse_js_timestamp(data.get("createdAt")) or now or datetime.now()
    return RequestCriteria(
        created_at=created,
        expiration_hours=_expiration_hours(data, default_expiration_hours),
        location_name=name or None,
        location_coordinates=coords,
        category=str(data.get("category") or ""),
        time_requirement=parse_time_requirement(data.get("timeRequirement")),
    )


def request_from_legacy(
    data: dict[str, Any], default_expiration_hours: int = 72, now: datetime | None = None
) -> PhotoRequest:
    """Build a `PhotoRequest` from a legacy dict (`budget` and `rewards` both accepted)."""
    status_raw = str(data.get("status") or RequestStatus.ACTIVE.value)
    try:
        status = RequestStatus(status_raw)
    except ValueError:
        logger.warning("Unknown request status {!r}, treating as active", status_raw)
        status = RequestStatus.ACTIVE
    return PhotoRequest(
        id=str(data.get("id", "")),
        title=str(data.get("title", "")),
        criteria=criteria_from_legacy(data, default_expiration_hours, now),
        owner_id=str(data.get("ownerId", "")),
        rewards=str(data.get("rewards") or data.get("budget") or ""),
        description=str(data.get("description", "")),
        requirements=list(data.get("requirements") or []),
        preferred_times=list(data.get("preferredTimes") or []),
        additional_notes=str(data.get("additionalNotes", "")),
        status=status,
        submission_count=int(data.get("submissionCount", 0) or 0),
    )


def photo_from_legacy(data: dict[str, Any]) -> PhotoRecord:
    """Build a `PhotoRecord` from the picker's `{id, creationTime, ...}` dict."""
    capture = parse_js_timestamp(data.get("creationTime"))
    if capture is None:
        raise ValueError(f"photo {data.get('id')!r} has no usable creationTime")
    return PhotoRecord(
        id=str(data["id"]),
        capture_time=capture,
        filename=str(data.get("filename", "")),
        width=int(data.get("width", 0)),
        height=int(data.get("height", 0)),
        uri=str(data.get("uri", "")),
        location=_coords(data.get("location")),
    )


def match_to_legacy(match: MatchResult) -> dict[str, Any]:
    loc = match.location
    return {
        "id": match.id,
        "creationTime": match.capture_time.isoformat(),
        "filename": match.filename,
        "location": None if loc is None else {"latitude": loc.latitude, "longitude": loc.longitude},
        "width": match.width,
        "height": match.height,
        "uri": match.uri,
        "score": match.score,
        "distance": match.distance_km,
        "matchReasons": list(match.match_reasons),
    }


def summary_to_legacy(summary: MatchSummary) -> dict[str, Any]:
    return {
        "exactMatches": summary.exact_match_count,
        "nearbyPhotos": summary.nearby_match_count,
        "recentPhotos": summary.recent_match_count,
    }
