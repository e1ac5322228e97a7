from __future__ import annotations

from datetime import datetime, timedelta
from math import pi

import pytest

from core.models import Coordinates, PhotoRecord, RequestCriteria, TimeRequirement

NOW = datetime(2026, 10, 19, 12, 0, 0)
BOSTON_COMMON = Coordinates(42.3554, -71.0655)
FANEUIL_HALL = Coordinates(42.3600, -71.0568)

# Kilometres per degree of latitude on a 6371 km sphere
KM_PER_DEGREE = 6371.0 * pi / 180.0


def north_of(origin: Coordinates, km: float) -> Coordinates:
    """Point `km` due north of `origin` (exact along a meridian)."""
    return Coordinates(origin.latitude + km / KM_PER_DEGREE, origin.longitude)


def make_photo(
    photo_id: str = "p1",
    location: Coordinates | None = BOSTON_COMMON,
    age: timedelta = timedelta(0),
    width: int = 4000,
    height: int = 3000,
) -> PhotoRecord:
    return PhotoRecord(
        id=photo_id,
        capture_time=NOW - age,
        filename=f"{photo_id}.jpg",
        width=width,
        height=height,
        uri=f"file:///photos/{photo_id}.jpg",
        location=location,
    )


def make_request(
    location_name: str | None = "Boston Common",
    coordinates: Coordinates | None = None,
    created_at: datetime = NOW,
    expiration_hours: int = 72,
    time_requirement: TimeRequirement | None = None,
    category: str = "Urban",
) -> RequestCriteria:
    return RequestCriteria(
        created_at=created_at,
        expiration_hours=expiration_hours,
        location_name=location_name,
        location_coordinates=coordinates,
        category=category,
        time_requirement=time_requirement or TimeRequirement.none(),
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def boston_request() -> RequestCriteria:
    return make_request()
