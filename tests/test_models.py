from datetime import datetime, timedelta

import pytest

from conftest import NOW, make_photo, make_request
from core.models import (
    MatchResult,
    PhotoRequest,
    RequestStatus,
    TimeRequirement,
    TimeRequirementKind,
)


class TestTimeRequirement:
    @pytest.mark.parametrize(
        "hours,kind",
        [
            (24, TimeRequirementKind.LAST_24_HOURS),
            (168, TimeRequirementKind.LAST_WEEK),
            (720, TimeRequirementKind.LAST_MONTH),
        ],
    )
    def test_presets(self, hours, kind):
        req = TimeRequirement.within_hours(hours)
        assert req.kind is kind
        assert req.hours == hours
        assert req.is_constrained

    def test_unsupported_preset(self):
        with pytest.raises(ValueError):
            TimeRequirement.within_hours(48)

    def test_custom_requires_ordered_bounds(self):
        with pytest.raises(ValueError):
            TimeRequirement.custom(datetime(2026, 2, 1), datetime(2026, 1, 1))
        with pytest.raises(ValueError):
            TimeRequirement(kind=TimeRequirementKind.CUSTOM, start=datetime(2026, 1, 1))

    def test_none(self):
        req = TimeRequirement.none()
        assert not req.is_constrained
        assert req.hours is None


class TestRequestCriteria:
    def test_expiration_must_be_positive(self):
        with pytest.raises(ValueError):
            make_request(expiration_hours=0)

    def test_expires_at(self):
        req = make_request(expiration_hours=5)
        assert req.expires_at == NOW + timedelta(hours=5)
        assert not req.is_expired(NOW + timedelta(hours=5))
        assert req.is_expired(NOW + timedelta(hours=6))


class TestPhotoRecord:
    def test_megapixels(self):
        assert make_photo(width=4000, height=3000).megapixels == pytest.approx(12.0)
        assert make_photo(width=0, height=3000).megapixels == 0.0

    def test_match_result_forwards_photo_fields(self):
        photo = make_photo("x")
        match = MatchResult(photo=photo, score=42)
        assert (match.id, match.width, match.height, match.uri) == (
            "x",
            4000,
            3000,
            "file:///photos/x.jpg",
        )
        assert match.capture_time == photo.capture_time
        assert match.location == photo.location


class TestPhotoRequest:
    def test_effective_status(self):
        req = PhotoRequest(id="1", title="t", criteria=make_request(expiration_hours=1))
        assert req.effective_status(NOW) is RequestStatus.ACTIVE
        assert req.effective_status(NOW + timedelta(hours=2)) is RequestStatus.EXPIRED

    def test_completed_stays_completed(self):
        req = PhotoRequest(
            id="1",
            title="t",
            criteria=make_request(expiration_hours=1),
            status=RequestStatus.COMPLETED,
        )
        assert req.effective_status(NOW + timedelta(hours=2)) is RequestStatus.COMPLETED

    def test_location_label(self):
        named = PhotoRequest(id="1", title="t", criteria=make_request())
        custom = PhotoRequest(id="2", title="t", criteria=make_request(location_name=None))
        assert named.location_label == "Boston Common"
        assert custom.location_label == "Custom Location"
