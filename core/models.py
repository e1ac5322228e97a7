"""Core domain models for photo records, request criteria and match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from core.timeutil import normalize

PRESET_WINDOW_HOURS = (24, 168, 720)


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class PhotoRecord:
    """Metadata of a single photo from the seller's library."""

    id: str
    capture_time: datetime
    filename: str
    width: int
    height: int
    uri: str = ""
    location: Coordinates | None = None

    @property
    def megapixels(self) -> float:
        """Pixel count in millions (0.0 when a dimension is not positive)."""
        if self.width <= 0 or self.height <= 0:
            return 0.0
        return self.width * self.height / 1_000_000


class TimeRequirementKind(str, Enum):
    NONE = "none"
    LAST_24_HOURS = "last_24_hours"
    LAST_WEEK = "last_week"
    LAST_MONTH = "last_month"
    CUSTOM = "custom"


_KIND_HOURS = {
    TimeRequirementKind.LAST_24_HOURS: 24,
    TimeRequirementKind.LAST_WEEK: 168,
    TimeRequirementKind.LAST_MONTH: 720,
}


@dataclass(frozen=True)
class TimeRequirement:
    """Constraint on when a submitted photo must have been captured."""

    kind: TimeRequirementKind = TimeRequirementKind.NONE
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.kind is TimeRequirementKind.CUSTOM:
            if self.start is None or self.end is None:
                raise ValueError("custom time requirement needs both start and end")
            if normalize(self.start) > normalize(self.end):
                raise ValueError(f"custom window start {self.start} is after end {self.end}")

    @classmethod
    def none(cls) -> TimeRequirement:
        return cls()

    @classmethod
    def within_hours(cls, hours: int) -> TimeRequirement:
        """Preset "taken within the last N hours" window (24, 168 or 720)."""
        for kind, kind_hours in _KIND_HOURS.items():
            if kind_hours == hours:
                return cls(kind=kind)
        raise ValueError(
            f"unsupported time window: {hours}h (expected one of {PRESET_WINDOW_HOURS})"
        )

    @classmethod
    def custom(cls, start: datetime, end: datetime) -> TimeRequirement:
        return cls(kind=TimeRequirementKind.CUSTOM, start=start, end=end)

    @property
    def is_constrained(self) -> bool:
        return self.kind is not TimeRequirementKind.NONE

    @property
    def hours(self) -> int | None:
        """Window length for preset kinds, None otherwise."""
        return _KIND_HOURS.get(self.kind)


@dataclass(frozen=True)
class RequestCriteria:
    """What a buyer's request asks for, as seen by the matching engine.

    Explicit `location_coordinates` take precedence over `location_name`.
    `category` is carried for display and filtering only.
    """

    created_at: datetime
    expiration_hours: int
    location_name: str | None = None
    location_coordinates: Coordinates | None = None
    category: str = ""
    time_requirement: TimeRequirement = field(default_factory=TimeRequirement)

    def __post_init__(self) -> None:
        if self.expiration_hours <= 0:
            raise ValueError(f"expiration_hours must be positive, got {self.expiration_hours}")

    @property
    def expires_at(self) -> datetime:
        return self.created_at + timedelta(hours=self.expiration_hours)

    def is_expired(self, now: datetime) -> bool:
        """True once `now` is strictly past the expiration deadline."""
        return normalize(now) > normalize(self.expires_at)


@dataclass(frozen=True)
class MatchResult:
    """A photo that qualified for a request, with its score and reasons."""

    photo: PhotoRecord
    score: int
    distance_km: float | None = None
    match_reasons: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.photo.id

    @property
    def capture_time(self) -> datetime:
        return self.photo.capture_time

    @property
    def filename(self) -> str:
        return self.photo.filename

    @property
    def location(self) -> Coordinates | None:
        return self.photo.location

    @property
    def width(self) -> int:
        return self.photo.width

    @property
    def height(self) -> int:
        return self.photo.height

    @property
    def uri(self) -> str:
        return self.photo.uri


@dataclass(frozen=True)
class MatchSummary:
    """Badge counts aggregated over one match run."""

    exact_match_count: int = 0
    nearby_match_count: int = 0
    recent_match_count: int = 0
    oldest_match_time: datetime | None = None
    newest_match_time: datetime | None = None
    time_range_description: str | None = None

    @property
    def total_match_count(self) -> int:
        return self.exact_match_count + self.nearby_match_count


class RequestStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


@dataclass
class PhotoRequest:
    """A buyer's request as kept by the request store."""

    id: str
    title: str
    criteria: RequestCriteria
    owner_id: str = ""
    rewards: str = ""
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    preferred_times: list[str] = field(default_factory=list)
    additional_notes: str = ""
    status: RequestStatus = RequestStatus.ACTIVE
    submission_count: int = 0

    @property
    def location_label(self) -> str:
        return self.criteria.location_name or "Custom Location"

    def effective_status(self, now: datetime) -> RequestStatus:
        """Stored status, downgraded to EXPIRED once an active request lapses."""
        if self.status is RequestStatus.ACTIVE and self.criteria.is_expired(now):
            return RequestStatus.EXPIRED
        return self.status
