"""In-memory store of buyer photo requests with change notification."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from loguru import logger

from core.models import PhotoRequest, RequestCriteria
from core.services.interfaces import (
    ChangeKind,
    IRequestRepository,
    RequestChange,
    RequestListener,
)

DEFAULT_USER_ID = "user1"


class InMemoryRequestRepository(IRequestRepository):
    """Process-local request store. Readers get copies of the request list."""

    def __init__(
        self,
        current_user_id: str = DEFAULT_USER_ID,
        initial: Iterable[PhotoRequest] = (),
    ) -> None:
        self._current_user_id = current_user_id
        self._requests: list[PhotoRequest] = list(initial)
        self._listeners: list[RequestListener] = []

    @property
    def current_user_id(self) -> str:
        return self._current_user_id

    def list_all(self) -> list[PhotoRequest]:
        return list(self._requests)

    def list_for_owner(self, owner_id: str | None = None) -> list[PhotoRequest]:
        owner = owner_id or self._current_user_id
        return [r for r in self._requests if r.owner_id == owner]

    def get(self, request_id: str) -> PhotoRequest | None:
        for r in self._requests:
            if r.id == request_id:
                return r
        return None

    def add(self, request: PhotoRequest) -> PhotoRequest:
        if self.get(request.id) is not None:
            raise ValueError(f"Request {request.id} already exists")
        if not request.owner_id:
            request = replace(request, owner_id=self._current_user_id)
        self._requests.append(request)
        logger.info("Added request {} ({})", request.id, request.title)
        self._notify(RequestChange(ChangeKind.ADDED, request))
        return request

    def update(self, request: PhotoRequest) -> PhotoRequest:
        for idx, existing in enumerate(self._requests):
            if existing.id == request.id:
                self._requests[idx] = request
                logger.info("Updated request {}", request.id)
                self._notify(RequestChange(ChangeKind.UPDATED, request))
                return request
        raise KeyError(request.id)

    def subscribe(self, listener: RequestListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: RequestChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.exception("Request listener {} failed: {}", listener, ex)


def filter_requests_by_category(
    requests: Iterable[PhotoRequest], category: str | None
) -> list[PhotoRequest]:
    """Keep requests in `category` (case-insensitive); all when category is empty."""
    if not category:
        return list(requests)
    wanted = category.strip().casefold()
    return [r for r in requests if r.criteria.category.strip().casefold() == wanted]


def seed_requests(now: datetime, current_user_id: str = DEFAULT_USER_ID) -> list[PhotoRequest]:
    """Sample requests used by the demo entry point and tests."""
    return [
        PhotoRequest(
            id="1",
            title="Harvard Square Photos",
            criteria=RequestCriteria(
                created_at=now,
                expiration_hours=72,
                location_name="Harvard Square",
                category="Urban",
            ),
            owner_id=current_user_id,
            rewards="$200-300",
            description=(
                "Looking for recent photos of Harvard Square area, especially around "
                "the main intersection and Harvard Yard."
            ),
            requirements=[
                "High resolution (minimum 12MP)",
                "Taken within the last week",
                "Must include street life and architecture",
                "Good lighting conditions",
                "No heavy editing or filters",
            ],
            preferred_times=["Morning", "Late afternoon"],
            submission_count=4,
        ),
        PhotoRequest(
            id="2",
            title="Museum of Science Area",
            criteria=RequestCriteria(
                created_at=now,
                expiration_hours=168,
                location_name="Museum of Science",
                category="Architecture",
            ),
            owner_id=current_user_id,
            rewards="$150-200",
            description=(
                "Need photos from the Museum of Science area, focusing on the building "
                "and Charles River views."
            ),
            requirements=[
                "Minimum 8MP resolution",
                "Taken during daylight hours",
                "Must show the museum building or river views",
            ],
            preferred_times=["Daytime", "Sunset"],
            submission_count=2,
        ),
        PhotoRequest(
            id="3",
            title="Boston Common Winter",
            criteria=RequestCriteria(
                created_at=now,
                expiration_hours=120,
                location_name="Boston Common",
                category="Nature",
            ),
            owner_id="user2",
            rewards="$250-350",
            description=(
                "Looking for winter scenes from Boston Common, especially around Frog "
                "Pond and the winter activities."
            ),
            requirements=[
                "High resolution photos",
                "Must capture winter atmosphere",
            ],
            preferred_times=["Morning", "Evening"],
        ),
    ]
