"""Core service interfaces and shared data structures.

This module defines the request repository contract used by the view-model
layer and the change events it publishes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from core.models import PhotoRequest


class ChangeKind(str, Enum):
    ADDED = "added"
    UPDATED = "updated"


@dataclass(frozen=True)
class RequestChange:
    """Notification emitted by a request repository after a mutation.

    Attributes:
        kind: What happened to the request.
        request: The request as stored after the change.
    """

    kind: ChangeKind
    request: PhotoRequest


RequestListener = Callable[[RequestChange], None]


class IRequestRepository:
    """Interface for photo-request stores."""

    def list_all(self) -> list[PhotoRequest]:
        """Return every request in insertion order."""
        raise NotImplementedError

    def list_for_owner(self, owner_id: str | None = None) -> list[PhotoRequest]:
        """Return requests owned by `owner_id` (the current user when None)."""
        raise NotImplementedError

    def get(self, request_id: str) -> PhotoRequest | None:
        """Return the request with `request_id`, or None."""
        raise NotImplementedError

    def add(self, request: PhotoRequest) -> PhotoRequest:
        """Store a new request and notify subscribers."""
        raise NotImplementedError

    def update(self, request: PhotoRequest) -> PhotoRequest:
        """Replace an existing request and notify subscribers."""
        raise NotImplementedError

    def subscribe(self, listener: RequestListener) -> Callable[[], None]:
        """Register `listener`; the returned callable unsubscribes it."""
        raise NotImplementedError
