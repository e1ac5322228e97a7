"""ViewModel for orchestrating photo loading, request state and matching."""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from app.viewmodels.match_vm import MatchVM
from app.viewmodels.request_vm import RequestMatchVM
from core.models import PhotoRecord, PhotoRequest
from core.services.interfaces import IRequestRepository, RequestChange
from core.services.match_runner import MatchingService
from core.services.valuation_service import PhotoValueReport, build_value_report
from infrastructure.request_store import filter_requests_by_category


class MainVM:
    """Main seller-side view-model.

    Keeps the seller's photo metadata and the match state for every open
    request, and recomputes it whenever photos or requests change.
    """

    def __init__(
        self,
        photo_repo,
        request_repo: IRequestRepository,
        matcher: MatchingService | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            photo_repo: Repository with a `load(path)` method yielding `PhotoRecord`.
            request_repo: Store of buyer requests; its change events trigger a refresh.
            matcher: Matching service (defaults to `MatchingService()`).
        """
        self._photo_repo = photo_repo
        self._requests = request_repo
        self._matcher = matcher or MatchingService()
        self.photos: list[PhotoRecord] = []
        self.request_matches: list[RequestMatchVM] = []
        self.category_filter: str | None = None
        self._source_csv_path: str | None = None
        self._unsubscribe = request_repo.subscribe(self._on_request_change)

    def load_csv(self, path: str) -> None:
        """Load photo metadata from CSV `path` and refresh matches."""
        self.set_photos(self._photo_repo.load(path))
        self._source_csv_path = path

    def get_source_csv_path(self) -> str | None:
        return self._source_csv_path

    def set_photos(self, photos: Iterable[PhotoRecord]) -> None:
        self.photos = list(photos)
        self.refresh()

    def set_category_filter(self, category: str | None) -> None:
        self.category_filter = category or None
        self.refresh()

    def refresh(self) -> None:
        """Recompute matches for every visible request."""
        now = self._matcher.now()
        visible = filter_requests_by_category(self._requests.list_all(), self.category_filter)
        rows: list[RequestMatchVM] = []
        for req in visible:
            matches, summary = self._matcher.match_and_summarize(self.photos, req.criteria, now=now)
            rows.append(
                RequestMatchVM(
                    request=req,
                    summary=summary,
                    items=[MatchVM(m) for m in matches],
                    is_expired=req.criteria.is_expired(now),
                )
            )
        self.request_matches = rows
        logger.info("Refreshed matches: {} requests, {} photos", len(rows), len(self.photos))

    def matches_for(self, request_id: str) -> RequestMatchVM | None:
        for row in self.request_matches:
            if row.request.id == request_id:
                return row
        return None

    def add_request(self, request: PhotoRequest) -> PhotoRequest:
        """Add a request through the repository; the change event refreshes state."""
        return self._requests.add(request)

    def value_report(self) -> PhotoValueReport:
        return build_value_report(self.photos, now=self._matcher.now())

    def close(self) -> None:
        """Stop listening to the request repository."""
        self._unsubscribe()

    @property
    def request_count(self) -> int:
        return len(self.request_matches)

    def _on_request_change(self, change: RequestChange) -> None:
        logger.debug("Request {} {}", change.request.id, change.kind.value)
        self.refresh()
