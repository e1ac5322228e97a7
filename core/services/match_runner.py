"""Stateful front door to the matching engine for the view-model layer."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from loguru import logger

from core.models import MatchResult, MatchSummary, PhotoRecord, RequestCriteria
from core.services.location_service import Gazetteer
from core.services.matching_service import find_matches
from core.services.summary_service import summarize_matches


class MatchingService:
    """Bundles a gazetteer and a clock for callers that match repeatedly."""

    def __init__(
        self,
        gazetteer: Gazetteer | None = None,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a MatchingService.

        Args:
            gazetteer: Named-place table (defaults to the built-in landmarks).
            now_fn: Clock used for recency, time windows and expiry.
        """
        self._gazetteer = gazetteer
        self._now_fn = now_fn or datetime.now

    @property
    def gazetteer(self) -> Gazetteer | None:
        return self._gazetteer

    def now(self) -> datetime:
        return self._now_fn()

    def find_matches(
        self, photos: Iterable[PhotoRecord], request: RequestCriteria
    ) -> list[MatchResult]:
        return find_matches(photos, request, now=self.now(), gazetteer=self._gazetteer)

    def summarize(self, photos: Iterable[PhotoRecord], request: RequestCriteria) -> MatchSummary:
        return self.match_and_summarize(photos, request)[1]

    def match_and_summarize(
        self,
        photos: Iterable[PhotoRecord],
        request: RequestCriteria,
        now: datetime | None = None,
    ) -> tuple[list[MatchResult], MatchSummary]:
        """Run the engine once and derive the summary from the same results.

        Pass `now` to evaluate several requests against one clock reading.
        """
        now = now or self.now()
        matches = find_matches(photos, request, now=now, gazetteer=self._gazetteer)
        summary = summarize_matches(matches, now=now)
        logger.debug(
            "Summary: {} exact, {} nearby, {} recent",
            summary.exact_match_count,
            summary.nearby_match_count,
            summary.recent_match_count,
        )
        return matches, summary
