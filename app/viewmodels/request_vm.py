from __future__ import annotations

from dataclasses import dataclass, field

from app.viewmodels.match_vm import MatchVM
from core.models import MatchSummary, PhotoRequest


@dataclass
class RequestMatchVM:
    request: PhotoRequest
    summary: MatchSummary = field(default_factory=MatchSummary)
    items: list[MatchVM] = field(default_factory=list)
    is_expired: bool = False

    @property
    def match_count(self) -> int:
        return len(self.items)

    @property
    def badge_text(self) -> str:
        if self.is_expired:
            return "Expired"
        n = self.summary.total_match_count
        if n == 0:
            return "No matches yet"
        noun = "match" if n == 1 else "matches"
        return f"{n} {noun} near you"

    @property
    def exact_text(self) -> str | None:
        """Banner line for exact matches, None when there are none."""
        s = self.summary
        if not s.exact_match_count:
            return None
        text = f"{s.exact_match_count} at this exact spot"
        if s.time_range_description:
            text += f", taken {s.time_range_description}"
        return text
