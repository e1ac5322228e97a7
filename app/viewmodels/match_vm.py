"""Lightweight view model wrapper around `MatchResult`."""

from __future__ import annotations

from dataclasses import dataclass

from core.geo import format_distance
from core.models import MatchResult


@dataclass
class MatchVM:
    """Expose convenient properties for bindings/templates."""

    match: MatchResult

    @property
    def photo_id(self) -> str:
        return self.match.id

    @property
    def file_name(self) -> str:
        return self.match.filename

    @property
    def score_label(self) -> str:
        """Score as shown on the match badge, e.g. "85% match"."""
        return f"{self.match.score}% match"

    @property
    def distance_label(self) -> str:
        """Formatted distance, or "Unknown location" without GPS data."""
        if self.match.distance_km is None:
            return "Unknown location"
        return f"{format_distance(self.match.distance_km)} away"

    @property
    def resolution_label(self) -> str:
        return f"{self.match.width}x{self.match.height}"

    @property
    def reasons_text(self) -> str:
        return " • ".join(self.match.match_reasons)
