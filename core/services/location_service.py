"""Resolve a request's target location to coordinates."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from loguru import logger

from core.models import Coordinates, RequestCriteria

DEFAULT_LOCATIONS: dict[str, Coordinates] = {
    "Harvard Square": Coordinates(42.3611, -71.0874),
    "Museum of Science": Coordinates(42.3667, -71.0625),
    "Boston Common": Coordinates(42.3554, -71.0655),
    "Faneuil Hall": Coordinates(42.3600, -71.0568),
    "Harvard Campus": Coordinates(42.3744, -71.1169),
    "TD Garden": Coordinates(42.3662, -71.0621),
    "Boston Harbor": Coordinates(42.3601, -71.0489),
}


def _fold(name: str) -> str:
    return " ".join(name.split()).casefold()


class Gazetteer:
    """Read-only table of named landmarks."""

    def __init__(self, entries: Mapping[str, Coordinates] | None = None) -> None:
        self._entries: dict[str, Coordinates] = dict(
            DEFAULT_LOCATIONS if entries is None else entries
        )
        self._folded = {_fold(k): v for k, v in self._entries.items()}

    def lookup(self, name: str | None) -> Coordinates | None:
        """Exact name first, then a case- and whitespace-insensitive match."""
        if not name:
            return None
        hit = self._entries.get(name)
        if hit is not None:
            return hit
        return self._folded.get(_fold(name))

    def names(self) -> list[str]:
        return list(self._entries)

    def with_entries(self, extra: Mapping[str, Coordinates]) -> Gazetteer:
        """Return a new gazetteer with `extra` added (overriding same names)."""
        merged = dict(self._entries)
        merged.update(extra)
        return Gazetteer(merged)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_GAZETTEER = Gazetteer()


def resolve_location(
    criteria: RequestCriteria, gazetteer: Gazetteer | None = None
) -> Coordinates | None:
    """Return the coordinates a request targets, or None when unresolvable.

    Explicit coordinates always win over the symbolic name.
    """
    if criteria.location_coordinates is not None:
        return criteria.location_coordinates
    coords = (gazetteer or DEFAULT_GAZETTEER).lookup(criteria.location_name)
    if coords is None:
        logger.debug("Unresolved request location: {!r}", criteria.location_name)
    return coords
