"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import Coordinates
from core.services.location_service import DEFAULT_GAZETTEER, Gazetteer

DEFAULT_EXPIRATION_HOURS = 72


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JsonSettings:
        """Build settings from an in-memory mapping (no file involved)."""
        inst = cls.__new__(cls)
        inst._path = Path("<memory>")
        inst._data = data
        return inst

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def _parse_extra_locations(raw: Any) -> dict[str, Coordinates]:
    # Expect a mapping like: {"Fenway Park": [42.3467, -71.0972], ...}
    result: dict[str, Coordinates] = {}
    if not isinstance(raw, dict):
        return result
    for name, value in raw.items():
        try:
            lat, lon = value
            result[str(name)] = Coordinates(float(lat), float(lon))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed location {!r}: {!r}", name, value)
    return result


@dataclass
class MatchingConfig:
    """Matching options assembled from settings."""

    gazetteer: Gazetteer = field(default_factory=lambda: DEFAULT_GAZETTEER)
    default_expiration_hours: int = DEFAULT_EXPIRATION_HOURS

    @classmethod
    def from_settings(cls, settings: JsonSettings) -> MatchingConfig:
        extra = _parse_extra_locations(settings.get("matching.extra_locations", {}))
        gazetteer = DEFAULT_GAZETTEER.with_entries(extra) if extra else DEFAULT_GAZETTEER
        hours = settings.get("matching.default_expiration_hours", DEFAULT_EXPIRATION_HOURS)
        try:
            hours = int(hours)
        except (TypeError, ValueError):
            logger.warning("Invalid default_expiration_hours {!r}, using default", hours)
            hours = DEFAULT_EXPIRATION_HOURS
        if hours <= 0:
            logger.warning("Non-positive default_expiration_hours {}, using default", hours)
            hours = DEFAULT_EXPIRATION_HOURS
        return cls(gazetteer=gazetteer, default_expiration_hours=hours)
