"""Utilities for timestamp parsing and formatting.

This module centralizes date parsing/formatting so the CSV repository, the
EXIF reader and the legacy adapters share one behavior. Parsers are
best-effort and return `None` rather than raising.
"""

from __future__ import annotations

from datetime import datetime

CSV_DT_FMT = "%Y-%m-%d %H:%M:%S"
EXIF_DT_FMT = "%Y:%m:%d %H:%M:%S"


def parse_csv_datetime(value: str | None) -> datetime | None:
    """Parse timestamp from CSV using CSV_DT_FMT, falling back to ISO 8601."""
    if not value:
        return None
    text = value.strip()
    try:
        return datetime.strptime(text, CSV_DT_FMT)
    except (ValueError, TypeError):
        pass
    try:
        return datetime.fromisoformat(text)
    except (ValueError, TypeError):
        return None


def format_csv_datetime(dt: datetime | None) -> str:
    """Format datetime for CSV; empty string when None."""
    try:
        return dt.strftime(CSV_DT_FMT) if dt else ""
    except (ValueError, TypeError, AttributeError):
        return ""


def parse_exif_datetime(value: object) -> datetime | None:
    """Parse an EXIF "YYYY:MM:DD HH:MM:SS" value (bytes or str)."""
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    text = str(value).strip().rstrip("\x00")
    if not text:
        return None
    try:
        # Common EXIF format: "YYYY:MM:DD HH:MM:SS"
        if len(text) >= 19 and text[4] == ":" and text[7] == ":":
            return datetime.strptime(text[:19], EXIF_DT_FMT)
        return datetime.fromisoformat(text.replace("/", "-"))
    except ValueError:
        return None


def parse_js_timestamp(value: object) -> datetime | None:
    """Parse a JavaScript-style timestamp: epoch milliseconds or ISO string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0)
        except (OverflowError, OSError, ValueError):
            return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
