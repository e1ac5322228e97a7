"""CSV persistence for photo metadata records.

Provides load/save of `PhotoRecord` rows with minimal validation. Rows that
cannot be parsed are logged and skipped; missing headers are an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import csv
from pathlib import Path

from loguru import logger

from core.models import Coordinates, PhotoRecord
from infrastructure.utils import format_csv_datetime, parse_csv_datetime

CSV_HEADERS = [
    "Id",
    "Filename",
    "CaptureTime",
    "Latitude",
    "Longitude",
    "Width",
    "Height",
    "Uri",
]

REQUIRED_HEADERS = ["Id", "Filename", "CaptureTime", "Width", "Height"]


def _parse_location(lat_field: str | None, lon_field: str | None) -> Coordinates | None:
    """Return coordinates when both fields are present, None when both are empty."""
    lat_text = (lat_field or "").strip()
    lon_text = (lon_field or "").strip()
    if not lat_text and not lon_text:
        return None
    if not lat_text or not lon_text:
        raise ValueError(f"incomplete GPS pair: {lat_field!r}, {lon_field!r}")
    return Coordinates(float(lat_text), float(lon_text))


def _parse_dimension(value: str | None, name: str) -> int:
    dim = int(float((value or "").strip()))
    if dim <= 0:
        raise ValueError(f"{name} must be positive, got {dim}")
    return dim


class CsvPhotoRepository:
    """Load and save photo metadata in CSV format."""

    def load(self, csv_path: str | Path) -> Iterator[PhotoRecord]:
        """Yield `PhotoRecord` from CSV at `csv_path`."""
        path = Path(csv_path)
        with path.open("r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            # Extra columns are accepted and ignored
            missing = [h for h in REQUIRED_HEADERS if h not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"CSV missing required headers: {missing}")

            for row in reader:
                try:
                    capture_time = parse_csv_datetime(row.get("CaptureTime"))
                    if capture_time is None:
                        raise ValueError(f"invalid CaptureTime {row.get('CaptureTime')!r}")
                    yield PhotoRecord(
                        id=(row.get("Id") or "").strip(),
                        capture_time=capture_time,
                        filename=row.get("Filename", "") or "",
                        width=_parse_dimension(row.get("Width"), "Width"),
                        height=_parse_dimension(row.get("Height"), "Height"),
                        uri=row.get("Uri", "") or "",
                        location=_parse_location(row.get("Latitude"), row.get("Longitude")),
                    )
                except (ValueError, TypeError) as ex:
                    logger.error("CSV row error: {} | row={}", ex, row)
                    continue

    def load_all(self, csv_path: str | Path) -> list[PhotoRecord]:
        records = list(self.load(csv_path))
        logger.info("Loaded {} photo records from {}", len(records), csv_path)
        return records

    def save(self, csv_path: str | Path, records: Iterable[PhotoRecord]) -> None:
        """Write photo records to `csv_path` using canonical headers."""
        path = Path(csv_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_HEADERS)
            writer.writeheader()
            for item in records:
                loc = item.location
                writer.writerow(
                    {
                        "Id": item.id,
                        "Filename": item.filename,
                        "CaptureTime": format_csv_datetime(item.capture_time),
                        "Latitude": "" if loc is None else repr(loc.latitude),
                        "Longitude": "" if loc is None else repr(loc.longitude),
                        "Width": item.width,
                        "Height": item.height,
                        "Uri": item.uri,
                    }
                )
