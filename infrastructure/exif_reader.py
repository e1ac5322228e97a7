"""Build `PhotoRecord` metadata from image files on disk.

Reads pixel dimensions, capture time and GPS position with Pillow. HEIC/HEIF
files (the default camera format on phones) are opened through pillow-heif.
Extraction is best-effort: a file Pillow cannot open yields `None`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime
import hashlib
from pathlib import Path
from typing import Any

from loguru import logger
from PIL import ExifTags, Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

from core.models import Coordinates, PhotoRecord
from infrastructure.utils import parse_exif_datetime

register_heif_opener()

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".heic", ".heif", ".tif", ".tiff", ".webp")

TAG_DATETIME = 306
TAG_DATETIME_ORIGINAL = 36867
TAG_DATETIME_DIGITIZED = 36868
TAG_ORIENTATION = 274

GPS_LATITUDE_REF = 1
GPS_LATITUDE = 2
GPS_LONGITUDE_REF = 3
GPS_LONGITUDE = 4

# EXIF orientations 5-8 are rotated by 90 degrees
_ROTATED_ORIENTATIONS = {5, 6, 7, 8}


def dms_to_decimal(dms: Sequence[Any], ref: str | bytes | None) -> float | None:
    """Convert an EXIF (degrees, minutes, seconds) triple to signed decimal degrees."""
    try:
        degrees, minutes, seconds = (float(v) for v in dms)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    value = degrees + minutes / 60.0 + seconds / 3600.0
    if isinstance(ref, bytes):
        ref = ref.decode("ascii", errors="ignore")
    if ref and ref.strip().upper() in ("S", "W"):
        value = -value
    return value


def _gps_location(exif: Image.Exif) -> Coordinates | None:
    gps = exif.get_ifd(ExifTags.IFD.GPSInfo)
    if not gps or GPS_LATITUDE not in gps or GPS_LONGITUDE not in gps:
        return None
    lat = dms_to_decimal(gps[GPS_LATITUDE], gps.get(GPS_LATITUDE_REF))
    lon = dms_to_decimal(gps[GPS_LONGITUDE], gps.get(GPS_LONGITUDE_REF))
    if lat is None or lon is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        logger.warning("GPS out of range: {}, {}", lat, lon)
        return None
    return Coordinates(lat, lon)


def _capture_time(exif: Image.Exif) -> datetime | None:
    sub = exif.get_ifd(ExifTags.IFD.Exif)
    for raw in (
        sub.get(TAG_DATETIME_ORIGINAL),
        sub.get(TAG_DATETIME_DIGITIZED),
        exif.get(TAG_DATETIME_ORIGINAL),
        exif.get(TAG_DATETIME),
    ):
        dt = parse_exif_datetime(raw)
        if dt is not None:
            return dt
    return None


def photo_id_for(path: Path) -> str:
    """Stable identifier derived from the absolute path."""
    return hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:16]


def read_photo_record(path: str | Path) -> PhotoRecord | None:
    """Extract a `PhotoRecord` from the image at `path`.

    Falls back to the file modification time when EXIF carries no date.
    """
    file_path = Path(path)
    try:
        with Image.open(file_path) as im:
            width, height = im.size
            exif = im.getexif()
            capture = _capture_time(exif)
            location = _gps_location(exif)
            if exif.get(TAG_ORIENTATION) in _ROTATED_ORIENTATIONS:
                width, height = height, width
    except (OSError, UnidentifiedImageError, ValueError) as ex:
        logger.warning("Cannot read image metadata for {}: {}", file_path, ex)
        return None

    if capture is None:
        try:
            capture = datetime.fromtimestamp(file_path.stat().st_mtime)
        except OSError as ex:
            logger.warning("stat failed for {}: {}", file_path, ex)
            return None
        logger.debug("No EXIF date for {}, using mtime", file_path)

    return PhotoRecord(
        id=photo_id_for(file_path),
        capture_time=capture,
        filename=file_path.name,
        width=width,
        height=height,
        uri=file_path.resolve().as_uri(),
        location=location,
    )


def iter_image_files(folder: str | Path) -> Iterator[Path]:
    """Yield image files under `folder` recursively, sorted by path."""
    root = Path(folder)
    for p in sorted(root.rglob("*")):
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS:
            yield p


def read_photo_library(paths: Iterable[str | Path]) -> list[PhotoRecord]:
    """Read every readable image in `paths`, skipping the rest."""
    records: list[PhotoRecord] = []
    for p in paths:
        rec = read_photo_record(p)
        if rec is not None:
            records.append(rec)
    return records
