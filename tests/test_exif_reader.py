from datetime import datetime
from fractions import Fraction
import os

from PIL import ExifTags, Image
import pytest

from core.models import Coordinates
from infrastructure import exif_reader
from infrastructure.exif_reader import (
    dms_to_decimal,
    iter_image_files,
    read_photo_library,
    read_photo_record,
)


class _FakeExif(dict):
    """Stand-in for `PIL.Image.Exif` exposing only the GPS sub-IFD."""

    def __init__(self, gps):
        super().__init__()
        self._gps = gps

    def get_ifd(self, tag):
        return self._gps if tag == ExifTags.IFD.GPSInfo else {}


class TestDmsToDecimal:
    def test_north_east(self):
        assert dms_to_decimal((42, 21, 19.44), "N") == pytest.approx(42.3554)

    def test_south_west_are_negative(self):
        assert dms_to_decimal((71, 3, 55.8), "W") == pytest.approx(-71.0655)
        assert dms_to_decimal((33, 52, 7.68), b"S") == pytest.approx(-33.8688)

    def test_rationals(self):
        value = dms_to_decimal((Fraction(42), Fraction(21), Fraction(1944, 100)), "N")
        assert value == pytest.approx(42.3554)

    def test_malformed(self):
        assert dms_to_decimal((42, 21), "N") is None
        assert dms_to_decimal(None, "N") is None


class TestGpsLocation:
    def test_full_gps_block(self):
        exif = _FakeExif({1: "N", 2: (42, 21, 19.44), 3: "W", 4: (71, 3, 55.8)})
        loc = exif_reader._gps_location(exif)
        assert loc == Coordinates(pytest.approx(42.3554), pytest.approx(-71.0655))

    def test_missing_longitude(self):
        assert exif_reader._gps_location(_FakeExif({1: "N", 2: (42, 21, 19.44)})) is None

    def test_out_of_range(self):
        exif = _FakeExif({1: "N", 2: (95, 0, 0), 3: "E", 4: (10, 0, 0)})
        assert exif_reader._gps_location(exif) is None


class TestReadPhotoRecord:
    @pytest.fixture
    def image_with_exif(self, tmp_path):
        path = tmp_path / "with_exif.jpg"
        img = Image.new("RGB", (120, 80), color="blue")
        exif = img.getexif()
        exif[306] = "2026:10:01 08:00:00"
        exif[36867] = "2026:09:30 07:15:00"
        img.save(path, "JPEG", exif=exif)
        return path

    @pytest.fixture
    def image_without_exif(self, tmp_path):
        path = tmp_path / "no_exif.png"
        Image.new("RGB", (64, 32), color="green").save(path, "PNG")
        stamp = datetime(2026, 5, 4, 3, 2, 1).timestamp()
        os.utime(path, (stamp, stamp))
        return path

    def test_reads_dimensions_and_original_time(self, image_with_exif):
        rec = read_photo_record(image_with_exif)
        assert rec is not None
        assert (rec.width, rec.height) == (120, 80)
        assert rec.capture_time == datetime(2026, 9, 30, 7, 15)
        assert rec.location is None
        assert rec.filename == "with_exif.jpg"
        assert rec.uri.startswith("file://")

    def test_falls_back_to_mtime(self, image_without_exif):
        rec = read_photo_record(image_without_exif)
        assert rec is not None
        assert rec.capture_time == datetime(2026, 5, 4, 3, 2, 1)

    def test_rotated_orientation_swaps_dimensions(self, tmp_path):
        path = tmp_path / "rotated.jpg"
        img = Image.new("RGB", (120, 80))
        exif = img.getexif()
        exif[274] = 6
        img.save(path, "JPEG", exif=exif)
        rec = read_photo_record(path)
        assert (rec.width, rec.height) == (80, 120)

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"not an image")
        assert read_photo_record(path) is None

    def test_id_is_stable(self, image_with_exif):
        assert read_photo_record(image_with_exif).id == read_photo_record(image_with_exif).id


class TestLibrary:
    def test_iter_and_read(self, tmp_path):
        (tmp_path / "sub").mkdir()
        Image.new("RGB", (10, 10)).save(tmp_path / "a.jpg", "JPEG")
        Image.new("RGB", (10, 10)).save(tmp_path / "sub" / "b.PNG", "PNG")
        (tmp_path / "notes.txt").write_text("hello", encoding="utf-8")
        (tmp_path / "broken.jpg").write_bytes(b"junk")

        files = list(iter_image_files(tmp_path))
        assert [f.name for f in files] == ["a.jpg", "broken.jpg", "b.PNG"]
        records = read_photo_library(files)
        assert sorted(r.filename for r in records) == ["a.jpg", "b.PNG"]
