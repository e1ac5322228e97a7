from datetime import datetime

import pytest

from conftest import make_photo
from core.models import Coordinates
from infrastructure.csv_repository import CSV_HEADERS, CsvPhotoRepository


@pytest.fixture
def repo():
    return CsvPhotoRepository()


class TestCsvPhotoRepository:
    def test_save_then_load(self, repo, tmp_path):
        photos = [make_photo("a"), make_photo("b", location=None)]
        path = tmp_path / "out" / "photos.csv"
        repo.save(path, photos)
        loaded = repo.load_all(path)
        assert loaded == photos

    def test_load_sample_style_rows(self, repo, tmp_path):
        path = tmp_path / "photos.csv"
        path.write_text(
            ",".join(CSV_HEADERS)
            + "\n"
            + "p1,IMG_1.HEIC,2026-10-18 09:12:44,42.3556,-71.0652,4032,3024,file:///1\n"
            + "p2,IMG_2.PNG,2026-10-15T14:22:00,,,1170,2532,\n",
            encoding="utf-8",
        )
        first, second = repo.load_all(path)
        assert first.location == Coordinates(42.3556, -71.0652)
        assert first.capture_time == datetime(2026, 10, 18, 9, 12, 44)
        assert (first.width, first.height) == (4032, 3024)
        assert second.location is None
        assert second.capture_time == datetime(2026, 10, 15, 14, 22)
        assert second.uri == ""

    def test_bad_rows_are_skipped(self, repo, tmp_path):
        path = tmp_path / "photos.csv"
        path.write_text(
            ",".join(CSV_HEADERS)
            + "\n"
            + "bad-date,x.jpg,yesterday,,,10,10,\n"
            + "bad-dim,x.jpg,2026-10-18 09:12:44,,,0,10,\n"
            + "half-gps,x.jpg,2026-10-18 09:12:44,42.0,,10,10,\n"
            + "ok,x.jpg,2026-10-18 09:12:44,,,10,10,\n",
            encoding="utf-8",
        )
        assert [p.id for p in repo.load_all(path)] == ["ok"]

    def test_missing_headers(self, repo, tmp_path):
        path = tmp_path / "photos.csv"
        path.write_text("Id,Filename\np1,x.jpg\n", encoding="utf-8")
        with pytest.raises(ValueError, match="missing required headers"):
            list(repo.load(path))
