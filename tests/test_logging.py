import sys

from loguru import logger
import pytest

from infrastructure.logging import find_latest_log_file, init_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestLogging:
    def test_init_creates_directory_and_log_file(self, tmp_path, restore_logger):
        log_dir = tmp_path / "logs"
        assert init_logging(str(log_dir), level="DEBUG") == log_dir
        logger.info("hello from the matcher")
        logger.remove()  # flushes the enqueued file sink

        latest = find_latest_log_file(str(log_dir))
        assert latest is not None
        assert latest.name.startswith("captura_")
        assert "hello from the matcher" in latest.read_text(encoding="utf-8")

    def test_find_latest_without_logs(self, tmp_path):
        assert find_latest_log_file(str(tmp_path / "missing")) is None
        assert find_latest_log_file(str(tmp_path)) is None
