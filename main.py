from __future__ import annotations

from datetime import datetime
from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.main_vm import MainVM
from core.services.match_runner import MatchingService
from infrastructure.csv_repository import CsvPhotoRepository
from infrastructure.exif_reader import iter_image_files, read_photo_library
from infrastructure.logging import init_logging
from infrastructure.request_store import InMemoryRequestRepository, seed_requests
from infrastructure.settings import JsonSettings, MatchingConfig

BASE_DIR = Path(__file__).parent


def _report(vm: MainVM) -> None:
    for row in vm.request_matches:
        logger.info("[{}] {} | {}", row.request.id, row.request.title, row.badge_text)
        if row.exact_text:
            logger.info("    {}", row.exact_text)
        for item in row.items:
            logger.info(
                "    {:<24} {:>10} {:>16}  {}",
                item.file_name,
                item.score_label,
                item.distance_label,
                item.reasons_text,
            )
    report = vm.value_report()
    logger.info(
        "Potential value: ${} across {} located photos", report.total_value, report.photo_count
    )


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = JsonSettings(BASE_DIR / "settings.json")
    init_logging(
        settings.get("logging.dir"),
        level=str(settings.get("logging.level", "INFO")),
        console=True,
    )
    config = MatchingConfig.from_settings(settings)

    now = datetime.now()
    requests = InMemoryRequestRepository(initial=seed_requests(now))
    vm = MainVM(
        CsvPhotoRepository(),
        requests,
        matcher=MatchingService(gazetteer=config.gazetteer),
    )

    source = Path(argv[0]) if argv else BASE_DIR / settings.get("samples.photos_csv", "")
    if source.is_dir():
        vm.set_photos(read_photo_library(iter_image_files(source)))
    elif source.is_file():
        vm.load_csv(str(source))
    else:
        logger.error("No photo source found at {}", source)
        return 1

    _report(vm)
    vm.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
