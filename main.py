from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication
from loguru import logger

from app.services.image_aligner import ImageAligner
from app.viewmodels.slideshow_vm import SlideshowVM
from app.views.main_window import MainWindow
from infrastructure.face_detector import HaarFaceDetector
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.settings import AlignmentConfig, DetectorConfig, JsonSettings

BASE_DIR = Path(__file__).parent


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = init_logging(
        settings.get("logging.dir"), str(settings.get("logging.level", "INFO"))
    )

    app = QApplication(argv)

    config = AlignmentConfig.from_settings(settings)
    detector = HaarFaceDetector(DetectorConfig.from_settings(settings))
    aligner = ImageAligner(
        service=ImageService(background=config.background), detector=detector, config=config
    )
    win = MainWindow(vm=SlideshowVM(), aligner=aligner, settings=settings, log_dir=str(log_dir))
    win.show()

    # A folder on the command line skips the picker
    if len(argv) > 1:
        win.open_folder(argv[1])
    else:
        QTimer.singleShot(0, win.on_open_folder)

    try:
        return app.exec()
    finally:
        aligner.cancel()
        aligner.wait_for_done(5000)
        detector.close()
        logger.info("Image Stream exiting")


if __name__ == "__main__":
    raise SystemExit(main())
