from __future__ import annotations

from concurrent.futures import Future
import os
from pathlib import Path
import random
import threading
from typing import Any

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PySide6.QtGui import QColor, QImage, QPainter  # noqa: E402

from core.models import FaceBox, Orientation  # noqa: E402
from core.services.interfaces import IFaceDetector  # noqa: E402

FACE = FaceBox(x=0.3, y=0.3, width=0.4, height=0.4)


class FakeDetector(IFaceDetector):
    """Detector double keyed on image width.

    Completes its future on a timer thread after a random delay, fails for
    `error_widths` and never completes for `hang_widths`.
    """

    def __init__(
        self,
        boxes: list[FaceBox] | None = None,
        *,
        by_width: dict[int, list[FaceBox]] | None = None,
        error_widths: tuple[int, ...] = (),
        hang_widths: tuple[int, ...] = (),
        max_delay: float = 0.0,
        min_delay: float = 0.0,
        seed: int | None = None,
    ) -> None:
        self._boxes = [FACE] if boxes is None else boxes
        self._by_width = by_width or {}
        self._error_widths = set(error_widths)
        self._hang_widths = set(hang_widths)
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._rng = random.Random(seed)
        self._lock = threading.Lock()
        self.calls = 0

    def detect(self, image: Any, orientation: Orientation = Orientation.UP) -> Future:
        fut: Future = Future()
        width = image.width()
        with self._lock:
            self.calls += 1
            delay = self._rng.uniform(self._min_delay, self._max_delay) if self._max_delay else 0.0

        if width in self._hang_widths:
            return fut

        def finish() -> None:
            if width in self._error_widths:
                fut.set_exception(RuntimeError("detector exploded"))
            else:
                fut.set_result(list(self._by_width.get(width, self._boxes)))

        if delay > 0:
            threading.Timer(delay, finish).start()
        else:
            finish()
        return fut


def paint_image(
    width: int,
    height: int,
    face: FaceBox | None = FACE,
    background: str = "#808080",
    face_color: str = "#ff0000",
) -> QImage:
    img = QImage(width, height, QImage.Format.Format_RGB32)
    img.fill(QColor(background))
    if face is not None:
        painter = QPainter(img)
        painter.fillRect(
            int(face.x * width),
            int(face.y * height),
            int(face.width * width),
            int(face.height * height),
            QColor(face_color),
        )
        painter.end()
    return img


@pytest.fixture
def write_image(qapp, tmp_path: Path):
    """Factory writing a PNG with a red 'face' rectangle and returning its path."""

    def _write(name: str, width: int = 100, height: int = 100, face: FaceBox | None = FACE) -> str:
        path = tmp_path / name
        assert paint_image(width, height, face).save(str(path), "PNG")
        return str(path)

    return _write


@pytest.fixture
def write_corrupt(tmp_path: Path):
    def _write(name: str = "broken.png") -> str:
        path = tmp_path / name
        path.write_bytes(b"definitely not a png")
        return str(path)

    return _write
