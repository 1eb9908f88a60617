"""OpenCV Haar-cascade implementation of the face detector capability."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import threading
from typing import Any

import cv2
import numpy as np
from PySide6.QtGui import QImage
from loguru import logger

from core.errors import DetectionError
from core.models import FaceBox, Orientation
from core.services.interfaces import IFaceDetector
from infrastructure.settings import DetectorConfig

DEFAULT_CASCADE = cv2.data.haarcascades + "haarcascade_frontalface_default.xml"

# cv2.rotate codes that bring a raster in the given orientation upright
_UPRIGHT_ROTATIONS = {
    Orientation.RIGHT: cv2.ROTATE_90_COUNTERCLOCKWISE,
    Orientation.DOWN: cv2.ROTATE_180,
    Orientation.LEFT: cv2.ROTATE_90_CLOCKWISE,
}


def qimage_to_gray(image: QImage) -> np.ndarray:
    """Return an 8-bit grayscale copy of `image` as an (h, w) array."""
    gray = image.convertToFormat(QImage.Format.Format_Grayscale8)
    width, height = gray.width(), gray.height()
    stride = gray.bytesPerLine()
    buf = np.frombuffer(gray.constBits(), dtype=np.uint8, count=stride * height)
    return buf.reshape(height, stride)[:, :width].copy()


def rects_to_boxes(rects: Any, width: int, height: int) -> list[FaceBox]:
    """Convert pixel (x, y, w, h) rectangles to unit-square `FaceBox` values."""
    boxes: list[FaceBox] = []
    for x, y, w, h in rects:
        boxes.append(
            FaceBox(
                x=float(x) / width,
                y=float(y) / height,
                width=float(w) / width,
                height=float(h) / height,
            )
        )
    return boxes


class HaarFaceDetector(IFaceDetector):
    """Frontal-face detector backed by `cv2.CascadeClassifier`.

    Classifiers are not shared between threads; each worker thread lazily
    loads its own copy of the cascade.
    """

    def __init__(
        self,
        config: DetectorConfig | None = None,
        cascade_path: str = DEFAULT_CASCADE,
        max_workers: int | None = None,
    ) -> None:
        self._config = config or DetectorConfig()
        self._cascade_path = cascade_path
        self._local = threading.local()
        # Fail fast on a bad cascade path instead of in every task
        self._classifier()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="face-detect"
        )

    def detect(self, image: Any, orientation: Orientation = Orientation.UP) -> Future[list[FaceBox]]:
        """Submit detection to the detector's executor."""
        return self._executor.submit(self.detect_sync, image, orientation)

    def detect_sync(self, image: Any, orientation: Orientation = Orientation.UP) -> list[FaceBox]:
        """Run detection on the calling thread. Boxes are ordered largest first."""
        gray = qimage_to_gray(image) if isinstance(image, QImage) else np.asarray(image)
        if gray.ndim == 3:
            gray = cv2.cvtColor(gray, cv2.COLOR_BGR2GRAY)
        rotation = _UPRIGHT_ROTATIONS.get(orientation)
        if rotation is not None:
            gray = cv2.rotate(gray, rotation)
        height, width = gray.shape[:2]
        if width == 0 or height == 0:
            raise DetectionError("cannot detect faces in an empty image")

        min_side = max(1, int(min(width, height) * self._config.min_size_ratio))
        gray = cv2.equalizeHist(gray)
        rects = self._classifier().detectMultiScale(
            gray,
            scaleFactor=self._config.scale_factor,
            minNeighbors=self._config.min_neighbors,
            minSize=(min_side, min_side),
        )
        rects = sorted((tuple(r) for r in rects), key=lambda r: r[2] * r[3], reverse=True)
        logger.debug("Haar cascade found {} face(s) in {}x{} image", len(rects), width, height)
        return rects_to_boxes(rects, width, height)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _classifier(self) -> cv2.CascadeClassifier:
        classifier = getattr(self._local, "classifier", None)
        if classifier is None:
            classifier = cv2.CascadeClassifier(self._cascade_path)
            if classifier.empty():
                raise DetectionError(f"failed to load face cascade: {self._cascade_path}")
            self._local.classifier = classifier
        return classifier
