"""Core service interfaces consumed by the alignment pipeline."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any

from core.models import FaceBox, Orientation


class IFaceDetector:
    """Interface for asynchronous face detection.

    Implementations must complete the returned future exactly once, either
    with a list of `FaceBox` in unit-square coordinates (top-left origin) or
    with an exception, and must be safe to call from several threads.
    """

    def detect(self, image: Any, orientation: Orientation = Orientation.UP) -> Future[list[FaceBox]]:
        """Start detection on `image` and return a future for the boxes."""
        raise NotImplementedError

    def close(self) -> None:
        """Release detector resources. Default is a no-op."""
