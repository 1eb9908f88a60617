"""Display surface for aligned slideshow frames."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QPixmap, QResizeEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QWidget

from app.views.constants import EMPTY_TEXT, MIN_VIEW_SIDE_PX
from core.models import AlignedImage


class SlideshowView(QLabel):
    """Shows one canonical image at a time, scaled to fit and centred."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumSize(MIN_VIEW_SIDE_PX, MIN_VIEW_SIDE_PX)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setStyleSheet("background: black; color: #bbbbbb;")
        self._pixmap: QPixmap | None = None
        self.show_message(EMPTY_TEXT)

    def show_image(self, image: AlignedImage) -> None:
        self._pixmap = QPixmap.fromImage(image.canonical_image)
        self.setToolTip(image.location)
        self._refit()

    def show_message(self, text: str) -> None:
        self._pixmap = None
        self.setToolTip("")
        self.clear()
        self.setText(text)

    def has_image(self) -> bool:
        return self._pixmap is not None

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._refit()

    def _refit(self) -> None:
        if self._pixmap is None or self._pixmap.isNull():
            return
        self.setPixmap(
            self._pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )
