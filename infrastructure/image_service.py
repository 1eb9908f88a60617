"""Image loading and canonical-canvas rendering.

Decoding goes through Qt's `QImageReader` first and falls back to Pillow
(with pillow-heif registered for HEIC/HEIF). Rendering composites a source
raster onto a canvas using a `NormalizationResult`. Both paths only touch
`QImage`/`QPainter`, so they are safe to call from worker threads.
"""

from __future__ import annotations

from typing import Any

from PIL import Image, ImageOps
from pillow_heif import register_heif_opener
from PySide6.QtCore import QRectF
from PySide6.QtGui import QColor, QImage, QImageReader, QPainter
from loguru import logger

from core.errors import ImageLoadError
from core.models import NormalizationResult, SourceImage

register_heif_opener()


class ImageService:
    """Loads source rasters and renders aligned canvases."""

    def __init__(self, background: str = "#000000") -> None:
        color = QColor(background)
        if not color.isValid():
            logger.warning("Invalid canvas background {!r}, using black", background)
            color = QColor(0, 0, 0)
        self._background = color

    # Public API
    def load_source(self, path: str) -> SourceImage:
        """Decode `path` into a `SourceImage`.

        Raises:
            ImageLoadError: if no decoder could read a non-empty image.
        """
        img = self._load_via_qt(path)
        if img is None or img.isNull():
            img = self._load_via_pillow(path)
        if img is None or img.isNull():
            raise ImageLoadError(f"cannot decode image: {path}")
        if img.width() <= 0 or img.height() <= 0:
            raise ImageLoadError(f"image has no pixels: {path}")
        return SourceImage(location=path, image=img, width=img.width(), height=img.height())

    def render_aligned(self, source: SourceImage, normalization: NormalizationResult) -> QImage:
        """Draw `source` scaled and offset by `normalization` onto a fresh canvas."""
        canvas_w, canvas_h = normalization.canvas_size
        canvas = QImage(canvas_w, canvas_h, QImage.Format.Format_ARGB32_Premultiplied)
        canvas.fill(self._background)

        scale = normalization.scale_factor
        dx, dy = normalization.draw_offset
        target = QRectF(dx, dy, source.width * scale, source.height * scale)

        painter = QPainter(canvas)
        try:
            painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
            painter.drawImage(target, source.image)
        finally:
            painter.end()
        return canvas

    # Internal helpers
    def _load_via_qt(self, path: str) -> QImage | None:
        """Read with `QImageReader`, applying EXIF orientation."""
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        img = reader.read()
        if img.isNull():
            logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
            return None
        return img

    def _load_via_pillow(self, path: str) -> QImage | None:
        """Load image with Pillow (HEIF supported through pillow-heif)."""
        try:
            with Image.open(path) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                return self._pil_to_qimage(im)
        except (OSError, ValueError, Image.DecompressionBombError) as ex:
            logger.debug("Pillow load failed for {}: {}", path, ex)
            return None

    def _pil_to_qimage(self, pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        if pil_img.mode != "RGBA":
            pil_img = pil_img.convert("RGBA")
        data = pil_img.tobytes("raw", "RGBA")
        qimg = QImage(
            data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format.Format_RGBA8888
        )
        if qimg.isNull():
            return None
        return qimg.copy()
