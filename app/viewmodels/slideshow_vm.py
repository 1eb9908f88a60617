"""ViewModel pairing the published alignment batch with a slideshow cursor."""

from __future__ import annotations

from loguru import logger

from core.models import AlignedImage, AlignmentBatch
from core.services.slideshow_cursor import CursorState, SlideshowCursor


class SlideshowVM:
    """Slideshow state for the main window.

    The batch is replaced wholesale, never edited; every replacement rewinds
    the cursor to the first image.
    """

    def __init__(self) -> None:
        self._batch: AlignmentBatch | None = None
        self._cursor: SlideshowCursor[AlignedImage] = SlideshowCursor()

    @property
    def batch(self) -> AlignmentBatch | None:
        return self._batch

    @property
    def cursor(self) -> SlideshowCursor[AlignedImage]:
        return self._cursor

    @property
    def is_empty(self) -> bool:
        return self._cursor.state is CursorState.EMPTY

    def replace_batch(self, batch: AlignmentBatch) -> None:
        """Show `batch` from its first image."""
        self._batch = batch
        self._cursor.replace(batch.images)
        logger.info("Slideshow now showing batch {} ({} images)", batch.token, len(batch))

    def current(self) -> AlignedImage | None:
        """Return the image under the cursor, or None when there is nothing to show."""
        if self.is_empty:
            return None
        return self._cursor.current()

    def tick(self) -> AlignedImage | None:
        """Advance to the next image. No-op returning None when empty."""
        if self.is_empty:
            return None
        return self._cursor.advance()

    def status_text(self) -> str:
        if self._batch is None:
            return "No folder loaded"
        aligned = len(self._batch.images)
        skipped = len(self._batch.failures)
        if aligned == 0:
            return f"No faces found ({skipped} skipped)"
        return f"{aligned} aligned, {skipped} skipped"
