"""Main slideshow window.

Wires the folder picker, the `ImageAligner` and the `SlideshowVM` together.
A `QTimer` is the tick source: each tick advances the view-model and pushes
the returned frame to the `SlideshowView`.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication, QFileDialog, QMainWindow, QMessageBox
from loguru import logger

from app.services.image_aligner import ImageAligner
from app.viewmodels.slideshow_vm import SlideshowVM
from app.views.components.menu_controller import MenuController
from app.views.constants import (
    DEFAULT_INTERVAL_MS,
    EMPTY_TEXT,
    MIN_INTERVAL_MS,
    STATUS_TIMEOUT_MS,
    WINDOW_SIZE_RATIO,
    WINDOW_TITLE,
)
from app.views.slideshow_view import SlideshowView
from core.errors import BatchCancelled, DirectoryReadError
from core.models import AlignmentBatch
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Slideshow window driven by alignment batches."""

    def __init__(
        self,
        vm: SlideshowVM,
        aligner: ImageAligner,
        settings: Any | None = None,
        log_dir: str | None = None,
    ) -> None:
        """Create the window.

        Args:
            vm: Slideshow view-model holding the published batch
            aligner: Aligner producing batches from folders
            settings: Settings instance for the playback interval
            log_dir: Directory the log file sink writes to
        """
        super().__init__()
        self._vm = vm
        self._aligner = aligner
        self._pending_token: str | None = None
        self._playing = True
        self._log_dir = log_dir

        interval = DEFAULT_INTERVAL_MS
        if settings is not None:
            interval = settings.get_int("slideshow.interval_ms", DEFAULT_INTERVAL_MS)
        self._timer = QTimer(self)
        self._timer.setInterval(max(MIN_INTERVAL_MS, interval))
        self._timer.timeout.connect(self.on_tick)

        self.view = SlideshowView(self)
        self.setCentralWidget(self.view)
        self.setWindowTitle(WINDOW_TITLE)

        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus()
        self.menu_controller.connect_actions(
            {
                "open_folder": self.on_open_folder,
                "toggle_playback": self.on_toggle_playback,
                "next_image": self.on_tick,
                "open_latest_log": self._open_latest_log,
                "open_log_directory": self._open_log_directory,
                "exit": self.close,
            }
        )

        self._aligner.batchReady.connect(self._on_batch_ready)
        self._aligner.batchFailed.connect(self._on_batch_failed)

        self._setup_initial_window_size()
        self.statusBar().showMessage("Ready", STATUS_TIMEOUT_MS)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_playing(self) -> bool:
        return self._playing

    # Menu action handlers

    def on_open_folder(self) -> None:
        """Ask for a folder and start aligning it."""
        folder = QFileDialog.getExistingDirectory(self, "Choose a folder of portraits")
        if folder:
            self.open_folder(folder)

    def open_folder(self, folder: str) -> str:
        """Start aligning every image in `folder`. Returns the batch token."""
        self._timer.stop()
        self.view.show_message(f"Aligning faces in {folder}…")
        self.statusBar().showMessage(f"Loading {folder}…")
        self._set_loading(True)
        self._pending_token = self._aligner.align_directory(folder)
        return self._pending_token

    @property
    def is_loading(self) -> bool:
        return self._pending_token is not None

    def on_toggle_playback(self) -> None:
        if self.is_loading:
            return
        self._playing = not self._playing
        self.menu_controller.set_playing(self._playing)
        if self._playing and not self._vm.is_empty:
            self._timer.start()
        else:
            self._timer.stop()

    def on_tick(self) -> None:
        """Advance the slideshow by one frame; nothing happens when empty or loading."""
        if self.is_loading:
            return
        image = self._vm.tick()
        if image is not None:
            self.view.show_image(image)

    # Aligner notifications

    def _on_batch_ready(self, token: str, batch: AlignmentBatch) -> None:
        if token != self._pending_token:
            logger.debug("Ignoring batch {} (waiting for {})", token, self._pending_token)
            return
        self._pending_token = None
        self._set_loading(False)
        self._vm.replace_batch(batch)
        self.statusBar().showMessage(self._vm.status_text())

        first = self._vm.current()
        if first is None:
            self._timer.stop()
            self.view.show_message(self._vm.status_text())
            return
        self.view.show_image(first)
        if self._playing:
            self._timer.start()

    def _on_batch_failed(self, token: str, error: Exception) -> None:
        if isinstance(error, BatchCancelled):
            logger.debug("Batch {} cancelled", token)
            return
        if token != self._pending_token:
            return
        self._pending_token = None
        self._set_loading(False)
        self.statusBar().showMessage("Could not load folder", STATUS_TIMEOUT_MS)
        if self._vm.is_empty:
            self.view.show_message(EMPTY_TEXT)
        elif self._playing:
            self._timer.start()
        if isinstance(error, DirectoryReadError):
            QMessageBox.warning(self, "Open Folder", f"Could not read the folder:\n{error}")
        else:
            logger.error("Batch {} failed: {}", token, error)

    def _set_loading(self, loading: bool) -> None:
        """Playback controls act on the shown batch, so they are off while loading."""
        for name in ("toggle_playback", "next_image"):
            self.menu_controller.enable_action(name, not loading)

    def _open_latest_log(self) -> None:
        if not open_latest_log(self._log_dir):
            self.statusBar().showMessage("No log file found", STATUS_TIMEOUT_MS)

    def _open_log_directory(self) -> None:
        open_log_directory(self._log_dir)

    def _setup_initial_window_size(self) -> None:
        """Size the window relative to the primary screen."""
        screen = QApplication.primaryScreen()
        if screen is not None:
            rect = screen.availableGeometry()
            self.resize(int(rect.width() * WINDOW_SIZE_RATIO), int(rect.height() * WINDOW_SIZE_RATIO))

    def closeEvent(self, event) -> None:  # noqa: N802
        """Stop playback and abandon any batch in progress."""
        self._timer.stop()
        self._aligner.cancel()
        event.accept()
