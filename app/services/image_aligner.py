"""Concurrent face alignment over a set of image locations.

One `QRunnable` per location loads the raster, runs the face detector,
normalizes the first face and renders the canonical canvas. Results are
appended to the job under its lock; a countdown latch releases once every
task has reported, and the batch is published on the aligner's own thread
through a queued signal.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import TimeoutError as FutureTimeoutError
import threading
import uuid

from PySide6.QtCore import QObject, QRunnable, Qt, QThreadPool, Signal
from loguru import logger

from core.errors import (
    AlignmentError,
    BatchCancelled,
    DetectionError,
    DirectoryReadError,
    NoFaceDetected,
)
from core.models import AlignedImage, AlignmentBatch, ItemFailure, Orientation
from core.services.interfaces import IFaceDetector
from core.services.latch import CountdownLatch
from core.services.normalizer import compute_normalization
from infrastructure.directory_service import list_image_locations
from infrastructure.image_service import ImageService
from infrastructure.settings import AlignmentConfig


def align_location(
    location: str,
    *,
    service: ImageService,
    detector: IFaceDetector,
    config: AlignmentConfig,
) -> AlignedImage:
    """Load, detect, normalize and render a single location.

    Raises:
        ImageLoadError: the file could not be decoded.
        DetectionError: the detector failed, timed out or returned a bad box.
        NoFaceDetected: the detector found nothing.
    """
    source = service.load_source(location)

    try:
        faces = detector.detect(source.image, Orientation.UP).result(
            timeout=config.detect_timeout_s
        )
    except FutureTimeoutError as ex:
        raise DetectionError(
            f"detector timed out after {config.detect_timeout_s}s: {location}"
        ) from ex
    except AlignmentError:
        raise
    except Exception as ex:  # detector backends raise arbitrary errors
        raise DetectionError(f"detector failed for {location}: {ex}") from ex

    if not faces:
        raise NoFaceDetected(f"no face found: {location}")

    # Single-face assumption: later detections are ignored
    face = faces[0]
    normalization = compute_normalization(face, source.size, config.canvas_size)
    canvas = service.render_aligned(source, normalization)
    return AlignedImage(
        canonical_image=canvas,
        source_faces=(face,),
        location=location,
        normalization=normalization,
    )


class _BatchJob:
    """In-progress batch shared by the tasks of one `align_all` call."""

    def __init__(self, token: str, total: int) -> None:
        self.token = token
        self.latch = CountdownLatch(total)
        self._lock = threading.Lock()
        self._images: list[AlignedImage] = []
        self._failures: list[ItemFailure] = []
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True

    def add_image(self, image: AlignedImage) -> bool:
        """Append a result. Returns False if the job is stale and the result was dropped."""
        with self._lock:
            if self._cancelled:
                return False
            self._images.append(image)
            return True

    def add_failure(self, failure: ItemFailure) -> None:
        with self._lock:
            if not self._cancelled:
                self._failures.append(failure)

    def to_batch(self) -> AlignmentBatch:
        with self._lock:
            return AlignmentBatch(
                token=self.token, images=tuple(self._images), failures=tuple(self._failures)
            )


class _AlignTask(QRunnable):
    """QRunnable aligning one location into its job.

    Reports to the job's latch exactly once, whatever happens; the task that
    releases the latch emits `aligner.jobFinished(token)`.
    """

    def __init__(self, *, location: str, job: _BatchJob, aligner: ImageAligner) -> None:
        super().__init__()
        self._location = location
        self._job = job
        self._aligner = aligner

    def run(self) -> None:  # type: ignore[override]
        try:
            if self._job.cancelled:
                return
            aligned = self._aligner.align_one(self._location)
            if not self._job.add_image(aligned):
                logger.debug("Discarding result for stale batch {}: {}", self._job.token, self._location)
        except AlignmentError as ex:
            logger.warning("Skipping {}: {}", self._location, ex)
            self._job.add_failure(ItemFailure(self._location, ex))
        except Exception as ex:  # pragma: no cover - unexpected worker failure
            logger.exception("Alignment task crashed for {}", self._location)
            self._job.add_failure(ItemFailure(self._location, AlignmentError(str(ex))))
        finally:
            if self._job.latch.count_down():
                self._aligner.jobFinished.emit(self._job.token)


class ImageAligner(QObject):
    """Runs alignment batches on a thread pool and publishes completed batches.

    Exactly one of `batchReady(token, batch)` or `batchFailed(token, error)` is
    emitted per `align_all`/`align_directory` call, on the thread that owns
    the aligner.
    """

    batchReady = Signal(str, object)  # token, AlignmentBatch
    batchFailed = Signal(str, object)  # token, AlignmentError
    jobFinished = Signal(str)  # token; internal, emitted from worker threads
    _directoryFailed = Signal(str, object)

    def __init__(
        self,
        *,
        service: ImageService,
        detector: IFaceDetector,
        config: AlignmentConfig | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._service = service
        self._detector = detector
        self._config = config or AlignmentConfig()
        self._pool = QThreadPool(self)
        if self._config.max_workers > 0:
            self._pool.setMaxThreadCount(self._config.max_workers)
        self._jobs: dict[str, _BatchJob] = {}
        self._current: _BatchJob | None = None
        self._batch: AlignmentBatch | None = None

        # Queued so publication always happens on this object's thread
        self.jobFinished.connect(self._on_job_finished, Qt.ConnectionType.QueuedConnection)
        self._directoryFailed.connect(self.batchFailed, Qt.ConnectionType.QueuedConnection)

    @property
    def batch(self) -> AlignmentBatch | None:
        """The most recently published batch."""
        return self._batch

    @property
    def is_busy(self) -> bool:
        return self._current is not None

    def align_one(self, location: str) -> AlignedImage:
        return align_location(
            location, service=self._service, detector=self._detector, config=self._config
        )

    def align_directory(self, root: str) -> str:
        """Enumerate `root` and align every image in it. Returns the batch token."""
        try:
            locations = list_image_locations(root)
        except DirectoryReadError as ex:
            token = self._new_token()
            logger.error("Directory enumeration failed for {}: {}", root, ex)
            self.cancel()
            self._directoryFailed.emit(token, ex)
            return token
        return self.align_all(locations)

    def align_all(self, locations: Sequence[str]) -> str:
        """Start aligning `locations` without blocking. Returns the batch token.

        Any batch still in progress is cancelled first.
        """
        self.cancel()
        token = self._new_token()
        job = _BatchJob(token, len(locations))
        self._jobs[token] = job
        self._current = job
        logger.info("Batch {} started with {} location(s)", token, len(locations))

        if not locations:
            self.jobFinished.emit(token)
            return token

        for location in locations:
            self._pool.start(_AlignTask(location=str(location), job=job, aligner=self))
        return token

    def cancel(self) -> None:
        """Abandon the batch in progress; its late results are discarded."""
        job = self._current
        if job is None:
            return
        logger.info("Cancelling batch {}", job.token)
        job.cancel()
        self._current = None

    def wait_for_done(self, msecs: int = -1) -> bool:
        """Block until the worker pool is idle. Mainly for shutdown."""
        return self._pool.waitForDone(msecs)

    def _on_job_finished(self, token: str) -> None:
        job = self._jobs.pop(token, None)
        if job is None:
            return
        if job.cancelled:
            logger.info("Batch {} finished after cancellation; result discarded", token)
            self.batchFailed.emit(token, BatchCancelled(f"batch {token} was cancelled"))
            return

        batch = job.to_batch()
        if self._current is job:
            self._current = None
        self._batch = batch
        logger.info(
            "Batch {} complete: {} aligned, {} skipped", token, len(batch.images), len(batch.failures)
        )
        self.batchReady.emit(token, batch)

    @staticmethod
    def _new_token() -> str:
        return uuid.uuid4().hex
