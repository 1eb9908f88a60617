"""Error taxonomy for the alignment pipeline and slideshow."""

from __future__ import annotations


class AlignmentError(Exception):
    """Base class for alignment pipeline errors."""


class DirectoryReadError(AlignmentError):
    """The root location could not be enumerated. Fatal to the whole batch."""


class ImageLoadError(AlignmentError):
    """A location could not be decoded into a raster."""


class DetectionError(AlignmentError):
    """The face detector failed or timed out."""


class InvalidDetection(DetectionError):
    """The detector returned a box with non-positive width or height."""


class NoFaceDetected(AlignmentError):
    """The detector succeeded but found no face."""


class BatchCancelled(AlignmentError):
    """The batch was superseded before all of its tasks reported in."""


class EmptyCollection(Exception):
    """A slideshow operation was attempted with nothing to show."""
