"""Core domain models for face-aligned slideshow images."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Orientation(Enum):
    """Rotation of a raster relative to its upright presentation."""

    UP = 0
    RIGHT = 90
    DOWN = 180
    LEFT = 270


@dataclass(frozen=True)
class FaceBox:
    """Face bounding box in unit-square coordinates (top-left origin, y down)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def is_valid(self) -> bool:
        """True when the box has a positive area."""
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class SourceImage:
    """A decoded raster and where it came from."""

    location: str
    image: Any
    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class NormalizationResult:
    """Scale and draw offset that centre a face on the canonical canvas.

    Attributes:
        scale_factor: Uniform scale applied to the source raster.
        draw_offset: (dx, dy) origin of the scaled raster on the canvas.
        canvas_size: (width, height) of the canvas the offset refers to.
    """

    scale_factor: float
    draw_offset: tuple[float, float]
    canvas_size: tuple[int, int]


@dataclass(frozen=True)
class AlignedImage:
    """A source image rendered onto its canonical canvas."""

    canonical_image: Any
    source_faces: tuple[FaceBox, ...]
    location: str = ""
    normalization: NormalizationResult | None = None


@dataclass(frozen=True)
class ItemFailure:
    """A location that was dropped from a batch and the reason why."""

    location: str
    error: Exception

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass(frozen=True)
class AlignmentBatch:
    """Result of one alignment run over a set of locations.

    `images` is in task completion order, not input order.
    """

    token: str
    images: tuple[AlignedImage, ...] = field(default_factory=tuple)
    failures: tuple[ItemFailure, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.images)

    @property
    def is_empty(self) -> bool:
        return not self.images

    @property
    def submitted_count(self) -> int:
        """Number of locations the batch was built from."""
        return len(self.images) + len(self.failures)
