"""Scale/translate normalization that maps a face box onto a canonical canvas.

The face is scaled so that its box spans half of the canvas width (corrected
for portrait sources) and then translated so that its centre lands on the
canvas centre. All functions here are pure.
"""

from __future__ import annotations

from core.errors import InvalidDetection
from core.models import FaceBox, NormalizationResult

# Fraction of the canvas width a face box should occupy.
FACE_WIDTH_FRACTION = 0.5


def normal_aspect(source_size: tuple[float, float]) -> float:
    """Return the width correction used for portrait sources.

    Landscape and square sources get 1.0; portrait sources get height/width.
    """
    width, height = source_size
    aspect_ratio = width / height
    return 1.0 if aspect_ratio > 1.0 else 1.0 / aspect_ratio


def compute_normalization(
    face_box: FaceBox,
    source_size: tuple[float, float],
    canvas_size: tuple[int, int] | None = None,
) -> NormalizationResult:
    """Compute the scale factor and draw offset that align `face_box`.

    Args:
        face_box: Detected face in unit-square coordinates.
        source_size: (width, height) of the source raster in pixels.
        canvas_size: (width, height) of the output canvas. Defaults to the
            source's own dimensions.

    Raises:
        InvalidDetection: if the box or the source has a non-positive extent.
    """
    if not face_box.is_valid:
        raise InvalidDetection(
            f"face box must have positive extent, got {face_box.width}x{face_box.height}"
        )
    src_w, src_h = float(source_size[0]), float(source_size[1])
    if src_w <= 0 or src_h <= 0:
        raise InvalidDetection(f"source size must be positive, got {src_w}x{src_h}")

    if canvas_size is None:
        canvas_size = (int(source_size[0]), int(source_size[1]))

    scale_factor = (1.0 / face_box.width) * FACE_WIDTH_FRACTION * normal_aspect((src_w, src_h))

    scaled_w = src_w * scale_factor
    scaled_h = src_h * scale_factor
    face_center_x = face_box.x * scaled_w + face_box.width * scaled_w / 2
    face_center_y = face_box.y * scaled_h + face_box.height * scaled_h / 2

    canvas_center_x = canvas_size[0] / 2
    canvas_center_y = canvas_size[1] / 2

    return NormalizationResult(
        scale_factor=scale_factor,
        draw_offset=(canvas_center_x - face_center_x, canvas_center_y - face_center_y),
        canvas_size=(int(canvas_size[0]), int(canvas_size[1])),
    )
