from __future__ import annotations

import math

import pytest

from core.errors import DetectionError, InvalidDetection
from core.models import FaceBox
from core.services.normalizer import compute_normalization, normal_aspect


def test_reference_example():
    box = FaceBox(x=0.3, y=0.3, width=0.4, height=0.4)
    result = compute_normalization(box, (1000, 1000))

    assert result.scale_factor == pytest.approx(1.25)
    assert result.draw_offset == pytest.approx((-125.0, -125.0))
    assert result.canvas_size == (1000, 1000)


def test_is_deterministic():
    box = FaceBox(x=0.137, y=0.42, width=0.291, height=0.33)
    first = compute_normalization(box, (1234, 567))
    second = compute_normalization(box, (1234, 567))

    assert first.scale_factor == second.scale_factor
    assert first.draw_offset == second.draw_offset


@pytest.mark.parametrize("width", [1e-6, 0.01, 0.25, 0.5, 0.999, 1.0])
@pytest.mark.parametrize("size", [(1000, 1000), (1920, 1080), (600, 1200)])
def test_scale_factor_positive_and_finite(width, size):
    result = compute_normalization(FaceBox(0.0, 0.0, width, 0.5), size)

    assert result.scale_factor > 0
    assert math.isfinite(result.scale_factor)
    assert all(math.isfinite(v) for v in result.draw_offset)


def test_zero_width_is_invalid():
    with pytest.raises(InvalidDetection):
        compute_normalization(FaceBox(0.2, 0.2, 0.0, 0.3), (100, 100))


def test_non_positive_height_is_invalid_detection_error():
    with pytest.raises(DetectionError):
        compute_normalization(FaceBox(0.2, 0.2, 0.3, -0.1), (100, 100))


def test_empty_source_is_invalid():
    with pytest.raises(InvalidDetection):
        compute_normalization(FaceBox(0.2, 0.2, 0.3, 0.3), (0, 100))


def test_normal_aspect():
    assert normal_aspect((500, 500)) == 1.0
    assert normal_aspect((500, 1000)) == 2.0
    assert normal_aspect((1600, 900)) == 1.0


def test_portrait_source_doubles_scale():
    box = FaceBox(0.25, 0.25, 0.5, 0.5)
    landscape = compute_normalization(box, (1000, 500))
    portrait = compute_normalization(box, (500, 1000))

    assert landscape.scale_factor == pytest.approx(1.0)
    assert portrait.scale_factor == pytest.approx(2.0)


def test_face_centre_lands_on_canvas_centre():
    box = FaceBox(x=0.1, y=0.6, width=0.2, height=0.3)
    size = (800, 600)
    result = compute_normalization(box, size)

    s = result.scale_factor
    dx, dy = result.draw_offset
    centre_x = dx + (box.x + box.width / 2) * size[0] * s
    centre_y = dy + (box.y + box.height / 2) * size[1] * s
    assert (centre_x, centre_y) == pytest.approx((400.0, 300.0))


def test_explicit_canvas_size_moves_centre():
    box = FaceBox(x=0.3, y=0.3, width=0.4, height=0.4)
    result = compute_normalization(box, (1000, 1000), canvas_size=(400, 200))

    assert result.scale_factor == pytest.approx(1.25)
    assert result.draw_offset == pytest.approx((200 - 625.0, 100 - 625.0))
    assert result.canvas_size == (400, 200)
