from __future__ import annotations

from app.viewmodels.slideshow_vm import SlideshowVM
from core.errors import NoFaceDetected
from core.models import AlignedImage, AlignmentBatch, ItemFailure


def _batch(token: str, count: int, failures: int = 0) -> AlignmentBatch:
    images = tuple(
        AlignedImage(canonical_image=f"img{i}", source_faces=(), location=f"/p/{i}.jpg")
        for i in range(count)
    )
    dropped = tuple(ItemFailure(f"/p/x{i}.jpg", NoFaceDetected("none")) for i in range(failures))
    return AlignmentBatch(token=token, images=images, failures=dropped)


def test_empty_vm_ticks_without_side_effects():
    vm = SlideshowVM()

    assert vm.is_empty
    assert vm.tick() is None
    assert vm.current() is None
    assert vm.status_text() == "No folder loaded"


def test_tick_cycles_through_batch():
    vm = SlideshowVM()
    vm.replace_batch(_batch("t1", 3))

    assert vm.current().location == "/p/0.jpg"
    assert [vm.tick().location for _ in range(3)] == ["/p/1.jpg", "/p/2.jpg", "/p/0.jpg"]


def test_replace_batch_resets_cursor():
    vm = SlideshowVM()
    vm.replace_batch(_batch("t1", 3))
    vm.tick()
    vm.tick()

    vm.replace_batch(_batch("t2", 2, failures=1))

    assert vm.cursor.position == 0
    assert vm.batch.token == "t2"
    assert vm.status_text() == "2 aligned, 1 skipped"


def test_empty_batch_is_valid():
    vm = SlideshowVM()
    vm.replace_batch(_batch("t1", 0, failures=4))

    assert vm.is_empty
    assert vm.tick() is None
    assert vm.status_text() == "No faces found (4 skipped)"
