from __future__ import annotations

import os

import pytest

from core.errors import DirectoryReadError
from infrastructure.directory_service import is_image, list_image_locations


def test_lists_images_sorted_and_filtered(tmp_path):
    for name in ["b.JPG", "a.png", "c.heic", "notes.txt", ".hidden.png"]:
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "sub.png").mkdir()

    result = list_image_locations(tmp_path)

    assert [os.path.basename(p) for p in result] == ["a.png", "b.JPG", "c.heic"]
    assert all(os.path.isabs(p) for p in result)


def test_empty_directory(tmp_path):
    assert list_image_locations(tmp_path) == []


def test_missing_directory_raises(tmp_path):
    with pytest.raises(DirectoryReadError):
        list_image_locations(tmp_path / "nope")


def test_file_root_raises(tmp_path):
    target = tmp_path / "file.png"
    target.write_bytes(b"x")
    with pytest.raises(DirectoryReadError):
        list_image_locations(target)


def test_is_image():
    assert is_image("/x/y/Photo.JPEG")
    assert not is_image("/x/y/movie.mp4")
