"""Enumerate image locations under a root directory."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.errors import DirectoryReadError

IMAGE_EXTENSIONS = {
    ".jpg",
    ".jpeg",
    ".png",
    ".bmp",
    ".gif",
    ".tif",
    ".tiff",
    ".webp",
    ".heic",
    ".heif",
}


def is_image(path: str) -> bool:
    """Check if a file path looks like a still image based on extension."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def list_image_locations(root: str | Path) -> list[str]:
    """Return image file paths directly under `root`, sorted by name.

    Hidden files and subdirectories are skipped.

    Raises:
        DirectoryReadError: if `root` is missing, not a directory, or unreadable.
    """
    root_path = Path(root)
    try:
        entries = list(os.scandir(root_path))
    except OSError as ex:
        raise DirectoryReadError(f"cannot read directory {root_path}: {ex}") from ex

    locations: list[str] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if not entry.is_file():
                continue
        except OSError:
            continue
        if is_image(entry.name):
            locations.append(entry.path)
    locations.sort(key=lambda p: os.path.basename(p).lower())
    logger.info("Found {} image(s) in {}", len(locations), root_path)
    return locations
