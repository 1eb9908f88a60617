"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import Any

from loguru import logger


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            self._data = json.load(f)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node

    def get_int(self, key: str, default: int) -> int:
        """Return `key` as int, falling back to `default` on missing or bad values."""
        raw = self.get(key, default)
        try:
            return int(raw)
        except (ValueError, TypeError):
            logger.warning("Setting {} is not an integer: {!r}", key, raw)
            return default

    def get_float(self, key: str, default: float) -> float:
        """Return `key` as float, falling back to `default` on missing or bad values."""
        raw = self.get(key, default)
        try:
            return float(raw)
        except (ValueError, TypeError):
            logger.warning("Setting {} is not a number: {!r}", key, raw)
            return default

    def get_size(self, key: str) -> tuple[int, int] | None:
        """Return `key` as a positive (width, height) pair, or None."""
        raw = self.get(key)
        if raw is None:
            return None
        try:
            width, height = (int(v) for v in raw)
        except (ValueError, TypeError):
            logger.warning("Setting {} is not a [width, height] pair: {!r}", key, raw)
            return None
        if width <= 0 or height <= 0:
            logger.warning("Setting {} must be positive: {!r}", key, raw)
            return None
        return (width, height)


@dataclass(frozen=True)
class AlignmentConfig:
    """Tunables for the alignment pipeline.

    Attributes:
        max_workers: Worker threads for per-image tasks; 0 means Qt's default.
        detect_timeout_s: Seconds to wait for one detector call.
        canvas_size: Shared canvas for the whole batch, or None to reuse each
            source image's own dimensions.
        background: Canvas fill colour name understood by `QColor`.
    """

    max_workers: int = 0
    detect_timeout_s: float = 10.0
    canvas_size: tuple[int, int] | None = None
    background: str = "#000000"

    @classmethod
    def from_settings(cls, settings: JsonSettings | None) -> AlignmentConfig:
        if settings is None:
            return cls()
        timeout = settings.get_float("alignment.detect_timeout_s", cls.detect_timeout_s)
        if timeout <= 0:
            timeout = cls.detect_timeout_s
        return cls(
            max_workers=max(0, settings.get_int("alignment.max_workers", cls.max_workers)),
            detect_timeout_s=timeout,
            canvas_size=settings.get_size("alignment.canvas_size"),
            background=str(settings.get("alignment.background", cls.background) or cls.background),
        )


@dataclass(frozen=True)
class DetectorConfig:
    """Haar cascade tunables."""

    scale_factor: float = 1.1
    min_neighbors: int = 5
    min_size_ratio: float = 0.05

    @classmethod
    def from_settings(cls, settings: JsonSettings | None) -> DetectorConfig:
        if settings is None:
            return cls()
        return cls(
            scale_factor=settings.get_float("detector.scale_factor", cls.scale_factor),
            min_neighbors=settings.get_int("detector.min_neighbors", cls.min_neighbors),
            min_size_ratio=settings.get_float("detector.min_size_ratio", cls.min_size_ratio),
        )
