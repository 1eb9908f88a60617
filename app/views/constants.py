"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

WINDOW_TITLE: str = "Image Stream"

# Slideshow defaults (overridable by settings.json)
DEFAULT_INTERVAL_MS: int = 150
MIN_INTERVAL_MS: int = 16

# Window sizing
WINDOW_SIZE_RATIO: float = 0.5
MIN_VIEW_SIDE_PX: int = 200

STATUS_TIMEOUT_MS: int = 5000
EMPTY_TEXT: str = "Open a folder to start the slideshow"
