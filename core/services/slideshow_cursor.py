"""Cyclic cursor over a published collection of slideshow frames."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Generic, TypeVar

from core.errors import EmptyCollection

T = TypeVar("T")


class CursorState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class SlideshowCursor(Generic[T]):
    """Wrap-around position over an immutable sequence.

    The cursor never mutates the sequence. `advance` and `current` raise
    `EmptyCollection` when there is nothing to show.
    """

    def __init__(self, items: Sequence[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def state(self) -> CursorState:
        return CursorState.POPULATED if self._items else CursorState.EMPTY

    def current(self) -> T:
        """Return the element at the current position without advancing."""
        if not self._items:
            raise EmptyCollection("slideshow has no images")
        return self._items[self._position]

    def advance(self) -> T:
        """Move to the next element, wrapping around, and return it."""
        if not self._items:
            raise EmptyCollection("slideshow has no images")
        self._position = (self._position + 1) % len(self._items)
        return self._items[self._position]

    def reset(self) -> None:
        self._position = 0

    def replace(self, items: Sequence[T]) -> None:
        """Swap in a new collection and rewind to the first element."""
        self._items = tuple(items)
        self.reset()
