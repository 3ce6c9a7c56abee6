"""Fallback colours handed out to snakes in rotation."""

from __future__ import annotations

import threading
from typing import Iterable

DEFAULT_COLORS = (
    "#8f4949",
    "#49628f",
    "#7f498f",
    "#8f7f49",
    "#628f49",
    "#491010",
    "#493810",
    "#164910",
    "#104947",
    "#3e1049",
    "#cd1e91",
    "#741ecd",
    "#1e4fcd",
    "#1ecdc7",
    "#1ecd3f",
    "#cdcb1e",
    "#cd681e",
)


class ColorPalette:
    """A thread-safe cycle through a list of colours."""

    def __init__(self, colors: Iterable[str] = DEFAULT_COLORS) -> None:
        self._lock = threading.Lock()
        self._colors: tuple[str, ...] = ()
        self._index = 0
        self.reset(colors)

    def next_color(self) -> str:
        with self._lock:
            color = self._colors[self._index]
            self._index = (self._index + 1) % len(self._colors)
            return color

    def reset(self, colors: Iterable[str]) -> None:
        """Replace the colours and start again from the first."""
        new_colors = tuple(colors)
        if not new_colors:
            raise ValueError("a palette needs at least one colour")
        with self._lock:
            self._colors = new_colors
            self._index = 0


default_palette = ColorPalette()


def next_color() -> str:
    return default_palette.next_color()


def reset_palette(colors: Iterable[str]) -> None:
    default_palette.reset(colors)