"""Exceptions raised by the wall core.

Both errors signal a broken caller contract (a bad rule function or driver)
rather than a runtime condition, so the core never catches them.
"""

from __future__ import annotations

__all__ = ["WallError", "OutOfRange", "InvalidPaletteIndex"]


class WallError(Exception):
    """Base class for wall contract violations."""


class OutOfRange(WallError, IndexError):
    """Position lies outside the triangular index space."""

    def __init__(self, row: int, col: int, size: int) -> None:
        super().__init__(
            f"position ({row}, {col}) outside triangular grid of size {size}"
        )
        self.row = row
        self.col = col
        self.size = size


class InvalidPaletteIndex(WallError, ValueError):
    """Value is not an index into the palette."""

    def __init__(self, value: object, palette_len: int) -> None:
        super().__init__(
            f"palette index {value!r} not in range [0, {palette_len})"
        )
        self.value = value
        self.palette_len = palette_len
