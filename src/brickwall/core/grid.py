"""Triangular wall grid with a time-sliced display queue.

The grid keeps two triangular arrays of palette indices. ``logical`` holds
the latest assignment for every cell and is what color rules read.
``displayed`` is what gets painted; it only changes when :meth:`Grid.drain`
releases queued assignments, at most one per ``delay_ms`` of elapsed time
(rounded up), so a full run "pours" onto the screen.

Row ``r`` of a size-``N`` grid has ``N - r`` cells.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Generic, Iterator, Sequence, TypeVar

from .errors import InvalidPaletteIndex, OutOfRange

__all__ = ["PendingUpdate", "Grid"]

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True, slots=True)
class PendingUpdate:
    row: int
    col: int
    value: int


class Grid(Generic[C]):
    """Triangular array of palette indices with a lagging display copy.

    Parameters
    ----------
    size: Number of cells in row 0 (``N``).
    palette: Ordered color tokens. The grid never looks inside them.
    initial: Palette index every cell starts (and resets) to.
    delay_ms: Nominal cost of one queued update. ``<= 0`` reveals every
        queued update on the next drain.
    now: Initial drain timestamp in seconds (monotonic).
    """

    def __init__(
        self,
        size: int,
        palette: Sequence[C],
        initial: int = 0,
        delay_ms: float = 10.0,
        *,
        now: float = 0.0,
    ) -> None:
        if int(size) < 1:
            raise ValueError(f"grid size must be >= 1, got {size}")
        if len(palette) == 0:
            raise ValueError("palette must not be empty")
        if not math.isfinite(float(delay_ms)):
            raise ValueError(f"delay_ms must be finite, got {delay_ms}")
        self._size = int(size)
        self._palette: tuple[C, ...] = tuple(palette)
        self._check_value(initial)
        self._initial = int(initial)
        self._delay_ms = float(delay_ms)

        self._logical: list[list[int]] = self._blank()
        self._displayed: list[list[int]] = self._blank()
        self._queue: deque[PendingUpdate] = deque()
        self._last_drain: float = float(now)

    # --- properties -----------------------------------------------------
    @property
    def size(self) -> int:
        return self._size

    @property
    def palette(self) -> tuple[C, ...]:
        return self._palette

    @property
    def initial(self) -> int:
        return self._initial

    @property
    def delay_ms(self) -> float:
        return self._delay_ms

    @property
    def pending(self) -> int:
        """Number of assignments not yet displayed."""
        return len(self._queue)

    @property
    def busy(self) -> bool:
        return bool(self._queue)

    @property
    def last_drain(self) -> float:
        return self._last_drain

    # --- reads ----------------------------------------------------------
    def read(self, row: int, col: int) -> int:
        """Return the logical palette index at ``(row, col)``."""
        self._check_position(row, col)
        return self._logical[row][col]

    def read_displayed(self, row: int, col: int) -> int:
        """Return the palette index currently on screen at ``(row, col)``."""
        self._check_position(row, col)
        return self._displayed[row][col]

    def color(self, row: int, col: int) -> C:
        """Return the palette token currently on screen at ``(row, col)``."""
        return self._palette[self.read_displayed(row, col)]

    def positions(self) -> Iterator[tuple[int, int]]:
        """Yield every valid position in row-major order."""
        for row in range(self._size):
            for col in range(self._size - row):
                yield row, col

    def snapshot(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(r) for r in self._logical)

    def displayed_snapshot(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(r) for r in self._displayed)

    # --- mutation -------------------------------------------------------
    def assign(self, row: int, col: int, value: int) -> None:
        """Set the logical color now and queue it for display."""
        self._check_position(row, col)
        self._check_value(value)
        self._logical[row][col] = value
        self._queue.append(PendingUpdate(row, col, value))

    def drain(self, now: float) -> int:
        """Apply the queued updates that are due at *now* (seconds).

        Returns the number of updates applied. The drain timestamp only
        moves when there was queued work, so idle time never turns into a
        burst of updates later.
        """
        if not self._queue:
            return 0
        if self._delay_ms <= 0:
            due = len(self._queue)
        else:
            # Round to microseconds so float noise in the clock can't push
            # ceil() over an exact boundary.
            elapsed_ms = round((now - self._last_drain) * 1000.0, 6)
            due = math.ceil(elapsed_ms / self._delay_ms)
        due = max(0, min(due, len(self._queue)))
        for _ in range(due):
            upd = self._queue.popleft()
            self._displayed[upd.row][upd.col] = upd.value
        self._last_drain = now
        return due

    def reset(self) -> None:
        """Clear the queue and return both arrays to the initial color."""
        self._queue.clear()
        self._logical = self._blank()
        self._displayed = self._blank()
        logger.debug("grid reset (size=%d, initial=%d)", self._size, self._initial)

    def mark_start(self, now: float) -> None:
        """Start pacing drains from *now*; call right before the first frame."""
        self._last_drain = float(now)

    # --- helpers --------------------------------------------------------
    def _blank(self) -> list[list[int]]:
        return [[self._initial] * (self._size - row) for row in range(self._size)]

    def _check_position(self, row: int, col: int) -> None:
        if not (0 <= row < self._size and 0 <= col < self._size - row):
            raise OutOfRange(row, col, self._size)

    def _check_value(self, value: int) -> None:
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not 0 <= value < len(self._palette)
        ):
            raise InvalidPaletteIndex(value, len(self._palette))
