"""Color rules and the run driver that fills a wall from its top row.

A rule maps the two palette indices directly above a cell (left, right) to
the cell's own index. Propagation only reads logical colors, so a whole run
is computed synchronously before anything is drawn.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Sequence

from .errors import InvalidPaletteIndex
from .grid import Grid

__all__ = [
    "ColorRule",
    "TableRule",
    "seed_row",
    "random_row",
    "propagate",
    "run_wall",
]

logger = logging.getLogger(__name__)

ColorRule = Callable[[int, int], int]


class TableRule:
    """Rule defined by a square lookup table: ``table[left][right]``."""

    def __init__(self, table: Sequence[Sequence[int]]) -> None:
        rows = [tuple(int(v) for v in row) for row in table]
        n = len(rows)
        if n == 0:
            raise ValueError("rule table must not be empty")
        for i, row in enumerate(rows):
            if len(row) != n:
                raise ValueError(
                    f"rule table must be square: row {i} has {len(row)} entries, "
                    f"expected {n}"
                )
            for v in row:
                if not 0 <= v < n:
                    raise InvalidPaletteIndex(v, n)
        self._table: tuple[tuple[int, ...], ...] = tuple(rows)

    @property
    def colors(self) -> int:
        """Number of palette entries the table covers."""
        return len(self._table)

    @property
    def table(self) -> tuple[tuple[int, ...], ...]:
        return self._table

    def __call__(self, left: int, right: int) -> int:
        return self._table[left][right]

    def __repr__(self) -> str:
        return f"TableRule({[list(r) for r in self._table]!r})"


def seed_row(grid: Grid[Any], values: Sequence[int]) -> None:
    """Assign *values* to row 0; there must be exactly ``grid.size`` of them."""
    if len(values) != grid.size:
        raise ValueError(f"row 0 needs {grid.size} values, got {len(values)}")
    for col, value in enumerate(values):
        grid.assign(0, col, value)


def random_row(size: int, colors: int, rng: random.Random | None = None) -> list[int]:
    rng = rng or random.Random()
    return [rng.randrange(colors) for _ in range(size)]


def propagate(grid: Grid[Any], rule: ColorRule) -> None:
    """Fill rows 1..N-1 from the logical colors of the row above."""
    for row in range(1, grid.size):
        for col in range(grid.size - row):
            left = grid.read(row - 1, col)
            right = grid.read(row - 1, col + 1)
            grid.assign(row, col, rule(left, right))


def run_wall(grid: Grid[Any], rule: ColorRule, row0: Sequence[int]) -> None:
    """Start a fresh run: reset, seed row 0 and propagate the rule.

    Queues ``N * (N + 1) / 2`` updates.
    """
    grid.reset()
    seed_row(grid, row0)
    propagate(grid, rule)
    logger.debug("run queued %d updates", grid.pending)
