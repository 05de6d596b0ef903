"""Core wall model: triangular grid, update queue, rules and clocks."""

from .errors import InvalidPaletteIndex, OutOfRange, WallError
from .grid import Grid
from .rules import TableRule, propagate, random_row, run_wall, seed_row

__all__ = [
    "Grid",
    "InvalidPaletteIndex",
    "OutOfRange",
    "TableRule",
    "WallError",
    "propagate",
    "random_row",
    "run_wall",
    "seed_row",
]
