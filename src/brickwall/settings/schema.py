"""Pydantic model for user settings."""

from __future__ import annotations

from typing import Any, List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from brickwall.render.shapes import SHAPES

from .values import PALETTE, RULES, WALL_DEFAULTS

RGBA = Tuple[int, int, int, int]


def _parse_color(v: Any) -> RGBA:
    if isinstance(v, str):
        s = v.strip().lstrip("#")
        if len(s) not in (6, 8):
            raise ValueError(f"color {v!r} must be #rrggbb or #rrggbbaa")
        try:
            parts = [int(s[i : i + 2], 16) for i in range(0, len(s), 2)]
        except ValueError:
            raise ValueError(f"color {v!r} is not valid hex") from None
        if len(parts) == 3:
            parts.append(255)
        return (parts[0], parts[1], parts[2], parts[3])
    if isinstance(v, (list, tuple)) and len(v) in (3, 4):
        try:
            parts = [int(c) for c in v]
        except (TypeError, ValueError):
            raise ValueError(f"color {v!r} must contain integers") from None
        if any(not 0 <= c <= 255 for c in parts):
            raise ValueError(f"color {v!r} components must be in 0..255")
        if len(parts) == 3:
            parts.append(255)
        return (parts[0], parts[1], parts[2], parts[3])
    raise ValueError(f"color {v!r} must be a hex string or an RGB(A) list")


class Settings(BaseModel):
    """Wall settings persisted to disk.

    Parameters
    ----------
    size: Number of bricks in the top row.
    delay_ms: Milliseconds one brick takes to appear. 0 reveals the wall
        at once.
    palette: Brick colors as ``#rrggbb`` strings or RGB(A) lists; stored
        as RGBA tuples.
    initial_color: Palette index every brick starts with.
    rules: ``rules[left][right]`` is the palette index of the brick below
        the pair. Must be square with one row per palette entry.
    shape: One of ``rect``, ``square``, ``hexagon``, ``diamond``.
    seed: Seed for the random top row; None draws a new row each run.
    show_legend: Draw the info box in the lower-right corner.
    """

    size: int = Field(default=int(WALL_DEFAULTS["size"]), ge=1)
    delay_ms: float = Field(default=float(WALL_DEFAULTS["delay_ms"]), ge=0)
    palette: List[RGBA] = Field(default_factory=lambda: list(PALETTE))
    initial_color: int = Field(default=int(WALL_DEFAULTS["initial_color"]), ge=0)
    rules: List[List[int]] = Field(default_factory=lambda: [list(r) for r in RULES])
    shape: str = Field(default=str(WALL_DEFAULTS["shape"]))
    seed: int | None = Field(default=None)
    show_legend: bool = Field(default=True)

    @field_validator("palette", mode="before")
    @classmethod
    def _chk_palette(cls, v: Any) -> List[RGBA]:
        if not isinstance(v, (list, tuple)) or not v:
            raise ValueError("palette must be a non-empty list of colors")
        return [_parse_color(c) for c in v]

    @field_validator("shape")
    @classmethod
    def _chk_shape(cls, v: str) -> str:
        if v not in SHAPES:
            raise ValueError("invalid shape: must be one of " + ", ".join(sorted(SHAPES)))
        return v

    @model_validator(mode="after")
    def _chk_consistency(self) -> "Settings":
        k = len(self.palette)
        if self.initial_color >= k:
            raise ValueError(
                f"initial_color {self.initial_color} is not a palette index (0..{k - 1})"
            )
        if len(self.rules) != k or any(len(row) != k for row in self.rules):
            raise ValueError(f"rules must be a {k}x{k} table, one row per color")
        for row in self.rules:
            for v in row:
                if not 0 <= v < k:
                    raise ValueError(f"rule result {v} is not a palette index")
        return self
