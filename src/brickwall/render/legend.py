"""Legend panel (info box) drawn in the lower-right corner.

Shows the grid size, the per-update delay and the rule as a lookup table:
the header row and column carry the palette, and cell (i, j) carries the
color the rule produces for left=i, right=j.
"""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

from brickwall.render.canvas import Canvas, Color

__all__ = ["InfoBox"]

RADIUS = 10


class InfoBox:
    """Static description of one wall configuration."""

    def __init__(
        self,
        size: int,
        delay_ms: float,
        palette: Sequence[Color],
        rule: Callable[[int, int], int],
        *,
        font_px: int = 14,
        pad_px: int = 8,
        bg: Color = (255, 255, 255, 230),
        fg: Color = (0, 0, 0, 255),
    ) -> None:
        self.size = int(size)
        self.delay_ms = float(delay_ms)
        self.palette: tuple[Color, ...] = tuple(palette)
        self.rule = rule
        self.font_px = int(font_px)
        self.pad_px = int(pad_px)
        self.bg = bg
        self.fg = fg

    def lines(self) -> list[str]:
        delay = f"{self.delay_ms:g}"
        return [f"n = {self.size}", f"delay = {delay} ms"]

    def table_px(self) -> int:
        """Edge length of the square rule table."""
        k = len(self.palette)
        return (k + 1) * RADIUS * 2 + k

    def cell_center(self, index: int) -> int:
        """Offset of header/body slot ``index`` (0 is the header slot)."""
        return index * RADIUS * 2 + index + RADIUS

    def panel_rect(self, size_px: Tuple[int, int]) -> Tuple[int, int, int, int]:
        """Return ``(x, y, w, h)`` of the panel anchored bottom-right."""
        W, H = size_px
        text_h = len(self.lines()) * (self.font_px + 2)
        dim = self.table_px()
        w = dim + 2 * self.pad_px
        h = text_h + dim + 3 * self.pad_px
        return W - w - self.pad_px, H - h - self.pad_px, w, h

    def draw(self, canvas: Canvas, size_px: Tuple[int, int]) -> None:
        x, y, w, h = self.panel_rect(size_px)
        canvas.polygon(
            [(x, y), (x + w, y), (x + w, y + h), (x, y + h)],
            fill=self.bg,
            outline=self.fg,
        )
        ty = y + self.pad_px
        for s in self.lines():
            canvas.text((x + self.pad_px, ty), s, size_px=self.font_px, color=self.fg)
            ty += self.font_px + 2

        ox = x + self.pad_px
        oy = ty + self.pad_px
        dim = self.table_px()
        sep = RADIUS * 2 + 0.5
        canvas.line((ox, oy + sep), (ox + dim, oy + sep), 1, self.fg)
        canvas.line((ox + sep, oy), (ox + sep, oy + dim), 1, self.fg)

        k = len(self.palette)
        for i in range(k):
            off = self.cell_center(i + 1)
            self._dot(canvas, ox + RADIUS, oy + off, self.palette[i])
            self._dot(canvas, ox + off, oy + RADIUS, self.palette[i])
        for i in range(k):
            for j in range(k):
                self._dot(
                    canvas,
                    ox + self.cell_center(j + 1),
                    oy + self.cell_center(i + 1),
                    self.palette[self.rule(i, j)],
                )

    def _dot(self, canvas: Canvas, cx: int, cy: int, color: Color) -> None:
        canvas.filled_circle((cx, cy), RADIUS - 2, color)
        canvas.circle((cx, cy), RADIUS - 2, 1, self.fg)
