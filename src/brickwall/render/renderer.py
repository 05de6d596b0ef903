"""Wall layout and frame loop.

The renderer sizes cells so the whole triangle fits the viewport, walks the
triangular index space once per frame and paints each cell's displayed
color. While the grid still has queued updates it schedules its own next
frame through the injected clock, one ``delay_ms`` later; once the queue is
empty it stops scheduling and only repaints on resize or a new run.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Sequence

from brickwall.core.grid import Grid
from brickwall.core.time import TimerHandle, TimeSource
from brickwall.render.canvas import Color, DisplayBackend
from brickwall.render.shapes import Shape

if TYPE_CHECKING:
    from brickwall.render.legend import InfoBox

__all__ = ["MARGIN", "compute_pitch", "WallRenderer"]

logger = logging.getLogger(__name__)

MARGIN = 20


def compute_pitch(
    width: int, height: int, grid_size: int, ratio: float, margin: int = MARGIN
) -> int:
    """Return the largest even cell pitch that fits the viewport.

    The pitch satisfies ``pitch <= floor((width - 2*margin) / grid_size)`` and
    ``pitch * ratio <= floor((height - 2*margin) / grid_size)``. Returns 0
    when the viewport is too small for even a 2 px cell.
    """
    if grid_size <= 0 or ratio <= 0:
        return 0
    w_cell = math.floor((width - 2 * margin) / grid_size)
    h_cell = math.floor((height - 2 * margin) / grid_size)
    if w_cell <= 0 or h_cell <= 0:
        return 0
    # Small epsilon keeps exact multiples (e.g. 9 / 0.75) from flooring down
    h_pitch = math.floor(h_cell / ratio + 1e-9)
    pitch = min(w_cell, h_pitch)
    return max(0, pitch & ~1)


class WallRenderer:
    """Owns the drawing surface for one grid and paces its animation."""

    def __init__(
        self,
        display: DisplayBackend,
        grid: Grid[Color],
        shape: Shape,
        ts: TimeSource,
        *,
        margin: int = MARGIN,
        background: Color = (255, 255, 255, 255),
        legend: "InfoBox | None" = None,
    ) -> None:
        self._display = display
        self._grid = grid
        self._shape = shape
        self._ts = ts
        self.margin = int(margin)
        self.background = background
        self.legend = legend
        self.show_legend = legend is not None

        self.cell_pitch: int = 0
        self.grid_size: int = grid.size
        self.frames: int = 0
        self._next_frame: TimerHandle | None = None

        w, h = display.size()
        self.configure(w, h, grid.size, shape)

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def grid(self) -> Grid[Color]:
        return self._grid

    @property
    def frame_scheduled(self) -> bool:
        return self._next_frame is not None

    # --- layout ---------------------------------------------------------
    def configure(
        self,
        viewport_width: int,
        viewport_height: int,
        grid_size: int | None = None,
        shape: Shape | None = None,
    ) -> int:
        """Recompute the cell pitch for a viewport; returns the new pitch."""
        if shape is not None:
            self._shape = shape
        if grid_size is not None:
            self.grid_size = int(grid_size)
        self.cell_pitch = compute_pitch(
            int(viewport_width),
            int(viewport_height),
            self.grid_size,
            self._shape.ratio,
            self.margin,
        )
        logger.debug(
            "configured %dx%d n=%d shape=%s pitch=%d",
            viewport_width,
            viewport_height,
            self.grid_size,
            self._shape.name,
            self.cell_pitch,
        )
        return self.cell_pitch

    def anchor(self, row: int, col: int) -> tuple[float, float]:
        """Top-left pixel of cell ``(row, col)`` at the current pitch."""
        pitch = self.cell_pitch
        x = self.margin + row * pitch / 2 + col * pitch
        y = self.margin + row * pitch * self._shape.ratio
        return x, y

    # --- frame loop -----------------------------------------------------
    def frame(self, now: float | None = None) -> None:
        """Drain due updates, paint every cell, and reschedule while busy."""
        if now is None:
            now = self._ts.monotonic()
        grid = self._grid
        if grid.busy:
            grid.drain(now)

        canvas = self._display.begin_frame()
        canvas.clear(self.background)
        if self.cell_pitch > 0:
            palette: Sequence[Color] = grid.palette
            n = min(self.grid_size, grid.size)
            for row in range(n):
                for col in range(n - row):
                    x, y = self.anchor(row, col)
                    self._shape.paint(
                        canvas,
                        x,
                        y,
                        self.cell_pitch,
                        palette[grid.read_displayed(row, col)],
                    )
        else:
            logger.debug("viewport too small for n=%d, nothing painted", self.grid_size)
        if self.legend is not None and self.show_legend:
            self.legend.draw(canvas, self._display.size())
        self._display.end_frame()
        self.frames += 1

        if grid.busy:
            self._schedule()

    def on_viewport_resize(self, width: int, height: int) -> None:
        """Adopt a new viewport size and repaint immediately."""
        self._display.resize(int(width), int(height))
        self.configure(width, height)
        self.frame()

    def set_shape(self, shape: Shape) -> None:
        w, h = self._display.size()
        self.configure(w, h, shape=shape)
        self.frame()

    def toggle_legend(self) -> None:
        self.show_legend = not self.show_legend
        self.frame()

    def cancel(self) -> None:
        """Drop the pending follow-up frame, if any."""
        if self._next_frame is not None:
            self._next_frame.cancel()
            self._next_frame = None

    def _schedule(self) -> None:
        if self._next_frame is not None:
            return
        delay_s = max(0.0, self._grid.delay_ms) / 1000.0
        self._next_frame = self._ts.call_later(delay_s, self._on_timer)

    def _on_timer(self) -> None:
        self._next_frame = None
        self.frame(self._ts.monotonic())
