"""Pygame-based DisplayBackend with headless (offscreen) support.

This module implements the wall's Canvas and DisplayBackend using pygame.
It's suitable for deterministic, headless tests by setting the environment
variable SDL_VIDEODRIVER=dummy before importing pygame.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from brickwall.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(640, 480))
    canvas = backend.begin_frame()
    canvas.clear((255, 255, 255, 255))
    canvas.polygon([(10, 10), (50, 10), (30, 40)], fill=(72, 61, 139, 255))
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple

from brickwall.render.canvas import Canvas, Color, DisplayBackend, Point

logger = logging.getLogger(__name__)

pg: Any = None
try:  # pragma: no cover - import guard for environments without SDL
    import pygame as _pg

    pg = _pg
except Exception:  # pragma: no cover
    pg = None


def _pygame_color(c: Color) -> Tuple[int, int, int, int]:
    r, g, b, a = c
    return int(r), int(g), int(b), int(a)


@dataclass(slots=True)
class _FontCache:
    fonts: Dict[int, Any]

    def __init__(self) -> None:
        self.fonts = {}

    def get(self, size_px: int) -> Any:
        f = self.fonts.get(size_px)
        if f is None:
            if pg is None:
                raise RuntimeError("pygame is not available")
            # Default font for determinism across platforms
            f = pg.font.Font(None, size_px)
            self.fonts[size_px] = f
        return f


class _PygameCanvas(Canvas):
    def __init__(self, surface: Any, font_cache: _FontCache) -> None:
        self._surface = surface
        self._font_cache = font_cache

    def clear(self, color: Color) -> None:
        self._surface.fill(_pygame_color(color))

    def polygon(
        self,
        pts: Sequence[Point],
        fill: Color,
        outline: Color | None = None,
        width: int = 1,
    ) -> None:
        if len(pts) < 3:
            return
        points = [(float(x), float(y)) for x, y in pts]
        pg.draw.polygon(self._surface, _pygame_color(fill), points, 0)
        if outline is not None and width > 0:
            pg.draw.polygon(self._surface, _pygame_color(outline), points, width)

    def line(
        self,
        p0: Point,
        p1: Point,
        width: int = 1,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        pg.draw.line(self._surface, _pygame_color(color), p0, p1, width)

    def circle(
        self,
        center: Tuple[int, int],
        radius: int,
        width: int = 1,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        pg.draw.circle(self._surface, _pygame_color(color), center, radius, width)

    def filled_circle(self, center: Tuple[int, int], radius: int, color: Color) -> None:
        pg.draw.circle(self._surface, _pygame_color(color), center, radius, 0)

    def text(
        self,
        pos: Tuple[int, int],
        s: str,
        size_px: int = 12,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        font = self._font_cache.get(size_px)
        surf = font.render(s, True, _pygame_color(color))
        self._surface.blit(surf, pos)


class PygameDisplayBackend(DisplayBackend):
    """Pygame implementation of DisplayBackend with offscreen surface.

    Drawing always targets an offscreen SRCALPHA surface. With
    ``create_window=True`` (and a real video driver) a resizable window is
    opened and each ``end_frame`` blits the surface and flips.
    """

    def __init__(
        self,
        size: Tuple[int, int] = (800, 600),
        *,
        create_window: bool = False,
        title: str = "Brickwall",
    ) -> None:
        local_pg = pg
        if local_pg is None:
            raise RuntimeError(
                "pygame is not available. "
                "Ensure it is installed and that SDL is configured."
            )

        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not local_pg.get_init():
            local_pg.init()
        if not local_pg.font.get_init():
            local_pg.font.init()

        self._width, self._height = int(size[0]), int(size[1])
        self._window_surface = None
        if create_window and os.environ.get("SDL_VIDEODRIVER") != "dummy":
            try:
                self._window_surface = local_pg.display.set_mode(
                    (self._width, self._height), local_pg.RESIZABLE
                )
                local_pg.display.set_caption(title)
            except Exception:
                logger.warning(
                    "Window creation failed; falling back to offscreen. "
                    "Check SDL_VIDEODRIVER and display permissions."
                )
                self._window_surface = None

        self._surface = self._make_surface()
        self._font_cache = _FontCache()

    @property
    def windowed(self) -> bool:
        return self._window_surface is not None

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def resize(self, width: int, height: int) -> None:
        width, height = max(1, int(width)), max(1, int(height))
        if (width, height) == (self._width, self._height):
            return
        self._width, self._height = width, height
        if self._window_surface is not None:
            self._window_surface = pg.display.set_mode(
                (self._width, self._height), pg.RESIZABLE
            )
        self._surface = self._make_surface()

    def begin_frame(self) -> Canvas:
        return _PygameCanvas(self._surface, self._font_cache)

    def end_frame(self) -> None:
        local_pg = pg
        if self._window_surface is not None and local_pg is not None:
            self._window_surface.blit(self._surface, (0, 0))
            local_pg.display.flip()

    def get_at(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the RGBA pixel at ``(x, y)`` of the offscreen surface."""
        c = self._surface.get_at((int(x), int(y)))
        return int(c.r), int(c.g), int(c.b), int(c.a)

    def save_png(self, path: str) -> None:
        local_pg = pg
        if local_pg is None:  # pragma: no cover - should not happen at runtime
            raise RuntimeError("pygame is not available")
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        local_pg.image.save(self._surface, path)

    def _make_surface(self) -> Any:
        return pg.Surface((self._width, self._height), flags=pg.SRCALPHA)
