"""Pygame InputBackend mapping window events to wall events.

Only the handful of events the wall reacts to are translated; everything
else is dropped. In headless mode (dummy video) pygame delivers no window
events, but tests can synthesize them with ``pygame.event.post``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generator

pg: Any = None
try:  # pragma: no cover - optional dependency in CI
    import pygame as _pg

    pg = _pg
except Exception:  # pragma: no cover
    pg = None


@dataclass(slots=True)
class WallEvent:
    type: str  # "run" | "resize" | "shape" | "legend" | "quit"
    width: int = 0
    height: int = 0


class PygameInputBackend:
    """Collects pygame events and emits WallEvents.

    Use pump() in a loop to process events.
    """

    def __init__(self) -> None:
        if pg is None:
            raise RuntimeError("pygame not available for input backend")

    def pump(self) -> Generator[WallEvent, None, None]:
        for ev in pg.event.get():
            if ev.type == pg.QUIT:
                yield WallEvent("quit")
            elif ev.type == pg.VIDEORESIZE:
                yield WallEvent("resize", int(ev.w), int(ev.h))
            elif ev.type == pg.MOUSEBUTTONUP:
                yield WallEvent("run")
            elif ev.type == pg.KEYDOWN:
                if ev.key in (pg.K_q, pg.K_ESCAPE):
                    yield WallEvent("quit")
                elif ev.key in (pg.K_SPACE, pg.K_RETURN):
                    yield WallEvent("run")
                elif ev.key == pg.K_s:
                    yield WallEvent("shape")
                elif ev.key == pg.K_i:
                    yield WallEvent("legend")
