"""Framework-agnostic Canvas and DisplayBackend protocols.

Defines the minimal drawing primitives the wall needs and a display backend
contract so different frameworks (pygame windowed, pygame offscreen, test
recorders) can be plugged in.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Tuple

Color = Tuple[int, int, int, int]
Point = Tuple[float, float]


class Canvas(Protocol):
    def clear(self, color: Color) -> None:
        ...

    def polygon(
        self,
        pts: Sequence[Point],
        fill: Color,
        outline: Color | None = None,
        width: int = 1,
    ) -> None:
        ...

    def line(
        self,
        p0: Point,
        p1: Point,
        width: int = 1,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        ...

    def circle(
        self,
        center: Tuple[int, int],
        radius: int,
        width: int = 1,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        ...

    def filled_circle(self, center: Tuple[int, int], radius: int, color: Color) -> None:
        ...

    def text(
        self,
        pos: Tuple[int, int],
        s: str,
        size_px: int = 12,
        color: Color = (0, 0, 0, 255),
    ) -> None:
        ...


class DisplayBackend(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def resize(self, width: int, height: int) -> None:
        ...

    def begin_frame(self) -> Canvas:
        ...

    def end_frame(self) -> None:
        ...

    def save_png(self, path: str) -> None:
        ...
