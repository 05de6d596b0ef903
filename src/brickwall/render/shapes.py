"""Cell shapes for the wall.

Every shape fits a box ``pitch`` wide and ``pitch * ratio`` tall for the
purpose of row stacking. Hexagons and diamonds are drawn a full ``pitch``
tall and overlap the next row, which is what makes them tessellate once
each row is shifted by half a pitch. The bottom row of those shapes
therefore extends past the fitted box by ``pitch * (1 - ratio)``.

Vertices are offset by half a pixel so 1 px outlines land on pixel centers.
"""

from __future__ import annotations

from typing import ClassVar, Dict, List, Type

from brickwall.render.canvas import Canvas, Color, Point

__all__ = [
    "Shape",
    "RectangleHalf",
    "Square",
    "Hexagon",
    "Diamond",
    "SHAPES",
    "SHAPE_ORDER",
    "make_shape",
]

_OUTLINE: Color = (0, 0, 0, 255)


class Shape:
    """Base shape: a polygon anchored at its top-left corner."""

    name: ClassVar[str] = ""
    ratio: ClassVar[float] = 1.0

    def __init__(self, outline: Color = _OUTLINE) -> None:
        self.outline = outline

    def vertices(self, x: float, y: float, pitch: float) -> List[Point]:
        raise NotImplementedError

    def paint(self, canvas: Canvas, x: float, y: float, pitch: float, color: Color) -> None:
        canvas.polygon(self.vertices(x, y, pitch), fill=color, outline=self.outline)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class _Box(Shape):
    def vertices(self, x: float, y: float, pitch: float) -> List[Point]:
        x0, y0 = x + 0.5, y + 0.5
        w, h = pitch, pitch * self.ratio
        return [(x0, y0), (x0 + w, y0), (x0 + w, y0 + h), (x0, y0 + h)]


class RectangleHalf(_Box):
    """Brick twice as wide as it is tall."""

    name = "rect"
    ratio = 0.5


class Square(_Box):
    name = "square"
    ratio = 1.0


class Hexagon(Shape):
    """Pointy-top hexagon; rows stack at 3/4 of the pitch."""

    name = "hexagon"
    ratio = 0.75

    def vertices(self, x: float, y: float, pitch: float) -> List[Point]:
        x0, y0 = x + 0.5, y + 0.5
        p = pitch
        return [
            (x0 + p / 2, y0),
            (x0 + p, y0 + p / 4),
            (x0 + p, y0 + 3 * p / 4),
            (x0 + p / 2, y0 + p),
            (x0, y0 + 3 * p / 4),
            (x0, y0 + p / 4),
        ]


class Diamond(Shape):
    name = "diamond"
    ratio = 0.5

    def vertices(self, x: float, y: float, pitch: float) -> List[Point]:
        x0, y0 = x + 0.5, y + 0.5
        p = pitch
        return [
            (x0 + p / 2, y0),
            (x0 + p, y0 + p / 2),
            (x0 + p / 2, y0 + p),
            (x0, y0 + p / 2),
        ]


SHAPES: Dict[str, Type[Shape]] = {
    cls.name: cls for cls in (RectangleHalf, Square, Hexagon, Diamond)
}
# Cycle order for the interactive shape toggle
SHAPE_ORDER: tuple[str, ...] = ("hexagon", "square", "rect", "diamond")


def make_shape(name: str, *, outline: Color = _OUTLINE) -> Shape:
    try:
        cls = SHAPES[name]
    except KeyError:
        raise ValueError(
            f"unknown shape {name!r}: must be one of " + ", ".join(sorted(SHAPES))
        ) from None
    return cls(outline=outline)
