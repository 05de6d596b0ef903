"""Rendering: canvas protocol, cell shapes, layout/frame loop and legend."""

from .legend import InfoBox
from .renderer import MARGIN, WallRenderer, compute_pitch
from .shapes import SHAPES, Shape, make_shape

__all__ = [
    "InfoBox",
    "MARGIN",
    "SHAPES",
    "Shape",
    "WallRenderer",
    "compute_pitch",
    "make_shape",
]
