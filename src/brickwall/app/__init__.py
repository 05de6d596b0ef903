"""Application package for Brickwall."""

from . import wall_view  # re-export the main application module

__all__ = ["wall_view"]
