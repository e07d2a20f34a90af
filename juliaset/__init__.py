"""Public API for Julia set rendering utilities."""

from .colorizer import COLOR_FACTOR, colorize, hsb_to_rgb, palette
from .divergence import MAX_ITERATIONS, escape, escape_counts
from .renderer import new_buffer, render
from .session import DEFAULT_C, JuliaSession
from .viewport import HEIGHT, WIDTH, Viewport, build, plane_grid, plane_param

__all__ = [
    "COLOR_FACTOR",
    "DEFAULT_C",
    "HEIGHT",
    "JuliaSession",
    "MAX_ITERATIONS",
    "Viewport",
    "WIDTH",
    "build",
    "colorize",
    "escape",
    "escape_counts",
    "hsb_to_rgb",
    "new_buffer",
    "palette",
    "plane_grid",
    "plane_param",
    "render",
]
