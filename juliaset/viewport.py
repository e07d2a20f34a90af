"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

WIDTH = 800
HEIGHT = 600

BASE_X_RANGE = (-2.0, 2.0)
BASE_Y_RANGE = (1.0, -1.0)


@dataclass(frozen=True)
class Viewport:
    """Linear mapping from integer pixel coordinates to plane coordinates.

    ``x_start``/``y_start`` is the plane point under the top-left pixel. Plane
    x grows to the right and plane y shrinks downward, so ``pixel_to_plane``
    adds the x increment and subtracts the y increment.
    """

    width: int
    height: int
    x_start: float
    y_start: float
    x_range: float
    y_range: float
    x_inc: float
    y_inc: float

    def pixel_to_plane(self, px: float, py: float) -> tuple[float, float]:
        return self.x_start + px * self.x_inc, self.y_start - py * self.y_inc


def build(
    width: int,
    height: int,
    base_x_range: tuple[float, float] = BASE_X_RANGE,
    base_y_range: tuple[float, float] = BASE_Y_RANGE,
) -> Viewport:
    """Build a viewport centered on the origin that matches ``width/height``.

    One of the base ranges is widened so that the plane aspect ratio equals
    the pixel aspect ratio; the base region is never cropped.
    """

    if width <= 0 or height <= 0:
        raise ValueError(f"viewport dimensions must be positive, got {width}x{height}.")

    x_range = float(base_x_range[1] - base_x_range[0])
    y_range = float(-(base_y_range[1] - base_y_range[0]))

    aspect = width / height
    if aspect > x_range / y_range:
        x_range = aspect * y_range
    else:
        y_range = x_range / aspect

    return Viewport(
        width=int(width),
        height=int(height),
        x_start=-(x_range / 2.0),
        y_start=y_range / 2.0,
        x_range=x_range,
        y_range=y_range,
        x_inc=x_range / width,
        y_inc=y_range / height,
    )


def plane_grid(viewport: Viewport) -> tuple[np.ndarray, np.ndarray]:
    """Return plane coordinates for every pixel as two ``(height, width)`` arrays."""

    cols = np.arange(viewport.width, dtype=np.float64)
    rows = np.arange(viewport.height, dtype=np.float64)
    zx = np.float64(viewport.x_start) + cols * np.float64(viewport.x_inc)
    zy = np.float64(viewport.y_start) - rows * np.float64(viewport.y_inc)
    X, Y = np.meshgrid(zx, zy)
    return X, Y


def plane_param(viewport: Viewport, pointer: tuple[float, float], clamp: bool = True) -> tuple[float, float]:
    """Map a pointer position in window pixels to a Julia parameter.

    With ``clamp`` the pointer is first pulled back into the window bounds
    ``[0, width] x [0, height]``, so events reported just outside the window
    keep ``c`` on the viewport's edge. Positions inside the window are left
    alone. Without it the mapping extrapolates.
    """

    px, py = float(pointer[0]), float(pointer[1])
    if clamp:
        px = min(max(px, 0.0), float(viewport.width))
        py = min(max(py, 0.0), float(viewport.height))
    return viewport.pixel_to_plane(px, py)
