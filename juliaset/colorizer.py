"""Escape counts to RGBA colors via hue rotation."""

from __future__ import annotations

import numpy as np

COLOR_FACTOR = 100
INSIDE_COLOR = (0, 0, 0, 255)


def hsb_to_rgb(h: float, s: float, b: float) -> tuple[int, int, int]:
    """Convert hue in ``[0, 360)`` and saturation/brightness in ``[0, 1]`` to 8-bit RGB.

    Channels are truncated, not rounded.
    """

    chroma = b * s
    h_prime = h / 60.0
    x = chroma * (1.0 - abs(h_prime % 2.0 - 1.0))
    m = b - chroma

    if h_prime < 1.0:
        r, g, bl = chroma, x, 0.0
    elif h_prime < 2.0:
        r, g, bl = x, chroma, 0.0
    elif h_prime < 3.0:
        r, g, bl = 0.0, chroma, x
    elif h_prime < 4.0:
        r, g, bl = 0.0, x, chroma
    elif h_prime < 5.0:
        r, g, bl = x, 0.0, chroma
    else:
        r, g, bl = chroma, 0.0, x

    return int((r + m) * 255.0), int((g + m) * 255.0), int((bl + m) * 255.0)


def colorize(count: int, max_iter: int, color_factor: int = COLOR_FACTOR) -> tuple[int, int, int, int]:
    """Color for an escape count; bounded points are opaque black."""

    if count == max_iter:
        return INSIDE_COLOR
    hue = int(color_factor * count / max_iter) % 360
    r, g, b = hsb_to_rgb(float(hue), 1.0, 1.0)
    return r, g, b, 255


def palette(max_iter: int, color_factor: int = COLOR_FACTOR) -> np.ndarray:
    """Lookup table whose row ``n`` is ``colorize(n, max_iter, color_factor)``."""

    return np.array(
        [colorize(n, max_iter, color_factor) for n in range(max_iter + 1)],
        dtype=np.uint8,
    ).reshape(max_iter + 1, 4)
