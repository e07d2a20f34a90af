"""Rendering primitives for Julia set frames."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .colorizer import COLOR_FACTOR, palette
from .divergence import escape_counts
from .viewport import Viewport, plane_grid


def new_buffer(viewport: Viewport) -> np.ndarray:
    """Allocate a zeroed ``(height, width, 4)`` RGBA buffer for ``viewport``."""

    return np.zeros((viewport.height, viewport.width, 4), dtype=np.uint8)


def _frame_view(buffer: Any, viewport: Viewport) -> np.ndarray:
    expected = viewport.width * viewport.height * 4
    view = np.frombuffer(buffer, dtype=np.uint8)
    if view.size != expected:
        raise ValueError(
            f"pixel buffer holds {view.size} bytes, expected {expected} for "
            f"{viewport.width}x{viewport.height} RGBA."
        )
    if not view.flags.writeable:
        raise ValueError("pixel buffer is read-only.")
    return view.reshape(viewport.height, viewport.width, 4)


def render(
    buffer: Any,
    viewport: Viewport,
    c: tuple[float, float],
    max_iter: int,
    color_factor: int = COLOR_FACTOR,
    *,
    device: Optional[str] = None,
) -> np.ndarray:
    """Fill ``buffer`` with one Julia set frame for parameter ``c``.

    ``buffer`` is any writable object exposing ``width*height*4`` bytes.
    Pixel ``i`` in row-major order lands at byte offset ``i*4``. Every byte
    is overwritten. Returns the ``(height, width)`` escape counts.
    """

    frame = _frame_view(buffer, viewport)
    zx, zy = plane_grid(viewport)
    counts = escape_counts(zx, zy, c, max_iter, device=device)
    frame[...] = palette(max_iter, color_factor)[counts]
    return counts
