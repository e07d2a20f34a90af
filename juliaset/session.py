"""Per-window state shared by the pointer and redraw handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .colorizer import COLOR_FACTOR
from .divergence import MAX_ITERATIONS
from .renderer import render
from .viewport import Viewport, plane_param

DEFAULT_C = (-0.7, 0.27015)


@dataclass
class JuliaSession:
    """Owns the Julia parameter ``c`` for one viewer.

    Pointer moves write ``c`` and redraws read it. Both run on the host's
    event thread, so a redraw requested after a move sees the new value.
    """

    viewport: Viewport
    c: tuple[float, float] = DEFAULT_C
    max_iterations: int = MAX_ITERATIONS
    color_factor: int = COLOR_FACTOR
    clamp_pointer: bool = True
    device: Optional[str] = None

    def on_pointer_move(self, x: float, y: float) -> tuple[float, float]:
        self.c = plane_param(self.viewport, (x, y), clamp=self.clamp_pointer)
        return self.c

    def redraw(self, buffer: Any) -> np.ndarray:
        return render(
            buffer,
            self.viewport,
            self.c,
            self.max_iterations,
            self.color_factor,
            device=self.device,
        )
