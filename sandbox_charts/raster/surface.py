from __future__ import annotations

from typing import Protocol

import numpy as np

from sandbox_charts.raster.canvas import fill_rect, new_canvas
from sandbox_charts.raster.draw_lines import draw_line
from sandbox_charts.raster.draw_text import draw_text
from sandbox_charts.style import RGBA, WHITE, FontSpec


class DrawingSurface(Protocol):
    """Primitive drawing target the rasterizer replays layout commands onto."""

    def fill_rect(self, x: int, y: int, width: int, height: int, color: RGBA) -> None:
        ...

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, color: RGBA, *, rotate_deg: int = 0) -> None:
        ...


class RasterSurface:
    """`DrawingSurface` over an ``(H, W, 4) uint8`` RGBA canvas."""

    def __init__(self, width: int, height: int, *, color: RGBA = WHITE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._canvas = new_canvas(width, height, color)

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    @property
    def rgba(self) -> np.ndarray:
        return self._canvas

    def fill_rect(self, x: int, y: int, width: int, height: int, color: RGBA) -> None:
        fill_rect(self._canvas, x, y, width, height, color)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
        draw_line(self._canvas, x0, y0, x1, y1, color)

    def draw_text(self, text: str, x: float, y: float, font: FontSpec, color: RGBA, *, rotate_deg: int = 0) -> None:
        draw_text(self._canvas, x, y, text, font, color, rotate_deg=rotate_deg)
