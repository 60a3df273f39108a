from __future__ import annotations

import numpy as np

from sandbox_charts.style import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA) -> None:
    """Fill ``width x height`` pixels from ``(x, y)``, clipped to the canvas."""

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + width)
    y1 = min(dst.shape[0], y + height)
    if x0 >= x1 or y0 >= y1:
        return
    _blend_span(dst[y0:y1, x0:x1], color)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    _blend_span(dst[y : y + 1, x : x + 1], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend_span(dst[y : y + 1, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend_span(dst[ya : yb + 1, x : x + 1], color)


def _blend_span(view: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    if a >= 1.0:
        view[:, :] = np.asarray(color, dtype=np.uint8)
        return
    inv = 1.0 - a
    src = np.asarray(color[0:3], dtype=np.float32)
    view[:, :, :3] = (src * a + view[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    view[:, :, 3] = 255
