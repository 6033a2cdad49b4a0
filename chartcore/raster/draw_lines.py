from __future__ import annotations

import numpy as np

from chartcore.colors import Colour
from chartcore.raster.canvas import fill_rect


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: Colour, width: int = 1) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        draw_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color=color, width=width)


def draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: Colour, width: int = 1) -> None:
    if x0 == x1 or y0 == y1:
        # Axis-aligned: one block fill instead of stamping the brush per pixel.
        half = max(0, width // 2)
        lo = half
        hi = max(0, width - 1 - half)
        fill_rect(dst, min(x0, x1) - lo, min(y0, y1) - lo, max(x0, x1) + hi, max(y0, y1) + hi, color)
        return

    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: Colour, width: int) -> None:
    radius = max(0, width // 2)
    fill_rect(dst, x - radius, y - radius, x + radius, y + radius, color)
