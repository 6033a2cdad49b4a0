from __future__ import annotations

import numpy as np

from chartcore.colors import Colour


def new_canvas(width: int, height: int, color: Colour = (0, 0, 0, 0)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: Colour) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend_segment(dst[y, xa : xb + 1], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: Colour, radius: int = 0) -> None:
    """Fill the inclusive pixel box `[x0, x1] x [y0, y1]`, optionally with rounded corners."""
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    radius = max(0, min(radius, (abs(x1 - x0) + 1) // 2, (abs(y1 - y0) + 1) // 2))
    if radius == 0:
        _blend_segment(dst[top : bottom + 1, left : right + 1], color)
        return
    bx0, bx1 = min(x0, x1), max(x0, x1)
    by0, by1 = min(y0, y1), max(y0, y1)
    for yy in range(top, bottom + 1):
        dy = max(by0 + radius - yy, yy - (by1 - radius), 0)
        inset = 0
        if dy > 0:
            inset = radius - int(np.floor(np.sqrt(max(0, radius * radius - dy * dy))))
        draw_hline(dst, max(left, bx0 + inset), min(right, bx1 - inset), yy, color)


def _blend_segment(segment: np.ndarray, color: Colour) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[..., :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[..., :3].astype(np.float32) * inv).astype(np.uint8)
    segment[..., 3] = np.maximum(segment[..., 3], color[3])
