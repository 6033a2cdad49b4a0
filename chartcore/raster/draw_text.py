from __future__ import annotations

import numpy as np
from PIL import Image

from chartcore import fonts
from chartcore.colors import Colour
from chartcore.geometry import Affine, Point
from chartcore.primitives import Text, aligned_origin


def draw_text(dst: np.ndarray, text: Text) -> None:
    """Blend `text` into `dst`, rotated about its anchor point."""
    if not text.content:
        return
    mask = fonts.render_mask(text.content, text.font)
    h, w = mask.shape
    origin = aligned_origin(text.position, (float(w), float(h)), text.h_align, text.v_align)
    rotation = text.rotation % 360.0
    if rotation == 0.0:
        _blend_mask(dst, int(round(origin.x)), int(round(origin.y)), mask, text.colour)
        return

    # Rotate the unrotated box corners about the anchor to find where the rotated mask lands.
    spin = Affine.translation(-text.position.x, -text.position.y).then(Affine.rotation(rotation)).then(
        Affine.translation(text.position.x, text.position.y)
    )
    corners = [
        spin.apply(Point(origin.x + dx, origin.y + dy))
        for dx, dy in ((0.0, 0.0), (w, 0.0), (0.0, h), (w, h))
    ]
    left = min(c.x for c in corners)
    top = min(c.y for c in corners)
    _blend_mask(dst, int(round(left)), int(round(top)), _rotate_mask(mask, rotation), text.colour)


def _rotate_mask(mask: np.ndarray, rotation: float) -> np.ndarray:
    if rotation % 90.0 == 0.0:
        turns = int(rotation // 90.0) % 4
        return np.rot90(mask, k=turns) if turns else mask
    image = Image.fromarray(mask)
    rotated = image.rotate(rotation, resample=Image.Resampling.BILINEAR, expand=True)
    return np.asarray(rotated, dtype=np.uint8)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: Colour) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)
