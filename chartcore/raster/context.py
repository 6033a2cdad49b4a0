from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from chartcore.colors import Colour
from chartcore.errors import DrawError
from chartcore.primitives import DrawingPrimitive, FilledRect, Line, StrokedPath, Text
from chartcore.raster.canvas import fill_rect, new_canvas
from chartcore.raster.draw_lines import draw_polyline, draw_segment
from chartcore.raster.draw_text import draw_text
from chartcore.recording import RecordingContext


LOGGER = logging.getLogger(__name__)


class RasterContext(RecordingContext):
    """Recording context that also rasterizes every primitive onto an RGBA canvas."""

    def __init__(self, width: int, height: int, background: Colour = (0, 0, 0, 0)) -> None:
        super().__init__()
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.canvas = new_canvas(self.width, self.height, background)

    def reset(self) -> None:
        super().reset()
        self.canvas = new_canvas(self.width, self.height, self.background)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.canvas.copy())

    def emit(self, primitive: DrawingPrimitive) -> None:
        super().emit(primitive)
        try:
            self._rasterize(primitive)
        except (OSError, ValueError) as exc:
            raise DrawError(f"failed to draw {type(primitive).__name__}: {exc}") from exc

    def _rasterize(self, primitive: DrawingPrimitive) -> None:
        if isinstance(primitive, Line):
            draw_segment(
                self.canvas,
                int(round(primitive.p0.x)),
                int(round(primitive.p0.y)),
                int(round(primitive.p1.x)),
                int(round(primitive.p1.y)),
                color=primitive.colour,
                width=_pixel_width(primitive.width),
            )
        elif isinstance(primitive, FilledRect):
            rect = primitive.rect
            if rect.width <= 0 or rect.height <= 0:
                return
            left = int(round(rect.x0))
            top = int(round(rect.y0))
            # Pixel boxes are inclusive.
            right = max(left, int(round(rect.x1)) - 1)
            bottom = max(top, int(round(rect.y1)) - 1)
            fill_rect(self.canvas, left, top, right, bottom, primitive.colour, radius=int(round(primitive.corner_radius)))
        elif isinstance(primitive, StrokedPath):
            if not primitive.points:
                return
            xs = np.rint([p.x for p in primitive.points]).astype(np.int64)
            ys = np.rint([p.y for p in primitive.points]).astype(np.int64)
            draw_polyline(self.canvas, xs, ys, primitive.colour, width=_pixel_width(primitive.thickness))
        elif isinstance(primitive, Text):
            draw_text(self.canvas, primitive)
        else:
            LOGGER.warning("unsupported primitive %r", type(primitive).__name__)


def _pixel_width(width: float) -> int:
    return max(1, int(round(width)))
