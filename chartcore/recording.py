from __future__ import annotations

import logging
from typing import Sequence

from chartcore import fonts
from chartcore.colors import Colour
from chartcore.errors import DrawError
from chartcore.geometry import Affine, Point, Rect
from chartcore.primitives import DrawingPrimitive, FilledRect, HAlign, Line, StrokedPath, Text, VAlign
from chartcore.series import FontSpec


LOGGER = logging.getLogger(__name__)


class RecordingContext:
    """Drawing context that records primitives in device space.

    Text is measured with Pillow fonts so layout sees the same extents a
    raster backend would draw.
    """

    def __init__(self) -> None:
        self.primitives: list[DrawingPrimitive] = []
        self._transform = Affine.identity()
        self._stack: list[Affine] = []

    @property
    def current_transform(self) -> Affine:
        return self._transform

    @property
    def depth(self) -> int:
        return len(self._stack)

    def reset(self) -> None:
        if self._stack:
            LOGGER.warning("resetting context with %d unrestored states", len(self._stack))
        self.primitives = []
        self._transform = Affine.identity()
        self._stack = []

    def resolve_font(self, spec: FontSpec) -> FontSpec:
        fonts.load_font(spec)
        return spec

    def text_size(self, text: str, font: FontSpec, rotation: float = 0.0) -> tuple[float, float]:
        return fonts.text_size(text, font, rotation)

    def draw_line(self, p0: Point, p1: Point, colour: Colour, width: float = 1.0) -> None:
        t = self._transform
        self.emit(Line(t.apply(p0), t.apply(p1), colour, width * t.scale_factor()))

    def fill_rect(self, rect: Rect, colour: Colour, corner_radius: float = 0.0) -> None:
        t = self._transform
        self.emit(FilledRect(t.apply_rect(rect), colour, corner_radius * t.scale_factor()))

    def stroke_path(self, points: Sequence[Point], colour: Colour, thickness: float = 1.0) -> None:
        t = self._transform
        self.emit(StrokedPath(tuple(t.apply(p) for p in points), colour, thickness * t.scale_factor()))

    def draw_text(
        self,
        position: Point,
        content: str,
        font: FontSpec,
        colour: Colour,
        *,
        h_align: HAlign = "left",
        v_align: VAlign = "top",
        rotation: float = 0.0,
    ) -> tuple[float, float]:
        t = self._transform
        scale = t.scale_factor()
        device_font = font if scale == 1.0 else font.scaled(scale)
        device_rotation = rotation + t.rotation_degrees
        size = self.text_size(content, device_font, device_rotation)
        self.emit(Text(t.apply(position), content, h_align, v_align, device_rotation, device_font, colour))
        return size

    def save(self) -> None:
        self._stack.append(self._transform)

    def restore(self) -> None:
        if not self._stack:
            raise DrawError("restore() without matching save()")
        self._transform = self._stack.pop()

    def transform(self, affine: Affine) -> None:
        self._transform = affine.then(self._transform)

    def emit(self, primitive: DrawingPrimitive) -> None:
        self.primitives.append(primitive)
