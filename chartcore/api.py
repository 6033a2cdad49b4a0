from __future__ import annotations

from typing import Any

from PIL import Image

from chartcore.charts.base import Chart
from chartcore.context import DrawingContext
from chartcore.geometry import Rect
from chartcore.primitives import DrawingPrimitive
from chartcore.raster.context import RasterContext
from chartcore.recording import RecordingContext


def render_chart(chart: Chart[Any], area: Rect, ctx: DrawingContext) -> Rect:
    return chart.render(area, ctx)


def render_primitives(chart: Chart[Any], width: float, height: float) -> list[DrawingPrimitive]:
    """Render into a fresh `RecordingContext` and return what was drawn, in device space."""
    _check_size(width, height)
    ctx = RecordingContext()
    chart.render(Rect(0.0, 0.0, float(width), float(height)), ctx)
    return list(ctx.primitives)


def render_image(chart: Chart[Any], width: int, height: int) -> Image.Image:
    _check_size(width, height)
    ctx = RasterContext(int(width), int(height), background=chart.style.background)
    chart.render(Rect(0.0, 0.0, float(width), float(height)), ctx)
    return ctx.to_image()


def _check_size(width: float, height: float) -> None:
    if width <= 0:
        raise ValueError("width must be > 0")
    if height <= 0:
        raise ValueError("height must be > 0")
