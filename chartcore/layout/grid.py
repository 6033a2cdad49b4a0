from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chartcore.context import DrawingContext
from chartcore.geometry import Point, Rect
from chartcore.primitives import HAlign, VAlign
from chartcore.series import XY, FontSpec
from chartcore.steps import StepLabel


DEFAULT_GRID = XY(False, True)
ROTATED_LABEL_DEG = 90.0


@dataclass(frozen=True)
class Segment:
    p0: Point
    p1: Point


@dataclass(frozen=True)
class TextPlacement:
    position: Point
    content: str
    h_align: HAlign
    v_align: VAlign
    rotation: float = 0.0


@dataclass(frozen=True)
class GridLayout:
    grid_lines: tuple[Segment, ...]
    axis_lines: tuple[Segment, ...]
    labels: tuple[TextPlacement, ...]


@dataclass(frozen=True)
class Gutters:
    left: float
    top: float
    right: float
    bottom: float
    x_label_height: float
    y_label_width: float


def layout_grid(
    plot: Rect,
    x_steps: Sequence[StepLabel],
    y_steps: Sequence[StepLabel],
    grid: XY[bool] = DEFAULT_GRID,
    margins: XY[float] = XY(5.0, 10.0),
    *,
    rotate_x_labels: bool = False,
) -> GridLayout:
    """Grid lines, axis lines and tick labels for a plot rectangle.

    x offsets run right from `plot.x0`; y offsets run up from `plot.y1`.
    """
    lines: list[Segment] = []
    labels: list[TextPlacement] = []
    for step in x_steps:
        x = plot.x0 + step.offset
        if grid.x:
            lines.append(Segment(Point(x, plot.y0), Point(x, plot.y1)))
        labels.append(x_label(Point(x, plot.y1 + margins.y), step.text, rotate_x_labels))
    for step in y_steps:
        y = plot.y1 - step.offset
        if grid.y:
            lines.append(Segment(Point(plot.x0, y), Point(plot.x1, y)))
        labels.append(TextPlacement(Point(plot.x0 - margins.x, y), step.text, "right", "middle"))
    axes = (
        Segment(Point(plot.x0, plot.y1), Point(plot.x1, plot.y1)),
        Segment(Point(plot.x0, plot.y0), Point(plot.x0, plot.y1)),
    )
    return GridLayout(grid_lines=tuple(lines), axis_lines=axes, labels=tuple(labels))


def x_label(position: Point, text: str, rotate: bool) -> TextPlacement:
    if rotate:
        # Rotated labels hang below the axis, reading bottom to top.
        return TextPlacement(position, text, "right", "middle", ROTATED_LABEL_DEG)
    return TextPlacement(position, text, "center", "top")


def category_labels(
    plot: Rect,
    centers: Sequence[float],
    names: Sequence[str],
    margins: XY[float],
    *,
    rotate: bool = False,
) -> tuple[TextPlacement, ...]:
    return tuple(x_label(Point(x, plot.y1 + margins.y), name, rotate) for x, name in zip(centers, names, strict=True))


def should_rotate_x_labels(ctx: DrawingContext, font: FontSpec, texts: Sequence[str], slot_width: float) -> bool:
    """Rotate when the widest label would run into its neighbour."""
    if len(texts) < 2:
        return False
    widest = max(ctx.text_size(t, font)[0] for t in texts)
    return widest > slot_width * 0.9


def label_gutters(
    ctx: DrawingContext,
    font: FontSpec,
    x_texts: Sequence[str],
    y_texts: Sequence[str],
    margins: XY[float],
    *,
    x_title: str | None = None,
    y_title: str | None = None,
    rotate_x_labels: bool = False,
) -> Gutters:
    """Space around the plot rectangle needed for tick labels and axis titles."""
    x_rotation = ROTATED_LABEL_DEG if rotate_x_labels else 0.0
    x_sizes = [ctx.text_size(t, font, x_rotation) for t in x_texts]
    y_sizes = [ctx.text_size(t, font) for t in y_texts]
    x_label_h = max((h for _, h in x_sizes), default=0.0)
    y_label_w = max((w for w, _ in y_sizes), default=0.0)

    left = margins.x + y_label_w
    bottom = margins.y + x_label_h
    if y_title:
        left += margins.x + ctx.text_size(y_title, font, ROTATED_LABEL_DEG)[0]
    if x_title:
        bottom += margins.y + ctx.text_size(x_title, font)[1]

    # Edge labels are centred on the plot edges; keep half of them inside.
    top = max((h for _, h in y_sizes), default=0.0) / 2.0
    right = 0.0 if rotate_x_labels else max((w for w, _ in x_sizes), default=0.0) / 2.0
    return Gutters(
        left=left,
        top=top,
        right=max(right, margins.x),
        bottom=bottom,
        x_label_height=x_label_h,
        y_label_width=y_label_w,
    )


def place_axis_titles(
    plot: Rect,
    gutters: Gutters,
    margins: XY[float],
    *,
    x_title: str | None = None,
    y_title: str | None = None,
) -> tuple[TextPlacement, ...]:
    out: list[TextPlacement] = []
    if x_title:
        y = plot.y1 + margins.y + gutters.x_label_height + margins.y
        out.append(TextPlacement(Point(plot.center.x, y), x_title, "center", "top"))
    if y_title:
        x = plot.x0 - margins.x - gutters.y_label_width - margins.x
        out.append(TextPlacement(Point(x, plot.center.y), y_title, "center", "bottom", ROTATED_LABEL_DEG))
    return tuple(out)
