from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from chartcore.charts.base import dataset_colours, draw_axes, draw_grid, draw_labels, register_chart_type
from chartcore.context import DrawingContext
from chartcore.errors import EmptyDatasetError, InvalidDatasetsError
from chartcore.geometry import Point, Rect, ceil_mul, floor_mul
from chartcore.layout.grid import DEFAULT_GRID, label_gutters, layout_grid, place_axis_titles, should_rotate_x_labels
from chartcore.layout.scatter import layout_scatter, points_to_array
from chartcore.series import XY, ChartInfo
from chartcore.steps import check_step_space, decide_steps, fit_to_steps, nice_step, step_count
from chartcore.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)

XYPoint = XY[float]


@register_chart_type("xy-scatter")
@dataclass(frozen=True)
class XYScatter:
    """Line/scatter chart of `XY` points; each dataset is one polyline."""

    axis: XY[str] = XY("", "")
    grid: XY[bool] | None = None
    steps: XY[float] | None = None
    target_ticks: int = 6

    def __post_init__(self) -> None:
        if self.steps is not None and (self.steps.x <= 0 or self.steps.y <= 0):
            raise ValueError("XYScatter steps must be > 0")
        if self.target_ticks < 2:
            raise ValueError("XYScatter target_ticks must be >= 2")

    def render_datasets(
        self,
        info: ChartInfo[XYPoint],
        area: Rect,
        ctx: DrawingContext,
        *,
        style: ChartStyle = DEFAULT_STYLE,
    ) -> Rect:
        font = info.resolved_font()
        margins = info.resolved_margins()
        ranges = _data_ranges(info.datasets)
        steps = self._steps(ranges)
        x_range, y_range = _widen_degenerate(ranges, steps)

        counts = XY(step_count(*x_range, steps.x), step_count(*y_range, steps.y))
        # Fail before building one label per tick.
        check_step_space(area, counts)
        x_texts = [s.text for s in decide_steps(1.0, *x_range, steps.x)]
        y_texts = [s.text for s in decide_steps(1.0, *y_range, steps.y)]
        titles = {"x_title": self.axis.x or None, "y_title": self.axis.y or None}

        gutters = label_gutters(ctx, font, x_texts, y_texts, margins, **titles)
        available = area.inset(gutters.left, gutters.top + margins.y, gutters.right + margins.x, gutters.bottom)
        rotate = should_rotate_x_labels(ctx, font, x_texts, available.width / counts.x)
        if rotate:
            gutters = label_gutters(ctx, font, x_texts, y_texts, margins, rotate_x_labels=True, **titles)
            available = area.inset(gutters.left, gutters.top + margins.y, gutters.right + margins.x, gutters.bottom)
        plot = fit_to_steps(available, counts)
        LOGGER.debug("xy-scatter plot=%s steps=%s counts=%s", plot, steps, counts)

        x_steps = decide_steps(plot.width, *x_range, steps.x)
        y_steps = decide_steps(plot.height, *y_range, steps.y)
        grid = layout_grid(plot, x_steps, y_steps, self.grid or DEFAULT_GRID, margins, rotate_x_labels=rotate)

        lo_x = floor_mul(x_range[0], steps.x)
        lo_y = floor_mul(y_range[0], steps.y)
        frame = Rect(0.0, 0.0, ceil_mul(x_range[1], steps.x) - lo_x, ceil_mul(y_range[1], steps.y) - lo_y)
        shifted = [[XY(p.x - lo_x, p.y - lo_y) for p in ds.values] for ds in info.datasets]
        scatter = layout_scatter(shifted, plot, frame)

        draw_grid(ctx, grid, style)
        for ds, path, colour in zip(info.datasets, scatter.paths, dataset_colours(info), strict=True):
            points = [Point(float(x), float(y)) for x, y in path]
            if len(points) == 1:
                r = ds.thickness * 1.5
                p = points[0]
                ctx.fill_rect(Rect(p.x - r, p.y - r, p.x + r, p.y + r), colour, corner_radius=r)
            elif points:
                ctx.stroke_path(points, colour, ds.thickness)
        draw_axes(ctx, grid, style)
        draw_labels(ctx, grid.labels, font, style)
        draw_labels(ctx, place_axis_titles(plot, gutters, margins, **titles), font, style)
        return plot

    def _steps(self, ranges: tuple[tuple[float, float], tuple[float, float]]) -> XY[float]:
        if self.steps is not None:
            return self.steps
        (x0, x1), (y0, y1) = ranges
        return XY(nice_step(x0, x1, self.target_ticks), nice_step(y0, y1, self.target_ticks))


def _data_ranges(datasets: Sequence) -> tuple[tuple[float, float], tuple[float, float]]:
    arrays = [points_to_array(ds.values) for ds in datasets]
    arrays = [arr for arr in arrays if arr.size > 0]
    if not arrays:
        raise EmptyDatasetError()
    stacked = np.vstack(arrays)
    if not np.all(np.isfinite(stacked)):
        raise InvalidDatasetsError("datasets contain non-finite points")
    mins = stacked.min(axis=0)
    maxs = stacked.max(axis=0)
    return (float(mins[0]), float(maxs[0])), (float(mins[1]), float(maxs[1]))


def _widen_degenerate(
    ranges: tuple[tuple[float, float], tuple[float, float]],
    steps: XY[float],
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Give an axis whose rounded range is empty one step of extent."""
    (x0, x1), (y0, y1) = ranges
    if floor_mul(x0, steps.x) == ceil_mul(x1, steps.x):
        x1 = x1 + steps.x
    if floor_mul(y0, steps.y) == ceil_mul(y1, steps.y):
        y1 = y1 + steps.y
    return (x0, x1), (y0, y1)
