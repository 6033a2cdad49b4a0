from __future__ import annotations

import logging
from dataclasses import dataclass

from chartcore.charts.base import dataset_colours, draw_axes, draw_grid, draw_labels, register_chart_type
from chartcore.context import DrawingContext, saved_state
from chartcore.geometry import Affine, Rect, ceil_mul
from chartcore.layout.bar import global_max_value, layout_bars, validate_bar_values
from chartcore.layout.grid import (
    category_labels,
    label_gutters,
    layout_grid,
    place_axis_titles,
    should_rotate_x_labels,
)
from chartcore.series import XY, ChartInfo
from chartcore.steps import check_step_space, decide_steps, fit_to_steps, nice_step, step_count
from chartcore.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)

BarPoint = float


@register_chart_type("bar")
@dataclass(frozen=True)
class BarChart:
    """Grouped bars: one block per dataset inside each category."""

    categories: tuple[str, ...] = ()
    # Spacing between block groups
    spacing: float = 5.0
    # Horizontal value grid lines
    lines: bool = True
    # Label for the value axis
    axis: str | None = None
    step: float | None = None
    target_ticks: int = 6

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(str(c) for c in self.categories))
        if self.spacing < 0:
            raise ValueError("BarChart spacing must be >= 0")
        if self.step is not None and self.step <= 0:
            raise ValueError("BarChart step must be > 0")
        if self.target_ticks < 2:
            raise ValueError("BarChart target_ticks must be >= 2")

    def render_datasets(
        self,
        info: ChartInfo[BarPoint],
        area: Rect,
        ctx: DrawingContext,
        *,
        style: ChartStyle = DEFAULT_STYLE,
    ) -> Rect:
        font = info.resolved_font()
        margins = info.resolved_margins()
        values = [ds.values for ds in info.datasets]
        n, c = validate_bar_values(values, len(self.categories))

        raw_max = global_max_value(values)
        step = self.step if self.step is not None else nice_step(0.0, max(raw_max, 1.0), self.target_ticks)
        # All-zero data still gets one step of value axis.
        axis_max = raw_max if raw_max > 0 else step
        top = ceil_mul(axis_max, step)
        counts = XY(1, step_count(0.0, axis_max, step))
        check_step_space(area, counts)
        y_texts = [s.text for s in decide_steps(1.0, 0.0, axis_max, step)]
        names = list(self.categories)

        gutters = label_gutters(ctx, font, names, y_texts, margins, y_title=self.axis)
        available = area.inset(gutters.left, gutters.top + margins.y, margins.x, gutters.bottom)
        rotate = should_rotate_x_labels(ctx, font, names, available.width / c)
        if rotate:
            gutters = label_gutters(ctx, font, names, y_texts, margins, y_title=self.axis, rotate_x_labels=True)
            available = area.inset(gutters.left, gutters.top + margins.y, margins.x, gutters.bottom)
        plot = fit_to_steps(available, counts)

        y_steps = decide_steps(plot.height, 0.0, axis_max, step)
        grid = layout_grid(plot, (), y_steps, XY(False, self.lines), margins)
        bars = layout_bars(values, plot, self.spacing, categories=c, max_value=top)
        LOGGER.debug("bar plot=%s datasets=%d categories=%d top=%s", plot, n, c, top)

        draw_grid(ctx, grid, style)
        colours = dataset_colours(info)
        # Blocks grow up from the baseline; mirror the plot so they stand on its bottom edge.
        with saved_state(ctx, Affine.flip_y_within(plot)):
            for block in bars.blocks:
                if block.rect.height > 0:
                    ctx.fill_rect(block.rect, colours[block.dataset])
        draw_axes(ctx, grid, style)
        draw_labels(ctx, grid.labels, font, style)
        draw_labels(ctx, category_labels(plot, bars.category_centers, names, margins, rotate=rotate), font, style)
        draw_labels(ctx, place_axis_titles(plot, gutters, margins, y_title=self.axis), font, style)
        return plot
