from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

from chartcore.colors import Colour, resolve_colours
from chartcore.context import DrawingContext, saved_state
from chartcore.geometry import Point, Rect
from chartcore.layout.grid import GridLayout, TextPlacement
from chartcore.layout.legend import LegendEntry, draw_legend, layout_legend
from chartcore.series import ChartInfo, FontSpec
from chartcore.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)

C = TypeVar("C", bound="ChartType")

CHART_TYPES: dict[str, type] = {}


class ChartType(Protocol):
    """One chart family. Implementations draw their datasets into `area`.

    `render_datasets` returns the plot rectangle it drew into, which is where
    the shared legend is anchored. Failures are raised as `ChartError`s.
    """

    name: str

    def render_datasets(
        self,
        info: ChartInfo[Any],
        area: Rect,
        ctx: DrawingContext,
        *,
        style: ChartStyle = DEFAULT_STYLE,
    ) -> Rect:
        ...


def register_chart_type(name: str) -> Callable[[type], type]:
    def decorator(cls: type) -> type:
        if name in CHART_TYPES and CHART_TYPES[name] is not cls:
            raise ValueError(f"chart type {name!r} is already registered")
        cls.name = name
        CHART_TYPES[name] = cls
        return cls

    return decorator


def chart_type_named(name: str) -> type:
    try:
        return CHART_TYPES[name]
    except KeyError:
        raise ValueError(f"unknown chart type: {name} (known: {', '.join(sorted(CHART_TYPES))})") from None


@dataclass(frozen=True)
class Chart(Generic[C]):
    chart_type: C
    info: ChartInfo[Any]
    style: ChartStyle = DEFAULT_STYLE

    @property
    def kind(self) -> str:
        return self.chart_type.name

    def render(self, area: Rect, ctx: DrawingContext) -> Rect:
        """Draw background, caption, datasets and legend into `area`."""
        info = self.info
        font = ctx.resolve_font(info.resolved_font())
        margins = info.resolved_margins()
        LOGGER.debug("rendering %s chart into %s", self.kind, area)
        with saved_state(ctx):
            ctx.fill_rect(area, self.style.background)
            plot_area = area
            if info.caption:
                caption_font = font.scaled(1.25)
                _, h = ctx.text_size(info.caption, caption_font)
                ctx.draw_text(
                    Point(area.center.x, area.y0 + margins.y),
                    info.caption,
                    caption_font,
                    self.style.text,
                    h_align="center",
                    v_align="top",
                )
                plot_area = area.inset(0.0, h + margins.y, 0.0, 0.0)

            plot = self.chart_type.render_datasets(info, plot_area, ctx, style=self.style)

            if info.legend:
                entries = legend_entries(info)
                legend = layout_legend(entries, plot, ctx, font, info.legend_corner)
                if legend is not None:
                    draw_legend(ctx, legend, background=self.style.legend_background, text_colour=self.style.text)
        return plot


def dataset_colours(info: ChartInfo[Any]) -> list[Colour]:
    return resolve_colours([ds.colour for ds in info.datasets])


def legend_entries(info: ChartInfo[Any]) -> list[LegendEntry]:
    colours = dataset_colours(info)
    return [LegendEntry(ds.name, colour) for ds, colour in zip(info.datasets, colours, strict=True) if ds.name]


def draw_grid(ctx: DrawingContext, grid: GridLayout, style: ChartStyle) -> None:
    for seg in grid.grid_lines:
        ctx.draw_line(seg.p0, seg.p1, style.grid, style.grid_width)


def draw_axes(ctx: DrawingContext, grid: GridLayout, style: ChartStyle) -> None:
    for seg in grid.axis_lines:
        ctx.draw_line(seg.p0, seg.p1, style.axis, style.axis_width)


def draw_labels(ctx: DrawingContext, labels: tuple[TextPlacement, ...], font: FontSpec, style: ChartStyle) -> None:
    for label in labels:
        ctx.draw_text(
            label.position,
            label.content,
            font,
            style.text,
            h_align=label.h_align,
            v_align=label.v_align,
            rotation=label.rotation,
        )
