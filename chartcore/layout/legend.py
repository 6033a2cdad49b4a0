from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chartcore.colors import Colour, with_alpha
from chartcore.context import DrawingContext, saved_state
from chartcore.geometry import Affine, Point, Rect
from chartcore.series import FontSpec, LegendCorner


LEGEND_INSET_RATIO = 0.1
SWATCH_ALPHA = 0.35
BACKGROUND_ALPHA = 0.6


@dataclass(frozen=True)
class LegendEntry:
    label: str
    colour: Colour


@dataclass(frozen=True)
class LegendRow:
    entry: LegendEntry
    swatch: Rect
    dot: Rect
    text_at: Point
    height: float


@dataclass(frozen=True)
class LegendLayout:
    """Legend geometry; rows are local to `origin`, the box's top-left corner."""

    origin: Point
    box: Rect
    rows: tuple[LegendRow, ...]
    pad: float
    font: FontSpec


def layout_legend(
    entries: Sequence[LegendEntry],
    plot: Rect,
    ctx: DrawingContext,
    font: FontSpec,
    corner: LegendCorner = "upper-right",
) -> LegendLayout | None:
    """Stack one swatch + label row per entry and anchor the box near `corner`."""
    if not entries:
        return None
    pad = max(4.0, font.size * 0.5)
    gap = max(3.0, font.size * 0.4)

    rows: list[LegendRow] = []
    y = pad
    text_w = 0.0
    for entry in entries:
        w, h = ctx.text_size(entry.label, font)
        side = h
        swatch = Rect.from_size(pad, y, side, side)
        dot_r = side * 0.25
        c = swatch.center
        dot = Rect(c.x - dot_r, c.y - dot_r, c.x + dot_r, c.y + dot_r)
        rows.append(LegendRow(entry=entry, swatch=swatch, dot=dot, text_at=Point(pad + side + gap, y), height=h))
        text_w = max(text_w, w)
        y += h + gap

    swatch_w = max(row.swatch.width for row in rows)
    box = Rect(0.0, 0.0, pad + swatch_w + gap + text_w + pad, y - gap + pad)
    origin = _corner_origin(plot, box, corner)
    return LegendLayout(origin=origin, box=box, rows=tuple(rows), pad=pad, font=font)


def draw_legend(
    ctx: DrawingContext,
    layout: LegendLayout,
    *,
    background: Colour,
    text_colour: Colour,
) -> None:
    with saved_state(ctx, Affine.translation(layout.origin.x, layout.origin.y)):
        ctx.fill_rect(layout.box, with_alpha(background, BACKGROUND_ALPHA), corner_radius=layout.pad / 2.0)
        for row in layout.rows:
            colour = row.entry.colour
            ctx.fill_rect(row.swatch, with_alpha(colour, SWATCH_ALPHA), corner_radius=row.swatch.width * 0.25)
            ctx.fill_rect(row.dot, colour, corner_radius=row.dot.width / 2.0)
            ctx.draw_text(row.text_at, row.entry.label, layout.font, text_colour)


def _corner_origin(plot: Rect, box: Rect, corner: LegendCorner) -> Point:
    inset_x = plot.width * LEGEND_INSET_RATIO
    inset_y = plot.height * LEGEND_INSET_RATIO
    if corner.endswith("right"):
        x = plot.x1 - inset_x - box.width
    else:
        x = plot.x0 + inset_x
    if corner.startswith("upper"):
        y = plot.y0 + inset_y
    else:
        y = plot.y1 - inset_y - box.height
    return Point(x, y)
