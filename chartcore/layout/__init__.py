from .bar import BarBlock, BarLayout, layout_bars
from .grid import GridLayout, Segment, TextPlacement, layout_grid
from .legend import LegendEntry, LegendLayout, draw_legend, layout_legend
from .scatter import ScatterLayout, fit_transform, layout_scatter

__all__ = [
    "BarBlock",
    "BarLayout",
    "GridLayout",
    "LegendEntry",
    "LegendLayout",
    "ScatterLayout",
    "Segment",
    "TextPlacement",
    "draw_legend",
    "fit_transform",
    "layout_bars",
    "layout_grid",
    "layout_legend",
    "layout_scatter",
]
