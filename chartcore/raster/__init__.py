from .canvas import draw_hline, fill_rect, new_canvas
from .context import RasterContext
from .draw_lines import draw_polyline, draw_segment
from .draw_text import draw_text

__all__ = [
    "RasterContext",
    "draw_hline",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "fill_rect",
    "new_canvas",
]
