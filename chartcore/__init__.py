from chartcore.api import render_chart, render_image, render_primitives
from chartcore.charts import BarChart, Chart, Charts, ChartType, XYScatter, chart_type_named, register_chart_type
from chartcore.context import DrawingContext, saved_state
from chartcore.errors import (
    ChartError,
    DrawError,
    EmptyDatasetError,
    FontLoadingError,
    InvalidDatasetsError,
    NotEnoughSpaceError,
)
from chartcore.geometry import Affine, Point, Rect, ceil_mul, floor_mul
from chartcore.raster import RasterContext
from chartcore.recording import RecordingContext
from chartcore.series import XY, ChartInfo, Dataset, FontSpec
from chartcore.steps import StepLabel, decide_steps, step_adjust
from chartcore.style import DEFAULT_STYLE, ChartStyle, style_with_overrides

__all__ = [
    "Affine",
    "BarChart",
    "Chart",
    "ChartError",
    "ChartInfo",
    "ChartStyle",
    "ChartType",
    "Charts",
    "DEFAULT_STYLE",
    "Dataset",
    "DrawError",
    "DrawingContext",
    "EmptyDatasetError",
    "FontLoadingError",
    "FontSpec",
    "InvalidDatasetsError",
    "NotEnoughSpaceError",
    "Point",
    "RasterContext",
    "RecordingContext",
    "Rect",
    "StepLabel",
    "XY",
    "XYScatter",
    "ceil_mul",
    "chart_type_named",
    "decide_steps",
    "floor_mul",
    "register_chart_type",
    "render_chart",
    "render_image",
    "render_primitives",
    "saved_state",
    "style_with_overrides",
]
