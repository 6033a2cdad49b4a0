from typing import Union

from .bar import BarChart, BarPoint
from .base import CHART_TYPES, Chart, ChartType, chart_type_named, legend_entries, register_chart_type
from .xyscatter import XYPoint, XYScatter

Charts = Union[Chart[XYScatter], Chart[BarChart]]

__all__ = [
    "BarChart",
    "BarPoint",
    "CHART_TYPES",
    "Chart",
    "ChartType",
    "Charts",
    "XYPoint",
    "XYScatter",
    "chart_type_named",
    "legend_entries",
    "register_chart_type",
]
