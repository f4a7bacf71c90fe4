"""Chart rendering to SVG and PNG: layout boxes, nice axis ranges and per-chart geometry."""

from chartbox.axis import XAxisOption, YAxisOption
from chartbox.chart import (
    ChartOption,
    bar_render,
    funnel_render,
    horizontal_bar_render,
    line_render,
    pie_render,
    radar_render,
    render,
)
from chartbox.charts import (
    BarChart,
    BarChartOption,
    FunnelChart,
    FunnelChartOption,
    HorizontalBarChart,
    HorizontalBarChartOption,
    LineChart,
    LineChartOption,
    PieChart,
    PieChartOption,
    RadarChart,
    RadarChartOption,
    RadarIndicator,
    new_radar_indicators,
)
from chartbox.config import ChartDefaults
from chartbox.errors import ChartConfigError, ChartError
from chartbox.geometry import Box, Point
from chartbox.legend import LegendOption
from chartbox.painter import Painter
from chartbox.range import AxisRange, new_range
from chartbox.registry import Registry, default_registry
from chartbox.series import (
    Series,
    SeriesData,
    SeriesLabel,
    SeriesMarkData,
    SeriesMarkLine,
    SeriesMarkPoint,
    new_funnel_series_list,
    new_pie_series_list,
    new_series_data,
    new_series_list,
)
from chartbox.style import Color, Style, parse_color
from chartbox.table import TableCell, TableChart, TableChartOption, render_table, table_render
from chartbox.theme import Theme
from chartbox.title import TitleOption

__all__ = [
    "AxisRange",
    "BarChart",
    "BarChartOption",
    "Box",
    "ChartConfigError",
    "ChartDefaults",
    "ChartError",
    "ChartOption",
    "Color",
    "FunnelChart",
    "FunnelChartOption",
    "HorizontalBarChart",
    "HorizontalBarChartOption",
    "LegendOption",
    "LineChart",
    "LineChartOption",
    "Painter",
    "PieChart",
    "PieChartOption",
    "Point",
    "RadarChart",
    "RadarChartOption",
    "RadarIndicator",
    "Registry",
    "Series",
    "SeriesData",
    "SeriesLabel",
    "SeriesMarkData",
    "SeriesMarkLine",
    "SeriesMarkPoint",
    "Style",
    "TableCell",
    "TableChart",
    "TableChartOption",
    "Theme",
    "TitleOption",
    "XAxisOption",
    "YAxisOption",
    "bar_render",
    "default_registry",
    "funnel_render",
    "horizontal_bar_render",
    "line_render",
    "new_funnel_series_list",
    "new_pie_series_list",
    "new_radar_indicators",
    "new_range",
    "new_series_data",
    "new_series_list",
    "parse_color",
    "pie_render",
    "radar_render",
    "render",
    "render_table",
    "table_render",
]
