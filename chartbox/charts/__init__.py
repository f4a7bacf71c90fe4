from chartbox.charts.bar import BarChart, BarChartOption, BarLayout, bar_layout
from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.charts.funnel import FunnelChart, FunnelChartOption, FunnelTier, funnel_tiers
from chartbox.charts.horizontal_bar import HorizontalBarChart, HorizontalBarChartOption
from chartbox.charts.line import LineChart, LineChartOption
from chartbox.charts.pie import PieChart, PieChartOption, PieSector, pie_sectors
from chartbox.charts.radar import RadarChart, RadarChartOption, RadarIndicator, new_radar_indicators

__all__ = [
    "BarChart",
    "BarChartOption",
    "BarLayout",
    "Chart",
    "ChartBaseOption",
    "FunnelChart",
    "FunnelChartOption",
    "FunnelTier",
    "HorizontalBarChart",
    "HorizontalBarChartOption",
    "LineChart",
    "LineChartOption",
    "PieChart",
    "PieChartOption",
    "PieSector",
    "RadarChart",
    "RadarChartOption",
    "RadarIndicator",
    "bar_layout",
    "funnel_tiers",
    "new_radar_indicators",
    "pie_sectors",
]
