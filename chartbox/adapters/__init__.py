from chartbox.adapters.echarts import echarts_to_chart_option, parse_echarts_options, render_echarts

__all__ = [
    "echarts_to_chart_option",
    "parse_echarts_options",
    "render_echarts",
]
