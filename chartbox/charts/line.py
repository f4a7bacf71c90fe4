from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.config import DEFAULT_AREA_OPACITY, DEFAULT_STROKE_WIDTH
from chartbox.geometry import Box, Point, auto_divide
from chartbox.label import LabelValue, SeriesLabelPainter
from chartbox.layout import DefaultRenderResult
from chartbox.mark import MarkLinePainter, MarkLineRenderOption, MarkPointPainter, MarkPointRenderOption
from chartbox.series import CHART_TYPE_LINE, Series, series_names
from chartbox.style import WHITE, Style


@dataclass
class LineChartOption(ChartBaseOption):
    symbol_show: bool = True
    stroke_width: float = 0.0
    fill_area: bool = False
    opacity: int = 0
    smooth: bool = False


def line_x_values(width: int, category_count: int, boundary_gap: bool) -> list[int]:
    """X pixel of every category: slot centres with a boundary gap, tick positions without."""
    divide_count = category_count if boundary_gap else category_count - 1
    values = auto_divide(width, max(divide_count, 1))
    if boundary_gap:
        return [(values[i] + values[i + 1]) >> 1 for i in range(len(values) - 1)]
    return values


class LineChart(Chart):
    chart_type = CHART_TYPE_LINE

    option: LineChartOption

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        opt = self.option
        p = result.series_painter
        theme = self.theme
        boundary_gap = opt.x_axis.boundary_gap is not False
        category_count = len(opt.x_axis.data) or max((len(s.data) for s in series_list), default=1)
        x_values = line_x_values(p.width, category_count, boundary_gap)
        stroke_width = opt.stroke_width or DEFAULT_STROKE_WIDTH
        names = series_names(series_list)

        mark_points = MarkPointPainter(p)
        mark_lines = MarkLinePainter(p)
        overlays = [mark_points, mark_lines]
        for index, series in enumerate(series_list):
            series_color = theme.series_color(series.color_index)
            drawing_style = Style(
                stroke_color=series_color,
                stroke_width=stroke_width,
                stroke_dash_array=series.style.stroke_dash_array or None,
            )
            y_range = result.axis_ranges[series.axis_index]
            label_painter = None
            if series.label.show:
                label_painter = SeriesLabelPainter(p, names, series.label, theme=theme)
                overlays.append(label_painter)

            points: list[Point | None] = []
            for i, item in enumerate(series.data):
                if i >= len(x_values) or item.value is None:
                    points.append(None)
                    continue
                point = Point(x_values[i], y_range.get_rest_height(item.value))
                points.append(point)
                if label_painter is not None:
                    label_painter.add(
                        LabelValue(
                            index=index,
                            value=item.value,
                            x=point.x,
                            y=point.y,
                            rotation=series.label.rotation,
                            font_size=series.label.font_size,
                            offset=series.label.offset,
                        )
                    )

            present = [point for point in points if point is not None]
            if opt.fill_area and present:
                bottom_y = y_range.get_rest_height(y_range.min)
                area = present + [Point(present[-1].x, bottom_y), Point(present[0].x, bottom_y), present[0]]
                p.set_drawing_style(Style(fill_color=series_color.with_alpha(opt.opacity or DEFAULT_AREA_OPACITY)))
                p.fill_area(area)

            p.set_drawing_style(drawing_style)
            if opt.smooth:
                p.smooth_line_stroke(points)
            else:
                p.line_stroke(points)

            if opt.symbol_show:
                dot_fill = series_color if theme.is_dark else WHITE
                dot_style = Style(fill_color=dot_fill, stroke_width=1.0, stroke_dash_array=())
                p.set_drawing_style(drawing_style.merge(dot_style))
                p.dots(points)

            mark_points.add(MarkPointRenderOption(fill_color=series_color, series=series, points=points))
            mark_lines.add(
                MarkLineRenderOption(
                    fill_color=series_color,
                    font_color=theme.text_color,
                    stroke_color=series_color,
                    series=series,
                    range=y_range,
                )
            )

        for overlay in overlays:
            overlay.render()
        return p.box
