from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.config import (
    DEFAULT_DOT_RADIUS,
    DEFAULT_STROKE_WIDTH,
    LABEL_FONT_SIZE,
    RADAR_AREA_OPACITY,
    RADAR_DIVIDE_COUNT,
)
from chartbox.errors import ChartConfigError
from chartbox.formatting import ftoa_with_digits
from chartbox.geometry import Box, Point, get_radius, polygon_point, polygon_point_angles, polygon_points
from chartbox.layout import DefaultRenderResult
from chartbox.series import CHART_TYPE_RADAR, Series
from chartbox.style import WHITE, Style

_INDICATOR_OFFSET = 5


@dataclass(frozen=True)
class RadarIndicator:
    name: str
    max: float = 0.0
    min: float = 0.0


def new_radar_indicators(names: Sequence[str], values: Sequence[float]) -> list[RadarIndicator]:
    if len(names) != len(values):
        raise ChartConfigError("radar indicator names and max values must have the same length")
    return [RadarIndicator(name=name, max=float(value)) for name, value in zip(names, values)]


def resolve_indicators(indicators: Sequence[RadarIndicator], series_list: Sequence[Series]) -> list[RadarIndicator]:
    """Fill a missing (``<= 0``) indicator max with the largest value plotted on it."""
    if len(indicators) < 3:
        raise ChartConfigError("The count of indicator should be >= 3")
    max_values = [0.0] * len(indicators)
    for series in series_list:
        for index, item in enumerate(series.data):
            if index < len(max_values) and item.value is not None and item.value > max_values[index]:
                max_values[index] = item.value
    resolved: list[RadarIndicator] = []
    for index, indicator in enumerate(indicators):
        if indicator.max <= 0:
            indicator = RadarIndicator(name=indicator.name, max=max_values[index], min=indicator.min)
        resolved.append(indicator)
    return resolved


def indicator_label_position(point: Point, center: Point, width: int, height: int) -> tuple[int, int]:
    """Text origin for an indicator name at polygon vertex ``point``, nudged away from the polygon."""
    x, y = point.x, point.y
    is_top = point.y < center.y
    if point.x == center.x:
        x -= width >> 1
        y += -height if is_top else height
    is_y_center = point.y == center.y
    if is_y_center:
        y += height >> 1
    if point.y != center.y:
        y += _INDICATOR_OFFSET
    if point.x > center.x and not is_y_center:
        x += _INDICATOR_OFFSET
    if point.x < center.x:
        x -= width + _INDICATOR_OFFSET
    return x, y


@dataclass
class RadarChartOption(ChartBaseOption):
    indicators: Sequence[RadarIndicator] = field(default_factory=tuple)


class RadarChart(Chart):
    chart_type = CHART_TYPE_RADAR
    axis_disabled = True

    option: RadarChartOption

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        p = result.series_painter
        theme = self.theme
        indicators = resolve_indicators(self.option.indicators, series_list)
        sides = len(indicators)
        radius_value = ""
        for series in series_list:
            if series.radius:
                radius_value = series.radius

        center = Point(p.width >> 1, p.height >> 1)
        radius = get_radius(float(min(p.width, p.height)), radius_value)
        divide_radius = float(int(radius / RADAR_DIVIDE_COUNT))
        radius = divide_radius * RADAR_DIVIDE_COUNT

        p.set_drawing_style(Style(stroke_color=theme.axis_split_line_color, stroke_width=1.0))
        for i in range(RADAR_DIVIDE_COUNT):
            p.polygon(center, divide_radius * (i + 1), sides)
        points = polygon_points(center, radius, sides)
        for point in points:
            p.move_to(center.x, center.y)
            p.line_to(point.x, point.y)
            p.stroke()

        p.override_text_style(Style(font_color=theme.text_color, font_size=LABEL_FONT_SIZE))
        for index, point in enumerate(points):
            name = indicators[index].name
            box = p.measure_text(name)
            x, y = indicator_label_position(point, center, box.width, box.height)
            p.text(name, x, y)

        angles = polygon_point_angles(sides)
        for series in series_list:
            line_points: list[Point] = []
            for j, item in enumerate(series.data):
                if j >= sides:
                    continue
                indicator = indicators[j]
                span = indicator.max - indicator.min
                percent = 0.0
                if span > 0 and item.value is not None:
                    percent = (item.value - indicator.min) / span
                line_points.append(polygon_point(center, percent * radius, angles[j]))
            if not line_points:
                continue
            color = theme.series_color(series.color_index)
            line_points.append(line_points[0])
            area_color = color.with_alpha(RADAR_AREA_OPACITY)
            p.set_drawing_style(Style(stroke_color=color, stroke_width=DEFAULT_STROKE_WIDTH, fill_color=area_color))
            p.line_stroke(line_points)
            p.fill_area(line_points)

            dot_fill = color if theme.is_dark else WHITE
            p.set_drawing_style(Style(stroke_color=color, stroke_width=DEFAULT_STROKE_WIDTH, fill_color=dot_fill))
            p.dots(line_points[:-1], DEFAULT_DOT_RADIUS)
            if series.label.show:
                p.override_text_style(
                    Style(font_color=series.label.color or theme.text_color, font_size=LABEL_FONT_SIZE)
                )
                for index, point in enumerate(line_points[:-1]):
                    value = series.data[index].value
                    text = ftoa_with_digits(value if value is not None else 0.0, 2)
                    box = p.measure_text(text)
                    p.text(text, point.x - box.width // 2, point.y)
        return p.box
