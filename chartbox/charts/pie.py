from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.config import LABEL_FONT_SIZE
from chartbox.errors import ChartConfigError
from chartbox.formatting import new_pie_label_formatter
from chartbox.geometry import Box, get_radius
from chartbox.layout import DefaultRenderResult
from chartbox.series import CHART_TYPE_PIE, Series, series_names
from chartbox.style import Style

_LABEL_TEXT_MARGIN = 3


@dataclass(frozen=True)
class PieSector:
    value: float
    start: float
    delta: float
    percent: float

    @property
    def end(self) -> float:
        return self.start + self.delta

    @property
    def mid_angle(self) -> float:
        return self.start + self.delta / 2


def pie_sectors(values: Sequence[float]) -> list[PieSector]:
    """Angular sweep of every slice in data order, starting at twelve o'clock."""
    total = float(sum(values))
    if total <= 0:
        raise ChartConfigError("The sum value of pie chart should be greater than 0")
    sectors: list[PieSector] = []
    current = 0.0
    for value in values:
        start = 2 * math.pi * current / total - math.pi / 2
        percent = value / total
        sectors.append(PieSector(value=value, start=start, delta=2 * math.pi * percent, percent=percent))
        current += value
    return sectors


def pie_label_end_y(prev_end: tuple[int, int] | None, end_x: int, end_y: int) -> int:
    """Move a label end up two label lines when it lands within one font size of the previous one."""
    if prev_end is None:
        return end_y
    prev_x, prev_y = prev_end
    if abs(end_x - prev_x) < LABEL_FONT_SIZE and abs(end_y - prev_y) < LABEL_FONT_SIZE:
        return end_y - 2 * int(LABEL_FONT_SIZE)
    return end_y


@dataclass
class PieChartOption(ChartBaseOption):
    pass


class PieChart(Chart):
    chart_type = CHART_TYPE_PIE
    axis_disabled = True

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        p = result.series_painter
        theme = self.theme
        values = [series.total() for series in series_list]
        radius_value = ""
        for series in series_list:
            if series.radius:
                radius_value = series.radius
        sectors = pie_sectors(values)

        cx = p.width >> 1
        cy = p.height >> 1
        radius = get_radius(float(min(p.width, p.height)), radius_value)
        label_line_width = 10 if radius < 50 else 15
        label_radius = radius + label_line_width
        names = list(self.option.legend.data) or series_names(series_list)

        if len(sectors) == 1:
            color = theme.series_color(series_list[0].color_index)
            p.set_drawing_style(Style(stroke_width=1.0, stroke_color=color, fill_color=color))
            p.circle(radius, cx, cy)
            p.fill_stroke()
            return p.box

        prev_end: tuple[int, int] | None = None
        for index, sector in enumerate(sectors):
            series = series_list[index]
            color = theme.series_color(series.color_index)
            p.set_drawing_style(Style(stroke_width=1.0, stroke_color=color, fill_color=color))
            p.move_to(cx, cy)
            p.arc_to(cx, cy, radius, radius, sector.start, sector.delta)
            p.line_to(cx, cy)
            p.close()
            p.fill_stroke()

            if not series.label.show:
                continue
            angle = sector.mid_angle
            start_x = cx + int(radius * math.cos(angle))
            start_y = cy + int(radius * math.sin(angle))
            end_x = cx + int(label_radius * math.cos(angle))
            end_y = cy + int(label_radius * math.sin(angle))
            end_y = pie_label_end_y(prev_end, end_x, end_y)
            prev_end = (end_x, end_y)

            offset = -label_line_width if end_x < cx else label_line_width
            p.move_to(start_x, start_y)
            p.line_to(end_x, end_y)
            p.line_to(end_x + offset, end_y)
            p.stroke()
            end_x += offset

            text_style = Style(font_color=series.label.color or theme.text_color, font_size=LABEL_FONT_SIZE)
            p.override_text_style(text_style)
            text = new_pie_label_formatter(names, series.label.formatter)(index, sector.value, sector.percent)
            text_box = p.measure_text(text)
            x = end_x + _LABEL_TEXT_MARGIN
            if offset < 0:
                x = end_x - text_box.width - _LABEL_TEXT_MARGIN
            p.text(text, x, end_y + (text_box.height >> 1) - 1)
        return p.box
