from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.geometry import Box, Point
from chartbox.label import LabelValue, SeriesLabelPainter
from chartbox.layout import DefaultRenderResult
from chartbox.mark import MarkLinePainter, MarkLineRenderOption, MarkPointPainter, MarkPointRenderOption
from chartbox.painter import POSITION_BOTTOM
from chartbox.range import category_range
from chartbox.series import CHART_TYPE_BAR, Series, series_names
from chartbox.style import Style

# Label font size for labels rotated along the bottom of a bar.
_BOTTOM_LABEL_FONT_SIZE = 6.0


@dataclass(frozen=True)
class BarLayout:
    margin: int
    bar_margin: int
    bar_width: int


def bar_layout(slot: int, series_count: int, *, bar_width: int = 0, bar_margin: int | None = None) -> BarLayout:
    """Split one category slot between ``series_count`` bars.

    The slot holds ``2*margin + n*bar_width + (n-1)*bar_margin`` pixels,
    up to integer rounding.
    """
    margin = 10
    gap = 5
    if slot < 20:
        margin = 2
        gap = 2
    elif slot < 50:
        margin = 5
        gap = 3
    if bar_margin is not None and bar_margin >= 0:
        gap = bar_margin
    count = max(series_count, 1)
    width = (slot - 2 * margin - gap * (count - 1)) // count
    if 0 < bar_width < width:
        width = bar_width
        margin = (slot - count * width - gap * (count - 1)) // 2
    return BarLayout(margin=margin, bar_margin=gap, bar_width=width)


@dataclass
class BarChartOption(ChartBaseOption):
    bar_width: int = 0
    bar_margin: int | None = None


class BarChart(Chart):
    chart_type = CHART_TYPE_BAR

    option: BarChartOption

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        opt = self.option
        p = result.series_painter
        theme = self.theme
        category_count = len(opt.x_axis.data) or max((len(s.data) for s in series_list), default=1)
        x_range = category_range(category_count, p.width)
        x0, x1 = x_range.get_range(0)
        layout = bar_layout(
            int(x1 - x0),
            len(series_list),
            bar_width=opt.bar_width,
            bar_margin=opt.bar_margin,
        )
        bar_max_height = p.height
        names = series_names(series_list)
        divide_values = x_range.auto_divide()

        mark_points = MarkPointPainter(p)
        mark_lines = MarkLinePainter(p)
        overlays = [mark_points, mark_lines]
        for index, series in enumerate(series_list):
            y_range = result.axis_ranges[series.axis_index]
            series_color = theme.series_color(series.color_index)
            points: list[Point | None] = [None] * len(series.data)
            label_painter = None
            if series.label.show:
                label_painter = SeriesLabelPainter(p, names, series.label, theme=theme)
                overlays.append(label_painter)

            for j, item in enumerate(series.data):
                if j >= x_range.divide_count or item.value is None:
                    continue
                x = divide_values[j] + layout.margin + index * (layout.bar_width + layout.bar_margin)
                h = y_range.get_height(item.value)
                fill_color = item.style.fill_color or series_color
                top = bar_max_height - h
                bar_box = Box(left=x, top=top, right=x + layout.bar_width, bottom=bar_max_height - 1)
                p.set_drawing_style(Style(fill_color=fill_color))
                if series.round_radius > 0:
                    p.rounded_rect(bar_box, series.round_radius)
                else:
                    p.rect(bar_box)
                points[j] = Point(x + (layout.bar_width >> 1), top)

                if label_painter is None:
                    continue
                y = top
                rotation = series.label.rotation
                font_size = series.label.font_size
                if series.label.position == POSITION_BOTTOM:
                    y = bar_max_height
                    rotation = -math.pi / 2
                    font_size = font_size or _BOTTOM_LABEL_FONT_SIZE
                label_painter.add(
                    LabelValue(
                        index=index,
                        value=item.value,
                        x=x + (layout.bar_width >> 1),
                        y=y,
                        rotation=rotation,
                        font_size=font_size,
                        offset=series.label.offset,
                    )
                )

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
