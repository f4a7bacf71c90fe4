from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from chartbox.axis import YAxisOption
from chartbox.charts.bar import bar_layout
from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.config import AXIS_DIVIDE_COUNT
from chartbox.geometry import Box
from chartbox.label import LabelValue, SeriesLabelPainter
from chartbox.layout import DefaultRenderOption, DefaultRenderResult
from chartbox.painter import ORIENT_HORIZONTAL, POSITION_LEFT
from chartbox.range import new_range
from chartbox.series import CHART_TYPE_HORIZONTAL_BAR, Series, get_max_min, series_names
from chartbox.style import Color, Style

LIGHT_FILL_FONT_COLOR = Color(70, 70, 70)
DARK_FILL_FONT_COLOR = Color(238, 238, 238)


@dataclass
class HorizontalBarChartOption(ChartBaseOption):
    bar_height: int = 0
    bar_margin: int | None = None


def horizontal_y_axis_options(option: ChartBaseOption) -> list[YAxisOption]:
    """Category Y axis: one division per category and every label shown."""
    base = option.y_axis_options[0] if option.y_axis_options else YAxisOption()
    count = len(base.data)
    return [replace(base, divide_count=count if count > 0 else base.divide_count, unit=1)]


class HorizontalBarChart(Chart):
    """Bars grow rightwards from the Y axis; the last category sits at the top."""

    chart_type = CHART_TYPE_HORIZONTAL_BAR
    axis_reversed = True

    option: HorizontalBarChartOption

    def default_render_option(self) -> DefaultRenderOption:
        render_option = super().default_render_option()
        render_option.y_axis_options = horizontal_y_axis_options(self.option)
        return render_option

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        opt = self.option
        p = result.series_painter
        theme = self.theme
        y_range = result.axis_ranges[0]
        y0, y1 = y_range.get_range(0)
        layout = bar_layout(
            int(y1 - y0),
            len(series_list),
            bar_width=opt.bar_height,
            bar_margin=opt.bar_margin,
        )
        max_value, min_value = get_max_min(series_list, 0)
        x_range = new_range(min_value, max_value, AXIS_DIVIDE_COUNT, p.width, formatter=p.value_formatter)
        divide_values = y_range.auto_divide()
        names = series_names(series_list)

        overlays = []
        for index, series in enumerate(series_list):
            series_color = theme.series_color(series.color_index)
            label_painter = None
            if series.label.show:
                label_painter = SeriesLabelPainter(p, names, series.label, theme=theme)
                overlays.append(label_painter)
            for j, item in enumerate(series.data):
                if j >= y_range.divide_count or item.value is None:
                    continue
                slot = y_range.divide_count - j - 1
                y = divide_values[slot] + layout.margin + index * (layout.bar_width + layout.bar_margin)
                right = x_range.get_height(item.value)
                fill_color = item.style.fill_color or series_color
                p.set_drawing_style(Style(fill_color=fill_color))
                p.rect(Box(left=0, top=y, right=right, bottom=y + layout.bar_width))

                if label_painter is None:
                    continue
                label_x = right
                font_color = None
                if series.label.position == POSITION_LEFT:
                    label_x = 0
                    if series.label.color is None:
                        font_color = LIGHT_FILL_FONT_COLOR if fill_color.is_light() else DARK_FILL_FONT_COLOR
                label_painter.add(
                    LabelValue(
                        index=index,
                        value=item.value,
                        x=label_x,
                        y=y + (layout.bar_width >> 1),
                        orient=ORIENT_HORIZONTAL,
                        font_color=font_color,
                        font_size=series.label.font_size,
                        offset=series.label.offset,
                    )
                )

        for overlay in overlays:
            overlay.render()
        return p.box
