from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.config import FUNNEL_GAP, LABEL_FONT_SIZE
from chartbox.formatting import new_funnel_label_formatter
from chartbox.geometry import Box, Point
from chartbox.layout import DefaultRenderResult
from chartbox.series import CHART_TYPE_FUNNEL, Series, series_names
from chartbox.style import Style


@dataclass(frozen=True)
class FunnelTier:
    top: int
    height: int
    top_width: int
    bottom_width: int
    percent: float

    def points(self, width: int) -> list[Point]:
        top_start = (width - self.top_width) >> 1
        bottom_start = (width - self.bottom_width) >> 1
        bottom = self.top + self.height
        return [
            Point(top_start, self.top),
            Point(top_start + self.top_width, self.top),
            Point(bottom_start + self.bottom_width, bottom),
            Point(bottom_start, bottom),
            Point(top_start, self.top),
        ]


def sort_funnel_series(series_list: Sequence[Series]) -> list[Series]:
    """Largest value first; ties keep their input order."""
    return sorted(series_list, key=lambda series: -series.total())


def funnel_tiers(
    values: Sequence[float],
    width: int,
    height: int,
    *,
    max_value: float | None = None,
    min_value: float | None = None,
    gap: int = FUNNEL_GAP,
) -> list[FunnelTier]:
    """Stack one trapezoid per value; ``values`` must already be sorted descending."""
    if not values:
        return []
    high = values[0] if max_value is None else max_value
    low = 0.0 if min_value is None else min_value
    count = len(values)
    tier_height = (height - gap * (count - 1)) // count
    span = high - low
    widths = []
    for value in values:
        ratio = (value - low) / span if span != 0 else 1.0
        widths.append(max(int(ratio * width), 0))

    tiers: list[FunnelTier] = []
    y = 0
    for index, value in enumerate(values):
        next_width = widths[index + 1] if index + 1 < count else 0
        percent = value / high if high != 0 else 1.0
        tiers.append(
            FunnelTier(top=y, height=tier_height, top_width=widths[index], bottom_width=next_width, percent=percent)
        )
        y += tier_height + gap
    return tiers


@dataclass
class FunnelChartOption(ChartBaseOption):
    pass


class FunnelChart(Chart):
    chart_type = CHART_TYPE_FUNNEL
    axis_disabled = True

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        p = result.series_painter
        theme = self.theme
        series_list = sort_funnel_series(series_list)
        if not series_list:
            return p.box
        max_value = None
        min_value = None
        for series in series_list:
            if series.max is not None:
                max_value = series.max
            if series.min is not None:
                min_value = series.min
        values = [series.total() for series in series_list]
        tiers = funnel_tiers(values, p.width, p.height, max_value=max_value, min_value=min_value)
        names = series_names(series_list)

        for index, tier in enumerate(tiers):
            series = series_list[index]
            p.set_drawing_style(Style(fill_color=theme.series_color(series.color_index)))
            p.fill_area(tier.points(p.width))

            text = new_funnel_label_formatter(names, series.label.formatter)(index, values[index], tier.percent)
            p.override_text_style(Style(font_color=theme.text_color, font_size=LABEL_FONT_SIZE))
            text_box = p.measure_text(text)
            p.text(text, (p.width >> 1) - (text_box.width >> 1), tier.top + (tier.height >> 1))
        return p.box
