from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
import logging

from chartbox.axis import XAxisOption, YAxisOption
from chartbox.charts.bar import BarChart, BarChartOption
from chartbox.charts.base import Chart, ChartBaseOption
from chartbox.charts.funnel import FunnelChart, FunnelChartOption
from chartbox.charts.horizontal_bar import HorizontalBarChart, HorizontalBarChartOption, horizontal_y_axis_options
from chartbox.charts.line import LineChart, LineChartOption
from chartbox.charts.pie import PieChart, PieChartOption
from chartbox.charts.radar import RadarChart, RadarChartOption, RadarIndicator
from chartbox.config import OutputType
from chartbox.errors import ChartConfigError
from chartbox.formatting import ValueFormatter
from chartbox.geometry import BOX_ZERO, Box
from chartbox.layout import DefaultRenderOption, default_render
from chartbox.legend import LegendOption
from chartbox.painter import Painter
from chartbox.registry import Registry, default_registry
from chartbox.series import (
    CHART_TYPE_BAR,
    CHART_TYPE_FUNNEL,
    CHART_TYPE_HORIZONTAL_BAR,
    CHART_TYPE_LINE,
    CHART_TYPE_PIE,
    CHART_TYPE_RADAR,
    ChartType,
    Series,
    filter_series,
    init_series_list,
    new_funnel_series_list,
    new_pie_series_list,
    new_series_list,
)
from chartbox.style import Color
from chartbox.theme import Theme
from chartbox.title import TitleOption

LOGGER = logging.getLogger(__name__)

# Chart types that can not share a canvas with any other type.
EXCLUSIVE_CHART_TYPES: tuple[ChartType, ...] = (
    CHART_TYPE_HORIZONTAL_BAR,
    CHART_TYPE_PIE,
    CHART_TYPE_RADAR,
    CHART_TYPE_FUNNEL,
)
AXISLESS_CHART_TYPES: tuple[ChartType, ...] = (CHART_TYPE_PIE, CHART_TYPE_RADAR, CHART_TYPE_FUNNEL)
MAX_Y_AXIS_COUNT = 2


@dataclass
class ChartOption:
    """Everything needed to render one chart, plus any child charts drawn on the same canvas."""

    series_list: Sequence[Series] = ()
    output: OutputType | None = None
    font_family: str | None = None
    theme: str | Theme | None = None
    title: TitleOption = field(default_factory=TitleOption)
    legend: LegendOption = field(default_factory=LegendOption)
    x_axis: XAxisOption = field(default_factory=XAxisOption)
    y_axis_options: Sequence[YAxisOption] = ()
    width: int = 0
    height: int = 0
    # Set on children: the painter of the chart they are drawn into.
    parent: Painter | None = None
    padding: Box = BOX_ZERO
    # Absolute canvas rectangle for a child chart; zero means the whole parent.
    box: Box = BOX_ZERO
    radar_indicators: Sequence[RadarIndicator] = ()
    background_color: Color | None = None
    children: Sequence[ChartOption] = ()
    bar_width: int = 0
    bar_margin: int | None = None
    bar_height: int = 0
    fill_area: bool = False
    symbol_show: bool = True
    line_stroke_width: float = 0.0
    smooth: bool = False
    value_formatter: ValueFormatter | None = None
    registry: Registry | None = None

    def resolved_registry(self) -> Registry:
        if self.registry is not None:
            return self.registry
        if self.parent is not None:
            return self.parent.registry
        return default_registry()

    def resolved_theme(self) -> Theme:
        if isinstance(self.theme, Theme):
            return self.theme
        return self.resolved_registry().get_theme(self.theme)

    def fill_default(self) -> ChartOption:
        """Return a copy with sizes, padding, colours, Y axes and legend names filled in."""
        if self.width < 0 or self.height < 0:
            raise ChartConfigError(f"canvas size must not be negative, got {self.width}x{self.height}")
        registry = self.resolved_registry()
        defaults = registry.defaults
        theme = self.resolved_theme()

        axis_count = max((series.axis_index for series in self.series_list), default=0) + 1
        y_axis_options = list(self.y_axis_options[:axis_count])
        y_axis_options.extend(YAxisOption() for _ in range(axis_count - len(y_axis_options)))

        padding = self.padding
        if padding.is_zero():
            padding = Box.uniform(defaults.padding)

        series_list = list(self.series_list)
        legend = self.legend
        if not legend.data:
            legend = replace(legend, data=[series.name for series in series_list])
        else:
            for index, name in enumerate(legend.data):
                if index < len(series_list) and not series_list[index].name:
                    series_list[index] = replace(series_list[index], name=name)
            order = {name: index for index, name in enumerate(legend.data)}
            series_list.sort(key=lambda series: order.get(series.name, 0))

        return replace(
            self,
            series_list=series_list,
            output=self.output or defaults.output,
            font_family=self.font_family or defaults.font_family,
            theme=theme,
            legend=legend,
            y_axis_options=y_axis_options,
            width=self.width if self.width > 0 else defaults.width,
            height=self.height if self.height > 0 else defaults.height,
            padding=padding,
            background_color=self.background_color or theme.background_color,
            registry=registry,
        )


def validate_series_types(series_list: Sequence[Series]) -> None:
    count = len(series_list)
    for chart_type in EXCLUSIVE_CHART_TYPES:
        matched = len(filter_series(series_list, chart_type))
        if matched and matched != count:
            raise ChartConfigError(f"{chart_type} series can not be mixed with other chart types")


# Render order when several chart types share one canvas.
RENDER_ORDER: tuple[ChartType, ...] = (
    CHART_TYPE_BAR,
    CHART_TYPE_HORIZONTAL_BAR,
    CHART_TYPE_PIE,
    CHART_TYPE_LINE,
    CHART_TYPE_RADAR,
    CHART_TYPE_FUNNEL,
)


def new_chart(chart_type: ChartType, painter: Painter, opt: ChartOption, base: ChartBaseOption) -> Chart:
    shared = vars(base)
    if chart_type == CHART_TYPE_BAR:
        return BarChart(painter, BarChartOption(**shared, bar_width=opt.bar_width, bar_margin=opt.bar_margin))
    if chart_type == CHART_TYPE_HORIZONTAL_BAR:
        option = HorizontalBarChartOption(**shared, bar_height=opt.bar_height, bar_margin=opt.bar_margin)
        return HorizontalBarChart(painter, option)
    if chart_type == CHART_TYPE_PIE:
        return PieChart(painter, PieChartOption(**shared))
    if chart_type == CHART_TYPE_LINE:
        option = LineChartOption(
            **shared,
            symbol_show=opt.symbol_show,
            stroke_width=opt.line_stroke_width,
            fill_area=opt.fill_area,
            smooth=opt.smooth,
        )
        return LineChart(painter, option)
    if chart_type == CHART_TYPE_RADAR:
        return RadarChart(painter, RadarChartOption(**shared, indicators=opt.radar_indicators))
    if chart_type == CHART_TYPE_FUNNEL:
        return FunnelChart(painter, FunnelChartOption(**shared))
    raise ChartConfigError(f"unsupported chart type: {chart_type}")


def render(option: ChartOption) -> Painter:
    """Render ``option`` and its children; returns the top-level painter holding the canvas."""
    if not option.series_list:
        raise ChartConfigError("series list can not be empty")
    opt = option.fill_default()
    validate_series_types(opt.series_list)
    if len(opt.y_axis_options) > MAX_Y_AXIS_COUNT:
        raise ChartConfigError(f"y axis should not be greater than {MAX_Y_AXIS_COUNT}")
    theme = opt.resolved_theme()

    if opt.parent is None:
        p = Painter.new(
            opt.width,
            opt.height,
            output=opt.output,
            registry=opt.registry,
            theme=theme,
            font_family=opt.font_family,
            value_formatter=opt.value_formatter,
        )
    else:
        p = opt.parent.child(box=None if opt.box.is_zero() else opt.box, theme=theme, font_family=opt.font_family)

    series_list = init_series_list(opt.series_list)
    types = {series.type for series in series_list}
    axis_reversed = CHART_TYPE_HORIZONTAL_BAR in types
    base = ChartBaseOption(
        series_list=series_list,
        theme=theme,
        x_axis=opt.x_axis,
        y_axis_options=opt.y_axis_options,
        title=opt.title,
        legend=opt.legend,
        background_color=opt.background_color,
    )
    y_axis_options = horizontal_y_axis_options(base) if axis_reversed else list(opt.y_axis_options)

    result = default_render(
        p,
        DefaultRenderOption(
            theme=theme,
            series_list=series_list,
            padding=opt.padding,
            x_axis=opt.x_axis,
            y_axis_options=y_axis_options,
            title=opt.title,
            legend=opt.legend,
            background_color=opt.background_color,
            # A child shares the canvas its parent has already filled.
            background_is_filled=opt.parent is not None,
            axis_disabled=bool(types.intersection(AXISLESS_CHART_TYPES)),
            axis_reversed=axis_reversed,
        ),
    )

    for chart_type in RENDER_ORDER:
        matched = filter_series(result.series_list, chart_type)
        if matched:
            LOGGER.debug("rendering %d %s series", len(matched), chart_type)
            new_chart(chart_type, p, opt, base).render_series(result, matched)

    for child in opt.children:
        render(
            replace(
                child,
                parent=p,
                theme=child.theme or theme,
                font_family=child.font_family or opt.font_family,
                registry=child.registry or opt.registry,
            )
        )
    return p


def line_render(values: Sequence[Sequence[float | None]], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_series_list(values, CHART_TYPE_LINE), **kwargs))


def bar_render(values: Sequence[Sequence[float | None]], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_series_list(values, CHART_TYPE_BAR), **kwargs))


def horizontal_bar_render(values: Sequence[Sequence[float | None]], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_series_list(values, CHART_TYPE_HORIZONTAL_BAR), **kwargs))


def pie_render(values: Sequence[float], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_pie_series_list(values), **kwargs))


def radar_render(values: Sequence[Sequence[float | None]], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_series_list(values, CHART_TYPE_RADAR), **kwargs))


def funnel_render(values: Sequence[float], **kwargs) -> Painter:
    return render(ChartOption(series_list=new_funnel_series_list(values), **kwargs))
