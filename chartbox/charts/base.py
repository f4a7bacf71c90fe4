from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging

from chartbox.axis import XAxisOption, YAxisOption
from chartbox.geometry import BOX_ZERO, Box
from chartbox.layout import DefaultRenderOption, DefaultRenderResult, default_render
from chartbox.legend import LegendOption
from chartbox.painter import Painter
from chartbox.series import ChartType, Series, filter_series
from chartbox.style import Color
from chartbox.theme import Theme
from chartbox.title import TitleOption

LOGGER = logging.getLogger(__name__)


@dataclass
class ChartBaseOption:
    """Options shared by every standalone chart type."""

    series_list: Sequence[Series] = ()
    theme: Theme | None = None
    padding: Box = BOX_ZERO
    x_axis: XAxisOption = field(default_factory=XAxisOption)
    y_axis_options: Sequence[YAxisOption] = ()
    title: TitleOption = field(default_factory=TitleOption)
    legend: LegendOption = field(default_factory=LegendOption)
    background_color: Color | None = None


class Chart:
    """A chart type bound to a painter.

    ``render()`` runs the composition pipeline itself; ``render_series()`` is
    the hook used when the pipeline has already been run by ``chartbox.chart``.
    """

    chart_type: ChartType
    axis_disabled = False
    axis_reversed = False

    def __init__(self, painter: Painter, option: ChartBaseOption) -> None:
        self.painter = painter
        self.option = option

    @property
    def theme(self) -> Theme:
        return self.option.theme or self.painter.theme

    def default_render_option(self) -> DefaultRenderOption:
        opt = self.option
        return DefaultRenderOption(
            theme=self.theme,
            series_list=opt.series_list,
            padding=opt.padding,
            x_axis=opt.x_axis,
            y_axis_options=opt.y_axis_options,
            title=opt.title,
            legend=opt.legend,
            background_color=opt.background_color,
            axis_disabled=self.axis_disabled,
            axis_reversed=self.axis_reversed,
        )

    def render(self) -> Box:
        result = default_render(self.painter, self.default_render_option())
        return self.render_series(result, filter_series(result.series_list, self.chart_type))

    def render_series(self, result: DefaultRenderResult, series_list: Sequence[Series]) -> Box:
        raise NotImplementedError
