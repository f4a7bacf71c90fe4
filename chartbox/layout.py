from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
import logging

from chartbox.axis import XAxisOption, YAxisOption, new_bottom_x_axis, new_left_y_axis, new_right_y_axis
from chartbox.config import AXIS_DIVIDE_COUNT, TITLE_BOTTOM_GAP, X_AXIS_HEIGHT
from chartbox.geometry import BOX_ZERO, Box
from chartbox.legend import LegendOption, LegendPainter
from chartbox.painter import ORIENT_VERTICAL, Painter
from chartbox.range import AxisRange, new_range
from chartbox.series import Series, get_max_min, init_series_list
from chartbox.style import Color
from chartbox.theme import Theme
from chartbox.title import TitleOption, TitlePainter

LOGGER = logging.getLogger(__name__)


@dataclass
class DefaultRenderOption:
    theme: Theme
    series_list: Sequence[Series]
    padding: Box = BOX_ZERO
    x_axis: XAxisOption = field(default_factory=XAxisOption)
    y_axis_options: Sequence[YAxisOption] = ()
    title: TitleOption = field(default_factory=TitleOption)
    legend: LegendOption = field(default_factory=LegendOption)
    background_color: Color | None = None
    background_is_filled: bool = False
    # Pie, radar and funnel charts draw without axes.
    axis_disabled: bool = False
    # Horizontal bar charts: categories on the Y axis, values on the X axis.
    axis_reversed: bool = False


@dataclass
class DefaultRenderResult:
    series_painter: Painter
    series_list: list[Series]
    axis_ranges: dict[int, AxisRange] = field(default_factory=dict)
    axis_width_left: int = 0
    axis_width_right: int = 0


def default_render(p: Painter, opt: DefaultRenderOption) -> DefaultRenderResult:
    """Allocate title, legend and axes in order and return the remaining series painter.

    Every step shrinks the painter it hands on; nothing is revisited.
    """
    series_list = init_series_list(opt.series_list)
    theme = opt.theme

    if not opt.background_is_filled:
        p.set_background(p.width, p.height, opt.background_color or theme.background_color)

    if not opt.padding.is_zero():
        p = p.child(padding=opt.padding)

    legend_height = 0
    if opt.legend.data:
        legend = opt.legend if opt.legend.theme is not None else replace(opt.legend, theme=theme)
        legend_height = LegendPainter(p, legend).render().height

    top = 0
    if opt.title.text:
        title = opt.title if opt.title.theme is not None else replace(opt.title, theme=theme)
        top = TitlePainter(p, title).render().height
    # A vertical legend reserves no top strip.
    if opt.legend.orient != ORIENT_VERTICAL:
        top = max(top, legend_height)
    if top > 0:
        p = p.child(padding=Box(top=top + TITLE_BOTTOM_GAP))

    result = DefaultRenderResult(series_painter=p, series_list=series_list)
    if opt.axis_disabled:
        return result

    axis_indexes = sorted({series.axis_index for series in series_list}, reverse=True)
    range_height = p.height - X_AXIS_HEIGHT
    width_left = 0
    width_right = 0
    x_axis = opt.x_axis
    for index in axis_indexes:
        y_option = opt.y_axis_options[index] if index < len(opt.y_axis_options) else YAxisOption()
        divide_count = y_option.divide_count if y_option.divide_count > 0 else AXIS_DIVIDE_COUNT
        max_value, min_value = get_max_min(series_list, index)
        axis_range = new_range(
            min_value, max_value, divide_count, range_height, formatter=p.value_formatter
        ).with_bounds(min_value, max_value, min_value=y_option.min, max_value=y_option.max)
        result.axis_ranges[index] = axis_range

        if not opt.axis_reversed:
            y_option = replace(y_option, data=axis_range.labels())
        else:
            y_option = replace(y_option, is_category_axis=True)
            value_range = new_range(
                min_value, max_value, AXIS_DIVIDE_COUNT, range_height, formatter=p.value_formatter
            )
            x_axis = replace(x_axis, data=value_range.labels(), is_value_axis=True)
        y_option = replace(y_option, data=list(reversed(list(y_option.data))))

        child = p.child(padding=Box(left=width_left, right=width_right))
        if index == 0:
            width_left += new_left_y_axis(child, y_option).render().width
        else:
            width_right += new_right_y_axis(child, y_option).render().width

    new_bottom_x_axis(p.child(padding=Box(left=width_left, right=width_right)), x_axis).render()

    result.series_painter = p.child(padding=Box(bottom=X_AXIS_HEIGHT, left=width_left, right=width_right))
    result.axis_width_left = width_left
    result.axis_width_right = width_right
    LOGGER.debug(
        "series box %s (axis widths left=%s right=%s)", result.series_painter.box, width_left, width_right
    )
    return result
