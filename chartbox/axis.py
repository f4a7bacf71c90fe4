from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
import logging
import math

from chartbox.config import AXIS_LABEL_MARGIN, AXIS_TICK_LENGTH, X_AXIS_HEIGHT
from chartbox.formatting import apply_value_template
from chartbox.geometry import BOX_ZERO, Box, Point
from chartbox.grid import GridPainter, GridPainterOption
from chartbox.painter import (
    ALIGN_RIGHT,
    ORIENT_HORIZONTAL,
    ORIENT_VERTICAL,
    POSITION_BOTTOM,
    POSITION_CENTER,
    POSITION_LEFT,
    POSITION_RIGHT,
    POSITION_TOP,
    MultiTextOption,
    Painter,
    TicksOption,
)
from chartbox.style import Color, Style
from chartbox.theme import Theme

LOGGER = logging.getLogger(__name__)

# Extra room per label when estimating how many labels fit on an axis.
_LABEL_FILL_GAP = 20


@dataclass(frozen=True)
class AxisOption:
    """Resolved options consumed by ``AxisPainter``.

    ``stroke_width`` of 0 means the default (1); a negative value hides the
    axis line and the ticks.
    """

    data: Sequence[str] = ()
    theme: Theme | None = None
    boundary_gap: bool = True
    show: bool = True
    position: str = POSITION_BOTTOM
    split_number: int = 0
    stroke_color: Color | None = None
    stroke_width: float = 0.0
    tick_length: int = 0
    label_margin: int = 0
    font_size: float = 0.0
    font_color: Color | None = None
    formatter: str = ""
    split_line_show: bool = False
    split_line_color: Color | None = None
    text_rotation: float = 0.0
    label_offset: Box = BOX_ZERO
    unit: int = 0
    first_axis: int = 0


@dataclass(frozen=True)
class XAxisOption:
    data: Sequence[str] = ()
    show: bool = True
    boundary_gap: bool | None = None
    position: str = POSITION_BOTTOM
    font_size: float = 0.0
    font_color: Color | None = None
    stroke_color: Color | None = None
    split_number: int = 0
    text_rotation: float = 0.0
    label_offset: Box = BOX_ZERO
    first_axis: int = 0
    is_value_axis: bool = False

    def to_axis_option(self, theme: Theme) -> AxisOption:
        option = AxisOption(
            data=self.data,
            theme=theme,
            boundary_gap=True if self.boundary_gap is None else self.boundary_gap,
            show=self.show,
            position=POSITION_TOP if self.position == POSITION_TOP else POSITION_BOTTOM,
            split_number=self.split_number,
            stroke_color=self.stroke_color,
            font_size=self.font_size,
            font_color=self.font_color,
            split_line_color=theme.axis_split_line_color,
            text_rotation=self.text_rotation,
            label_offset=self.label_offset,
            first_axis=self.first_axis,
        )
        if self.is_value_axis:
            option = replace(option, split_line_show=True, stroke_width=-1, boundary_gap=False)
        return option


@dataclass(frozen=True)
class YAxisOption:
    data: Sequence[str] = ()
    show: bool = True
    min: float | None = None
    max: float | None = None
    position: str = POSITION_LEFT
    font_size: float = 0.0
    font_color: Color | None = None
    color: Color | None = None
    formatter: str = ""
    divide_count: int = 0
    unit: int = 0
    split_line_show: bool | None = None
    is_category_axis: bool = False

    def to_axis_option(self, theme: Theme) -> AxisOption:
        option = AxisOption(
            data=self.data,
            theme=theme,
            formatter=self.formatter,
            position=POSITION_RIGHT if self.position == POSITION_RIGHT else POSITION_LEFT,
            font_size=self.font_size,
            font_color=self.font_color,
            stroke_width=-1,
            boundary_gap=False,
            split_line_show=True,
            split_line_color=theme.axis_split_line_color,
            show=self.show,
            unit=self.unit,
        )
        if self.color is not None:
            option = replace(option, font_color=self.color, stroke_color=self.color)
        if self.is_category_axis:
            option = replace(option, boundary_gap=True, stroke_width=1, split_line_show=False)
        if self.split_line_show is not None:
            option = replace(option, split_line_show=self.split_line_show)
        return option


def _label_unit(data_count: int, fit_count: int, split_number: int) -> int:
    unit = math.ceil(data_count / max(fit_count, 1))
    unit = max(unit, split_number)
    # An even unit on a count divisible by unit+1 would skip the last label.
    if unit % 2 == 0 and data_count % (unit + 1) == 0:
        unit += 1
    return unit


class AxisPainter:
    """Draws an axis line, ticks, labels and optional split lines.

    ``painter`` is the region the axis belongs to; the axis pads itself down
    to the strip it needs and draws split lines across the remaining area.
    """

    def __init__(self, painter: Painter, option: AxisOption) -> None:
        self.painter = painter
        self.option = option

    def render(self) -> Box:
        opt = self.option
        top = self.painter
        if not opt.show:
            return BOX_ZERO
        theme = opt.theme or top.theme

        stroke_width = opt.stroke_width or 1.0
        font_color = opt.font_color or theme.text_color
        font_size = opt.font_size or theme.font_size
        stroke_color = opt.stroke_color or theme.axis_stroke_color

        data = apply_value_template(opt.formatter, list(opt.data))
        data_count = len(data)
        tick_count = data_count

        is_vertical = opt.position in (POSITION_LEFT, POSITION_RIGHT)
        label_position = ""
        if not opt.boundary_gap:
            tick_count -= 1
            label_position = POSITION_LEFT
        if is_vertical and opt.boundary_gap:
            label_position = POSITION_CENTER

        tick_length = opt.tick_length or AXIS_TICK_LENGTH
        label_margin = opt.label_margin or AXIS_LABEL_MARGIN

        style = Style(stroke_color=stroke_color, stroke_width=stroke_width, font_color=font_color, font_size=font_size)
        top.set_drawing_style(style).override_text_style(style)

        if opt.text_rotation:
            top.set_text_rotation(opt.text_rotation)
        text_max_width, text_max_height = top.measure_text_max_width_height(data)
        if opt.text_rotation:
            top.clear_text_rotation()

        unit = opt.unit
        if unit <= 0:
            if is_vertical:
                fit_count = math.ceil(top.height / (text_max_height + _LABEL_FILL_GAP))
            else:
                fit_count = math.ceil(top.width / (text_max_width + _LABEL_FILL_GAP))
            unit = _label_unit(data_count, fit_count, opt.split_number)

        if is_vertical:
            width = text_max_width + (tick_length << 1)
            height = top.height
        else:
            width = top.width
            height = (tick_length << 1) + text_max_height

        if opt.position == POSITION_TOP:
            padding = Box(top=top.height - height)
        elif opt.position == POSITION_LEFT:
            padding = Box(right=top.width - width)
        elif opt.position == POSITION_RIGHT:
            padding = Box(left=top.width - width)
        else:
            padding = Box(top=top.height - X_AXIS_HEIGHT)
        p = top.child(padding=padding)

        x0 = y0 = x1 = y1 = 0
        ticks_padding_top = 0
        ticks_padding_left = 0
        label_padding_top = 0
        label_padding_left = 0
        label_padding_right = 0
        text_align = ""
        if opt.position == POSITION_TOP:
            orient = ORIENT_HORIZONTAL
            x1 = p.width
            y0 = label_margin + int(font_size)
            y1 = y0
            ticks_padding_top = int(font_size)
        elif opt.position == POSITION_LEFT:
            orient = ORIENT_VERTICAL
            x0 = p.width
            x1 = p.width
            y1 = p.height
            text_align = ALIGN_RIGHT
            ticks_padding_left = text_max_width + tick_length
            label_padding_right = width - text_max_width
        elif opt.position == POSITION_RIGHT:
            orient = ORIENT_VERTICAL
            y1 = p.height
            label_padding_left = width - text_max_width
        else:
            orient = ORIENT_HORIZONTAL
            x1 = p.width
            label_padding_top = height

        if stroke_width > 0:
            p.child(padding=Box(top=ticks_padding_top, left=ticks_padding_left)).ticks(
                TicksOption(count=tick_count, length=tick_length, orient=orient, unit=unit, first=opt.first_axis)
            )
            p.line_stroke([Point(x0, y0), Point(x1, y1)])

        p.child(padding=Box(left=label_padding_left, top=label_padding_top, right=label_padding_right)).multi_text(
            MultiTextOption(
                text_list=data,
                orient=orient,
                unit=unit,
                position=label_position,
                align=text_align,
                text_rotation=opt.text_rotation,
                offset=opt.label_offset,
                first=opt.first_axis,
            )
        )

        if opt.split_line_show and tick_count > 0:
            split_color = opt.split_line_color or theme.axis_split_line_color
            if is_vertical:
                sx0 = p.width
                sx1 = top.width
                if opt.position == POSITION_RIGHT:
                    sx0 = 0
                    sx1 = top.width - p.width
                grid = GridPainterOption(stroke_color=split_color, row=tick_count, ignore_last_row=True)
                GridPainter(top.child(padding=Box(left=sx0, right=top.width - sx1)), grid).render()
            else:
                # Vertical rules run from the axis line up across the plot area.
                grid = GridPainterOption(stroke_color=split_color, column=tick_count, ignore_first_column=True)
                GridPainter(top.child(padding=Box(bottom=X_AXIS_HEIGHT)), grid).render()

        LOGGER.debug("axis %s: %sx%s (unit=%s, ticks=%s)", opt.position, width, height, unit, tick_count)
        return Box(right=width, bottom=height)


def new_bottom_x_axis(painter: Painter, option: XAxisOption) -> AxisPainter:
    """X axis along the bottom ``X_AXIS_HEIGHT`` pixels of ``painter``."""
    return AxisPainter(painter, option.to_axis_option(painter.theme))


def new_left_y_axis(painter: Painter, option: YAxisOption) -> AxisPainter:
    p = painter.child(padding=Box(bottom=X_AXIS_HEIGHT))
    return AxisPainter(p, option.to_axis_option(p.theme))


def new_right_y_axis(painter: Painter, option: YAxisOption) -> AxisPainter:
    p = painter.child(padding=Box(bottom=X_AXIS_HEIGHT))
    axis_option = replace(option.to_axis_option(p.theme), position=POSITION_RIGHT, split_line_show=False)
    return AxisPainter(p, axis_option)
