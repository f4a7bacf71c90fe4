from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.config import DEFAULT_SYMBOL_SIZE, LABEL_FONT_SIZE, SMALL_LABEL_FONT_SIZE
from chartbox.formatting import commaf_with_digits
from chartbox.geometry import BOX_ZERO, Box, Point
from chartbox.painter import Painter
from chartbox.range import AxisRange
from chartbox.series import MARK_TYPE_AVERAGE, MARK_TYPE_MAX, MARK_TYPE_MIN, Series
from chartbox.style import Color, Style

MARK_TEXT_COLOR = Color(238, 238, 238)
MARK_LINE_DASH = (4.0, 2.0)


@dataclass(frozen=True)
class MarkPointRenderOption:
    fill_color: Color
    series: Series
    points: Sequence[Point | None]


@dataclass(frozen=True)
class MarkLineRenderOption:
    fill_color: Color
    font_color: Color
    stroke_color: Color
    series: Series
    range: AxisRange


class MarkPointPainter:
    """Pins with the max/min value of a series drawn over its data points."""

    def __init__(self, painter: Painter) -> None:
        self.painter = painter
        self.options: list[MarkPointRenderOption] = []

    def add(self, option: MarkPointRenderOption) -> None:
        self.options.append(option)

    def render(self) -> Box:
        painter = self.painter
        for opt in self.options:
            mark_point = opt.series.mark_point
            if not mark_point.data:
                continue
            summary = opt.series.summary()
            if summary.max_index < 0:
                continue
            symbol_size = mark_point.symbol_size or DEFAULT_SYMBOL_SIZE
            text_style = Style(font_color=MARK_TEXT_COLOR, font_size=LABEL_FONT_SIZE, font_family=painter.font_family)
            painter.override_drawing_style(
                Style(fill_color=opt.fill_color, stroke_color=opt.fill_color, stroke_width=1.0, stroke_dash_array=())
            )
            for item in mark_point.data:
                if item.type == MARK_TYPE_MAX:
                    index, value = summary.max_index, summary.max_value
                elif item.type == MARK_TYPE_MIN:
                    index, value = summary.min_index, summary.min_value
                else:
                    # A pin needs a data point to sit on; averages only get lines.
                    continue
                point = opt.points[index] if index < len(opt.points) else None
                if point is None:
                    continue
                painter.override_text_style(text_style)
                painter.pin(point.x, point.y - (symbol_size >> 1), symbol_size)
                text = commaf_with_digits(value)
                text_box = painter.measure_text(text)
                if text_box.width > symbol_size:
                    painter.override_text_style(Style(font_size=SMALL_LABEL_FONT_SIZE))
                    text_box = painter.measure_text(text)
                painter.text(text, point.x - (text_box.width >> 1), point.y - (symbol_size >> 1) - 2)
        return BOX_ZERO


class MarkLinePainter:
    """Dashed horizontal rules at the max/min/average value of a series."""

    def __init__(self, painter: Painter) -> None:
        self.painter = painter
        self.options: list[MarkLineRenderOption] = []

    def add(self, option: MarkLineRenderOption) -> None:
        self.options.append(option)

    def render(self) -> Box:
        painter = self.painter
        for opt in self.options:
            mark_line = opt.series.mark_line
            if not mark_line.data:
                continue
            summary = opt.series.summary()
            if summary.max_index < 0:
                continue
            for item in mark_line.data:
                painter.override_drawing_style(
                    Style(
                        fill_color=opt.fill_color,
                        stroke_color=opt.stroke_color,
                        stroke_width=1.0,
                        stroke_dash_array=MARK_LINE_DASH,
                    )
                ).override_text_style(
                    Style(font_color=opt.font_color, font_size=LABEL_FONT_SIZE, font_family=painter.font_family)
                )
                value = summary.average_value
                if item.type == MARK_TYPE_MAX:
                    value = summary.max_value
                elif item.type == MARK_TYPE_MIN:
                    value = summary.min_value
                elif item.type != MARK_TYPE_AVERAGE:
                    continue
                y = opt.range.get_rest_height(value)
                width = painter.width
                text = commaf_with_digits(value)
                text_box = painter.measure_text(text)
                painter.mark_line(0, y, width - 2)
                painter.text(text, width, y + (text_box.height >> 1) - 2)
        return BOX_ZERO
