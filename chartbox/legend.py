from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.geometry import BOX_ZERO, Box
from chartbox.painter import ALIGN_RIGHT, ICON_RECT, ORIENT_VERTICAL, POSITION_CENTER, Painter
from chartbox.style import Color, Style
from chartbox.theme import Theme
from chartbox.title import resolve_left

_ITEM_OFFSET = 20
_TEXT_OFFSET = 2
_ICON_WIDTH = 30
_ICON_HEIGHT = 20


@dataclass(frozen=True)
class LegendOption:
    data: Sequence[str] = ()
    show: bool = True
    left: str = POSITION_CENTER
    top: str = ""
    align: str = ""
    orient: str = ""
    icon: str = ""
    font_size: float = 0.0
    font_color: Color | None = None
    padding: Box = BOX_ZERO
    theme: Theme | None = None

    def is_empty(self) -> bool:
        return not "".join(self.data)


class LegendPainter:
    """Series colour swatches with names, wrapped onto new rows when the width runs out."""

    def __init__(self, painter: Painter, option: LegendOption) -> None:
        self.painter = painter
        self.option = option

    def render(self) -> Box:
        opt = self.option
        if opt.is_empty() or not opt.show:
            return BOX_ZERO
        theme = opt.theme or self.painter.theme
        padding = opt.padding if not opt.padding.is_zero() else Box(top=5)
        p = self.painter.child(padding=padding)
        p.set_text_style(
            Style(
                font_family=p.font_family,
                font_size=opt.font_size or theme.font_size,
                font_color=opt.font_color or theme.text_color,
            )
        )
        vertical = opt.orient == ORIENT_VERTICAL

        measure_list = [p.measure_text(text) for text in opt.data]
        max_text_width = max((box.width for box in measure_list), default=0)
        item_max_height = max((box.height for box in measure_list), default=0) + 10

        count = len(opt.data)
        if vertical:
            width = max_text_width + _TEXT_OFFSET + _ICON_WIDTH
            height = _ITEM_OFFSET * count
        else:
            width = sum(box.width for box in measure_list)
            width += (count - 1) * (_ITEM_OFFSET + _TEXT_OFFSET) + count * _ICON_WIDTH
            height = _ICON_HEIGHT

        left = max(resolve_left(opt.left, p.width, width), 0)
        try:
            top = int(opt.top) if opt.top else 0
        except ValueError:
            top = 0

        x = left
        y = top + 10
        start_y = y
        x0 = x
        y0 = y

        def draw_icon(icon_top: int, icon_left: int) -> int:
            if opt.icon == ICON_RECT:
                p.rect(
                    Box(
                        left=icon_left,
                        top=icon_top - _ICON_HEIGHT + 8,
                        right=icon_left + _ICON_WIDTH,
                        bottom=icon_top + 1,
                    )
                )
            else:
                p.legend_line_dot(
                    Box(
                        left=icon_left,
                        top=icon_top + 1,
                        right=icon_left + _ICON_WIDTH,
                        bottom=icon_top + _ICON_HEIGHT + 1,
                    )
                )
            return icon_left + _ICON_WIDTH

        last_index = count - 1
        for index, text in enumerate(opt.data):
            color = theme.series_color(index)
            p.set_drawing_style(Style(fill_color=color, stroke_color=color))
            text_width = measure_list[index].width
            item_right = x0 + text_width + _ICON_WIDTH
            if index != last_index:
                item_right += _TEXT_OFFSET + _ITEM_OFFSET
            if not vertical and item_right > p.width and x0 != left:
                x0 = 0
                y += item_max_height
                y0 = y
            if opt.align != ALIGN_RIGHT:
                x0 = draw_icon(y0, x0) + _TEXT_OFFSET
            p.text(text, x0, y0)
            x0 += text_width
            if opt.align == ALIGN_RIGHT:
                x0 = draw_icon(y0, x0 + _TEXT_OFFSET)
            if vertical:
                y0 += _ITEM_OFFSET
                x0 = x
            else:
                x0 += _ITEM_OFFSET
                y0 = y
            height = y0 - start_y + 10
        return Box(right=width, bottom=height + padding.top + padding.bottom)
