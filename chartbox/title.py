from __future__ import annotations

from dataclasses import dataclass

from chartbox.geometry import BOX_ZERO, Box
from chartbox.painter import POSITION_CENTER, POSITION_RIGHT, Painter
from chartbox.style import Color, Style
from chartbox.theme import Theme


@dataclass(frozen=True)
class TitleOption:
    text: str = ""
    subtext: str = ""
    # "center", "right", a percent such as "20%" or a pixel offset.
    left: str = ""
    top: str = ""
    font_size: float = 0.0
    font_color: Color | None = None
    subtext_font_size: float = 0.0
    subtext_font_color: Color | None = None
    show: bool = True
    theme: Theme | None = None


def split_title_text(text: str) -> list[str]:
    return [line for line in text.split("\n") if line]


def _parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def resolve_left(left: str, container_width: int, content_width: int) -> int:
    if left == POSITION_RIGHT:
        return container_width - content_width
    if left == POSITION_CENTER:
        return (container_width >> 1) - (content_width >> 1)
    if left.endswith("%"):
        return container_width * _parse_int(left[:-1]) // 100
    return _parse_int(left) if left else 0


class TitlePainter:
    def __init__(self, painter: Painter, option: TitleOption) -> None:
        self.painter = painter
        self.option = option

    def render(self) -> Box:
        opt = self.option
        p = self.painter
        if not opt.show:
            return BOX_ZERO
        theme = opt.theme or p.theme
        font_color = opt.font_color or theme.text_color
        font_size = opt.font_size or theme.font_size
        title_style = Style(font_size=font_size, font_color=font_color)
        subtext_style = Style(
            font_size=opt.subtext_font_size or font_size,
            font_color=opt.subtext_font_color or font_color,
        )

        lines = [(text, title_style) for text in split_title_text(opt.text)]
        lines += [(text, subtext_style) for text in split_title_text(opt.subtext)]
        if not lines:
            return BOX_ZERO

        measured: list[tuple[str, Style, Box]] = []
        text_max_width = 0
        for text, style in lines:
            p.override_text_style(style)
            box = p.measure_text(text)
            text_max_width = max(text_max_width, box.width)
            measured.append((text, style, box))

        title_x = resolve_left(opt.left, p.width, text_max_width)
        title_y = _parse_int(opt.top) if opt.top else 0
        for text, style, box in measured:
            p.override_text_style(style)
            x = title_x + ((text_max_width - box.width) >> 1)
            y = title_y + box.height
            p.text(text, x, y)
            title_y += box.height
        return Box(bottom=title_y, right=title_x + text_max_width)
