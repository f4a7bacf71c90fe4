from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.config import DEFAULT_LABEL_DISTANCE, LABEL_FONT_SIZE
from chartbox.formatting import DEFAULT_LABEL_LAYOUT, LabelFormatter, new_label_formatter
from chartbox.geometry import BOX_ZERO, Box
from chartbox.painter import ORIENT_HORIZONTAL, Orient, Painter
from chartbox.series import SeriesLabel
from chartbox.style import Color, Style
from chartbox.theme import Theme


@dataclass(frozen=True)
class LabelValue:
    index: int
    value: float
    x: int
    y: int
    rotation: float = 0.0
    font_color: Color | None = None
    font_size: float = 0.0
    orient: Orient | str = ""
    offset: Box = BOX_ZERO


@dataclass(frozen=True)
class _LabelRenderValue:
    text: str
    style: Style
    x: int
    y: int
    rotation: float


class SeriesLabelPainter:
    """Collects value labels while a series is drawn and paints them afterwards."""

    def __init__(
        self,
        painter: Painter,
        series_names: Sequence[str],
        label: SeriesLabel,
        *,
        theme: Theme | None = None,
        layout: str = DEFAULT_LABEL_LAYOUT,
    ) -> None:
        self.painter = painter
        self.label = label
        self.theme = theme or painter.theme
        self.formatter: LabelFormatter = new_label_formatter(series_names, label.formatter, default_layout=layout)
        self._values: list[_LabelRenderValue] = []

    def add(self, value: LabelValue, percent: float = -1) -> None:
        label = self.label
        distance = label.distance or DEFAULT_LABEL_DISTANCE
        text = self.formatter(value.index, value.value, percent)
        style = Style(font_color=self.theme.text_color, font_size=LABEL_FONT_SIZE, font_family=self.painter.font_family)
        if label.color is not None:
            style = style.merge(Style(font_color=label.color))
        if label.font_size:
            style = style.merge(Style(font_size=label.font_size))
        if value.font_color is not None:
            style = style.merge(Style(font_color=value.font_color))
        if value.font_size:
            style = style.merge(Style(font_size=value.font_size))

        self.painter.override_text_style(style)
        rotated = value.rotation != 0
        if rotated:
            self.painter.set_text_rotation(value.rotation)
        text_box = self.painter.measure_text(text)
        if rotated:
            self.painter.clear_text_rotation()

        x = value.x
        y = value.y
        if value.orient != ORIENT_HORIZONTAL:
            x -= text_box.width >> 1
            y -= distance
        else:
            x += distance
            y += (text_box.height >> 1) - 2

        if rotated:
            x = value.x + (text_box.width >> 1) - 1
        elif text_box.width % 2 == 1:
            x += 1
        x += value.offset.left
        y += value.offset.top
        self._values.append(_LabelRenderValue(text=text, style=style, x=x, y=y, rotation=value.rotation))

    def render(self) -> Box:
        for item in self._values:
            if not item.text:
                continue
            self.painter.override_text_style(item.style)
            if item.rotation:
                self.painter.text_rotation(item.text, item.x, item.y, item.rotation)
            else:
                self.painter.text(item.text, item.x, item.y)
        return BOX_ZERO
