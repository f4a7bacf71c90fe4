from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
import logging
from typing import Any

from chartbox.config import DEFAULT_CHART_WIDTH, OutputType, TABLE_CELL_PADDING, TABLE_FONT_SIZE
from chartbox.errors import ChartConfigError
from chartbox.geometry import Box, auto_divide_spans, divide_column_widths
from chartbox.painter import Painter
from chartbox.registry import Registry, default_registry
from chartbox.style import Color, Style, WHITE, parse_color
from chartbox.theme import Theme

LOGGER = logging.getLogger(__name__)

# Height of the scratch canvas used while measuring.
_MEASURE_HEIGHT = 100


@dataclass(frozen=True)
class TableSetting:
    header_color: Color
    header_font_color: Color
    font_color: Color
    row_colors: tuple[Color, ...]
    padding: Box


TABLE_LIGHT_SETTING = TableSetting(
    header_color=Color(240, 240, 240),
    header_font_color=Color(98, 105, 118),
    font_color=Color(70, 70, 70),
    row_colors=(WHITE, Color(247, 247, 247)),
    padding=Box.uniform(TABLE_CELL_PADDING),
)

TABLE_DARK_SETTING = TableSetting(
    header_color=Color(38, 38, 42),
    header_font_color=Color(216, 217, 218),
    font_color=Color(216, 217, 218),
    row_colors=(Color(24, 24, 28), Color(38, 38, 42)),
    padding=Box.uniform(TABLE_CELL_PADDING),
)


@dataclass(frozen=True)
class TableCell:
    text: str
    row: int
    column: int
    style: Style = field(default_factory=Style)


CellStyleFunc = Callable[[TableCell], Style | None]


@dataclass
class TableChartOption:
    header: Sequence[str] = ()
    data: Sequence[Sequence[str]] = ()
    # Relative column weights, used when ``column_widths`` is empty.
    spans: Sequence[int] = ()
    # Per column: fraction of the width (< 1), pixels (>= 1) or 0 for "share the rest".
    column_widths: Sequence[float] = ()
    text_aligns: Sequence[str] = ()
    padding: Box = field(default_factory=Box)
    font_size: float = 0.0
    font_family: str | None = None
    font_color: Color | None = None
    header_background_color: Color | None = None
    header_font_color: Color | None = None
    row_background_colors: Sequence[Color] = ()
    background_color: Color | None = None
    cell_text_style: CellStyleFunc | None = None
    cell_style: CellStyleFunc | None = None
    width: int = 0
    output: OutputType = "png"
    theme: str | Theme | None = None
    registry: Registry | None = None


@dataclass(frozen=True)
class TableRenderInfo:
    width: int
    height: int
    header_height: int
    row_heights: tuple[int, ...]
    column_widths: tuple[int, ...]


def table_column_edges(option: TableChartOption, width: int) -> list[int]:
    """X offsets of the column boundaries, ``len(header) + 1`` values from 0 to ``width``."""
    count = len(option.header)
    if option.column_widths:
        widths = divide_column_widths(width, option.column_widths, count)
        edges = [0]
        for w in widths:
            edges.append(edges[-1] + w)
        return edges
    spans = [option.spans[i] if i < len(option.spans) else 1 for i in range(count)]
    if any(span < 0 for span in spans) or sum(spans) <= 0:
        raise ChartConfigError(f"table spans must be non-negative with a positive total, got {spans}")
    return auto_divide_spans(width, sum(spans), spans)


class TableChart:
    """Header row plus data rows with word-wrapped cells."""

    def __init__(self, painter: Painter, option: TableChartOption) -> None:
        self.painter = painter
        self.option = option

    def _setting(self) -> TableSetting:
        return TABLE_DARK_SETTING if self.painter.theme.is_dark else TABLE_LIGHT_SETTING

    def layout(self, *, draw: bool = False) -> TableRenderInfo:
        """Measure every cell; with ``draw`` the texts are painted as well."""
        p = self.painter
        opt = self.option
        if not opt.header:
            raise ChartConfigError("header can not be empty")
        setting = self._setting()
        font_size = opt.font_size or TABLE_FONT_SIZE
        font_color = opt.font_color or setting.font_color
        header_font_color = opt.header_font_color or setting.header_font_color
        padding = opt.padding if not opt.padding.is_zero() else setting.padding
        edges = table_column_edges(opt, p.width)
        font_family = opt.font_family or p.font_family

        def text_align(index: int) -> str:
            return opt.text_aligns[index] if index < len(opt.text_aligns) else ""

        def render_cells(base: Style, row: int, texts: Sequence[str], top: int) -> int:
            cell_max_height = 0
            padding_height = padding.top + padding.bottom
            padding_width = padding.left + padding.right
            for index, text in enumerate(texts):
                if index + 1 >= len(edges):
                    break
                style = None
                if opt.cell_text_style is not None:
                    style = opt.cell_text_style(TableCell(text=text, row=row, column=index, style=base))
                p.set_style(style or base)
                x = edges[index] + padding.left
                width = edges[index + 1] - edges[index] - padding_width
                y = top + padding.top + int(font_size)
                if draw:
                    box = p.text_fit(text, x, y, width, text_align(index))
                else:
                    box = p.measure_text_fit(text, width)
                cell_max_height = max(cell_max_height, box.height + padding_height)
            return cell_max_height

        text_style = Style(font_family=font_family, font_size=font_size, font_color=header_font_color)
        header_height = render_cells(text_style, 0, opt.header, 0)
        height = header_height
        row_heights: list[int] = []
        text_style = text_style.merge(Style(font_color=font_color))
        for index, texts in enumerate(opt.data):
            cell_height = render_cells(text_style, index + 1, texts, height)
            row_heights.append(cell_height)
            height += cell_height

        return TableRenderInfo(
            width=p.width,
            height=height,
            header_height=header_height,
            row_heights=tuple(row_heights),
            column_widths=tuple(edges[i + 1] - edges[i] for i in range(len(edges) - 1)),
        )

    def render_with_info(self, info: TableRenderInfo) -> Box:
        p = self.painter
        opt = self.option
        setting = self._setting()
        if opt.background_color is not None:
            p.set_background(p.width, p.height, opt.background_color)

        header_color = opt.header_background_color or setting.header_color
        p.set_background(info.width, info.header_height, header_color, inside=True)
        row_colors = tuple(opt.row_background_colors) or setting.row_colors
        current = info.header_height
        for index, h in enumerate(info.row_heights):
            child = p.child(padding=Box(top=current))
            child.set_background(p.width, h, row_colors[index % len(row_colors)], inside=True)
            current += h

        if opt.cell_style is not None:
            rows = [list(opt.header)] + [list(row) for row in opt.data]
            heights = [info.header_height, *info.row_heights]
            top = 0
            for i, texts in enumerate(rows):
                left = 0
                for j, text in enumerate(texts):
                    if j >= len(info.column_widths):
                        break
                    style = opt.cell_style(TableCell(text=text, row=i, column=j))
                    if style is not None and style.fill_color is not None:
                        inset = style.padding or Box()
                        child = p.child(padding=Box(top=top + inset.top, left=left + inset.left))
                        w = info.column_widths[j] - inset.left - inset.right
                        h = heights[i] - inset.top - inset.bottom
                        child.set_background(w, h, style.fill_color, inside=True)
                    left += info.column_widths[j]
                top += heights[i]

        self.layout(draw=True)
        return Box(right=info.width, bottom=info.height)

    def render(self) -> Box:
        """Render on the painter's canvas, measuring against a scratch canvas first."""
        scratch = Painter.new(
            self.painter.width,
            _MEASURE_HEIGHT,
            output="svg",
            registry=self.painter.registry,
            theme=self.painter.theme,
            font_family=self.painter.font_family,
        )
        info = TableChart(scratch, self.option).layout()
        return self.render_with_info(info)


def render_table(option: TableChartOption) -> Painter:
    """Render a table onto a canvas whose height fits the measured rows."""
    registry = option.registry or default_registry()
    if option.width < 0:
        raise ChartConfigError(f"table width must not be negative, got {option.width}")
    width = option.width if option.width > 0 else registry.defaults.width or DEFAULT_CHART_WIDTH
    measure = Painter.new(
        width,
        _MEASURE_HEIGHT,
        output=option.output,
        registry=registry,
        theme=option.theme,
        font_family=option.font_family,
    )
    info = TableChart(measure, option).layout()
    LOGGER.debug("table %sx%s: header=%s rows=%s", info.width, info.height, info.header_height, info.row_heights)
    p = Painter.new(
        info.width,
        max(info.height, 1),
        output=option.output,
        registry=registry,
        theme=option.theme,
        font_family=option.font_family,
    )
    TableChart(p, option).render_with_info(info)
    return p


def table_render(
    header: Sequence[str],
    data: Sequence[Sequence[str]],
    spans: Sequence[int] = (),
    **kwargs,
) -> Painter:
    return render_table(TableChartOption(header=header, data=data, spans=spans, **kwargs))


def table_option_from_dict(payload: Mapping[str, Any]) -> TableChartOption:
    """Build a table option from a JSON-style mapping (camelCase or snake_case keys)."""

    def pick(*keys: str, default: Any = None) -> Any:
        for key in keys:
            if key in payload:
                return payload[key]
        return default

    header = pick("header", default=[])
    data = pick("data", default=[])
    if not isinstance(header, list) or not isinstance(data, list):
        raise ChartConfigError("`header` and `data` must be lists")
    colors = pick("rowBackgroundColors", "row_background_colors", default=[])
    header_background = pick("headerBackgroundColor", "header_background_color")
    header_font = pick("headerFontColor", "header_font_color")
    font_color = pick("fontColor", "font_color")
    background = pick("backgroundColor", "background_color")
    padding = pick("padding")
    return TableChartOption(
        header=[str(text) for text in header],
        data=[[str(text) for text in row] for row in data],
        spans=[int(v) for v in pick("spans", default=[])],
        column_widths=[float(v) for v in pick("columnWidths", "column_widths", default=[])],
        text_aligns=[str(v) for v in pick("textAligns", "text_aligns", default=[])],
        padding=Box.uniform(int(padding)) if padding is not None else Box(),
        font_size=float(pick("fontSize", "font_size", default=0) or 0),
        font_family=pick("fontFamily", "font_family"),
        font_color=parse_color(font_color) if font_color else None,
        header_background_color=parse_color(header_background) if header_background else None,
        header_font_color=parse_color(header_font) if header_font else None,
        row_background_colors=[parse_color(str(c)) for c in colors],
        background_color=parse_color(background) if background else None,
        width=int(pick("width", default=0) or 0),
        output=pick("type", "output", default="png"),
        theme=pick("theme"),
    )
