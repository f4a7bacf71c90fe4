from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
import logging
import math
from typing import Literal

from chartbox.config import DEFAULT_DOT_RADIUS, DEFAULT_TEXT_LINE_SPACING, OutputType
from chartbox.errors import ChartConfigError
from chartbox.formatting import ValueFormatter
from chartbox.geometry import BOX_ZERO, Box, Point, auto_divide, auto_divide_spans, polygon_points
from chartbox.registry import Registry, default_registry
from chartbox.render import Renderer, new_renderer
from chartbox.render.path import Path
from chartbox.style import Style
from chartbox.theme import Theme

LOGGER = logging.getLogger(__name__)

Orient = Literal["horizontal", "vertical"]

ORIENT_HORIZONTAL: Orient = "horizontal"
ORIENT_VERTICAL: Orient = "vertical"

POSITION_LEFT = "left"
POSITION_RIGHT = "right"
POSITION_TOP = "top"
POSITION_BOTTOM = "bottom"
POSITION_CENTER = "center"

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"

ICON_RECT = "rect"


@dataclass(frozen=True)
class TicksOption:
    count: int
    length: int
    orient: Orient = ORIENT_HORIZONTAL
    unit: int = 1
    first: int = 0


@dataclass(frozen=True)
class MultiTextOption:
    """Labels spread over the painter; ``position`` left/top pins them to ticks instead of slots."""

    text_list: Sequence[str]
    orient: Orient = ORIENT_HORIZONTAL
    unit: int = 0
    position: str = ""
    align: str = ""
    text_rotation: float = 0.0
    offset: Box = BOX_ZERO
    first: int = 0


@dataclass(frozen=True)
class GridOption:
    column: int = 0
    row: int = 0
    column_spans: Sequence[int] = ()
    ignore_column_lines: Sequence[int] = ()
    ignore_row_lines: Sequence[int] = ()


class Painter:
    """Drawing handle bound to a ``Box`` of a shared renderer.

    Coordinates passed to drawing methods are local to the box and are
    translated by ``box.left``/``box.top`` before reaching the renderer.
    """

    def __init__(
        self,
        renderer: Renderer,
        box: Box,
        *,
        registry: Registry,
        theme: Theme,
        font_family: str | None = None,
        value_formatter: ValueFormatter | None = None,
        drawing_style: Style | None = None,
        text_style: Style | None = None,
    ) -> None:
        self.renderer = renderer
        self.box = box
        self.registry = registry
        self.theme = theme
        self.font_family = font_family
        self.value_formatter = value_formatter
        self.drawing_style = drawing_style or Style()
        self.text_style = text_style or Style()
        self.rotation = 0.0
        self._path = Path()

    @classmethod
    def new(
        cls,
        width: int,
        height: int,
        *,
        output: OutputType = "svg",
        registry: Registry | None = None,
        theme: str | Theme | None = None,
        font_family: str | None = None,
        value_formatter: ValueFormatter | None = None,
    ) -> Painter:
        if width <= 0 or height <= 0:
            raise ChartConfigError(f"width and height must be > 0, got {width}x{height}")
        registry = registry or default_registry()
        resolved = theme if isinstance(theme, Theme) else registry.get_theme(theme)
        renderer = new_renderer(output, width, height, registry)
        return cls(
            renderer,
            Box.sized(width, height),
            registry=registry,
            theme=resolved,
            font_family=font_family,
            value_formatter=value_formatter,
        )

    def child(
        self,
        *,
        padding: Box | None = None,
        box: Box | None = None,
        theme: Theme | None = None,
        font_family: str | None = None,
    ) -> Painter:
        """Return a painter over a sub-region.

        ``padding`` shrinks the current box by insets; ``box`` replaces it with
        an absolute canvas rectangle. The two cannot be combined.
        """
        if padding is not None and box is not None:
            raise ChartConfigError("child painter accepts either padding or box, not both")
        next_box = self.box
        if padding is not None:
            next_box = self.box.pad(padding)
        elif box is not None:
            next_box = box
        if next_box.width < 0 or next_box.height < 0:
            LOGGER.warning("child box %s has a negative extent; the canvas is too small for its layout", next_box)
        return Painter(
            self.renderer,
            next_box,
            registry=self.registry,
            theme=theme or self.theme,
            font_family=font_family or self.font_family,
            value_formatter=self.value_formatter,
            drawing_style=self.drawing_style,
            text_style=self.text_style,
        )

    @property
    def width(self) -> int:
        return self.box.width

    @property
    def height(self) -> int:
        return self.box.height

    def bytes(self) -> bytes:
        return self.renderer.save()

    # styles

    def set_style(self, style: Style) -> Painter:
        self.drawing_style = style
        self.text_style = style
        return self

    def set_drawing_style(self, style: Style) -> Painter:
        self.drawing_style = style
        return self

    def set_text_style(self, style: Style) -> Painter:
        self.text_style = style
        return self

    def override_drawing_style(self, style: Style) -> Painter:
        self.drawing_style = self.drawing_style.merge(style)
        return self

    def override_text_style(self, style: Style) -> Painter:
        self.text_style = self.text_style.merge(style)
        return self

    def set_text_rotation(self, radians: float) -> Painter:
        self.rotation = radians
        return self

    def clear_text_rotation(self) -> Painter:
        self.rotation = 0.0
        return self

    def resolved_text_style(self) -> Style:
        style = self.text_style
        return Style(
            font_family=style.font_family or self.font_family,
            font_size=style.font_size or self.theme.font_size,
            font_color=style.font_color or self.theme.text_color,
        ).merge(
            Style(text_wrap=style.text_wrap, text_line_spacing=style.text_line_spacing)
        )

    # path building

    def move_to(self, x: int, y: int) -> Painter:
        self._path.move_to(x + self.box.left, y + self.box.top)
        return self

    def line_to(self, x: int, y: int) -> Painter:
        self._path.line_to(x + self.box.left, y + self.box.top)
        return self

    def arc_to(self, cx: int, cy: int, rx: float, ry: float, start: float, delta: float) -> Painter:
        self._path.arc_to(cx + self.box.left, cy + self.box.top, rx, ry, start, delta)
        return self

    def quad_curve_to(self, cx: int, cy: int, x: int, y: int) -> Painter:
        self._path.quad_curve_to(cx + self.box.left, cy + self.box.top, x + self.box.left, y + self.box.top)
        return self

    def close(self) -> Painter:
        self._path.close()
        return self

    def circle(self, radius: float, x: int, y: int) -> Painter:
        self._path.circle(radius, x + self.box.left, y + self.box.top)
        return self

    def _flush(self, style: Style, *, fill: bool, stroke: bool) -> None:
        path = self._path
        self._path = Path()
        if path.is_empty():
            return
        self.renderer.draw_path(path, style, fill=fill, stroke=stroke)

    def stroke(self) -> Painter:
        self._flush(self.drawing_style, fill=False, stroke=True)
        return self

    def fill(self) -> Painter:
        self._flush(self.drawing_style, fill=True, stroke=False)
        return self

    def fill_stroke(self) -> Painter:
        self._flush(self.drawing_style, fill=True, stroke=True)
        return self

    # shapes

    def set_background(self, width: int, height: int, color, *, inside: bool = False) -> Painter:
        """Fill a rectangle; unless ``inside`` it is anchored at the canvas origin."""
        left = self.box.left if inside else 0
        top = self.box.top if inside else 0
        path = Path()
        path.move_to(left, top)
        path.line_to(left + width, top)
        path.line_to(left + width, top + height)
        path.line_to(left, top + height)
        path.close()
        self.renderer.draw_path(path, Style(fill_color=color), fill=True, stroke=False)
        return self

    def rect(self, box: Box) -> Painter:
        self.move_to(box.left, box.top)
        self.line_to(box.right, box.top)
        self.line_to(box.right, box.bottom)
        self.line_to(box.left, box.bottom)
        self.line_to(box.left, box.top)
        return self.fill_stroke()

    def rounded_rect(self, box: Box, radius: int) -> Painter:
        radius = min(radius, box.width // 2)
        r = float(radius)
        self.move_to(box.left + radius, box.top)
        self.line_to(box.right - radius, box.top)
        self.arc_to(box.right - radius, box.top + radius, r, r, -math.pi / 2, math.pi / 2)
        self.line_to(box.right, box.bottom - radius)
        self.arc_to(box.right - radius, box.bottom - radius, r, r, 0.0, math.pi / 2)
        self.line_to(box.left + radius, box.bottom)
        self.arc_to(box.left + radius, box.bottom - radius, r, r, math.pi / 2, math.pi / 2)
        self.line_to(box.left, box.top + radius)
        self.arc_to(box.left + radius, box.top + radius, r, r, math.pi, math.pi / 2)
        self.close()
        return self.fill_stroke()

    def pin(self, x: int, y: int, width: int) -> Painter:
        """Map-pin marker whose head is centred on ``(x, y - width/4)``."""
        r = width / 2
        y -= width // 4
        angle = math.radians(15)
        self.arc_to(x, y, r, r, math.pi / 2 + angle, 2 * math.pi - 2 * angle)
        self.line_to(x, y)
        self.close()
        self.fill_stroke()

        self.move_to(x - int(r), y)
        self.quad_curve_to(x, y + int(r * 2.5), x + int(r), y)
        self.close()
        return self.fill()

    def _arrow(self, x: int, y: int, width: int, height: int, direction: str, style: Style) -> None:
        half_width = width >> 1
        half_height = height >> 1
        if direction in (POSITION_TOP, POSITION_BOTTOM):
            x0 = x - half_width
            x1 = x0 + width
            dy = -height // 3
            y0 = y
            y1 = y0 - height
            if direction == POSITION_BOTTOM:
                y0 = y - height
                y1 = y
                dy = 2 * dy
            self.move_to(x0, y0)
            self.line_to(x0 + half_width, y1)
            self.line_to(x1, y0)
            self.line_to(x0 + half_width, y + dy)
            self.line_to(x0, y0)
        else:
            x0 = x + width
            x1 = x0 - width
            y0 = y - half_height
            dx = -width // 3
            if direction == POSITION_RIGHT:
                x0 = x - width
                dx = -dx
                x1 = x0 + width
            self.move_to(x0, y0)
            self.line_to(x1, y0 + half_height)
            self.line_to(x0, y0 + height)
            self.line_to(x0 + dx, y0 + half_height)
            self.line_to(x0, y0)
        self._flush(style, fill=True, stroke=True)

    def arrow_left(self, x: int, y: int, width: int, height: int) -> Painter:
        self._arrow(x, y, width, height, POSITION_LEFT, self.drawing_style)
        return self

    def arrow_right(self, x: int, y: int, width: int, height: int) -> Painter:
        self._arrow(x, y, width, height, POSITION_RIGHT, self.drawing_style)
        return self

    def arrow_top(self, x: int, y: int, width: int, height: int) -> Painter:
        self._arrow(x, y, width, height, POSITION_TOP, self.drawing_style)
        return self

    def arrow_bottom(self, x: int, y: int, width: int, height: int) -> Painter:
        self._arrow(x, y, width, height, POSITION_BOTTOM, self.drawing_style)
        return self

    def mark_line(self, x: int, y: int, width: int) -> Painter:
        """Dot, dashed rule and arrow head from ``x`` to ``x + width``."""
        arrow_width = 16
        arrow_height = 10
        end_x = x + width
        style = self.drawing_style
        self.circle(3, x, y)
        self._flush(style, fill=True, stroke=False)
        self.move_to(x + 5, y)
        self.line_to(end_x - arrow_width, y)
        self._flush(style, fill=False, stroke=True)
        self._arrow(end_x, y, arrow_width, arrow_height, POSITION_RIGHT, replace(style, stroke_dash_array=None))
        return self

    def polygon(self, center: Point, radius: float, sides: int) -> Painter:
        points = polygon_points(center, radius, sides)
        for i, item in enumerate(points):
            if i == 0:
                self.move_to(item.x, item.y)
            else:
                self.line_to(item.x, item.y)
        self.line_to(points[0].x, points[0].y)
        return self.stroke()

    def line_stroke(self, points: Sequence[Point | None]) -> Painter:
        """Stroke a polyline; ``None`` entries break it into separate runs."""
        should_move = True
        for point in points:
            if point is None:
                should_move = True
                continue
            if should_move:
                self.move_to(point.x, point.y)
                should_move = False
            else:
                self.line_to(point.x, point.y)
        return self.stroke()

    def smooth_line_stroke(self, points: Sequence[Point | None]) -> Painter:
        """Stroke a curve through the points using quadratic segments between midpoints."""
        run: list[Point] = []
        for point in list(points) + [None]:
            if point is not None:
                run.append(point)
                continue
            if len(run) == 1:
                self.move_to(run[0].x, run[0].y)
            elif run:
                self.move_to(run[0].x, run[0].y)
                for prev, current in zip(run[1:-1], run[2:]):
                    self.quad_curve_to(prev.x, prev.y, (prev.x + current.x) >> 1, (prev.y + current.y) >> 1)
                self.line_to(run[-1].x, run[-1].y)
            run = []
        return self.stroke()

    def fill_area(self, points: Sequence[Point]) -> Painter:
        for i, point in enumerate(points):
            if i == 0:
                self.move_to(point.x, point.y)
            else:
                self.line_to(point.x, point.y)
        return self.fill()

    def dots(self, points: Sequence[Point | None], radius: float = DEFAULT_DOT_RADIUS) -> Painter:
        for point in points:
            if point is not None:
                self.circle(radius, point.x, point.y)
        return self.fill_stroke()

    def legend_line_dot(self, box: Box) -> Painter:
        stroke_width = 3
        dot_height = 5
        center = ((box.height - stroke_width) >> 1) - 1
        style = self.drawing_style.merge(Style(stroke_width=float(stroke_width)))
        self.move_to(box.left, box.top - center)
        self.line_to(box.right, box.top - center)
        self._flush(style, fill=False, stroke=True)
        self.circle(dot_height, box.left + (box.width >> 1), box.top - center)
        self._flush(style, fill=True, stroke=True)
        return self

    def ticks(self, option: TicksOption) -> Painter:
        if option.count <= 0 or option.length <= 0:
            return self
        unit = option.unit if option.unit > 1 else 1
        vertical = option.orient == ORIENT_VERTICAL
        values = auto_divide(self.height if vertical else self.width, option.count)
        for index, value in enumerate(values):
            if index < option.first or (index - option.first) % unit != 0:
                continue
            if vertical:
                self.line_stroke([Point(0, value), Point(option.length, value)])
            else:
                self.line_stroke([Point(value, option.length), Point(value, 0)])
        return self

    def multi_text(self, option: MultiTextOption) -> Painter:
        if not option.text_list:
            return self
        count = len(option.text_list)
        centered = True
        show_index = option.unit // 2
        if option.position in (POSITION_LEFT, POSITION_TOP):
            centered = False
            count -= 1
            show_index = 0
        vertical = option.orient == ORIENT_VERTICAL
        values = auto_divide(self.height if vertical else self.width, max(count, 1))
        rotated = option.text_rotation != 0
        for index, text in enumerate(option.text_list):
            if index < option.first:
                continue
            if option.unit != 0 and (index - option.first) % option.unit != show_index:
                continue
            if index >= len(values) or (centered and index + 1 >= len(values)):
                continue
            if rotated:
                self.set_text_rotation(option.text_rotation)
            box = self.measure_text(text)
            start = values[index]
            if centered:
                start = (values[index] + values[index + 1]) >> 1
            x = 0
            y = 0
            if vertical:
                y = start + (box.height >> 1)
                if option.align == ALIGN_RIGHT:
                    x = self.width - box.width
                elif option.align == ALIGN_CENTER:
                    x = (self.width - box.width) >> 1
            else:
                x = start - (box.width >> 1)
            self.text(text, x + option.offset.left, y + option.offset.top)
        if rotated:
            self.clear_text_rotation()
        return self

    def grid(self, option: GridOption) -> Painter:
        def draw_lines(values: Sequence[int], ignore: Sequence[int], vertical: bool) -> None:
            for index, v in enumerate(values):
                if index in ignore:
                    continue
                if vertical:
                    self.line_stroke([Point(v, 0), Point(v, self.height)])
                else:
                    self.line_stroke([Point(0, v), Point(self.width, v)])

        column_count = sum(option.column_spans) or option.column
        if column_count > 0:
            values = auto_divide_spans(self.width, column_count, option.column_spans)
            draw_lines(values, option.ignore_column_lines, True)
        if option.row > 0:
            draw_lines(auto_divide(self.height, option.row), option.ignore_row_lines, False)
        return self

    # text

    def measure_text(self, text: str) -> Box:
        return self.renderer.measure_text(text, self.resolved_text_style(), self.rotation)

    def measure_text_max_width_height(self, texts: Sequence[str]) -> tuple[int, int]:
        max_width = 0
        max_height = 0
        for text in texts:
            box = self.measure_text(text)
            max_width = max(max_width, box.width)
            max_height = max(max_height, box.height)
        return max_width, max_height

    def text(self, body: str, x: int, y: int) -> Painter:
        """Draw ``body`` with its baseline starting at ``(x, y)``."""
        self.renderer.draw_text(body, x + self.box.left, y + self.box.top, self.resolved_text_style(), self.rotation)
        return self

    def text_rotation(self, body: str, x: int, y: int, radians: float) -> Painter:
        previous = self.rotation
        self.rotation = radians
        self.text(body, x, y)
        self.rotation = previous
        return self

    def wrap_text(self, body: str, width: int) -> list[str]:
        """Break ``body`` into lines no wider than ``width`` (by word unless text_wrap is ``rune``)."""
        by_rune = self.text_style.text_wrap == "rune"
        lines: list[str] = []
        for paragraph in body.split("\n"):
            tokens = list(paragraph) if by_rune else paragraph.split(" ")
            joiner = "" if by_rune else " "
            line = ""
            for token in tokens:
                candidate = token if not line else f"{line}{joiner}{token}"
                if line and self.measure_text(candidate).width > width:
                    lines.append(line)
                    line = token
                else:
                    line = candidate
            lines.append(line)
        return lines

    def measure_text_fit(self, body: str, width: int) -> Box:
        return self._text_fit(body, 0, 0, width, ALIGN_LEFT, draw=False)

    def text_fit(self, body: str, x: int, y: int, width: int, align: str = ALIGN_LEFT) -> Box:
        """Draw word-wrapped text; ``y`` is the first baseline. Returns the occupied size."""
        return self._text_fit(body, x, y, width, align, draw=True)

    def _text_fit(self, body: str, x: int, y: int, width: int, align: str, *, draw: bool) -> Box:
        spacing = self.text_style.text_line_spacing
        if spacing is None:
            spacing = DEFAULT_TEXT_LINE_SPACING
        lines = self.wrap_text(body, width)
        right = 0
        bottom = 0
        for index, line in enumerate(lines):
            line_box = self.measure_text(line)
            if draw:
                x0 = x
                if align == ALIGN_CENTER:
                    x0 = x + ((width - line_box.width) >> 1)
                elif align == ALIGN_RIGHT:
                    x0 = x + width - line_box.width
                self.text(line, x0, y + bottom)
            right = max(right, line_box.right)
            bottom += line_box.height
            if index < len(lines) - 1:
                bottom += spacing
        return Box(right=right, bottom=bottom)
