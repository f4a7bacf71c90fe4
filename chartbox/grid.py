from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartbox.geometry import BOX_ZERO, Box
from chartbox.painter import GridOption, Painter
from chartbox.style import Color, Style


@dataclass(frozen=True)
class GridPainterOption:
    stroke_width: float = 0.0
    stroke_color: Color | None = None
    column: int = 0
    row: int = 0
    column_spans: Sequence[int] = ()
    ignore_first_row: bool = False
    ignore_last_row: bool = False
    ignore_first_column: bool = False
    ignore_last_column: bool = False


class GridPainter:
    def __init__(self, painter: Painter, option: GridPainterOption) -> None:
        self.painter = painter
        self.option = option

    def render(self) -> Box:
        opt = self.option
        ignore_columns: list[int] = []
        ignore_rows: list[int] = []
        if opt.ignore_first_column:
            ignore_columns.append(0)
        if opt.ignore_last_column:
            ignore_columns.append(len(opt.column_spans) or opt.column)
        if opt.ignore_first_row:
            ignore_rows.append(0)
        if opt.ignore_last_row:
            ignore_rows.append(opt.row)
        self.painter.set_drawing_style(
            Style(
                stroke_width=opt.stroke_width or 1.0,
                stroke_color=opt.stroke_color or self.painter.theme.axis_split_line_color,
            )
        )
        self.painter.grid(
            GridOption(
                column=opt.column,
                row=opt.row,
                column_spans=opt.column_spans,
                ignore_column_lines=ignore_columns,
                ignore_row_lines=ignore_rows,
            )
        )
        return BOX_ZERO
