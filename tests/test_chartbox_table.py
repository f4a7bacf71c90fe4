from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

from chartbox.errors import ChartConfigError
from chartbox.geometry import Box
from chartbox.painter import Painter
from chartbox.registry import Registry
from chartbox.style import Color, Style
from chartbox.table import (
    TABLE_DARK_SETTING,
    TABLE_LIGHT_SETTING,
    TableChart,
    TableChartOption,
    render_table,
    table_column_edges,
    table_option_from_dict,
    table_render,
)
from chartbox.theme import LIGHT_THEME

from chartbox_recording import RecordingRenderer

SVG_PATH = "{http://www.w3.org/2000/svg}path"
SVG_TEXT = "{http://www.w3.org/2000/svg}text"


def _fills(root: ET.Element, color: Color) -> list[ET.Element]:
    marker = f"fill:{color.to_css()}"
    return [element for element in root.iter(SVG_PATH) if marker in element.get("style", "")]


class ColumnEdgeTests(unittest.TestCase):
    def test_spans(self) -> None:
        option = TableChartOption(header=["a", "b", "c"], spans=[1, 2, 1])
        self.assertEqual(table_column_edges(option, 400), [0, 100, 300, 400])

    def test_column_widths_take_precedence(self) -> None:
        option = TableChartOption(header=["a", "b", "c"], spans=[5, 1, 1], column_widths=[0.25, 0, 100])
        self.assertEqual(table_column_edges(option, 400), [0, 100, 300, 400])

    def test_missing_spans_default_to_one(self) -> None:
        option = TableChartOption(header=["a", "b", "c", "d"])
        self.assertEqual(table_column_edges(option, 400), [0, 100, 200, 300, 400])

    def test_spans_without_width_raise(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "spans"):
            table_column_edges(TableChartOption(header=["a", "b"], spans=[0, 0]), 400)
        with self.assertRaises(ChartConfigError):
            table_column_edges(TableChartOption(header=["a", "b"], spans=[2, -1]), 400)
        with self.assertRaises(ChartConfigError):
            table_render(["a", "b"], [["1", "2"]], spans=[0, 0], output="svg")


class TableLayoutTests(unittest.TestCase):
    def _chart(self, option: TableChartOption) -> tuple[TableChart, RecordingRenderer]:
        renderer = RecordingRenderer(400, 300)
        painter = Painter(renderer, Box.sized(400, 300), registry=Registry(), theme=LIGHT_THEME)
        return TableChart(painter, option), renderer

    def test_rows_grow_with_wrapped_text(self) -> None:
        option = TableChartOption(header=["a", "b"], data=[["short", " ".join(["word"] * 10)]])
        chart, renderer = self._chart(option)
        info = chart.layout()
        self.assertEqual(info.header_height, 32)
        self.assertEqual(info.row_heights, (49,))
        self.assertEqual(info.height, 81)
        self.assertEqual(info.column_widths, (200, 200))
        self.assertEqual(renderer.texts, [])

    def test_draw_aligns_and_colours_text(self) -> None:
        option = TableChartOption(header=["name", "age"], data=[["Bob", "7"]], text_aligns=["", "right"])
        chart, renderer = self._chart(option)
        chart.render_with_info(chart.layout())
        drawn = {body: (x, y, style) for body, x, y, style, _rotation in renderer.texts}
        self.assertEqual(drawn["age"][0], 400 - 10 - 18)
        self.assertEqual(drawn["name"][2].font_color, TABLE_LIGHT_SETTING.header_font_color)
        self.assertEqual(drawn["Bob"][2].font_color, TABLE_LIGHT_SETTING.font_color)
        self.assertEqual(drawn["Bob"][1], 32 + 10 + 12)

    def test_header_is_required(self) -> None:
        chart, _renderer = self._chart(TableChartOption(data=[["x"]]))
        with self.assertRaisesRegex(ChartConfigError, "header can not be empty"):
            chart.layout()


class RenderTableTests(unittest.TestCase):
    def test_svg_canvas_fits_rows(self) -> None:
        painter = table_render(["Name", "Age"], [["Alice", "30"], ["Bob", "25"]], output="svg", width=300)
        root = ET.fromstring(painter.bytes())
        self.assertEqual(root.get("width"), "300")
        self.assertEqual(int(root.get("height")), painter.height)
        texts = [element.text for element in root.iter(SVG_TEXT)]
        for text in ("Name", "Age", "Alice", "30", "Bob", "25"):
            self.assertIn(text, texts)
        self.assertTrue(_fills(root, TABLE_LIGHT_SETTING.header_color))

    def test_dark_theme_uses_dark_setting(self) -> None:
        root = ET.fromstring(table_render(["a"], [["1"]], output="svg", theme="dark").bytes())
        self.assertTrue(_fills(root, TABLE_DARK_SETTING.header_color))
        self.assertFalse(_fills(root, TABLE_LIGHT_SETTING.header_color))

    def test_cell_style_fills_matching_cells(self) -> None:
        highlight = Color(255, 0, 0)

        def cell_style(cell):
            if cell.row == 1 and cell.column == 1:
                return Style(fill_color=highlight)
            return None

        option = TableChartOption(header=["a", "b"], data=[["1", "2"]], output="svg", cell_style=cell_style)
        root = ET.fromstring(render_table(option).bytes())
        self.assertEqual(len(_fills(root, highlight)), 1)

    def test_empty_header_raises(self) -> None:
        with self.assertRaises(ChartConfigError):
            render_table(TableChartOption(output="svg"))

    def test_negative_width_raises(self) -> None:
        with self.assertRaisesRegex(ChartConfigError, "-5"):
            table_render(["a"], [["1"]], output="svg", width=-5)


class TableOptionFromDictTests(unittest.TestCase):
    def test_camel_case_payload(self) -> None:
        option = table_option_from_dict(
            {
                "header": ["Name", "Score"],
                "data": [["a", 1], ["b", 2.5]],
                "columnWidths": [0.5, 0],
                "padding": 5,
                "headerBackgroundColor": "#ff0000",
                "rowBackgroundColors": ["#fff", "#eee"],
                "type": "svg",
                "width": 500,
            }
        )
        self.assertEqual(option.data, [["a", "1"], ["b", "2.5"]])
        self.assertEqual(option.column_widths, [0.5, 0.0])
        self.assertEqual(option.padding, Box.uniform(5))
        self.assertEqual(option.header_background_color, Color(255, 0, 0))
        self.assertEqual(len(option.row_background_colors), 2)
        self.assertEqual((option.output, option.width), ("svg", 500))

    def test_snake_case_and_defaults(self) -> None:
        option = table_option_from_dict({"header": ["x"], "data": [], "font_size": 14})
        self.assertEqual(option.font_size, 14.0)
        self.assertEqual(option.output, "png")
        self.assertTrue(option.padding.is_zero())

    def test_rejects_non_list_rows(self) -> None:
        with self.assertRaises(ChartConfigError):
            table_option_from_dict({"header": "Name", "data": []})


if __name__ == "__main__":
    unittest.main()
