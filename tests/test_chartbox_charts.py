from __future__ import annotations

from dataclasses import replace
import math
import unittest

from chartbox.axis import XAxisOption, YAxisOption
from chartbox.charts import (
    BarChart,
    BarChartOption,
    HorizontalBarChart,
    HorizontalBarChartOption,
    bar_layout,
    funnel_tiers,
    new_radar_indicators,
    pie_sectors,
)
from chartbox.charts.funnel import sort_funnel_series
from chartbox.charts.line import line_x_values
from chartbox.charts.pie import pie_label_end_y
from chartbox.charts.radar import RadarIndicator, resolve_indicators
from chartbox.config import LABEL_FONT_SIZE, SMALL_LABEL_FONT_SIZE
from chartbox.errors import ChartConfigError
from chartbox.geometry import Box, Point
from chartbox.label import LabelValue, SeriesLabelPainter
from chartbox.layout import DefaultRenderOption, default_render
from chartbox.legend import LegendOption
from chartbox.mark import (
    MARK_LINE_DASH,
    MarkLinePainter,
    MarkLineRenderOption,
    MarkPointPainter,
    MarkPointRenderOption,
)
from chartbox.painter import ORIENT_HORIZONTAL, ORIENT_VERTICAL, Painter
from chartbox.range import AxisRange
from chartbox.registry import Registry
from chartbox.render.path import ArcTo, LineTo, MoveTo
from chartbox.series import (
    CHART_TYPE_BAR,
    CHART_TYPE_FUNNEL,
    CHART_TYPE_HORIZONTAL_BAR,
    MARK_TYPE_AVERAGE,
    MARK_TYPE_MAX,
    MARK_TYPE_MIN,
    Series,
    SeriesLabel,
    SeriesMarkData,
    SeriesMarkLine,
    SeriesMarkPoint,
    filter_series,
    new_series_data,
    new_series_list,
)
from chartbox.style import Color, Style
from chartbox.theme import LIGHT_THEME

from chartbox_recording import RecordingRenderer

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


class BarLayoutTests(unittest.TestCase):
    def test_slot_is_filled_up_to_rounding(self) -> None:
        for slot in range(20, 200, 7):
            for count in range(1, 5):
                with self.subTest(slot=slot, count=count):
                    layout = bar_layout(slot, count)
                    used = 2 * layout.margin + count * layout.bar_width + (count - 1) * layout.bar_margin
                    self.assertGreaterEqual(slot - used, 0)
                    self.assertLess(slot - used, max(count, 2))

    def test_margins_shrink_with_narrow_slots(self) -> None:
        self.assertEqual(bar_layout(100, 2), bar_layout(100, 2, bar_margin=5))
        self.assertEqual((bar_layout(40, 1).margin, bar_layout(40, 2).bar_margin), (5, 3))
        self.assertEqual((bar_layout(15, 1).margin, bar_layout(15, 2).bar_margin), (2, 2))

    def test_explicit_bar_width_recentres(self) -> None:
        layout = bar_layout(100, 2, bar_width=20)
        self.assertEqual(layout.bar_width, 20)
        self.assertEqual(layout.margin, (100 - 40 - 5) // 2)
        self.assertEqual(bar_layout(100, 2, bar_width=500).bar_width, (100 - 20 - 5) // 2)


class PieSectorTests(unittest.TestCase):
    def test_sectors_close_the_circle(self) -> None:
        sectors = pie_sectors([1048, 735, 580, 484, 300])
        self.assertAlmostEqual(sectors[0].start, -math.pi / 2)
        self.assertAlmostEqual(sum(s.delta for s in sectors), 2 * math.pi)
        self.assertAlmostEqual(sectors[-1].end, 3 * math.pi / 2)
        for prev, current in zip(sectors, sectors[1:]):
            self.assertAlmostEqual(prev.end, current.start)
        self.assertAlmostEqual(sum(s.percent for s in sectors), 1.0)

    def test_non_positive_total_raises(self) -> None:
        with self.assertRaises(ChartConfigError):
            pie_sectors([0, 0])


class FunnelTests(unittest.TestCase):
    def test_tiers_shrink_towards_the_bottom(self) -> None:
        tiers = funnel_tiers([100, 75, 50, 25, 12.5], 400, 300)
        self.assertEqual([t.height for t in tiers], [58] * 5)
        self.assertEqual([t.top for t in tiers], [0, 60, 120, 180, 240])
        self.assertEqual([t.top_width for t in tiers], [400, 300, 200, 100, 50])
        self.assertEqual(tiers[-1].bottom_width, 0)
        for tier in tiers:
            self.assertGreaterEqual(tier.top_width, tier.bottom_width)
        self.assertAlmostEqual(tiers[2].percent, 0.5)

    def test_equal_bounds_use_full_width(self) -> None:
        tiers = funnel_tiers([5, 5], 200, 100, max_value=5, min_value=5)
        self.assertEqual([t.top_width for t in tiers], [200, 200])

    def test_sort_is_stable_and_descending(self) -> None:
        series_list = [
            Series(data=new_series_data([v]), type=CHART_TYPE_FUNNEL, name=name)
            for name, v in (("a", 20), ("b", 60), ("c", 20), ("d", 100))
        ]
        self.assertEqual([s.name for s in sort_funnel_series(series_list)], ["d", "b", "a", "c"])


class RadarTests(unittest.TestCase):
    def test_needs_three_indicators(self) -> None:
        with self.assertRaises(ChartConfigError):
            resolve_indicators(new_radar_indicators(["a", "b"], [1, 1]), [])

    def test_indicator_lengths_must_match(self) -> None:
        with self.assertRaises(ChartConfigError):
            new_radar_indicators(["a", "b", "c"], [1, 2])

    def test_missing_max_uses_series_maximum(self) -> None:
        indicators = [RadarIndicator("a", 10), RadarIndicator("b"), RadarIndicator("c", 5)]
        series_list = new_series_list([[1, 7, 2], [3, 9, None]], "radar")
        resolved = resolve_indicators(indicators, series_list)
        self.assertEqual([i.max for i in resolved], [10, 9, 5])


class LineTests(unittest.TestCase):
    def test_boundary_gap_centres_points(self) -> None:
        values = line_x_values(600, 12, True)
        self.assertEqual(len(values), 12)
        self.assertEqual(values[:2], [25, 75])

    def test_without_boundary_gap_points_hit_edges(self) -> None:
        values = line_x_values(600, 12, False)
        self.assertEqual(len(values), 12)
        self.assertEqual((values[0], values[-1]), (0, 600))


class BarChartRenderTests(unittest.TestCase):
    def test_two_series_over_twelve_months(self) -> None:
        renderer = RecordingRenderer()
        painter = Painter(renderer, Box.sized(600, 400), registry=Registry(), theme=LIGHT_THEME)
        series_list = new_series_list(
            [
                [2.0, 4.9, 7.0, 23.2, 25.6, 76.7, 135.6, 162.2, 32.6, 20.0, 6.4, 3.3],
                [2.6, 5.9, 9.0, 26.4, 28.7, 70.7, 175.6, 182.2, 48.7, 18.8, 6.0, 2.3],
            ],
            CHART_TYPE_BAR,
        )
        option = BarChartOption(
            series_list=series_list,
            theme=LIGHT_THEME,
            padding=Box.uniform(10),
            x_axis=XAxisOption(data=MONTHS),
        )
        chart = BarChart(painter, option)
        result = default_render(painter, chart.default_render_option())
        self.assertIsInstance(chart.default_render_option(), DefaultRenderOption)
        self.assertGreater(result.axis_width_left, 0)
        self.assertEqual(result.series_painter.width, 600 - 20 - result.axis_width_left)

        renderer.paths.clear()
        chart.render_series(result, filter_series(result.series_list, CHART_TYPE_BAR))
        for index in range(2):
            color = LIGHT_THEME.series_color(index)
            bars = [item for item in renderer.paths if item[2] and item[1].fill_color == color]
            self.assertEqual(len(bars), 12)

        series_box = result.series_painter.box
        for path, _style, _fill, _stroke in renderer.paths:
            for command in path.commands:
                self.assertGreaterEqual(command.x, series_box.left)
                self.assertLessEqual(command.x, series_box.right)


def _painter(renderer: RecordingRenderer) -> Painter:
    return Painter(renderer, Box.sized(renderer.width, renderer.height), registry=Registry(), theme=LIGHT_THEME)


class RotatingRecordingRenderer(RecordingRenderer):
    """Quarter-turn text swaps the measured width and height."""

    def measure_text(self, body, style, rotation=0.0) -> Box:
        box = super().measure_text(body, style, rotation)
        if rotation:
            return Box(right=box.height, bottom=box.width)
        return box


class DefaultRenderLayoutTests(unittest.TestCase):
    def _render(self, legend: LegendOption) -> tuple[RecordingRenderer, Painter]:
        renderer = RecordingRenderer()
        painter = _painter(renderer)
        option = DefaultRenderOption(
            theme=LIGHT_THEME,
            series_list=new_series_list([[1, 2], [3, 4]], CHART_TYPE_BAR),
            padding=Box.uniform(10),
            x_axis=XAxisOption(data=["x", "y"]),
            legend=legend,
        )
        return renderer, default_render(painter, option).series_painter

    def test_legend_without_title_reserves_its_strip(self) -> None:
        renderer, series_painter = self._render(LegendOption(data=["A", "B"]))
        legend_y = max(y for body, _x, y, _style, _rotation in renderer.texts if body in ("A", "B"))
        self.assertEqual(legend_y, 25)
        self.assertEqual(series_painter.box.top, 10 + 15 + 20)

    def test_vertical_legend_keeps_the_top(self) -> None:
        _renderer, series_painter = self._render(LegendOption(data=["A", "B"], orient=ORIENT_VERTICAL))
        self.assertEqual(series_painter.box.top, 10)

    def test_no_legend_no_title_keeps_the_padding(self) -> None:
        _renderer, series_painter = self._render(LegendOption())
        self.assertEqual(series_painter.box.top, 10)


class MarkPointPainterTests(unittest.TestCase):
    def test_pins_sit_on_max_and_min_points(self) -> None:
        renderer = RecordingRenderer()
        painter = _painter(renderer)
        series = Series(
            data=new_series_data([5, 123456, 1]),
            type=CHART_TYPE_BAR,
            mark_point=SeriesMarkPoint(data=(SeriesMarkData(MARK_TYPE_MAX), SeriesMarkData(MARK_TYPE_MIN))),
        )
        red = Color(255, 0, 0)
        mark_painter = MarkPointPainter(painter)
        mark_painter.add(
            MarkPointRenderOption(
                fill_color=red,
                series=series,
                points=[Point(100, 200), Point(200, 50), Point(300, 300)],
            )
        )
        mark_painter.render()

        # Two paths per pin: the head and the tail.
        self.assertEqual(len(renderer.paths), 4)
        heads = [renderer.paths[0][0].commands[0], renderer.paths[2][0].commands[0]]
        self.assertEqual([(head.cx, head.cy) for head in heads], [(200, 50 - 15 - 7), (300, 300 - 15 - 7)])
        self.assertTrue(all(style.fill_color == red for _path, style, _fill, _stroke in renderer.paths))

        texts = {body: (x, y, style.font_size) for body, x, y, style, _rotation in renderer.texts}
        # "123.45k" is 35px at the label font, wider than the 30px pin.
        self.assertEqual(texts["123.45k"], (200 - 14, 50 - 15 - 2, SMALL_LABEL_FONT_SIZE))
        self.assertEqual(texts["1"], (300 - 2, 300 - 15 - 2, LABEL_FONT_SIZE))

    def test_average_only_draws_nothing(self) -> None:
        renderer = RecordingRenderer()
        series = Series(
            data=new_series_data([1, 2]),
            mark_point=SeriesMarkPoint(data=(SeriesMarkData(MARK_TYPE_AVERAGE),)),
        )
        mark_painter = MarkPointPainter(_painter(renderer))
        mark_painter.add(MarkPointRenderOption(fill_color=Color(0, 0, 255), series=series, points=[Point(0, 0)] * 2))
        mark_painter.render()
        self.assertEqual((renderer.paths, renderer.texts), ([], []))


class MarkLinePainterTests(unittest.TestCase):
    def test_rules_follow_the_range(self) -> None:
        renderer = RecordingRenderer()
        series = Series(
            data=new_series_data([20, 80, 50]),
            mark_line=SeriesMarkLine(data=(SeriesMarkData(MARK_TYPE_AVERAGE), SeriesMarkData(MARK_TYPE_MAX))),
        )
        axis_range = AxisRange(min=0, max=100, divide_count=5, size=300)
        color = Color(0, 128, 0)
        mark_painter = MarkLinePainter(_painter(renderer))
        mark_painter.add(
            MarkLineRenderOption(
                fill_color=color,
                font_color=color,
                stroke_color=color,
                series=series,
                range=axis_range,
            )
        )
        mark_painter.render()

        rules = [
            path.commands
            for path, style, fill, stroke in renderer.paths
            if stroke and not fill and style.stroke_dash_array == MARK_LINE_DASH
        ]
        self.assertEqual(rules, [[MoveTo(5, 150), LineTo(582, 150)], [MoveTo(5, 60), LineTo(582, 60)]])
        self.assertEqual(axis_range.get_rest_height(50), 150)
        texts = [(body, x, y) for body, x, y, _style, _rotation in renderer.texts]
        self.assertEqual(texts, [("50", 600, 153), ("80", 600, 63)])


class SeriesLabelPainterTests(unittest.TestCase):
    def _render(self, label: SeriesLabel, value: LabelValue, renderer: RecordingRenderer | None = None):
        renderer = renderer or RecordingRenderer()
        label_painter = SeriesLabelPainter(_painter(renderer), ["s"], label)
        label_painter.add(value)
        self.assertEqual(renderer.texts, [])
        label_painter.render()
        return renderer.texts

    def test_label_sits_above_the_point_by_distance(self) -> None:
        texts = self._render(SeriesLabel(show=True, distance=8), LabelValue(index=0, value=1234, x=100, y=200))
        self.assertEqual(texts[0][:3], ("1234", 100 - 10, 200 - 8))

    def test_default_distance_and_odd_width(self) -> None:
        texts = self._render(SeriesLabel(show=True), LabelValue(index=0, value=123, x=100, y=200))
        # 15px wide: centred with the extra pixel on the right.
        self.assertEqual(texts[0][:3], ("123", 100 - 7 + 1, 200 - 5))

    def test_horizontal_label_is_right_of_the_point(self) -> None:
        value = LabelValue(index=0, value=1234, x=100, y=200, orient=ORIENT_HORIZONTAL, offset=Box(left=3, top=-4))
        texts = self._render(SeriesLabel(show=True, distance=8), value)
        self.assertEqual(texts[0][:3], ("1234", 100 + 8 + 3, 200 + 5 - 2 - 4))

    def test_rotated_label_uses_rotated_width(self) -> None:
        value = LabelValue(index=0, value=1234, x=100, y=200, rotation=math.pi / 2)
        texts = self._render(SeriesLabel(show=True, distance=8), value, RotatingRecordingRenderer())
        body, x, y, _style, rotation = texts[0]
        # Rotated box is 10px wide and 20px tall.
        self.assertEqual((body, x, y), ("1234", 100 + 5 - 1, 200 - 8))
        self.assertAlmostEqual(rotation, math.pi / 2)


class RoundedRectTests(unittest.TestCase):
    def test_radius_is_clamped_to_half_the_width(self) -> None:
        renderer = RecordingRenderer()
        painter = _painter(renderer)
        painter.set_drawing_style(Style(fill_color=Color(255, 0, 0)))
        painter.rounded_rect(Box(left=10, top=20, right=30, bottom=120), 50)
        commands = renderer.paths[0][0].commands
        self.assertEqual(commands[0], MoveTo(20, 20))
        arcs = [command for command in commands if isinstance(command, ArcTo)]
        self.assertEqual(len(arcs), 4)
        self.assertTrue(all(arc.rx == 10 and arc.ry == 10 for arc in arcs))
        self.assertEqual((arcs[0].cx, arcs[0].cy), (20, 30))

    def test_rounded_bars(self) -> None:
        renderer = RecordingRenderer()
        painter = _painter(renderer)
        series_list = [replace(s, round_radius=500) for s in new_series_list([[3, 5]], CHART_TYPE_BAR)]
        option = BarChartOption(series_list=series_list, theme=LIGHT_THEME, x_axis=XAxisOption(data=["a", "b"]))
        chart = BarChart(painter, option)
        result = default_render(painter, chart.default_render_option())
        renderer.paths.clear()
        chart.render_series(result, filter_series(result.series_list, CHART_TYPE_BAR))
        color = LIGHT_THEME.series_color(0)
        bars = [path for path, style, fill, _stroke in renderer.paths if fill and style.fill_color == color]
        self.assertEqual(len(bars), 2)
        for path in bars:
            xs = [command.x for command in path.commands if isinstance(command, (MoveTo, LineTo))]
            width = max(xs) - min(xs)
            arcs = [command for command in path.commands if isinstance(command, ArcTo)]
            self.assertTrue(arcs)
            self.assertTrue(all(arc.rx <= width / 2 + 1 for arc in arcs))


class HorizontalBarChartTests(unittest.TestCase):
    def test_first_category_is_drawn_at_the_bottom(self) -> None:
        renderer = RecordingRenderer()
        painter = _painter(renderer)
        option = HorizontalBarChartOption(
            series_list=new_series_list([[10, 20, 30]], CHART_TYPE_HORIZONTAL_BAR),
            theme=LIGHT_THEME,
            padding=Box.uniform(10),
            y_axis_options=[YAxisOption(data=["a", "b", "c"])],
        )
        chart = HorizontalBarChart(painter, option)
        result = default_render(painter, chart.default_render_option())
        renderer.paths.clear()
        chart.render_series(result, filter_series(result.series_list, CHART_TYPE_HORIZONTAL_BAR))

        color = LIGHT_THEME.series_color(0)
        bars = [path.commands for path, style, fill, _stroke in renderer.paths if fill and style.fill_color == color]
        self.assertEqual(len(bars), 3)
        tops = [commands[0].y for commands in bars]
        rights = [commands[1].x for commands in bars]
        self.assertGreater(tops[0], tops[1])
        self.assertGreater(tops[1], tops[2])
        self.assertLess(rights[0], rights[1])
        self.assertLess(rights[1], rights[2])
        self.assertGreaterEqual(bars[0][2].y, result.series_painter.box.bottom - result.series_painter.height // 3)


class PieLabelTests(unittest.TestCase):
    def test_close_label_ends_move_up(self) -> None:
        self.assertEqual(pie_label_end_y(None, 10, 10), 10)
        self.assertEqual(pie_label_end_y((100, 100), 105, 95), 95 - 2 * int(LABEL_FONT_SIZE))

    def test_distant_label_ends_stay(self) -> None:
        self.assertEqual(pie_label_end_y((100, 100), 200, 95), 95)
        self.assertEqual(pie_label_end_y((100, 100), 105, 130), 130)


class SmallCanvasTests(unittest.TestCase):
    def test_negative_child_box_is_logged(self) -> None:
        painter = _painter(RecordingRenderer(200, 100))
        with self.assertLogs("chartbox.painter", level="WARNING"):
            child = painter.child(padding=Box(left=150, right=100))
        self.assertLess(child.width, 0)


if __name__ == "__main__":
    unittest.main()
