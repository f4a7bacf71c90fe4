from __future__ import annotations

import unittest

from chartbox.errors import ChartConfigError
from chartbox.geometry import (
    Box,
    Point,
    auto_divide,
    auto_divide_spans,
    convert_percent,
    divide_column_widths,
    get_radius,
    polygon_points,
)


class BoxTests(unittest.TestCase):
    def test_width_and_height_are_derived(self) -> None:
        box = Box(left=10, top=20, right=110, bottom=70)
        self.assertEqual(box.width, 100)
        self.assertEqual(box.height, 50)

    def test_pad_subtracts_insets(self) -> None:
        box = Box.sized(600, 400).pad(Box(left=10, top=20, right=30, bottom=40))
        self.assertEqual(box, Box(left=10, top=20, right=570, bottom=360))

    def test_padding_is_associative(self) -> None:
        base = Box.sized(600, 400)
        a = Box(left=5, top=7, right=3, bottom=2)
        b = Box(left=11, top=1, right=9, bottom=13)
        self.assertEqual(base.pad(a).pad(b), base.pad(a.add(b)))
        self.assertEqual(base.pad(a).pad(b), base.pad(b).pad(a))

    def test_is_zero(self) -> None:
        self.assertTrue(Box().is_zero())
        self.assertFalse(Box(bottom=1).is_zero())
        self.assertEqual(Box.uniform(3), Box(left=3, top=3, right=3, bottom=3))


class DivideTests(unittest.TestCase):
    def test_auto_divide_spreads_remainder_over_first_gaps(self) -> None:
        self.assertEqual(auto_divide(600, 7), [0, 86, 172, 258, 344, 430, 515, 600])

    def test_auto_divide_even_split(self) -> None:
        self.assertEqual(auto_divide(100, 4), [0, 25, 50, 75, 100])

    def test_auto_divide_rejects_zero_count(self) -> None:
        with self.assertRaises(ValueError):
            auto_divide(100, 0)

    def test_auto_divide_spans_merges_slots(self) -> None:
        self.assertEqual(auto_divide_spans(600, 7, [2, 3, 2]), [0, 172, 430, 600])
        self.assertEqual(auto_divide_spans(100, 4), [0, 25, 50, 75, 100])

    def test_divide_column_widths_mixes_fractions_pixels_and_rest(self) -> None:
        self.assertEqual(divide_column_widths(600, [0.5, 100, 0], 3), [300, 100, 200])

    def test_divide_column_widths_shares_missing_entries(self) -> None:
        self.assertEqual(divide_column_widths(300, [], 3), [100, 100, 100])

    def test_divide_column_widths_rejects_overflow(self) -> None:
        with self.assertRaises(ChartConfigError):
            divide_column_widths(600, [0.8, 200], 2)
        with self.assertRaises(ChartConfigError):
            divide_column_widths(600, [-1], 1)


class RadiusTests(unittest.TestCase):
    def test_convert_percent(self) -> None:
        self.assertEqual(convert_percent("40%"), 0.4)
        self.assertIsNone(convert_percent("40"))
        self.assertIsNone(convert_percent("abc%"))

    def test_get_radius(self) -> None:
        self.assertAlmostEqual(get_radius(200, "40%"), 80.0)
        self.assertAlmostEqual(get_radius(200, "50"), 50.0)
        self.assertAlmostEqual(get_radius(200, ""), 80.0)
        self.assertAlmostEqual(get_radius(200, "bogus"), 80.0)

    def test_polygon_points_start_at_twelve_oclock(self) -> None:
        points = polygon_points(Point(100, 100), 50, 4)
        self.assertEqual(points, [Point(100, 50), Point(150, 100), Point(100, 150), Point(50, 100)])


if __name__ == "__main__":
    unittest.main()
