from __future__ import annotations

import unittest

from chartbox.errors import ChartConfigError
from chartbox.range import AxisRange, category_range, new_range, unit_base


class NewRangeTests(unittest.TestCase):
    def test_small_positive_range(self) -> None:
        r = new_range(0, 8, 6, 300)
        self.assertEqual((r.min, r.max), (0.0, 12.0))

    def test_range_crossing_zero(self) -> None:
        r = new_range(-13, 18, 6, 300)
        self.assertEqual((r.min, r.max), (-20.0, 40.0))

    def test_nice_bounds_cover_data(self) -> None:
        cases = [(0, 1), (3, 97), (-250, -10), (120, 4300), (0.5, 2.5), (-1, 1), (7, 7), (0, 0)]
        for low, high in cases:
            for divide_count in (4, 5, 6):
                with self.subTest(low=low, high=high, divide_count=divide_count):
                    r = new_range(low, high, divide_count, 200)
                    self.assertLessEqual(r.min, low)
                    self.assertGreaterEqual(r.max, high)
                    unit = (r.max - r.min) / divide_count
                    self.assertAlmostEqual(r.max, r.min + unit * divide_count)
                    self.assertGreater(unit, 0)

    def test_swapped_bounds_are_normalized(self) -> None:
        self.assertEqual(new_range(8, 0, 6, 300), new_range(0, 8, 6, 300))

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(ChartConfigError):
            new_range(0, 10, 0, 100)
        with self.assertRaises(ChartConfigError):
            new_range(float("nan"), 10, 6, 100)

    def test_unit_ladder(self) -> None:
        self.assertEqual(unit_base(5), 2)
        self.assertEqual(unit_base(15), 4)
        self.assertEqual(unit_base(50), 5)
        self.assertEqual(unit_base(150), 10)
        self.assertEqual(unit_base(250), 20)


class AxisRangeTests(unittest.TestCase):
    def test_heights(self) -> None:
        r = AxisRange(min=0, max=12, divide_count=6, size=120)
        self.assertEqual(r.get_height(6), 60)
        self.assertEqual(r.get_height(3), 30)
        self.assertEqual(r.get_rest_height(3), 90)

    def test_labels_use_axis_formatting(self) -> None:
        labels = AxisRange(min=0, max=12, divide_count=6, size=100).labels()
        self.assertEqual(labels, ["0", "2", "4", "6", "8", "10", "12"])
        self.assertEqual(AxisRange(min=0, max=3000, divide_count=3, size=100).labels(), ["0", "1k", "2k", "3k"])

    def test_custom_formatter(self) -> None:
        r = AxisRange(min=0, max=2, divide_count=2, size=100, formatter=lambda v: f"{v:.1f}%")
        self.assertEqual(r.labels(), ["0.0%", "1.0%", "2.0%"])

    def test_with_bounds_applies_covering_overrides_only(self) -> None:
        r = new_range(0, 8, 6, 300)
        widened = r.with_bounds(0, 8, max_value=20)
        self.assertEqual((widened.min, widened.max), (0.0, 20.0))
        self.assertIs(r.with_bounds(0, 8, max_value=5), r)
        lowered = r.with_bounds(0, 8, min_value=-5)
        self.assertEqual(lowered.min, -5.0)

    def test_category_range_centres_labels(self) -> None:
        r = category_range(12, 600)
        self.assertEqual(r.get_width(0), 25)
        self.assertEqual(r.get_range(1), (50.0, 100.0))
        self.assertEqual(category_range(12, 600, boundary=False).get_width(1), 50)

    def test_rejects_zero_divisions(self) -> None:
        with self.assertRaises(ChartConfigError):
            AxisRange(min=0, max=1, divide_count=0, size=10)


if __name__ == "__main__":
    unittest.main()
