from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
from unittest import mock

from chartbox.config import ChartDefaults
from chartbox.errors import ChartConfigError
from chartbox.registry import Registry
from chartbox.style import BLACK, TRANSPARENT, WHITE, Color, Style, parse_color
from chartbox.theme import DARK_THEME, LIGHT_THEME, validate_theme_option


class ColorTests(unittest.TestCase):
    def test_parse_hex(self) -> None:
        self.assertEqual(parse_color("#fff"), WHITE)
        self.assertEqual(parse_color("#5470c6"), Color(84, 112, 198))
        self.assertEqual(parse_color("#00000080"), Color(0, 0, 0, 128))

    def test_parse_functional(self) -> None:
        self.assertEqual(parse_color("rgb(1, 2, 3)"), Color(1, 2, 3))
        self.assertEqual(parse_color("rgba(10,20,30,0.5)"), Color(10, 20, 30, 128))
        self.assertEqual(parse_color("rgba(10,20,30,200)"), Color(10, 20, 30, 200))

    def test_parse_rejects_unknown_formats(self) -> None:
        for value in ("blue", "#12", "rgb(1,2)", "rgb(a,b,c)"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_color(value)

    def test_channel_validation(self) -> None:
        with self.assertRaises(ValueError):
            Color(256, 0, 0)

    def test_lightness_and_alpha(self) -> None:
        self.assertTrue(WHITE.is_light())
        self.assertFalse(BLACK.is_light())
        self.assertEqual(BLACK.with_alpha(20), Color(0, 0, 0, 20))
        self.assertTrue(TRANSPARENT.is_transparent())


class StyleTests(unittest.TestCase):
    def test_merge_keeps_unset_fields(self) -> None:
        base = Style(stroke_color=BLACK, stroke_width=2.0, font_size=12.0)
        merged = base.merge(Style(font_size=10.0))
        self.assertEqual(merged, Style(stroke_color=BLACK, stroke_width=2.0, font_size=10.0))

    def test_explicit_transparent_fill_overrides(self) -> None:
        base = Style(fill_color=WHITE)
        merged = base.merge(Style(fill_color=TRANSPARENT))
        self.assertEqual(merged.fill_color, TRANSPARENT)
        self.assertFalse(merged.should_draw_fill())

    def test_merge_with_none_returns_self(self) -> None:
        style = Style(stroke_color=BLACK)
        self.assertIs(style.merge(None), style)
        self.assertIs(style.merge(Style()), style)

    def test_should_draw_stroke(self) -> None:
        self.assertTrue(Style(stroke_color=BLACK).should_draw_stroke())
        self.assertFalse(Style(stroke_color=BLACK, stroke_width=0.0).should_draw_stroke())
        self.assertFalse(Style(stroke_width=1.0).should_draw_stroke())


class ThemeTests(unittest.TestCase):
    def test_series_colors_wrap(self) -> None:
        count = len(LIGHT_THEME.series_colors)
        self.assertEqual(LIGHT_THEME.series_color(count), LIGHT_THEME.series_color(0))

    def test_validate_theme_option_merges_onto_base(self) -> None:
        theme = validate_theme_option("night", {"is_dark": True, "background_color": "#000000"})
        self.assertTrue(theme.is_dark)
        self.assertEqual(theme.background_color, BLACK)
        self.assertEqual(theme.text_color, LIGHT_THEME.text_color)

    def test_validate_theme_option_rejects_bad_values(self) -> None:
        with self.assertRaises(ChartConfigError):
            validate_theme_option("x", {"unknown": 1})
        with self.assertRaises(ChartConfigError):
            validate_theme_option("x", {"text_color": "nope"})
        with self.assertRaises(ChartConfigError):
            validate_theme_option("x", {"series_colors": []})
        with self.assertRaises(ChartConfigError):
            validate_theme_option("", {})


class RegistryTests(unittest.TestCase):
    def test_builtin_themes(self) -> None:
        registry = Registry()
        self.assertEqual(registry.theme_names(), ["ant", "dark", "grafana", "light"])
        self.assertIs(registry.get_theme("dark"), DARK_THEME)
        self.assertIs(registry.get_theme(), LIGHT_THEME)

    def test_unknown_theme_falls_back_to_light(self) -> None:
        registry = Registry()
        with self.assertLogs("chartbox.registry", level="WARNING"):
            theme = registry.get_theme("missing")
        self.assertIs(theme, LIGHT_THEME)

    def test_add_theme(self) -> None:
        registry = Registry()
        theme = registry.add_theme("custom", {"text_color": "#112233"})
        self.assertTrue(registry.has_theme("custom"))
        self.assertEqual(registry.get_theme("custom"), theme)
        self.assertEqual(theme.text_color, Color(17, 34, 51))

    def test_install_font_rejects_garbage(self) -> None:
        registry = Registry()
        with self.assertRaises(OSError):
            registry.install_font("broken", b"not a font")
        with self.assertRaises(ChartConfigError):
            registry.install_font(" ", b"")
        self.assertFalse(registry.has_font("broken"))
        self.assertTrue(registry.has_font("default"))

    def test_install_font_file_reads_the_file(self) -> None:
        registry = Registry()
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.ttf"
            path.write_bytes(b"garbage")
            with self.assertRaises(OSError):
                registry.install_font_file("broken", path)
            with self.assertRaises(OSError):
                registry.install_font_file("missing", Path(tmp) / "missing.ttf")

    def test_unknown_font_family_warns_once(self) -> None:
        registry = Registry()
        with mock.patch("chartbox.registry.resolve_font_path", return_value=None):
            with self.assertLogs("chartbox.registry", level="WARNING") as logs:
                registry.get_font("No Such Family", 12)
                registry.get_font("No Such Family", 14)
        self.assertEqual(len(logs.records), 1)

    def test_chart_defaults_validation(self) -> None:
        self.assertEqual(Registry().defaults, ChartDefaults())
        with self.assertRaises(ChartConfigError):
            ChartDefaults(width=0)
        with self.assertRaises(ChartConfigError):
            ChartDefaults(output="gif")  # type: ignore[arg-type]
        registry = Registry(ChartDefaults(width=800, theme="dark"))
        self.assertEqual(registry.defaults.width, 800)
        self.assertIs(registry.get_theme(), DARK_THEME)


if __name__ == "__main__":
    unittest.main()
