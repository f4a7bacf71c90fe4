from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any

from chartbox.config import DEFAULT_FONT_SIZE
from chartbox.errors import ChartConfigError
from chartbox.style import Color, WHITE, parse_color

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEME_GRAFANA = "grafana"
THEME_ANT = "ant"

_COLOR_TOKENS = ("axis_stroke_color", "axis_split_line_color", "background_color", "text_color")

DEFAULT_SERIES_COLORS = (
    Color(84, 112, 198),
    Color(145, 204, 117),
    Color(250, 200, 88),
    Color(238, 102, 102),
    Color(115, 192, 222),
    Color(59, 162, 114),
    Color(252, 132, 82),
    Color(154, 96, 180),
    Color(234, 124, 204),
)


@dataclass(frozen=True)
class Theme:
    """Palette used to paint axes, backgrounds, text and series."""

    name: str
    is_dark: bool
    axis_stroke_color: Color
    axis_split_line_color: Color
    background_color: Color
    text_color: Color
    series_colors: tuple[Color, ...] = DEFAULT_SERIES_COLORS
    font_size: float = DEFAULT_FONT_SIZE

    def __post_init__(self) -> None:
        if not self.series_colors:
            raise ChartConfigError(f"theme `{self.name}` must define at least one series color")
        if self.font_size <= 0:
            raise ChartConfigError(f"theme `{self.name}` font size must be > 0")

    def series_color(self, index: int) -> Color:
        return self.series_colors[index % len(self.series_colors)]


LIGHT_THEME = Theme(
    name=THEME_LIGHT,
    is_dark=False,
    axis_stroke_color=Color(110, 112, 121),
    axis_split_line_color=Color(224, 230, 242),
    background_color=WHITE,
    text_color=Color(70, 70, 70),
)

DARK_THEME = Theme(
    name=THEME_DARK,
    is_dark=True,
    axis_stroke_color=Color(185, 184, 206),
    axis_split_line_color=Color(72, 71, 83),
    background_color=Color(16, 12, 42),
    text_color=Color(238, 238, 238),
)

GRAFANA_THEME = Theme(
    name=THEME_GRAFANA,
    is_dark=True,
    axis_stroke_color=Color(185, 184, 206),
    axis_split_line_color=Color(68, 67, 67),
    background_color=Color(31, 29, 29),
    text_color=Color(216, 217, 218),
    series_colors=(
        Color(126, 178, 109),
        Color(234, 184, 57),
        Color(110, 208, 224),
        Color(239, 132, 60),
        Color(226, 77, 66),
        Color(31, 120, 193),
        Color(112, 93, 160),
        Color(80, 134, 66),
    ),
)

ANT_THEME = Theme(
    name=THEME_ANT,
    is_dark=False,
    axis_stroke_color=Color(110, 112, 121),
    axis_split_line_color=Color(224, 230, 242),
    background_color=WHITE,
    text_color=Color(70, 70, 70),
    series_colors=(
        Color(91, 143, 249),
        Color(90, 216, 166),
        Color(93, 112, 146),
        Color(246, 189, 22),
        Color(111, 94, 249),
        Color(109, 200, 236),
        Color(148, 95, 185),
        Color(255, 152, 69),
    ),
)

BUILTIN_THEMES = (LIGHT_THEME, DARK_THEME, GRAFANA_THEME, ANT_THEME)


def validate_theme_option(
    name: str,
    overrides: Mapping[str, Any] | None = None,
    *,
    base: Theme = LIGHT_THEME,
) -> Theme:
    """Validate and merge user theme options onto ``base``.

    Colors are given as strings accepted by ``parse_color``; ``series_colors``
    is a non-empty list of such strings.
    """
    if not isinstance(name, str) or not name.strip():
        raise ChartConfigError("theme name must be a non-empty string")

    raw: dict[str, Any] = asdict(base)
    raw.pop("name")
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ChartConfigError(f"Unknown theme option: {key}")
            raw[key] = value

    colors: dict[str, Color] = {}
    for key in _COLOR_TOKENS:
        colors[key] = _coerce_color(raw[key], key)

    series = raw["series_colors"]
    if isinstance(series, (str, bytes)) or not isinstance(series, Sequence) or len(series) == 0:
        raise ChartConfigError("Option `series_colors` must be a non-empty list of colors")
    series_colors = tuple(_coerce_color(item, "series_colors") for item in series)

    if not isinstance(raw["is_dark"], bool):
        raise ChartConfigError("Option `is_dark` must be a bool")
    if not isinstance(raw["font_size"], (int, float)) or float(raw["font_size"]) <= 0:
        raise ChartConfigError("Option `font_size` must be a positive number")

    return Theme(
        name=name,
        is_dark=raw["is_dark"],
        series_colors=series_colors,
        font_size=float(raw["font_size"]),
        **colors,
    )


def _coerce_color(value: Any, key: str) -> Color:
    if isinstance(value, Color):
        return value
    if isinstance(value, Mapping):
        # asdict() turns nested Color values into plain dicts.
        try:
            return Color(**value)
        except (TypeError, ValueError) as exc:
            raise ChartConfigError(f"Option `{key}` is not a valid color") from exc
    if isinstance(value, str):
        try:
            return parse_color(value)
        except ValueError as exc:
            raise ChartConfigError(f"Option `{key}` must be a color (#RRGGBB, #RRGGBBAA, rgb() or rgba())") from exc
    raise ChartConfigError(f"Option `{key}` must be a color (#RRGGBB, #RRGGBBAA, rgb() or rgba())")
