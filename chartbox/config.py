from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from chartbox.errors import ChartConfigError

OutputType = Literal["svg", "png"]

DEFAULT_CHART_WIDTH = 600
DEFAULT_CHART_HEIGHT = 400
DEFAULT_PADDING = 10
DEFAULT_THEME = "light"
DEFAULT_FONT_FAMILY = "default"
DEFAULT_OUTPUT: OutputType = "svg"

DEFAULT_FONT_SIZE = 12.0
LABEL_FONT_SIZE = 10.0
SMALL_LABEL_FONT_SIZE = 8.0
DEFAULT_TEXT_LINE_SPACING = 5

X_AXIS_HEIGHT = 30
AXIS_DIVIDE_COUNT = 6
AXIS_TICK_LENGTH = 5
AXIS_LABEL_MARGIN = 5
TITLE_BOTTOM_GAP = 20

DEFAULT_STROKE_WIDTH = 2.0
DEFAULT_DOT_RADIUS = 2.0
DEFAULT_SYMBOL_SIZE = 30
DEFAULT_LABEL_DISTANCE = 5
DEFAULT_AREA_OPACITY = 200
RADAR_AREA_OPACITY = 20
RADAR_DIVIDE_COUNT = 5
DEFAULT_RADIUS_PERCENT = 0.4
FUNNEL_GAP = 2
TABLE_FONT_SIZE = 12.0
TABLE_CELL_PADDING = 10


@dataclass(frozen=True)
class ChartDefaults:
    """Canvas defaults applied by ``ChartOption.fill_default``."""

    width: int = DEFAULT_CHART_WIDTH
    height: int = DEFAULT_CHART_HEIGHT
    padding: int = DEFAULT_PADDING
    theme: str = DEFAULT_THEME
    font_family: str = DEFAULT_FONT_FAMILY
    output: OutputType = DEFAULT_OUTPUT

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ChartConfigError("default width and height must be > 0")
        if self.padding < 0:
            raise ChartConfigError("default padding must be >= 0")
        if self.output not in ("svg", "png"):
            raise ChartConfigError(f"unsupported output type: {self.output}")
        if not self.theme.strip():
            raise ChartConfigError("default theme must be a non-empty string")
