from __future__ import annotations

from dataclasses import dataclass, fields, replace
import re
from typing import Literal

from chartbox.geometry import Box

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR = re.compile(r"^rgba?\(\s*([^)]*)\)$")

TextWrap = Literal["word", "rune"]


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0 or value > 255:
                raise ValueError(f"color channel `{name}` must be an int in [0, 255], got {value!r}")

    def with_alpha(self, alpha: int) -> Color:
        return replace(self, a=alpha)

    def is_transparent(self) -> bool:
        return self.a == 0

    def is_light(self) -> bool:
        return (self.r * 299 + self.g * 587 + self.b * 114) / 1000 >= 128

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def to_css(self) -> str:
        if self.a == 255:
            return f"rgba({self.r},{self.g},{self.b},1.0)"
        return f"rgba({self.r},{self.g},{self.b},{self.a / 255:.2f})"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)


def parse_color(value: str) -> Color:
    """Parse ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA``, ``rgb(r,g,b)`` or ``rgba(r,g,b,a)``."""
    text = value.strip()
    if _HEX_COLOR.match(text):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        return Color(*channels)
    match = _FUNC_COLOR.match(text)
    if match is None:
        raise ValueError(f"invalid color: {value!r}")
    parts = [p.strip() for p in match.group(1).split(",")]
    if len(parts) not in (3, 4):
        raise ValueError(f"invalid color: {value!r}")
    try:
        r, g, b = (int(p) for p in parts[:3])
        a = 255
        if len(parts) == 4:
            raw = float(parts[3])
            # rgba() accepts either a 0-1 fraction or a 0-255 byte.
            a = int(round(raw * 255)) if raw <= 1 and "." in parts[3] else int(raw)
    except ValueError as exc:
        raise ValueError(f"invalid color: {value!r}") from exc
    return Color(r, g, b, a)


@dataclass(frozen=True)
class Style:
    """Drawing and text attributes; ``None`` means the field is unset."""

    stroke_color: Color | None = None
    stroke_width: float | None = None
    stroke_dash_array: tuple[float, ...] | None = None
    fill_color: Color | None = None
    font_family: str | None = None
    font_size: float | None = None
    font_color: Color | None = None
    text_wrap: TextWrap | None = None
    text_line_spacing: int | None = None
    padding: Box | None = None

    def merge(self, override: Style | None) -> Style:
        """Return a copy with every field set on ``override`` taking precedence."""
        if override is None:
            return self
        changes = {}
        for f in fields(override):
            value = getattr(override, f.name)
            if value is not None:
                changes[f.name] = value
        if not changes:
            return self
        return replace(self, **changes)

    def should_draw_stroke(self) -> bool:
        if self.stroke_color is None or self.stroke_color.is_transparent():
            return False
        return (self.stroke_width if self.stroke_width is not None else 1.0) > 0

    def should_draw_fill(self) -> bool:
        return self.fill_color is not None and not self.fill_color.is_transparent()
