from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math

from chartbox.config import DEFAULT_RADIUS_PERCENT
from chartbox.errors import ChartConfigError


@dataclass(frozen=True)
class Box:
    """Integer pixel rectangle; also used as a set of insets for padding."""

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def is_zero(self) -> bool:
        return self.left == 0 and self.top == 0 and self.right == 0 and self.bottom == 0

    def pad(self, insets: Box) -> Box:
        return Box(
            left=self.left + insets.left,
            top=self.top + insets.top,
            right=self.right - insets.right,
            bottom=self.bottom - insets.bottom,
        )

    def add(self, other: Box) -> Box:
        return Box(
            left=self.left + other.left,
            top=self.top + other.top,
            right=self.right + other.right,
            bottom=self.bottom + other.bottom,
        )

    @classmethod
    def uniform(cls, value: int) -> Box:
        return cls(left=value, top=value, right=value, bottom=value)

    @classmethod
    def sized(cls, width: int, height: int) -> Box:
        return cls(left=0, top=0, right=width, bottom=height)


BOX_ZERO = Box()


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def auto_divide(total: int, count: int) -> list[int]:
    """Split ``total`` pixels into ``count`` gaps, spreading the remainder over the first gaps."""
    if count <= 0:
        raise ValueError("count must be > 0")
    unit = total // count
    rest = total - unit * count
    values: list[int] = []
    value = 0
    for i in range(count):
        values.append(value)
        if i < rest:
            value += 1
        value += unit
    values.append(total)
    return values


def auto_divide_spans(total: int, count: int, spans: Sequence[int] | None = None) -> list[int]:
    values = auto_divide(total, count)
    if not spans:
        return values
    merged = [0]
    end = 0
    for span in spans:
        end += span
        if end > count:
            break
        merged.append(values[end])
    return merged


def convert_percent(value: str) -> float | None:
    text = value.strip()
    if not text.endswith("%"):
        return None
    try:
        return int(text[:-1]) / 100
    except ValueError:
        return None


def get_radius(diameter: float, radius_value: str | None) -> float:
    radius = 0.0
    if radius_value:
        percent = convert_percent(radius_value)
        if percent is not None:
            radius = diameter * percent
        else:
            try:
                radius = float(radius_value)
            except ValueError:
                radius = 0.0
    if radius <= 0:
        radius = diameter * DEFAULT_RADIUS_PERCENT
    return radius


def polygon_point_angles(sides: int) -> list[float]:
    return [2 * math.pi / sides * i - math.pi / 2 for i in range(sides)]


def polygon_point(center: Point, radius: float, angle: float) -> Point:
    return Point(
        x=center.x + int(radius * math.cos(angle)),
        y=center.y + int(radius * math.sin(angle)),
    )


def polygon_points(center: Point, radius: float, sides: int) -> list[Point]:
    return [polygon_point(center, radius, angle) for angle in polygon_point_angles(sides)]


def divide_column_widths(total: int, widths: Sequence[float], count: int) -> list[int]:
    """Resolve fractional (<1) or pixel (>=1) column widths; zero entries share the leftover."""
    if count <= 0:
        raise ChartConfigError("column count must be > 0")
    resolved: list[int | None] = []
    used = 0
    for index in range(count):
        raw = widths[index] if index < len(widths) else 0
        if raw < 0:
            raise ChartConfigError(f"column width must be >= 0, got {raw}")
        if raw == 0:
            resolved.append(None)
            continue
        width = int(total * raw) if raw < 1 else int(raw)
        resolved.append(width)
        used += width
    if used > total:
        raise ChartConfigError(f"column widths {used} exceed total width {total}")
    unset = [i for i, w in enumerate(resolved) if w is None]
    if unset:
        shares = auto_divide(total - used, len(unset))
        for slot, index in enumerate(unset):
            resolved[index] = shares[slot + 1] - shares[slot]
    return [int(w) for w in resolved if w is not None]
