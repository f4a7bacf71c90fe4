from __future__ import annotations

from typing import Protocol

from chartbox.config import DEFAULT_FONT_SIZE
from chartbox.fonts import FontHandle, text_size
from chartbox.geometry import Box
from chartbox.registry import Registry
from chartbox.render.path import Path
from chartbox.style import Style


class Renderer(Protocol):
    """Canvas backend driven by a ``Painter``.

    Every call carries the style it needs, so implementations keep no
    ambient stroke, fill or font state between calls.
    """

    width: int
    height: int

    def draw_path(self, path: Path, style: Style, *, fill: bool, stroke: bool) -> None:
        ...

    def draw_text(self, body: str, x: int, y: int, style: Style, rotation: float = 0.0) -> None:
        """Draw ``body`` with its baseline starting at ``(x, y)``; rotation is in radians."""
        ...

    def measure_text(self, body: str, style: Style, rotation: float = 0.0) -> Box:
        ...

    def save(self) -> bytes:
        ...


class FontMetricsMixin:
    """Text measurement shared by the SVG and PNG backends."""

    registry: Registry

    def font_for(self, style: Style) -> FontHandle:
        size = style.font_size if style.font_size else DEFAULT_FONT_SIZE
        return self.registry.get_font(style.font_family, size)

    def measure_text(self, body: str, style: Style, rotation: float = 0.0) -> Box:
        width, height = text_size(self.font_for(style), body, rotation)
        return Box(left=0, top=0, right=width, bottom=height)
