from __future__ import annotations

import math
import xml.etree.ElementTree as ET

from chartbox.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE
from chartbox.registry import Registry
from chartbox.render.base import FontMetricsMixin
from chartbox.render.path import Path, format_number
from chartbox.style import BLACK, Style

SVG_NS = "http://www.w3.org/2000/svg"
GENERIC_FONT_FAMILY = "sans-serif"


class SvgRenderer(FontMetricsMixin):
    """Collects path and text elements into an ``<svg>`` tree."""

    def __init__(self, width: int, height: int, registry: Registry) -> None:
        self.width = width
        self.height = height
        self.registry = registry
        self._root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(width),
                "height": str(height),
                "viewBox": f"0 0 {width} {height}",
            },
        )

    @property
    def root(self) -> ET.Element:
        return self._root

    def draw_path(self, path: Path, style: Style, *, fill: bool, stroke: bool) -> None:
        if path.is_empty():
            return
        draw_fill = fill and style.should_draw_fill()
        draw_stroke = stroke and style.should_draw_stroke()
        if not draw_fill and not draw_stroke:
            return
        attrs = {"d": path.to_svg_d(), "style": _path_style(style, draw_fill, draw_stroke)}
        ET.SubElement(self._root, "path", attrs)

    def draw_text(self, body: str, x: int, y: int, style: Style, rotation: float = 0.0) -> None:
        if not body:
            return
        color = style.font_color or BLACK
        size = style.font_size or DEFAULT_FONT_SIZE
        family = style.font_family or DEFAULT_FONT_FAMILY
        if family == DEFAULT_FONT_FAMILY:
            family = GENERIC_FONT_FAMILY
        attrs = {
            "x": str(x),
            "y": str(y),
            "style": f"font-family:'{family}';font-size:{format_number(size)}px;fill:{color.to_css()}",
        }
        if rotation != 0:
            attrs["transform"] = f"rotate({format_number(math.degrees(rotation))},{x},{y})"
        element = ET.SubElement(self._root, "text", attrs)
        element.text = body

    def save(self) -> bytes:
        return ET.tostring(self._root, encoding="unicode").encode("utf-8")


def _path_style(style: Style, draw_fill: bool, draw_stroke: bool) -> str:
    parts: list[str] = []
    if draw_stroke:
        assert style.stroke_color is not None
        width = style.stroke_width if style.stroke_width is not None else 1.0
        parts.append(f"stroke-width:{format_number(width)}")
        parts.append(f"stroke:{style.stroke_color.to_css()}")
        if style.stroke_dash_array:
            parts.append("stroke-dasharray:" + ",".join(format_number(d) for d in style.stroke_dash_array))
    else:
        parts.append("stroke:none")
    if draw_fill:
        assert style.fill_color is not None
        parts.append(f"fill:{style.fill_color.to_css()}")
    else:
        parts.append("fill:none")
    return ";".join(parts)
