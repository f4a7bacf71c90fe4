from __future__ import annotations

from chartbox.config import OutputType
from chartbox.errors import ChartConfigError
from chartbox.registry import Registry
from chartbox.render.base import Renderer
from chartbox.render.path import Path
from chartbox.render.raster import PngRenderer
from chartbox.render.svg import SvgRenderer


def new_renderer(output: OutputType, width: int, height: int, registry: Registry) -> Renderer:
    if output == "svg":
        return SvgRenderer(width, height, registry)
    if output == "png":
        return PngRenderer(width, height, registry)
    raise ChartConfigError(f"unsupported output type: {output}")


__all__ = [
    "Path",
    "PngRenderer",
    "Renderer",
    "SvgRenderer",
    "new_renderer",
]
