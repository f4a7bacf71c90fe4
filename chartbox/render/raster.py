from __future__ import annotations

from io import BytesIO
import math

from PIL import Image, ImageDraw

from chartbox.registry import Registry
from chartbox.render.base import FontMetricsMixin
from chartbox.render.path import Path, dash_polyline
from chartbox.style import BLACK, Style


class PngRenderer(FontMetricsMixin):
    """Rasterises paths and text onto an RGBA Pillow image."""

    def __init__(self, width: int, height: int, registry: Registry) -> None:
        self.width = width
        self.height = height
        self.registry = registry
        self._image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self._image, "RGBA")

    @property
    def image(self) -> Image.Image:
        return self._image

    def draw_path(self, path: Path, style: Style, *, fill: bool, stroke: bool) -> None:
        if path.is_empty():
            return
        subpaths = path.flatten()
        if fill and style.should_draw_fill():
            assert style.fill_color is not None
            color = style.fill_color.as_tuple()
            for points, _closed in subpaths:
                if len(points) >= 3:
                    self._draw.polygon(points, fill=color)
        if stroke and style.should_draw_stroke():
            assert style.stroke_color is not None
            color = style.stroke_color.as_tuple()
            width = max(1, int(round(style.stroke_width if style.stroke_width is not None else 1.0)))
            for points, closed in subpaths:
                if closed and len(points) > 1 and points[0] != points[-1]:
                    points = points + [points[0]]
                if len(points) < 2:
                    continue
                runs = dash_polyline(points, style.stroke_dash_array) if style.stroke_dash_array else [points]
                for run in runs:
                    if len(run) >= 2:
                        self._draw.line(run, fill=color, width=width, joint="curve")

    def draw_text(self, body: str, x: int, y: int, style: Style, rotation: float = 0.0) -> None:
        if not body:
            return
        font = self.font_for(style)
        color = (style.font_color or BLACK).as_tuple()
        if rotation == 0:
            self._draw.text((x, y), body, font=font, fill=color, anchor="ls")
            return

        left, top, right, bottom = font.getbbox(body, anchor="ls")
        w = max(1, int(math.ceil(right - left)))
        h = max(1, int(math.ceil(bottom - top)))
        layer = Image.new("RGBA", (w, h), (0, 0, 0, 0))
        ImageDraw.Draw(layer).text((-left, -top), body, font=font, fill=color, anchor="ls")
        rotated = layer.rotate(-math.degrees(rotation), resample=Image.Resampling.BICUBIC, expand=True)

        # Rotate the text box centre around the baseline origin, then paste centred on it.
        cx0 = left + w / 2
        cy0 = top + h / 2
        cos = math.cos(rotation)
        sin = math.sin(rotation)
        cx = x + cx0 * cos - cy0 * sin
        cy = y + cx0 * sin + cy0 * cos
        overlay = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        overlay.paste(rotated, (int(round(cx - rotated.width / 2)), int(round(cy - rotated.height / 2))))
        self._image.alpha_composite(overlay)

    def save(self) -> bytes:
        buffer = BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()
