from __future__ import annotations

from chartbox.geometry import Box


class RecordingRenderer:
    """Renderer double with fixed text metrics: half the font size per character."""

    def __init__(self, width: int = 600, height: int = 400) -> None:
        self.width = width
        self.height = height
        self.paths = []
        self.texts = []

    def draw_path(self, path, style, *, fill, stroke) -> None:
        self.paths.append((path, style, fill, stroke))

    def draw_text(self, body, x, y, style, rotation=0.0) -> None:
        self.texts.append((body, x, y, style, rotation))

    def measure_text(self, body, style, rotation=0.0) -> Box:
        size = style.font_size or 12
        return Box(right=int(len(body) * size / 2), bottom=int(size))

    def save(self) -> bytes:
        return b""
