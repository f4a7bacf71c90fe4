from __future__ import annotations

from functools import lru_cache
from io import BytesIO
import logging
import math
from pathlib import Path

from PIL import ImageFont

LOGGER = logging.getLogger(__name__)

FontHandle = ImageFont.FreeTypeFont | ImageFont.ImageFont

SYSTEM_FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
)
FONT_EXTENSIONS = ("*.ttf", "*.otf", "*.ttc")


def _font_size(size: float) -> int:
    return max(1, int(round(size)))


def validate_font_data(data: bytes) -> None:
    """Raise ``OSError`` when ``data`` is not a font Pillow can open."""
    if not data:
        raise OSError("font data is empty")
    ImageFont.truetype(BytesIO(data), size=12)


@lru_cache(maxsize=128)
def load_font_data(data: bytes, size: float) -> FontHandle:
    return ImageFont.truetype(BytesIO(data), size=_font_size(size))


@lru_cache(maxsize=64)
def load_default_font(size: float) -> FontHandle:
    return ImageFont.load_default(size=_font_size(size))


@lru_cache(maxsize=64)
def load_font_path(path: str, size: float) -> FontHandle:
    return ImageFont.truetype(path, size=_font_size(size))


@lru_cache(maxsize=32)
def resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower().replace(" ", "")
    if not wanted:
        return None

    candidates: list[Path] = []
    for base in SYSTEM_FONT_DIRS:
        if not base.exists():
            continue
        for ext in FONT_EXTENSIONS:
            candidates.extend(base.rglob(ext))

    for path in sorted(candidates):
        stem = path.stem.lower().replace(" ", "").replace("-", "")
        if stem == wanted or stem == f"{wanted}regular":
            return path
    for path in sorted(candidates):
        if wanted in path.stem.lower().replace(" ", ""):
            return path
    return None


def text_size(font: FontHandle, text: str, rotation: float = 0.0) -> tuple[int, int]:
    """Measure ``text``; a non-zero rotation (radians) returns the rotated bounding box."""
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    if rotation == 0:
        return (w, h)
    cos = abs(math.cos(rotation))
    sin = abs(math.sin(rotation))
    return (int(round(w * cos + h * sin)), int(round(w * sin + h * cos)))
