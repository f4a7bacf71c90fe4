from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
import logging
from pathlib import Path
from typing import Any

from chartbox.config import DEFAULT_FONT_FAMILY, ChartDefaults
from chartbox.errors import ChartConfigError
from chartbox.fonts import (
    FontHandle,
    load_default_font,
    load_font_data,
    load_font_path,
    resolve_font_path,
    validate_font_data,
)
from chartbox.theme import BUILTIN_THEMES, LIGHT_THEME, Theme, validate_theme_option

LOGGER = logging.getLogger(__name__)


class Registry:
    """Themes, installed fonts and chart defaults used by one or more renders.

    Populate the registry before sharing it between threads; lookups are
    read-only and safe to run concurrently.
    """

    def __init__(self, defaults: ChartDefaults | None = None) -> None:
        self.defaults = defaults or ChartDefaults()
        self._themes: dict[str, Theme] = {theme.name: theme for theme in BUILTIN_THEMES}
        self._fonts: dict[str, bytes] = {}
        self._missing_fonts: set[str] = set()

    # themes

    def add_theme(self, name: str, option: Theme | Mapping[str, Any]) -> Theme:
        if isinstance(option, Theme):
            theme = option
        else:
            theme = validate_theme_option(name, option)
        self._themes[name] = theme
        return theme

    def has_theme(self, name: str) -> bool:
        return name in self._themes

    def theme_names(self) -> list[str]:
        return sorted(self._themes)

    def get_theme(self, name: str | None = None) -> Theme:
        key = name or self.defaults.theme
        theme = self._themes.get(key)
        if theme is not None:
            return theme
        LOGGER.warning("theme %r is not registered; falling back to %r", key, LIGHT_THEME.name)
        return self._themes.get(LIGHT_THEME.name, LIGHT_THEME)

    # fonts

    def install_font(self, family: str, data: bytes) -> None:
        if not family.strip():
            raise ChartConfigError("font family must be a non-empty string")
        validate_font_data(data)
        self._fonts[family] = data
        self._missing_fonts.discard(family)

    def install_font_file(self, family: str, path: str | Path) -> None:
        self.install_font(family, Path(path).read_bytes())

    def has_font(self, family: str) -> bool:
        return family == DEFAULT_FONT_FAMILY or family in self._fonts

    def get_font(self, family: str | None, size: float) -> FontHandle:
        key = family or self.defaults.font_family
        data = self._fonts.get(key)
        if data is not None:
            return load_font_data(data, size)
        if key == DEFAULT_FONT_FAMILY:
            return load_default_font(size)
        path = resolve_font_path(key)
        if path is not None:
            return load_font_path(str(path), size)
        if key not in self._missing_fonts:
            self._missing_fonts.add(key)
            LOGGER.warning("font family %r is not installed; using the default font", key)
        return load_default_font(size)


@lru_cache(maxsize=1)
def default_registry() -> Registry:
    return Registry()
