from __future__ import annotations


class ChartError(Exception):
    """Base error for chart rendering failures."""


class ChartConfigError(ChartError, ValueError):
    """Raised when chart options cannot produce a valid layout."""
