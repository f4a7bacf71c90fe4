from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Literal

import numpy as np

from chartbox.errors import ChartConfigError
from chartbox.formatting import LabelFormatter
from chartbox.geometry import BOX_ZERO, Box
from chartbox.style import Color, Style

ChartType = Literal["line", "bar", "horizontal_bar", "pie", "radar", "funnel"]
MarkType = Literal["max", "min", "average"]

CHART_TYPE_LINE: ChartType = "line"
CHART_TYPE_BAR: ChartType = "bar"
CHART_TYPE_HORIZONTAL_BAR: ChartType = "horizontal_bar"
CHART_TYPE_PIE: ChartType = "pie"
CHART_TYPE_RADAR: ChartType = "radar"
CHART_TYPE_FUNNEL: ChartType = "funnel"
CHART_TYPES: tuple[ChartType, ...] = (
    CHART_TYPE_LINE,
    CHART_TYPE_BAR,
    CHART_TYPE_HORIZONTAL_BAR,
    CHART_TYPE_PIE,
    CHART_TYPE_RADAR,
    CHART_TYPE_FUNNEL,
)

MARK_TYPE_MAX: MarkType = "max"
MARK_TYPE_MIN: MarkType = "min"
MARK_TYPE_AVERAGE: MarkType = "average"


@dataclass(frozen=True)
class SeriesData:
    """One data point; ``None`` is a null value that is skipped when drawing."""

    value: float | None
    style: Style = field(default_factory=Style)


@dataclass(frozen=True)
class SeriesLabel:
    show: bool = False
    formatter: str | LabelFormatter | None = None
    color: Color | None = None
    font_size: float = 0.0
    distance: int = 0
    position: str = ""
    offset: Box = BOX_ZERO
    rotation: float = 0.0


@dataclass(frozen=True)
class SeriesMarkData:
    type: MarkType


@dataclass(frozen=True)
class SeriesMarkPoint:
    symbol_size: int = 0
    data: tuple[SeriesMarkData, ...] = ()


@dataclass(frozen=True)
class SeriesMarkLine:
    data: tuple[SeriesMarkData, ...] = ()


@dataclass(frozen=True)
class SeriesSummary:
    max_index: int
    max_value: float
    min_index: int
    min_value: float
    average_value: float


@dataclass(frozen=True)
class Series:
    data: tuple[SeriesData, ...]
    type: ChartType = CHART_TYPE_LINE
    name: str = ""
    axis_index: int = 0
    label: SeriesLabel = field(default_factory=SeriesLabel)
    mark_point: SeriesMarkPoint = field(default_factory=SeriesMarkPoint)
    mark_line: SeriesMarkLine = field(default_factory=SeriesMarkLine)
    style: Style = field(default_factory=Style)
    radius: str = ""
    max: float | None = None
    min: float | None = None
    round_radius: int = 0
    index: int | None = None

    def __post_init__(self) -> None:
        if self.type not in CHART_TYPES:
            raise ChartConfigError(f"unsupported chart type: {self.type}")
        if self.axis_index < 0:
            raise ChartConfigError(f"axis_index must be >= 0, got {self.axis_index}")

    @property
    def color_index(self) -> int:
        return self.index if self.index is not None else 0

    def values(self) -> np.ndarray:
        return np.asarray(
            [np.nan if item.value is None else float(item.value) for item in self.data],
            dtype=np.float64,
        )

    def summary(self) -> SeriesSummary:
        values = self.values()
        mask = np.isfinite(values)
        if not np.any(mask):
            return SeriesSummary(max_index=-1, max_value=0.0, min_index=-1, min_value=0.0, average_value=0.0)
        masked_max = np.where(mask, values, -np.inf)
        masked_min = np.where(mask, values, np.inf)
        max_index = int(np.argmax(masked_max))
        min_index = int(np.argmin(masked_min))
        return SeriesSummary(
            max_index=max_index,
            max_value=float(values[max_index]),
            min_index=min_index,
            min_value=float(values[min_index]),
            average_value=float(np.mean(values[mask])),
        )

    def total(self) -> float:
        values = self.values()
        return float(np.sum(values[np.isfinite(values)]))


def new_series_data(values: Iterable[float | None]) -> tuple[SeriesData, ...]:
    return tuple(SeriesData(value=None if v is None else float(v)) for v in values)


def new_series_list(
    values: Sequence[Sequence[float | None]],
    chart_type: ChartType,
    *,
    names: Sequence[str] = (),
    label: SeriesLabel | None = None,
) -> list[Series]:
    series_list: list[Series] = []
    for index, row in enumerate(values):
        series_list.append(
            Series(
                data=new_series_data(row),
                type=chart_type,
                name=names[index] if index < len(names) else "",
                label=label or SeriesLabel(),
            )
        )
    return series_list


def new_pie_series_list(
    values: Sequence[float],
    *,
    names: Sequence[str] = (),
    label: SeriesLabel | None = None,
    radius: str = "",
) -> list[Series]:
    """One single-value series per slice."""
    return [
        Series(
            data=new_series_data([value]),
            type=CHART_TYPE_PIE,
            name=names[index] if index < len(names) else "",
            label=label or SeriesLabel(),
            radius=radius,
        )
        for index, value in enumerate(values)
    ]


def new_funnel_series_list(
    values: Sequence[float],
    *,
    names: Sequence[str] = (),
    label: SeriesLabel | None = None,
) -> list[Series]:
    return [
        Series(
            data=new_series_data([value]),
            type=CHART_TYPE_FUNNEL,
            name=names[index] if index < len(names) else "",
            label=label or SeriesLabel(),
        )
        for index, value in enumerate(values)
    ]


def init_series_list(series_list: Sequence[Series]) -> list[Series]:
    """Assign the render index used for theme colours, keeping indexes already set."""
    if not series_list or series_list[-1].index is not None:
        return list(series_list)
    return [replace(series, index=i) for i, series in enumerate(series_list)]


def filter_series(series_list: Sequence[Series], chart_type: ChartType) -> list[Series]:
    return [series for series in series_list if series.type == chart_type]


def series_names(series_list: Sequence[Series]) -> list[str]:
    return [series.name for series in series_list]


def get_max_min(series_list: Sequence[Series], axis_index: int) -> tuple[float, float]:
    """Largest and smallest non-null values on ``axis_index``; ``(0, 0)`` when there are none."""
    chunks = [series.values() for series in series_list if series.axis_index == axis_index]
    if not chunks:
        return (0.0, 0.0)
    values = np.concatenate(chunks)
    values = values[np.isfinite(values)]
    if values.size == 0:
        return (0.0, 0.0)
    return (float(np.max(values)), float(np.min(values)))
