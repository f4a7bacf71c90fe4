from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math

from chartbox.errors import ChartConfigError
from chartbox.formatting import ValueFormatter, commaf_with_digits
from chartbox.geometry import auto_divide

LOGGER = logging.getLogger(__name__)

# (span threshold, base unit); the last matching entry wins.
UNIT_LADDER = ((0.0, 2), (10.0, 4), (30.0, 5), (100.0, 10), (200.0, 20))


@dataclass(frozen=True)
class AxisRange:
    """Linear mapping of ``[min, max]`` onto ``[0, size]`` pixels in ``divide_count`` steps."""

    min: float
    max: float
    divide_count: int
    size: int
    boundary: bool = False
    formatter: ValueFormatter | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.divide_count <= 0:
            raise ChartConfigError("divide_count must be > 0")

    @property
    def unit(self) -> float:
        return (self.max - self.min) / self.divide_count

    def values(self) -> list[float]:
        step = self.unit
        return [self.min + i * step for i in range(self.divide_count + 1)]

    def labels(self) -> list[str]:
        fmt = self.formatter or commaf_with_digits
        return [fmt(v) for v in self.values()]

    def get_height(self, value: float) -> int:
        if self.max <= self.min:
            return 0
        return int((value - self.min) / (self.max - self.min) * self.size)

    def get_rest_height(self, value: float) -> int:
        return self.size - self.get_height(value)

    def get_range(self, index: int) -> tuple[float, float]:
        unit = self.size / self.divide_count
        return (unit * index, unit * (index + 1))

    def get_width(self, index: int) -> int:
        """Pixel x of the ``index``-th category; boundary ranges centre it inside its slot."""
        values = self.auto_divide()
        if self.boundary:
            return (values[index] + values[index + 1]) >> 1
        return values[index]

    def auto_divide(self) -> list[int]:
        return auto_divide(self.size, self.divide_count)

    def with_bounds(
        self,
        data_min: float,
        data_max: float,
        *,
        min_value: float | None = None,
        max_value: float | None = None,
    ) -> AxisRange:
        """Apply explicit axis bounds that still cover ``[data_min, data_max]``."""
        low = self.min
        high = self.max
        if min_value is not None and min_value <= data_min:
            low = min_value
        if max_value is not None and max_value >= data_max:
            high = max_value
        if low == self.min and high == self.max:
            return self
        return replace(self, min=low, max=high)


def unit_base(span: float) -> int:
    base = UNIT_LADDER[0][1]
    for threshold, value in UNIT_LADDER:
        if span > threshold:
            base = value
    return base


def _round_min(lower: float, unit: int) -> float:
    if lower == 0:
        return 0.0
    rounded = float(int(lower / unit) * unit)
    # Truncation moves negative minimums towards zero; push them back out.
    if rounded < 0 or (lower < 0 and rounded == 0):
        rounded -= unit
    return rounded


def new_range(
    min_value: float,
    max_value: float,
    divide_count: int,
    size: int,
    *,
    boundary: bool = False,
    formatter: ValueFormatter | None = None,
) -> AxisRange:
    """Compute "nice" bounds covering ``[min_value, max_value]``.

    Both ends are widened by 10%, the unit is picked from ``UNIT_LADDER``
    and ``max`` is always ``min + unit * divide_count``.
    """
    if divide_count <= 0:
        raise ChartConfigError("divide_count must be > 0")
    if not math.isfinite(min_value) or not math.isfinite(max_value):
        raise ChartConfigError(f"range bounds must be finite, got {min_value}..{max_value}")
    if min_value > max_value:
        min_value, max_value = max_value, min_value

    upper = max_value + abs(max_value * 0.1)
    lower = min_value - abs(min_value * 0.1)
    span = abs(upper - lower)
    base = unit_base(span)
    unit = int((span / divide_count) / base) * base + base

    low = _round_min(lower, unit)
    high = low + unit * divide_count
    while high < max_value:
        unit += base
        low = _round_min(lower, unit)
        high = low + unit * divide_count

    LOGGER.debug(
        "range %s..%s -> %s..%s (unit=%s, divide_count=%s, size=%s)",
        min_value,
        max_value,
        low,
        high,
        unit,
        divide_count,
        size,
    )
    return AxisRange(min=low, max=high, divide_count=divide_count, size=size, boundary=boundary, formatter=formatter)


def category_range(count: int, size: int, *, boundary: bool = True) -> AxisRange:
    """Range whose divisions are category slots rather than values."""
    return AxisRange(min=0.0, max=float(count), divide_count=count, size=size, boundary=boundary)
