from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import Decimal
import math

ValueFormatter = Callable[[float], str]
LabelFormatter = Callable[[int, float, float], str]

DEFAULT_LABEL_LAYOUT = "{c}"
PIE_LABEL_LAYOUT = "{b}: {d}"
FUNNEL_LABEL_LAYOUT = "{b}({d})"


def _plain(value: float) -> str:
    """Shortest round-tripping decimal text, never in exponent form."""
    if not math.isfinite(value):
        return str(value)
    d = Decimal(repr(float(value)))
    if d == d.to_integral_value():
        out = format(d.quantize(Decimal(1)), "f")
    else:
        out = format(d, "f")
    if out == "-0":
        out = "0"
    return out


def _truncate_digits(text: str, digits: int) -> str:
    if "." not in text:
        return text
    head, tail = text.split(".", 1)
    if digits <= 0:
        return head
    return f"{head}.{tail[:digits]}"


def _group_thousands(text: str) -> str:
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    head, dot, tail = text.partition(".")
    groups: list[str] = []
    while len(head) > 3:
        groups.insert(0, head[-3:])
        head = head[:-3]
    groups.insert(0, head)
    return sign + ",".join(groups) + dot + tail


def ftoa_with_digits(value: float, digits: int = 2) -> str:
    """Truncate to ``digits`` decimals and drop trailing zeros: ``1.21231 -> "1.21"``."""
    out = _truncate_digits(_plain(value), digits)
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def commaf_with_digits(value: float, digits: int = 2) -> str:
    """Axis value text: thousands grouping, ``k``/``M`` suffixes and at most ``digits`` decimals."""
    if value >= 1_000_000:
        return _group_thousands(_truncate_digits(_plain(value / 1_000_000), digits)) + "M"
    if value >= 1_000:
        return _group_thousands(_truncate_digits(_plain(value / 1_000), digits)) + "k"
    return _group_thousands(_truncate_digits(_plain(value), digits))


def apply_value_template(template: str, values: Sequence[str]) -> list[str]:
    if not template:
        return list(values)
    return [template.replace("{value}", text) for text in values]


def new_label_formatter(
    series_names: Sequence[str],
    layout: str | LabelFormatter | None,
    *,
    default_layout: str = DEFAULT_LABEL_LAYOUT,
) -> LabelFormatter:
    """Build a formatter for ``{a}``/``{b}`` (name), ``{c}`` (value) and ``{d}`` (percent).

    A negative percent means the chart has no percentage and ``{d}`` renders empty.
    """
    if callable(layout):
        return layout
    template = layout or default_layout
    names = list(series_names)

    def _format(index: int, value: float, percent: float) -> str:
        percent_text = ""
        if percent >= 0:
            percent_text = ftoa_with_digits(percent * 100, 2) + "%"
        name = names[index] if 0 <= index < len(names) else ""
        text = template.replace("{c}", ftoa_with_digits(value, 2))
        text = text.replace("{d}", percent_text)
        text = text.replace("{b}", name)
        return text.replace("{a}", name)

    return _format


def new_pie_label_formatter(series_names: Sequence[str], layout: str | LabelFormatter | None) -> LabelFormatter:
    return new_label_formatter(series_names, layout, default_layout=PIE_LABEL_LAYOUT)


def new_funnel_label_formatter(series_names: Sequence[str], layout: str | LabelFormatter | None) -> LabelFormatter:
    return new_label_formatter(series_names, layout, default_layout=FUNNEL_LABEL_LAYOUT)
