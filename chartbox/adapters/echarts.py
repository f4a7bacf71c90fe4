from __future__ import annotations

from collections.abc import Mapping
import json
import logging
from typing import Any

from chartbox.axis import XAxisOption, YAxisOption
from chartbox.chart import ChartOption, render
from chartbox.charts.radar import RadarIndicator
from chartbox.config import OutputType
from chartbox.errors import ChartConfigError
from chartbox.geometry import BOX_ZERO, Box
from chartbox.legend import LegendOption
from chartbox.painter import POSITION_CENTER
from chartbox.series import (
    CHART_TYPE_BAR,
    CHART_TYPE_FUNNEL,
    CHART_TYPE_HORIZONTAL_BAR,
    CHART_TYPE_PIE,
    Series,
    SeriesData,
    SeriesLabel,
    SeriesMarkData,
    SeriesMarkLine,
    SeriesMarkPoint,
)
from chartbox.style import Color, Style, parse_color
from chartbox.title import TitleOption

LOGGER = logging.getLogger(__name__)

# Series types whose data items each become a series of their own.
_EXPANDED_SERIES_TYPES = (CHART_TYPE_PIE, CHART_TYPE_FUNNEL)


def _as_list(value: Any) -> list[Any]:
    """ECharts accepts either one object or a list of them for axes and series."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _mapping(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ChartConfigError(f"`{key}` must be an object")
    return value


def _position(value: Any) -> str:
    """Positions may be numbers (pixels) or strings such as ``"center"`` or ``"20%"``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        raise ChartConfigError(f"invalid position: {value!r}")
    if isinstance(value, (int, float)):
        return str(int(value))
    return str(value)


def _color(value: Any) -> Color | None:
    if not value:
        return None
    return parse_color(str(value))


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def parse_padding(value: Any) -> Box:
    """CSS-like padding: one value, ``[vertical, horizontal]``, three or four values (top, right, bottom, left)."""
    if value is None:
        return BOX_ZERO
    values = [int(v) for v in _as_list(value)]
    if not values:
        return BOX_ZERO
    if len(values) == 1:
        return Box.uniform(values[0])
    if len(values) == 2:
        return Box(top=values[0], bottom=values[0], left=values[1], right=values[1])
    padded = (values + [0, 0, 0, 0])[:4]
    if len(values) == 3:
        padded[3] = padded[1]
    return Box(top=padded[0], right=padded[1], bottom=padded[2], left=padded[3])


def parse_box(value: Any) -> Box:
    box = _mapping(value, "box")
    return Box(
        left=int(box.get("left", 0) or 0),
        top=int(box.get("top", 0) or 0),
        right=int(box.get("right", 0) or 0),
        bottom=int(box.get("bottom", 0) or 0),
    )


def _item_style(raw: Mapping[str, Any]) -> Style:
    color = _color(_mapping(raw.get("itemStyle"), "itemStyle").get("color"))
    if color is None:
        return Style()
    return Style(fill_color=color, stroke_color=color)


def parse_series_data(raw: Any) -> tuple[SeriesData, str]:
    """A data item is a number, ``null`` or ``{"value", "name", "itemStyle"}``; returns the item and its name."""
    if raw is None:
        return SeriesData(value=None), ""
    if isinstance(raw, bool):
        raise ChartConfigError(f"invalid series data item: {raw!r}")
    if isinstance(raw, (int, float)):
        return SeriesData(value=float(raw)), ""
    item = _mapping(raw, "series.data")
    return SeriesData(value=_optional_float(item.get("value")), style=_item_style(item)), str(item.get("name", ""))


def _mark_data(raw: Any) -> tuple[SeriesMarkData, ...]:
    marks = []
    for item in _as_list(_mapping(raw, "mark").get("data")):
        mark_type = _mapping(item, "mark.data").get("type")
        if mark_type in ("max", "min", "average"):
            marks.append(SeriesMarkData(type=mark_type))
        else:
            LOGGER.warning("ignoring unsupported mark type %r", mark_type)
    return tuple(marks)


def _series_label(raw: Any) -> SeriesLabel:
    label = _mapping(raw, "label")
    return SeriesLabel(
        show=bool(label.get("show", False)),
        formatter=label.get("formatter") or None,
        color=_color(label.get("color")),
        font_size=float(label.get("fontSize", 0) or 0),
        distance=int(label.get("distance", 0) or 0),
        position=str(label.get("position", "") or ""),
    )


def parse_series_list(raw_series: Any, *, horizontal: bool = False) -> list[Series]:
    series_list: list[Series] = []
    for raw in _as_list(raw_series):
        item = _mapping(raw, "series")
        series_type = str(item.get("type") or "line")
        if horizontal and series_type == CHART_TYPE_BAR:
            series_type = CHART_TYPE_HORIZONTAL_BAR
        label = _series_label(item.get("label"))
        radius = _position(item.get("radius"))
        series_style = _item_style(item)
        data = [parse_series_data(value) for value in _as_list(item.get("data"))]

        if series_type in _EXPANDED_SERIES_TYPES:
            for value, name in data:
                series_list.append(
                    Series(
                        data=(value,),
                        type=series_type,
                        name=name,
                        label=label,
                        radius=radius,
                        style=series_style.merge(value.style),
                        max=_optional_float(item.get("max")),
                        min=_optional_float(item.get("min")),
                    )
                )
            continue

        mark_point = _mapping(item.get("markPoint"), "markPoint")
        series_list.append(
            Series(
                data=tuple(value for value, _ in data),
                type=series_type,
                name=str(item.get("name", "")),
                axis_index=int(item.get("yAxisIndex", 0) or 0),
                label=label,
                mark_point=SeriesMarkPoint(
                    symbol_size=int(mark_point.get("symbolSize", 0) or 0),
                    data=_mark_data(mark_point),
                ),
                mark_line=SeriesMarkLine(data=_mark_data(item.get("markLine"))),
                style=series_style,
                radius=radius,
                max=_optional_float(item.get("max")),
                min=_optional_float(item.get("min")),
            )
        )
    return series_list


def _parse_title(raw: Any) -> TitleOption:
    title = _mapping(raw, "title")
    text_style = _mapping(title.get("textStyle"), "title.textStyle")
    subtext_style = _mapping(title.get("subtextStyle"), "title.subtextStyle")
    return TitleOption(
        text=str(title.get("text", "")),
        subtext=str(title.get("subtext", "")),
        left=_position(title.get("left")),
        top=_position(title.get("top")),
        font_size=float(text_style.get("fontSize", 0) or 0),
        font_color=_color(text_style.get("color")),
        subtext_font_size=float(subtext_style.get("fontSize", 0) or 0),
        subtext_font_color=_color(subtext_style.get("color")),
        show=title.get("show", True) is not False,
    )


def _parse_legend(raw: Any) -> LegendOption:
    legend = _mapping(raw, "legend")
    text_style = _mapping(legend.get("textStyle"), "legend.textStyle")
    return LegendOption(
        data=[str(name) for name in _as_list(legend.get("data"))],
        show=legend.get("show", True) is not False,
        left=_position(legend.get("left")) or POSITION_CENTER,
        top=_position(legend.get("top")),
        align=str(legend.get("align", "") or ""),
        orient=str(legend.get("orient", "") or ""),
        icon=str(legend.get("icon", "") or ""),
        font_size=float(text_style.get("fontSize", 0) or 0),
        font_color=_color(text_style.get("color")),
        padding=parse_padding(legend.get("padding")),
    )


def _parse_x_axis(raw: Any) -> XAxisOption:
    axes = _as_list(raw)
    if not axes:
        return XAxisOption()
    axis = _mapping(axes[0], "xAxis")
    boundary_gap = axis.get("boundaryGap")
    return XAxisOption(
        data=[str(v) for v in _as_list(axis.get("data"))],
        boundary_gap=None if boundary_gap is None else bool(boundary_gap),
        split_number=int(axis.get("splitNumber", 0) or 0),
    )


def _parse_y_axes(raw: Any) -> list[YAxisOption]:
    options = []
    for item in _as_list(raw):
        axis = _mapping(item, "yAxis")
        label = _mapping(axis.get("axisLabel"), "yAxis.axisLabel")
        line_style = _mapping(_mapping(axis.get("axisLine"), "yAxis.axisLine").get("lineStyle"), "lineStyle")
        options.append(
            YAxisOption(
                data=[str(v) for v in _as_list(axis.get("data"))],
                min=_optional_float(axis.get("min")),
                max=_optional_float(axis.get("max")),
                formatter=str(label.get("formatter", "") or ""),
                color=_color(line_style.get("color")),
            )
        )
    return options


def _parse_radar(raw: Any) -> list[RadarIndicator]:
    radar = _mapping(raw, "radar")
    indicators = []
    for item in _as_list(radar.get("indicator")):
        indicator = _mapping(item, "radar.indicator")
        indicators.append(
            RadarIndicator(
                name=str(indicator.get("name", "")),
                max=float(indicator.get("max", 0) or 0),
                min=float(indicator.get("min", 0) or 0),
            )
        )
    return indicators


def echarts_to_chart_option(payload: Mapping[str, Any]) -> ChartOption:
    y_axes = _as_list(payload.get("yAxis"))
    horizontal = bool(y_axes) and _mapping(y_axes[0], "yAxis").get("type") == "category"
    return ChartOption(
        series_list=parse_series_list(payload.get("series"), horizontal=horizontal),
        output=payload.get("type") or None,
        font_family=payload.get("fontFamily") or None,
        theme=payload.get("theme") or None,
        title=_parse_title(payload.get("title")),
        legend=_parse_legend(payload.get("legend")),
        x_axis=_parse_x_axis(payload.get("xAxis")),
        y_axis_options=_parse_y_axes(payload.get("yAxis")),
        width=int(payload.get("width", 0) or 0),
        height=int(payload.get("height", 0) or 0),
        padding=parse_padding(payload.get("padding")),
        box=parse_box(payload.get("box")),
        radar_indicators=_parse_radar(payload.get("radar")),
        background_color=_color(payload.get("backgroundColor")),
        children=[echarts_to_chart_option(_mapping(child, "children")) for child in _as_list(payload.get("children"))],
    )


def parse_echarts_options(text: str) -> ChartOption:
    """Map an ECharts-style JSON document onto a ``ChartOption``."""
    payload = json.loads(text)
    return echarts_to_chart_option(_mapping(payload, "options"))


def render_echarts(text: str, output: OutputType | None = None) -> bytes:
    option = parse_echarts_options(text)
    if output is not None:
        option.output = output
    return render(option).bytes()
