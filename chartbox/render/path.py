from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import math

TAU = 2 * math.pi


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True)
class ArcTo:
    """Elliptical arc around ``(cx, cy)`` from ``start`` sweeping ``delta`` radians."""

    cx: float
    cy: float
    rx: float
    ry: float
    start: float
    delta: float

    def point_at(self, angle: float) -> tuple[float, float]:
        return (self.cx + self.rx * math.cos(angle), self.cy + self.ry * math.sin(angle))


@dataclass(frozen=True)
class QuadCurveTo:
    cx: float
    cy: float
    x: float
    y: float


@dataclass(frozen=True)
class Close:
    pass


PathCommand = MoveTo | LineTo | ArcTo | QuadCurveTo | Close


@dataclass
class Path:
    """Retained list of path commands in canvas coordinates."""

    commands: list[PathCommand] = field(default_factory=list)

    def move_to(self, x: float, y: float) -> None:
        self.commands.append(MoveTo(x, y))

    def line_to(self, x: float, y: float) -> None:
        self.commands.append(LineTo(x, y))

    def arc_to(self, cx: float, cy: float, rx: float, ry: float, start: float, delta: float) -> None:
        self.commands.append(ArcTo(cx, cy, rx, ry, start, delta))

    def quad_curve_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self.commands.append(QuadCurveTo(cx, cy, x, y))

    def close(self) -> None:
        self.commands.append(Close())

    def circle(self, radius: float, x: float, y: float) -> None:
        self.move_to(x + radius, y)
        self.arc_to(x, y, radius, radius, 0.0, TAU)
        self.close()

    def is_empty(self) -> bool:
        return not self.commands

    def to_svg_d(self) -> str:
        parts: list[str] = []
        current: tuple[float, float] | None = None
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                parts.append(f"M {format_number(cmd.x)} {format_number(cmd.y)}")
                current = (cmd.x, cmd.y)
            elif isinstance(cmd, LineTo):
                parts.append(f"L {format_number(cmd.x)} {format_number(cmd.y)}")
                current = (cmd.x, cmd.y)
            elif isinstance(cmd, QuadCurveTo):
                control = f"{format_number(cmd.cx)},{format_number(cmd.cy)}"
                parts.append(f"Q {control} {format_number(cmd.x)},{format_number(cmd.y)}")
                current = (cmd.x, cmd.y)
            elif isinstance(cmd, ArcTo):
                sx, sy = cmd.point_at(cmd.start)
                lead = "L" if current is not None else "M"
                parts.append(f"{lead} {format_number(sx)} {format_number(sy)}")
                delta = max(-TAU, min(TAU, cmd.delta))
                # A single SVG arc cannot describe a full turn; split it in two.
                segments = 2 if abs(delta) >= TAU - 1e-9 else 1
                step = delta / segments
                angle = cmd.start
                for _ in range(segments):
                    angle += step
                    ex, ey = cmd.point_at(angle)
                    large = 1 if abs(step) > math.pi else 0
                    sweep = 1 if step > 0 else 0
                    radii = f"{format_number(cmd.rx)} {format_number(cmd.ry)}"
                    parts.append(f"A {radii} 0 {large} {sweep} {format_number(ex)} {format_number(ey)}")
                current = cmd.point_at(cmd.start + delta)
            elif isinstance(cmd, Close):
                parts.append("Z")
        return " ".join(parts)

    def flatten(self, *, segment_px: float = 2.0) -> list[tuple[list[tuple[float, float]], bool]]:
        """Return ``(points, closed)`` polylines approximating each subpath."""
        subpaths: list[tuple[list[tuple[float, float]], bool]] = []
        points: list[tuple[float, float]] = []

        def flush(closed: bool) -> None:
            nonlocal points
            if points:
                subpaths.append((points, closed))
            points = []

        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                flush(False)
                points.append((cmd.x, cmd.y))
            elif isinstance(cmd, LineTo):
                points.append((cmd.x, cmd.y))
            elif isinstance(cmd, ArcTo):
                radius = max(cmd.rx, cmd.ry)
                steps = max(8, int(math.ceil(abs(cmd.delta) * radius / segment_px)))
                steps = min(steps, 720)
                for i in range(steps + 1):
                    points.append(cmd.point_at(cmd.start + cmd.delta * i / steps))
            elif isinstance(cmd, QuadCurveTo):
                x0, y0 = points[-1] if points else (cmd.x, cmd.y)
                for i in range(1, 17):
                    t = i / 16
                    u = 1 - t
                    points.append(
                        (
                            u * u * x0 + 2 * u * t * cmd.cx + t * t * cmd.x,
                            u * u * y0 + 2 * u * t * cmd.cy + t * t * cmd.y,
                        )
                    )
            elif isinstance(cmd, Close):
                start = points[0] if points else None
                flush(True)
                if start is not None:
                    points = [start]
        if len(points) > 1:
            flush(False)
        return subpaths


def dash_polyline(
    points: Sequence[tuple[float, float]],
    dash_array: Sequence[float],
) -> list[list[tuple[float, float]]]:
    """Split a polyline into the visible runs of a dash pattern."""
    pattern = [d for d in dash_array if d > 0]
    if not pattern or len(points) < 2:
        return [list(points)]

    runs: list[list[tuple[float, float]]] = []
    index = 0
    remaining = pattern[0]
    drawing = True
    current: list[tuple[float, float]] = [points[0]]
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        seg = math.hypot(x1 - x0, y1 - y0)
        pos = 0.0
        while seg - pos > remaining:
            pos += remaining
            t = pos / seg
            pt = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            if drawing:
                current.append(pt)
                runs.append(current)
            current = [pt]
            drawing = not drawing
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= seg - pos
        if drawing:
            current.append((x1, y1))
        else:
            current = [(x1, y1)]
    if drawing and len(current) > 1:
        runs.append(current)
    return runs


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
