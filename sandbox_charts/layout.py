from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Callable, Sequence

import numpy as np

from sandbox_charts.commands import DrawCommand, DrawLine, DrawText, rotated_text_command
from sandbox_charts.errors import ChartConfigError
from sandbox_charts.formatting import resolve_tick_formatter
from sandbox_charts.metrics import FontMetrics, TextMetrics
from sandbox_charts.scales import AxisRange, Tick, loose_label, tight_label
from sandbox_charts.style import ChartStyle


LOGGER = logging.getLogger(__name__)

Y_HEADER_ROTATE_DEG = -90


@dataclass(frozen=True)
class Margins:
    top: int = 0
    left: int = 0
    right: int = 0
    bottom: int = 0

    def grow(self, *, top: int = 0, left: int = 0, right: int = 0, bottom: int = 0) -> "Margins":
        if min(top, left, right, bottom) < 0:
            raise ValueError("margins can only grow")
        return Margins(
            top=self.top + top,
            left=self.left + left,
            right=self.right + right,
            bottom=self.bottom + bottom,
        )


@dataclass(frozen=True)
class Scale:
    pixels_per_unit_x: float = 1.0
    pixels_per_unit_y: float = 1.0


@dataclass(frozen=True)
class RenderState:
    """Accumulator threaded through the layout phases; every phase returns a new one."""

    width: int
    height: int
    x_range: AxisRange
    y_range: AxisRange
    margins: Margins = field(default_factory=Margins)
    scale: Scale = field(default_factory=Scale)
    y_origin_px: int = 0
    x_ticks: tuple[Tick, ...] = ()
    y_ticks: tuple[Tick, ...] = ()
    commands: tuple[DrawCommand, ...] = ()
    history: tuple[tuple[str, Margins], ...] = ()

    def drawing(self, *commands: DrawCommand) -> "RenderState":
        return replace(self, commands=self.commands + tuple(commands))


@dataclass(frozen=True)
class ChartLayout:
    width: int
    height: int
    margins: Margins
    scale: Scale
    x_range: AxisRange
    y_range: AxisRange
    x_ticks: tuple[Tick, ...]
    y_ticks: tuple[Tick, ...]
    y_origin_px: int
    commands: tuple[DrawCommand, ...]
    history: tuple[tuple[str, Margins], ...]

    def plot_rect(self) -> tuple[int, int, int, int]:
        m = self.margins
        return (m.left, m.top, self.width - m.left - m.right, self.height - m.top - m.bottom)

    def x_to_pixel(self, value: float) -> int:
        return int(self.margins.left + (value - self.x_range.low) * self.scale.pixels_per_unit_x)

    def y_to_pixel(self, value: float) -> int:
        # Same origin row the Y ticks were placed against.
        return int(self.y_origin_px - (value - self.y_range.low) * self.scale.pixels_per_unit_y)


Phase = Callable[[RenderState], RenderState]


class LayoutEngine:
    """Computes margins, scales and draw commands for one chart in a fixed phase order.

    The two axes are coupled: Y label widths push the plot right (which changes the
    X tick positions) and the X labels lift the plot up (which changes the Y tick
    positions). Rather than iterate to a fixed point, the Y phase sizes the plot
    height with a provisional bottom margin that already includes the X label row,
    and the X phase then adds the permanent bottom margin.
    """

    def __init__(self, style: ChartStyle, metrics: FontMetrics) -> None:
        self._style = style
        self._metrics = metrics
        self._format_x = resolve_tick_formatter(style.x_tick_format, style.significant_digits)
        self._format_y = resolve_tick_formatter(style.y_tick_format, style.significant_digits)

    @property
    def style(self) -> ChartStyle:
        return self._style

    def phases(self) -> tuple[tuple[str, Phase], ...]:
        return (
            ("normalize", self._normalize_ranges),
            ("title", self._title),
            ("x_header", self._x_axis_header),
            ("y_header", self._y_axis_header),
            ("y_ticks", self._y_axis_ticks),
            ("x_ticks", self._x_axis_ticks),
            ("axes", self._axis_lines),
            ("final_scale", self._final_scale),
        )

    def layout(self, width: int, height: int, x_range: AxisRange, y_range: AxisRange) -> ChartLayout:
        if width <= 0 or height <= 0:
            raise ChartConfigError("width and height must be > 0")
        state = RenderState(width=int(width), height=int(height), x_range=x_range, y_range=y_range)
        for name, phase in self.phases():
            state = phase(state)
            state = replace(state, history=state.history + ((name, state.margins),))
        LOGGER.debug("chart layout %sx%s margins=%s scale=%s", width, height, state.margins, state.scale)
        return ChartLayout(
            width=state.width,
            height=state.height,
            margins=state.margins,
            scale=state.scale,
            x_range=state.x_range,
            y_range=state.y_range,
            x_ticks=state.x_ticks,
            y_ticks=state.y_ticks,
            y_origin_px=state.y_origin_px,
            commands=state.commands,
            history=state.history,
        )

    def _normalize_ranges(self, state: RenderState) -> RenderState:
        return replace(state, x_range=state.x_range.normalized(), y_range=state.y_range.normalized())

    def _title(self, state: RenderState) -> RenderState:
        title = self._style.title
        if not title:
            return state
        font = self._style.title_font
        m = self._metrics.measure(font, title)
        command = DrawText(
            text=title,
            x=_centered(state.width, m.width),
            y=m.height - m.descent,
            font=font,
            color=self._style.title_color,
        )
        return replace(state.drawing(command), margins=state.margins.grow(top=m.height))

    def _x_axis_header(self, state: RenderState) -> RenderState:
        header = self._style.x_axis_header
        if not header:
            return state
        font = self._style.axis_font
        m = self._metrics.measure(font, header)
        command = DrawText(
            text=header,
            x=_centered(state.width, m.width),
            y=state.height - m.descent,
            font=font,
            color=self._style.title_color,
        )
        return replace(state.drawing(command), margins=state.margins.grow(bottom=m.height))

    def _y_axis_header(self, state: RenderState) -> RenderState:
        header = self._style.y_axis_header
        if not header:
            return state
        font = self._style.axis_font
        m = self._metrics.measure(font, header)
        # Turned -90 degrees the string runs bottom to top, vertically centred,
        # with its ascender against the left canvas edge.
        pivot = (float(m.ascent), state.height - (state.height - m.width) / 2.0)
        command = rotated_text_command(header, pivot, Y_HEADER_ROTATE_DEG, font, self._style.title_color)
        return replace(state.drawing(command), margins=state.margins.grow(left=m.height))

    def _y_axis_ticks(self, state: RenderState) -> RenderState:
        style = self._style
        values = _axis_ticks(loose_label, "y", state.y_range, style.tick_count)
        labels = [self._format_y(float(v)) for v in values.tolist()]
        LOGGER.debug("y axis labels %s", labels)
        sizes = self._measure_labels(labels)
        label_w = max(m.width for m in sizes)
        line_h = max(m.height for m in sizes)
        y_range = state.y_range.covering(values)

        # Reserve the X label row up front so the plot height is already final-sized;
        # the X phase adds the permanent bottom margin itself.
        reserve = line_h + style.tick_length + style.tick_margin
        origin = state.height - state.margins.bottom - reserve
        plot_h = origin - state.margins.top
        if plot_h <= 0:
            raise ChartConfigError(f"chart height {state.height}px leaves no room for the plot area")
        vertical = plot_h / y_range.span

        left = state.margins.left
        mark_x0 = left + label_w + style.tick_margin
        commands: list[DrawCommand] = []
        for value, label, m in zip(values.tolist(), labels, sizes, strict=True):
            py = int(origin - (value - y_range.low) * vertical)
            commands.append(
                DrawText(
                    text=label,
                    x=left + label_w - m.width,
                    y=py + m.ascent // 2,
                    font=style.value_font,
                    color=style.title_color,
                )
            )
            commands.append(DrawLine(mark_x0, py, mark_x0 + style.tick_length, py, style.title_color))

        return replace(
            state.drawing(*commands),
            y_range=y_range,
            y_ticks=_ticks(values, labels),
            y_origin_px=origin,
            scale=replace(state.scale, pixels_per_unit_y=vertical),
            margins=state.margins.grow(left=label_w + style.tick_margin + style.tick_length),
        )

    def _x_axis_ticks(self, state: RenderState) -> RenderState:
        style = self._style
        x_range = state.x_range
        values = _axis_ticks(tight_label, "x", x_range, style.tick_count)
        labels = [self._format_x(float(v)) for v in values.tolist()]
        LOGGER.debug("x axis labels %s", labels)
        sizes = self._measure_labels(labels)
        label_w = max(m.width for m in sizes)
        line_h = max(m.height for m in sizes)

        # Half the widest label on the right keeps the last centred label on canvas.
        margins = state.margins.grow(right=label_w // 2)
        horizontal = _horizontal_scale(state.width, margins, x_range)
        baseline = state.height - margins.bottom
        commands: list[DrawCommand] = []
        for value, label, m in zip(values.tolist(), labels, sizes, strict=True):
            px = int(margins.left + (value - x_range.low) * horizontal)
            commands.append(
                DrawText(
                    text=label,
                    x=px - m.width // 2,
                    y=baseline,
                    font=style.value_font,
                    color=style.title_color,
                )
            )
            commands.append(DrawLine(px, baseline - line_h, px, baseline - line_h - style.tick_length, style.title_color))

        return replace(
            state.drawing(*commands),
            x_ticks=_ticks(values, labels),
            scale=replace(state.scale, pixels_per_unit_x=horizontal),
            margins=margins.grow(bottom=line_h + style.tick_length),
        )

    def _axis_lines(self, state: RenderState) -> RenderState:
        m = state.margins
        color = self._style.axis_color
        axis_y = state.height - m.bottom
        return state.drawing(
            DrawLine(m.left, m.top, m.left, axis_y, color),
            DrawLine(m.left, axis_y, state.width - m.right, axis_y, color),
        )

    def _final_scale(self, state: RenderState) -> RenderState:
        horizontal = _horizontal_scale(state.width, state.margins, state.x_range)
        return replace(state, scale=replace(state.scale, pixels_per_unit_x=horizontal))

    def _measure_labels(self, labels: Sequence[str]) -> list[TextMetrics]:
        return [self._metrics.measure(self._style.value_font, label) for label in labels]


def _centered(total: int, size: int) -> int:
    # Truncates toward zero, so an over-wide string starts just off the left edge.
    return int((total - size) / 2)


def _horizontal_scale(width: int, margins: Margins, x_range: AxisRange) -> float:
    plot_w = width - margins.left - margins.right
    if plot_w <= 0:
        raise ChartConfigError(f"chart width {width}px leaves no room for the plot area")
    return plot_w / x_range.span


def _ticks(values: np.ndarray, labels: Sequence[str]) -> tuple[Tick, ...]:
    return tuple(Tick(value=float(v), label=label) for v, label in zip(values.tolist(), labels, strict=True))


def _axis_ticks(
    label: Callable[..., np.ndarray],
    axis: str,
    axis_range: AxisRange,
    tick_count: int,
) -> np.ndarray:
    try:
        return label(axis_range.low, axis_range.high, tick_count=tick_count)
    except ValueError as exc:
        raise ChartConfigError(f"cannot place {axis} axis ticks: {exc}") from exc
