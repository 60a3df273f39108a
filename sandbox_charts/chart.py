from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
from typing import Any, Protocol

import numpy as np
from PIL import Image

from sandbox_charts.errors import ChartConfigError
from sandbox_charts.layout import ChartLayout, LayoutEngine
from sandbox_charts.metrics import FontMetrics
from sandbox_charts.raster.draw_text import PillowFontMetrics
from sandbox_charts.raster.surface import RasterSurface
from sandbox_charts.rasterizer import Rasterizer
from sandbox_charts.scales import AxisRange
from sandbox_charts.style import ChartStyle, FontSpec, parse_color, validate_style_overrides


LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 500
DEFAULT_HEIGHT = 350


class OutputGraph(Protocol):
    def render(self) -> np.ndarray:
        ...


@dataclass
class AxisChart:
    """Titled X/Y axis frame with nice ticks, rendered to an RGBA array.

    Chart variants draw their data into the plot rectangle of `last_layout()`
    using its `x_to_pixel` / `y_to_pixel` mapping.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    style: ChartStyle = field(default_factory=ChartStyle)
    metrics: FontMetrics = field(default_factory=PillowFontMetrics)
    x_low: float = 0.0
    x_high: float = 1.0
    y_low: float = 0.0
    y_high: float = 1.0
    _last_layout: ChartLayout | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_size(self.width, self.height)
        _check_range("x", self.x_low, self.x_high)
        _check_range("y", self.y_low, self.y_high)

    def set_size(self, width: int, height: int) -> "AxisChart":
        _check_size(width, height)
        self.width = int(width)
        self.height = int(height)
        return self

    def set_title(self, title: str | None) -> "AxisChart":
        self.style = replace(self.style, title=title)
        return self

    def set_x_axis_header(self, header: str | None) -> "AxisChart":
        self.style = replace(self.style, x_axis_header=header)
        return self

    def set_y_axis_header(self, header: str | None) -> "AxisChart":
        self.style = replace(self.style, y_axis_header=header)
        return self

    def set_colors(self, *, background: Any = None, title: Any = None, axis: Any = None) -> "AxisChart":
        updates: dict[str, Any] = {}
        if background is not None:
            updates["background_color"] = parse_color(background)
        if title is not None:
            updates["title_color"] = parse_color(title)
        if axis is not None:
            updates["axis_color"] = parse_color(axis)
        self.style = replace(self.style, **updates)
        return self

    def set_fonts(
        self,
        *,
        title: FontSpec | None = None,
        axis: FontSpec | None = None,
        value: FontSpec | None = None,
    ) -> "AxisChart":
        updates: dict[str, FontSpec] = {}
        if title is not None:
            updates["title_font"] = title
        if axis is not None:
            updates["axis_font"] = axis
        if value is not None:
            updates["value_font"] = value
        self.style = replace(self.style, **updates)
        return self

    def set_tick_geometry(
        self,
        *,
        length: int | None = None,
        margin: int | None = None,
        count: int | None = None,
    ) -> "AxisChart":
        updates: dict[str, int] = {}
        if length is not None:
            updates["tick_length"] = int(length)
        if margin is not None:
            updates["tick_margin"] = int(margin)
        if count is not None:
            updates["tick_count"] = int(count)
        self.style = replace(self.style, **updates)
        return self

    def set_x_range(self, low: float, high: float) -> "AxisChart":
        _check_range("x", low, high)
        self.x_low = float(low)
        self.x_high = float(high)
        return self

    def set_y_range(self, low: float, high: float) -> "AxisChart":
        _check_range("y", low, high)
        self.y_low = float(low)
        self.y_high = float(high)
        return self

    def configure(self, **overrides: Any) -> "AxisChart":
        self.style = validate_style_overrides(overrides, base=self.style)
        return self

    def layout(self) -> ChartLayout:
        engine = LayoutEngine(self.style, self.metrics)
        self._last_layout = engine.layout(
            self.width,
            self.height,
            AxisRange(self.x_low, self.x_high),
            AxisRange(self.y_low, self.y_high),
        )
        return self._last_layout

    def render(self) -> np.ndarray:
        layout = self.layout()
        surface = RasterSurface(self.width, self.height, color=self.style.background_color)
        Rasterizer(self.style).render(layout, surface)
        LOGGER.debug("rendered chart %sx%s plot_rect=%s", self.width, self.height, layout.plot_rect())
        return surface.rgba

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.render())

    def last_layout(self) -> ChartLayout | None:
        return self._last_layout


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ChartConfigError("width and height must be > 0")


def _check_range(axis: str, low: float, high: float) -> None:
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ChartConfigError(f"{axis} range must be finite, got ({low}, {high})")
