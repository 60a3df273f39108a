from __future__ import annotations

from typing import Any

from sandbox_charts.chart import DEFAULT_HEIGHT, DEFAULT_WIDTH, AxisChart
from sandbox_charts.errors import ChartConfigError
from sandbox_charts.style import validate_style_overrides


DEFAULT_ASPECT_RATIO = DEFAULT_WIDTH / DEFAULT_HEIGHT


def chart(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    **style_overrides: Any,
) -> AxisChart:
    if aspect_ratio <= 0:
        raise ChartConfigError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT
    elif width is None and height is not None:
        if height <= 0:
            raise ChartConfigError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ChartConfigError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None
    return AxisChart(width=width, height=height, style=validate_style_overrides(style_overrides))
