from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal

import numpy as np


LOGGER = logging.getLogger(__name__)

NiceMode = Literal["round", "ceil"]

DEFAULT_TICK_COUNT = 5
RANGE_EPSILON = 0.0001


@dataclass(frozen=True)
class AxisRange:
    low: float
    high: float

    @property
    def span(self) -> float:
        return self.high - self.low

    def normalized(self) -> "AxisRange":
        """Return a range with ``low < high`` so scales never divide by zero.

        Reversed bounds are swapped; a zero-width range is nudged upward by
        ``RANGE_EPSILON`` (relative to the magnitude when the absolute nudge is
        lost to float precision).
        """
        low = float(self.low)
        high = float(self.high)
        if low > high:
            low, high = high, low
        if high == low:
            high = low + RANGE_EPSILON
            if high == low:
                high = low + abs(low) * RANGE_EPSILON
        return AxisRange(low=low, high=high)

    def covering(self, ticks: np.ndarray) -> "AxisRange":
        if ticks.size == 0:
            return self
        return AxisRange(low=min(self.low, float(ticks[0])), high=max(self.high, float(ticks[-1])))


@dataclass(frozen=True)
class Tick:
    value: float
    label: str


def nice_number(value: float, mode: NiceMode) -> float:
    """Snap ``value`` onto the 1-2-5-10 sequence at its decade.

    ``mode="round"`` picks the nearest nice fraction (thresholds 1.5, 3, 7);
    ``mode="ceil"`` picks the smallest nice fraction that is >= the input.
    Precondition: ``value > 0``.
    """
    exp = np.floor(np.log10(value))
    decade = 10**exp
    if decade == 0.0:
        decade = 1.0
    frac = value / decade

    if mode == "round":
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def loose_label(vmin: float, vmax: float, *, tick_count: int = DEFAULT_TICK_COUNT) -> np.ndarray:
    """Nice ticks covering ``[vmin, vmax]``; the ends may lie outside the data."""
    step = _tick_step(vmin, vmax, tick_count, "ceil")
    grid_min = np.floor(vmin / step) * step
    grid_max = np.ceil(vmax / step) * step

    ticks = np.arange(grid_min, _grid_stop(grid_max, step), step, dtype=np.float64)
    ticks = _snap_zero(ticks, step)
    LOGGER.debug("loose labels between %s and %s: %s", vmin, vmax, ticks.tolist())
    return ticks


def tight_label(vmin: float, vmax: float, *, tick_count: int = DEFAULT_TICK_COUNT) -> np.ndarray:
    """Ticks starting at exactly ``vmin`` and ending at exactly ``vmax``.

    Interior ticks are the nice multiples strictly between the two bounds.
    """
    step = _tick_step(vmin, vmax, tick_count, "round")
    grid_min = np.ceil(vmin / step) * step
    grid_max = np.floor(vmax / step) * step

    interior = np.arange(grid_min, _grid_stop(grid_max, step), step, dtype=np.float64)
    interior = _snap_zero(interior, step)
    eps = step * 1e-9
    interior = interior[(interior > vmin + eps) & (interior < vmax - eps)]
    ticks = np.concatenate((np.asarray([vmin], dtype=np.float64), interior, np.asarray([vmax], dtype=np.float64)))
    LOGGER.debug("tight labels between %s and %s: %s", vmin, vmax, ticks.tolist())
    return ticks


def _tick_step(vmin: float, vmax: float, tick_count: int, span_mode: NiceMode) -> float:
    _check_tick_args(vmin, vmax, tick_count)
    span = nice_number(vmax - vmin, span_mode)
    if not (np.isfinite(span) and span > 0.0):
        raise ValueError(f"tick range [{vmin}, {vmax}] cannot be split into ticks in float precision")
    step = nice_number(span / (tick_count - 1), "round")
    if not (np.isfinite(step) and step > 0.0):
        raise ValueError(f"tick step for [{vmin}, {vmax}] underflows to {step}")
    return step


def _grid_stop(grid_max: float, step: float) -> float:
    stop = grid_max + 0.5 * step
    if not np.isfinite(stop):
        raise ValueError(f"tick grid ending at {grid_max} overflows the float range")
    return stop


def _check_tick_args(vmin: float, vmax: float, tick_count: int) -> None:
    if tick_count < 2:
        raise ValueError("tick_count must be >= 2")
    if not np.isfinite(vmin) or not np.isfinite(vmax):
        raise ValueError("tick range must be finite")
    if not vmax > vmin:
        raise ValueError(f"tick range requires max > min, got [{vmin}, {vmax}]")
    if not np.isfinite(vmax - vmin):
        raise ValueError(f"tick range [{vmin}, {vmax}] spans more than the largest float")


def _snap_zero(ticks: np.ndarray, step: float) -> np.ndarray:
    # Floating-point drift like -4.44e-16 becomes 0.
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks
