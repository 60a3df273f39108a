from __future__ import annotations


class ChartConfigError(ValueError):
    """Raised when chart size, ranges or style cannot produce a valid layout."""


class FontMetricsError(RuntimeError):
    """Raised when a font cannot be loaded or measured."""
