from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sandbox_charts.style import FontSpec


@dataclass(frozen=True)
class TextMetrics:
    """Integer pixel metrics of one single-line string.

    `height` is the font's line height (ascent + descent) and does not
    depend on which glyphs the string contains.
    """

    width: int
    height: int
    ascent: int
    descent: int


class FontMetrics(Protocol):
    """Backend-specific text measurement; must match what the surface actually draws."""

    def measure(self, font: FontSpec, text: str) -> TextMetrics:
        ...
