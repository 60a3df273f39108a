from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from sandbox_charts.style import RGBA, FontSpec


@dataclass(frozen=True)
class FillRect:
    x: int
    y: int
    width: int
    height: int
    color: RGBA


@dataclass(frozen=True)
class DrawLine:
    """Straight line, both end points inclusive."""

    x0: int
    y0: int
    x1: int
    y1: int
    color: RGBA


@dataclass(frozen=True)
class DrawText:
    """Single-line text anchored at its baseline origin ``(x, y)``.

    With a non-zero ``rotate_deg`` the origin is the pivot the text turns about;
    negative angles turn counter-clockwise on screen, so ``-90`` reads bottom to top.
    """

    text: str
    x: float
    y: float
    font: FontSpec
    color: RGBA
    rotate_deg: int = 0


DrawCommand = Union[FillRect, DrawLine, DrawText]


def rotated_text_command(
    text: str,
    pivot: tuple[float, float],
    angle_deg: int,
    font: FontSpec,
    color: RGBA,
) -> DrawText:
    if angle_deg % 90 != 0:
        raise ValueError("angle_deg must be a multiple of 90")
    return DrawText(text=text, x=pivot[0], y=pivot[1], font=font, color=color, rotate_deg=angle_deg)
