from __future__ import annotations

import logging

from sandbox_charts.commands import DrawCommand, DrawLine, DrawText, FillRect
from sandbox_charts.layout import ChartLayout
from sandbox_charts.raster.surface import DrawingSurface
from sandbox_charts.style import ChartStyle


LOGGER = logging.getLogger(__name__)


class Rasterizer:
    def __init__(self, style: ChartStyle) -> None:
        self._style = style

    def render(self, layout: ChartLayout, surface: DrawingSurface) -> None:
        surface.fill_rect(0, 0, layout.width, layout.height, self._style.background_color)
        for command in layout.commands:
            self.draw(command, surface)
        LOGGER.debug("rasterized %d commands onto %sx%s surface", len(layout.commands), layout.width, layout.height)

    @staticmethod
    def draw(command: DrawCommand, surface: DrawingSurface) -> None:
        if isinstance(command, FillRect):
            surface.fill_rect(command.x, command.y, command.width, command.height, command.color)
        elif isinstance(command, DrawLine):
            surface.draw_line(command.x0, command.y0, command.x1, command.y1, command.color)
        elif isinstance(command, DrawText):
            if command.text:
                surface.draw_text(
                    command.text,
                    command.x,
                    command.y,
                    command.font,
                    command.color,
                    rotate_deg=command.rotate_deg,
                )
        else:
            raise TypeError(f"unsupported draw command: {type(command).__name__}")
