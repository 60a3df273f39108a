from .canvas import draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_line
from .draw_text import PillowFontMetrics, draw_text, load_font
from .surface import DrawingSurface, RasterSurface

__all__ = [
    "DrawingSurface",
    "PillowFontMetrics",
    "RasterSurface",
    "draw_hline",
    "draw_line",
    "draw_pixel",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "load_font",
    "new_canvas",
]
