from .canvas import draw_pixel, fill_rect, new_canvas, parse_color
from .draw_lines import draw_polyline
from .draw_markers import draw_disc
from .draw_text import draw_text, parse_font, text_size
from .surface import RasterSurface

__all__ = [
    "RasterSurface",
    "draw_disc",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "parse_color",
    "parse_font",
    "text_size",
]
