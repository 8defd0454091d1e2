from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image

from primer_plot.layers import Color
from primer_plot.raster.canvas import RGBA, fill_rect, new_canvas, parse_color
from primer_plot.raster.draw_lines import draw_polyline
from primer_plot.raster.draw_markers import draw_disc
from primer_plot.raster.draw_text import draw_text, parse_font, text_size

LOGGER = logging.getLogger(__name__)

_FULL_TURN = 2.0 * math.pi
_ARC_SEGMENTS = 48


@dataclass
class _Subpath:
    points: list[tuple[float, float]] = field(default_factory=list)
    disc: tuple[float, float, float] | None = None


class RasterSurface:
    """DrawingSurface backed by an RGBA numpy canvas.

    Paths follow the canvas model: ``begin_path`` discards the current path,
    ``move_to`` opens a subpath and ``stroke``/``fill`` paint whatever was
    accumulated. ``fill`` paints full-circle arcs as discs; straight-line
    subpaths are only stroked.
    """

    def __init__(self, width: int, height: int, background: Color = (255, 255, 255, 255)) -> None:
        self.width = int(width)
        self.height = int(height)
        self._background: RGBA = parse_color(background)
        self._canvas = new_canvas(self.width, self.height, color=self._background)
        self._subpaths: list[_Subpath] = []
        self.stroke_style: Color = "#000000"
        self.fill_style: Color = "#000000"
        self.line_width: float = 1.0
        self.font: str = "10px sans-serif"

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        fill_rect(self._canvas, int(round(x)), int(round(y)), int(round(width)), int(round(height)), self._background)

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append(_Subpath(points=[(x, y)]))

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths or self._subpaths[-1].disc is not None:
            self.move_to(x, y)
            return
        self._subpaths[-1].points.append((x, y))

    def arc(self, x: float, y: float, radius: float, start_angle: float, end_angle: float) -> None:
        if radius < 0:
            raise ValueError("arc radius must be >= 0")
        sweep = end_angle - start_angle
        steps = max(2, int(math.ceil(_ARC_SEGMENTS * min(abs(sweep), _FULL_TURN) / _FULL_TURN)))
        outline = [
            (x + radius * math.cos(start_angle + sweep * i / steps), y + radius * math.sin(start_angle + sweep * i / steps))
            for i in range(steps + 1)
        ]
        disc = (x, y, radius) if abs(sweep) >= _FULL_TURN - 1e-9 else None
        self._subpaths.append(_Subpath(points=outline, disc=disc))

    def stroke(self) -> None:
        color = parse_color(self.stroke_style)
        width = max(1, int(round(self.line_width)))
        for sub in self._subpaths:
            if len(sub.points) < 2:
                continue
            xs = [px for px, _ in sub.points]
            ys = [py for _, py in sub.points]
            draw_polyline(self._canvas, xs, ys, color=color, width=width)

    def fill(self) -> None:
        color = parse_color(self.fill_style)
        for sub in self._subpaths:
            if sub.disc is None:
                continue
            cx, cy, radius = sub.disc
            draw_disc(self._canvas, cx, cy, radius, color)

    def fill_text(self, text: str, x: float, y: float) -> None:
        # y is the text baseline, as on an HTML canvas.
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        family, size_px = parse_font(self.font)
        _, h = text_size(text, font_family=family, font_size_px=size_px)
        draw_text(
            self._canvas,
            int(round(x)),
            int(round(y)) - h,
            text,
            parse_color(self.fill_style),
            font_family=family,
            font_size_px=size_px,
        )

    def pixel(self, x: int, y: int) -> RGBA:
        r, g, b, a = (int(v) for v in self._canvas[y, x])
        return (r, g, b, a)

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(self._canvas).save(out, format="PNG")
        LOGGER.debug("wrote %dx%d frame to %s", self.width, self.height, out)
        return out
