from __future__ import annotations

import re

import numpy as np
from PIL import ImageColor

from primer_plot.errors import PlotDataError


RGBA = tuple[int, int, int, int]

_RGB_FUNC = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$"
)


def parse_color(color: str | tuple[int, ...]) -> RGBA:
    """Resolve a CSS colour string or an RGB(A) tuple to 8-bit RGBA.

    ``rgba()`` alpha follows CSS and is a fraction in [0, 1]; other string forms
    are delegated to Pillow.
    """
    if isinstance(color, tuple):
        if len(color) == 3:
            r, g, b = color
            return (int(r), int(g), int(b), 255)
        if len(color) == 4:
            r, g, b, a = color
            return (int(r), int(g), int(b), int(a))
        raise PlotDataError(f"color tuple must have 3 or 4 channels: {color!r}")
    text = color.strip().lower()
    match = _RGB_FUNC.match(text)
    if match is not None:
        r, g, b = (min(255, int(match.group(i))) for i in (1, 2, 3))
        alpha = 1.0 if match.group(4) is None else float(match.group(4))
        a = int(round(max(0.0, min(1.0, alpha)) * 255))
        return (r, g, b, a)
    try:
        rgb = ImageColor.getrgb(text)
    except ValueError as exc:
        raise PlotDataError(f"unsupported color: {color!r}") from exc
    if len(rgb) == 4:
        return (rgb[0], rgb[1], rgb[2], rgb[3])
    return (rgb[0], rgb[1], rgb[2], 255)


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise PlotDataError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA) -> None:
    """Overwrite (no blending) a clipped rectangle."""
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + width)
    y1 = min(dst.shape[0], y + height)
    if x0 >= x1 or y0 >= y1:
        return
    dst[y0:y1, x0:x1] = np.asarray(color, dtype=np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255
