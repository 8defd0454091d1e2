from __future__ import annotations

import math

import numpy as np

from primer_plot.raster.canvas import RGBA, draw_pixel


def draw_disc(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    """Filled circle; pixel centres within ``radius`` of ``(cx, cy)`` are painted."""
    if not (math.isfinite(cx) and math.isfinite(cy) and math.isfinite(radius)):
        return
    if radius <= 0:
        draw_pixel(dst, int(round(cx)), int(round(cy)), color)
        return
    x_lo = max(0, int(np.floor(cx - radius)))
    x_hi = min(dst.shape[1] - 1, int(np.ceil(cx + radius)))
    y_lo = max(0, int(np.floor(cy - radius)))
    y_hi = min(dst.shape[0] - 1, int(np.ceil(cy + radius)))
    r2 = radius * radius
    for yy in range(y_lo, y_hi + 1):
        for xx in range(x_lo, x_hi + 1):
            if (xx - cx) ** 2 + (yy - cy) ** 2 <= r2:
                draw_pixel(dst, xx, yy, color)
