from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from primer_plot.raster.canvas import RGBA, draw_pixel


def draw_polyline(dst: np.ndarray, xs: Sequence[float], ys: Sequence[float], color: RGBA, width: int = 1) -> None:
    """Stroke the polyline through ``(xs[i], ys[i])`` in pixel space.

    Non-finite vertices break the line into separate runs. Segments are clipped
    to the canvas (plus the brush radius) before they are traced.
    """
    px = np.asarray(xs, dtype=np.float64)
    py = np.asarray(ys, dtype=np.float64)
    if px.size < 2:
        return
    pad = float(max(1, width))
    bounds = (-pad, -pad, dst.shape[1] - 1 + pad, dst.shape[0] - 1 + pad)
    # Each pixel is blended once per stroke so joints do not darken translucent lines.
    covered: set[tuple[int, int]] = set()
    for start, end in contiguous_true_runs(np.isfinite(px) & np.isfinite(py)):
        for i in range(start, end - 1):
            clipped = clip_segment(px[i], py[i], px[i + 1], py[i + 1], bounds)
            if clipped is None:
                continue
            x0, y0, x1, y1 = (int(round(v)) for v in clipped)
            _trace_segment(covered, x0, y0, x1, y1, width=width)
    for x, y in sorted(covered):
        draw_pixel(dst, x, y, color)


def contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    bounds: tuple[float, float, float, float],
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment to ``(xmin, ymin, xmax, ymax)``; None when it misses."""
    xmin, ymin, xmax, ymax = bounds
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        t = q / p
        if p < 0.0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _trace_segment(covered: set[tuple[int, int]], x0: int, y0: int, x1: int, y1: int, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _square_brush(covered, x0, y0, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _square_brush(covered: set[tuple[int, int]], x: int, y: int, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            covered.add((xx, yy))
