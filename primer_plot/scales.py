from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, Iterable

import numpy as np

from primer_plot.errors import DegenerateExtentError, PlotDataError


@dataclass(frozen=True)
class Extent:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class PixelRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class AffineMapper:
    """Maps data-space coordinates onto a pixel rectangle with the y axis inverted."""

    extent_x: Extent
    extent_y: Extent
    rect: PixelRect

    def map_x(self, x: float) -> float:
        ex = self.extent_x
        return self.rect.x + (x - ex.min) / (ex.max - ex.min) * self.rect.width

    def map_y(self, y: float) -> float:
        ey = self.extent_y
        return self.rect.y + self.rect.height - (y - ey.min) / (ey.max - ey.min) * self.rect.height

    def map_point(self, point) -> tuple[float, float]:
        return (self.map_x(point.x), self.map_y(point.y))

    def map_xs(self, xs: np.ndarray) -> np.ndarray:
        ex = self.extent_x
        return self.rect.x + (np.asarray(xs, dtype=np.float64) - ex.min) / (ex.max - ex.min) * self.rect.width

    def map_ys(self, ys: np.ndarray) -> np.ndarray:
        ey = self.extent_y
        scaled = (np.asarray(ys, dtype=np.float64) - ey.min) / (ey.max - ey.min) * self.rect.height
        return self.rect.y + self.rect.height - scaled


def build_mapper(extent_x: Extent, extent_y: Extent, rect: PixelRect) -> AffineMapper:
    _check_extent(extent_x, "x")
    _check_extent(extent_y, "y")
    return AffineMapper(extent_x=extent_x, extent_y=extent_y, rect=rect)


def axis_mappers(
    extent_x: Extent,
    extent_y: Extent,
    rect: PixelRect,
) -> tuple[Callable[[float], float], Callable[[float], float]]:
    mapper = build_mapper(extent_x, extent_y, rect)
    return mapper.map_x, mapper.map_y


def _check_extent(extent: Extent, axis: str) -> None:
    lo = float(extent.min)
    hi = float(extent.max)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise DegenerateExtentError(f"{axis} extent must be finite: [{lo}, {hi}]")
    if hi - lo <= 0.0:
        raise DegenerateExtentError(f"{axis} extent has no span: [{lo}, {hi}]")


def extent_of(values: Iterable[float], *, include: Iterable[float] = (), pad: float = 0.0) -> Extent:
    """Smallest extent covering ``values`` and ``include``, widened by ``pad`` on both ends.

    ``include`` carries values that must stay visible even though they are not
    data, e.g. the endpoints of a fitted line.
    """
    if pad < 0:
        raise ValueError("pad must be >= 0")
    vals = np.fromiter((float(v) for v in values), dtype=np.float64)
    extra = np.fromiter((float(v) for v in include), dtype=np.float64)
    combined = np.concatenate([vals, extra])
    combined = combined[np.isfinite(combined)]
    if combined.size == 0:
        raise PlotDataError("cannot compute an extent without finite values")
    return Extent(min=float(np.min(combined)) - pad, max=float(np.max(combined)) + pad)


def ensure_span(extent: Extent, pad: float = 1.0) -> Extent:
    if pad <= 0:
        raise ValueError("pad must be > 0")
    if extent.max > extent.min:
        return extent
    center = 0.5 * (extent.min + extent.max)
    return Extent(min=center - pad, max=center + pad)


def plot_rect(width: float, height: float, margin: float) -> PixelRect:
    if margin < 0:
        raise ValueError("margin must be >= 0")
    inner_w = width - margin * 2
    inner_h = height - margin * 2
    if inner_w <= 0 or inner_h <= 0:
        raise PlotDataError(f"canvas {width}x{height} too small for margin {margin}")
    return PixelRect(x=margin, y=margin, width=inner_w, height=inner_h)


def linear_ticks(extent: Extent, count: int) -> list[float]:
    """``count + 1`` evenly spaced values from ``extent.min`` to ``extent.max``."""
    if count <= 0:
        raise ValueError("tick count must be > 0")
    return [extent.min + (i / count) * (extent.max - extent.min) for i in range(count + 1)]


def format_tick(value: float, decimals: int) -> str:
    if decimals < 0:
        raise ValueError("decimals must be >= 0")
    if not math.isfinite(value):
        return str(value)
    out = f"{value:.{decimals}f}"
    # Values that round to zero print unsigned.
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out
