from __future__ import annotations

import logging
import math
from typing import Sequence

from primer_plot.adapters import to_arrays
from primer_plot.errors import PlotDataError
from primer_plot.layers import Axis, Layer, Point, PolylinePath, ScatterSet
from primer_plot.scales import AffineMapper, Extent, PixelRect, build_mapper, format_tick, linear_ticks
from primer_plot.surface import DrawingSurface

LOGGER = logging.getLogger(__name__)


def render(
    surface: DrawingSurface,
    layers: Sequence[Layer],
    extent_x: Extent,
    extent_y: Extent,
    rect: PixelRect,
) -> None:
    """Clear ``surface`` and draw ``layers`` in order through one shared mapper.

    Later layers paint over earlier ones. Nothing is retained between calls.
    """
    surface.clear_rect(0, 0, surface.width, surface.height)
    mapper = build_mapper(extent_x, extent_y, rect)
    LOGGER.debug(
        "render %d layers x=[%g, %g] y=[%g, %g]",
        len(layers),
        extent_x.min,
        extent_x.max,
        extent_y.min,
        extent_y.max,
    )
    for layer in layers:
        if isinstance(layer, Axis):
            _draw_axis(surface, layer, mapper)
        elif isinstance(layer, ScatterSet):
            _draw_scatter(surface, layer, mapper)
        elif isinstance(layer, PolylinePath):
            _draw_polyline(surface, layer, mapper)
        else:
            raise PlotDataError(f"unsupported layer type: {type(layer).__name__}")


def _draw_axis(surface: DrawingSurface, axis: Axis, mapper: AffineMapper) -> None:
    rect = mapper.rect
    left = rect.x
    top = rect.y
    bottom = rect.bottom
    right = rect.right

    surface.stroke_style = axis.color
    surface.line_width = axis.line_width
    surface.begin_path()
    surface.move_to(left, top)
    surface.line_to(left, bottom)
    surface.line_to(right, bottom)
    surface.stroke()

    surface.fill_style = axis.text_color
    surface.font = axis.font
    x_ticks = linear_ticks(mapper.extent_x, axis.tick_count)
    y_ticks = linear_ticks(mapper.extent_y, axis.tick_count)
    x_dx, x_dy = axis.x_label_offset
    y_dx, y_dy = axis.y_label_offset
    for tx, ty in zip(x_ticks, y_ticks, strict=True):
        px = mapper.map_x(tx)
        surface.begin_path()
        surface.move_to(px, bottom)
        surface.line_to(px, bottom + axis.tick_length)
        surface.stroke()
        surface.fill_text(format_tick(tx, axis.x_decimals), px + x_dx, bottom + x_dy)

        py = mapper.map_y(ty)
        surface.begin_path()
        surface.move_to(left - axis.tick_length, py)
        surface.line_to(left, py)
        surface.stroke()
        surface.fill_text(format_tick(ty, axis.y_decimals), left + y_dx, py + y_dy)

    if axis.x_title:
        dx, dy = axis.x_title_offset
        surface.fill_text(axis.x_title, left + rect.width / 2 + dx, bottom + dy)
    if axis.y_title:
        dx, dy = axis.y_title_offset
        surface.fill_text(axis.y_title, left + dx, top + dy)


def _draw_scatter(surface: DrawingSurface, layer: ScatterSet, mapper: AffineMapper) -> None:
    surface.fill_style = layer.style.color
    for px, py in _mapped(layer.points, mapper):
        surface.begin_path()
        surface.arc(px, py, layer.style.marker_radius, 0.0, 2.0 * math.pi)
        surface.fill()


def _draw_polyline(surface: DrawingSurface, layer: PolylinePath, mapper: AffineMapper) -> None:
    if not layer.points:
        return
    surface.stroke_style = layer.style.color
    surface.line_width = layer.style.line_width
    surface.begin_path()
    (x0, y0), *rest = _mapped(layer.points, mapper)
    surface.move_to(x0, y0)
    for px, py in rest:
        surface.line_to(px, py)
    surface.stroke()


def _mapped(points: Sequence[Point], mapper: AffineMapper) -> list[tuple[float, float]]:
    xs, ys = to_arrays(points)
    return list(zip(mapper.map_xs(xs).tolist(), mapper.map_ys(ys).tolist()))
