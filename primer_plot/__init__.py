from primer_plot.errors import DegenerateExtentError, PlotDataError
from primer_plot.layers import Axis, LabeledPoint, LayerStyle, Point, PolylinePath, ScatterSet
from primer_plot.raster import RasterSurface
from primer_plot.renderer import render
from primer_plot.scales import (
    AffineMapper,
    Extent,
    PixelRect,
    axis_mappers,
    build_mapper,
    ensure_span,
    extent_of,
    plot_rect,
)
from primer_plot.surface import DrawCall, DrawingSurface, RecordingSurface

__all__ = [
    "AffineMapper",
    "Axis",
    "DegenerateExtentError",
    "DrawCall",
    "DrawingSurface",
    "Extent",
    "LabeledPoint",
    "LayerStyle",
    "PixelRect",
    "PlotDataError",
    "Point",
    "PolylinePath",
    "RasterSurface",
    "RecordingSurface",
    "ScatterSet",
    "axis_mappers",
    "build_mapper",
    "ensure_span",
    "extent_of",
    "plot_rect",
    "render",
]
