from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when plot inputs cannot be mapped or drawn."""


class DegenerateExtentError(PlotDataError):
    """Raised when an axis extent has no usable span."""
