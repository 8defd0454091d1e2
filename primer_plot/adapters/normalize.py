from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from primer_plot.errors import PlotDataError
from primer_plot.layers import LabeledPoint, Point


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def to_points(x: Any, y: Any, *, labels: Any = None) -> tuple[Point, ...]:
    """Pair up x/y inputs into Points, dropping pairs where either value is not finite.

    Accepts sequences, numpy arrays and, when installed, pandas Series and torch
    tensors. With ``labels`` the result holds LabeledPoints.
    """
    x_arr = _coerce_1d_numeric(x, label="x")
    y_arr = _coerce_1d_numeric(y, label="y")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)

    if labels is None:
        return tuple(Point(x=float(xv), y=float(yv)) for xv, yv in zip(x_arr[mask], y_arr[mask], strict=True))

    label_arr = _coerce_1d_numeric(labels, label="labels")
    if label_arr.shape != x_arr.shape:
        raise PlotDataError(f"labels length mismatch: {label_arr.size} != {x_arr.size}")
    return tuple(
        LabeledPoint(x=float(xv), y=float(yv), label=int(lv))
        for xv, yv, lv in zip(x_arr[mask], y_arr[mask], label_arr[mask], strict=True)
    )


def to_arrays(points: Sequence[Point]) -> tuple[np.ndarray, np.ndarray]:
    xs = np.asarray([p.x for p in points], dtype=np.float64)
    ys = np.asarray([p.y for p in points], dtype=np.float64)
    return xs, ys


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
