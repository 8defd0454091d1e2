from __future__ import annotations

import numpy as np

from primer_plot.adapters import to_points
from primer_plot.layers import LabeledPoint, Point


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def evenly_spaced_line(
    rng: np.random.Generator,
    *,
    n: int = 30,
    x_max: float = 10.0,
    slope: float = 1.5,
    intercept: float = -2.0,
    noise: float = 3.0,
) -> tuple[Point, ...]:
    """``n`` points with x evenly spaced over ``[0, x_max]`` around a noisy line."""
    if n < 2:
        raise ValueError("n must be >= 2")
    xs = np.arange(n, dtype=np.float64) / (n - 1) * x_max
    ys = slope * xs + intercept + (rng.random(n) - 0.5) * noise
    return to_points(xs, ys)


def uniform_line(
    rng: np.random.Generator,
    *,
    n: int,
    x_max: float,
    slope: float,
    intercept: float,
    noise: float,
) -> tuple[Point, ...]:
    if n < 1:
        raise ValueError("n must be >= 1")
    xs = rng.random(n) * x_max
    ys = slope * xs + intercept + (rng.random(n) - 0.5) * noise
    return to_points(xs, ys)


def two_clusters(
    rng: np.random.Generator,
    *,
    n_per_class: int = 50,
    spread: float = 2.0,
    offsets: tuple[float, float] = (1.0, 4.0),
) -> tuple[LabeledPoint, ...]:
    """Two square clusters on the diagonal, class 0 and class 1 interleaved."""
    if n_per_class < 1:
        raise ValueError("n_per_class must be >= 1")
    coords = rng.random((n_per_class, 2, 2)) * spread
    xs = np.empty(n_per_class * 2, dtype=np.float64)
    ys = np.empty(n_per_class * 2, dtype=np.float64)
    labels = np.tile(np.asarray([0, 1]), n_per_class)
    for label, offset in enumerate(offsets):
        xs[label::2] = coords[:, label, 0] + offset
        ys[label::2] = coords[:, label, 1] + offset
    return to_points(xs, ys, labels=labels)
