from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from primer_plot.adapters import to_arrays
from primer_plot.layers import Point


@dataclass(frozen=True)
class LinearModel:
    """Slope/intercept of ``y = m * x + b``."""

    m: float = 0.0
    b: float = 0.0

    def predict(self, x: float) -> float:
        return self.m * x + self.b


@dataclass(frozen=True)
class DescentPath:
    points: tuple[Point, ...]
    stopped_early: bool = False

    @property
    def final_w(self) -> float:
        return self.points[-1].x


def mean_squared_error(points: Sequence[Point], m: float, b: float) -> float:
    if not points:
        raise ValueError("mean squared error needs at least one point")
    xs, ys = to_arrays(points)
    diff = m * xs + b - ys
    return float(np.sum(diff * diff) / xs.size)


def least_squares_fit(points: Sequence[Point]) -> LinearModel:
    """Closed-form ordinary least squares for a single feature."""
    if not points:
        raise ValueError("least-squares fit needs at least one point")
    xs, ys = to_arrays(points)
    n = float(xs.size)
    sum_x = float(np.sum(xs))
    sum_y = float(np.sum(ys))
    sum_xy = float(np.sum(xs * ys))
    sum_xx = float(np.sum(xs * xs))
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0.0:
        raise ValueError("least-squares fit needs at least two distinct x values")
    m = (n * sum_xy - sum_x * sum_y) / denom
    b = (sum_y - m * sum_x) / n
    return LinearModel(m=m, b=b)


def gradient_step(state: LinearModel, points: Sequence[Point], learning_rate: float) -> LinearModel:
    """One batch gradient-descent step on mean squared error; returns the new state."""
    if not points:
        raise ValueError("gradient step needs at least one point")
    xs, ys = to_arrays(points)
    n = xs.size
    error = (state.m * xs + state.b) - ys
    m_grad = float(np.sum((2.0 / n) * error * xs))
    b_grad = float(np.sum((2.0 / n) * error))
    return LinearModel(m=state.m - learning_rate * m_grad, b=state.b - learning_rate * b_grad)


def train(state: LinearModel, points: Sequence[Point], learning_rate: float, steps: int) -> LinearModel:
    if steps < 0:
        raise ValueError("steps must be >= 0")
    for _ in range(steps):
        state = gradient_step(state, points, learning_rate)
    return state


def descent_path(alpha: float, *, w0: float = 3.5, steps: int = 15) -> DescentPath:
    """Iterates of gradient descent on ``J(w) = w**2`` as ``(w, J(w))`` points.

    The starting point is included and the final iterate is appended after
    ``steps`` updates. Iteration stops once ``w`` overflows; non-finite iterates
    are left out of the path.
    """
    if steps < 0:
        raise ValueError("steps must be >= 0")
    path: list[Point] = []
    w = float(w0)
    stopped_early = False
    for _ in range(steps):
        loss = w * w
        if not math.isfinite(loss):
            stopped_early = True
            break
        path.append(Point(x=w, y=loss))
        w = w - alpha * (2.0 * w)
    if math.isfinite(w * w):
        path.append(Point(x=w, y=w * w))
    else:
        stopped_early = True
    return DescentPath(points=tuple(path), stopped_early=stopped_early)


def quadratic_curve(lo: float = -4.0, hi: float = 4.0, step: float = 0.05) -> tuple[Point, ...]:
    if step <= 0:
        raise ValueError("step must be > 0")
    if hi < lo:
        raise ValueError("hi must be >= lo")
    samples: list[Point] = []
    w = float(lo)
    # Accumulated rather than linspace'd, so the last sample may stop short of hi.
    while w <= hi:
        samples.append(Point(x=w, y=w * w))
        w += step
    return tuple(samples)
