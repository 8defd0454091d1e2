from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from primer_plot.layers import (
    Axis,
    LabeledPoint,
    Layer,
    LayerStyle,
    Point,
    PolylinePath,
    ScatterSet,
    points_from_pairs,
)
from primer_plot.renderer import render
from primer_plot.scales import Extent, PixelRect, ensure_span, extent_of
from primer_plot.surface import DrawingSurface

from primer_demos.config import (
    GradientDescentDemoConfig,
    RegressionDemoConfig,
    TaskDemoConfig,
    TrainerDemoConfig,
)
from primer_demos.models import LinearModel, descent_path, least_squares_fit, mean_squared_error, quadratic_curve

LOGGER = logging.getLogger(__name__)

TASK_KINDS: tuple[str, ...] = ("classification", "regression")

REGRESSION_POINT_STYLE = LayerStyle(color="rgba(0, 123, 255, 0.8)", marker_radius=3.0)
REGRESSION_LINE_STYLE = LayerStyle(color="rgba(220, 53, 69, 0.8)", line_width=2.0)
LOSS_CURVE_STYLE = LayerStyle(color="rgba(40, 167, 69, 0.9)", line_width=2.0)
DESCENT_PATH_STYLE = LayerStyle(color="rgba(255, 193, 7, 0.9)", line_width=2.0, marker_radius=3.0)
CLASS_STYLES = (
    LayerStyle(color="rgba(66, 165, 245, 0.7)", label="Class 0"),
    LayerStyle(color="rgba(239, 83, 80, 0.7)", label="Class 1"),
)
TASK_POINT_STYLE = LayerStyle(color="rgba(255, 167, 38, 0.7)", label="Data points")
TASK_FIT_STYLE = LayerStyle(color="rgba(102, 187, 106, 0.9)", line_width=2.0, label="Least squares fit")
TRAINER_POINT_STYLE = LayerStyle(color="rgba(129, 212, 250, 0.7)", label="Training data")
TRAINER_MODEL_STYLE = LayerStyle(color="rgba(244, 143, 177, 0.9)", line_width=2.0, label="Model prediction")


@dataclass(frozen=True)
class Scene:
    layers: tuple[Layer, ...]
    extent_x: Extent
    extent_y: Extent
    readouts: dict[str, str] = field(default_factory=dict)


def draw_scene(surface: DrawingSurface, scene: Scene, rect: PixelRect) -> None:
    render(surface, scene.layers, scene.extent_x, scene.extent_y, rect)


def regression_scene(
    points: Sequence[Point],
    m: float,
    b: float,
    cfg: RegressionDemoConfig | None = None,
) -> Scene:
    """Data plus a candidate line ``y = m * x + b`` and its mean squared error."""
    cfg = cfg or RegressionDemoConfig()
    extent_x = ensure_span(extent_of(p.x for p in points))
    line = (
        Point(x=extent_x.min, y=m * extent_x.min + b),
        Point(x=extent_x.max, y=m * extent_x.max + b),
    )
    extent_y = ensure_span(
        extent_of((p.y for p in points), include=(q.y for q in line), pad=cfg.y_padding)
    )
    layers: tuple[Layer, ...] = (
        Axis(tick_count=cfg.tick_count),
        ScatterSet(points=tuple(points), style=REGRESSION_POINT_STYLE),
        PolylinePath(points=line, style=REGRESSION_LINE_STYLE),
    )
    readouts = {
        "slope": f"{m:.2f}",
        "intercept": f"{b:.2f}",
        "mse": f"{mean_squared_error(points, m, b):.3f}",
    }
    return Scene(layers=layers, extent_x=extent_x, extent_y=extent_y, readouts=readouts)


def gradient_descent_scene(alpha: float, cfg: GradientDescentDemoConfig | None = None) -> Scene:
    """Loss curve ``J(w) = w**2`` with the descent path for learning rate ``alpha``."""
    cfg = cfg or GradientDescentDemoConfig()
    curve = quadratic_curve(cfg.w_min, cfg.w_max, cfg.curve_step)
    path = descent_path(alpha, w0=cfg.w0, steps=cfg.steps)
    if path.stopped_early:
        LOGGER.warning("descent path overflowed with alpha=%g; showing %d finite steps", alpha, len(path.points))
    elif abs(path.final_w) > abs(cfg.w0):
        LOGGER.warning("descent path diverges with alpha=%g: |w| grew from %g to %g", alpha, abs(cfg.w0), abs(path.final_w))
    layers: tuple[Layer, ...] = (
        Axis(tick_count=cfg.tick_count, x_decimals=1, y_decimals=0, y_label_offset=(-30.0, 3.0)),
        PolylinePath(points=curve, style=LOSS_CURVE_STYLE),
        PolylinePath(points=path.points, style=DESCENT_PATH_STYLE),
        ScatterSet(points=path.points, style=DESCENT_PATH_STYLE),
    )
    readouts = {
        "learning_rate": f"{alpha:.2f}",
        "final_w": f"{path.final_w:.4g}" if path.points else "nan",
        "steps": str(max(0, len(path.points) - 1)),
    }
    return Scene(
        layers=layers,
        extent_x=Extent(min=cfg.w_min, max=cfg.w_max),
        extent_y=Extent(min=cfg.loss_min, max=cfg.loss_max),
        readouts=readouts,
    )


def task_scene(kind: str, points: Sequence[Point], cfg: TaskDemoConfig | None = None) -> Scene:
    """Classification clusters, or regression data with its least-squares line."""
    cfg = cfg or TaskDemoConfig()
    if kind not in TASK_KINDS:
        raise ValueError(f"unknown task kind: {kind!r}; expected one of {', '.join(TASK_KINDS)}")
    axis = Axis(tick_count=cfg.tick_count, x_title="x", y_title="y")
    extent_x = ensure_span(extent_of(p.x for p in points))

    if kind == "classification":
        by_label: tuple[list[Point], list[Point]] = ([], [])
        for p in points:
            if not isinstance(p, LabeledPoint):
                raise ValueError("classification scenes need labeled points")
            by_label[p.label].append(Point(x=p.x, y=p.y))
        extent_y = ensure_span(extent_of((p.y for p in points), pad=cfg.padding))
        layers: tuple[Layer, ...] = (
            axis,
            ScatterSet(points=tuple(by_label[0]), style=CLASS_STYLES[0]),
            ScatterSet(points=tuple(by_label[1]), style=CLASS_STYLES[1]),
        )
        readouts = {"class_0": str(len(by_label[0])), "class_1": str(len(by_label[1]))}
        return Scene(layers=layers, extent_x=extent_x, extent_y=extent_y, readouts=readouts)

    fit = least_squares_fit(points)
    line = _line_through_sorted_x(points, fit)
    extent_y = ensure_span(extent_of((p.y for p in points), include=(q.y for q in line), pad=cfg.padding))
    layers = (
        axis,
        ScatterSet(points=tuple(Point(x=p.x, y=p.y) for p in points), style=TASK_POINT_STYLE),
        PolylinePath(points=line, style=TASK_FIT_STYLE),
    )
    readouts = {"slope": f"{fit.m:.3f}", "intercept": f"{fit.b:.3f}"}
    return Scene(layers=layers, extent_x=extent_x, extent_y=extent_y, readouts=readouts)


def trainer_scene(
    state: LinearModel,
    points: Sequence[Point],
    cfg: TrainerDemoConfig | None = None,
    *,
    learning_rate: float | None = None,
) -> Scene:
    """Training data with the current model's predictions."""
    cfg = cfg or TrainerDemoConfig()
    lr = cfg.learning_rate if learning_rate is None else learning_rate
    line = _line_through_sorted_x(points, state)
    extent_x = ensure_span(extent_of(p.x for p in points))
    extent_y = ensure_span(extent_of((p.y for p in points), include=(q.y for q in line), pad=cfg.y_padding))
    layers: tuple[Layer, ...] = (
        Axis(tick_count=cfg.tick_count, x_title="x", y_title="y"),
        ScatterSet(points=tuple(points), style=TRAINER_POINT_STYLE),
        PolylinePath(points=line, style=TRAINER_MODEL_STYLE),
    )
    readouts = {
        "learning_rate": f"{lr:.3f}",
        "m": f"{state.m:.3f}",
        "b": f"{state.b:.3f}",
        "mse": f"{mean_squared_error(points, state.m, state.b):.3f}",
    }
    return Scene(layers=layers, extent_x=extent_x, extent_y=extent_y, readouts=readouts)


def _line_through_sorted_x(points: Sequence[Point], model: LinearModel) -> tuple[Point, ...]:
    return points_from_pairs([(x, model.predict(x)) for x in sorted(p.x for p in points)])
