from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
from typing import Sequence

from primer_plot.raster import RasterSurface
from primer_plot.scales import plot_rect

from primer_demos.config import DemoConfig, load_config
from primer_demos.datasets import evenly_spaced_line, make_rng, two_clusters, uniform_line
from primer_demos.models import LinearModel, train
from primer_demos.scenes import (
    TASK_KINDS,
    Scene,
    draw_scene,
    gradient_descent_scene,
    regression_scene,
    task_scene,
    trainer_scene,
)

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--out", type=Path, default=None, help="PNG output path. Default: <demo>.png")
    common.add_argument("--config", type=Path, default=None, help="TOML file overriding demo defaults.")
    common.add_argument("--width", type=int, default=None)
    common.add_argument("--height", type=int, default=None)
    common.add_argument("--seed", type=int, default=None, help="Seed for the synthetic datasets.")
    common.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    parser = argparse.ArgumentParser(prog="primer-demos")
    sub = parser.add_subparsers(dest="command", required=True)

    reg = sub.add_parser("regression", parents=[common], help="Candidate line over noisy data with its MSE.")
    reg.add_argument("--slope", type=float, default=None)
    reg.add_argument("--intercept", type=float, default=None)

    gd = sub.add_parser("gradient-descent", parents=[common], help="Descent path on J(w) = w^2.")
    gd.add_argument("--alpha", type=float, default=None, help="Learning rate.")

    task = sub.add_parser("task", parents=[common], help="Classification vs regression dataset.")
    task.add_argument("--kind", choices=TASK_KINDS, default="regression")

    trainer = sub.add_parser("train", parents=[common], help="Linear model after N gradient-descent steps.")
    trainer.add_argument("--lr", type=float, default=None, help="Learning rate.")
    trainer.add_argument("--steps", type=int, default=1)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config) if args.config is not None else DemoConfig()
    canvas = cfg.canvas
    if args.width is not None:
        canvas = replace(canvas, width=args.width)
    if args.height is not None:
        canvas = replace(canvas, height=args.height)
    seed = args.seed if args.seed is not None else cfg.seed

    scene = _build_scene(args, cfg, seed)
    surface = RasterSurface(canvas.width, canvas.height, background=canvas.background)
    draw_scene(surface, scene, plot_rect(canvas.width, canvas.height, canvas.margin))

    out = args.out if args.out is not None else Path(f"{args.command}.png")
    surface.save_png(out)
    LOGGER.info("wrote %s demo to %s", args.command, out)
    for name, value in scene.readouts.items():
        print(f"{name}: {value}")
    return 0


def _build_scene(args: argparse.Namespace, cfg: DemoConfig, seed: int | None) -> Scene:
    rng = make_rng(seed)
    if args.command == "regression":
        rc = cfg.regression
        points = evenly_spaced_line(
            rng,
            n=rc.n_points,
            x_max=rc.x_max,
            slope=rc.true_slope,
            intercept=rc.true_intercept,
            noise=rc.noise,
        )
        m = rc.initial_slope if args.slope is None else args.slope
        b = rc.initial_intercept if args.intercept is None else args.intercept
        return regression_scene(points, m, b, rc)
    if args.command == "gradient-descent":
        gc = cfg.gradient_descent
        alpha = gc.initial_alpha if args.alpha is None else args.alpha
        return gradient_descent_scene(alpha, gc)
    if args.command == "task":
        tc = cfg.task
        if args.kind == "classification":
            points = two_clusters(
                rng,
                n_per_class=tc.n_per_class,
                spread=tc.cluster_spread,
                offsets=(tc.class0_offset, tc.class1_offset),
            )
        else:
            points = uniform_line(
                rng,
                n=tc.n_regression,
                x_max=tc.x_max,
                slope=tc.slope,
                intercept=tc.intercept,
                noise=tc.noise,
            )
        return task_scene(args.kind, points, tc)
    if args.command == "train":
        tr = cfg.trainer
        if args.steps < 0:
            raise SystemExit("--steps must be >= 0")
        points = uniform_line(
            rng,
            n=tr.n_points,
            x_max=tr.x_max,
            slope=tr.true_slope,
            intercept=tr.true_intercept,
            noise=tr.noise,
        )
        lr = tr.learning_rate if args.lr is None else args.lr
        state = train(LinearModel(), points, lr, args.steps)
        return trainer_scene(state, points, tr, learning_rate=lr)
    raise ValueError(f"unknown command: {args.command}")
