from primer_demos.config import DemoConfig, config_from_mapping, load_config
from primer_demos.models import (
    DescentPath,
    LinearModel,
    descent_path,
    gradient_step,
    least_squares_fit,
    mean_squared_error,
    quadratic_curve,
    train,
)
from primer_demos.scenes import (
    Scene,
    draw_scene,
    gradient_descent_scene,
    regression_scene,
    task_scene,
    trainer_scene,
)

__all__ = [
    "DemoConfig",
    "DescentPath",
    "LinearModel",
    "Scene",
    "config_from_mapping",
    "descent_path",
    "draw_scene",
    "gradient_descent_scene",
    "gradient_step",
    "least_squares_fit",
    "load_config",
    "mean_squared_error",
    "quadratic_curve",
    "regression_scene",
    "task_scene",
    "train",
    "trainer_scene",
]
