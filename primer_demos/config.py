from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import tomllib
from typing import Any, Mapping


@dataclass(frozen=True)
class CanvasConfig:
    width: int = 600
    height: int = 400
    margin: float = 40.0
    background: str = "#ffffff"


@dataclass(frozen=True)
class RegressionDemoConfig:
    n_points: int = 30
    x_max: float = 10.0
    true_slope: float = 1.5
    true_intercept: float = -2.0
    noise: float = 3.0
    initial_slope: float = 1.0
    initial_intercept: float = 0.0
    # Extra room above and below the data/line on the y axis.
    y_padding: float = 1.0
    tick_count: int = 5


@dataclass(frozen=True)
class GradientDescentDemoConfig:
    w0: float = 3.5
    steps: int = 15
    initial_alpha: float = 0.1
    w_min: float = -4.0
    w_max: float = 4.0
    loss_min: float = 0.0
    loss_max: float = 16.0
    curve_step: float = 0.05
    tick_count: int = 4


@dataclass(frozen=True)
class TaskDemoConfig:
    n_per_class: int = 50
    cluster_spread: float = 2.0
    class0_offset: float = 1.0
    class1_offset: float = 4.0
    n_regression: int = 100
    x_max: float = 5.0
    slope: float = 2.0
    intercept: float = 0.0
    noise: float = 2.0
    padding: float = 1.0
    tick_count: int = 5


@dataclass(frozen=True)
class TrainerDemoConfig:
    n_points: int = 50
    x_max: float = 5.0
    true_slope: float = 3.0
    true_intercept: float = 1.0
    noise: float = 4.0
    learning_rate: float = 0.01
    y_padding: float = 1.0
    tick_count: int = 5


@dataclass(frozen=True)
class DemoConfig:
    seed: int | None = None
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    regression: RegressionDemoConfig = field(default_factory=RegressionDemoConfig)
    gradient_descent: GradientDescentDemoConfig = field(default_factory=GradientDescentDemoConfig)
    task: TaskDemoConfig = field(default_factory=TaskDemoConfig)
    trainer: TrainerDemoConfig = field(default_factory=TrainerDemoConfig)


_SECTIONS = ("canvas", "regression", "gradient_descent", "task", "trainer")


def load_config(path: str | Path) -> DemoConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return config_from_mapping(raw)


def config_from_mapping(raw: Mapping[str, Any]) -> DemoConfig:
    """Overlay ``raw`` (the parsed TOML document) on the default configuration.

    Unknown sections or keys are rejected rather than ignored.
    """
    base = DemoConfig()
    updates: dict[str, Any] = {}
    for key, value in raw.items():
        if key == "seed":
            updates["seed"] = None if value is None else _coerce(value, int, "seed")
            continue
        if key not in _SECTIONS:
            raise ValueError(f"unknown config section: {key}")
        if not isinstance(value, Mapping):
            raise ValueError(f"config section `{key}` must be a table")
        updates[key] = _overlay(getattr(base, key), value, section=key)
    return replace(base, **updates)


def _overlay(current: Any, values: Mapping[str, Any], *, section: str) -> Any:
    known = {f.name: f for f in fields(current)}
    changes: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            raise ValueError(f"unknown config key: {section}.{key}")
        default = getattr(current, key)
        changes[key] = _coerce(value, type(default), f"{section}.{key}")
    return replace(current, **changes)


def _coerce(value: Any, kind: type, name: str) -> Any:
    if isinstance(value, bool):
        raise ValueError(f"config value `{name}` must be {kind.__name__}, got bool")
    if kind is int:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"config value `{name}` must be an integer, got {value!r}")
        if not isinstance(value, (int, float)):
            raise ValueError(f"config value `{name}` must be an integer, got {value!r}")
        return int(value)
    if kind is float:
        if not isinstance(value, (int, float)):
            raise ValueError(f"config value `{name}` must be a number, got {value!r}")
        return float(value)
    if kind is str:
        if not isinstance(value, str):
            raise ValueError(f"config value `{name}` must be a string, got {value!r}")
        return value
    raise ValueError(f"config value `{name}` has unsupported type {kind.__name__}")
