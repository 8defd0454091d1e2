from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union


Color = Union[str, tuple[int, int, int, int]]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class LabeledPoint(Point):
    label: int = 0

    def __post_init__(self) -> None:
        if self.label not in (0, 1):
            raise ValueError(f"label must be 0 or 1, got {self.label!r}")


@dataclass(frozen=True)
class LayerStyle:
    color: Color = "rgba(0, 123, 255, 0.8)"
    line_width: float = 2.0
    marker_radius: float = 3.0
    label: str | None = None


@dataclass(frozen=True)
class Axis:
    tick_count: int = 5
    x_decimals: int = 1
    y_decimals: int = 1
    color: Color = "#cccccc"
    text_color: Color = "#666666"
    font: str = "10px Arial"
    line_width: float = 1.0
    tick_length: float = 5.0
    # Label anchors relative to the tick position (x label) and the y axis (y label).
    x_label_offset: tuple[float, float] = (-10.0, 15.0)
    y_label_offset: tuple[float, float] = (-35.0, 3.0)
    x_title: str | None = None
    y_title: str | None = None
    # Title anchors relative to the bottom edge centre (x) and the top-left corner (y).
    x_title_offset: tuple[float, float] = (-3.0, 32.0)
    y_title_offset: tuple[float, float] = (-20.0, -10.0)


@dataclass(frozen=True)
class ScatterSet:
    points: tuple[Point, ...]
    style: LayerStyle = LayerStyle()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))


@dataclass(frozen=True)
class PolylinePath:
    points: tuple[Point, ...]
    style: LayerStyle = LayerStyle(color="rgba(220, 53, 69, 0.8)")

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))


Layer = Union[Axis, ScatterSet, PolylinePath]


def points_from_pairs(pairs: Sequence[tuple[float, float]]) -> tuple[Point, ...]:
    return tuple(Point(x=float(x), y=float(y)) for x, y in pairs)
