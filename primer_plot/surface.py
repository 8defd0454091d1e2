from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from primer_plot.layers import Color


class DrawingSurface(Protocol):
    """Immediate-mode 2D drawing context consumed by the renderer."""

    width: int
    height: int
    stroke_style: Color
    fill_style: Color
    line_width: float
    font: str

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def arc(self, x: float, y: float, radius: float, start_angle: float, end_angle: float) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_text(self, text: str, x: float, y: float) -> None:
        ...


@dataclass(frozen=True)
class DrawCall:
    name: str
    args: tuple[Any, ...] = ()


_STYLE_ATTRS = ("stroke_style", "fill_style", "line_width", "font")


@dataclass
class RecordingSurface:
    """DrawingSurface that only records calls, for headless composition tests.

    Style assignments are recorded as ``set_<attr>`` calls in the same stream.
    """

    width: int = 600
    height: int = 400
    stroke_style: Color = "#000000"
    fill_style: Color = "#000000"
    line_width: float = 1.0
    font: str = "10px sans-serif"
    calls: list[DrawCall] = field(default_factory=list)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _STYLE_ATTRS and "calls" in self.__dict__:
            self.calls.append(DrawCall(f"set_{name}", (value,)))
        object.__setattr__(self, name, value)

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.calls.append(DrawCall("clear_rect", (x, y, width, height)))

    def begin_path(self) -> None:
        self.calls.append(DrawCall("begin_path"))

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(DrawCall("move_to", (x, y)))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(DrawCall("line_to", (x, y)))

    def arc(self, x: float, y: float, radius: float, start_angle: float, end_angle: float) -> None:
        self.calls.append(DrawCall("arc", (x, y, radius, start_angle, end_angle)))

    def stroke(self) -> None:
        self.calls.append(DrawCall("stroke", (self.stroke_style, self.line_width)))

    def fill(self) -> None:
        self.calls.append(DrawCall("fill", (self.fill_style,)))

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.calls.append(DrawCall("fill_text", (text, x, y)))

    def names(self) -> list[str]:
        return [call.name for call in self.calls]

    def of(self, name: str) -> list[DrawCall]:
        return [call for call in self.calls if call.name == name]

    def reset(self) -> None:
        self.calls.clear()
