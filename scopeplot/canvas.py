from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol


RGBA = tuple[int, int, int, int]
RectMode = Literal["corners", "corner"]
HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "center", "bottom"]


@dataclass(frozen=True)
class FontSpec:
    family: str
    size_px: float
    monospace: bool = False

    def scaled(self, factor: float) -> "FontSpec":
        return FontSpec(family=self.family, size_px=self.size_px * factor, monospace=self.monospace)


class Canvas(Protocol):
    """Drawing surface supplied by the host.

    Coordinates are screen pixels with y growing downwards. ``None`` for a stroke
    or fill color disables that part of subsequent shapes.
    """

    def set_stroke(self, color: RGBA | None, width: float = 1.0) -> None:
        ...

    def set_fill(self, color: RGBA | None) -> None:
        ...

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        ...

    def rect(self, a: float, b: float, c: float, d: float, *, mode: RectMode = "corners") -> None:
        ...

    def ellipse(self, cx: float, cy: float, width: float, height: float) -> None:
        ...

    def text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: FontSpec,
        align_x: HAlign = "left",
        align_y: VAlign = "top",
    ) -> None:
        ...

    def text_width(self, text: str, font: FontSpec) -> float:
        ...

    def font_ascent(self, font: FontSpec) -> float:
        ...

    def font_descent(self, font: FontSpec) -> float:
        ...

    def clear(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        ...


class TextMetrics(Protocol):
    def text_width(self, text: str, font: FontSpec) -> float:
        ...

    def font_ascent(self, font: FontSpec) -> float:
        ...

    def font_descent(self, font: FontSpec) -> float:
        ...


def rect_corners(a: float, b: float, c: float, d: float, mode: RectMode) -> tuple[float, float, float, float]:
    """Normalize a rectangle to ``(left, top, right, bottom)``."""
    if mode == "corner":
        x0, y0, x1, y1 = a, b, a + c, b + d
    elif mode == "corners":
        x0, y0, x1, y1 = a, b, c, d
    else:
        raise ValueError(f"unsupported rect mode: {mode}")
    return (min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))
