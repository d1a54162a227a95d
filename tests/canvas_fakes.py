from __future__ import annotations

from typing import Any

from scopeplot.canvas import RGBA, FontSpec, RectMode, rect_corners


class RecordingCanvas:
    """Canvas that records draw calls with deterministic font metrics.

    Glyphs are ``0.6 * size_px`` wide; ascent and descent are 80% and 20% of the
    font size.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.stroke: RGBA | None = (255, 255, 255, 255)
        self.stroke_width = 1.0
        self.fill: RGBA | None = (255, 255, 255, 255)

    def set_stroke(self, color: RGBA | None, width: float = 1.0) -> None:
        self.stroke = color
        self.stroke_width = width

    def set_fill(self, color: RGBA | None) -> None:
        self.fill = color

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.calls.append(("line", x0, y0, x1, y1, self.stroke))

    def rect(self, a: float, b: float, c: float, d: float, *, mode: RectMode = "corners") -> None:
        self.calls.append(("rect", *rect_corners(a, b, c, d, mode), self.fill))

    def ellipse(self, cx: float, cy: float, width: float, height: float) -> None:
        self.calls.append(("ellipse", cx, cy, width, height, self.fill))

    def text(self, text: str, x: float, y: float, *, font: FontSpec, align_x: str = "left", align_y: str = "top") -> None:
        self.calls.append(("text", text, x, y, align_x, align_y, self.fill))

    def text_width(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size_px * 0.6

    def font_ascent(self, font: FontSpec) -> float:
        return font.size_px * 0.8

    def font_descent(self, font: FontSpec) -> float:
        return font.size_px * 0.2

    def clear(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        self.calls.append(("clear", x, y, width, height, color))

    def of(self, kind: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == kind]

    def lines_in(self, color: RGBA) -> list[tuple[float, float, float, float]]:
        return [tuple(call[1:5]) for call in self.calls if call[0] == "line" and call[5] == color]

    def texts(self) -> dict[str, tuple[Any, ...]]:
        return {call[1]: call for call in self.of("text")}
