from __future__ import annotations

from dataclasses import dataclass, field

from scopeplot.canvas import RGBA, Canvas
from scopeplot.config import PlotStyle
from scopeplot.sample_axis import SampleClock
from scopeplot.scales import AxisRange, PlotTransform
from scopeplot.theme import PlotTheme


@dataclass
class SeriesState:
    previous: tuple[float, float] | None = None
    clock: SampleClock = field(default_factory=SampleClock)


class SeriesTable:
    """Per-series memory; referencing id ``k`` materializes ids ``0..k``."""

    def __init__(self, sample_rate: float = 1.0) -> None:
        self._states: list[SeriesState] = []
        self._sample_rate = float(sample_rate)

    def __len__(self) -> int:
        return len(self._states)

    def ensure(self, series_id: int) -> SeriesState:
        while len(self._states) <= series_id:
            self._states.append(SeriesState(clock=SampleClock.for_rate(self._sample_rate)))
        return self._states[series_id]

    def get(self, series_id: int) -> SeriesState | None:
        if 0 <= series_id < len(self._states):
            return self._states[series_id]
        return None

    def clear(self) -> None:
        self._states.clear()

    def forget_points(self) -> None:
        for state in self._states:
            state.previous = None

    def retime(self, sample_rate: float) -> None:
        self._sample_rate = float(sample_rate)
        for state in self._states:
            state.clock.retime(sample_rate)


class SeriesPlotter:
    """Draws one new sample per call on top of whatever is already on the canvas."""

    def __init__(self, canvas: Canvas, theme: PlotTheme) -> None:
        self._canvas = canvas
        self._theme = theme

    def draw(
        self,
        state: SeriesState,
        x: float,
        y: float,
        *,
        style: PlotStyle,
        series_id: int,
        series_count: int,
        transform: PlotTransform,
        y_range: AxisRange,
        color: RGBA,
        scale: float = 1.0,
    ) -> None:
        px, py = transform.to_pixel(x, y)
        previous = state.previous
        if style == "line":
            if previous is not None:
                prev_px, prev_py = transform.to_pixel(*previous)
                self._canvas.set_stroke(color, self._theme.line_width_px * scale)
                self._canvas.line(prev_px, prev_py, px, py)
        elif style == "dot":
            diameter = 2 * self._theme.dot_radius_px * scale
            self._canvas.set_stroke(None)
            self._canvas.set_fill(color)
            self._canvas.ellipse(px, py, diameter, diameter)
        elif style == "bar":
            if previous is not None:
                self._draw_bar(previous[0], px, py, series_id, series_count, transform, y_range, color)
        else:
            raise ValueError(f"unsupported plot style: {style}")
        state.previous = (x, y)

    def _draw_bar(
        self,
        previous_x: float,
        px: float,
        py: float,
        series_id: int,
        series_count: int,
        transform: PlotTransform,
        y_range: AxisRange,
        color: RGBA,
    ) -> None:
        prev_px, base_py = transform.to_pixel(previous_x, y_range.anchor())
        slot = (px - prev_px) / max(1, series_count)
        if slot == 0:
            return
        left = prev_px + series_id * slot
        self._canvas.set_stroke(None)
        self._canvas.set_fill(color)
        self._canvas.rect(left, py, left + slot, base_py, mode="corners")

    def draw_rectangle(
        self,
        transform: PlotTransform,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: RGBA,
    ) -> None:
        px1, py1 = transform.to_pixel(x1, y1)
        px2, py2 = transform.to_pixel(x2, y2)
        self._canvas.set_stroke(None)
        self._canvas.set_fill(color)
        self._canvas.rect(px1, py1, px2, py2, mode="corners")
