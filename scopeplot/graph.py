from __future__ import annotations

from dataclasses import replace
import logging
import math
import operator
import threading
from typing import Any

from scopeplot.adapters import normalize_samples
from scopeplot.canvas import Canvas
from scopeplot.config import GraphConfig, PlotStyle
from scopeplot.grid import GridRenderer
from scopeplot.layout import PlotLayout, solve_layout
from scopeplot.scales import AxisRange, PlotTransform, is_valid_range
from scopeplot.series import SeriesPlotter, SeriesTable
from scopeplot.theme import DEFAULT_THEME, Color, PlotTheme, coerce_color


LOGGER = logging.getLogger(__name__)


class Graph:
    """Live chart bound to one host canvas.

    Configuration setters mark the graph dirty; the next plotted sample triggers
    one full grid redraw and every later sample is drawn incrementally. All
    public methods may be called from any thread.
    """

    def __init__(self, canvas: Canvas, config: GraphConfig | None = None, theme: PlotTheme | None = None) -> None:
        self._canvas = canvas
        self._config = config if config is not None else GraphConfig()
        self._theme = theme if theme is not None else DEFAULT_THEME
        self._lock = threading.RLock()
        self._series = SeriesTable(self._config.sample_rate)
        self._grid = GridRenderer(canvas, self._theme)
        self._plotter = SeriesPlotter(canvas, self._theme)
        self._layout: PlotLayout | None = None
        self._transform: PlotTransform | None = None
        self._dirty = True

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    @property
    def config(self) -> GraphConfig:
        return self._config

    @property
    def theme(self) -> PlotTheme:
        return self._theme

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def x_range(self) -> AxisRange:
        return self._config.x_range

    @property
    def y_range(self) -> AxisRange:
        return self._config.y_range

    @property
    def style(self) -> PlotStyle:
        return self._config.style

    @property
    def series_count(self) -> int:
        with self._lock:
            return len(self._series)

    def last_point(self, series_id: int) -> tuple[float, float] | None:
        with self._lock:
            state = self._series.get(series_id)
            return None if state is None else state.previous

    def layout(self) -> PlotLayout:
        """Current plot rectangle and ticks, solved on demand while dirty."""
        with self._lock:
            if self._layout is not None and not self._dirty:
                return self._layout
            return solve_layout(self._canvas, self._config, self._theme)

    # configuration

    def set_content_rect(self, left: float, right: float, top: float, bottom: float) -> bool:
        return self._update(content_rect=(left, right, top, bottom))

    def set_x_range(self, vmin: float, vmax: float) -> bool:
        if not is_valid_range(vmin, vmax):
            LOGGER.debug("rejected x range (%s, %s)", vmin, vmax)
            return False
        return self._update(x_range=AxisRange(float(vmin), float(vmax)))

    def set_y_range(self, vmin: float, vmax: float) -> bool:
        if not is_valid_range(vmin, vmax):
            LOGGER.debug("rejected y range (%s, %s)", vmin, vmax)
            return False
        return self._update(y_range=AxisRange(float(vmin), float(vmax)))

    def set_x_min(self, value: float) -> bool:
        with self._lock:
            return self.set_x_range(value, self._config.x_range.max)

    def set_x_max(self, value: float) -> bool:
        with self._lock:
            return self.set_x_range(self._config.x_range.min, value)

    def set_y_min(self, value: float) -> bool:
        with self._lock:
            return self.set_y_range(value, self._config.y_range.max)

    def set_y_max(self, value: float) -> bool:
        with self._lock:
            return self.set_y_range(self._config.y_range.min, value)

    def set_style(self, style: PlotStyle) -> bool:
        return self._update(style=style)

    def set_scale(self, scale: float) -> bool:
        return self._update(scale=scale)

    def set_grid_lines(self, enabled: bool) -> bool:
        return self._update(grid_lines=bool(enabled))

    def set_equal_axes(self, enabled: bool) -> bool:
        return self._update(equal_axes=bool(enabled))

    def set_title(self, title: str) -> bool:
        return self._update(title=str(title))

    def set_x_title(self, title: str) -> bool:
        return self._update(x_title=str(title))

    def set_highlighted(self, highlighted: bool) -> bool:
        return self._update(highlighted=bool(highlighted))

    def set_sample_rate(self, sample_rate: float) -> bool:
        with self._lock:
            if not self._update(redraw=False, sample_rate=sample_rate):
                return False
            self._series.retime(self._config.sample_rate)
            return True

    def _update(self, *, redraw: bool = True, **changes: Any) -> bool:
        with self._lock:
            try:
                updated = replace(self._config, **changes)
            except (TypeError, ValueError) as exc:
                LOGGER.debug("rejected graph update %s: %s", changes, exc)
                return False
            if updated == self._config:
                return True
            self._config = updated
            if redraw:
                self._dirty = True
                self._layout = None
                self._transform = None
            return True

    # drawing

    def draw_grid(self) -> PlotLayout:
        """Redraw background, frame, ticks and titles; clears the dirty flag."""
        with self._lock:
            return self._redraw()[0]

    def _redraw(self) -> tuple[PlotLayout, PlotTransform]:
        # a setter called from a canvas callback re-arms the flag and drops the
        # cached layout; the caller still gets the one just drawn
        self._dirty = False
        config = self._config
        layout = solve_layout(self._canvas, config, self._theme)
        transform = layout.transform(config.x_range, config.y_range)
        self._layout = layout
        self._transform = transform
        self._grid.draw(config, layout)
        LOGGER.debug(
            "grid redrawn: plot_rect=%s x_step=%s y_step=%s passes=%d",
            layout.rect,
            layout.x_ticks.step,
            layout.y_ticks.step,
            layout.passes,
        )
        return layout, transform

    def plot(self, x: float, y: float, series_id: int = 0, color: Color | None = None) -> bool:
        """Append one sample; returns False when the sample was dropped."""
        if not _is_finite(x) or not _is_finite(y):
            LOGGER.debug("dropping non-finite sample x=%r y=%r series=%r", x, y, series_id)
            return False
        sid = _series_index(series_id)
        if sid is None:
            LOGGER.debug("dropping sample for invalid series id %r", series_id)
            return False
        with self._lock:
            self._plot_locked(float(x), float(y), sid, color)
            return True

    def plot_auto(self, y: float, series_id: int = 0, color: Color | None = None) -> bool:
        """Append one sample whose x comes from the series' own sample clock."""
        if not _is_finite(y):
            LOGGER.debug("dropping non-finite sample y=%r series=%r", y, series_id)
            return False
        sid = _series_index(series_id)
        if sid is None:
            LOGGER.debug("dropping sample for invalid series id %r", series_id)
            return False
        with self._lock:
            x = self._series.ensure(sid).clock.on_sample()
            self._plot_locked(x, float(y), sid, color)
            return True

    def plot_many(self, y: Any, *, x: Any = None, series_id: int = 0, color: Color | None = None) -> int:
        """Append a batch for one series; returns how many samples were drawn."""
        xs, ys = normalize_samples(y, x=x)
        drawn = 0
        with self._lock:
            for i in range(ys.size):
                if xs is None:
                    ok = self.plot_auto(float(ys[i]), series_id, color)
                else:
                    ok = self.plot(float(xs[i]), float(ys[i]), series_id, color)
                drawn += int(ok)
        return drawn

    def plot_rectangle(self, x1: float, y1: float, x2: float, y2: float, color: Color | None = None) -> bool:
        """Filled data-space rectangle, skipped when any corner is off the axes."""
        if not all(_is_finite(v) for v in (x1, y1, x2, y2)):
            return False
        with self._lock:
            config = self._config
            if not (config.x_range.contains(x1) and config.x_range.contains(x2)):
                return False
            if not (config.y_range.contains(y1) and config.y_range.contains(y2)):
                return False
            transform = self._ensure_grid()
            rgba = coerce_color(color) if color is not None else self._theme.series_color(0)
            self._plotter.draw_rectangle(transform, float(x1), float(y1), float(x2), float(y2), rgba)
            return True

    def reset(self) -> None:
        """Forget every series; the next point of each starts fresh."""
        with self._lock:
            self._series.clear()

    def reset_graph(self) -> None:
        """Drop previous points but keep the registered series."""
        with self._lock:
            self._series.forget_points()

    def _plot_locked(self, x: float, y: float, series_id: int, color: Color | None) -> None:
        state = self._series.ensure(series_id)
        config = self._config
        transform = self._ensure_grid()
        rgba = coerce_color(color) if color is not None else self._theme.series_color(series_id)
        self._plotter.draw(
            state,
            config.x_range.clamp(x),
            config.y_range.clamp(y),
            style=config.style,
            series_id=series_id,
            series_count=len(self._series),
            transform=transform,
            y_range=config.y_range,
            color=rgba,
            scale=config.scale,
        )

    def _ensure_grid(self) -> PlotTransform:
        if self._dirty or self._transform is None:
            return self._redraw()[1]
        return self._transform

    # coordinate queries

    def data_to_pixel(self, x: float, y: float) -> tuple[float, float]:
        with self._lock:
            config = self._config
            return self.layout().transform(config.x_range, config.y_range).to_pixel(x, y)

    def pixel_to_data(self, px: float, py: float) -> tuple[float, float] | None:
        """Data coordinates under a pixel, or None outside the plot rectangle."""
        with self._lock:
            layout = self.layout()
            if not layout.contains_pixel(px, py):
                return None
            config = self._config
            return layout.transform(config.x_range, config.y_range).to_data(px, py)

    def contains_pixel(self, px: float, py: float) -> bool:
        with self._lock:
            return self.layout().contains_pixel(px, py)


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def _series_index(series_id: Any) -> int | None:
    if isinstance(series_id, bool):
        return None
    try:
        sid = operator.index(series_id)
    except TypeError:
        return None
    return sid if sid >= 0 else None
