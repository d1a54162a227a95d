from __future__ import annotations

from scopeplot.canvas import Canvas
from scopeplot.config import GraphConfig
from scopeplot.layout import PlotLayout, TickSet
from scopeplot.scales import AxisRange, PlotTransform
from scopeplot.theme import PlotTheme


class GridRenderer:
    """Full redraw of everything behind the data: background, frame, ticks and titles."""

    def __init__(self, canvas: Canvas, theme: PlotTheme) -> None:
        self._canvas = canvas
        self._theme = theme

    def draw(self, config: GraphConfig, layout: PlotLayout) -> None:
        canvas = self._canvas
        theme = self._theme
        scale = config.scale
        c_left, c_right, c_top, c_bottom = config.content_rect
        pad = theme.padding_px * scale
        border = theme.border_px * scale
        title_font = theme.title_font(scale)
        transform = layout.transform(config.x_range, config.y_range)

        canvas.clear(c_left, c_top, c_right - c_left, c_bottom - c_top, theme.rgba("background"))
        canvas.set_stroke(None)
        canvas.set_fill(theme.rgba("plot_background"))
        canvas.rect(layout.left, layout.top, layout.right, layout.bottom, mode="corners")

        if border > 0:
            canvas.set_stroke(theme.rgba("border"), border)
            if c_top > theme.top_margin_px * scale:
                canvas.line(c_left, c_top, c_right, c_top)
            if c_left > 0:
                canvas.line(c_left, c_top, c_left, c_bottom)

        if config.title:
            canvas.set_fill(theme.rgba("title_highlight" if config.highlighted else "text"))
            canvas.text(
                config.title,
                (c_left + c_right) / 2,
                c_top + border + pad,
                font=title_font,
                align_x="center",
                align_y="top",
            )

        self._draw_y_ticks(config, layout, transform)
        self._draw_x_ticks(config, layout, transform)

        zero_px, zero_py = transform.to_pixel(config.x_range.anchor(), config.y_range.anchor())
        canvas.set_stroke(theme.rgba("axis"), theme.line_width_px * scale)
        canvas.line(layout.left, zero_py, layout.right, zero_py)
        canvas.line(zero_px, layout.top, zero_px, layout.bottom)

        if config.x_title:
            canvas.set_fill(theme.rgba("text"))
            canvas.text(
                config.x_title,
                (layout.left + layout.right) / 2,
                c_bottom - pad,
                font=title_font,
                align_x="center",
                align_y="bottom",
            )

    def _draw_y_ticks(self, config: GraphConfig, layout: PlotLayout, transform: PlotTransform) -> None:
        canvas = self._canvas
        theme = self._theme
        scale = config.scale
        tick = theme.tick_length_px * scale
        pad = theme.padding_px * scale
        width = theme.line_width_px * scale
        label_font = theme.label_font(scale)
        x_anchor = config.x_range.min
        for value, label in layout.y_ticks:
            _, py = transform.to_pixel(x_anchor, value)
            if config.grid_lines:
                canvas.set_stroke(theme.rgba("gridline"), width)
                canvas.line(layout.left, py, layout.right, py)
            canvas.set_stroke(theme.rgba("axis"), width)
            canvas.line(layout.left - tick, py, layout.left, py)
            canvas.set_fill(theme.rgba("text"))
            canvas.text(label, layout.left - tick - pad, py, font=label_font, align_x="right", align_y="center")
        canvas.set_stroke(theme.rgba("axis"), width)
        for value in minor_tick_values(layout.y_ticks, config.y_range):
            _, py = transform.to_pixel(x_anchor, value)
            canvas.line(layout.left - tick / 2, py, layout.left, py)

    def _draw_x_ticks(self, config: GraphConfig, layout: PlotLayout, transform: PlotTransform) -> None:
        canvas = self._canvas
        theme = self._theme
        scale = config.scale
        tick = theme.tick_length_px * scale
        pad = theme.padding_px * scale
        width = theme.line_width_px * scale
        label_font = theme.label_font(scale)
        y_anchor = config.y_range.min
        for value, label in layout.x_ticks:
            px, _ = transform.to_pixel(value, y_anchor)
            if config.grid_lines:
                canvas.set_stroke(theme.rgba("gridline"), width)
                canvas.line(px, layout.top, px, layout.bottom)
            canvas.set_stroke(theme.rgba("axis"), width)
            canvas.line(px, layout.bottom, px, layout.bottom + tick)
            canvas.set_fill(theme.rgba("text"))
            canvas.text(label, px, layout.bottom + tick + pad, font=label_font, align_x="center", align_y="top")
        canvas.set_stroke(theme.rgba("axis"), width)
        for value in minor_tick_values(layout.x_ticks, config.x_range):
            px, _ = transform.to_pixel(value, y_anchor)
            canvas.line(px, layout.bottom, px, layout.bottom + tick / 2)


def minor_tick_values(ticks: TickSet, axis: AxisRange) -> list[float]:
    """Half-step midpoints around every major tick that fall inside ``axis``."""
    values = ticks.values
    if not values or ticks.step <= 0:
        return []
    half = ticks.step / 2
    candidates = [values[0] - half] + [v + half for v in values]
    return [v for v in candidates if axis.contains(v)]
