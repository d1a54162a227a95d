from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from scopeplot.canvas import FontSpec, TextMetrics
from scopeplot.scales import (
    MAX_LABEL_PRECISION,
    AxisRange,
    PlotTransform,
    build_transform,
    format_label,
    nice_step,
    required_precision,
    tick_values,
)
from scopeplot.theme import PlotTheme

if TYPE_CHECKING:
    from scopeplot.config import GraphConfig


MAX_LAYOUT_PASSES = 8
# Characters used to estimate the average width of a numeric label glyph.
_AVERAGE_CHARS = "0123456789.-e"


@dataclass(frozen=True)
class TickSet:
    ticks: tuple[tuple[float, str], ...]
    step: float
    precision: int
    max_label_width: float

    def __iter__(self) -> Iterator[tuple[float, str]]:
        return iter(self.ticks)

    def __len__(self) -> int:
        return len(self.ticks)

    @property
    def values(self) -> tuple[float, ...]:
        return tuple(value for value, _ in self.ticks)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for _, label in self.ticks)


@dataclass(frozen=True)
class PlotLayout:
    content: tuple[float, float, float, float]
    left: float
    right: float
    top: float
    bottom: float
    x_ticks: TickSet
    y_ticks: TickSet
    passes: int = 1

    @property
    def rect(self) -> tuple[float, float, float, float]:
        return (self.left, self.right, self.top, self.bottom)

    def transform(self, x_range: AxisRange, y_range: AxisRange) -> PlotTransform:
        return build_transform(x_range, y_range, self.rect)

    def contains_pixel(self, px: float, py: float) -> bool:
        return self.left <= px <= self.right and self.top <= py <= self.bottom


def label_ticks(axis: AxisRange, segment: float, metrics: TextMetrics, font: FontSpec) -> TickSet:
    """Label every tick of ``axis``, adding precision until neighbours differ."""
    values = tick_values(axis.min, axis.max, segment)
    precision = required_precision(axis.max, axis.min, segment)
    labels = [format_label(v, precision) for v in values]
    while precision < MAX_LABEL_PRECISION and _has_collision(labels):
        precision += 1
        labels = [format_label(v, precision) for v in values]
    width = max((float(metrics.text_width(label, font)) for label in labels), default=0.0)
    return TickSet(
        ticks=tuple(zip(values, labels)),
        step=abs(segment),
        precision=precision,
        max_label_width=width,
    )


def solve_layout(metrics: TextMetrics, config: "GraphConfig", theme: PlotTheme) -> PlotLayout:
    """Fit the plot rectangle inside the content rectangle around its own labels."""
    scale = config.scale
    label_font = theme.label_font(scale)
    title_font = theme.title_font(scale)
    pad = theme.padding_px * scale
    tick = theme.tick_length_px * scale
    border = theme.border_px * scale
    label_h = float(metrics.font_ascent(label_font) + metrics.font_descent(label_font))
    title_h = float(metrics.font_ascent(title_font) + metrics.font_descent(title_font))
    char_w = float(metrics.text_width(_AVERAGE_CHARS, label_font)) / len(_AVERAGE_CHARS)
    c_left, c_right, c_top, c_bottom = config.content_rect

    top = c_top + border + pad + label_h / 2
    if config.title:
        top += title_h + pad
    bottom = c_bottom - (tick + pad + label_h + pad)
    if config.x_title:
        bottom -= title_h + pad

    y_seg = nice_step(config.y_range.span, bottom - top, 2 * label_h)
    if config.equal_axes:
        nominal_x = nice_step(config.x_range.span, c_right - c_left - 2 * (border + pad) - tick, 4 * char_w)
        y_seg = max(abs(y_seg), abs(nominal_x))
    y_ticks = label_ticks(config.y_range, y_seg, metrics, label_font)
    left = c_left + border + pad + y_ticks.max_label_width + pad + tick

    estimate = char_w
    passes = 0
    x_ticks = y_ticks
    right = c_right
    while passes < MAX_LAYOUT_PASSES:
        passes += 1
        right = c_right - border - pad - estimate / 2
        if config.equal_axes:
            x_seg = abs(y_seg)
        else:
            x_seg = nice_step(config.x_range.span, right - left, estimate + 3 * char_w)
        x_ticks = label_ticks(config.x_range, x_seg, metrics, label_font)
        if x_ticks.max_label_width <= estimate:
            break
        estimate = x_ticks.max_label_width

    left, right = _clamp_span(left, right, c_left, c_right)
    top, bottom = _clamp_span(top, bottom, c_top, c_bottom)
    return PlotLayout(
        content=config.content_rect,
        left=left,
        right=right,
        top=top,
        bottom=bottom,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
        passes=passes,
    )


def _has_collision(labels: list[str]) -> bool:
    return any(a == b for a, b in zip(labels, labels[1:]))


def _clamp_span(lo: float, hi: float, outer_lo: float, outer_hi: float) -> tuple[float, float]:
    if outer_lo < lo < hi < outer_hi:
        return (lo, hi)
    # Not enough room for labels: keep the middle half of the content.
    quarter = (outer_hi - outer_lo) / 4
    return (outer_lo + quarter, outer_hi - quarter)
