from __future__ import annotations

from dataclasses import dataclass, fields
import math
from pathlib import Path
import tomllib
from typing import Any, Literal, Mapping

from scopeplot.scales import AxisRange
from scopeplot.theme import PlotTheme, validate_theme


PlotStyle = Literal["line", "dot", "bar"]
PLOT_STYLES: frozenset[str] = frozenset({"line", "dot", "bar"})


@dataclass(frozen=True)
class GraphConfig:
    """Everything a graph needs at construction.

    content_rect: outer chart area ``(left, right, top, bottom)`` in pixels.
    x_range / y_range: visible data window, ``min < max``.
    scale: UI scale factor applied to fonts and pixel constants.
    style: how samples are drawn (``line``, ``dot`` or ``bar``).
    sample_rate: samples per x unit used by auto-increment x.
    grid_lines: draw full-length gridlines at every tick.
    equal_axes: both axes share one tick step.
    title / x_title: chart heading and x-axis caption (empty hides them).
    highlighted: draw the title in the highlight color.
    """

    content_rect: tuple[float, float, float, float] = (0.0, 640.0, 0.0, 360.0)
    x_range: AxisRange = AxisRange(0.0, 10.0)
    y_range: AxisRange = AxisRange(0.0, 1.0)
    scale: float = 1.0
    style: PlotStyle = "line"
    sample_rate: float = 1.0
    grid_lines: bool = True
    equal_axes: bool = False
    title: str = ""
    x_title: str = ""
    highlighted: bool = False

    def __post_init__(self) -> None:
        if len(self.content_rect) != 4:
            raise ValueError("content_rect must be (left, right, top, bottom)")
        if not is_valid_rect(*self.content_rect):
            raise ValueError("content_rect must be finite with left < right and top < bottom")
        object.__setattr__(self, "content_rect", tuple(float(v) for v in self.content_rect))
        if not isinstance(self.x_range, AxisRange) or not isinstance(self.y_range, AxisRange):
            raise ValueError("x_range/y_range must be AxisRange values")
        if not _is_positive(self.scale):
            raise ValueError("scale must be > 0")
        if self.style not in PLOT_STYLES:
            raise ValueError(f"unsupported plot style: {self.style}")
        if not _is_positive(self.sample_rate):
            raise ValueError("sample_rate must be > 0")


def is_valid_rect(left: float, right: float, top: float, bottom: float) -> bool:
    values = (left, right, top, bottom)
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        return False
    if not all(math.isfinite(v) for v in values):
        return False
    return left < right and top < bottom


def _is_positive(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def load_graph_config(path: str | Path) -> tuple[GraphConfig, PlotTheme]:
    """Read a ``[graph]`` table and an optional ``[theme]`` table from a TOML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"graph config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    unknown_tables = set(raw) - {"graph", "theme"}
    if unknown_tables:
        raise ValueError(f"unknown config table(s): {', '.join(sorted(unknown_tables))}")
    graph_raw = raw.get("graph", {})
    theme_raw = raw.get("theme", {})
    if not isinstance(graph_raw, Mapping) or not isinstance(theme_raw, Mapping):
        raise ValueError("`graph` and `theme` must be tables")
    return graph_config_from_mapping(graph_raw), validate_theme(theme_raw)


def graph_config_from_mapping(raw: Mapping[str, Any]) -> GraphConfig:
    allowed = {f.name for f in fields(GraphConfig)}
    kwargs: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in allowed:
            raise ValueError(f"Unknown graph option: {key}")
        if key == "content_rect":
            kwargs[key] = _coerce_numbers(value, 4, key)
        elif key in {"x_range", "y_range"}:
            lo, hi = _coerce_numbers(value, 2, key)
            kwargs[key] = AxisRange(lo, hi)
        elif key in {"grid_lines", "equal_axes", "highlighted"}:
            if not isinstance(value, bool):
                raise ValueError(f"`{key}` must be a boolean")
            kwargs[key] = value
        elif key in {"title", "x_title", "style"}:
            if not isinstance(value, str):
                raise ValueError(f"`{key}` must be a string")
            kwargs[key] = value
        else:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"`{key}` must be a number")
            kwargs[key] = float(value)
    return GraphConfig(**kwargs)


def _coerce_numbers(value: Any, count: int, label: str) -> tuple[float, ...]:
    if not isinstance(value, (list, tuple)) or len(value) != count:
        raise ValueError(f"`{label}` must be a list of {count} numbers")
    out: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise ValueError(f"`{label}` must be a list of {count} numbers")
        out.append(float(item))
    return tuple(out)
