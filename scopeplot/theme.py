from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping, Sequence

from scopeplot.canvas import RGBA, FontSpec

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

Color = str | tuple[int, int, int] | tuple[int, int, int, int]

_COLOR_TOKENS = (
    "background",
    "plot_background",
    "border",
    "axis",
    "gridline",
    "text",
    "title_highlight",
)
_POSITIVE_TOKENS = (
    "title_font_size_px",
    "label_font_size_px",
    "tick_length_px",
    "dot_radius_px",
    "line_width_px",
)
_NON_NEGATIVE_TOKENS = ("border_px", "padding_px", "top_margin_px")

DEFAULT_PALETTE = (
    "#3E95FF",
    "#FFA500",
    "#4DAF4A",
    "#E41A1C",
    "#984EA3",
    "#17BECF",
)


@dataclass(frozen=True)
class PlotTheme:
    """Colors, fonts and unscaled pixel constants injected into a graph."""

    background: str = "#0C1017"
    plot_background: str = "#141A24"
    border: str = "#3C434E"
    axis: str = "#7C8A9C"
    gridline: str = "#2C3542"
    text: str = "#D0DAE8"
    title_highlight: str = "#FFB347"
    palette: tuple[str, ...] = DEFAULT_PALETTE
    title_font_family: str = "DejaVu Sans"
    title_font_size_px: float = 13.0
    label_font_family: str = "DejaVu Sans Mono"
    label_font_size_px: float = 11.0
    border_px: float = 1.0
    tick_length_px: float = 5.0
    padding_px: float = 4.0
    dot_radius_px: float = 2.5
    line_width_px: float = 1.0
    # Content rectangles starting at or above this y have no top border.
    top_margin_px: float = 0.0

    def rgba(self, token: str) -> RGBA:
        if token not in _COLOR_TOKENS:
            raise ValueError(f"Unknown color token: {token}")
        return parse_hex_color(getattr(self, token))

    def series_color(self, series_id: int) -> RGBA:
        return parse_hex_color(self.palette[series_id % len(self.palette)])

    def title_font(self, scale: float = 1.0) -> FontSpec:
        return FontSpec(family=self.title_font_family, size_px=self.title_font_size_px * scale)

    def label_font(self, scale: float = 1.0) -> FontSpec:
        return FontSpec(family=self.label_font_family, size_px=self.label_font_size_px * scale, monospace=True)


DEFAULT_THEME = PlotTheme()


def validate_theme(overrides: Mapping[str, Any] | None = None) -> PlotTheme:
    """Validate and merge user theme overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    palette = raw["palette"]
    if isinstance(palette, str) or not isinstance(palette, Sequence) or len(palette) == 0:
        raise ValueError("Token `palette` must be a non-empty list of hex colors")
    for entry in palette:
        if not isinstance(entry, str) or not _HEX_COLOR.match(entry):
            raise ValueError("Token `palette` must be a non-empty list of hex colors")

    for key in ("title_font_family", "label_font_family"):
        if not isinstance(raw[key], str) or not raw[key].strip():
            raise ValueError(f"Token `{key}` must be a non-empty string")

    for key in _POSITIVE_TOKENS:
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")

    for key in _NON_NEGATIVE_TOKENS:
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)) or float(raw[key]) < 0:
            raise ValueError(f"Token `{key}` must be a non-negative number")

    out: dict[str, Any] = {key: str(raw[key]) for key in _COLOR_TOKENS}
    out["palette"] = tuple(str(entry) for entry in palette)
    out["title_font_family"] = str(raw["title_font_family"])
    out["label_font_family"] = str(raw["label_font_family"])
    for key in _POSITIVE_TOKENS + _NON_NEGATIVE_TOKENS:
        out[key] = float(raw[key])
    return PlotTheme(**out)


def parse_hex_color(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"not a hex color: {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


def coerce_color(color: Color) -> RGBA:
    if isinstance(color, str):
        return parse_hex_color(color)
    if len(color) == 3:
        r, g, b = color
        return (int(r), int(g), int(b), 255)
    if len(color) == 4:
        r, g, b, a = color
        return (int(r), int(g), int(b), int(a))
    raise ValueError(f"color must be RGB, RGBA or hex: {color!r}")
