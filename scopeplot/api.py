from __future__ import annotations

from dataclasses import replace

from scopeplot.config import GraphConfig
from scopeplot.graph import Graph
from scopeplot.raster import RasterCanvas
from scopeplot.theme import DEFAULT_THEME, PlotTheme, parse_hex_color


DEFAULT_ASPECT_RATIO = 16.0 / 9.0


def raster_graph(
    width: int | None = None,
    height: int | None = None,
    *,
    config: GraphConfig | None = None,
    theme: PlotTheme | None = None,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
) -> Graph:
    """Graph drawing into a fresh ``RasterCanvas``.

    With no size given the canvas matches ``config.content_rect``; with one
    dimension the other follows ``aspect_ratio``. An explicit size makes the
    content rectangle fill the whole canvas.
    """
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    theme = theme if theme is not None else DEFAULT_THEME
    if width is None and height is None:
        base = config if config is not None else GraphConfig()
        _, right, _, bottom = base.content_rect
        width = max(1, int(round(right)))
        height = max(1, int(round(bottom)))
    else:
        if width is None and height is not None:
            if height <= 0:
                raise ValueError("height must be > 0")
            width = max(1, int(round(height * aspect_ratio)))
        elif width is not None and height is None:
            if width <= 0:
                raise ValueError("width must be > 0")
            height = max(1, int(round(width / aspect_ratio)))
        assert width is not None and height is not None
        if width <= 0 or height <= 0:
            raise ValueError("width/height must be > 0")
        rect = (0.0, float(width), 0.0, float(height))
        config = GraphConfig(content_rect=rect) if config is None else replace(config, content_rect=rect)
    canvas = RasterCanvas(width, height, background=parse_hex_color(theme.background))
    return Graph(canvas, config, theme)
