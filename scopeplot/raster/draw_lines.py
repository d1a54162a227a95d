from __future__ import annotations

import numpy as np

from scopeplot.canvas import RGBA
from scopeplot.raster.canvas import blend_mask, blend_rect


def draw_line(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    """Blend a segment drawn with a square brush ``width`` pixels across."""
    radius = max(0, width // 2)
    if x0 == x1 or y0 == y1:
        blend_rect(dst, min(x0, x1) - radius, min(y0, y1) - radius, max(x0, x1) + radius + 1, max(y0, y1) + radius + 1, color)
        return
    xs, ys = line_pixels(x0, y0, x1, y1)
    left = int(xs.min()) - radius
    top = int(ys.min()) - radius
    mask = np.zeros((int(ys.max()) - top + radius + 1, int(xs.max()) - left + radius + 1), dtype=bool)
    # each pixel is stamped once so overlapping brushes do not darken
    for oy in range(-radius, radius + 1):
        for ox in range(-radius, radius + 1):
            mask[ys - top + oy, xs - left + ox] = True
    blend_mask(dst, left, top, mask, color)


def line_pixels(x0: int, y0: int, x1: int, y1: int) -> tuple[np.ndarray, np.ndarray]:
    """Integer pixels on the segment, one per step along its major axis."""
    steps = max(abs(x1 - x0), abs(y1 - y0))
    t = np.linspace(0.0, 1.0, steps + 1)
    xs = np.rint(x0 + (x1 - x0) * t).astype(np.int64)
    ys = np.rint(y0 + (y1 - y0) * t).astype(np.int64)
    return xs, ys
