from __future__ import annotations

import numpy as np

from scopeplot.canvas import RGBA
from scopeplot.raster.canvas import blend_mask


def ellipse_mask(cx: float, cy: float, rx: float, ry: float) -> tuple[int, int, np.ndarray]:
    """Boolean coverage of a filled ellipse plus the top-left pixel of the mask."""
    rx = max(0.5, rx)
    ry = max(0.5, ry)
    x0 = int(np.floor(cx - rx))
    y0 = int(np.floor(cy - ry))
    x1 = int(np.ceil(cx + rx))
    y1 = int(np.ceil(cy + ry))
    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    # sample at pixel centres
    nx = (xs + 0.5 - cx) / rx
    ny = (ys + 0.5 - cy) / ry
    return x0, y0, (nx * nx + ny * ny) <= 1.0


def fill_ellipse(dst: np.ndarray, cx: float, cy: float, rx: float, ry: float, color: RGBA) -> None:
    x0, y0, mask = ellipse_mask(cx, cy, rx, ry)
    blend_mask(dst, x0, y0, mask, color)


def stroke_ellipse(dst: np.ndarray, cx: float, cy: float, rx: float, ry: float, color: RGBA, width: float = 1.0) -> None:
    x0, y0, outer = ellipse_mask(cx, cy, rx, ry)
    ix0, iy0, inner = ellipse_mask(cx, cy, rx - width, ry - width)
    ring = outer.copy()
    if rx > width and ry > width:
        oy = iy0 - y0
        ox = ix0 - x0
        ih, iw = inner.shape
        ring[oy : oy + ih, ox : ox + iw] &= ~inner
    blend_mask(dst, x0, y0, ring, color)
