from __future__ import annotations

import numpy as np

from scopeplot.canvas import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def fill_region(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Overwrite pixels in ``[x0, x1) x [y0, y1)`` without blending."""
    xa, ya, xb, yb = _clip(dst, x0, y0, x1, y1)
    if xa >= xb or ya >= yb:
        return
    dst[ya:yb, xa:xb] = np.asarray(color, dtype=np.uint8)


def blend_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Alpha-blend ``color`` over ``[x0, x1) x [y0, y1)``."""
    xa, ya, xb, yb = _clip(dst, x0, y0, x1, y1)
    if xa >= xb or ya >= yb:
        return
    view = dst[ya:yb, xa:xb]
    a = color[3] / 255.0
    inv = 1.0 - a
    view[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + view[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    view[:, :, 3] = 255


def blend_mask(dst: np.ndarray, x0: int, y0: int, mask: np.ndarray, color: RGBA) -> None:
    """Alpha-blend ``color`` through a boolean or 0..255 coverage ``mask`` placed at ``(x0, y0)``."""
    h, w = mask.shape
    xa, ya, xb, yb = _clip(dst, x0, y0, x0 + w, y0 + h)
    if xa >= xb or ya >= yb:
        return
    cov = mask[ya - y0 : yb - y0, xa - x0 : xb - x0]
    if cov.dtype == np.bool_:
        cov = cov.astype(np.float32)
    else:
        cov = cov.astype(np.float32) / 255.0
    alpha = (color[3] / 255.0) * cov
    if not np.any(alpha > 0):
        return
    view = dst[ya:yb, xa:xb]
    src = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out = src * alpha[:, :, None] + view[:, :, :3].astype(np.float32) * (1.0 - alpha[:, :, None])
    touched = alpha > 0
    view[:, :, :3] = np.clip(out, 0, 255).astype(np.uint8)
    view[:, :, 3] = np.where(touched, 255, view[:, :, 3])


def _clip(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> tuple[int, int, int, int]:
    return (max(0, x0), max(0, y0), min(dst.shape[1], x1), min(dst.shape[0], y1))
