from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from scopeplot.canvas import RGBA, FontSpec, HAlign, RectMode, VAlign, rect_corners
from scopeplot.raster.canvas import blend_rect, fill_region, new_canvas
from scopeplot.raster.draw_lines import draw_line
from scopeplot.raster.draw_markers import fill_ellipse, stroke_ellipse
from scopeplot.raster.draw_text import draw_text, font_metrics, text_width
from scopeplot.raster.layers import DirtyRegion, Rect


class RasterCanvas:
    """In-memory RGBA frame implementing the host ``Canvas`` protocol."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 255)) -> None:
        self.frame = new_canvas(width, height, color=background)
        self._stroke: RGBA | None = (255, 255, 255, 255)
        self._stroke_width = 1.0
        self._fill: RGBA | None = (255, 255, 255, 255)
        self._dirty = DirtyRegion(width=width, height=height)

    @property
    def width(self) -> int:
        return int(self.frame.shape[1])

    @property
    def height(self) -> int:
        return int(self.frame.shape[0])

    def set_stroke(self, color: RGBA | None, width: float = 1.0) -> None:
        self._stroke = color
        self._stroke_width = float(width)

    def set_fill(self, color: RGBA | None) -> None:
        self._fill = color

    def line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        if self._stroke is None:
            return
        width = self._pixel_width()
        ix0, iy0, ix1, iy1 = (int(round(v)) for v in (x0, y0, x1, y1))
        draw_line(self.frame, ix0, iy0, ix1, iy1, self._stroke, width=width)
        radius = width // 2
        self._dirty.add(min(ix0, ix1) - radius, min(iy0, iy1) - radius, max(ix0, ix1) + radius, max(iy0, iy1) + radius)

    def rect(self, a: float, b: float, c: float, d: float, *, mode: RectMode = "corners") -> None:
        left, top, right, bottom = rect_corners(a, b, c, d, mode)
        x0 = int(round(left))
        y0 = int(round(top))
        x1 = max(x0 + 1, int(round(right)))
        y1 = max(y0 + 1, int(round(bottom)))
        if self._fill is not None:
            blend_rect(self.frame, x0, y0, x1, y1, self._fill)
        if self._stroke is not None:
            w = self._pixel_width()
            blend_rect(self.frame, x0, y0, x1, y0 + w, self._stroke)
            blend_rect(self.frame, x0, y1 - w, x1, y1, self._stroke)
            blend_rect(self.frame, x0, y0, x0 + w, y1, self._stroke)
            blend_rect(self.frame, x1 - w, y0, x1, y1, self._stroke)
        self._dirty.add(x0, y0, x1 - 1, y1 - 1)

    def ellipse(self, cx: float, cy: float, width: float, height: float) -> None:
        rx = abs(width) / 2
        ry = abs(height) / 2
        if self._fill is not None:
            fill_ellipse(self.frame, cx, cy, rx, ry, self._fill)
        if self._stroke is not None:
            stroke_ellipse(self.frame, cx, cy, rx, ry, self._stroke, width=self._stroke_width)
        self._dirty.add(cx - rx - 1, cy - ry - 1, cx + rx + 1, cy + ry + 1)

    def text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        font: FontSpec,
        align_x: HAlign = "left",
        align_y: VAlign = "top",
    ) -> None:
        if not text or self._fill is None:
            return
        w = text_width(text, font)
        ascent, descent = font_metrics(font)
        h = ascent + descent
        if align_x == "center":
            x -= w / 2
        elif align_x == "right":
            x -= w
        if align_y == "center":
            y -= h / 2
        elif align_y == "bottom":
            y -= h
        ix = int(round(x))
        iy = int(round(y))
        draw_text(self.frame, ix, iy, text, self._fill, font)
        self._dirty.add(ix, iy, ix + w, iy + h)

    def text_width(self, text: str, font: FontSpec) -> float:
        return text_width(text, font)

    def font_ascent(self, font: FontSpec) -> float:
        return float(font_metrics(font)[0])

    def font_descent(self, font: FontSpec) -> float:
        return float(font_metrics(font)[1])

    def clear(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        x0 = int(round(x))
        y0 = int(round(y))
        x1 = int(round(x + width))
        y1 = int(round(y + height))
        fill_region(self.frame, x0, y0, x1, y1, color)
        self._dirty.add(x0, y0, x1 - 1, y1 - 1)

    def take_dirty_rect(self) -> Rect | None:
        """Region changed since the previous call as ``(x, y, width, height)``."""
        return self._dirty.take()

    def region(self, rect: Rect) -> np.ndarray:
        x, y, w, h = rect
        return self.frame[y : y + h, x : x + w].copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.frame)

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        self.to_image().save(out, format="PNG")
        return out

    def _pixel_width(self) -> int:
        return max(1, int(round(self._stroke_width)))
