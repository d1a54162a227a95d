from .canvas import blend_mask, blend_rect, fill_region, new_canvas
from .draw_lines import draw_line, line_pixels
from .draw_markers import ellipse_mask, fill_ellipse, stroke_ellipse
from .draw_text import draw_text, font_metrics, text_width
from .layers import DirtyRegion, union_rect
from .surface import RasterCanvas

__all__ = [
    "DirtyRegion",
    "RasterCanvas",
    "blend_mask",
    "blend_rect",
    "draw_line",
    "draw_text",
    "ellipse_mask",
    "fill_ellipse",
    "fill_region",
    "font_metrics",
    "line_pixels",
    "new_canvas",
    "stroke_ellipse",
    "text_width",
    "union_rect",
]
