from __future__ import annotations

from functools import lru_cache
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from scopeplot.canvas import RGBA, FontSpec
from scopeplot.raster.canvas import blend_mask

LOGGER = logging.getLogger(__name__)

MONO_FONT_FALLBACK_PATTERNS = (
    "dejavusansmono",
    "dejavu sans mono",
    "liberationmono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
)
PROPORTIONAL_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
)

FontHandle = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(dst: np.ndarray, x: int, y: int, text: str, color: RGBA, font: FontSpec) -> None:
    """Blend ``text`` with its line box's top-left corner at ``(x, y)``."""
    if not text:
        return
    mask = _render_mask(text, _load_font(font.family, font.size_px, font.monospace))
    blend_mask(dst, x, y, mask, color)


def text_width(text: str, font: FontSpec) -> float:
    if not text:
        return 0.0
    handle = _load_font(font.family, font.size_px, font.monospace)
    return float(handle.getlength(text))


def font_metrics(font: FontSpec) -> tuple[int, int]:
    """``(ascent, descent)`` in pixels."""
    return _metrics(_load_font(font.family, font.size_px, font.monospace))


def _metrics(font: FontHandle) -> tuple[int, int]:
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return (int(ascent), int(descent))
    _, top, _, bottom = font.getbbox("Ag")
    return (max(1, int(bottom - top)), 0)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: FontHandle) -> np.ndarray:
    ascent, descent = _metrics(font)
    left, _, right, _ = font.getbbox(text)
    shift = -min(0, int(math.floor(left)))
    width = max(1, int(math.ceil(right)) + shift)
    height = max(1, ascent + descent)
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((shift, 0), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float, monospace: bool) -> FontHandle:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family, monospace)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.debug("could not load font %s for %r: %s; using the default font", font_path, font_family, exc)
    return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str, monospace: bool) -> Path | None:
    fallbacks = MONO_FONT_FALLBACK_PATTERNS if monospace else PROPORTIONAL_FONT_FALLBACK_PATTERNS
    wanted = font_family.strip().lower()
    patterns = ((wanted,) if wanted else ()) + fallbacks

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if stem == p:
                return path
        for path in candidates:
            stem = path.stem.lower().replace(" ", "").replace("-", "")
            if p in stem and (monospace or "mono" not in stem):
                return path
    return None
