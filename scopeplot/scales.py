from __future__ import annotations

from dataclasses import dataclass
import math


# Tick mantissas scaled by 10: 1, 2, 2.5, 5 and the next decade.
NICE_LADDER = (10.0, 20.0, 25.0, 50.0, 100.0)
MAX_LABEL_PRECISION = 15


@dataclass(frozen=True)
class AxisRange:
    min: float
    max: float

    def __post_init__(self) -> None:
        if not is_valid_range(self.min, self.max):
            raise ValueError(f"axis range must be finite with min < max and a finite span, got ({self.min}, {self.max})")

    @property
    def span(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def clamp(self, value: float) -> float:
        return min(self.max, max(self.min, value))

    def anchor(self) -> float:
        """Zero, or the closest in-range value when zero lies outside the range."""
        return self.clamp(0.0)


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float

    def to_pixel(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.sx + self.tx, y * self.sy + self.ty)

    def to_data(self, px: float, py: float) -> tuple[float, float]:
        return ((px - self.tx) / self.sx, (py - self.ty) / self.sy)


def is_valid_range(vmin: float, vmax: float) -> bool:
    try:
        lo = float(vmin)
        hi = float(vmax)
    except (TypeError, ValueError):
        return False
    return math.isfinite(lo) and math.isfinite(hi) and lo < hi and math.isfinite(hi - lo)


def build_transform(
    x_range: AxisRange,
    y_range: AxisRange,
    rect: tuple[float, float, float, float],
) -> PlotTransform:
    """Map data space onto ``rect = (left, right, top, bottom)`` with y pointing up."""
    left, right, top, bottom = rect
    if right <= left or bottom <= top:
        raise ValueError("plot rectangle width/height must be > 0")
    sx = (right - left) / x_range.span
    tx = left - x_range.min * sx
    sy = -(bottom - top) / y_range.span
    ty = bottom - y_range.min * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def nice_step(span: float, available_px: float, label_px: float) -> float:
    """Tick spacing for ``span`` data units when each label needs ``label_px`` pixels.

    The result is always 1, 2, 2.5 or 5 times a power of ten and carries the sign
    of ``span``.
    """
    if not math.isfinite(span) or span == 0:
        raise ValueError("span must be finite and non-zero")
    labels = max(1.0, float(available_px) / max(1.0, float(label_px)))
    raw = round_to_sig_figs(span / labels, 2)
    sign = -1.0 if raw < 0 else 1.0
    k = decimal_exponent(abs(raw)) - 1
    mantissa = round(abs(raw) / _pow10(k), 9)
    best = NICE_LADDER[0]
    for candidate in NICE_LADDER:
        # ties go to the larger spacing
        if abs(candidate - mantissa) <= abs(best - mantissa):
            best = candidate
    return sign * _scale_pow10(best, k)


def required_precision(vmax: float, vmin: float, segment: float) -> int:
    """Significant digits needed so ticks ``segment`` apart print differently."""
    if segment == 0 or vmax == vmin:
        return 1
    if not (math.isfinite(vmax) and math.isfinite(vmin) and math.isfinite(segment)):
        return 1
    largest = max(abs(vmax), abs(vmin))
    seg = abs(segment)
    seg_exp = decimal_exponent(seg)
    precision = max(1, decimal_exponent(largest) - seg_exp + 1)
    lead = round(seg / _pow10(seg_exp), 9)
    if lead - math.floor(lead) > 1e-9:
        precision += 1
    return min(MAX_LABEL_PRECISION, precision)


def base_position(vmin: float, vmax: float, segment: float) -> float:
    """Tick-aligned anchor that puts zero on a tick whenever zero is in range."""
    seg = abs(segment)
    if vmin > 0:
        return math.ceil(vmin / seg) * seg
    if vmax < 0:
        return math.floor(vmax / seg) * seg
    return 0.0


def tick_values(vmin: float, vmax: float, segment: float) -> list[float]:
    """Ticks from the first one at or below ``vmin`` that fall inside ``[vmin, vmax]``."""
    seg = abs(segment)
    if seg == 0 or not math.isfinite(seg):
        return []
    base = base_position(vmin, vmax, seg)
    eps = seg * 1e-9
    first = math.floor((vmin - base) / seg + 1e-9)
    out: list[float] = []
    i = first
    while True:
        value = base + i * seg
        if value > vmax + eps:
            break
        if value >= vmin - eps:
            if abs(value) <= eps:
                value = 0.0
            out.append(round_to_sig_figs(value, 12))
        i += 1
    return out


def format_label(value: float, precision: int) -> str:
    """Compact tick label for ``value`` at ``precision`` significant digits."""
    if not math.isfinite(value):
        return str(value)
    precision = max(1, min(MAX_LABEL_PRECISION, int(precision)))
    rounded = round_to_sig_figs(value, precision)
    if rounded == 0:
        return "0"
    decimals = max(0, precision - 1 - decimal_exponent(abs(rounded)))
    decimal = _strip_zeros(f"{rounded:.{decimals}f}")
    if decimal == "-0":
        decimal = "0"
    limit = 6 if decimal.startswith("-") else 5
    if len(decimal) >= limit:
        return _compact_scientific(rounded, precision)
    return decimal


def round_to_sig_figs(value: float, digits: int) -> float:
    if value == 0 or not math.isfinite(value):
        return value
    return round(value, digits - 1 - decimal_exponent(abs(value)))


def decimal_exponent(value: float) -> int:
    """``floor(log10(value))`` for ``value > 0``, corrected for log10 rounding."""
    exp = math.floor(math.log10(value))
    if _pow10(exp + 1) <= value:
        exp += 1
    elif _pow10(exp) > value:
        exp -= 1
    return exp


def _pow10(exp: int) -> float:
    return 10.0**exp


def _scale_pow10(mantissa: float, exp: int) -> float:
    # Dividing by an exact power keeps values such as 0.25 free of drift.
    if exp >= 0:
        return mantissa * (10**exp)
    return mantissa / (10 ** (-exp))


def _strip_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _compact_scientific(value: float, precision: int) -> str:
    mantissa, exp = f"{value:.{precision - 1}e}".split("e")
    return f"{_strip_zeros(mantissa)}e{int(exp)}"
