from __future__ import annotations

from dataclasses import dataclass


Rect = tuple[int, int, int, int]


def union_rect(a: Rect | None, b: Rect) -> Rect:
    if a is None:
        return b
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    x0 = min(ax, bx)
    y0 = min(ay, by)
    x1 = max(ax + aw, bx + bw)
    y1 = max(ay + ah, by + bh)
    return (x0, y0, x1 - x0, y1 - y0)


@dataclass
class DirtyRegion:
    """Bounding box of pixels changed since the host last presented the frame."""

    width: int
    height: int
    rect: Rect | None = None

    def add(self, x0: float, y0: float, x1: float, y1: float) -> None:
        left = max(0, int(min(x0, x1)))
        top = max(0, int(min(y0, y1)))
        right = min(self.width, int(max(x0, x1)) + 1)
        bottom = min(self.height, int(max(y0, y1)) + 1)
        if right <= left or bottom <= top:
            return
        self.rect = union_rect(self.rect, (left, top, right - left, bottom - top))

    def take(self) -> Rect | None:
        rect = self.rect
        self.rect = None
        return rect
