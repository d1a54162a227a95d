from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scopeplot.graph import Graph


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    y: float
    series_id: int = 0
    x: float | None = None


class SampleFeed:
    """Bounded hand-off from producer threads to the thread that draws.

    Producers call ``push``/``push_auto``; the render thread calls ``drain_into``.
    When full the oldest sample is discarded.
    """

    def __init__(self, max_queue_size: int = 4096) -> None:
        if max_queue_size <= 0:
            raise ValueError("max_queue_size must be > 0")
        self._max_queue_size = max_queue_size
        self._queue: deque[Sample] = deque()
        self._lock = threading.Lock()
        self._dropped = 0
        self._overflowing = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    @property
    def dropped(self) -> int:
        with self._lock:
            return self._dropped

    def push(self, x: float, y: float, series_id: int = 0) -> None:
        self._append(Sample(y=y, series_id=series_id, x=x))

    def push_auto(self, y: float, series_id: int = 0) -> None:
        self._append(Sample(y=y, series_id=series_id))

    def drain(self, max_items: int | None = None) -> list[Sample]:
        with self._lock:
            count = len(self._queue) if max_items is None else min(max_items, len(self._queue))
            out = [self._queue.popleft() for _ in range(count)]
            if not self._queue:
                self._overflowing = False
            return out

    def drain_into(self, graph: "Graph", max_items: int | None = None) -> int:
        """Plot queued samples in arrival order; returns how many were drawn."""
        drawn = 0
        for sample in self.drain(max_items):
            if sample.x is None:
                ok = graph.plot_auto(sample.y, sample.series_id)
            else:
                ok = graph.plot(sample.x, sample.y, sample.series_id)
            drawn += int(ok)
        return drawn

    def _append(self, sample: Sample) -> None:
        with self._lock:
            if len(self._queue) >= self._max_queue_size:
                self._queue.popleft()
                self._dropped += 1
                if not self._overflowing:
                    self._overflowing = True
                    LOGGER.warning(
                        "SampleFeed full; dropping oldest samples (max_queue_size=%d)",
                        self._max_queue_size,
                    )
            self._queue.append(sample)
