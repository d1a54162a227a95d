from __future__ import annotations

from dataclasses import dataclass
import math


@dataclass
class SampleClock:
    """Auto-increment x for one series: sample ``i`` sits at ``x0 + i * dx``."""

    dx: float = 1.0
    x0: float = 0.0
    samples_seen: int = 0

    def __post_init__(self) -> None:
        if self.dx == 0 or not math.isfinite(self.dx):
            raise ValueError("dx must be finite and non-zero")

    @classmethod
    def for_rate(cls, sample_rate: float) -> "SampleClock":
        if sample_rate <= 0 or not math.isfinite(sample_rate):
            raise ValueError("sample_rate must be > 0")
        return cls(dx=1.0 / float(sample_rate))

    def reset(self, *, x0: float | None = None, dx: float | None = None) -> None:
        if x0 is not None:
            self.x0 = float(x0)
        if dx is not None:
            if dx == 0 or not math.isfinite(dx):
                raise ValueError("dx must be finite and non-zero")
            self.dx = float(dx)
        self.samples_seen = 0

    def x_for_sample(self, sample_index: int) -> float:
        return self.x0 + float(sample_index) * self.dx

    def next_x(self) -> float:
        return self.x_for_sample(self.samples_seen)

    def on_sample(self) -> float:
        x = self.next_x()
        self.samples_seen += 1
        return x

    def retime(self, sample_rate: float) -> None:
        # Future samples continue from where the old rate left off.
        if sample_rate <= 0 or not math.isfinite(sample_rate):
            raise ValueError("sample_rate must be > 0")
        self.reset(x0=self.next_x(), dx=1.0 / float(sample_rate))
