from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when batch sample input cannot be coerced into numeric series."""
