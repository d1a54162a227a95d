from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from scopeplot.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_samples(y: Any, *, x: Any = None) -> tuple[np.ndarray | None, np.ndarray]:
    """Coerce a batch of samples to float64 arrays.

    Non-finite entries are kept; the graph drops them one by one. ``x`` is None
    when the caller wants auto-increment x.
    """
    y_arr = _coerce_1d_numeric(_single_column(y, label="y"), label="y")
    if x is None:
        return None, y_arr
    x_arr = _coerce_1d_numeric(_single_column(x, label="x"), label="x")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return x_arr, y_arr


def _single_column(value: Any, *, label: str) -> Any:
    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 1:
            raise PlotDataError(f"{label} DataFrame input must contain exactly one numeric column")
        return value[numeric_cols[0]]
    return value


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    return bool(pd.api.types.is_numeric_dtype(series))


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
