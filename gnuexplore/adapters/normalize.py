from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from gnuexplore.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_values(values: Any, *, label: str = "values") -> np.ndarray:
    """Copy ``values`` into a fresh, non-empty 1-D float64 array."""
    if values is None:
        raise PlotDataError(f"{label} input is required")
    arr = _coerce_1d_numeric(values, label=label)
    if arr.size == 0:
        raise PlotDataError(f"empty {label}")
    return arr


def normalize_pair(x: Any, y: Any) -> tuple[np.ndarray, np.ndarray]:
    x_arr = normalize_values(x, label="x")
    y_arr = normalize_values(y, label="y")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return x_arr, y_arr


def normalize_records(values: Any, dim: Any) -> np.ndarray:
    """Split a flat interleaved stream into rows of ``dim`` values."""
    if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 1:
        raise PlotDataError(f"record dimension must be a positive integer, got {dim!r}")
    flat = normalize_values(values, label="data")
    if flat.size % dim:
        raise PlotDataError(f"data length {flat.size} is not a multiple of dim={dim}")
    return flat.reshape(-1, int(dim))


def normalize_groups(groups: Any) -> tuple[np.ndarray, ...]:
    if groups is None:
        raise PlotDataError("groups input is required")
    if pd is not None and isinstance(groups, pd.DataFrame):
        groups = [groups[c] for c in groups.columns]
    elif isinstance(groups, np.ndarray):
        if groups.ndim != 2:
            raise PlotDataError("groups array must be 2-D")
        groups = list(groups)
    elif not isinstance(groups, Iterable) or isinstance(groups, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported groups input type: {type(groups)!r}")

    out = tuple(normalize_values(group, label=f"group {i}") for i, group in enumerate(groups))
    if not out:
        raise PlotDataError("empty groups")
    return out


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().copy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, (str, bytes, bytearray)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    if not isinstance(value, Sequence):
        if not isinstance(value, Iterable):
            raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
        value = list(value)
    arr = np.asarray(value, dtype=object)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    return _coerce_ndarray(arr, label=label)


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

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
