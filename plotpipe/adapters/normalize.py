from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from plotpipe.errors import PlotDataError
from plotpipe.series import SeriesData


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
) -> SeriesData:
    """Build the ``x``/``y`` columns of a series.

    ``y`` and ``x`` are sequences, numpy arrays or pandas Series; with a
    ``data`` DataFrame they may also name its columns. Missing ``x`` places
    the points at ``0, 1, 2, ...``. Rows where either value is not finite
    stay in the arrays but are masked out of the inline data block.
    """
    if data is not None:
        frame = _require_frame(data)
        y_col = _frame_column(frame, y, "y")
        x_col = None if x is None else _frame_column(frame, x, "x")
    else:
        if y is None:
            raise PlotDataError("y input is required")
        y_col, x_col = y, x

    y_arr = _to_float_column(y_col, "y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")
    x_arr = np.arange(y_arr.size, dtype=np.float64) if x_col is None else _to_float_column(x_col, "x")
    if x_arr.size != y_arr.size:
        raise PlotDataError(f"x has {x_arr.size} values but y has {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not mask.any():
        raise PlotDataError("series has no finite points")
    return SeriesData(x=x_arr, y=y_arr, mask=mask)


def _require_frame(data: Any) -> Any:
    if pd is None:
        raise PlotDataError("`data=` needs pandas installed")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    return data


def _frame_column(frame: Any, key: Any, axis: str) -> Any:
    if key is None:
        numeric = frame.select_dtypes(include="number").columns
        if len(numeric) != 1:
            raise PlotDataError(f"{axis} is omitted and data has {len(numeric)} numeric columns, expected 1")
        return frame[numeric[0]]
    if isinstance(key, str):
        if key not in frame.columns:
            raise PlotDataError(f"data has no column {key!r}")
        return frame[key]
    return key


def _to_float_column(value: Any, axis: str) -> np.ndarray:
    if pd is not None and isinstance(value, (pd.Series, pd.Index)):
        value = value.to_numpy()
    elif isinstance(value, (str, bytes, bytearray)) or not isinstance(value, (np.ndarray, Sequence)):
        raise PlotDataError(f"{axis} must be a sequence or 1-D array, got {type(value).__name__}")

    try:
        arr = np.asarray(value)
    except ValueError as exc:
        raise PlotDataError(f"{axis} must be a flat sequence of numbers") from exc
    if arr.ndim != 1:
        raise PlotDataError(f"{axis} must be 1-D, got shape {arr.shape}")
    if arr.dtype.kind in "iufb":
        return arr.astype(np.float64)
    if arr.dtype.kind in "USV":
        raise PlotDataError(f"{axis} contains non-numeric values")
    if arr.dtype.kind == "O":
        # None marks a gap, like NaN.
        arr = np.array([np.nan if v is None else v for v in arr.tolist()], dtype=object)
    try:
        return arr.astype(np.float64)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"{axis} contains non-numeric values") from exc
