from __future__ import annotations

import math
from typing import Any


def format_number(value: Any) -> str:
    """Shortest script literal for a number: ``2`` rather than ``2.0``."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    v = float(value)
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "1e308" if v > 0 else "-1e308"
    if v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


def format_range(vmin: float, vmax: float) -> str:
    return f"[{format_number(vmin)}:{format_number(vmax)}]"
