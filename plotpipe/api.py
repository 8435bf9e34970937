from __future__ import annotations

from typing import Any

from plotpipe.adapters import normalize_xy
from plotpipe.config import BackendConfig
from plotpipe.figure import Figure
from plotpipe.series import Boxes, Lines, LinesPoints, Points
from plotpipe.text import Text


def figure(
    title: str | Text = "",
    x_label: str | Text = "",
    y_label: str | Text = "",
    *,
    config: BackendConfig | None = None,
) -> Figure:
    return Figure(title, x_label, y_label, config=config)


def boxes(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    label: str | None = None,
    color: str | None = None,
    box_width: float = 0.8,
    relative_box_width: bool = True,
    fill: float = 0.5,
) -> Boxes:
    return Boxes(
        normalize_xy(y, x=x, data=data),
        label=label,
        color=color,
        box_width=box_width,
        relative_box_width=relative_box_width,
        fill=fill,
    )


def lines(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    label: str | None = None,
    color: str | None = None,
    width: float = 1.0,
) -> Lines:
    return Lines(normalize_xy(y, x=x, data=data), label=label, color=color, line_width=width)


def points(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    label: str | None = None,
    color: str | None = None,
    point_type: int = 7,
    size: float = 1.0,
) -> Points:
    return Points(
        normalize_xy(y, x=x, data=data),
        label=label,
        color=color,
        point_type=point_type,
        point_size=size,
    )


def linespoints(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    label: str | None = None,
    color: str | None = None,
    width: float = 1.0,
    point_type: int = 7,
    size: float = 1.0,
) -> LinesPoints:
    return LinesPoints(
        normalize_xy(y, x=x, data=data),
        label=label,
        color=color,
        line_width=width,
        point_type=point_type,
        point_size=size,
    )
