from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TextIO

import numpy as np

from plotpipe.errors import PlotDataError
from plotpipe.formatting import format_number
from plotpipe.text import quote_string


class PlotSeries(Protocol):
    """What a Figure needs from anything it plots.

    A Figure calls ``set_identity`` on every series first, then
    ``emit_settings`` on all of them, then ``emit_data`` on all of them, and
    finally ``emit_plot_clause`` once per series while writing the single
    ``plot`` command. The clause must not end with a separator or newline.
    """

    def set_identity(self, index: int) -> None:
        ...

    def emit_settings(self, out: TextIO) -> None:
        ...

    def emit_data(self, out: TextIO) -> None:
        ...

    def emit_plot_clause(self, out: TextIO) -> None:
        ...


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    def __len__(self) -> int:
        return int(self.y.size)

    def rows(self) -> list[tuple[float, float]]:
        return [(float(x), float(y)) for x, y in zip(self.x[self.mask], self.y[self.mask], strict=True)]


class BaseSeries:
    """Shared plumbing for the built-in series kinds.

    Subclasses set ``kind`` (used for the data block name) and implement
    ``_style_clause``; ``_using_clause`` and ``emit_settings`` may be
    overridden.
    """

    kind = "series"

    def __init__(self, data: SeriesData, *, label: str | None = None, color: str | None = None) -> None:
        self.data = data
        self.label = label
        self.color = color
        self._identity: int | None = None

    @property
    def identity(self) -> int | None:
        return self._identity

    @property
    def data_block_name(self) -> str:
        if self._identity is None:
            raise PlotDataError(f"{type(self).__name__} has no identity; add it to a Figure before rendering")
        return f"${self.kind}{self._identity}"

    def set_identity(self, index: int) -> None:
        if index < 0:
            raise ValueError("series identity must be >= 0")
        self._identity = int(index)

    def set_label(self, label: str | None) -> "BaseSeries":
        self.label = label
        return self

    def set_color(self, color: str | None) -> "BaseSeries":
        self.color = color
        return self

    def emit_settings(self, out: TextIO) -> None:
        return None

    def emit_data(self, out: TextIO) -> None:
        out.write(f"{self.data_block_name} << EOD\n")
        for x, y in self.data.rows():
            out.write(f"{format_number(x)} {format_number(y)}\n")
        out.write("EOD\n\n")

    def emit_plot_clause(self, out: TextIO) -> None:
        parts = [self.data_block_name, f"using {self._using_clause()}", f"with {self._style_clause()}"]
        if self.color:
            parts.append(f"linecolor rgb {quote_string(self.color)}")
        parts.append(f"title {quote_string(self.label)}" if self.label else "notitle")
        out.write(" ".join(parts))

    def _using_clause(self) -> str:
        return "1:2"

    def _style_clause(self) -> str:
        raise NotImplementedError


class Boxes(BaseSeries):
    kind = "boxes"

    def __init__(
        self,
        data: SeriesData,
        *,
        label: str | None = None,
        color: str | None = None,
        box_width: float = 0.8,
        relative_box_width: bool = True,
        fill: float = 0.5,
    ) -> None:
        super().__init__(data, label=label, color=color)
        self.set_box_width(box_width)
        self.set_relative_box_width(relative_box_width)
        self.set_fill(fill)

    def set_box_width(self, width: float) -> "Boxes":
        if width <= 0:
            raise ValueError("box width must be > 0")
        self.box_width = float(width)
        return self

    def set_relative_box_width(self, relative: bool) -> "Boxes":
        self.relative_box_width = bool(relative)
        return self

    def set_fill(self, fill: float) -> "Boxes":
        if fill < 0 or fill > 1:
            raise ValueError("fill must be in [0, 1]")
        self.fill = float(fill)
        return self

    def emit_settings(self, out: TextIO) -> None:
        out.write(f"set style fill solid {format_number(self.fill)}\n")
        if self.relative_box_width:
            out.write(f"set boxwidth {format_number(self.box_width)} relative\n")

    def _using_clause(self) -> str:
        if self.relative_box_width:
            return "1:2"
        # Absolute widths travel as a third column so they stay per series.
        return f"1:2:({format_number(self.box_width)})"

    def _style_clause(self) -> str:
        return "boxes"


class Lines(BaseSeries):
    kind = "lines"

    def __init__(
        self,
        data: SeriesData,
        *,
        label: str | None = None,
        color: str | None = None,
        line_width: float = 1.0,
    ) -> None:
        super().__init__(data, label=label, color=color)
        if line_width <= 0:
            raise ValueError("line width must be > 0")
        self.line_width = float(line_width)

    def _style_clause(self) -> str:
        return f"lines linewidth {format_number(self.line_width)}"


class Points(BaseSeries):
    kind = "points"

    def __init__(
        self,
        data: SeriesData,
        *,
        label: str | None = None,
        color: str | None = None,
        point_type: int = 7,
        point_size: float = 1.0,
    ) -> None:
        super().__init__(data, label=label, color=color)
        if point_size <= 0:
            raise ValueError("point size must be > 0")
        self.point_type = int(point_type)
        self.point_size = float(point_size)

    def _style_clause(self) -> str:
        return f"points pointtype {self.point_type} pointsize {format_number(self.point_size)}"


class LinesPoints(Points):
    kind = "linespoints"

    def __init__(
        self,
        data: SeriesData,
        *,
        label: str | None = None,
        color: str | None = None,
        line_width: float = 1.0,
        point_type: int = 7,
        point_size: float = 1.0,
    ) -> None:
        super().__init__(data, label=label, color=color, point_type=point_type, point_size=point_size)
        if line_width <= 0:
            raise ValueError("line width must be > 0")
        self.line_width = float(line_width)

    def _style_clause(self) -> str:
        return (
            f"linespoints linewidth {format_number(self.line_width)}"
            f" pointtype {self.point_type} pointsize {format_number(self.point_size)}"
        )
