from __future__ import annotations

import io
import logging
import sys
from typing import Sequence, TextIO

from plotpipe.backend import GnuplotProcess
from plotpipe.config import DEFAULT_CONFIG, BackendConfig
from plotpipe.errors import BackendError, PlotDataError
from plotpipe.formatting import format_number, format_range
from plotpipe.output import (
    OutputFileType,
    TerminalType,
    file_ending,
    file_type_from_filename,
    to_command,
    to_terminal,
)
from plotpipe.series import PlotSeries
from plotpipe.text import Text, coerce_text, quote_string

LOGGER = logging.getLogger(__name__)

DEFAULT_FILENAME = "figure"

EMPTY_FIGURE_SCRIPT = (
    "set xrange [-1 : +1]\n"
    "set yrange [-1 : +1]\n"
    "$empty << EOD\n"
    "0 0\n"
    "EOD\n\n"
    "plot $empty with points notitle\n\n"
)


class Figure:
    """Figure configuration plus the series it plots, rendered as a gnuplot script.

    Setters return the figure so configuration can be chained. Rendering
    goes to a file (``save``), to stdout or to one gnuplot process kept alive
    across ``show`` calls until ``close()``.
    """

    def __init__(
        self,
        title: str | Text = "",
        x_label: str | Text = "",
        y_label: str | Text = "",
        *,
        config: BackendConfig | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if isinstance(title, str):
            self.title = Text.title(title, height=self.config.title_height)
        else:
            self.title = coerce_text(title)
        self.x_label = coerce_text(x_label)
        self.y_label = coerce_text(y_label)

        self.x_min = -10.0
        self.x_max = 10.0
        self.y_min = -10.0
        self.y_max = 10.0
        self.x_autoscale = True
        self.y_autoscale = True
        self.x_reverse = False
        self.y_reverse = False
        self.x_log = False
        self.y_log = False
        self.x_log_base = 10.0
        self.y_log_base = 10.0
        self.show_legend = True

        self._xtics_labels: list[str] = []
        self._xtics_values: list[float] = []
        self._series: list[PlotSeries] = []
        self._backend: GnuplotProcess | None = None

    # Configuration ----------------------------------------------------
    def set_title(self, title: str | Text) -> "Figure":
        self.title = coerce_text(title)
        return self

    def set_x_label(self, label: str | Text) -> "Figure":
        self.x_label = coerce_text(label)
        return self

    def set_y_label(self, label: str | Text) -> "Figure":
        self.y_label = coerce_text(label)
        return self

    def set_x_min(self, value: float) -> "Figure":
        self.x_min = float(value)
        return self

    def set_x_max(self, value: float) -> "Figure":
        self.x_max = float(value)
        return self

    def set_y_min(self, value: float) -> "Figure":
        self.y_min = float(value)
        return self

    def set_y_max(self, value: float) -> "Figure":
        self.y_max = float(value)
        return self

    def set_x_log_base(self, base: float) -> "Figure":
        self.x_log_base = float(base)
        return self

    def set_y_log_base(self, base: float) -> "Figure":
        self.y_log_base = float(base)
        return self

    def set_x_reverse(self, reverse: bool = True) -> "Figure":
        self.x_reverse = bool(reverse)
        return self

    def set_y_reverse(self, reverse: bool = True) -> "Figure":
        self.y_reverse = bool(reverse)
        return self

    def set_x_autoscale(self, autoscale: bool = True) -> "Figure":
        self.x_autoscale = bool(autoscale)
        return self

    def set_y_autoscale(self, autoscale: bool = True) -> "Figure":
        self.y_autoscale = bool(autoscale)
        return self

    def set_x_log(self, log: bool = True) -> "Figure":
        self.x_log = bool(log)
        return self

    def set_y_log(self, log: bool = True) -> "Figure":
        self.y_log = bool(log)
        return self

    def set_show_legend(self, show: bool = True) -> "Figure":
        self.show_legend = bool(show)
        return self

    # Series and tics --------------------------------------------------
    def add(self, series: PlotSeries) -> "Figure":
        self._series.append(series)
        return self

    @property
    def series(self) -> tuple[PlotSeries, ...]:
        return tuple(self._series)

    def set_xtics(self, labels: Sequence[str], values: Sequence[float] | None = None) -> "Figure":
        tic_labels = [str(label) for label in labels]
        if values is None:
            tic_values = [float(i) for i in range(len(tic_labels))]
        else:
            tic_values = [float(v) for v in values]
            if len(tic_values) != len(tic_labels):
                raise PlotDataError(
                    f"xtics labels and values length mismatch: {len(tic_labels)} != {len(tic_values)}"
                )
        self._xtics_labels = tic_labels
        self._xtics_values = tic_values
        return self

    def clear_xtics(self) -> "Figure":
        self._xtics_labels = []
        self._xtics_values = []
        return self

    @property
    def xtics_labels(self) -> tuple[str, ...]:
        return tuple(self._xtics_labels)

    @property
    def xtics_values(self) -> tuple[float, ...]:
        return tuple(self._xtics_values)

    # Rendering --------------------------------------------------------
    def plot(self, out: TextIO, terminal: TerminalType = TerminalType.NONE, save_as: str = "") -> "Figure":
        """Write the complete gnuplot script for this figure into ``out``."""
        for index, series in enumerate(self._series):
            series.set_identity(index)
        LOGGER.debug("rendering figure %r with %d series", self.title.content, len(self._series))

        if terminal != TerminalType.NONE:
            out.write(f"set terminal {to_command(terminal)}\n")
        if save_as:
            out.write(f"set output {_single_quote(save_as)}\n")

        if not self._series:
            out.write(EMPTY_FIGURE_SCRIPT)
            out.flush()
            return self

        if not self.title.is_empty():
            out.write(f"set title {self.title.render()}\n")
        if not self.x_label.is_empty():
            out.write(f"set xlabel {self.x_label.render()}\n")
        if not self.y_label.is_empty():
            out.write(f"set ylabel {self.y_label.render()}\n")

        self._write_ranges(out)

        if self.x_reverse:
            out.write("set xrange reverse\n")
        if self.y_reverse:
            out.write("set yrange reverse\n")

        if self.x_log:
            out.write(f"set logscale x {format_number(self.x_log_base)}\n")
        if self.y_log:
            out.write(f"set logscale y {format_number(self.y_log_base)}\n")

        if not self.show_legend:
            out.write("unset key\n")

        if self._xtics_labels:
            pairs = zip(self._xtics_labels, self._xtics_values, strict=True)
            tics = ", ".join(f"{quote_string(label)} {format_number(value)}" for label, value in pairs)
            out.write(f"set xtics({tics})\n")

        for series in self._series:
            series.emit_settings(out)
        for series in self._series:
            series.emit_data(out)

        out.write("plot ")
        last = len(self._series) - 1
        for index, series in enumerate(self._series):
            if index > 0:
                out.write("     ")
            series.emit_plot_clause(out)
            if index < last:
                out.write(", \\")
            out.write("\n")
        out.write("\n")

        if save_as:
            out.write("set output\n")
        out.flush()
        return self

    def render_script(self, terminal: TerminalType = TerminalType.NONE, save_as: str = "") -> str:
        buffer = io.StringIO()
        self.plot(buffer, terminal, save_as)
        return buffer.getvalue()

    def _write_ranges(self, out: TextIO) -> None:
        x_range = format_range(self.x_min, self.x_max)
        y_range = format_range(self.y_min, self.y_max)
        if self.x_autoscale and self.y_autoscale:
            out.write("set autoscale\n")
        elif self.x_autoscale:
            out.write(f"set autoscale x\nset yrange {y_range}\n")
        elif self.y_autoscale:
            out.write(f"set xrange {x_range}\nset autoscale y\n")
        else:
            out.write(f"set xrange {x_range}\nset yrange {y_range}\n")

    # Output -----------------------------------------------------------
    def save(
        self,
        filename: str = "",
        file_type: OutputFileType = OutputFileType.NONE,
        terminal: TerminalType = TerminalType.NONE,
    ) -> "Figure":
        filename = str(filename)
        if not filename:
            filename = self.title.content or DEFAULT_FILENAME

        if file_type == OutputFileType.NONE:
            file_type = file_type_from_filename(filename)
            if file_type == OutputFileType.NONE:
                file_type = self.config.default_file_type
                filename += file_ending(file_type)
        elif not filename.endswith(file_ending(file_type)):
            filename += file_ending(file_type)

        if terminal == TerminalType.NONE:
            terminal = to_terminal(file_type)

        if file_type == OutputFileType.GP:
            with open(filename, "w", encoding="utf-8") as f:
                self.plot(f, terminal)
            LOGGER.debug("wrote gnuplot script %s", filename)
            return self

        backend = self._new_backend()
        try:
            self._plot_to_backend(backend, terminal, filename)
        except BaseException:
            # The render failure is what the caller needs to see, not the exit status it caused.
            try:
                backend.close()
            except BackendError as close_exc:
                LOGGER.warning("closing gnuplot after a failed render of %s: %s", filename, close_exc)
            raise
        backend.close()
        LOGGER.debug("gnuplot rendered %s", filename)
        return self

    def show(self, kind: OutputFileType | TerminalType | None = None) -> "Figure":
        if kind is None or kind == OutputFileType.NONE:
            kind = TerminalType.NONE
        if isinstance(kind, OutputFileType):
            if kind == OutputFileType.GP:
                self.plot(sys.stdout, TerminalType.NONE)
                return self
            kind = to_terminal(kind)
        backend = self._persistent_backend()
        try:
            self._plot_to_backend(backend, kind)
        except BackendError:
            # A dead session is dropped so the next show() starts a fresh gnuplot.
            self._backend = None
            try:
                backend.close()
            except BackendError as close_exc:
                LOGGER.warning("closing dead gnuplot session failed: %s", close_exc)
            raise
        return self

    def close(self) -> None:
        backend = self._backend
        self._backend = None
        if backend is not None:
            backend.close()

    def _plot_to_backend(self, backend: GnuplotProcess, terminal: TerminalType, save_as: str = "") -> None:
        try:
            self.plot(backend.stream, terminal, save_as)
        except BrokenPipeError as exc:
            raise BackendError("plotting backend closed its input before the script was written") from exc

    def _persistent_backend(self) -> GnuplotProcess:
        if self._backend is None:
            self._backend = self._new_backend()
        return self._backend

    def _new_backend(self) -> GnuplotProcess:
        return GnuplotProcess(self.config.command, close_timeout_s=self.config.close_timeout_s)

    def __enter__(self) -> "Figure":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        # __init__ may have failed before the backend slot existed.
        if getattr(self, "_backend", None) is None:
            return
        try:
            self.close()
        except BackendError as exc:
            LOGGER.warning("closing gnuplot at figure teardown failed: %s", exc)


def _single_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"
