from plotpipe.api import boxes, figure, lines, linespoints, points
from plotpipe.backend import GnuplotProcess
from plotpipe.config import BackendConfig, load_backend_config, resolve_backend_config
from plotpipe.errors import BackendError, PlotDataError, PlotpipeError
from plotpipe.figure import Figure
from plotpipe.output import OutputFileType, TerminalType
from plotpipe.series import BaseSeries, Boxes, Lines, LinesPoints, PlotSeries, Points, SeriesData
from plotpipe.text import Text

__all__ = [
    "BackendConfig",
    "BackendError",
    "BaseSeries",
    "Boxes",
    "Figure",
    "GnuplotProcess",
    "Lines",
    "LinesPoints",
    "OutputFileType",
    "PlotDataError",
    "PlotSeries",
    "PlotpipeError",
    "Points",
    "SeriesData",
    "TerminalType",
    "Text",
    "boxes",
    "figure",
    "lines",
    "linespoints",
    "load_backend_config",
    "points",
    "resolve_backend_config",
]
