from __future__ import annotations


class PlotpipeError(Exception):
    """Base class for errors raised by plotpipe."""


class PlotDataError(PlotpipeError, ValueError):
    """Series or tic data that cannot be turned into a script."""


class BackendError(PlotpipeError, RuntimeError):
    """The gnuplot process could not be started or did not exit cleanly."""
