from __future__ import annotations

import logging
import subprocess
from typing import Sequence, TextIO

from plotpipe.errors import BackendError

LOGGER = logging.getLogger(__name__)


class GnuplotProcess:
    """A gnuplot child process fed through its standard input.

    The process is spawned on first use of ``stream`` (or an explicit
    ``open()``) and released by ``close()``, which may be called any number
    of times. Success is judged solely by the exit status seen at close.
    """

    def __init__(self, command: Sequence[str], *, close_timeout_s: float | None = None) -> None:
        if not command:
            raise ValueError("backend command must not be empty")
        self._command = list(command)
        self._close_timeout_s = close_timeout_s
        self._proc: subprocess.Popen[str] | None = None

    @property
    def command(self) -> list[str]:
        return list(self._command)

    @property
    def is_open(self) -> bool:
        return self._proc is not None

    @property
    def stream(self) -> TextIO:
        proc = self.open()
        if proc.stdin is None:
            raise BackendError("backend stdin unavailable")
        return proc.stdin

    def open(self) -> subprocess.Popen[str]:
        if self._proc is not None:
            return self._proc
        try:
            self._proc = subprocess.Popen(
                self._command,
                stdin=subprocess.PIPE,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise BackendError(f"could not start plotting backend {' '.join(self._command)!r}: {exc}") from exc
        LOGGER.debug("started backend pid=%s: %s", self._proc.pid, self._command)
        return self._proc

    def close(self) -> int:
        """Close stdin, wait for exit and return the exit status.

        Raises ``BackendError`` when the status is nonzero or when the
        configured close timeout expires.
        """
        if self._proc is None:
            return 0
        proc = self._proc
        self._proc = None
        try:
            if proc.stdin is not None and not proc.stdin.closed:
                proc.stdin.close()
        except BrokenPipeError:
            LOGGER.debug("backend pid=%s closed its input early", proc.pid)
        try:
            status = proc.wait(timeout=self._close_timeout_s)
        except subprocess.TimeoutExpired as exc:
            proc.kill()
            proc.wait()
            raise BackendError(
                f"plotting backend did not exit within {self._close_timeout_s}s and was killed"
            ) from exc
        LOGGER.debug("backend pid=%s exited with status %s", proc.pid, status)
        if status != 0:
            raise BackendError(f"plotting backend exited with status {status}")
        return status

    def __enter__(self) -> "GnuplotProcess":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
