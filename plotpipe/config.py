from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import shlex
import tomllib
from typing import Any, Mapping

from plotpipe.output import OutputFileType


DEFAULT_COMMAND = ("gnuplot", "-persist")
COMMAND_ENV_VAR = "PLOTPIPE_GNUPLOT"


@dataclass(frozen=True)
class BackendConfig:
    command: tuple[str, ...] = DEFAULT_COMMAND
    close_timeout_s: float | None = None
    default_file_type: OutputFileType = OutputFileType.PNG
    title_height: float = 20.0

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("backend command must not be empty")
        if self.close_timeout_s is not None and self.close_timeout_s <= 0:
            raise ValueError("close_timeout_s must be > 0")
        if self.default_file_type in (OutputFileType.NONE, OutputFileType.GP):
            raise ValueError("default_file_type must be an image file type")
        if self.title_height <= 0:
            raise ValueError("title_height must be > 0")


DEFAULT_CONFIG = BackendConfig()


def load_backend_config(path: str | Path) -> BackendConfig:
    """Read the ``[backend]`` table of a TOML file.

    Example::

        [backend]
        command = ["gnuplot", "-persist"]
        close_timeout_s = 5.0
        default_file_type = "svg"
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"plotpipe config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("backend", {})
    if not isinstance(table, dict):
        raise ValueError("`backend` must be a table")
    return _config_from_mapping(table)


def resolve_backend_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> BackendConfig:
    config = load_backend_config(path) if path is not None else DEFAULT_CONFIG
    environ = os.environ if env is None else env
    override = environ.get(COMMAND_ENV_VAR, "").strip()
    if override:
        config = BackendConfig(
            command=tuple(shlex.split(override)),
            close_timeout_s=config.close_timeout_s,
            default_file_type=config.default_file_type,
            title_height=config.title_height,
        )
    return config


def _config_from_mapping(table: Mapping[str, Any]) -> BackendConfig:
    known = {"command", "close_timeout_s", "default_file_type", "title_height"}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ValueError(f"unknown backend config keys: {unknown}")

    kwargs: dict[str, Any] = {}
    if "command" in table:
        kwargs["command"] = _coerce_command(table["command"])
    if "close_timeout_s" in table:
        timeout = table["close_timeout_s"]
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool):
            raise ValueError("`close_timeout_s` must be a number")
        kwargs["close_timeout_s"] = float(timeout)
    if "default_file_type" in table:
        try:
            kwargs["default_file_type"] = OutputFileType(str(table["default_file_type"]).lower())
        except ValueError as exc:
            raise ValueError(f"unknown default_file_type: {table['default_file_type']!r}") from exc
    if "title_height" in table:
        height = table["title_height"]
        if not isinstance(height, (int, float)) or isinstance(height, bool):
            raise ValueError("`title_height` must be a number")
        kwargs["title_height"] = float(height)
    return BackendConfig(**kwargs)


def _coerce_command(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(shlex.split(value))
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ValueError("`command` must be a string or a list of strings")
