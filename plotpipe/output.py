from __future__ import annotations

from enum import Enum
from pathlib import PurePath


class OutputFileType(str, Enum):
    NONE = "none"
    GP = "gp"
    PNG = "png"
    JPG = "jpg"
    SVG = "svg"
    PDF = "pdf"
    EPS = "eps"
    HTML = "html"


class TerminalType(str, Enum):
    NONE = "none"
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"
    PDF = "pdf"
    EPS = "eps"
    CANVAS = "canvas"
    QT = "qt"
    WXT = "wxt"
    X11 = "x11"
    DUMB = "dumb"


_FILE_ENDINGS: dict[OutputFileType, str] = {
    OutputFileType.GP: ".gp",
    OutputFileType.PNG: ".png",
    OutputFileType.JPG: ".jpg",
    OutputFileType.SVG: ".svg",
    OutputFileType.PDF: ".pdf",
    OutputFileType.EPS: ".eps",
    OutputFileType.HTML: ".html",
}

# Extra spellings accepted when inferring a file type from a filename.
_SUFFIX_ALIASES: dict[str, OutputFileType] = {
    ".jpeg": OutputFileType.JPG,
    ".gnuplot": OutputFileType.GP,
}

_FILE_TERMINALS: dict[OutputFileType, TerminalType] = {
    OutputFileType.GP: TerminalType.NONE,
    OutputFileType.PNG: TerminalType.PNG,
    OutputFileType.JPG: TerminalType.JPEG,
    OutputFileType.SVG: TerminalType.SVG,
    OutputFileType.PDF: TerminalType.PDF,
    OutputFileType.EPS: TerminalType.EPS,
    OutputFileType.HTML: TerminalType.CANVAS,
}

_TERMINAL_COMMANDS: dict[TerminalType, str] = {
    TerminalType.PNG: "pngcairo",
    TerminalType.JPEG: "jpeg",
    TerminalType.SVG: "svg",
    TerminalType.PDF: "pdfcairo",
    TerminalType.EPS: "epscairo",
    TerminalType.CANVAS: "canvas",
    TerminalType.QT: "qt",
    TerminalType.WXT: "wxt",
    TerminalType.X11: "x11",
    TerminalType.DUMB: "dumb",
}


def file_type_from_filename(name: str) -> OutputFileType:
    suffix = PurePath(name).suffix.lower()
    if not suffix:
        return OutputFileType.NONE
    for kind, ending in _FILE_ENDINGS.items():
        if ending == suffix:
            return kind
    return _SUFFIX_ALIASES.get(suffix, OutputFileType.NONE)


def file_ending(kind: OutputFileType) -> str:
    try:
        return _FILE_ENDINGS[OutputFileType(kind)]
    except KeyError:
        raise ValueError(f"no file ending for output file type: {kind!r}") from None


def to_terminal(kind: OutputFileType) -> TerminalType:
    try:
        return _FILE_TERMINALS[OutputFileType(kind)]
    except KeyError:
        raise ValueError(f"no terminal for output file type: {kind!r}") from None


def to_command(terminal: TerminalType) -> str:
    try:
        return _TERMINAL_COMMANDS[TerminalType(terminal)]
    except KeyError:
        raise ValueError(f"no gnuplot terminal for: {terminal!r}") from None
