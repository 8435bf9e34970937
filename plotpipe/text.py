from __future__ import annotations

from dataclasses import dataclass

from plotpipe.formatting import format_number


DEFAULT_TITLE_HEIGHT = 20.0
# Characters gnuplot treats as markup in enhanced-text mode.
ENHANCED_TEXT_CHARS = frozenset("{}^_@~&")


@dataclass(frozen=True)
class Text:
    """Styled label used for figure titles and axis labels."""

    content: str = ""
    height: float | None = None
    bold: bool = False
    color: str | None = None

    def __post_init__(self) -> None:
        if self.height is not None and self.height <= 0:
            raise ValueError("text height must be > 0")

    @classmethod
    def title(cls, content: str, height: float = DEFAULT_TITLE_HEIGHT) -> "Text":
        return cls(content=content, height=height, bold=True)

    def is_empty(self) -> bool:
        return self.content == ""

    def render(self) -> str:
        parts = [quote_string(self.content)]
        font = _font_spec(self.bold, self.height)
        if font:
            parts.append(f"font {quote_string(font)}")
        if self.color:
            parts.append(f"textcolor rgb {quote_string(self.color)}")
        if any(ch in self.content for ch in ENHANCED_TEXT_CHARS):
            parts.append("noenhanced")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.render()


def quote_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def coerce_text(value: str | Text) -> Text:
    if isinstance(value, Text):
        return value
    if isinstance(value, str):
        return Text(content=value)
    raise TypeError(f"expected str or Text, got {type(value)!r}")


def _font_spec(bold: bool, height: float | None) -> str:
    # Bold goes through the font name so the content never needs enhanced-text escaping.
    face = ":Bold" if bold else ""
    if height is None:
        return face
    return f"{face},{format_number(height)}"
