"""Pygments highlighting for JSON and Markdown terminal output."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import JsonLexer, MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_LEXERS: dict[str, type[Lexer]] = {
    "json": JsonLexer,
    "markdown": MarkdownLexer,
}


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def highlight_output(text: str, output_format: str, style: str = DEFAULT_STYLE) -> str:
    """Colorize rendered ``text`` for a terminal.

    Text output is returned unchanged; it carries its own ANSI palette.
    """
    lexer_class = _LEXERS.get(output_format)
    if lexer_class is None:
        return text
    formatter = Terminal256Formatter(style=normalize_style(style))
    return highlight(text, lexer_class(), formatter)


__all__ = ["DEFAULT_STYLE", "highlight_output", "normalize_style"]
