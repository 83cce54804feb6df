"""ANSI escape handling for file output.

Terminal output may carry SGR color sequences; files get them stripped
unless the user explicitly asked for colored files.
"""

from __future__ import annotations

import re

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def strip_ansi(text: str) -> str:
    """Remove every ANSI escape sequence from ``text``."""
    if "\x1b" not in text:
        return text
    return ANSI_ESCAPE_RE.sub("", text)


__all__ = ["ANSI_ESCAPE_RE", "strip_ansi"]
