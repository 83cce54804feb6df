"""ANSI palettes for the text renderer.

Only two palettes exist: the default colors and a plain palette whose codes
are all empty, used whenever color is off.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TreeTheme:
    """Semantic ANSI palette used by the text renderer."""

    name: str
    reset: str
    directory: str
    symlink: str
    muted: str
    file_default: str
    file_categories: dict[str, str]
    git_badges: dict[str, str]
    status_ok: str
    status_warn: str
    status_fail: str
    heading: str

    def paint(self, code: str, text: str) -> str:
        if not code:
            return text
        return f"{code}{text}{self.reset}"

    def file_color(self, category: str) -> str:
        return self.file_categories.get(category, self.file_default)

    def git_color(self, status: str) -> str:
        return self.git_badges.get(status, self.muted)


DEFAULT_THEME = TreeTheme(
    name="default",
    reset="\033[0m",
    directory="\033[1;34m",
    symlink="\033[35m",
    muted="\033[90m",
    file_default="\033[37m",
    file_categories={
        "code": "\033[32m",
        "web": "\033[36m",
        "data": "\033[33m",
        "docs": "\033[37m",
        "config": "\033[90m",
        "image": "\033[35m",
        "media": "\033[31m",
        "archive": "\033[34m",
    },
    git_badges={
        "modified": "\033[33m",
        "added": "\033[32m",
        "deleted": "\033[31m",
        "renamed": "\033[34m",
        "copied": "\033[34m",
        "untracked": "\033[90m",
    },
    status_ok="\033[32m",
    status_warn="\033[33m",
    status_fail="\033[31m",
    heading="\033[34m",
)

PLAIN_THEME = TreeTheme(
    name="plain",
    reset="",
    directory="",
    symlink="",
    muted="",
    file_default="",
    file_categories={},
    git_badges={},
    status_ok="",
    status_warn="",
    status_fail="",
    heading="",
)


def resolve_theme(*, color: bool) -> TreeTheme:
    """Return concrete theme for the requested color mode."""
    return DEFAULT_THEME if color else PLAIN_THEME


__all__ = [
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "TreeTheme",
    "resolve_theme",
]
