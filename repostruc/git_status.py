"""Git status lookup for tree badges.

``collect_git_status`` is the default provider: it runs ``git status`` once
and maps root-relative paths to status names. Analysis code receives the
provider as a plain callable so tests can pass a fake.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path

GIT_STATUS_TIMEOUT_SECONDS = 10.0
GIT_STATUS_UNAVAILABLE = "Git status unavailable: Not a git repository or git not installed"

GIT_STATUS_NAMES = ("modified", "added", "deleted", "renamed", "copied", "untracked", "ignored", "unknown")

_STATUS_LETTERS = {
    "M": "modified",
    "T": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
}

# One-letter badges shared by the text and Markdown renderers.
GIT_STATUS_BADGES = {
    "modified": "M",
    "added": "A",
    "deleted": "D",
    "renamed": "R",
    "copied": "C",
    "untracked": "?",
    "ignored": "!",
    "unknown": "?",
}

GitStatusProvider = Callable[[Path], dict[str, str]]


class GitStatusError(RuntimeError):
    """Raised when git status cannot be collected for a directory."""


def parse_status_code(code: str) -> str:
    """Map a two-letter porcelain ``XY`` code to a status name.

    The index column wins over the worktree column, so ``AM`` is ``added``
    and `` M`` is ``modified``.
    """
    if code == "??":
        return "untracked"
    if code == "!!":
        return "ignored"
    for letter in code:
        status = _STATUS_LETTERS.get(letter)
        if status is not None:
            return status
    return "unknown"


def git_status_badge(status: str) -> str:
    return GIT_STATUS_BADGES.get(status, "?")


def _git_output(cwd: Path, *args: str) -> str:
    """Return stdout of ``git -C cwd args``; any failure is ``GitStatusError``."""
    try:
        completed = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=GIT_STATUS_TIMEOUT_SECONDS,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise GitStatusError(GIT_STATUS_UNAVAILABLE) from exc
    return completed.stdout


def iter_status_entries(output: str) -> Iterator[tuple[str, str]]:
    """Yield ``(repo path, status name)`` from ``git status --porcelain=v1 -z``.

    Rename and copy records are followed by a NUL field holding the source
    path; only the destination is reported.
    """
    fields = iter(output.split("\0"))
    for record in fields:
        code, separator, path = record[:2], record[2:3], record[3:].rstrip("/")
        if separator != " " or not path:
            continue
        if "R" in code or "C" in code:
            next(fields, None)
        yield path, parse_status_code(code)


def is_git_repository(directory: Path) -> bool:
    """Return whether ``directory`` is inside a git work tree."""
    if shutil.which("git") is None:
        return False
    try:
        return _git_output(directory, "rev-parse", "--is-inside-work-tree").strip() == "true"
    except GitStatusError:
        return False


def collect_git_status(directory: Path) -> dict[str, str]:
    """Return ``{path relative to directory: status name}`` for changed paths.

    Raises ``GitStatusError`` when git is missing or ``directory`` is not in a
    repository. Paths outside ``directory`` are dropped.
    """
    if shutil.which("git") is None:
        raise GitStatusError(GIT_STATUS_UNAVAILABLE)

    directory = directory.resolve()
    top_level = _git_output(directory, "rev-parse", "--show-toplevel").strip()
    if not top_level:
        raise GitStatusError(GIT_STATUS_UNAVAILABLE)
    repo_root = Path(top_level).resolve()
    output = _git_output(repo_root, "status", "--porcelain=v1", "-z", "--untracked-files=all")

    statuses: dict[str, str] = {}
    for repo_path, status in iter_status_entries(output):
        target = repo_root / repo_path
        if target.is_relative_to(directory):
            statuses[target.relative_to(directory).as_posix()] = status
    return statuses


__all__ = [
    "GIT_STATUS_BADGES",
    "GIT_STATUS_NAMES",
    "GIT_STATUS_UNAVAILABLE",
    "GitStatusError",
    "GitStatusProvider",
    "collect_git_status",
    "git_status_badge",
    "is_git_repository",
    "iter_status_entries",
    "parse_status_code",
]
