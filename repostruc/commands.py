"""``init`` and ``check`` subcommands.

Both write human-readable status lines to a stream and return an exit code.
``check`` is advisory: it reports problems but always returns 0.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import TextIO

from .config import CONFIG_FILENAME, DEFAULT_CONFIG, save_config
from .gitignore import GITIGNORE_FILENAME, active_pattern_lines
from .git_status import is_git_repository
from .render.theme import resolve_theme

OK_MARK = "✓"
WARN_MARK = "!"
FAIL_MARK = "✗"


def init_command(directory: Path, out: TextIO, color: bool = False) -> int:
    """Write the default config file unless one already exists."""
    theme = resolve_theme(color=color)
    config_path = directory / CONFIG_FILENAME
    if config_path.exists():
        out.write(theme.paint(theme.status_warn, f"Configuration file {CONFIG_FILENAME} already exists.") + "\n")
        return 0
    try:
        save_config(config_path, dict(DEFAULT_CONFIG))
    except OSError as exc:
        out.write(theme.paint(theme.status_fail, f"Error creating config file: {exc}") + "\n")
        return 1
    out.write(theme.paint(theme.status_ok, f"{OK_MARK} Created {CONFIG_FILENAME} with default configuration") + "\n")
    return 0


def _can_write(directory: Path) -> bool:
    try:
        fd, probe = tempfile.mkstemp(prefix=".repostruc-test-", dir=directory)
    except OSError:
        return False
    os.close(fd)
    try:
        os.unlink(probe)
    except OSError:
        pass
    return True


def check_command(directory: Path, out: TextIO, color: bool = False) -> int:
    """Report config validity, ``.gitignore`` presence, git status and write access."""
    theme = resolve_theme(color=color)
    ok = theme.paint(theme.status_ok, OK_MARK)
    warn = theme.paint(theme.status_warn, WARN_MARK)
    fail = theme.paint(theme.status_fail, FAIL_MARK)

    def say(line: str = "") -> None:
        out.write(line + "\n")

    say(theme.paint(theme.heading, "Checking repostruc configuration..."))
    say()

    config_path = directory / CONFIG_FILENAME
    if config_path.exists():
        say(f"{ok} Configuration file found: {CONFIG_FILENAME}")
        try:
            config = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            say(f"{fail} Invalid configuration file: {exc}")
        else:
            if isinstance(config, dict):
                say(theme.paint(theme.muted, "  Current configuration:"))
                for key, value in config.items():
                    say(theme.paint(theme.muted, f"    {key}:") + f" {json.dumps(value)}")
            else:
                say(f"{fail} Invalid configuration file: top-level value is not an object")
    else:
        say(f"{warn} No configuration file found")

    gitignore_path = directory / GITIGNORE_FILENAME
    if gitignore_path.is_file():
        say(f"{ok} {GITIGNORE_FILENAME} file found")
        try:
            text = gitignore_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            say(f"{fail} Could not read {GITIGNORE_FILENAME}: {exc}")
        else:
            say(theme.paint(theme.muted, f"  {len(active_pattern_lines(text))} active patterns"))
    else:
        say(f"{warn} No {GITIGNORE_FILENAME} file found")

    if is_git_repository(directory):
        say(f"{ok} Git repository detected")
    else:
        say(f"{warn} Not a git repository")

    if _can_write(directory):
        say(f"{ok} Write permissions OK")
    else:
        say(f"{fail} No write permissions in current directory")

    say()
    say(theme.paint(theme.heading, "All checks complete!"))
    return 0


__all__ = ["check_command", "init_command"]
