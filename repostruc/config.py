"""Configuration files and resolved run settings.

A run is configured from, in decreasing precedence: CLI options, the project
config file (``.repostrucrc.json`` in the working directory), the per-user
config file and built-in defaults. The result is one immutable ``Settings``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .diagnostics import Diagnostics

APP_NAME = "repostruc"
CONFIG_FILENAME = ".repostrucrc.json"
DEFAULT_OUTPUT = "repostruc-output.txt"
USER_CONFIG_FILENAME = "config.json"
USER_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / USER_CONFIG_FILENAME

OUTPUT_FORMATS = ("txt", "json", "markdown")
FORMAT_ALIASES = {"text": "txt", "md": "markdown"}

DEFAULT_CONFIG: dict[str, object] = {
    "output": DEFAULT_OUTPUT,
    "stats": False,
    "files": False,
    "sizes": False,
    "gitignore": True,
    "hidden": False,
    "depth": None,
    "format": "txt",
    "groupByType": False,
    "timestamps": False,
    "permissions": False,
    "excludeEmpty": False,
    "followSymlinks": False,
    "gitStatus": False,
    "color": True,
    "ignore": [],
    "include": [],
    "noDefaultPatterns": False,
}

# Config-file key -> ``Settings`` field for plain boolean options.
_BOOL_KEYS: dict[str, str] = {
    "stats": "show_stats",
    "files": "show_files",
    "sizes": "show_sizes",
    "gitignore": "use_gitignore",
    "hidden": "show_hidden",
    "groupByType": "group_by_type",
    "timestamps": "show_timestamps",
    "permissions": "show_permissions",
    "excludeEmpty": "exclude_empty",
    "followSymlinks": "follow_symlinks",
    "gitStatus": "show_git_status",
    "color": "color_terminal",
}


class ConfigError(ValueError):
    """Raised for a config value of the wrong type or out of range."""


@dataclass(frozen=True)
class Settings:
    """Immutable, fully resolved options for one run."""

    output_file: str = DEFAULT_OUTPUT
    show_stats: bool = False
    show_files: bool = False
    show_sizes: bool = False
    use_gitignore: bool = True
    show_hidden: bool = False
    max_depth: int | None = None
    output_format: str = "txt"
    group_by_type: bool = False
    show_timestamps: bool = False
    show_permissions: bool = False
    exclude_empty: bool = False
    follow_symlinks: bool = False
    show_git_status: bool = False
    color_terminal: bool = True
    color_file: bool = False
    hide_config: bool = False
    print_output: bool = True
    use_default_patterns: bool = True
    ignore_patterns: tuple[str, ...] = ()
    include_patterns: tuple[str, ...] = ()


def load_config(path: Path, diagnostics: Diagnostics | None = None) -> dict[str, object]:
    """Load a JSON config object from ``path``.

    A missing file yields ``{}``. Unreadable or malformed files also yield
    ``{}`` and add a warning to ``diagnostics``.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        if diagnostics is not None:
            diagnostics.warn(f"Failed to load config file: {exc}")
        return {}
    if not isinstance(data, dict):
        if diagnostics is not None:
            diagnostics.warn(f"Failed to load config file: {path} does not contain a JSON object")
        return {}
    return data


def save_config(path: Path, data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; filesystem errors propagate."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated CLI value, dropping empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def normalize_format(value: str) -> str:
    """Return canonical output format name or raise ``ConfigError``."""
    candidate = FORMAT_ALIASES.get(value.strip().lower(), value.strip().lower())
    if candidate not in OUTPUT_FORMATS:
        raise ConfigError(f"unknown output format {value!r} (expected one of {', '.join(OUTPUT_FORMATS)})")
    return candidate


def _validated(key: str, value: object) -> object:
    """Check one config-file value's type, raising ``ConfigError`` when wrong."""
    if value is None:
        return None
    if key in _BOOL_KEYS or key in {"noDefaultPatterns", "hideConfig"}:
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false")
        return value
    if key == "depth":
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError("depth must be a positive integer or null")
        return value
    if key in {"output", "format"}:
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{key} must be a non-empty string")
        return normalize_format(value) if key == "format" else value
    if key in {"ignore", "include"}:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigError(f"{key} must be a list of strings")
        return value
    return value


def _clean_config(config: dict[str, object], diagnostics: Diagnostics | None) -> dict[str, object]:
    cleaned: dict[str, object] = {}
    for key, value in config.items():
        try:
            cleaned[key] = _validated(key, value)
        except ConfigError as exc:
            if diagnostics is not None:
                diagnostics.warn(f"Ignoring invalid config value: {exc}")
    return cleaned


def _first_set(*values: object) -> object:
    for value in values:
        if value is not None:
            return value
    return None


def _merged_list(*sources: list[str]) -> tuple[str, ...]:
    """Concatenate pattern lists keeping first occurrence order."""
    seen: dict[str, None] = {}
    for source in sources:
        for item in source:
            seen.setdefault(item, None)
    return tuple(seen)


def resolve_settings(
    cli: dict[str, object],
    project: dict[str, object] | None = None,
    user: dict[str, object] | None = None,
    diagnostics: Diagnostics | None = None,
) -> Settings:
    """Merge CLI options over project config over user config over defaults.

    ``cli`` uses ``argparse`` destination names; options the user did not pass
    are ``None``. Config dicts use the persisted camelCase keys.
    """
    project_config = _clean_config(project or {}, diagnostics)
    user_config = _clean_config(user or {}, diagnostics)

    def pick(cli_key: str, config_key: str) -> object:
        return _first_set(
            cli.get(cli_key),
            project_config.get(config_key),
            user_config.get(config_key),
            DEFAULT_CONFIG.get(config_key),
        )

    values: dict[str, object] = {}
    for config_key, field_name in _BOOL_KEYS.items():
        values[field_name] = bool(pick(_cli_key(config_key), config_key))

    output_format = cli.get("format")
    if isinstance(output_format, str):
        output_format = normalize_format(output_format)
    values["output_format"] = _first_set(
        output_format,
        project_config.get("format"),
        user_config.get("format"),
        "txt",
    )
    values["output_file"] = str(pick("output", "output"))
    values["max_depth"] = pick("depth", "depth")
    no_default_patterns = bool(pick("no_default_patterns", "noDefaultPatterns"))
    values["use_default_patterns"] = not no_default_patterns
    values["hide_config"] = bool(_first_set(project_config.get("hideConfig"), user_config.get("hideConfig"), False))
    values["color_file"] = bool(cli.get("color_file") or False)
    values["print_output"] = cli.get("print") is not False

    values["ignore_patterns"] = _merged_list(
        list(user_config.get("ignore") or []),
        list(project_config.get("ignore") or []),
        split_csv(cli.get("ignore")),
    )
    values["include_patterns"] = _merged_list(
        list(user_config.get("include") or []),
        list(project_config.get("include") or []),
        split_csv(cli.get("include")),
    )
    return Settings(**values)


def _cli_key(config_key: str) -> str:
    """Map a camelCase config key to the argparse destination name."""
    out: list[str] = []
    for ch in config_key:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def config_from_options(cli: dict[str, object]) -> dict[str, object]:
    """Build the persisted config record for ``--save-config``."""
    config = dict(DEFAULT_CONFIG)
    for config_key in DEFAULT_CONFIG:
        if config_key in {"ignore", "include"}:
            config[config_key] = split_csv(cli.get(config_key)) or []
            continue
        value = cli.get(_cli_key(config_key))
        if value is not None:
            config[config_key] = value
    if isinstance(config.get("format"), str):
        config["format"] = normalize_format(str(config["format"]))
    return config


__all__ = [
    "APP_NAME",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "DEFAULT_OUTPUT",
    "OUTPUT_FORMATS",
    "USER_CONFIG_PATH",
    "ConfigError",
    "Settings",
    "config_from_options",
    "load_config",
    "normalize_format",
    "resolve_settings",
    "save_config",
    "split_csv",
]
