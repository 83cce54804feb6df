"""Command-line front door for repostruc.

Parses CLI options, merges them with config files, runs one analysis and
writes the rendered report to the output file and the terminal. ``init`` and
``check`` subcommands are dispatched before the main parser.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from .analyzer import AnalysisResult, analyze
from .commands import check_command, init_command
from .config import (
    CONFIG_FILENAME,
    OUTPUT_FORMATS,
    USER_CONFIG_PATH,
    ConfigError,
    Settings,
    config_from_options,
    load_config,
    normalize_format,
    resolve_settings,
    save_config,
)
from .diagnostics import Diagnostics
from .render import DisplayOptions, render
from .render.ansi import strip_ansi
from .render.highlight import DEFAULT_STYLE, highlight_output
from .render.theme import resolve_theme

logger = logging.getLogger(__name__)

SUBCOMMANDS = ("init", "check")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _format_name(value: str) -> str:
    """argparse type accepting format names and their aliases."""
    try:
        return normalize_format(value)
    except ConfigError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the main parser.

    Flags default to ``None`` so config-file values apply when a flag is not
    given on the command line.
    """
    parser = argparse.ArgumentParser(
        prog="repostruc",
        description="Generate a repository structure report (text, JSON or Markdown).",
        epilog="Subcommands: 'repostruc init' writes a default config, 'repostruc check' inspects the setup.",
    )
    parser.add_argument("directory", nargs="?", default=".", help="Directory to analyze (default: current directory).")
    parser.add_argument("-o", "--output", default=None, metavar="FILE", help="Output file name.")
    parser.add_argument("-i", "--ignore", default=None, metavar="PATTERNS", help="Comma-separated patterns to ignore.")
    parser.add_argument("--include", default=None, metavar="PATTERNS", help="Comma-separated patterns to include.")
    parser.add_argument("--stats", action="store_true", default=None, help="Show detailed statistics.")
    parser.add_argument("--files", action="store_true", default=None, help="Show complete file list.")
    parser.add_argument("--sizes", action="store_true", default=None, help="Show file sizes.")
    parser.add_argument(
        "--no-gitignore",
        dest="gitignore",
        action="store_false",
        default=None,
        help="Disable .gitignore support.",
    )
    parser.add_argument(
        "--no-default-patterns",
        action="store_true",
        default=None,
        help="Disable default ignore patterns.",
    )
    parser.add_argument("--hidden", action="store_true", default=None, help="Include hidden files and directories.")
    parser.add_argument("-d", "--depth", type=_positive_int, default=None, help="Maximum depth to traverse.")
    parser.add_argument(
        "-f",
        "--format",
        type=_format_name,
        default=None,
        help=f"Output format ({', '.join(OUTPUT_FORMATS)}).",
    )
    parser.add_argument("--group-by-type", action="store_true", default=None, help="Group files by type in file list.")
    parser.add_argument("--timestamps", action="store_true", default=None, help="Show file modification dates.")
    parser.add_argument("--permissions", action="store_true", default=None, help="Show file permissions (Unix-style).")
    parser.add_argument("--exclude-empty", action="store_true", default=None, help="Exclude empty directories.")
    parser.add_argument("--follow-symlinks", action="store_true", default=None, help="Follow symbolic links.")
    parser.add_argument("--git-status", action="store_true", default=None, help="Show git status for files.")
    parser.add_argument("--no-color", dest="color", action="store_false", default=None, help="Disable colored output.")
    parser.add_argument(
        "--color-file",
        action="store_true",
        default=None,
        help="Keep ANSI colors in the output file (text format only).",
    )
    parser.add_argument("--no-print", dest="print", action="store_false", default=None, help="Don't print structure to terminal.")
    parser.add_argument("--save-config", action="store_true", help="Save current options as default configuration.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style for JSON/Markdown terminal output.")
    parser.add_argument("--debug", action="store_true", help="Enable debug output on stderr.")
    return parser


def _configure_logging(debug: bool) -> None:
    if not debug:
        return
    logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="debug: %(name)s: %(message)s")


def _stdout_supports_color() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def write_report(result: AnalysisResult, settings: Settings, style: str = DEFAULT_STYLE) -> None:
    """Write the uncolored report to the output file and echo it to stdout.

    Raises ``OSError`` when the output file cannot be written.
    """
    output_format = settings.output_format
    base_options = replace(
        DisplayOptions.from_settings(settings, result.root),
        generated_at=datetime.now(timezone.utc),
    )

    file_color = settings.color_file and output_format == "txt"
    file_text = render(result, output_format, replace(base_options, color=file_color))
    if not file_color:
        file_text = strip_ansi(file_text)

    output_path = Path(settings.output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(file_text, encoding="utf-8")
    logger.debug("wrote %d characters to %s", len(file_text), output_path)

    terminal_color = settings.color_terminal and _stdout_supports_color()
    if settings.print_output:
        terminal_text = render(result, output_format, replace(base_options, color=terminal_color))
        if terminal_color:
            terminal_text = highlight_output(terminal_text, output_format, style)
        sys.stdout.write("\n" + terminal_text)

    if not settings.color_terminal:
        sys.stdout.write(f"Structure saved to {settings.output_file}\n")
        return

    theme = resolve_theme(color=terminal_color)
    sys.stdout.write(theme.paint(theme.status_ok, f"✓ Structure saved to {settings.output_file}") + "\n")
    if result.diagnostics.errors:
        count = len(result.diagnostics.errors)
        sys.stdout.write(theme.paint(theme.status_warn, f"⚠ {count} errors occurred during analysis") + "\n")
    if result.diagnostics.warnings:
        count = len(result.diagnostics.warnings)
        sys.stdout.write(theme.paint(theme.status_warn, f"ℹ {count} warnings during analysis") + "\n")


def _run_subcommand(argv: list[str]) -> None:
    name, rest = argv[0], argv[1:]
    parser = argparse.ArgumentParser(prog=f"repostruc {name}")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output.")
    args = parser.parse_args(rest)
    color = args.color and _stdout_supports_color()
    command = init_command if name == "init" else check_command
    raise SystemExit(command(Path.cwd(), sys.stdout, color=color))


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and write the structure report.

    Exits with status 1 (message on stderr) when config files cannot be
    saved, the directory is unusable, or the report cannot be written.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and argv[0] in SUBCOMMANDS:
        _run_subcommand(argv)
        return

    args = build_parser().parse_args(argv)
    _configure_logging(args.debug)
    cli_options = vars(args)
    logger.debug("options received: %s", cli_options)
    logger.debug("directory: %s", args.directory)

    diagnostics = Diagnostics()
    project_config_path = Path.cwd() / CONFIG_FILENAME
    project_config = load_config(project_config_path, diagnostics)
    user_config = load_config(USER_CONFIG_PATH, diagnostics)

    if args.save_config:
        try:
            save_config(project_config_path, config_from_options(cli_options))
        except OSError as exc:
            logger.debug("config save failed", exc_info=True)
            raise SystemExit(f"Error saving configuration: {exc}") from exc
        sys.stdout.write(f"✓ Configuration saved to {CONFIG_FILENAME}\n")
        return

    settings = resolve_settings(cli_options, project_config, user_config, diagnostics)
    logger.debug("resolved settings: %s", settings)

    directory = Path(args.directory)
    if not directory.exists():
        raise SystemExit(f"Path not found: {directory}")
    if not directory.is_dir():
        raise SystemExit(f"Not a directory: {directory}")

    try:
        result = analyze(directory, settings, diagnostics)
    except OSError as exc:
        logger.debug("analysis failed", exc_info=True)
        raise SystemExit(f"Error: {exc}") from exc

    try:
        write_report(result, settings, style=args.style)
    except OSError as exc:
        logger.debug("writing output failed", exc_info=True)
        raise SystemExit(f"Error saving output: {exc}") from exc


if __name__ == "__main__":
    main()
