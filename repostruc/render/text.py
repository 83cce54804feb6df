"""Plain-text renderer: box-drawing tree plus optional report sections."""

from __future__ import annotations

from ..analyzer import AnalysisResult
from ..file_tree_model import Entry, Statistics, file_category, file_extension
from ..git_status import git_status_badge
from .formatting import format_bytes, format_date, format_iso_timestamp, format_permissions
from .options import DisplayOptions
from .theme import TreeTheme, resolve_theme
from .tree import TreeRow, iter_tree_rows

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "
SYMLINK_ARROW = "→"

RULE_WIDE = "=" * 60
RULE_DASHED = "-" * 60
RULE_NARROW = "-" * 40
TOP_EXTENSIONS = 15


def _row_prefix(row: TreeRow) -> str:
    guides = "".join(SPACE if last else PIPE for last in row.guides)
    return guides + (LAST_BRANCH if row.is_last else BRANCH)


def _display_name(row: TreeRow, theme: TreeTheme) -> str:
    if row.is_dir:
        return theme.paint(theme.directory, row.name)
    if row.entry is not None and row.entry.is_symlink:
        return theme.paint(theme.symlink, row.name)
    return theme.paint(theme.file_color(file_category(file_extension(row.name))), row.name)


def _entry_extras(entry: Entry, options: DisplayOptions, theme: TreeTheme) -> list[str]:
    """Per-entry annotations in fixed order: size, date, mode, git, symlink."""
    extras: list[str] = []
    if options.show_sizes and not entry.is_dir:
        extras.append(theme.paint(theme.muted, f"({format_bytes(entry.size)})"))
    if options.show_timestamps:
        extras.append(theme.paint(theme.muted, f"[{format_date(entry.modified)}]"))
    if options.show_permissions:
        extras.append(theme.paint(theme.muted, f"<{format_permissions(entry.permissions)}>"))
    if options.show_git_status and entry.git_status:
        extras.append(theme.paint(theme.git_color(entry.git_status), git_status_badge(entry.git_status)))
    if entry.is_symlink:
        extras.append(theme.paint(theme.symlink, SYMLINK_ARROW))
    return extras


def render_tree_lines(result: AnalysisResult, options: DisplayOptions, detailed: bool, theme: TreeTheme) -> list[str]:
    lines: list[str] = []
    for row in iter_tree_rows(result.structure, result.entries, options.max_depth):
        prefix = _row_prefix(row)
        if row.kind == "truncated":
            lines.append(prefix + theme.paint(theme.muted, row.name))
            continue
        if not detailed:
            lines.append(prefix + row.name)
            continue
        line = prefix + _display_name(row, theme)
        if row.entry is not None:
            extras = _entry_extras(row.entry, options, theme)
            if extras:
                line += " " + " ".join(extras)
        lines.append(line)
    return lines


def render_statistics(stats: Statistics) -> str:
    out = ["Statistics:", RULE_WIDE]
    out.append(f"Total Files: {stats.total_files}")
    out.append(f"Total Directories: {stats.total_dirs}")
    out.append(f"Total Size: {format_bytes(stats.total_size)}")
    out.append("")

    if stats.by_category:
        out.extend(["Files by Category:", RULE_NARROW])
        for category, tally in stats.categories_by_count():
            out.append(f"{category}: {tally.count} files ({format_bytes(tally.size)})")
        out.append("")

    out.extend(["Files by Extension:", RULE_NARROW])
    for extension, tally in stats.extensions_by_count(TOP_EXTENSIONS):
        out.append(f"{extension}: {tally.count} files ({format_bytes(tally.size)})")
    out.append("")

    if stats.largest_files:
        out.extend(["Largest Files:", RULE_NARROW])
        for item in stats.largest_files:
            out.append(f"{item.path} ({format_bytes(item.size)})")
        out.append("")

    return "\n".join(out) + "\n"


def render_file_list(result: AnalysisResult, options: DisplayOptions) -> str:
    """Flat sorted file list, or one block per category with ``group_by_type``."""
    files = sorted(path for path, entry in result.entries.items() if not entry.is_dir)
    out = ["File List:", RULE_WIDE]

    if options.group_by_type:
        by_category: dict[str, list[str]] = {}
        for path in files:
            by_category.setdefault(file_category(file_extension(path)), []).append(path)
        for category in sorted(by_category):
            out.append("")
            out.append(f"{category.upper()} FILES:")
            out.append(RULE_NARROW)
            for path in by_category[category]:
                size = f" ({format_bytes(result.entries[path].size)})" if options.show_sizes else ""
                out.append(f"{path}{size}")
    else:
        for path in files:
            entry = result.entries[path]
            size = f" ({format_bytes(entry.size)})" if options.show_sizes else ""
            timestamp = f" [{format_date(entry.modified)}]" if options.show_timestamps else ""
            out.append(f"{path}{size}{timestamp}")

    return "\n".join(out) + "\n"


def render_issues(errors: list[str], warnings: list[str]) -> str:
    out = ["", "Issues:", RULE_WIDE]
    if errors:
        out.append(f"Errors ({len(errors)}):")
        out.extend(f"  - {error}" for error in errors)
    if warnings:
        out.append("")
        out.append(f"Warnings ({len(warnings)}):")
        out.extend(f"  - {warning}" for warning in warnings)
    return "\n".join(out) + "\n"


def render_text(result: AnalysisResult, options: DisplayOptions) -> str:
    """Render the simple tree, or the detailed report when any extra is on.

    Diagnostics always appear: in simple mode an issues block is appended
    only when there is something to report.
    """
    theme = resolve_theme(color=options.color)
    errors = result.diagnostics.errors
    warnings = result.diagnostics.warnings

    if options.simple:
        root_name = result.root.name or str(result.root)
        lines = [root_name, *render_tree_lines(result, options, detailed=False, theme=theme)]
        output = "\n".join(lines) + "\n"
        if errors or warnings:
            output += render_issues(errors, warnings)
        return output

    header = [
        "Directory Structure:",
        RULE_WIDE,
        f"Generated: {format_iso_timestamp(options.timestamp())}",
        f"Directory: {result.root}",
        RULE_DASHED,
        "",
    ]
    output = "\n".join(header) + "\n"
    tree_lines = render_tree_lines(result, options, detailed=True, theme=theme)
    if tree_lines:
        output += "\n".join(tree_lines) + "\n"
    output += "\n"

    if options.show_stats:
        output += render_statistics(result.statistics)
    if options.show_files:
        output += render_file_list(result, options)
    if errors or warnings:
        output += render_issues(errors, warnings)
    return output


__all__ = [
    "render_file_list",
    "render_issues",
    "render_statistics",
    "render_text",
    "render_tree_lines",
]
