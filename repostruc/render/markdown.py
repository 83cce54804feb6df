"""Markdown renderer: headed document with a nested bullet tree."""

from __future__ import annotations

from ..analyzer import AnalysisResult
from ..file_tree_model import Entry, Statistics
from ..git_status import git_status_badge
from .formatting import format_bytes, format_date, format_iso_timestamp, format_permissions
from .options import DisplayOptions
from .tree import iter_tree_rows

TOP_EXTENSIONS = 10


def _entry_extras(entry: Entry, options: DisplayOptions) -> list[str]:
    extras: list[str] = []
    if options.show_sizes and not entry.is_dir:
        extras.append(f"*{format_bytes(entry.size)}*")
    if options.show_timestamps:
        extras.append(f"`{format_date(entry.modified)}`")
    if options.show_permissions:
        extras.append(f"`{format_permissions(entry.permissions)}`")
    if options.show_git_status and entry.git_status:
        extras.append(f"`[{git_status_badge(entry.git_status)}]`")
    if entry.is_symlink:
        extras.append("`→ symlink`")
    return extras


def render_markdown_tree(result: AnalysisResult, options: DisplayOptions) -> str:
    lines: list[str] = []
    for row in iter_tree_rows(result.structure, result.entries, options.max_depth):
        indent = "  " * (row.depth - 1)
        if row.kind == "truncated":
            lines.append(f"{indent}- *{row.name}*")
            continue
        name = f"**{row.name}/**" if row.is_dir else row.name
        line = f"{indent}- {name}"
        if row.entry is not None:
            extras = _entry_extras(row.entry, options)
            if extras:
                line += " " + " ".join(extras)
        lines.append(line)
    return "".join(f"{line}\n" for line in lines)


def render_markdown_statistics(stats: Statistics) -> str:
    out = [
        "## Statistics",
        "",
        f"- **Total Files**: {stats.total_files}",
        f"- **Total Directories**: {stats.total_dirs}",
        f"- **Total Size**: {format_bytes(stats.total_size)}",
        "",
    ]
    if stats.by_category:
        out.extend(["### Files by Category", ""])
        for category, tally in stats.categories_by_count():
            out.append(f"- **{category}**: {tally.count} files ({format_bytes(tally.size)})")
        out.append("")
    if stats.by_extension:
        out.extend(["### Top File Extensions", ""])
        for extension, tally in stats.extensions_by_count(TOP_EXTENSIONS):
            out.append(f"- **{extension}**: {tally.count} files ({format_bytes(tally.size)})")
        out.append("")
    if stats.largest_files:
        out.extend(["### Largest Files", "", "| File | Size |", "|------|------|"])
        for item in stats.largest_files:
            out.append(f"| {item.path} | {format_bytes(item.size)} |")
        out.append("")
    return "\n".join(out) + "\n"


def render_markdown_issues(errors: list[str], warnings: list[str]) -> str:
    out = ["## Issues", ""]
    if errors:
        out.extend([f"### Errors ({len(errors)})", ""])
        out.extend(f"- {error}" for error in errors)
        out.append("")
    if warnings:
        out.extend([f"### Warnings ({len(warnings)})", ""])
        out.extend(f"- {warning}" for warning in warnings)
        out.append("")
    return "\n".join(out) + "\n"


def render_markdown(result: AnalysisResult, options: DisplayOptions) -> str:
    output = "# Repository Structure\n\n"
    output += f"Generated on: {format_iso_timestamp(options.timestamp())}\n\n"
    output += f"Directory: `{result.root}`\n\n"
    output += "## Directory Tree\n\n"
    output += render_markdown_tree(result, options)
    if options.show_stats:
        output += "\n" + render_markdown_statistics(result.statistics)
    errors = result.diagnostics.errors
    warnings = result.diagnostics.warnings
    if errors or warnings:
        output += "\n" + render_markdown_issues(errors, warnings)
    return output


__all__ = [
    "render_markdown",
    "render_markdown_issues",
    "render_markdown_statistics",
    "render_markdown_tree",
]
