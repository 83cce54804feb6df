"""Markdown renderer tests: headings, nested bullets and sections."""

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from pathlib import Path

from repostruc.analyzer import AnalysisResult
from repostruc.diagnostics import Diagnostics
from repostruc.file_tree_model import Entry, Statistics, insert_path
from repostruc.render import DisplayOptions
from repostruc.render.markdown import render_markdown

ROOT = Path("/work/project")
GENERATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _entry(path: str, size: int = 0, is_dir: bool = False, **kwargs) -> Entry:
    kwargs.setdefault("is_symlink", False)
    kwargs.setdefault("mtime_ns", 0)
    kwargs.setdefault("permissions", 0o40755 if is_dir else 0o100644)
    return Entry(path=path, size=size, is_dir=is_dir, **kwargs)


def _result(entries: list[Entry], diagnostics: Diagnostics | None = None) -> AnalysisResult:
    statistics = Statistics()
    structure: dict = {}
    for entry in entries:
        statistics.add_entry(entry)
        insert_path(structure, entry.path)
    return AnalysisResult(
        root=ROOT,
        filtered_paths=[entry.path for entry in entries],
        statistics=statistics,
        structure=structure,
        entries={entry.path: entry for entry in entries},
        git_status={},
        diagnostics=diagnostics or Diagnostics(),
    )


def _project() -> list[Entry]:
    return [
        _entry("README.md", 30),
        _entry("src", is_dir=True),
        _entry("src/index.js", 120),
        _entry("src/lib", is_dir=True),
        _entry("src/lib/util.js", 4096),
    ]


class MarkdownRenderTests(unittest.TestCase):
    def test_document_layout_and_nested_tree(self) -> None:
        output = render_markdown(_result(_project()), DisplayOptions(directory=ROOT, generated_at=GENERATED))

        self.assertEqual(
            output,
            "# Repository Structure\n\n"
            "Generated on: 2024-01-02T03:04:05.000Z\n\n"
            f"Directory: `{ROOT}`\n\n"
            "## Directory Tree\n\n"
            "- **src/**\n"
            "  - **lib/**\n"
            "    - util.js\n"
            "  - index.js\n"
            "- README.md\n",
        )

    def test_extras_are_inline_after_name(self) -> None:
        entries = [_entry("tool.py", 1536, permissions=0o100700, git_status="untracked", is_symlink=True)]
        options = DisplayOptions(
            directory=ROOT,
            show_sizes=True,
            show_timestamps=True,
            show_permissions=True,
            show_git_status=True,
            generated_at=GENERATED,
        )

        output = render_markdown(_result(entries), options)

        self.assertIn("- tool.py *1.50 KB* `1970-01-01` `700` `[?]` `→ symlink`\n", output)

    def test_statistics_section_with_largest_files_table(self) -> None:
        options = DisplayOptions(directory=ROOT, show_stats=True, generated_at=GENERATED)

        output = render_markdown(_result(_project()), options)

        self.assertIn("## Statistics\n\n- **Total Files**: 3\n- **Total Directories**: 2\n", output)
        self.assertIn("### Files by Category\n\n- **code**: 2 files (4.12 KB)\n- **docs**: 1 files (30.00 B)\n", output)
        self.assertIn("### Top File Extensions\n\n- **.js**: 2 files (4.12 KB)\n", output)
        self.assertIn("| File | Size |\n|------|------|\n| src/lib/util.js | 4.00 KB |\n", output)

    def test_issues_section(self) -> None:
        diagnostics = Diagnostics()
        diagnostics.warn("Could not stat file a: gone")

        output = render_markdown(_result(_project(), diagnostics), DisplayOptions(directory=ROOT, generated_at=GENERATED))

        self.assertIn("## Issues\n\n### Warnings (1)\n\n- Could not stat file a: gone\n", output)
        self.assertNotIn("### Errors", output)


if __name__ == "__main__":
    unittest.main()
