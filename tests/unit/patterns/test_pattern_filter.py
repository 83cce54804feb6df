"""Ignore/include predicate tests for ``PatternFilter``.

Covers built-in defaults, ``.gitignore`` rules, user globs and the tool's
own output/config files.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from repostruc.config import CONFIG_FILENAME, Settings
from repostruc.diagnostics import Diagnostics
from repostruc.patterns import PatternFilter, normalize_relative_path


def _filter(root: Path, **settings_kwargs) -> tuple[PatternFilter, Diagnostics]:
    diagnostics = Diagnostics()
    return PatternFilter.from_settings(root, Settings(**settings_kwargs), diagnostics), diagnostics


class DefaultPatternTests(unittest.TestCase):
    def test_default_patterns_ignore_dependency_directories_and_their_contents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, diagnostics = _filter(Path(tmp))

            self.assertTrue(pattern_filter.is_ignored("node_modules", is_dir=True))
            self.assertTrue(pattern_filter.is_ignored("node_modules/pkg/index.js"))
            self.assertTrue(pattern_filter.is_ignored("pkg/__pycache__/mod.cpython-312.pyc"))
            self.assertTrue(pattern_filter.is_ignored("logs/app.log"))
            self.assertFalse(pattern_filter.is_ignored("src/index.js"))
            self.assertEqual(diagnostics.errors, [])

    def test_directory_only_default_does_not_hide_plain_file_with_same_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp))

            self.assertTrue(pattern_filter.is_ignored("dist", is_dir=True))
            self.assertFalse(pattern_filter.is_ignored("dist"))

    def test_disabling_default_patterns_keeps_dependency_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp), use_default_patterns=False)

            self.assertFalse(pattern_filter.is_ignored("node_modules", is_dir=True))
            self.assertFalse(pattern_filter.is_ignored("node_modules/pkg/index.js"))


class UserPatternTests(unittest.TestCase):
    def test_user_ignore_globs_apply_anywhere_in_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp), ignore_patterns=("*.md", "fixtures/"))

            self.assertTrue(pattern_filter.is_ignored("README.md"))
            self.assertTrue(pattern_filter.is_ignored("docs/guide.md"))
            self.assertTrue(pattern_filter.is_ignored("tests/fixtures/data.json"))
            self.assertFalse(pattern_filter.is_ignored("docs/guide.txt"))

    def test_output_file_name_is_always_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            pattern_filter, _diagnostics = _filter(root, output_file=str(root / "reports" / "tree.txt"))

            self.assertTrue(pattern_filter.is_ignored("reports/tree.txt"))
            self.assertTrue(pattern_filter.is_ignored("tree.txt"))
            self.assertFalse(pattern_filter.is_ignored("reports/other.txt"))

    def test_config_file_is_ignored_only_when_hidden(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            visible_filter, _diagnostics = _filter(Path(tmp))
            hidden_filter, _diagnostics = _filter(Path(tmp), hide_config=True)

            self.assertFalse(visible_filter.is_ignored(CONFIG_FILENAME))
            self.assertTrue(hidden_filter.is_ignored(CONFIG_FILENAME))


class GitignorePatternTests(unittest.TestCase):
    def test_root_gitignore_rules_and_negations_apply(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".gitignore").write_text("generated/\n*.secret\n!keep.secret\n", encoding="utf-8")
            pattern_filter, _diagnostics = _filter(root)

            self.assertTrue(pattern_filter.is_ignored("generated", is_dir=True))
            self.assertTrue(pattern_filter.is_ignored("generated/out.js"))
            self.assertTrue(pattern_filter.is_ignored("api.secret"))
            self.assertFalse(pattern_filter.is_ignored("keep.secret"))

    def test_gitignore_is_skipped_when_disabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".gitignore").write_text("*.secret\n", encoding="utf-8")
            pattern_filter, _diagnostics = _filter(root, use_gitignore=False)

            self.assertIsNone(pattern_filter.gitignore)
            self.assertFalse(pattern_filter.is_ignored("api.secret"))


class IncludePatternTests(unittest.TestCase):
    def test_default_include_matches_every_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp))

            self.assertTrue(pattern_filter.is_included("README.md"))
            self.assertTrue(pattern_filter.is_included("src", is_dir=True))
            self.assertTrue(pattern_filter.is_included("src/deep/module.py"))

    def test_include_globs_restrict_matches(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp), include_patterns=("*.py",))

            self.assertTrue(pattern_filter.is_included("app.py"))
            self.assertTrue(pattern_filter.is_included("src/pkg/app.py"))
            self.assertFalse(pattern_filter.is_included("README.md"))
            self.assertFalse(pattern_filter.is_included("src", is_dir=True))

    def test_empty_path_is_never_ignored_or_included(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            pattern_filter, _diagnostics = _filter(Path(tmp))

            self.assertFalse(pattern_filter.is_ignored(""))
            self.assertFalse(pattern_filter.is_included(""))


class NormalizeRelativePathTests(unittest.TestCase):
    def test_strips_leading_dot_segments_and_slashes(self) -> None:
        self.assertEqual(normalize_relative_path("./src/app.py"), "src/app.py")
        self.assertEqual(normalize_relative_path("/src/"), "src")
        self.assertEqual(normalize_relative_path("././a"), "a")


if __name__ == "__main__":
    unittest.main()
