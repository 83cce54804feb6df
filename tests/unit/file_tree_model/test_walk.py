"""Tests for filesystem discovery under an analysis root."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from repostruc.config import Settings
from repostruc.diagnostics import Diagnostics
from repostruc.file_tree_model import walk_paths
from repostruc.patterns import PatternFilter


def _make_tree(root: Path) -> None:
    (root / "src" / "util").mkdir(parents=True)
    (root / "src" / "app.py").write_text("print('app')\n", encoding="utf-8")
    (root / "src" / "util" / "helpers.py").write_text("x = 1\n", encoding="utf-8")
    (root / "README.md").write_text("# demo\n", encoding="utf-8")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "secret.txt").write_text("s\n", encoding="utf-8")
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "index.js").write_text("module.exports = 1\n", encoding="utf-8")


def _walk(root: Path, diagnostics: Diagnostics | None = None, **settings_kwargs) -> list[str]:
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    settings = Settings(**settings_kwargs)
    pattern_filter = PatternFilter.from_settings(root, settings, diagnostics)
    return walk_paths(
        root,
        pattern_filter,
        diagnostics,
        show_hidden=settings.show_hidden,
        follow_symlinks=settings.follow_symlinks,
        max_depth=settings.max_depth,
    )


class WalkPathsTests(unittest.TestCase):
    def test_walk_is_depth_first_sorted_and_skips_hidden_and_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            paths = _walk(root)

            self.assertEqual(
                paths,
                ["README.md", "src", "src/app.py", "src/util", "src/util/helpers.py"],
            )

    def test_show_hidden_includes_dot_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            paths = _walk(root, show_hidden=True)

            self.assertIn(".hidden", paths)
            self.assertIn(".hidden/secret.txt", paths)

    def test_max_depth_walks_one_level_past_limit_for_truncation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            paths = _walk(root, max_depth=1)

            self.assertEqual(paths, ["README.md", "src", "src/app.py", "src/util"])

    def test_include_patterns_keep_descending_unmatched_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            paths = _walk(root, include_patterns=("*.py",))

            self.assertEqual(paths, ["src/app.py", "src/util/helpers.py"])

    def test_symlink_back_to_ancestor_is_listed_but_not_descended(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a").mkdir()
            (root / "a" / "file.txt").write_text("x\n", encoding="utf-8")
            try:
                os.symlink(root, root / "a" / "loop", target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks are not supported here")

            paths = _walk(root, follow_symlinks=True)

            self.assertEqual(paths, ["a", "a/file.txt", "a/loop"])

    def test_symlinked_directory_is_descended_only_when_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            root = base / "root"
            target = base / "target"
            root.mkdir()
            target.mkdir()
            (target / "inner.txt").write_text("x\n", encoding="utf-8")
            try:
                os.symlink(target, root / "linked", target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks are not supported here")

            self.assertEqual(_walk(root), ["linked"])
            self.assertEqual(_walk(root, follow_symlinks=True), ["linked", "linked/inner.txt"])

    def test_unreadable_directory_is_recorded_as_warning_and_walk_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "locked").mkdir()
            (root / "locked" / "inside.txt").write_text("x\n", encoding="utf-8")
            (root / "open.txt").write_text("x\n", encoding="utf-8")
            real_scandir = os.scandir

            def fake_scandir(path):
                if Path(path).name == "locked":
                    raise PermissionError(13, "Permission denied")
                return real_scandir(path)

            diagnostics = Diagnostics()
            with mock.patch("repostruc.file_tree_model.walk.os.scandir", side_effect=fake_scandir):
                paths = _walk(root, diagnostics)

            self.assertEqual(paths, ["locked", "open.txt"])
            self.assertEqual(diagnostics.warnings, ["Could not read directory locked: Permission denied"])


if __name__ == "__main__":
    unittest.main()
