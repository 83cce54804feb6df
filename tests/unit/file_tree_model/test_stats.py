"""Tests for statistics aggregation and file classification."""

from __future__ import annotations

import unittest

from repostruc.file_tree_model import (
    LARGEST_FILES_LIMIT,
    NO_EXTENSION,
    Entry,
    Statistics,
    file_category,
    file_extension,
)


def _file(path: str, size: int) -> Entry:
    return Entry(path=path, size=size, is_dir=False, is_symlink=False, mtime_ns=0, permissions=0o100644)


def _dir(path: str) -> Entry:
    return Entry(path=path, size=0, is_dir=True, is_symlink=False, mtime_ns=0, permissions=0o40755)


class ClassificationTests(unittest.TestCase):
    def test_extension_is_suffix_of_final_segment(self) -> None:
        self.assertEqual(file_extension("src/app.test.ts"), ".ts")
        self.assertEqual(file_extension("src.d/Makefile"), NO_EXTENSION)
        self.assertEqual(file_extension(".gitignore"), NO_EXTENSION)

    def test_category_lookup_is_case_insensitive(self) -> None:
        self.assertEqual(file_category(".PY"), "code")
        self.assertEqual(file_category(".yml"), "data")
        self.assertEqual(file_category(".scss"), "web")
        self.assertEqual(file_category(".xyz"), "other")
        self.assertEqual(file_category(NO_EXTENSION), "other")


class StatisticsTests(unittest.TestCase):
    def test_directories_only_count_toward_total_dirs(self) -> None:
        stats = Statistics()
        stats.add_entry(_dir("src"))
        stats.add_entry(_file("src/index.js", 120))
        stats.add_entry(_file("README.md", 30))

        self.assertEqual(stats.total_dirs, 1)
        self.assertEqual(stats.total_files, 2)
        self.assertEqual(stats.total_size, 150)
        self.assertEqual(stats.by_extension[".js"].count, 1)
        self.assertEqual(stats.by_category["code"].size, 120)
        self.assertEqual(stats.by_category["docs"].size, 30)

    def test_largest_files_are_bounded_and_ordered_with_path_tiebreak(self) -> None:
        stats = Statistics()
        for index in range(12):
            stats.add_entry(_file(f"f{index:02d}.txt", index * 10))
        stats.add_entry(_file("b.txt", 110))
        stats.add_entry(_file("a.txt", 110))

        self.assertEqual(len(stats.largest_files), LARGEST_FILES_LIMIT)
        self.assertEqual(
            [(item.path, item.size) for item in stats.largest_files[:4]],
            [("a.txt", 110), ("b.txt", 110), ("f11.txt", 110), ("f10.txt", 100)],
        )
        sizes = [item.size for item in stats.largest_files]
        self.assertEqual(sizes, sorted(sizes, reverse=True))

    def test_rankings_sort_by_count_then_name(self) -> None:
        stats = Statistics()
        stats.add_entry(_file("a.md", 1))
        stats.add_entry(_file("b.py", 1))
        stats.add_entry(_file("c.py", 1))
        stats.add_entry(_file("d.css", 1))

        self.assertEqual([name for name, _tally in stats.extensions_by_count()], [".py", ".css", ".md"])
        self.assertEqual([name for name, _tally in stats.extensions_by_count(1)], [".py"])
        self.assertEqual([name for name, _tally in stats.categories_by_count()], ["code", "docs", "web"])

    def test_to_dict_uses_camel_case_keys(self) -> None:
        stats = Statistics()
        stats.add_entry(_file("main.go", 64))

        payload = stats.to_dict()

        self.assertEqual(payload["totalFiles"], 1)
        self.assertEqual(payload["totalDirs"], 0)
        self.assertEqual(payload["totalSize"], 64)
        self.assertEqual(payload["byExtension"], {".go": {"count": 1, "size": 64}})
        self.assertEqual(payload["byCategory"], {"code": {"count": 1, "size": 64}})
        self.assertEqual(payload["largestFiles"], [{"path": "main.go", "size": 64}])


if __name__ == "__main__":
    unittest.main()
