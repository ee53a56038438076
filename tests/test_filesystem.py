"""Unit tests for the filesystem gateway (devhelper.filesystem).

Tests cover:
- make_directories (recursive, idempotent)
- write_text / read_text (UTF-8, overwrite)
- list_entries / stat_entry
- walk (dot-entry filtering, nesting, no depth limit)
- FilesystemError wrapping of OSError
"""

from __future__ import annotations

from pathlib import Path

import pytest

from devhelper.errors import FilesystemError, GeneratorError
from devhelper.filesystem import (
    ProjectDirectoryEntry,
    list_entries,
    make_directories,
    read_text,
    stat_entry,
    walk,
    write_text,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


class TestMakeDirectories:
    def test_creates_nested(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c"
        make_directories(target)
        assert target.is_dir()

    def test_existing_is_not_an_error(self, tmp_path: Path):
        make_directories(tmp_path)
        make_directories(tmp_path)
        assert tmp_path.is_dir()

    def test_non_recursive_missing_parent_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError) as exc_info:
            make_directories(tmp_path / "missing" / "child", recursive=False)
        assert exc_info.value.operation == "create directory"

    def test_path_under_a_file_fails(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(FilesystemError):
            make_directories(blocker / "child")


class TestReadWrite:
    def test_round_trip_utf8(self, tmp_path: Path):
        path = write_text(tmp_path / "note.txt", "📁 héllo\n")
        assert read_text(path) == "📁 héllo\n"

    def test_write_replaces_existing(self, tmp_path: Path):
        path = tmp_path / "file.txt"
        write_text(path, "first")
        write_text(path, "second")
        assert read_text(path) == "second"

    def test_write_into_missing_directory_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError) as exc_info:
            write_text(tmp_path / "nope" / "file.txt", "content")
        err = exc_info.value
        assert err.operation == "write"
        assert err.path == tmp_path / "nope" / "file.txt"
        assert str(err).startswith("Cannot write ")

    def test_read_missing_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError) as exc_info:
            read_text(tmp_path / "absent.txt")
        assert exc_info.value.operation == "read"

    def test_filesystem_error_is_a_generator_error(self, tmp_path: Path):
        with pytest.raises(GeneratorError):
            read_text(tmp_path / "absent.txt")


class TestListAndStat:
    def test_list_entries(self, tmp_path: Path):
        (tmp_path / "one.txt").write_text("1", encoding="utf-8")
        (tmp_path / "two").mkdir()
        assert sorted(list_entries(tmp_path)) == ["one.txt", "two"]

    def test_list_missing_directory_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            list_entries(tmp_path / "missing")

    def test_stat_missing_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError) as exc_info:
            stat_entry(tmp_path / "missing")
        assert exc_info.value.operation == "stat"


# ---------------------------------------------------------------------------
# walk
# ---------------------------------------------------------------------------


def _names(entries: list[ProjectDirectoryEntry]) -> set[str]:
    return {entry.name for entry in entries}


class TestWalk:
    def test_empty_directory(self, tmp_path: Path):
        assert walk(tmp_path) == []

    def test_skips_dot_entries(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".env").write_text("A=1", encoding="utf-8")
        (tmp_path / "index.js").write_text("", encoding="utf-8")
        assert _names(walk(tmp_path)) == {"index.js"}

    def test_nested_directories(self, tmp_path: Path):
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "c.txt").write_text("", encoding="utf-8")
        (tmp_path / "a.txt").write_text("", encoding="utf-8")

        entries = {entry.name: entry for entry in walk(tmp_path)}
        assert entries["a.txt"].kind == "file"
        assert not entries["a.txt"].is_directory
        assert entries["b"].is_directory
        assert [child.name for child in entries["b"].children] == ["c.txt"]

    def test_no_depth_limit(self, tmp_path: Path):
        deep = tmp_path / "l1" / "l2" / "l3" / "l4" / "l5"
        deep.mkdir(parents=True)
        (deep / "leaf.txt").write_text("", encoding="utf-8")

        node = walk(tmp_path)[0]
        for expected in ("l2", "l3", "l4", "l5"):
            node = node.children[0]
            assert node.name == expected
        assert node.children[0].name == "leaf.txt"

    def test_dot_entries_skipped_at_depth(self, tmp_path: Path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / ".cache").mkdir()
        (tmp_path / "src" / "app.js").write_text("", encoding="utf-8")
        assert _names(walk(tmp_path)[0].children) == {"app.js"}

    def test_missing_root_fails(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            walk(tmp_path / "missing")
