"""Tests for testbattery.operators.filesystem."""

import asyncio
import os
from pathlib import Path

import pytest

from testbattery.operators.filesystem import (
    DEFAULT_MAX_CONCURRENCY,
    FILESYSTEM,
    LocalFileSystem,
    PathKind,
    PathStat,
    filesystem_scope,
    is_directory,
    is_file,
    probe_paths,
    to_path,
)


class TestToPath:
    def test_string_and_pathlike(self):
        assert to_path("a/b") == "a/b"
        assert to_path(Path("a") / "b") == os.path.join("a", "b")

    def test_segments_are_joined(self):
        assert to_path(["a", "b", "c.txt"]) == os.path.join("a", "b", "c.txt")

    @pytest.mark.parametrize("value", [None, 5, [], ["a", 1], b"bytes"])
    def test_non_paths(self, value):
        assert to_path(value) is None


class TestLocalFileSystem:
    def test_stat_file_and_directory(self, sample_tree):
        fs = LocalFileSystem()
        assert asyncio.run(fs.stat(str(sample_tree / "notes.txt"))) == PathStat(True, False)
        assert asyncio.run(fs.stat(str(sample_tree / "sub"))) == PathStat(False, True)

    def test_missing_path_is_none(self, sample_tree):
        fs = LocalFileSystem()
        assert asyncio.run(fs.stat(str(sample_tree / "missing"))) is None
        assert asyncio.run(fs.stat(str(sample_tree / "notes.txt" / "below"))) is None


class TestProbes:
    def test_real_paths(self, sample_tree):
        notes = str(sample_tree / "notes.txt")
        sub = str(sample_tree / "sub")

        assert asyncio.run(is_file([notes]))
        assert not asyncio.run(is_file([sub]))
        assert asyncio.run(is_directory([sub, [str(sample_tree), "sub"]]))
        assert not asyncio.run(is_directory([sub, notes]))
        assert not asyncio.run(is_file([str(sample_tree / "missing")]))

    def test_no_values_is_vacuous(self, fake_fs):
        with filesystem_scope(fake_fs):
            assert asyncio.run(probe_paths([], PathKind.FILE))
        assert fake_fs.calls == []

    def test_non_path_value_fails_without_stat(self, fake_fs):
        fake_fs.entries["a"] = PathStat(is_file=True, is_directory=False)
        with filesystem_scope(fake_fs):
            assert not asyncio.run(probe_paths(["a", 42], PathKind.FILE))
        assert fake_fs.calls == ["a"]

    def test_concurrency_is_bounded(self, fake_fs):
        paths = [f"file-{i}" for i in range(3 * DEFAULT_MAX_CONCURRENCY)]
        for path in paths:
            fake_fs.entries[path] = PathStat(is_file=True, is_directory=False)

        with filesystem_scope(fake_fs):
            assert asyncio.run(probe_paths(paths, PathKind.FILE))

        assert sorted(fake_fs.calls) == sorted(paths)
        assert 1 < fake_fs.max_in_flight <= DEFAULT_MAX_CONCURRENCY

    def test_custom_concurrency(self, fake_fs):
        paths = [f"dir-{i}" for i in range(5)]
        for path in paths:
            fake_fs.entries[path] = PathStat(is_file=False, is_directory=True)

        with filesystem_scope(fake_fs):
            assert asyncio.run(probe_paths(paths, PathKind.DIRECTORY, max_concurrency=2))

        assert fake_fs.max_in_flight <= 2

    def test_unexpected_errors_propagate(self, fake_fs):
        fake_fs.errors["locked"] = PermissionError("denied")
        with filesystem_scope(fake_fs):
            with pytest.raises(PermissionError):
                asyncio.run(probe_paths(["locked"], PathKind.FILE))


def test_scope_restores_previous_filesystem(fake_fs):
    before = FILESYSTEM.get()
    with filesystem_scope(fake_fs):
        assert FILESYSTEM.get() is fake_fs
    assert FILESYSTEM.get() is before
