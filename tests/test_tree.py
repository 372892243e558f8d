"""Tests for treemv.tree path helpers."""

import os

import pytest

from treemv.exceptions import StatError, UsageError
from treemv.tree import (
    basename,
    is_dir_on_disk,
    is_regular_on_disk,
    lstat_or_none,
    to_index_path,
)


class TestToIndexPath:
    def test_relative(self, tmp_path):
        assert to_index_path(str(tmp_path), "a/b.txt", str(tmp_path)) == "a/b.txt"

    def test_from_subdirectory(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        assert to_index_path(str(tmp_path), "x.txt", str(sub)) == "sub/x.txt"
        assert to_index_path(str(tmp_path), "../y.txt", str(sub)) == "y.txt"

    def test_absolute(self, tmp_path):
        assert to_index_path(str(tmp_path), str(tmp_path / "a.txt"), "/") == "a.txt"

    def test_collapses_dots_and_slashes(self, tmp_path):
        assert to_index_path(str(tmp_path), "./a//b/../c/", str(tmp_path)) == "a/c"

    def test_outside(self, tmp_path):
        with pytest.raises(UsageError, match="outside repository"):
            to_index_path(str(tmp_path), "../x", str(tmp_path))

    def test_root_rejected_as_source(self, tmp_path):
        with pytest.raises(UsageError, match="root"):
            to_index_path(str(tmp_path), ".", str(tmp_path))

    def test_root_allowed_as_destination(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        assert to_index_path(str(tmp_path), ".", str(tmp_path), allow_root=True) == ""
        assert to_index_path(str(tmp_path), "..", str(sub), allow_root=True) == ""
        assert to_index_path(str(tmp_path), str(tmp_path), "/", allow_root=True) == ""

    def test_outside_rejected_as_destination(self, tmp_path):
        with pytest.raises(UsageError, match="outside repository"):
            to_index_path(str(tmp_path), "..", str(tmp_path), allow_root=True)

    def test_git_dir(self, tmp_path):
        with pytest.raises(UsageError, match="inside the .git directory"):
            to_index_path(str(tmp_path), ".git/config", str(tmp_path))

    def test_empty(self, tmp_path):
        with pytest.raises(UsageError):
            to_index_path(str(tmp_path), "", str(tmp_path))

    @pytest.mark.skipif(os.name == "nt", reason="symlinks")
    def test_symlink_kept(self, tmp_path):
        (tmp_path / "target").mkdir()
        (tmp_path / "link").symlink_to(tmp_path / "target")
        assert to_index_path(str(tmp_path), "link", str(tmp_path)) == "link"


class TestDiskChecks:
    def test_lstat_missing(self, tmp_path):
        assert lstat_or_none(str(tmp_path), "nope") is None

    def test_lstat_through_file(self, tmp_path):
        (tmp_path / "f").write_text("x")
        assert lstat_or_none(str(tmp_path), "f/inner") is None

    def test_kinds(self, tmp_path):
        (tmp_path / "d").mkdir()
        (tmp_path / "f").write_text("x")
        assert is_dir_on_disk(str(tmp_path), "d")
        assert not is_dir_on_disk(str(tmp_path), "f")
        assert is_regular_on_disk(str(tmp_path), "f")
        assert not is_regular_on_disk(str(tmp_path), "d")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks")
    def test_symlink_to_dir_is_not_dir(self, tmp_path):
        (tmp_path / "d").mkdir()
        (tmp_path / "link").symlink_to(tmp_path / "d")
        assert not is_dir_on_disk(str(tmp_path), "link")

    def test_basename(self):
        assert basename("a/b/c.txt") == "c.txt"
        assert basename("c.txt") == "c.txt"

    def test_lstat_failure_raises_stat_error(self, tmp_path, monkeypatch):
        real_lstat = os.lstat

        def denied(path, *args, **kwargs):
            if os.fspath(path).endswith("secret"):
                raise PermissionError(13, "Permission denied", path)
            return real_lstat(path, *args, **kwargs)

        monkeypatch.setattr(os, "lstat", denied)
        with pytest.raises(StatError, match="cannot stat secret: Permission denied") as exc_info:
            lstat_or_none(str(tmp_path), "secret")
        assert exc_info.value.path == "secret"
        assert lstat_or_none(str(tmp_path), "other") is None
