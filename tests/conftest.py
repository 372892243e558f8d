"""Shared fixtures for treemv tests."""

import os

import pytest
from click.testing import CliRunner
from dulwich import porcelain
from dulwich.repo import Repo

from treemv import WorkTree


TRACKED = {
    "hello.txt": b"hello world",
    "dir/a.txt": b"aaa",
    "dir/b.txt": b"bbb",
    "dir/sub/c.txt": b"ccc",
    "other/d.txt": b"ddd",
    "nested/a.txt": b"nested a",
}


def _write(root, rel, data):
    p = root.joinpath(*rel.split("/"))
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)


@pytest.fixture
def worktree(tmp_path):
    """Work tree with every path in TRACKED added to the index.

    Untracked: untracked.txt and loose/x.txt.
    """
    root = tmp_path / "work"
    porcelain.init(str(root)).close()
    for rel, data in TRACKED.items():
        _write(root, rel, data)
    porcelain.add(str(root), paths=[str(root.joinpath(*rel.split("/"))) for rel in TRACKED])
    _write(root, "untracked.txt", b"loose")
    _write(root, "loose/x.txt", b"x")
    return root


@pytest.fixture
def tree(worktree):
    t = WorkTree.open(worktree)
    yield t
    t.close()


@pytest.fixture
def repo(worktree):
    r = Repo(str(worktree))
    yield r
    r.close()


@pytest.fixture
def index_blob(worktree):
    """Return the content the index records for a path, or None."""
    def _read(path):
        r = Repo(str(worktree))
        try:
            index = r.open_index()
            key = path.encode()
            if key not in index:
                return None
            return r.object_store[index[key].sha].data
        finally:
            r.close()
    return _read


@pytest.fixture
def snapshot(worktree):
    """Capture (files on disk, raw index bytes) for no-mutation checks."""
    def _take():
        files = {}
        for dirpath, dirnames, filenames in os.walk(worktree):
            if ".git" in dirnames:
                dirnames.remove(".git")
            for name in filenames:
                full = os.path.join(dirpath, name)
                with open(full, "rb") as f:
                    files[os.path.relpath(full, worktree)] = f.read()
        index = (worktree / ".git" / "index").read_bytes()
        return files, index
    return _take


@pytest.fixture
def runner():
    return CliRunner()
