"""Work-tree path helpers: index-relative normalization and lstat helpers."""

from __future__ import annotations

import os
import posixpath
import stat

from .exceptions import StatError, UsageError

__all__ = [
    "to_index_path",
    "disk_path",
    "lstat_or_none",
    "is_dir_on_disk",
    "is_regular_on_disk",
    "join_index_path",
    "basename",
]


def _normalize_path(path: str | os.PathLike[str]) -> str:
    """Normalize an index path: strip slashes, reject bad segments."""
    path = os.fspath(path)
    if os.name == "nt":
        path = path.replace("\\", "/")
    path = path.strip("/")
    if not path:
        raise ValueError("Path must not be empty")
    segments = path.split("/")
    for seg in segments:
        if not seg:
            raise ValueError(f"Empty segment in path: {path!r}")
        if seg in (".", ".."):
            raise ValueError(f"Invalid path segment: {seg!r}")
    return "/".join(segments)


def to_index_path(
    root: str,
    arg: str | os.PathLike[str],
    cwd: str,
    *,
    allow_root: bool = False,
) -> str:
    """Resolve a command-line path argument to an index-relative path.

    *arg* is interpreted relative to *cwd* unless absolute.  Symlinks are
    not resolved: a symlink is tracked as itself.

    The work tree itself resolves to ``""`` when *allow_root* is set (a
    destination directory); otherwise it is rejected.

    Raises ``UsageError`` when the result lies outside the work tree, is the
    work tree itself, or points into ``.git``.
    """
    raw = os.fspath(arg)
    if not raw:
        raise UsageError("Path must not be empty")
    full = os.path.normpath(os.path.join(cwd, raw))
    # Resolve symlinks in parent directories only; the last segment is the
    # tracked path itself.
    parent, name = os.path.split(full)
    if name:
        full = os.path.join(os.path.realpath(parent), name)
    else:
        full = os.path.realpath(full)
    rel = os.path.relpath(full, os.path.realpath(root))
    if os.name == "nt":
        rel = rel.replace("\\", "/")
    if rel == ".":
        if allow_root:
            return ""
        raise UsageError(f"{raw}: cannot move the work tree root")
    if rel == ".." or rel.startswith("../"):
        raise UsageError(f"{raw}: outside repository")
    try:
        rel = _normalize_path(rel)
    except ValueError as exc:
        raise UsageError(f"Invalid path {raw!r}: {exc}")
    if rel.split("/", 1)[0] == ".git":
        raise UsageError(f"{raw}: inside the .git directory")
    return rel


def disk_path(root: str, path: str) -> str:
    """Return the filesystem path of index path *path*."""
    return os.path.join(root, *path.split("/"))


def lstat_or_none(root: str, path: str) -> os.stat_result | None:
    """``os.lstat`` the index path *path*, or ``None`` if nothing is there.

    Any other failure (e.g. a permission error) raises ``StatError``.
    """
    try:
        return os.lstat(disk_path(root, path))
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise StatError(path, exc) from exc


def is_dir_on_disk(root: str, path: str) -> bool:
    st = lstat_or_none(root, path)
    return st is not None and stat.S_ISDIR(st.st_mode)


def is_regular_on_disk(root: str, path: str) -> bool:
    st = lstat_or_none(root, path)
    return st is not None and stat.S_ISREG(st.st_mode)


def join_index_path(directory: str, name: str) -> str:
    return posixpath.join(directory, name)


def basename(path: str) -> str:
    """Last segment of index path *path*."""
    return path.rsplit("/", 1)[-1]
