"""Index transactions: exclusive hold, snapshot, and atomic commit.

A transaction owns the ``index.lock`` file for the lifetime of a move
invocation.  The index is read once when the transaction begins; every
planning and classification step sees that snapshot.  Changes are applied
to the in-memory index and written out by :meth:`IndexTransaction.commit`,
which atomically replaces the canonical index.

Usage::

    from dulwich.repo import Repo
    from treemv.tx import IndexTransaction

    repo = Repo("work")
    with IndexTransaction.begin(repo) as tx:
        entry = tx.entry("old.txt")
        tx.remove_entry("old.txt")
        tx.set_entry("new.txt", entry)
        tx.commit()

Leaving the ``with`` block without committing aborts: the lock file is
removed and the canonical index is untouched.
"""

from __future__ import annotations

import os
from bisect import bisect_left
from typing import TYPE_CHECKING

from dulwich.file import FileLocked, GitFile
from dulwich.index import Index, write_index_dict
from dulwich.pack import SHA1Writer

from .exceptions import IndexLockedError, PersistenceError

if TYPE_CHECKING:
    from dulwich.index import IndexEntry
    from dulwich.objects import Blob
    from dulwich.repo import Repo

__all__ = ["IndexTransaction"]


class IndexTransaction:
    """Exclusive, single-use transaction over a work tree's index.

    With ``lock=False`` the index is only read (used by dry runs); such a
    transaction can be aborted but never committed.
    """

    def __init__(self, repo: Repo, *, lock: bool = True):
        self._repo = repo
        self.index_path = repo.index_path()
        self._lockfile = None
        self._done = False
        self.modified = False

        if lock:
            try:
                self._lockfile = GitFile(self.index_path, "wb")
            except FileLocked:
                raise IndexLockedError(
                    f"Unable to create '{self.index_path}.lock': File exists. "
                    "Another process may be running in this repository."
                )
        try:
            self.index = self._read_index()
        except BaseException:
            self.abort()
            raise

        # Snapshot of tracked paths taken at begin time, sorted by path.
        self.tracked: list[str] = sorted(os.fsdecode(p) for p in self.index)
        self._tracked_set = frozenset(self.tracked)

    @classmethod
    def begin(cls, repo: Repo, *, lock: bool = True) -> IndexTransaction:
        """Acquire the index lock (unless *lock* is False) and read the index."""
        return cls(repo, lock=lock)

    def __repr__(self) -> str:
        state = "done" if self._done else "open"
        return f"IndexTransaction({self.index_path!r}, {state})"

    def __enter__(self) -> IndexTransaction:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.abort()

    @property
    def root(self) -> str:
        """Path of the work tree."""
        return self._repo.path

    @property
    def locked(self) -> bool:
        return self._lockfile is not None and not self._done

    def _read_index(self) -> Index:
        if not os.path.exists(self.index_path):
            return Index(self.index_path, read=False)
        try:
            return Index(self.index_path)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"index file corrupt: {exc}") from exc

    # -- snapshot queries --------------------------------------------------

    def is_tracked(self, path: str) -> bool:
        """``True`` if *path* had an index entry when the transaction began."""
        return path in self._tracked_set

    def entries_under(self, directory: str) -> list[str]:
        """Tracked paths that have *directory* as a path-component prefix."""
        prefix = directory + "/"
        start = bisect_left(self.tracked, prefix)
        result = []
        for path in self.tracked[start:]:
            if not path.startswith(prefix):
                break
            result.append(path)
        return result

    # -- index mutation ----------------------------------------------------

    def entry(self, path: str) -> IndexEntry:
        """Return the current in-memory entry at *path* (``KeyError`` if none)."""
        return self.index[os.fsencode(path)]

    def has_entry(self, path: str) -> bool:
        return os.fsencode(path) in self.index

    def set_entry(self, path: str, entry: IndexEntry) -> None:
        self.index[os.fsencode(path)] = entry
        self.modified = True

    def remove_entry(self, path: str) -> None:
        del self.index[os.fsencode(path)]
        self.modified = True

    def add_blob(self, blob: Blob) -> None:
        """Store *blob* in the object store so index entries can refer to it."""
        if blob.id not in self._repo.object_store:
            self._repo.object_store.add_object(blob)

    # -- completion --------------------------------------------------------

    def commit(self) -> bool:
        """Write the index if it was modified, then release the lock.

        Returns ``True`` if the canonical index was replaced.  Raises
        ``PersistenceError`` if serialization or the atomic rename fails; the
        previous index is left intact in that case.
        """
        if self._done:
            raise PersistenceError("Transaction already finished")
        if self._lockfile is None:
            raise PersistenceError("Cannot commit a read-only transaction")
        if not self.modified:
            self.abort()
            return False

        entries = {path: self.index[path] for path in self.index}
        try:
            writer = SHA1Writer(self._lockfile)
            write_index_dict(
                writer, entries, version=getattr(self.index, "_version", None)
            )
            writer.close()
        except Exception as exc:
            self._lockfile.abort()
            self._done = True
            raise PersistenceError(
                f"Unable to write new index file: {exc}"
            ) from exc
        self._done = True
        return True

    def abort(self) -> None:
        """Release the lock without touching the index.  Idempotent."""
        if self._done:
            return
        self._done = True
        if self._lockfile is not None:
            self._lockfile.abort()
