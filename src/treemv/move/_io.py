"""Index commit: apply the path buckets to the index and persist it."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from dulwich.index import blob_from_path_and_stat, index_entry_from_stat

from ..exceptions import PersistenceError
from ..tree import disk_path

if TYPE_CHECKING:
    from dulwich.index import IndexEntry

    from ..tx import IndexTransaction
    from ._types import MoveReport


def _entry_from_disk(tx: IndexTransaction, path: str) -> IndexEntry:
    """Hash the work-tree file at *path* into the object store and return a
    fresh index entry carrying its current stat data."""
    fs_path = os.fsencode(disk_path(tx.root, path))
    try:
        st = os.lstat(fs_path)
        blob = blob_from_path_and_stat(fs_path, st)
    except OSError as exc:
        raise PersistenceError(
            f"unable to add {path} to index: {exc.strerror or exc}"
        ) from exc
    tx.add_blob(blob)
    return index_entry_from_stat(st, blob.id)


def commit_changes(
    tx: IndexTransaction,
    report: MoveReport,
    carried: dict[str, str],
) -> bool:
    """Apply *report*'s buckets to the index and commit the transaction.

    *carried* maps destinations of detached operations to their sources;
    those entries are re-keyed unchanged since no work-tree file exists.

    Returns ``True`` if the index file was rewritten.
    """
    for path in report.update:
        if not tx.has_entry(path):
            raise PersistenceError(f"cache entry for {path} unknown")
        tx.set_entry(path, _entry_from_disk(tx, path))

    for path in report.add:
        source = carried.get(path)
        if source is not None:
            tx.set_entry(path, tx.entry(source))
        else:
            tx.set_entry(path, _entry_from_disk(tx, path))

    for path in report.delete:
        tx.remove_entry(path)

    return tx.commit()
