"""Move execution and the end-to-end move invocation."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..exceptions import FilesystemError
from ..tree import disk_path
from ..tx import IndexTransaction
from ._check import classify_moves
from ._io import commit_changes
from ._resolve import plan_moves
from ._types import ChangeError, MoveMode, MoveReport, Operation, Rename

if TYPE_CHECKING:
    from dulwich.repo import Repo


def execute_moves(
    tx: IndexTransaction,
    operations: list[Operation],
    overwritten: set[str],
    report: MoveReport,
    *,
    dry_run: bool = False,
    ignore_errors: bool = False,
) -> dict[str, str]:
    """Rename accepted operations on disk and fill the path buckets.

    Only ``FILE`` and ``DIRECTORY`` operations touch the filesystem, and
    only when *dry_run* is off.  A failed rename raises ``FilesystemError``
    unless *ignore_errors* is set; then it is recorded in ``report.errors``
    and the operation, with any children of a failed directory, is left
    out of the buckets.

    Returns ``{destination: source}`` for detached operations.
    """
    root = tx.root
    failed: set[int] = set()
    carried: dict[str, str] = {}
    # insertion-ordered sets
    added: dict[str, None] = {}
    updated: dict[str, None] = {}
    deleted: dict[str, None] = {}

    for op in operations:
        if op.group in failed:
            continue
        if not dry_run and op.mode.renames_on_disk:
            try:
                os.rename(disk_path(root, op.source),
                          disk_path(root, op.destination))
            except OSError as exc:
                error = FilesystemError(op.source, op.destination, exc)
                if not ignore_errors:
                    raise error from exc
                report.errors.append(ChangeError(op.source, str(error)))
                failed.add(op.group)
                continue
        report.renames.append(Rename(op.source, op.destination))

        if op.mode is MoveMode.DIRECTORY:
            continue
        if op.mode is MoveMode.DETACHED:
            carried[op.destination] = op.source

        if tx.is_tracked(op.source):
            deleted[op.source] = None
            # an overwritten untracked file has no entry to refresh
            if op.destination in overwritten and tx.is_tracked(op.destination):
                updated[op.destination] = None
            else:
                added[op.destination] = None
        else:
            added[op.destination] = None

    report.add.extend(added)
    report.update.extend(updated)
    report.delete.extend(deleted)
    return carried


def _move(
    repo: Repo,
    sources: str | os.PathLike[str] | list[str | os.PathLike[str]],
    dest: str | os.PathLike[str],
    *,
    cwd: str | os.PathLike[str] | None = None,
    dry_run: bool = False,
    force: bool = False,
    ignore_errors: bool = False,
) -> MoveReport:
    """Move tracked paths within the work tree of *repo*. Returns ``MoveReport``.

    The index lock is held from before the snapshot is read until the new
    index is committed or the invocation fails.  Dry runs read the index
    without locking and never touch the work tree or the index.
    """
    if isinstance(sources, (str, os.PathLike)):
        sources = [sources]
    cwd = os.getcwd() if cwd is None else os.fspath(cwd)
    report = MoveReport(dry_run=dry_run)

    with IndexTransaction.begin(repo, lock=not dry_run) as tx:
        operations = plan_moves(tx, list(sources), dest, cwd=cwd)
        operations, overwritten = classify_moves(
            tx, operations, report, force=force, ignore_errors=ignore_errors,
        )
        carried = execute_moves(
            tx, operations, overwritten, report,
            dry_run=dry_run, ignore_errors=ignore_errors,
        )
        if not dry_run:
            report.index_written = commit_changes(tx, report, carried)
    return report
