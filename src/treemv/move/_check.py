"""Classification: validate planned operations against the conflict rules."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

from ..exceptions import StatError, ValidationError
from ..tree import lstat_or_none
from ._types import ChangeError, MoveMode, MoveReport, Operation

if TYPE_CHECKING:
    from ..tx import IndexTransaction

OVERWRITE_WARNING = "destination exists; will overwrite!"


class _Claims:
    """Destinations claimed so far, remembering which group claimed them."""

    def __init__(self):
        self.claimed: dict[str, int] = {}
        self.overwritten: dict[str, int] = {}

    def release(self, group: int) -> None:
        for table in (self.claimed, self.overwritten):
            for path in [p for p, g in table.items() if g == group]:
                del table[path]


def _check_operation(
    tx: IndexTransaction,
    op: Operation,
    claims: _Claims,
    *,
    force: bool,
) -> tuple[str | None, bool]:
    """Return ``(problem, overwrite)`` for *op*; problem is ``None`` if valid.

    An ``INDEX_ONLY`` child whose source is missing from disk is switched
    to ``DETACHED`` instead of failing.
    """
    if op.problem:
        return op.problem, False

    root = tx.root
    try:
        src_st = lstat_or_none(root, op.source)
    except StatError:
        return "bad source", False
    if src_st is None:
        if op.mode is MoveMode.INDEX_ONLY:
            op.mode = MoveMode.DETACHED
        elif op.mode is not MoveMode.DETACHED:
            return "bad source", False

    overwrite = False
    try:
        dst_st = lstat_or_none(root, op.destination)
    except StatError:
        return "bad destination", False
    if dst_st is not None:
        if op.mode is MoveMode.DIRECTORY:
            return "cannot move directory over file", False
        if not force:
            return "destination exists", False
        # only regular files can be overwritten
        if not stat.S_ISREG(dst_st.st_mode):
            return "cannot overwrite", False
        overwrite = True

    if (op.destination == op.source
            or op.destination.startswith(op.source + "/")):
        return "can not move directory into itself", False

    if op.mode is not MoveMode.DIRECTORY and not tx.is_tracked(op.source):
        return "not under version control", False

    if op.destination in claims.claimed:
        return "multiple sources for the same target", False
    return None, overwrite


def classify_moves(
    tx: IndexTransaction,
    operations: list[Operation],
    report: MoveReport,
    *,
    force: bool = False,
    ignore_errors: bool = False,
) -> tuple[list[Operation], set[str]]:
    """Filter *operations* through the conflict rules, in order.

    Returns ``(accepted, overwritten)``: the surviving operations in their
    original relative order, and the destinations that may be overwritten.

    Without *ignore_errors* the first failure raises ``ValidationError``
    before anything is touched.  With it, the failing operation is dropped
    together with every operation of the same group (a directory and its
    children) and the failure is recorded in ``report.errors``.
    """
    claims = _Claims()
    accepted: list[Operation] = []
    dropped: set[int] = set()
    warnings: dict[int, list[ChangeError]] = {}

    for op in operations:
        if op.group in dropped:
            continue
        problem, overwrite = _check_operation(tx, op, claims, force=force)
        if problem is None:
            claims.claimed[op.destination] = op.group
            if overwrite:
                claims.overwritten[op.destination] = op.group
                warnings.setdefault(op.group, []).append(
                    ChangeError(op.destination, OVERWRITE_WARNING)
                )
            accepted.append(op)
            continue

        error = ValidationError(problem, op.source, op.destination)
        if not ignore_errors:
            raise error
        report.errors.append(ChangeError(op.source, str(error)))
        dropped.add(op.group)
        claims.release(op.group)
        warnings.pop(op.group, None)
        accepted = [a for a in accepted if a.group != op.group]

    for group in sorted(warnings):
        report.warnings.extend(warnings[group])
    return accepted, set(claims.overwritten)
