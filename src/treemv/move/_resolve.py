"""Planning: expand source/destination arguments into per-path operations."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ..exceptions import StatError, UsageError
from ..tree import (
    basename,
    is_dir_on_disk,
    join_index_path,
    lstat_or_none,
    to_index_path,
)
from ._types import MoveMode, Operation

if TYPE_CHECKING:
    from ..tx import IndexTransaction


def _resolve_destinations(
    root: str, sources: list[str], dest: str, dest_arg: str
) -> list[str]:
    """Pair every source with its destination path.

    An existing directory destination receives each source under its
    basename; the work-tree root is passed as ``""``.  Any other destination
    is a plain rename, which only makes sense for a single source.
    """
    if dest == "" or is_dir_on_disk(root, dest):
        return [join_index_path(dest, basename(src)) for src in sources]
    if len(sources) != 1:
        raise UsageError(
            f"destination '{dest_arg}' is not a directory "
            f"(moving {len(sources)} sources needs an existing directory)"
        )
    return [dest]


def _expand_directory(
    tx: IndexTransaction, source: str, dest: str, group: int
) -> list[Operation]:
    """Expand a directory source into its rename plus one child per entry.

    The directory operation itself performs the single on-disk rename;
    every tracked entry below it becomes an ``INDEX_ONLY`` child with the
    directory prefix substituted.  Planning problems are attached to the
    directory operation for the classifier to report.
    """
    directory = Operation(source, dest, MoveMode.DIRECTORY, group=group)
    if tx.is_tracked(source):
        directory.problem = "source is a directory but is tracked as a file"
        return [directory]
    try:
        occupied = lstat_or_none(tx.root, dest) is not None
    except StatError:
        directory.problem = "bad destination"
        return [directory]
    if occupied:
        directory.problem = "cannot move directory over file"
        return [directory]

    children = tx.entries_under(source)
    if not children:
        directory.problem = "source directory is empty"
        return [directory]

    ops = [directory]
    for path in children:
        ops.append(Operation(
            path,
            dest + path[len(source):],
            MoveMode.INDEX_ONLY,
            parent=source,
            group=group,
        ))
    return ops


def plan_moves(
    tx: IndexTransaction,
    sources: list[str | os.PathLike[str]],
    dest: str | os.PathLike[str],
    *,
    cwd: str,
) -> list[Operation]:
    """Expand the raw arguments into a flat list of operations.

    Arguments are resolved against *cwd* and normalized to index-relative
    paths.  Nothing on disk or in the index is modified.

    Raises:
        UsageError: No sources, a path outside the work tree, or several
            sources with a destination that is not an existing directory.
        StatError: The destination cannot be examined.
    """
    if not sources:
        raise UsageError("mv requires at least one source and a destination")
    root = tx.root
    src_paths = [to_index_path(root, s, cwd) for s in sources]
    dest_path = to_index_path(root, dest, cwd, allow_root=True)
    destinations = _resolve_destinations(
        root, src_paths, dest_path, os.fspath(dest)
    )

    operations: list[Operation] = []
    for group, (src, dst) in enumerate(zip(src_paths, destinations)):
        try:
            is_dir = is_dir_on_disk(root, src)
        except StatError:
            # left as a plain move for the classifier to reject
            is_dir = False
        if is_dir:
            operations.extend(_expand_directory(tx, src, dst, group))
        else:
            operations.append(Operation(src, dst, group=group))
    return operations
