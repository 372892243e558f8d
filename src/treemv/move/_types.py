"""Data structures for move operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MoveMode(str, Enum):
    """How a planned operation touches the work tree and the index.

    Members:
        ``FILE``: rename on disk and re-key the index entry.
        ``DIRECTORY``: rename a whole directory on disk; its
            ``INDEX_ONLY`` children carry the index update.
        ``INDEX_ONLY``: index update only, the parent ``DIRECTORY``
            rename relocates the file.
        ``DETACHED``: index update only, the tracked file is missing
            from the work tree so there is nothing on disk to relocate.
    """
    FILE = "file"
    DIRECTORY = "directory"
    INDEX_ONLY = "index-only"
    DETACHED = "detached"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @property
    def renames_on_disk(self) -> bool:
        """``True`` if executing this mode calls ``os.rename``."""
        return self in (MoveMode.FILE, MoveMode.DIRECTORY)


@dataclass
class Operation:
    """One planned ``source -> destination`` move.

    Attributes:
        source: Index-relative source path.
        destination: Index-relative destination path.
        mode: :class:`MoveMode` of the operation.
        parent: Source of the ``DIRECTORY`` operation this child belongs
            to, or ``None``.
        problem: Rule violation found while planning, reported by the
            classifier.
        group: Position of the command-line source this operation was
            planned from; a directory and its children share it and are
            accepted or dropped together.
    """
    source: str
    destination: str
    mode: MoveMode = MoveMode.FILE
    parent: str | None = None
    problem: str | None = None
    group: int = 0


class ChangeActionKind(str, Enum):
    """Kind of change action: ``ADD``, ``UPDATE``, or ``DELETE``."""
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class ChangeAction:
    """A single add/update/delete action in a :class:`MoveReport`."""
    path: str
    action: ChangeActionKind


@dataclass
class ChangeError:
    """A path that failed, or raised a warning, during a move.

    Attributes:
        path: The source path of the offending operation.
        error: Human-readable message naming the rule or OS error.
    """
    path: str
    error: str


@dataclass
class Rename:
    """An accepted ``source -> destination`` rename."""
    source: str
    destination: str

    def __str__(self) -> str:
        return f"Renaming {self.source} to {self.destination}"


@dataclass
class MoveReport:
    """Result of a move invocation.

    The three path buckets are mutually exclusive per path and free of
    duplicates, in the order the executor filled them.

    Attributes:
        add: Destinations that become new index entries (Added).
        update: Overwritten destinations whose entries are refreshed
            (Changed).
        delete: Source paths removed from the index (Deleted).
        renames: Accepted operations, in execution order.
        errors: Operations dropped under ignore-errors mode.
        warnings: Non-fatal warnings (e.g. overwrites).
        dry_run: ``True`` if nothing was touched.
        index_written: ``True`` if the index file was replaced.
    """
    add: list[str] = field(default_factory=list)
    update: list[str] = field(default_factory=list)
    delete: list[str] = field(default_factory=list)
    renames: list[Rename] = field(default_factory=list)
    errors: list[ChangeError] = field(default_factory=list)
    warnings: list[ChangeError] = field(default_factory=list)
    dry_run: bool = False
    index_written: bool = False

    @property
    def in_sync(self) -> bool:
        """``True`` if there are no add, update, or delete actions."""
        return not self.add and not self.update and not self.delete

    @property
    def total(self) -> int:
        """Total number of add + update + delete actions."""
        return len(self.add) + len(self.update) + len(self.delete)

    def actions(self) -> list[ChangeAction]:
        """Return all actions as a flat list sorted by path."""
        result: list[ChangeAction] = []
        for p in self.add:
            result.append(ChangeAction(path=p, action=ChangeActionKind.ADD))
        for p in self.update:
            result.append(ChangeAction(path=p, action=ChangeActionKind.UPDATE))
        for p in self.delete:
            result.append(ChangeAction(path=p, action=ChangeActionKind.DELETE))
        result.sort(key=lambda a: a.path)
        return result
