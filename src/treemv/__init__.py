from .repo import WorkTree
from .tx import IndexTransaction
from .exceptions import (
    MoveError,
    NotATreeError,
    UsageError,
    ValidationError,
    FilesystemError,
    StatError,
    PersistenceError,
    IndexLockedError,
)
from .move import MoveReport, MoveMode, Operation, ChangeError, Rename

__all__ = [
    "WorkTree", "IndexTransaction",
    "MoveError", "NotATreeError", "UsageError", "ValidationError",
    "FilesystemError", "StatError", "PersistenceError", "IndexLockedError",
    "MoveReport", "MoveMode", "Operation", "ChangeError", "Rename",
]
