"""Move tracked paths within a git work tree.

Public API::

    from treemv.move import MoveReport, MoveMode, Operation
"""

from ._types import (  # noqa: F401
    ChangeAction,
    ChangeActionKind,
    ChangeError,
    MoveMode,
    MoveReport,
    Operation,
    Rename,
)
from ._resolve import plan_moves  # noqa: F401
from ._check import classify_moves  # noqa: F401
from ._ops import execute_moves  # noqa: F401
from ._io import commit_changes  # noqa: F401

__all__ = [
    "ChangeAction", "ChangeActionKind", "ChangeError",
    "MoveMode", "MoveReport", "Operation", "Rename",
    "plan_moves", "classify_moves", "execute_moves", "commit_changes",
]
