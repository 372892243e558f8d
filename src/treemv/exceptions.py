"""Exceptions for treemv."""


class MoveError(Exception):
    """Base class for every error raised by a move invocation."""


class NotATreeError(MoveError):
    """Raised when no git work tree can be found at the given location."""


class UsageError(MoveError):
    """Raised for a malformed invocation, before any work is done."""


class ValidationError(MoveError):
    """Raised when a planned operation breaks a conflict rule.

    Only raised when ignore-errors mode is off; otherwise the operation is
    dropped and the failure is recorded on the report.
    """

    def __init__(self, reason: str, source: str, destination: str):
        super().__init__(f"{reason}, source={source}, destination={destination}")
        self.reason = reason
        self.source = source
        self.destination = destination


class FilesystemError(MoveError):
    """Raised when renaming *source* to *destination* fails on disk."""

    def __init__(self, source: str, destination: str, error: OSError):
        super().__init__(
            f"renaming {source} to {destination} failed: "
            f"{error.strerror or error}"
        )
        self.source = source
        self.destination = destination


class StatError(MoveError):
    """Raised when a path cannot be examined for a reason other than absence.

    Typically a permission error on a parent directory.
    """

    def __init__(self, path: str, error: OSError):
        super().__init__(f"cannot stat {path}: {error.strerror or error}")
        self.path = path


class PersistenceError(MoveError):
    """Raised when the index cannot be serialized or committed.

    The previous index file is always left intact.
    """


class IndexLockedError(PersistenceError):
    """Raised when another process already holds the index lock.

    Remove a stale ``index.lock`` by hand if no other process is running.
    """
