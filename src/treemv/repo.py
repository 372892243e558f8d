"""WorkTree: a git working tree whose tracked paths can be moved."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

from .exceptions import NotATreeError
from .tx import IndexTransaction

if TYPE_CHECKING:
    from .move._types import MoveReport


class WorkTree:
    """A non-bare git repository: work tree plus index."""

    def __init__(self, dulwich_repo: Repo):
        self._repo = dulwich_repo

    def __repr__(self) -> str:
        return f"WorkTree({self.path!r})"

    @property
    def path(self) -> str:
        """Root directory of the work tree."""
        return self._repo.path

    @classmethod
    def open(cls, path: str | Path) -> WorkTree:
        """Open the work tree rooted at *path*.

        Raises:
            NotATreeError: *path* is not a git repository, or is bare.
        """
        try:
            repo = Repo(str(path))
        except NotGitRepository:
            raise NotATreeError(f"Not a git repository: {path}")
        return cls._checked(repo, path)

    @classmethod
    def discover(cls, start: str | Path = ".") -> WorkTree:
        """Find the work tree containing *start*, searching upwards."""
        try:
            repo = Repo.discover(str(start))
        except NotGitRepository:
            raise NotATreeError(
                f"Not a git repository (or any of the parent directories): {start}"
            )
        return cls._checked(repo, start)

    @classmethod
    def _checked(cls, repo: Repo, path) -> WorkTree:
        if repo.bare:
            repo.close()
            raise NotATreeError(f"Bare repository has no work tree: {path}")
        return cls(repo)

    def close(self) -> None:
        self._repo.close()

    def __enter__(self) -> WorkTree:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def ls_files(self) -> list[str]:
        """Return the sorted list of tracked paths."""
        with IndexTransaction.begin(self._repo, lock=False) as tx:
            return list(tx.tracked)

    def move(
        self,
        sources: str | os.PathLike[str] | list[str | os.PathLike[str]],
        dest: str | os.PathLike[str],
        *,
        cwd: str | os.PathLike[str] | None = None,
        dry_run: bool = False,
        force: bool = False,
        ignore_errors: bool = False,
    ) -> MoveReport:
        """Move or rename tracked files and directories.

        Relative paths are resolved against *cwd* (default: the current
        directory).  When *dest* is an existing directory every source is
        moved into it; otherwise exactly one source is renamed to *dest*.

        Args:
            sources: Path(s) to move.
            dest: Destination path.
            cwd: Directory relative arguments are resolved against.
            dry_run: Report what would happen without touching anything.
            force: Allow overwriting existing regular files.
            ignore_errors: Skip invalid operations instead of aborting.

        Returns:
            A :class:`~treemv.move.MoveReport`.

        Raises:
            UsageError: Malformed invocation.
            ValidationError: A conflict rule failed (without *ignore_errors*).
            FilesystemError: A rename failed (without *ignore_errors*).
            PersistenceError: The index could not be locked or written.
        """
        from .move._ops import _move
        return _move(
            self._repo, sources, dest, cwd=cwd, dry_run=dry_run,
            force=force, ignore_errors=ignore_errors,
        )
