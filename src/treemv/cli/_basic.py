"""Basic commands: mv, ls."""

from __future__ import annotations

import click

from ..exceptions import MoveError, UsageError
from ._helpers import (
    main,
    _dry_run_option,
    _open_tree,
    _repo_option,
    _status,
)

_BUCKET_PREFIX = {"update": "~", "add": "+", "delete": "-"}


# ---------------------------------------------------------------------------
# mv
# ---------------------------------------------------------------------------

@main.command()
@_repo_option
@click.argument("args", nargs=-1, required=True, type=click.Path())
@_dry_run_option
@click.option("-f", "--force", is_flag=True, default=False,
              help="Overwrite existing regular files at the destination.")
@click.option("-k", "--ignore-errors", is_flag=True, default=False,
              help="Skip moves that would fail instead of aborting.")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Report each accepted move.")
@click.pass_context
def mv(ctx, args, dry_run, force, ignore_errors, verbose):
    """Move or rename tracked files and directories.

    The last argument is the destination.  With several sources it must
    be an existing directory; every source is moved into it.

    \b
    Examples:
        treemv mv old.txt new.txt          # rename
        treemv mv a.txt b.txt docs/        # move into directory
        treemv mv src lib                  # move whole directory
        treemv mv -f draft.txt final.txt   # overwrite final.txt
        treemv mv -k *.txt archive/        # skip what cannot move
        treemv mv -n old.txt new.txt       # dry run
    """
    if verbose:
        ctx.obj["verbose"] = True
    if len(args) < 2:
        raise click.UsageError("mv requires at least two arguments (SOURCE... DEST)")

    tree = _open_tree(ctx)
    # With --repo, relative paths name paths inside that work tree.
    cwd = tree.path if ctx.obj.get("repo_path") else None
    try:
        report = tree.move(
            list(args[:-1]), args[-1], cwd=cwd, dry_run=dry_run,
            force=force, ignore_errors=ignore_errors,
        )
    except UsageError as exc:
        raise click.UsageError(str(exc))
    except MoveError as exc:
        raise click.ClickException(str(exc))
    finally:
        tree.close()

    for warning in report.warnings:
        click.echo(f"Warning: {warning.error} ({warning.path})", err=True)
    for error in report.errors:
        click.echo(f"Skipped: {error.error}", err=True)

    if dry_run or ctx.obj.get("verbose"):
        for rename in report.renames:
            click.echo(str(rename))
    if dry_run:
        for action in report.actions():
            click.echo(f"{_BUCKET_PREFIX[action.action.value]} {action.path}")
    else:
        _status(ctx, f"Moved {len(report.delete)} -> "
                     f"{len(report.add) + len(report.update)} path(s)")


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------

@main.command()
@_repo_option
@click.pass_context
def ls(ctx):
    """List tracked paths in index order."""
    tree = _open_tree(ctx)
    try:
        paths = tree.ls_files()
    except MoveError as exc:
        raise click.ClickException(str(exc))
    finally:
        tree.close()
    for path in paths:
        click.echo(path)
