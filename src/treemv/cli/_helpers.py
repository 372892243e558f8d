"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import click

from ..exceptions import NotATreeError
from ..repo import WorkTree


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _store_repo(ctx, param, value):
    """Click callback: store --repo value in the context."""
    ctx.ensure_object(dict)
    if value is not None:
        ctx.obj["repo_path"] = value
    return value


def _repo_option(f):
    """Shared --repo/-r option decorator for all commands."""
    return click.option(
        "--repo", "-r", type=click.Path(file_okay=False), envvar="TREEMV_REPO",
        help="Path to the git work tree (or set TREEMV_REPO). "
             "Defaults to the repository containing the current directory.",
        expose_value=False, callback=_store_repo, is_eager=True,
    )(f)


def _dry_run_option(f):
    return click.option(
        "-n", "--dry-run", is_flag=True, default=False,
        help="Show what would happen without changing anything "
             "(the index lock is not taken).",
    )(f)


def _open_tree(ctx) -> WorkTree:
    """Open the --repo work tree, or discover one from the current directory."""
    repo_path = ctx.obj.get("repo_path")
    try:
        if repo_path:
            return WorkTree.open(repo_path)
        return WorkTree.discover()
    except NotATreeError as exc:
        raise click.ClickException(str(exc))


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--repo", "-r", type=click.Path(file_okay=False), envvar="TREEMV_REPO",
              help="Path to the git work tree (or set TREEMV_REPO).",
              expose_value=False, callback=_store_repo, is_eager=True)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """treemv: move tracked files in a git work tree.

    Renames files and directories on disk and updates the git index to
    match while holding the index lock.

    \b
    Quick start:
      treemv mv old.txt new.txt
      treemv mv a.txt b.txt docs/
      treemv mv -n src lib         # dry run
      treemv ls

    \b
    Set TREEMV_REPO or pass --repo to work outside the current repository.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
