"""``treemv`` console script; click ships in the optional ``cli`` extra."""

import sys


def main():
    try:
        from .cli import main as cli_main
    except ImportError as exc:
        sys.stderr.write(
            f"treemv: command line support is not installed ({exc}).\n"
            "The library API (treemv.WorkTree) works without it; for the\n"
            "treemv command run:  pip install 'treemv[cli]'\n"
        )
        raise SystemExit(1)
    cli_main(prog_name="treemv")
