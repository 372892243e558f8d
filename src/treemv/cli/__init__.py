"""treemv CLI: move tracked files in a git work tree."""

from ._helpers import main  # noqa: F401  (entry point)

# Import command modules to register Click commands with the main group.
from . import _basic  # noqa: F401
