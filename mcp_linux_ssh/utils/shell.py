"""Shell command safety utilities."""

import shlex
from collections.abc import Sequence


def quote_arg(arg: str) -> str:
    """Safely quote a shell argument.

    Args:
        arg: Argument to quote

    Returns:
        Shell-safe quoted argument
    """
    return shlex.quote(arg)


def join_command(argv: Sequence[str]) -> str:
    """Render an argument vector as a single shell-safe string.

    rsync's -e option takes the remote shell as one string that it splits
    itself, so every element must be quoted.

    Args:
        argv: Argument vector

    Returns:
        Space-joined, individually quoted command line
    """
    return " ".join(quote_arg(arg) for arg in argv)
