"""Branch name and delete command formatting utilities."""

import re
from typing import List, Sequence

_NEEDS_QUOTING = re.compile(r"[\s\"'`\\]")
_ESCAPE_IN_QUOTES = re.compile(r"([\"\\$`])")


def display_branch_name(branch: str) -> str:
    """
    Render a branch name so a shown command can be copy-pasted into a shell.

    Only used for display; deletions pass the name to git as its own argv
    element and never go through a shell.

    Args:
        branch: Branch name

    Returns:
        The name, double-quoted and escaped when it contains whitespace,
        quotes, backticks or backslashes
    """
    if _NEEDS_QUOTING.search(branch):
        return '"' + _ESCAPE_IN_QUOTES.sub(r"\\\1", branch) + '"'
    return branch


def format_delete_command(branch: str, force: bool = False) -> str:
    """Format the git command that deletes a branch."""
    flag = "-D" if force else "-d"
    return f"git branch {flag} {display_branch_name(branch)}"


def format_delete_commands(safe: Sequence[str], force: Sequence[str]) -> List[str]:
    """Format the commands for a whole deletion queue, safe deletions first."""
    return [format_delete_command(b) for b in safe] + [
        format_delete_command(b, force=True) for b in force
    ]
