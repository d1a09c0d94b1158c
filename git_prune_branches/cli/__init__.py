"""Command-line interface for git-prune-branches.

This package provides the CLI entry point, argument parsing and prompts.
"""

from .main import main
from .args import parse_args

__all__ = ["main", "parse_args"]
