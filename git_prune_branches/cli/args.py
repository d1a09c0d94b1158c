"""Command-line argument parsing for git-prune-branches."""

import argparse
from typing import Optional, Sequence

from git_prune_branches.__version__ import __version__
from git_prune_branches.constants import DEFAULT_PROTECTED_BRANCHES, DEFAULT_REMOTE


def positive_float(value: str) -> float:
    """argparse type for strictly positive numbers."""
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-prune-branches",
        description="Delete local branches that were merged, or whose remote branch is gone",
        epilog="Branches are classified as safe to delete (merged), requiring force "
        "(unmerged) or info only (renamed locally, original still on the remote).",
    )
    parser.add_argument("--version", action="version", version=f"git-prune-branches {__version__}")
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Preview mode - show the delete commands without running them",
    )
    parser.add_argument(
        "-p",
        "--prune-all",
        action="store_true",
        help="Delete every safe branch (and force branches with --force) without prompting",
    )
    parser.add_argument(
        "-f", "--force", action="store_true", help="Delete selected branches with 'git branch -D'"
    )
    parser.add_argument(
        "-r",
        "--remote",
        default=DEFAULT_REMOTE,
        help=f"Remote whose branches are authoritative (default: {DEFAULT_REMOTE})",
    )
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompts")
    parser.add_argument(
        "--protected",
        metavar="BRANCHES",
        help="Comma-separated branches that are never deleted "
        f"(default: {','.join(DEFAULT_PROTECTED_BRANCHES)})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run the git queries one after another instead of in parallel",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel workers for the git queries (default: auto-detect)",
    )
    parser.add_argument(
        "--git-timeout",
        type=positive_float,
        metavar="SECONDS",
        help="Kill git commands that take longer than this (default: no limit)",
    )

    return parser.parse_args(argv)
