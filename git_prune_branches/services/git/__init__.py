"""Git-related services for git-prune-branches."""

from .runner import GitRunner
from .branch_queries import BranchQueries
from .operations import GitOperations

__all__ = [
    "GitRunner",
    "BranchQueries",
    "GitOperations",
]
