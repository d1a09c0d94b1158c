"""Utility functions for git-prune-branches.

This package provides utility modules:
- lines: Splitting command output and order-preserving de-duplication
- threading: Worker count selection for the concurrent git queries
"""

from .lines import split_lines, ordered_unique
from .threading import is_free_threading_enabled, get_optimal_worker_count

__all__ = [
    # Lines
    "split_lines",
    "ordered_unique",
    # Threading
    "is_free_threading_enabled",
    "get_optimal_worker_count",
]
