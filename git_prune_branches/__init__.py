"""
git-prune-branches - Clean up local branches whose remote is gone or that were never pushed
"""

from .__version__ import __version__
from .core import BranchPruner
from .cli.main import main

__all__ = ["BranchPruner", "main", "__version__"]
