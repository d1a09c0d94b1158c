"""Core orchestration for git-prune-branches."""

from .branch_pruner import BranchPruner

__all__ = ["BranchPruner"]
