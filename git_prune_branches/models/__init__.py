"""Data models for git-prune-branches."""

from .branch import (
    BranchClassification,
    BranchGroup,
    DeletionFailure,
    DeletionResult,
    LiveBranchScan,
    LocalBranch,
    RepositoryFacts,
    UpstreamLink,
)

__all__ = [
    "BranchClassification",
    "BranchGroup",
    "DeletionFailure",
    "DeletionResult",
    "LiveBranchScan",
    "LocalBranch",
    "RepositoryFacts",
    "UpstreamLink",
]
