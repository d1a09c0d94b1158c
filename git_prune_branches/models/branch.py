"""Branch models and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional


class BranchGroup(Enum):
    """Disposition of a classified branch. Unclassified branches are kept."""
    SAFE = "safe"
    FORCE = "force"
    INFO = "info"


@dataclass(frozen=True)
class LocalBranch:
    """A local branch and its configured upstream ref ("" when never pushed)."""
    name: str
    upstream: str = ""

    @property
    def has_upstream(self) -> bool:
        return bool(self.upstream)


@dataclass(frozen=True)
class UpstreamLink:
    """A local branch that tracks a branch on the configured remote."""
    local_branch: str
    remote_branch: str  # "" when the upstream ref could not be parsed

    @property
    def is_renamed(self) -> bool:
        return self.local_branch != self.remote_branch


@dataclass(frozen=True)
class LiveBranchScan:
    """Branches confirmed on the remote host.

    ``branches`` is None when the remote could not be reached or is not
    configured: the live set is unknown, not empty.
    """
    branches: Optional[FrozenSet[str]]
    no_connection: bool = False

    @classmethod
    def unknown(cls) -> "LiveBranchScan":
        return cls(branches=None, no_connection=True)

    @property
    def is_known(self) -> bool:
        return self.branches is not None

    def contains(self, branch_name: str) -> bool:
        return self.is_known and branch_name in self.branches


@dataclass
class RepositoryFacts:
    """Everything collected from git for one classification pass."""
    remote: str
    current_branch: str = ""
    local_branches: List[LocalBranch] = field(default_factory=list)
    merged: FrozenSet[str] = frozenset()
    unmerged: FrozenSet[str] = frozenset()
    remote_tracking: FrozenSet[str] = frozenset()
    live: LiveBranchScan = field(default_factory=LiveBranchScan.unknown)
    last_commit_times: Dict[str, int] = field(default_factory=dict)
    fetch_failed: bool = False

    @property
    def no_connection(self) -> bool:
        return self.fetch_failed or self.live.no_connection


@dataclass
class BranchClassification:
    """Result of classifying the local branches of a repository."""
    safe_to_delete: List[str] = field(default_factory=list)
    requires_force: List[str] = field(default_factory=list)
    info_only: List[str] = field(default_factory=list)
    reasons: Dict[str, str] = field(default_factory=dict)
    orphaned: List[UpstreamLink] = field(default_factory=list)
    stale: List[str] = field(default_factory=list)
    never_pushed: List[str] = field(default_factory=list)
    current_branch: str = ""
    no_connection: bool = False

    @property
    def deletable(self) -> List[str]:
        return self.safe_to_delete + self.requires_force

    @property
    def is_empty(self) -> bool:
        return not (self.safe_to_delete or self.requires_force or self.info_only)

    def group_of(self, branch_name: str) -> Optional[BranchGroup]:
        """Return the group a branch was placed in, or None when it is kept."""
        if branch_name in self.safe_to_delete:
            return BranchGroup.SAFE
        if branch_name in self.requires_force:
            return BranchGroup.FORCE
        if branch_name in self.info_only:
            return BranchGroup.INFO
        return None

    def reason_for(self, branch_name: str) -> str:
        return self.reasons.get(branch_name, "")


@dataclass(frozen=True)
class DeletionFailure:
    """A branch that git refused to delete, with git's message."""
    branch: str
    error: str


@dataclass
class DeletionResult:
    """Outcome of one batch of deletions."""
    deleted: List[str] = field(default_factory=list)
    failed: List[DeletionFailure] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def failed_branches(self) -> List[str]:
        return [failure.branch for failure in self.failed]

    @property
    def ok(self) -> bool:
        return not self.failed

    def merge_retry(self, retry: "DeletionResult") -> "DeletionResult":
        """Combine this first pass with a forced retry of some of its failures.

        Branches deleted by either pass count as deleted; failures are those
        the retry still could not delete plus first-pass failures that were
        not retried.
        """
        retried = {failure.branch for failure in retry.failed} | set(retry.deleted)
        remaining = [failure for failure in self.failed if failure.branch not in retried]
        return DeletionResult(
            deleted=self.deleted + retry.deleted,
            failed=retry.failed + remaining,
        )
