"""Service for classifying local branches into deletion groups.

Everything here is a pure function of the collected RepositoryFacts: the
same facts always produce the same groups, in the same order.
"""

from datetime import datetime
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Union, TYPE_CHECKING

from git_prune_branches.constants import DEFAULT_PROTECTED_BRANCHES, REMOTE_REFS_PREFIX
from git_prune_branches.exceptions import EmptyRemoteError
from git_prune_branches.formatters.status import (
    CAUSE_LOCAL_ONLY,
    CAUSE_REMOTE_DELETED,
    format_branch_reason,
    format_info_reason,
)
from git_prune_branches.models.branch import (
    BranchClassification,
    LocalBranch,
    RepositoryFacts,
    UpstreamLink,
)
from git_prune_branches.utils.lines import ordered_unique
from git_prune_branches.logging_config import get_logger

if TYPE_CHECKING:
    from git_prune_branches.config import Config

logger = get_logger(__name__)


def find_orphaned_branches(branches: Iterable[LocalBranch], remote: str) -> List[UpstreamLink]:
    """Find local branches whose upstream lives on ``remote``.

    The remote segment must equal ``remote`` exactly: a branch tracking
    ``origin2`` is not orphaned from ``origin``, and branches tracking other
    remotes or local branches are ignored.
    """
    base = f"{REMOTE_REFS_PREFIX}{remote}"
    links = []
    for branch in branches:
        upstream = branch.upstream
        if upstream == base:
            links.append(UpstreamLink(branch.name, ""))
        elif upstream.startswith(base + "/"):
            links.append(UpstreamLink(branch.name, upstream[len(base) + 1:]))
    return links


def find_never_pushed_branches(branches: Iterable[LocalBranch]) -> List[str]:
    """Find local branches without any configured upstream."""
    return [branch.name for branch in branches if not branch.has_upstream]


def find_stale_branches(
    orphaned: Iterable[UpstreamLink], remote_tracking: FrozenSet[str]
) -> List[str]:
    """Find orphaned branches whose remote branch is gone from the cached refs."""
    return [link.local_branch for link in orphaned if link.remote_branch not in remote_tracking]


def _finish_group(
    candidates: Iterable[str], excluded: FrozenSet[str], taken: Set[str]
) -> List[str]:
    """Deduplicate a group and drop excluded or already placed branches."""
    group = [name for name in ordered_unique(candidates) if name not in excluded and name not in taken]
    taken.update(group)
    return group


def build_reasons(
    classification: BranchClassification,
    remote: str,
    last_commit_times: Dict[str, int],
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """Build the one-line reason shown next to every classified branch."""
    stale = set(classification.stale)
    never_pushed = set(classification.never_pushed)

    def cause_of(branch_name: str) -> Optional[str]:
        if branch_name in stale:
            return CAUSE_REMOTE_DELETED
        if branch_name in never_pushed:
            return CAUSE_LOCAL_ONLY
        return None

    reasons: Dict[str, str] = {}
    for name in classification.safe_to_delete:
        reasons[name] = format_branch_reason(True, cause_of(name), last_commit_times.get(name), now)
    for name in classification.requires_force:
        reasons[name] = format_branch_reason(False, cause_of(name), last_commit_times.get(name), now)

    remote_names = {link.local_branch: link.remote_branch for link in classification.orphaned}
    for name in classification.info_only:
        reasons[name] = format_info_reason(
            remote, remote_names.get(name, ""), last_commit_times.get(name), now
        )
    return reasons


def classify_branches(
    facts: RepositoryFacts,
    protected_branches: Iterable[str] = DEFAULT_PROTECTED_BRANCHES,
    now: Optional[datetime] = None,
) -> BranchClassification:
    """Partition the local branches of ``facts`` into deletion groups.

    Precedence is safe, then force, then info-only; a branch lands in at
    most one group. The current branch and protected branches never land
    in any group.

    Args:
        facts: Collected repository facts
        protected_branches: Names that are never classified
        now: Reference time for the ages in the reasons

    Raises:
        EmptyRemoteError: no remote name is configured
    """
    remote = facts.remote
    if not remote:
        raise EmptyRemoteError()

    orphaned = find_orphaned_branches(facts.local_branches, remote)
    never_pushed = find_never_pushed_branches(facts.local_branches)
    stale = find_stale_branches(orphaned, facts.remote_tracking)
    merged, unmerged = facts.merged, facts.unmerged

    excluded = frozenset(protected_branches) | {facts.current_branch}
    taken: Set[str] = set()
    safe_to_delete = _finish_group(
        [b for b in stale if b not in unmerged]
        + [b for b in never_pushed if b in merged and b not in unmerged],
        excluded,
        taken,
    )
    requires_force = _finish_group(
        [b for b in stale if b in unmerged] + [b for b in never_pushed if b in unmerged],
        excluded,
        taken,
    )
    info_only = _finish_group(
        [
            link.local_branch
            for link in orphaned
            if link.is_renamed and facts.live.contains(link.remote_branch)
        ],
        excluded,
        taken,
    )

    classification = BranchClassification(
        safe_to_delete=safe_to_delete,
        requires_force=requires_force,
        info_only=info_only,
        orphaned=orphaned,
        stale=stale,
        never_pushed=never_pushed,
        current_branch=facts.current_branch,
        no_connection=facts.no_connection,
    )
    classification.reasons = build_reasons(classification, remote, facts.last_commit_times, now)

    logger.debug(
        f"Classified {len(facts.local_branches)} branches: "
        f"{len(safe_to_delete)} safe, {len(requires_force)} force, {len(info_only)} info-only"
    )
    return classification


class ClassificationService:
    """Service for classifying branches into safe, force and info-only groups."""

    def __init__(self, config: Union["Config", dict]):
        """Initialize the service."""
        self.config = config
        self.remote = config.get("remote", "")
        self.protected_branches = frozenset(
            config.get("protected_branches", DEFAULT_PROTECTED_BRANCHES)
        )

    def classify(
        self, facts: RepositoryFacts, now: Optional[datetime] = None
    ) -> BranchClassification:
        """Classify ``facts`` with the configured protected branches.

        Raises:
            EmptyRemoteError: no remote name is configured
        """
        if not self.remote:
            raise EmptyRemoteError()
        return classify_branches(facts, self.protected_branches, now=now)
