"""Branch query service for git-prune-branches.

Each query runs one read-only git command and turns its output into a typed
fact about the repository. None of them modify state, so they may run
concurrently.
"""

import re
from typing import Dict, FrozenSet, List

from git_prune_branches.constants import (
    COMMIT_TIME_FORMAT,
    HEADS_PREFIX,
    SHORT_NAME_FORMAT,
    UPSTREAM_FORMAT,
)
from git_prune_branches.exceptions import (
    CommandTimeoutError,
    EmptyRemoteError,
    NotAGitRepositoryError,
    ProcessFailure,
)
from git_prune_branches.models.branch import LiveBranchScan, LocalBranch
from git_prune_branches.services.git.runner import GitRunner
from git_prune_branches.utils.lines import split_lines
from git_prune_branches.logging_config import get_logger

logger = get_logger(__name__)

_LS_REMOTE_HEAD = re.compile(r"refs/heads/(\S+)")
# Listed by `git branch` in place of a name while HEAD is detached or mid-rebase
_PSEUDO_BRANCH = re.compile(r"^\((HEAD detached|no branch)")


def is_pseudo_branch(name: str) -> bool:
    """True for git's "(HEAD detached at ...)" and "(no branch, ...)" entries."""
    return bool(_PSEUDO_BRANCH.match(name))


def parse_branch_line(line: str) -> LocalBranch:
    """Parse one ``<name>@{<upstream>}`` line.

    Git forbids ``@{`` inside ref names, so the first occurrence separates
    the branch name from its upstream.
    """
    name, sep, rest = line.partition("@{")
    if not sep:
        return LocalBranch(name=line.strip())
    upstream = rest[:-1] if rest.endswith("}") else rest
    return LocalBranch(name=name, upstream=upstream.strip())


def _branch_names(output: str) -> FrozenSet[str]:
    return frozenset(name for name in split_lines(output) if not is_pseudo_branch(name))


def parse_remote_tracking(lines: List[str], remote: str) -> FrozenSet[str]:
    """Keep the ``<remote>/<name>`` entries of ``git branch -r`` for one remote."""
    pattern = re.compile(rf"^{re.escape(remote)}/(\S+)")
    branches = set()
    for line in lines:
        match = pattern.match(line)
        if match:
            branches.add(match.group(1))
    return frozenset(branches)


def parse_ls_remote(lines: List[str]) -> FrozenSet[str]:
    """Extract branch names from ``git ls-remote -h`` output."""
    branches = set()
    for line in lines:
        match = _LS_REMOTE_HEAD.search(line)
        if match:
            branches.add(match.group(1))
    return frozenset(branches)


def parse_commit_times(lines: List[str]) -> Dict[str, int]:
    """Parse ``<name>|<unix seconds>`` lines, skipping malformed entries."""
    times: Dict[str, int] = {}
    for line in lines:
        name, sep, timestamp = line.rpartition("|")
        if not sep or not name:
            continue
        try:
            times[name] = int(timestamp)
        except ValueError:
            logger.debug(f"Ignoring commit time line without timestamp: {line!r}")
    return times


class BranchQueries:
    """Service for querying branch information."""

    def __init__(self, runner: GitRunner, remote: str):
        """Initialize the branch queries service.

        Args:
            runner: GitRunner bound to the repository
            remote: Name of the authoritative remote
        """
        self.runner = runner
        self.remote = remote

    def ensure_git_repository(self) -> str:
        """Return the repository top-level directory.

        Raises:
            NotAGitRepositoryError: the working directory is not inside a repository
        """
        try:
            return self.runner.run("rev-parse", "--show-toplevel")
        except ProcessFailure as e:
            raise NotAGitRepositoryError(self.runner.repo_path, e.stderr) from e

    def fetch_and_prune(self) -> bool:
        """Fetch from the remote and prune deleted remote-tracking refs.

        Returns:
            True on success, False when the fetch failed for any reason
        """
        try:
            self.runner.run("fetch", self.remote, "--prune")
            return True
        except (ProcessFailure, CommandTimeoutError) as e:
            logger.warning(f"Could not fetch from {self.remote!r}, using cached data: {e}")
            return False

    def get_current_branch(self) -> str:
        """Get the checked-out branch name ("" when it cannot be determined)."""
        try:
            return self.runner.run("branch", "--show-current")
        except ProcessFailure as e:
            logger.debug(f"Could not determine current branch: {e}")
            return ""

    def list_local_branches(self) -> List[LocalBranch]:
        """List local branches with their configured upstream refs."""
        output = self.runner.run("branch", UPSTREAM_FORMAT)
        branches = [parse_branch_line(line) for line in split_lines(output)]
        return [branch for branch in branches if not is_pseudo_branch(branch.name)]

    def list_merged_branches(self) -> FrozenSet[str]:
        """List branches fully contained in the current HEAD."""
        output = self.runner.run("branch", SHORT_NAME_FORMAT, "--merged")
        return _branch_names(output)

    def list_unmerged_branches(self) -> FrozenSet[str]:
        """List branches with commits not in the current HEAD."""
        output = self.runner.run("branch", SHORT_NAME_FORMAT, "--no-merged")
        return _branch_names(output)

    def list_remote_tracking_branches(self) -> FrozenSet[str]:
        """List cached remote-tracking branches of the configured remote."""
        output = self.runner.run("branch", "-r")
        return parse_remote_tracking(split_lines(output), self.remote)

    def has_remote(self) -> bool:
        """Check whether the configured remote exists, warning when it does not."""
        output = self.runner.run("remote", "-v")
        pattern = re.compile(rf"^{re.escape(self.remote)}\s")
        if any(pattern.match(line) for line in split_lines(output)):
            return True

        logger.warning(
            f'Unable to find remote "{self.remote}". Available remotes are:\n{output or "(none)"}'
        )
        return False

    def scan_live_branches(self) -> LiveBranchScan:
        """Ask the remote host which branches currently exist.

        Returns:
            LiveBranchScan with the branch names, or an unknown scan flagged
            ``no_connection`` when the remote is missing or unreachable

        Raises:
            EmptyRemoteError: no remote name is configured (before any command runs)
            ProcessFailure: git failed for a reason other than a lost connection
        """
        if not self.remote:
            raise EmptyRemoteError()

        if not self.has_remote():
            return LiveBranchScan.unknown()

        try:
            output = self.runner.run("ls-remote", "-h", self.remote)
        except ProcessFailure as e:
            if e.is_fatal:
                logger.warning(f"No connection to remote {self.remote!r}: {e.stderr}")
                return LiveBranchScan.unknown()
            raise

        return LiveBranchScan(branches=parse_ls_remote(split_lines(output)))

    def get_last_commit_times(self) -> Dict[str, int]:
        """Get the committer timestamp (unix seconds) of every local branch."""
        output = self.runner.run("for-each-ref", COMMIT_TIME_FORMAT, HEADS_PREFIX)
        return parse_commit_times(split_lines(output))
