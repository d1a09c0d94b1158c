"""Core functionality for git-prune-branches"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, Optional, Sequence, Union

from git_prune_branches.config import Config
from git_prune_branches.exceptions import EmptyRemoteError
from git_prune_branches.models.branch import BranchClassification, DeletionResult, RepositoryFacts
from git_prune_branches.services.classification_service import ClassificationService
from git_prune_branches.services.git import BranchQueries, GitOperations, GitRunner
from git_prune_branches.utils.threading import get_optimal_worker_count
from git_prune_branches.logging_config import get_logger

logger = get_logger(__name__)


class BranchPruner:
    """Collects branch facts, classifies branches and deletes the selected ones.

    Holds no state between runs: every call to ``classify`` starts from a
    fresh fetch and fresh queries.
    """

    def __init__(self, repo_path: str, config: Union[Config, dict]):
        """Initialize BranchPruner.

        Args:
            repo_path: Path to the git repository (or any directory inside it)
            config: Configuration dict or Config object
        """
        self.repo_path = repo_path
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.runner = GitRunner(repo_path, timeout=self.config.git_timeout)
        self.queries = BranchQueries(self.runner, self.config.remote)
        self.git_service = GitOperations(self.runner)
        self.classification_service = ClassificationService(self.config)

    def ensure_git_repository(self) -> str:
        """Verify the repository exists; returns its top-level directory."""
        return self.queries.ensure_git_repository()

    def collect_facts(self) -> RepositoryFacts:
        """Run the git queries that classification needs.

        The fetch and the queries every other fact depends on run first, one
        at a time; the remaining read-only queries run concurrently unless
        ``sequential`` is set.

        Raises:
            EmptyRemoteError: no remote is configured (before any network access)
        """
        if not self.config.remote:
            raise EmptyRemoteError()

        fetched = self.queries.fetch_and_prune()
        current_branch = self.queries.get_current_branch()
        local_branches = self.queries.list_local_branches()

        lookups: Dict[str, Callable] = {
            "live": self.queries.scan_live_branches,
            "merged": self.queries.list_merged_branches,
            "unmerged": self.queries.list_unmerged_branches,
            "remote_tracking": self.queries.list_remote_tracking_branches,
            "last_commit_times": self.queries.get_last_commit_times,
        }
        results = self._run_lookups(lookups)

        facts = RepositoryFacts(
            remote=self.config.remote,
            current_branch=current_branch,
            local_branches=local_branches,
            fetch_failed=not fetched,
            **results,
        )
        logger.debug(
            f"Collected facts: current={facts.current_branch!r}, "
            f"{len(facts.local_branches)} local branches, no_connection={facts.no_connection}"
        )
        return facts

    def _run_lookups(self, lookups: Dict[str, Callable]) -> Dict[str, object]:
        """Run independent read-only lookups, concurrently unless configured otherwise."""
        if self.config.sequential:
            return {key: lookup() for key, lookup in lookups.items()}

        max_workers = get_optimal_worker_count(self.config.workers, tasks=len(lookups))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {key: executor.submit(lookup) for key, lookup in lookups.items()}
            # result() re-raises the first failure in submission order
            return {key: future.result() for key, future in futures.items()}

    def classify(self, now: Optional[datetime] = None) -> BranchClassification:
        """Collect fresh facts and classify every local branch."""
        return self.classification_service.classify(self.collect_facts(), now=now)

    def delete_branches(self, safe: Sequence[str], force: Sequence[str] = ()) -> DeletionResult:
        """Delete the caller-selected branches.

        With ``force`` set in the configuration every branch is deleted with
        ``-D``.
        """
        if self.config.force:
            safe, force = [], list(safe) + list(force)
        logger.info(f"Deleting {len(safe)} branches safely and {len(force)} with force")
        return self.git_service.delete_branches(safe, force)

    def retry_failed(self, first_pass: DeletionResult, branches: Sequence[str]) -> DeletionResult:
        """Force-delete a subset of the branches that failed in ``first_pass``.

        Args:
            first_pass: Result of the first deletion attempt
            branches: Failed branches the operator chose to retry

        Returns:
            Combined result: first-pass and retry successes, remaining failures
        """
        failed = set(first_pass.failed_branches)
        retry = [name for name in branches if name in failed]
        logger.info(f"Retrying {len(retry)} failed deletions with force")
        return first_pass.merge_retry(self.git_service.delete_branches([], retry))
