"""Git operations service: branch deletion"""

from contextlib import contextmanager
from typing import Optional, Sequence

from git_prune_branches.exceptions import CommandTimeoutError, ProcessFailure
from git_prune_branches.models.branch import DeletionFailure, DeletionResult
from git_prune_branches.services.git.runner import GitRunner
from git_prune_branches.logging_config import get_logger

logger = get_logger(__name__)


def delete_command(branch_name: str, force: bool = False) -> list:
    """Argument vector that deletes a local branch."""
    return ["branch", "-D" if force else "-d", branch_name]


class GitOperations:
    """Service for git operations that modify the repository."""

    def __init__(self, runner: GitRunner):
        """Initialize the service.

        Args:
            runner: GitRunner bound to the repository
        """
        self.runner = runner
        self.in_git_operation = False  # Stays set when a deletion is interrupted

    @contextmanager
    def _git_operation(self):
        """Context manager to track git operations.

        The flag is only cleared when the block completes, so an interrupt
        (KeyboardInterrupt) raised mid-operation leaves it set for the
        caller to report.
        """
        self.in_git_operation = True
        yield
        self.in_git_operation = False

    def delete_branch(self, branch_name: str, force: bool = False) -> Optional[str]:
        """Delete one local branch.

        Args:
            branch_name: Branch to delete
            force: Use ``-D`` instead of ``-d``

        Returns:
            None on success, otherwise git's error message
        """
        with self._git_operation():
            try:
                self.runner.run(*delete_command(branch_name, force))
            except (ProcessFailure, CommandTimeoutError) as e:
                error = e.stderr if isinstance(e, ProcessFailure) and e.stderr else str(e)
                logger.info(f"Failed to delete branch {branch_name}: {error}")
                return error

        logger.info(f"Deleted branch {branch_name}{' (forced)' if force else ''}")
        return None

    def delete_branches(
        self, safe: Sequence[str], force: Sequence[str] = ()
    ) -> DeletionResult:
        """Delete the queued branches, each attempt independent of the others.

        Args:
            safe: Branches deleted with ``git branch -d``
            force: Branches deleted with ``git branch -D``

        Returns:
            DeletionResult listing deleted branches and per-branch failures
        """
        result = DeletionResult()
        if not safe and not force:
            return result

        queue = [(name, False) for name in safe] + [(name, True) for name in force]
        for branch_name, forced in queue:
            error = self.delete_branch(branch_name, force=forced)
            if error is None:
                result.deleted.append(branch_name)
            else:
                result.failed.append(DeletionFailure(branch=branch_name, error=error))

        return result
