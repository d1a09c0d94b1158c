"""Custom exceptions for git-prune-branches"""

from typing import Optional, Sequence

from git_prune_branches.constants import EMPTY_REMOTE_ERROR_CODE, GIT_FATAL_EXIT_CODE


class GitPruneBranchesError(Exception):
    """Base exception for all git-prune-branches errors."""
    pass


class ProcessFailure(GitPruneBranchesError):
    """Exception raised when a git command exits with a nonzero status."""

    def __init__(self, command: Sequence[str], exit_code: int, stderr: Optional[str] = None):
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr or ""

        error_msg = f"Command '{' '.join(self.command)}' failed (exit {exit_code})"
        if self.stderr:
            error_msg += f": {self.stderr}"

        super().__init__(error_msg)

    @property
    def is_fatal(self) -> bool:
        """True when git reported a repository-level failure."""
        return self.exit_code == GIT_FATAL_EXIT_CODE


class CommandTimeoutError(GitPruneBranchesError):
    """Exception raised when a git command was killed after the configured timeout."""

    def __init__(self, command: Sequence[str], timeout: float):
        self.command = list(command)
        self.timeout = timeout
        super().__init__(f"Command '{' '.join(self.command)}' did not complete in {timeout:g}s")


class EmptyRemoteError(GitPruneBranchesError):
    """Exception raised when no remote name is configured."""

    code = EMPTY_REMOTE_ERROR_CODE

    def __init__(self):
        super().__init__("Remote is empty. Please specify remote with -r parameter")


class NotAGitRepositoryError(GitPruneBranchesError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Not a git repository: {path}"
        if message:
            error_msg += f" ({message})"

        super().__init__(error_msg)
