"""Command runner for git invocations."""

from typing import List, Optional

import git

from git_prune_branches.exceptions import CommandTimeoutError, ProcessFailure
from git_prune_branches.logging_config import get_logger

logger = get_logger(__name__)

# GitPython replaces stderr with this message when kill_after_timeout fires
_TIMEOUT_MARKER = "Timeout: the command"


def _clean_stream(value: Optional[str], label: str) -> str:
    """Undo GitPython's ``"\\n  stderr: '...'"`` decoration of captured output."""
    text = (value or "").strip()
    prefix = f"{label}: "
    if text.startswith(prefix):
        text = text[len(prefix):]
    if len(text) >= 2 and text[0] == "'" and text[-1] == "'":
        text = text[1:-1]
    return text.strip()


class GitRunner:
    """Runs git with an argument vector in a repository directory."""

    def __init__(self, repo_path: str, timeout: Optional[float] = None):
        """Initialize the runner.

        Args:
            repo_path: Directory the git commands run in
            timeout: Seconds after which a command is killed (None = no limit)
        """
        self.repo_path = repo_path
        self.timeout = timeout

    def _get_git(self) -> git.Git:
        """Get a fresh git.Git handle.

        A new handle per call keeps concurrent queries from sharing state;
        the handle is only a wrapper around the executable and the cwd.
        """
        return git.Git(self.repo_path)

    def run(self, *args: str) -> str:
        """Run ``git <args>`` and return its trimmed stdout.

        Args:
            *args: Arguments passed to git as separate argv elements

        Returns:
            Standard output with surrounding whitespace removed ("" is valid)

        Raises:
            ProcessFailure: git exited with a nonzero status or could not be started
            CommandTimeoutError: the command was killed after ``timeout`` seconds
        """
        command: List[str] = ["git", *args]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            output = self._get_git().execute(command, kill_after_timeout=self.timeout)
        except git.exc.GitCommandNotFound as e:
            raise ProcessFailure(command, 127, str(e)) from e
        except git.exc.GitCommandError as e:
            stderr = _clean_stream(e.stderr, "stderr")
            stdout = _clean_stream(e.stdout, "stdout")

            if self.timeout is not None and stderr.startswith(_TIMEOUT_MARKER):
                logger.debug(f"Timed out after {self.timeout}s: {' '.join(command)}")
                raise CommandTimeoutError(command, self.timeout) from e

            message = "\n".join(part for part in (stderr, stdout) if part)
            exit_code = e.status if isinstance(e.status, int) else 1
            logger.debug(f"Failed (exit {exit_code}): {' '.join(command)}: {message}")
            raise ProcessFailure(command, exit_code, message) from e

        return output.strip() if isinstance(output, str) else ""
