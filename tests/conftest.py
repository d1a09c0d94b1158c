"""Pytest fixtures for git-prune-branches tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_prune_branches.services.git.runner import GitRunner


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_runner():
    """Create a GitRunner mock; tests set run.return_value or run.side_effect."""
    runner = Mock(spec=GitRunner)
    runner.repo_path = "/fake/repo"
    runner.run.return_value = ""
    return runner


@pytest.fixture
def remote_path(temp_dir):
    """Create a bare repository used as the 'origin' remote."""
    path = temp_dir / "remote.git"
    remote = git.Repo.init(str(path), bare=True)
    remote.close()
    return path


def commit_file(repo, name, content, message):
    """Write a file in the working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def git_repo(temp_dir, remote_path):
    """Create a real Git repository with 'main' pushed to a local bare 'origin'."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    # Create initial commit on main branch
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    repo.git.branch("-M", "main")

    repo.create_remote("origin", str(remote_path))
    repo.git.push("-u", "origin", "main")

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a repository with one branch of each kind.

    - feature/x: pushed, merged into main, then deleted on the remote (safe)
    - wip/y: never pushed, has a commit main lacks (force)
    - renamed-local: pushed as renamed-remote, renamed locally (info only)
    """
    repo = git_repo

    # Merged branch whose remote branch was deleted
    repo.git.checkout("-b", "feature/x")
    commit_file(repo, "feature.txt", "feature\n", "Add feature")
    repo.git.push("-u", "origin", "feature/x")
    repo.git.checkout("main")
    repo.git.merge("--no-ff", "feature/x", "-m", "Merge feature/x")
    repo.git.push("origin", "main")
    repo.git.push("origin", "--delete", "feature/x")

    # Unmerged branch that was never pushed
    repo.git.checkout("-b", "wip/y")
    commit_file(repo, "wip.txt", "wip\n", "Work in progress")
    repo.git.checkout("main")

    # Branch renamed locally while the original still exists on the remote
    repo.git.checkout("-b", "renamed-remote")
    commit_file(repo, "renamed.txt", "renamed\n", "Renamed work")
    repo.git.push("-u", "origin", "renamed-remote")
    repo.git.branch("-m", "renamed-remote", "renamed-local")

    repo.git.checkout("main")
    return repo
