"""Configuration handling for git-prune-branches"""

from dataclasses import dataclass, field
from typing import Optional, List

from git_prune_branches.constants import DEFAULT_PROTECTED_BRANCHES, DEFAULT_REMOTE


def parse_protected_branches(value: Optional[str]) -> List[str]:
    """Split a comma-separated ``--protected`` value into branch names.

    Args:
        value: Raw option value, e.g. ``"main, release"``

    Returns:
        List of stripped, non-empty names; the defaults when value is None
    """
    if value is None:
        return list(DEFAULT_PROTECTED_BRANCHES)
    return [name.strip() for name in value.split(",") if name.strip()]


@dataclass
class Config:
    """Configuration for git-prune-branches with validation."""

    # Remote whose branches are authoritative
    remote: str = DEFAULT_REMOTE

    # Branches that are never offered for deletion
    protected_branches: List[str] = field(
        default_factory=lambda: list(DEFAULT_PROTECTED_BRANCHES)
    )

    # Execution modes
    dry_run: bool = False  # Show the delete commands without running them
    prune_all: bool = False  # Select every deletable branch without prompting
    force: bool = False  # Delete every selected branch with -D
    yes: bool = False  # Skip confirmation prompts
    verbose: bool = False
    debug: bool = False
    sequential: bool = False  # Run the read-only git queries one after another
    workers: Optional[int] = None  # Number of parallel query workers (None = auto-detect)
    git_timeout: Optional[float] = None  # Seconds before a git command is killed

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote()
        self._validate_protected_branches()
        self._validate_workers()
        self._validate_git_timeout()

    def _validate_remote(self):
        """Normalize the remote name.

        An empty remote is left in place; the classification engine rejects it
        with EmptyRemoteError before touching the network.
        """
        self.remote = (self.remote or "").strip()

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")
        self.protected_branches = [
            name.strip() for name in self.protected_branches if name and name.strip()
        ]

    def _validate_workers(self):
        """Validate workers is positive when set."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def _validate_git_timeout(self):
        """Validate git_timeout is positive when set."""
        if self.git_timeout is not None and self.git_timeout <= 0:
            raise ValueError(f"git_timeout must be positive, got {self.git_timeout}")

    @property
    def skip_confirmation(self) -> bool:
        """Whether confirmation prompts are skipped."""
        return self.yes or self.prune_all

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote": self.remote,
            "protected_branches": self.protected_branches,
            "dry_run": self.dry_run,
            "prune_all": self.prune_all,
            "force": self.force,
            "yes": self.yes,
            "verbose": self.verbose,
            "debug": self.debug,
            "sequential": self.sequential,
            "workers": self.workers,
            "git_timeout": self.git_timeout,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        # Extract only known fields
        known_fields = {
            "remote",
            "protected_branches",
            "dry_run",
            "prune_all",
            "force",
            "yes",
            "verbose",
            "debug",
            "sequential",
            "workers",
            "git_timeout",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
