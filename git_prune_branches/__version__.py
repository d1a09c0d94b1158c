"""Version information for git-prune-branches."""

__version__ = "1.0.0"
