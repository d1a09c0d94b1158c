"""Shared constants for git-prune-branches."""

from typing import List

DEFAULT_REMOTE = "origin"

DEFAULT_PROTECTED_BRANCHES: List[str] = ["main", "master", "develop", "development"]

# git exits with 128 for repository-level failures (not a repository, remote unreachable)
GIT_FATAL_EXIT_CODE = 128

# Raised with EmptyRemoteError so callers can tell it apart from git failures
EMPTY_REMOTE_ERROR_CODE = 1984

# Formats passed to git as single argv elements (no shell quoting needed)
UPSTREAM_FORMAT = "--format=%(refname:short)@{%(upstream)}"
SHORT_NAME_FORMAT = "--format=%(refname:short)"
COMMIT_TIME_FORMAT = "--format=%(refname:short)|%(committerdate:unix)"

REMOTE_REFS_PREFIX = "refs/remotes/"
HEADS_PREFIX = "refs/heads/"


# CLI colors (Rich color names), keyed by BranchGroup value
CLI_COLORS = {
    "safe": "green",
    "force": "yellow",
    "info": "bright_black",
}

GROUP_LABELS = {
    "safe": "✅ Safe to delete",
    "force": "⚠️  Requires force delete (cannot be undone)",
    "info": "ℹ️  Info only (renamed branches still on remote)",
}
