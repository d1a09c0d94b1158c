"""Services for git-prune-branches."""
