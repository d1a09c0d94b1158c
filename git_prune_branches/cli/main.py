"""Command-line interface for git-prune-branches"""

import os
import sys
from typing import Optional, Sequence

from rich.markup import escape

from git_prune_branches.cli import prompts
from git_prune_branches.cli.args import parse_args
from git_prune_branches.cli.prompts import ConfirmResult, Selection
from git_prune_branches.config import Config, parse_protected_branches
from git_prune_branches.core import BranchPruner
from git_prune_branches.exceptions import (
    CommandTimeoutError,
    EmptyRemoteError,
    NotAGitRepositoryError,
    ProcessFailure,
)
from git_prune_branches.formatters import format_count
from git_prune_branches.logging_config import get_log_file, setup_logging
from git_prune_branches.models.branch import DeletionResult
from git_prune_branches.services.display_service import DisplayService, console


def build_config(parsed_args) -> Config:
    """Build the run configuration from parsed arguments."""
    return Config(
        remote=parsed_args.remote,
        protected_branches=parse_protected_branches(parsed_args.protected),
        dry_run=parsed_args.dry_run,
        prune_all=parsed_args.prune_all,
        force=parsed_args.force,
        yes=parsed_args.yes,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
        sequential=parsed_args.sequential,
        workers=parsed_args.workers,
        git_timeout=parsed_args.git_timeout,
    )


def choose_branches(
    pruner: BranchPruner, classification, display_service: DisplayService
) -> Optional[Selection]:
    """Select and confirm the deletion queue.

    Returns:
        The confirmed selection, or None when the operator cancelled
    """
    config = pruner.config
    selection: Optional[Selection] = None

    while True:
        if config.prune_all:
            selection = Selection(
                safe=list(classification.safe_to_delete),
                force=list(classification.requires_force) if config.force else [],
            )
            display_service.display_classification(
                classification, selected=selection.safe + selection.force
            )
        else:
            selection = prompts.select_branches(classification, display_service, selection)

        if config.force:
            selection = Selection(safe=[], force=selection.safe + selection.force)

        if config.dry_run:
            display_service.display_commands(selection.safe, selection.force)
            console.print("[yellow]Dry run: no branches were deleted[/yellow]")
            return None

        if selection.total and config.skip_confirmation:
            return selection

        answer = prompts.confirm_deletion(selection.safe, selection.force, display_service)
        if answer == ConfirmResult.BACK and not config.prune_all:
            continue
        if answer == ConfirmResult.CONFIRM:
            return selection
        if selection.total:
            console.print("👋 No branches were removed.")
        return None


def retry_failed_deletions(
    pruner: BranchPruner, first_pass: DeletionResult, display_service: DisplayService
) -> DeletionResult:
    """Offer to force-delete the branches that could not be deleted."""
    display_service.display_retry_prompt_header(first_pass)
    first_deleted = len(first_pass.deleted)
    previously = (
        f"{first_deleted} {'was' if first_deleted == 1 else 'were'} previously deleted without --force."
    )

    branches = prompts.select_retry(first_pass.failed)
    if not branches:
        console.print(f"👋 No additional branches were removed. {previously}")
        return first_pass

    if not pruner.config.skip_confirmation and not prompts.confirm(
        f"Are you sure you want to forcefully remove {format_count(len(branches))}?"
    ):
        console.print(f"👋 No additional branches were removed. {previously}")
        return first_pass

    combined = pruner.retry_failed(first_pass, branches)
    display_service.display_retry_result(combined, first_deleted, len(branches))
    return combined


def run(pruner: BranchPruner, display_service: DisplayService) -> int:
    """Classify, select, delete and retry. Returns the process exit status."""
    config = pruner.config
    pruner.ensure_git_repository()

    with console.status(f"[bold blue]Fetching from {config.remote or 'remote'}...", spinner="dots"):
        classification = pruner.classify()

    if classification.no_connection:
        display_service.show_connection_warning(config.remote)

    if not classification.deletable:
        display_service.show_nothing_to_do(classification)
        return 0

    selection = choose_branches(pruner, classification, display_service)
    if selection is None or not selection.total:
        return 0

    result = pruner.delete_branches(selection.safe, selection.force)
    display_service.display_deletion_result(result, selection.safe, selection.force)

    if result.failed and not config.force:
        result = retry_failed_deletions(pruner, result, display_service)

    console.print("\n👋 Done!\n")
    return 0 if result.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    debug = False
    pruner: Optional[BranchPruner] = None
    try:
        parsed_args = parse_args(argv)
        debug = parsed_args.debug
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = build_config(parsed_args)
        if config.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[dim]Log file: {get_log_file()}[/dim]")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {escape(str(value))}")

        pruner = BranchPruner(os.getcwd(), config)
        return run(pruner, DisplayService(verbose=config.verbose))
    except KeyboardInterrupt:
        if pruner is not None and pruner.git_service.in_git_operation:
            console.print(
                "\n[yellow]Interrupted during a branch deletion. "
                "Run 'git branch' to see which branches were removed.[/yellow]"
            )
        console.print("\n👋 until next time!")
        return 0
    except EmptyRemoteError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1
    except NotAGitRepositoryError:
        console.print("[red]ERROR: Not a git repository[/red]")
        return 1
    except CommandTimeoutError as e:
        console.print(f"[red]ERROR: {escape(str(e))}. Try a larger --git-timeout[/red]")
        return 1
    except ProcessFailure as e:
        if e.is_fatal:
            console.print("[red]ERROR: Not a git repository[/red]")
        else:
            console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        if debug:
            console.print_exception()
        return 1
    except ValueError as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
