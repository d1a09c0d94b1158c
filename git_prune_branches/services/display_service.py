"""Display and formatting service for classification and deletion results"""
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_prune_branches.constants import CLI_COLORS, GROUP_LABELS
from git_prune_branches.formatters import format_count, format_delete_commands
from git_prune_branches.models.branch import BranchClassification, BranchGroup, DeletionResult
from git_prune_branches.logging_config import get_logger

console = Console()
logger = get_logger(__name__)


def selectable_rows(classification: BranchClassification) -> List[Tuple[str, BranchGroup]]:
    """Rows the operator can pick from, numbered from 1: safe first, then force."""
    return [(name, classification.group_of(name)) for name in classification.deletable]


class DisplayService:
    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def show_connection_warning(self, remote: str) -> None:
        console.print(
            f"[yellow]⚠️  Could not reach remote {remote!r}; results are based on cached "
            f"remote-tracking data and may be stale[/yellow]"
        )

    def show_nothing_to_do(self, classification: BranchClassification) -> None:
        """Explain why nothing can be deleted."""
        if not classification.info_only:
            console.print("[green]✅ No stale branches were found[/green]")
            return

        console.print("[green]✅ No deletable branches were found[/green]")
        console.print("\nℹ️  Some branches are renamed locally but still exist on remote:")
        for name in classification.info_only:
            console.print(f"  • {escape(name)} [dim]\\[{escape(classification.reason_for(name))}][/dim]")

    def display_classification(
        self,
        classification: BranchClassification,
        selected: Optional[Sequence[str]] = None,
    ) -> None:
        """Display a numbered table of the classified branches.

        Args:
            classification: Classified branches
            selected: Branches currently selected (marked in the first column)
        """
        selected_set = set(selected or ())
        table = Table(show_header=True, header_style="bold", show_edge=True)
        table.add_column("#", justify="right")
        table.add_column("", justify="center")
        table.add_column("Branch", no_wrap=True)
        table.add_column("Group")
        table.add_column("Reason", style="dim")

        rows = selectable_rows(classification)
        for index, (name, group) in enumerate(rows, start=1):
            table.add_row(
                str(index),
                "✓" if name in selected_set else " ",
                escape(name),
                GROUP_LABELS[group.value],
                escape(classification.reason_for(name)),
                style=CLI_COLORS[group.value],
            )
        for name in classification.info_only:
            table.add_row(
                "-",
                " ",
                escape(name),
                GROUP_LABELS[BranchGroup.INFO.value],
                escape(classification.reason_for(name)),
                style=CLI_COLORS[BranchGroup.INFO.value],
            )

        console.print(table)

    def display_commands(self, safe: Sequence[str], force: Sequence[str]) -> None:
        """Show the git commands a deletion queue would run."""
        console.print("\nThe following commands will be executed:\n")
        if safe:
            console.print(f"[green]Safely delete {format_count(len(safe))}:[/green]")
            for command in format_delete_commands(safe, []):
                console.print(f"  [dim]{escape(command)}[/dim]", highlight=False)
            console.print("")
        if force:
            console.print(f"[red]Force delete {format_count(len(force))}:[/red]")
            for command in format_delete_commands([], force):
                console.print(f"  [dim]{escape(command)}[/dim]", highlight=False)
            console.print("")

    def _print_failures(self, result: DeletionResult) -> None:
        for failure in result.failed:
            console.print(f"   • {escape(failure.branch)}")
            console.print(f"     [dim]{escape(failure.error)}[/dim]", highlight=False)

    def display_deletion_result(
        self, result: DeletionResult, safe: Sequence[str], force: Sequence[str]
    ) -> None:
        """Summarize a deletion batch with counts and a remediation tip."""
        deleted = set(result.deleted)
        counts: Dict[str, int] = {
            "safe": sum(1 for b in safe if b in deleted),
            "force": sum(1 for b in force if b in deleted),
        }
        total_success = len(result.deleted)
        total_failed = len(result.failed)

        console.print("")
        if self.verbose:
            self._print_deleted(result, force)
        if total_failed == 0:
            console.print(f"[green]✅ Successfully deleted {format_count(total_success)}[/green]")
            if counts["safe"] and counts["force"]:
                self._print_counts(counts)
        elif total_success > 0:
            console.print(
                f"[yellow]⚠️  Deleted {total_success} of {format_count(result.attempted)}[/yellow]"
            )
            self._print_counts(counts)
            console.print("\n[red]❌ Failed to delete:[/red]")
            self._print_failures(result)
            console.print(
                "\n💡 Tip: Check if you're currently on this branch or if it has uncommitted changes"
            )
        else:
            console.print(f"[red]❌ Failed to delete all {format_count(total_failed)}[/red]")
            self._print_failures(result)
            console.print("\n💡 Tip: Check if you're currently on a branch you tried to delete")

    def _print_deleted(self, result: DeletionResult, force: Sequence[str]) -> None:
        forced = set(force)
        for name in result.deleted:
            suffix = " (forced)" if name in forced else ""
            console.print(f"   [dim]Removed branch {escape(name)}{suffix}[/dim]", highlight=False)

    def _print_counts(self, counts: Dict[str, int]) -> None:
        if counts["safe"]:
            console.print(f"   • {format_count(counts['safe'], 'safe deletion', 'safe deletions')}")
        if counts["force"]:
            console.print(
                f"   • {format_count(counts['force'], 'force deletion', 'force deletions')}"
            )

    def display_retry_prompt_header(self, result: DeletionResult) -> None:
        """Explain that some deletions failed and can be retried with force."""
        failed = len(result.failed)
        attempted = result.attempted
        if failed < attempted:
            text = f"Could not remove {failed} of those {format_count(attempted)}"
        elif attempted == 1:
            text = "Could not remove that branch"
        else:
            text = "Could not remove any of those branches"
        console.print(
            f"\n[bright_yellow]⚠️  {text}.\nYou may try again using [bold]--force[/bold], "
            f"or cancel by pressing Ctrl+C[/bright_yellow]\n"
        )

    def display_retry_result(
        self, combined: DeletionResult, first_pass_deleted: int, retried: int
    ) -> None:
        """Report the totals after a forced retry."""
        forced = len(combined.deleted) - first_pass_deleted
        if not combined.failed:
            console.print(
                f"[green]✅ Deleted {format_count(len(combined.deleted))} in total: "
                f"{forced} with --force, and {first_pass_deleted} without --force.[/green]"
            )
            return

        still_failed = len(combined.failed)
        console.print(
            f"\n[red]⛔ Still could not delete {format_count(still_failed)}, "
            f"even with --force.[/red]\n\n"
            f"Did delete: {forced} of {retried} with --force, and {first_pass_deleted} without --force."
        )
        self._print_failures(combined)
