"""Interactive prompts: branch selection, confirmation and retry."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from git_prune_branches.formatters import format_count
from git_prune_branches.models.branch import BranchClassification, BranchGroup, DeletionFailure
from git_prune_branches.services.display_service import DisplayService, console, selectable_rows

_RANGE = re.compile(r"^(\d+)-(\d+)$")


class ConfirmResult(Enum):
    """Answer to the deletion confirmation."""
    CONFIRM = "confirm"
    CANCEL = "cancel"
    BACK = "back"


@dataclass
class Selection:
    """Branches picked by the operator, split by how they will be deleted."""
    safe: List[str] = field(default_factory=list)
    force: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.safe) + len(self.force)


def parse_selection(answer: str, count: int) -> List[int]:
    """Parse a selection like ``"1,3 5-7"`` into sorted zero-based indices.

    ``all`` selects everything and ``none`` (or an empty answer) nothing.

    Raises:
        ValueError: a token is not a number or range within 1..count
    """
    answer = answer.strip().lower()
    if answer in ("", "none"):
        return []
    if answer == "all":
        return list(range(count))

    indices = set()
    for token in re.split(r"[,\s]+", answer):
        if not token:
            continue
        match = _RANGE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
        elif token.isdigit():
            start = end = int(token)
        else:
            raise ValueError(f"Not a number or range: {token!r}")
        if start > end:
            start, end = end, start
        if start < 1 or end > count:
            raise ValueError(f"Choose numbers between 1 and {count}")
        indices.update(range(start - 1, end))
    return sorted(indices)


def format_indices(indices: Sequence[int]) -> str:
    """Render zero-based indices as the one-based answer that selects them."""
    return ",".join(str(i + 1) for i in indices)


def default_selection(
    classification: BranchClassification, previous: Optional[Selection] = None
) -> Selection:
    """Safe branches start selected and force branches do not, unless restoring a choice."""
    if previous is not None:
        return Selection(
            safe=[b for b in classification.safe_to_delete if b in previous.safe],
            force=[b for b in classification.requires_force if b in previous.force],
        )
    return Selection(safe=list(classification.safe_to_delete), force=[])


def select_branches(
    classification: BranchClassification,
    display_service: DisplayService,
    previous: Optional[Selection] = None,
) -> Selection:
    """Let the operator pick branches from the numbered classification table."""
    rows = selectable_rows(classification)
    current = default_selection(classification, previous)
    chosen = set(current.safe) | set(current.force)

    display_service.display_classification(classification, selected=sorted(chosen))
    default = format_indices([i for i, (name, _) in enumerate(rows) if name in chosen]) or "none"

    while True:
        answer = Prompt.ask(
            "Select branches to remove (numbers, ranges like 2-4, 'all' or 'none')",
            default=default,
            console=console,
        )
        try:
            indices = parse_selection(answer, len(rows))
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue
        break

    selection = Selection()
    for index in indices:
        name, group = rows[index]
        if group == BranchGroup.SAFE:
            selection.safe.append(name)
        else:
            selection.force.append(name)
    return selection


def confirm_deletion(
    safe: Sequence[str], force: Sequence[str], display_service: DisplayService
) -> ConfirmResult:
    """Show the commands that will run and ask for a go, no-go or back."""
    total = len(safe) + len(force)
    if total == 0:
        console.print("👋 No branches selected")
        return ConfirmResult.CANCEL

    display_service.display_commands(safe, force)
    answer = Prompt.ask(
        f"Delete {format_count(total)}? (y = yes, n = no, b = back to selection)",
        choices=["y", "n", "b"],
        default="n",
        console=console,
    )
    return {"y": ConfirmResult.CONFIRM, "b": ConfirmResult.BACK}.get(answer, ConfirmResult.CANCEL)


def select_retry(failed: Sequence[DeletionFailure]) -> List[str]:
    """Let the operator pick which failed branches to force-delete (default: all)."""
    for index, failure in enumerate(failed, start=1):
        console.print(f"  {index}. {escape(failure.branch)}")

    while True:
        answer = Prompt.ask(
            "[red]Select branches to forcefully remove[/red]", default="all", console=console
        )
        try:
            indices = parse_selection(answer, len(failed))
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            continue
        return [failed[i].branch for i in indices]


def confirm(message: str) -> bool:
    """Ask a yes/no question defaulting to no."""
    return Confirm.ask(message, default=False, console=console)
