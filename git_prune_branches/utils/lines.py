"""Helpers for turning git output into sequences."""

from typing import Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


def split_lines(output: Optional[str]) -> List[str]:
    """Split command output into trimmed, non-empty lines.

    Args:
        output: Raw stdout of a command (may be None or empty)

    Returns:
        List of lines with surrounding whitespace removed
    """
    if not output:
        return []
    return [line.strip() for line in output.splitlines() if line.strip()]


def ordered_unique(items: Iterable[T]) -> List[T]:
    """Remove duplicates while keeping the first occurrence of each item in order."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
