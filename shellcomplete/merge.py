"""Combine provider outputs into the list shown to the user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import ContextKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Candidate

__all__ = ["merge_candidates"]


def _path_order(text: str) -> tuple[bool, str]:
    """Directories first, then files, each alphabetically."""
    return (not text.endswith("/"), text)


def merge_candidates(candidate_lists: Iterable[Iterable[Candidate]], prefix: str, kind: ContextKind) -> list[str]:
    """Filter, deduplicate and order candidates.

    Args:
        candidate_lists: Provider outputs, in provider order
        prefix: The text every candidate must start with
        kind: Kind of the context that produced the candidates

    Returns:
        Unique candidate strings; paths are grouped directories first
    """
    seen: dict[str, Candidate] = {}
    for candidates in candidate_lists:
        for candidate in candidates:
            if candidate.text.startswith(prefix) and candidate.text not in seen:
                seen[candidate.text] = candidate

    if kind is ContextKind.PATH:
        return sorted(seen, key=_path_order)
    return sorted(seen)
