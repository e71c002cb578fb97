"""Candidates from two-level definition trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Candidate, CommandArg, ContextKind, ProviderSource
from .base import Provider

if TYPE_CHECKING:
    from ..models import Context

__all__ = ["DefinitionTreeProvider"]


class DefinitionTreeProvider(Provider):
    """Offer level-1 labels for the first argument, level-2 leaves after it.

    For `pip install --re`, the first argument `install` selects the entry
    whose leaves are completed.
    """

    name = "tree"
    source = ProviderSource.DEFINITION
    accepts = frozenset({ContextKind.COMMAND_ARG})

    def complete(self, context: Context) -> list[Candidate]:
        assert isinstance(context, CommandArg)
        definition = context.definition
        if definition is None or context.arg_index < 1:
            return []

        if context.arg_index == 1:
            labels = definition.labels
        else:
            entry = definition.entry(context.preceding_args[0])
            if entry is None:
                return []
            labels = list(entry.leaves)

        return self._candidates(label for label in labels if label.startswith(context.prefix))
