"""First-word completion: aliases, known definitions and executables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Candidate, ContextKind, ProviderSource
from .base import Provider

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping

    from ..definitions.store import DefinitionStore
    from ..models import Context

__all__ = ["CommandNameProvider"]


class CommandNameProvider(Provider):
    """Offer command names for the first word of the line."""

    name = "command"
    source = ProviderSource.COMMAND
    accepts = frozenset({ContextKind.COMMAND_NAME})

    def __init__(
        self,
        store: DefinitionStore,
        executables: Callable[[], list[str]],
        aliases: Mapping[str, str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            store: Definition store, its command names are offered
            executables: Returns the executables found on $PATH
            aliases: Shell aliases
            log: Logger instance
        """
        super().__init__(log)
        self.store = store
        self.executables = executables
        self.aliases = aliases if aliases is not None else {}

    def complete(self, context: Context) -> list[Candidate]:
        prefix = context.prefix
        names = [*self.aliases, *self.store.commands(), *self._ask("executables", self.executables)]
        return self._candidates(name for name in names if name.startswith(prefix))
