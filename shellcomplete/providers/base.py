"""Provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from ..logging_setup import get_logger
from ..models import Candidate, ProviderSource, ProviderUnavailable

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterable

    from ..models import Context, ContextKind

__all__ = ["Provider"]


class Provider(ABC):
    """A source of candidates for some kinds of context.

    Subclasses declare the context kinds they handle in `accepts`; the
    engine never calls `complete` with any other kind.
    """

    name: ClassVar[str] = "provider"
    source: ClassVar[ProviderSource]
    accepts: ClassVar[frozenset[ContextKind]] = frozenset()

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or get_logger(f"providers.{self.name}")

    def handles(self, context: Context) -> bool:
        """Tell whether this provider applies to `context`."""
        return context.kind in self.accepts

    @abstractmethod
    def complete(self, context: Context) -> list[Candidate]:
        """Return candidates for `context`, pre-filtered on its prefix."""

    def _candidates(self, texts: Iterable[str]) -> list[Candidate]:
        """Tag texts with this provider's source."""
        return [Candidate(text, self.source) for text in texts]

    def _ask(self, what: str, collaborator: Callable[[], list[str]]) -> list[str]:
        """Call an external collaborator, degrading to an empty list on failure."""
        try:
            return list(collaborator())
        except (OSError, ProviderUnavailable) as e:
            self.log.debug("%s unavailable: %s", what, e)
            return []
