"""Filesystem path completion."""

from __future__ import annotations

import itertools
import os
from typing import TYPE_CHECKING

from ..constants import DEFAULT_MAX_PATH_ENTRIES
from ..models import Candidate, ContextKind, ProviderSource, ProviderUnavailable
from .base import Provider

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterable

    from ..models import Context

__all__ = ["PathProvider", "split_path_prefix"]

SEPARATOR = "/"


def split_path_prefix(prefix: str) -> tuple[str, str]:
    """Split a path prefix into its directory part (as typed) and the base name fragment.

    Eg:
        split_path_prefix("src/ma") == ("src/", "ma")
        split_path_prefix("ma") == ("", "ma")
        split_path_prefix("~") == ("~/", "")
    """
    if prefix == "~":
        return "~/", ""
    head, sep, tail = prefix.rpartition(SEPARATOR)
    if not sep:
        return "", prefix
    return head + sep, tail


class PathProvider(Provider):
    """List the directory implied by the prefix.

    The directory part is kept as typed (`~/`, `../`...) so candidates
    extend the prefix. Directories get a trailing separator for chained
    completion. Hidden entries are offered when the fragment starts with
    a dot, or always with `show_hidden`.
    """

    name = "path"
    source = ProviderSource.PATH
    accepts = frozenset({ContextKind.PATH})

    def __init__(
        self,
        list_directory: Callable[[str], Iterable[tuple[str, bool]]],
        show_hidden: bool = False,
        max_entries: int = DEFAULT_MAX_PATH_ENTRIES,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            list_directory: Yields (name, is_directory) for a directory path
            show_hidden: Offer dot-files even without a leading dot in the fragment
            max_entries: Stop reading a directory after this many entries (negative reads nothing)
            log: Logger instance
        """
        super().__init__(log)
        self.list_directory = list_directory
        self.show_hidden = show_hidden
        self.max_entries = max(0, max_entries)

    def complete(self, context: Context) -> list[Candidate]:
        typed_dir, fragment = split_path_prefix(context.prefix)
        search_dir = os.path.expanduser(typed_dir) if typed_dir else "."
        show_hidden = self.show_hidden or fragment.startswith(".")

        texts: list[str] = []
        try:
            for name, is_dir in itertools.islice(self.list_directory(search_dir), self.max_entries):
                if name in {".", ".."} or not name.startswith(fragment):
                    continue
                if name.startswith(".") and not show_hidden:
                    continue
                texts.append(typed_dir + name + (SEPARATOR if is_dir else ""))
        except (OSError, ProviderUnavailable) as e:
            self.log.debug("cannot list %s: %s", search_dir, e)
            return []
        return self._candidates(texts)
