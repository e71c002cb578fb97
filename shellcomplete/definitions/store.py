"""In-memory definition store with snapshot publication.

Readers grab `snapshot()` once and keep using it; a reload builds a new
mapping aside and swaps the reference, so a resolution in flight never sees
a half-loaded directory.
"""

from __future__ import annotations

import threading
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..logging_setup import get_logger
from ..models import DefinitionParseError
from .loader import directory_signature, iter_definition_files, read_definition_file
from .models import CommandDefinition, LoadReport
from .parsing import parse_definition

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from ..models import DepthExceeded

__all__ = ["DefinitionStore"]

Snapshot = MappingProxyType[str, CommandDefinition]


class DefinitionStore:
    """Maps command names to their completion definition.

    Builtin definitions are registered once; user definitions are replaced
    wholesale by `reload_user` and shadow builtins of the same name.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        """Initialize an empty store.

        Args:
            log: Logger instance for load errors and warnings
        """
        self.log = log or get_logger("definitions")
        self._builtins: dict[str, CommandDefinition] = {}
        self._user: dict[str, CommandDefinition] = {}
        self._snapshot: Snapshot = MappingProxyType({})
        self._write_lock = threading.Lock()
        self._signature: tuple[tuple[str, int, int], ...] | None = None
        self.directory: Path | None = None

    def snapshot(self) -> Mapping[str, CommandDefinition]:
        """Return the current immutable view of all definitions."""
        return self._snapshot

    def lookup(self, command: str) -> CommandDefinition | None:
        """Return the definition occupying `command`, if any."""
        return self._snapshot.get(command)

    def __contains__(self, command: object) -> bool:
        return command in self._snapshot

    def commands(self) -> list[str]:
        """Return the registered command names."""
        return sorted(self._snapshot)

    def load_builtin(self, name: str, tree: Any) -> list[DepthExceeded]:  # noqa: ANN401
        """Register a builtin definition.

        Args:
            name: Command name
            tree: Raw tree, same shape as a definition file

        Returns:
            Depth warnings produced while parsing the tree

        Raises:
            ValueError: If a builtin with this name is already registered
            DefinitionParseError: If the tree has an invalid shape
        """
        with self._write_lock:
            if name in self._builtins:
                msg = f"builtin definition {name!r} is already registered"
                raise ValueError(msg)
            definition, warnings = parse_definition(name, tree)
            for warning in warnings:
                self.log.warning("Builtin %s: %s", name, warning)
            self._builtins[name] = definition
            self._publish()
        return warnings

    def reload_user(self, directory: Path | str) -> LoadReport:
        """Replace the user definitions with the content of `directory`.

        A broken file is reported and skipped; the other files still load.

        Args:
            directory: The completers directory (missing means no user definitions)

        Returns:
            The LoadReport listing errors and depth warnings per file
        """
        directory = Path(directory)
        report = LoadReport()
        with self._write_lock:
            # before reading: a file edited during the reload must still look changed
            signature = directory_signature(directory)
            try:
                paths = iter_definition_files(directory)
            except OSError as e:
                error = DefinitionParseError(f"{directory}: cannot list directory: {e}")
                self.log.warning("Keeping the previous definitions: %s", error)
                report.errors.append((directory, error))
                self.directory = directory
                self._signature = signature
                return report
            user: dict[str, CommandDefinition] = {}
            for path in paths:
                command = path.stem
                try:
                    definition, warnings = parse_definition(command, read_definition_file(path), str(path))
                except DefinitionParseError as e:
                    self.log.warning("Skipping %s: %s", path.name, e)
                    report.errors.append((path, e))
                    continue
                for warning in warnings:
                    self.log.warning("%s: %s", path.name, warning)
                    report.warnings.append((path, warning))
                if command in user:
                    self.log.info("%s replaces %s", path.name, user[command].source)
                elif command in self._builtins:
                    self.log.info("%s shadows the builtin %s completion", path.name, command)
                user[command] = definition
                report.loaded += 1

            self._user = user
            self.directory = directory
            self._signature = signature
            self._publish()

        self.log.debug("Loaded %d definition(s) from %s (%d error(s))", report.loaded, directory, len(report.errors))
        return report

    def reload_if_changed(self, directory: Path | str) -> LoadReport | None:
        """Reload when the directory differs from the last loaded state.

        Args:
            directory: The completers directory

        Returns:
            The LoadReport if a reload happened, None otherwise
        """
        directory = Path(directory)
        if directory == self.directory and directory_signature(directory) == self._signature:
            return None
        return self.reload_user(directory)

    def _publish(self) -> None:
        """Publish a new snapshot: builtins, then user definitions on top."""
        merged = dict(self._builtins)
        merged.update(self._user)
        self._snapshot = MappingProxyType(merged)
