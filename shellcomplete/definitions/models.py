"""Data models for completion definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..models import DefinitionParseError, DepthExceeded

__all__ = ["BUILTIN_SOURCE", "CommandDefinition", "DefinitionEntry", "LoadReport"]

BUILTIN_SOURCE = "builtin"


@dataclass(frozen=True)
class DefinitionEntry:
    """A level-1 subcommand or flag, with the level-2 flags nested under it."""

    label: str  # e.g. "install"
    leaves: tuple[str, ...] = ()  # e.g. ("-U", "--upgrade")


@dataclass(frozen=True)
class CommandDefinition:
    """Completion tree of one command.

    The two levels are fixed by the record shape: entries, then leaves.
    """

    command: str
    entries: tuple[DefinitionEntry, ...] = ()
    source: str = BUILTIN_SOURCE  # "builtin" or the file it was loaded from

    @property
    def labels(self) -> list[str]:
        """Level-1 labels in definition order."""
        return [entry.label for entry in self.entries]

    @property
    def depth(self) -> int:
        """Levels below the command name (0, 1 or 2)."""
        if not self.entries:
            return 0
        return 2 if any(entry.leaves for entry in self.entries) else 1

    def entry(self, label: str) -> DefinitionEntry | None:
        """Return the level-1 entry named `label`."""
        for entry in self.entries:
            if entry.label == label:
                return entry
        return None


@dataclass
class LoadReport:
    """Outcome of a user definitions reload."""

    loaded: int = 0
    errors: list[tuple[Path, DefinitionParseError]] = field(default_factory=list)
    warnings: list[tuple[Path, DepthExceeded]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every file loaded without error."""
        return not self.errors
