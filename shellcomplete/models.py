"""Common types: resolved contexts, candidates and the error hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .definitions.models import CommandDefinition

__all__ = [
    "Candidate",
    "CommandArg",
    "CommandName",
    "ConfigError",
    "Context",
    "ContextKind",
    "DefinitionParseError",
    "DepthExceeded",
    "EnvVar",
    "ExitCode",
    "FilePath",
    "ProviderSource",
    "ProviderUnavailable",
    "ShellCompleteError",
]


class ContextKind(StrEnum):
    """What is being completed."""

    COMMAND_NAME = "command_name"
    ENV_VAR = "env_var"
    PATH = "path"
    COMMAND_ARG = "command_arg"


class ProviderSource(StrEnum):
    """Which provider produced a candidate."""

    BUILTIN = "builtin"
    DEFINITION = "definition"
    ENV_VAR = "env_var"
    PATH = "path"
    COMMAND = "command"


@dataclass(frozen=True)
class CommandName:
    """Completing the first word of the line."""

    prefix: str = ""
    kind = ContextKind.COMMAND_NAME

    def as_path(self) -> FilePath:
        """Re-resolve as a path completion (zero-candidate fallback)."""
        return FilePath(self.prefix)


@dataclass(frozen=True)
class EnvVar:
    """Completing a `$NAME` or `${NAME}` reference.

    `prefix` is the whole token, `fragment` the part of the name already typed.
    """

    prefix: str
    fragment: str
    braced: bool = False
    kind = ContextKind.ENV_VAR


@dataclass(frozen=True)
class FilePath:
    """Completing a filesystem path."""

    prefix: str = ""
    kind = ContextKind.PATH


@dataclass(frozen=True)
class CommandArg:
    """Completing the `arg_index`-th argument of `command` (the command itself is 0)."""

    command: str
    arg_index: int
    preceding_args: tuple[str, ...] = field(default_factory=tuple)
    prefix: str = ""
    definition: CommandDefinition | None = field(default=None, compare=False, repr=False)
    kind = ContextKind.COMMAND_ARG

    def as_path(self) -> FilePath:
        """Re-resolve as a path completion (zero-candidate fallback)."""
        return FilePath(self.prefix)


Context = CommandName | EnvVar | FilePath | CommandArg


@dataclass(frozen=True)
class Candidate:
    """A proposed completion and the provider it came from."""

    text: str
    source: ProviderSource


class ShellCompleteError(Exception):
    """Base class for completion errors."""


class DefinitionParseError(ShellCompleteError):
    """A user completion file could not be read or has an invalid shape."""


class DepthExceeded(ShellCompleteError):
    """A completion tree nests deeper than two levels; the extra levels were dropped.

    Collected as a warning during loading, never raised to the caller.
    """


class ProviderUnavailable(ShellCompleteError):
    """An external collaborator failed (unreadable makefile, missing host list...)."""


class ConfigError(ShellCompleteError):
    """The engine configuration file could not be parsed."""


class ExitCode(IntEnum):
    """Exit codes for the command line tool."""

    SUCCESS = 0
    USAGE_ERROR = 1
    DEFINITION_ERROR = 2
