"""Commands whose arguments need more than a static tree.

Each command is handled by its own sub-provider, chosen on
`context.command`; `register` plugs in more.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import Candidate, CommandArg, ContextKind, ProviderSource
from .base import Provider

if TYPE_CHECKING:
    import logging

    from ..models import Context

__all__ = ["BuiltinCommandProvider", "MakeTargets", "SshHosts", "SubProvider", "VoxEnvironments"]

SubProvider = Callable[[CommandArg], list[str]]


class MakeTargets:
    """Makefile targets for `make`."""

    # options whose next argument is a file or a number, not a target
    VALUE_OPTIONS = frozenset({"-C", "-f", "-I", "-j", "-o", "-W", "--directory", "--file", "--include-dir", "--jobs"})

    def __init__(self, targets: Callable[[], list[str]]) -> None:
        self.targets = targets

    def __call__(self, context: CommandArg) -> list[str]:
        if context.prefix.startswith("-"):
            return []
        if len(context.preceding_args) > 1 and context.preceding_args[-2] in self.VALUE_OPTIONS:
            return []
        return self.targets()


class SshHosts:
    """Host aliases for `ssh`, also as `user@host`."""

    VALUE_OPTIONS = frozenset({"-b", "-c", "-D", "-E", "-e", "-F", "-i", "-J", "-L", "-l", "-m", "-O", "-o", "-p", "-Q", "-R", "-S", "-W", "-w"})

    def __init__(self, hosts: Callable[[], list[str]]) -> None:
        self.hosts = hosts

    def __call__(self, context: CommandArg) -> list[str]:
        if context.prefix.startswith("-"):
            return []
        if len(context.preceding_args) > 1 and context.preceding_args[-2] in self.VALUE_OPTIONS:
            return []
        user, at, _ = context.prefix.rpartition("@")
        return [f"{user}{at}{host}" for host in self.hosts()]


class VoxEnvironments:
    """Virtual environment names after `vox enter|activate|rm|remove`."""

    SUBCOMMANDS = frozenset({"activate", "enter", "remove", "rm"})

    def __init__(self, environments: Callable[[], list[str]]) -> None:
        self.environments = environments

    def __call__(self, context: CommandArg) -> list[str]:
        if context.arg_index < 2 or context.preceding_args[0] not in self.SUBCOMMANDS:  # noqa: PLR2004
            return []
        return self.environments()


class BuiltinCommandProvider(Provider):
    """Dispatch to the sub-provider registered for the command."""

    name = "builtin"
    source = ProviderSource.BUILTIN
    accepts = frozenset({ContextKind.COMMAND_ARG})

    def __init__(self, sub_providers: dict[str, SubProvider] | None = None, log: logging.Logger | None = None) -> None:
        """Initialize the provider.

        Args:
            sub_providers: Command name to sub-provider
            log: Logger instance
        """
        super().__init__(log)
        self.sub_providers: dict[str, SubProvider] = dict(sub_providers or {})

    def register(self, command: str, sub_provider: SubProvider) -> None:
        """Plug a sub-provider in for `command`, replacing any previous one."""
        self.sub_providers[command] = sub_provider

    def complete(self, context: Context) -> list[Candidate]:
        assert isinstance(context, CommandArg)
        sub_provider = self.sub_providers.get(context.command)
        if sub_provider is None:
            return []
        texts = self._ask(f"{context.command} completion", lambda: sub_provider(context))
        return self._candidates(text for text in texts if text.startswith(context.prefix))
