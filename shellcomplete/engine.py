"""The completion engine: line in, ordered candidates out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .collaborators import Collaborators
from .config import Configuration
from .config_loader import ConfigLoader
from .constants import DEFAULT_MAX_PATH_ENTRIES
from .context import resolve_context
from .definitions import BUILTIN_DEFINITIONS, DefinitionStore
from .logging_setup import get_logger
from .merge import merge_candidates
from .models import CommandArg, CommandName, ConfigError
from .providers import (
    BuiltinCommandProvider,
    CommandNameProvider,
    DefinitionTreeProvider,
    EnvVarProvider,
    MakeTargets,
    PathProvider,
    SshHosts,
    VoxEnvironments,
)
from .tokenizer import tokenize
from .validation import ENGINE_SCHEMA

if TYPE_CHECKING:
    import logging
    from collections.abc import Mapping

    from .definitions import LoadReport
    from .models import Candidate, Context
    from .providers import Provider
    from .tokenizer import Tokenization

__all__ = ["CompletionEngine", "CompletionResult", "get_engine", "resolve_completions"]


@dataclass
class CompletionResult:
    """Everything a resolution produced, for callers that need more than the strings."""

    tokenization: Tokenization
    context: Context
    candidates: list[str] = field(default_factory=list)
    fallback: bool = False  # True when the path provider answered for an argument

    @property
    def quote(self) -> str:
        """Opening quote to re-insert before a candidate."""
        return self.tokenization.quote


class CompletionEngine:
    """Owns the definition store and the ordered provider set."""

    def __init__(
        self,
        config: Configuration | None = None,
        collaborators: Collaborators | None = None,
        aliases: Mapping[str, str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Build the engine and load the user definitions once.

        Args:
            config: Engine configuration (schema defaults if None)
            collaborators: External sources (system defaults if None)
            aliases: Shell aliases, on top of the configured ones
            log: Logger instance
        """
        self.log = log or get_logger("engine")
        self.config = config if config is not None else Configuration(logger=self.log, schema=ENGINE_SCHEMA)
        self.collaborators = collaborators or Collaborators()
        self.aliases: dict[str, str] = {**self.config.get_dict("aliases"), **(aliases or {})}
        self.definitions_dir = self.config.get_path("definitions_dir")

        self.reload_policy = self.config.get_str("reload", "on_demand")
        if self.reload_policy not in {"on_demand", "explicit"}:
            self.log.warning("Unknown reload policy %r, using on_demand", self.reload_policy)
            self.reload_policy = "on_demand"

        self.store = DefinitionStore()
        for name, tree in BUILTIN_DEFINITIONS.items():
            self.store.load_builtin(name, tree)

        self.builtin_provider = BuiltinCommandProvider(
            {
                "make": MakeTargets(self.collaborators.make_targets),
                "ssh": SshHosts(self.collaborators.ssh_hosts),
                "vox": VoxEnvironments(self.collaborators.vox_envs),
            }
        )
        max_entries = self.config.get_int("max_path_entries", DEFAULT_MAX_PATH_ENTRIES)
        if max_entries < 0:
            self.log.warning("Negative max_path_entries %d, using %d", max_entries, DEFAULT_MAX_PATH_ENTRIES)
            max_entries = DEFAULT_MAX_PATH_ENTRIES
        self.path_provider = PathProvider(
            self.collaborators.list_directory,
            show_hidden=self.config.get_bool("show_hidden"),
            max_entries=max_entries,
        )
        self.providers: tuple[Provider, ...] = (
            self.builtin_provider,
            DefinitionTreeProvider(),
            CommandNameProvider(self.store, self.collaborators.executables, self.aliases),
            EnvVarProvider(self.collaborators.environment, self.collaborators.shell_variables),
            self.path_provider,
        )

        self.reload()

    def reload(self) -> LoadReport:
        """Re-read the user definitions directory."""
        return self.store.reload_user(self.definitions_dir)

    def complete(self, line: str, cursor: int | None = None) -> CompletionResult:
        """Resolve the completion of `line` at `cursor`.

        Args:
            line: The line being edited
            cursor: Cursor position (end of line if None)

        Returns:
            The CompletionResult
        """
        if self.reload_policy == "on_demand":
            self.store.reload_if_changed(self.definitions_dir)

        tokenization = tokenize(line, cursor)
        context = resolve_context(tokenization, self.store.snapshot(), self.aliases)
        outputs = self._query(context)

        fallback = False
        if isinstance(context, CommandArg | CommandName) and not any(outputs):
            context = context.as_path()
            outputs = [self._call(self.path_provider, context)]
            fallback = True

        candidates = merge_candidates(outputs, context.prefix, context.kind)
        self.log.debug("%r -> %s: %d candidate(s)", tokenization.line, context, len(candidates))
        return CompletionResult(tokenization=tokenization, context=context, candidates=candidates, fallback=fallback)

    def resolve_completions(self, line: str, cursor_position: int | None = None) -> list[str]:
        """Return the ordered, deduplicated candidates for `line` at `cursor_position`."""
        return self.complete(line, cursor_position).candidates

    def _query(self, context: Context) -> list[list[Candidate]]:
        """Ask every provider handling the context, in order."""
        return [self._call(provider, context) for provider in self.providers if provider.handles(context)]

    def _call(self, provider: Provider, context: Context) -> list[Candidate]:
        """Run one provider; a failing provider contributes nothing."""
        try:
            return provider.complete(context)
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.error("Provider %s failed on %s", provider.name, context, exc_info=True)  # noqa: TRY400
            return []


class _DefaultEngine:
    """Holder for the lazily built process-wide engine."""

    engine: CompletionEngine | None = None


def get_engine(config_filename: str = "") -> CompletionEngine:
    """Return the process-wide engine, building it from the config file on first use.

    An unreadable config file is logged and the defaults are used.
    """
    if _DefaultEngine.engine is None:
        log = get_logger("config")
        try:
            config = ConfigLoader(log).load(config_filename)
        except ConfigError:
            config = Configuration(logger=log, schema=ENGINE_SCHEMA)
        _DefaultEngine.engine = CompletionEngine(config)
    return _DefaultEngine.engine


def resolve_completions(line: str, cursor_position: int | None = None) -> list[str]:
    """Complete `line` at `cursor_position` with the process-wide engine."""
    return get_engine().resolve_completions(line, cursor_position)
