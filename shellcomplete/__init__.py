"""shellcomplete - command line completion resolver for interactive shells.

Given a partially typed line and a cursor position, returns the ordered,
deduplicated candidates: command names, arguments from builtin and
user-defined completion trees, environment variables and paths.
User definitions live in one YAML file per command and are picked up
without restarting the shell.
"""

from .engine import CompletionEngine, CompletionResult, get_engine, resolve_completions

__all__ = ["CompletionEngine", "CompletionResult", "get_engine", "resolve_completions"]
