"""Decide what the word under the cursor is."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import CommandArg, CommandName, EnvVar, FilePath
from .tokenizer import tokenize

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .definitions.models import CommandDefinition
    from .models import Context
    from .tokenizer import Tokenization

__all__ = ["expand_alias", "resolve_context"]


def expand_alias(words: list[str], aliases: Mapping[str, str] | None) -> list[str]:
    """Replace the first word by the words of its alias.

    Only the head of the line is expanded, and only once, so an alias
    referring to itself (`ls="ls --color"`) is safe.

    Args:
        words: The words of the line
        aliases: Alias name to alias value

    Returns:
        The words with the alias expanded
    """
    if not words or not aliases or words[0] not in aliases:
        return words
    expansion = [word for word in tokenize(aliases[words[0]]).tokens if word]
    if not expansion:
        return words
    return expansion + words[1:]


def _env_var(prefix: str) -> EnvVar:
    """Build the EnvVar context for a `$NAME` or `${NAME}` prefix."""
    if prefix.startswith("${"):
        return EnvVar(prefix=prefix, fragment=prefix[2:], braced=True)
    return EnvVar(prefix=prefix, fragment=prefix[1:])


def resolve_context(
    tokenization: Tokenization,
    definitions: Mapping[str, CommandDefinition],
    aliases: Mapping[str, str] | None = None,
) -> Context:
    """Map a tokenized line to exactly one completion context.

    Rules, first match wins:
    1. prefix starting with `$` (not single-quoted or escaped) -> EnvVar
    2. completing the first word -> CommandName
    3. command with a definition -> CommandArg
    4. anything else -> FilePath

    Args:
        tokenization: The tokenized line
        definitions: Snapshot of the definition store
        aliases: Shell aliases applied to the first word

    Returns:
        The resolved context
    """
    prefix = tokenization.prefix
    if prefix.startswith("$") and not tokenization.prefix_is_literal:
        return _env_var(prefix)

    words = tokenization.tokens
    if len(words) <= 1:
        return CommandName(prefix)

    words = expand_alias(words[:-1], aliases) + [prefix]
    command = words[0]
    definition = definitions.get(command)
    if definition is not None:
        return CommandArg(
            command=command,
            arg_index=len(words) - 1,
            preceding_args=tuple(words[1:]),
            prefix=prefix,
            definition=definition,
        )
    return FilePath(prefix)
