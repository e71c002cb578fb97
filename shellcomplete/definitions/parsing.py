"""Turn raw definition data (as decoded from YAML/TOML/JSON) into definitions.

Two shapes are accepted for the top level::

    # mapping: label -> leaves
    install: [-U, --upgrade, -r, --requirement]
    download:

    # list: plain labels, or single-key mappings carrying leaves
    - download
    - install:
        - -U
        - --upgrade

Leaves may be a list, a single scalar, or a mapping (its keys are the
leaves). Anything nested below the leaves is dropped and reported.
"""

from __future__ import annotations

from typing import Any

from ..constants import MAX_TREE_DEPTH
from ..models import DefinitionParseError, DepthExceeded
from .models import BUILTIN_SOURCE, CommandDefinition, DefinitionEntry

__all__ = ["parse_definition"]

_SCALARS = (str, int, float, bool)


def _label(value: Any, where: str) -> str:  # noqa: ANN401
    """Normalize a scalar into a candidate label."""
    if not isinstance(value, _SCALARS):
        msg = f"{where}: expected a label, got {type(value).__name__}"
        raise DefinitionParseError(msg)
    label = str(value).strip()
    if not label:
        msg = f"{where}: empty label"
        raise DefinitionParseError(msg)
    return label


def _unique(labels: list[str]) -> tuple[str, ...]:
    """Drop repeated labels, keeping the first occurrence."""
    return tuple(dict.fromkeys(labels))


def _parse_leaves(value: Any, where: str, warnings: list[DepthExceeded]) -> tuple[str, ...]:  # noqa: ANN401
    """Parse the level-2 labels found under a level-1 entry."""
    if value is None:
        return ()
    if isinstance(value, _SCALARS):
        return (_label(value, where),)

    if isinstance(value, dict):
        items: list[Any] = []
        for key, nested in value.items():
            if nested not in (None, [], {}, ""):
                warnings.append(DepthExceeded(f"{where}.{key}: nested below level {MAX_TREE_DEPTH}, dropped"))
            items.append(key)
    elif isinstance(value, list):
        items = value
    else:
        msg = f"{where}: unsupported value of type {type(value).__name__}"
        raise DefinitionParseError(msg)

    leaves: list[str] = []
    for index, item in enumerate(items):
        if isinstance(item, dict):
            for key, nested in item.items():
                if nested not in (None, [], {}, ""):
                    warnings.append(DepthExceeded(f"{where}.{key}: nested below level {MAX_TREE_DEPTH}, dropped"))
                leaves.append(_label(key, where))
        elif isinstance(item, list):
            warnings.append(DepthExceeded(f"{where}[{index}]: nested list below level {MAX_TREE_DEPTH}, dropped"))
        else:
            leaves.append(_label(item, where))
    return _unique(leaves)


def _merge_entries(pairs: list[tuple[str, tuple[str, ...]]]) -> tuple[DefinitionEntry, ...]:
    """Build entries, first label occurrence wins."""
    seen: dict[str, DefinitionEntry] = {}
    for label, leaves in pairs:
        if label not in seen:
            seen[label] = DefinitionEntry(label, leaves)
    return tuple(seen.values())


def parse_definition(
    command: str,
    data: Any,  # noqa: ANN401
    source: str = BUILTIN_SOURCE,
) -> tuple[CommandDefinition, list[DepthExceeded]]:
    """Parse the raw content of a definition.

    Args:
        command: The command name the definition completes
        data: Decoded file content
        source: Where the data came from, for messages

    Returns:
        Tuple of (definition, depth warnings)

    Raises:
        DefinitionParseError: If the data does not have a supported shape
    """
    warnings: list[DepthExceeded] = []
    pairs: list[tuple[str, tuple[str, ...]]] = []

    if isinstance(data, dict):
        if not data:
            msg = f"{source}: empty definition for {command!r}"
            raise DefinitionParseError(msg)
        for key, value in data.items():
            label = _label(key, command)
            pairs.append((label, _parse_leaves(value, f"{command}.{label}", warnings)))
    elif isinstance(data, list):
        if not data:
            msg = f"{source}: empty definition for {command!r}"
            raise DefinitionParseError(msg)
        for index, item in enumerate(data):
            where = f"{command}[{index}]"
            if isinstance(item, dict):
                for key, value in item.items():
                    label = _label(key, where)
                    pairs.append((label, _parse_leaves(value, f"{command}.{label}", warnings)))
            elif isinstance(item, list):
                msg = f"{source}: {where}: a list cannot hold another list at the top level"
                raise DefinitionParseError(msg)
            else:
                pairs.append((_label(item, where), ()))
    elif data is None:
        msg = f"{source}: empty definition for {command!r}"
        raise DefinitionParseError(msg)
    else:
        msg = f"{source}: expected a mapping or a list, got {type(data).__name__}"
        raise DefinitionParseError(msg)

    return CommandDefinition(command=command, entries=_merge_entries(pairs), source=source), warnings
