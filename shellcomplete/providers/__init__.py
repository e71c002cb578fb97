"""Candidate providers.

Each provider handles some context kinds; the engine queries them in a
fixed order:
- builtin: make targets, ssh hosts, vox environments
- tree: user and builtin definition trees
- command: first word of the line
- envvar: `$NAME` references
- path: filesystem entries, also the fallback when nothing else matched
"""

from __future__ import annotations

from .base import Provider
from .builtin import BuiltinCommandProvider, MakeTargets, SshHosts, VoxEnvironments
from .command import CommandNameProvider
from .envvar import EnvVarProvider
from .path import PathProvider
from .tree import DefinitionTreeProvider

__all__ = [
    "BuiltinCommandProvider",
    "CommandNameProvider",
    "DefinitionTreeProvider",
    "EnvVarProvider",
    "MakeTargets",
    "PathProvider",
    "Provider",
    "SshHosts",
    "VoxEnvironments",
]
