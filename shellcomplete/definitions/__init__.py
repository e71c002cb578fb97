"""Completion definitions for shellcomplete.

This package provides:
- models: Two-level definition records and load reports
- parsing: Raw data to definition, with depth truncation
- builtins: Static trees for make, ssh and vox
- loader: Definition file discovery and decoding
- store: The snapshot-publishing definition store
"""

from __future__ import annotations

from .builtins import BUILTIN_DEFINITIONS
from .models import CommandDefinition, DefinitionEntry, LoadReport
from .parsing import parse_definition
from .store import DefinitionStore

__all__ = [
    "BUILTIN_DEFINITIONS",
    "CommandDefinition",
    "DefinitionEntry",
    "DefinitionStore",
    "LoadReport",
    "parse_definition",
]
