"""Reading definition files from the completers directory.

One file per command: `pip.yaml` completes `pip`. YAML is the primary
format; TOML and JSON files are read as well.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml

from ..constants import DEFINITION_SUFFIXES
from ..models import DefinitionParseError

__all__ = ["directory_signature", "iter_definition_files", "read_definition_file"]


def iter_definition_files(directory: Path) -> list[Path]:
    """List definition files of `directory`, non-recursively, in load order.

    Hidden files and unknown extensions are skipped. Files are sorted by
    name so that the last one loaded for a command is deterministic.

    Args:
        directory: The completers directory

    Returns:
        Sorted list of file paths (empty if the directory does not exist)
    """
    if not directory.is_dir():
        return []
    return sorted(
        (path for path in directory.iterdir() if path.suffix in DEFINITION_SUFFIXES and not path.name.startswith(".") and path.is_file()),
        key=lambda path: path.name,
    )


def directory_signature(directory: Path) -> tuple[tuple[str, int, int], ...] | None:
    """Return a cheap fingerprint of the definition files.

    Used to decide whether an on-demand reload is needed.

    Args:
        directory: The completers directory

    Returns:
        Tuple of (name, mtime_ns, size) per file, None if the directory is missing
    """
    try:
        files = iter_definition_files(directory)
        if not files and not directory.is_dir():
            return None
        signature = []
        for path in files:
            stat = path.stat()
            signature.append((path.name, stat.st_mtime_ns, stat.st_size))
    except OSError:
        return None
    return tuple(signature)


def read_definition_file(path: Path) -> Any:  # noqa: ANN401
    """Decode a definition file according to its extension.

    Args:
        path: The file to read

    Returns:
        The decoded content

    Raises:
        DefinitionParseError: If the file can't be read or decoded
    """
    try:
        if path.suffix == ".toml":
            with path.open("rb") as f:
                return tomllib.load(f)
        content = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"{path}: cannot read file: {e}"
        raise DefinitionParseError(msg) from e
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError, ValueError) as e:
        msg = f"{path}: syntax error: {e}"
        raise DefinitionParseError(msg) from e
    except RecursionError as e:
        msg = f"{path}: nested too deeply to be decoded"
        raise DefinitionParseError(msg) from e
