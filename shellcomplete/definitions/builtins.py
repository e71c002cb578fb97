"""Completion trees shipped with shellcomplete.

The dynamic parts (makefile targets, ssh hosts, virtual environments) come
from `providers.builtin`; these trees only carry the static options.
"""

from __future__ import annotations

from typing import Any

__all__ = ["BUILTIN_DEFINITIONS"]

BUILTIN_DEFINITIONS: dict[str, Any] = {
    "make": {
        "-B": None,
        "-C": None,
        "-f": None,
        "-j": None,
        "-k": None,
        "-n": None,
        "-s": None,
        "--always-make": None,
        "--directory": None,
        "--dry-run": None,
        "--file": None,
        "--jobs": None,
        "--keep-going": None,
        "--silent": None,
    },
    "ssh": {
        "-A": None,
        "-C": None,
        "-F": None,
        "-i": None,
        "-J": None,
        "-l": None,
        "-L": None,
        "-N": None,
        "-o": None,
        "-p": None,
        "-R": None,
        "-t": None,
        "-v": None,
    },
    "vox": {
        "activate": None,
        "create": ["-p", "--python", "--system-site-packages"],
        "deactivate": None,
        "enter": None,
        "exit": None,
        "ls": None,
        "remove": None,
        "rm": None,
    },
}
