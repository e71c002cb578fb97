"""Default sources the providers read from.

Every function here may be swapped for another callable through
`Collaborators`, which is how the shell (or a test) plugs in its own
host list, environment or filesystem view. Failures are reported as
`ProviderUnavailable`; the providers turn them into "no candidates".
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .constants import MAKEFILE_NAMES, SSH_CONFIG_FILE, SSH_KNOWN_HOSTS_FILE, VIRTUALENV_HOME
from .models import ProviderUnavailable

__all__ = [
    "Collaborators",
    "list_virtualenvs",
    "path_executables",
    "process_environment",
    "read_make_targets",
    "read_ssh_hosts",
    "scan_directory",
]

DirectoryEntries = Iterable[tuple[str, bool]]

# "target other_target: deps" but not "VAR := value" nor "a:=b"
_MAKE_RULE = re.compile(r"^([^\s:#=%$][^:#=]*?)\s*::?(?!=)")


def read_make_targets(cwd: str | None = None) -> list[str]:
    """List the explicit targets of the makefile in `cwd`.

    Pattern rules and special targets (`.PHONY`, `.DEFAULT`...) are skipped.

    Args:
        cwd: Directory to look into (current directory if None)

    Returns:
        Target names in makefile order (empty if there is no makefile)

    Raises:
        ProviderUnavailable: If the makefile exists but can't be read
    """
    base = Path(cwd or os.getcwd())
    makefile = next((base / name for name in MAKEFILE_NAMES if (base / name).is_file()), None)
    if makefile is None:
        return []
    try:
        content = makefile.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        msg = f"cannot read {makefile}: {e}"
        raise ProviderUnavailable(msg) from e

    targets: list[str] = []
    for line in content.splitlines():
        if line.startswith("\t"):
            continue
        match = _MAKE_RULE.match(line)
        if not match:
            continue
        for target in match.group(1).split():
            if target.startswith(".") or "%" in target or "$" in target or target in targets:
                continue
            targets.append(target)
    return targets


def _hosts_from_config(path: Path) -> list[str]:
    """Read `Host` aliases from an ssh config file, wildcards excluded."""
    hosts: list[str] = []
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        parts = line.strip().split()
        if len(parts) < 2 or parts[0].lower() != "host":  # noqa: PLR2004
            continue
        hosts.extend(name for name in parts[1:] if not any(c in name for c in "*?!"))
    return hosts


def _hosts_from_known_hosts(path: Path) -> list[str]:
    """Read host names from a known_hosts file, hashed entries excluded."""
    hosts: list[str] = []
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "|", "@")):
            continue
        for name in line.split()[0].split(","):
            if name.startswith("["):
                name = name[1:].split("]", 1)[0]
            hosts.append(name)
    return hosts


def read_ssh_hosts(config_file: Path = SSH_CONFIG_FILE, known_hosts: Path = SSH_KNOWN_HOSTS_FILE) -> list[str]:
    """List host aliases from the ssh config, then known hosts.

    Args:
        config_file: The ssh client configuration
        known_hosts: The known_hosts file

    Returns:
        Host names, duplicates removed (empty if neither file exists)

    Raises:
        ProviderUnavailable: If an existing file can't be read
    """
    hosts: list[str] = []
    try:
        if config_file.is_file():
            hosts.extend(_hosts_from_config(config_file))
        if known_hosts.is_file():
            hosts.extend(_hosts_from_known_hosts(known_hosts))
    except OSError as e:
        msg = f"cannot read ssh hosts: {e}"
        raise ProviderUnavailable(msg) from e
    return list(dict.fromkeys(hosts))


def list_virtualenvs(home: Path = VIRTUALENV_HOME) -> list[str]:
    """List the virtual environments found in `home`.

    Args:
        home: Directory holding one sub-directory per environment

    Returns:
        Environment names (empty if `home` does not exist)

    Raises:
        ProviderUnavailable: If `home` exists but can't be listed
    """
    if not home.is_dir():
        return []
    try:
        return sorted(entry.name for entry in home.iterdir() if entry.is_dir() and not entry.name.startswith("."))
    except OSError as e:
        msg = f"cannot list {home}: {e}"
        raise ProviderUnavailable(msg) from e


def process_environment() -> Mapping[str, str]:
    """Return the current process environment."""
    return os.environ


def scan_directory(path: str) -> Iterator[tuple[str, bool]]:
    """Yield (name, is_directory) for the entries of `path`.

    Entries are produced lazily so the caller can stop early on huge
    directories.

    Raises:
        OSError: If `path` can't be listed
    """
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            yield entry.name, is_dir


def path_executables() -> list[str]:
    """List executable names found on $PATH."""
    names: set[str] = set()
    for directory in os.environ.get("PATH", "").split(os.pathsep):
        if not directory:
            continue
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if entry.is_file() and os.access(entry.path, os.X_OK):
                            names.add(entry.name)
                    except OSError:
                        continue
        except OSError:
            continue
    return sorted(names)


@dataclass
class Collaborators:
    """External sources used by the providers, all injectable."""

    make_targets: Callable[[], list[str]] = read_make_targets
    ssh_hosts: Callable[[], list[str]] = read_ssh_hosts
    vox_envs: Callable[[], list[str]] = list_virtualenvs
    environment: Callable[[], Mapping[str, str]] = process_environment
    list_directory: Callable[[str], DirectoryEntries] = scan_directory
    executables: Callable[[], list[str]] = path_executables
    shell_variables: dict[str, str] = field(default_factory=dict)
