"""Shared constants for shellcomplete."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "DEFAULT_DEFINITIONS_DIR",
    "DEFAULT_MAX_PATH_ENTRIES",
    "DEFINITION_SUFFIXES",
    "MAKEFILE_NAMES",
    "MAX_TREE_DEPTH",
    "RELOAD_POLICIES",
    "SSH_CONFIG_FILE",
    "SSH_KNOWN_HOSTS_FILE",
    "VIRTUALENV_HOME",
]

# Config file paths - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "shellcomplete" / "config.toml"
DEFAULT_DEFINITIONS_DIR = _xdg_config_home / "shellcomplete" / "completers"

# Levels below the command name: subcommand/flag, then nested flags
MAX_TREE_DEPTH = 2

# Recognized definition files, in the order the loader tries them
DEFINITION_SUFFIXES = (".yaml", ".yml", ".toml", ".json")

RELOAD_POLICIES = ("on_demand", "explicit")

DEFAULT_MAX_PATH_ENTRIES = 2000

MAKEFILE_NAMES = ("GNUmakefile", "makefile", "Makefile")

SSH_CONFIG_FILE = Path.home() / ".ssh" / "config"
SSH_KNOWN_HOSTS_FILE = Path.home() / ".ssh" / "known_hosts"

VIRTUALENV_HOME = Path(os.environ.get("VIRTUALENV_HOME") or Path.home() / ".virtualenvs")
