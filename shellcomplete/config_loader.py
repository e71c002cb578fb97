"""Configuration file loading.

The engine reads the `[shellcomplete]` table of a TOML file. Everything is
optional: a missing file gives the schema defaults.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .config import Configuration
from .constants import CONFIG_FILE
from .models import ConfigError
from .validation import ENGINE_SCHEMA, ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["SECTION", "ConfigLoader"]

SECTION = "shellcomplete"


class ConfigLoader:
    """Loads and validates the engine configuration."""

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def load(self, config_filename: str | Path = "") -> Configuration:
        """Load the configuration.

        Args:
            config_filename: Optional path to the config file.
                             If empty, uses the default CONFIG_FILE location.

        Returns:
            The configuration, schema defaults applied

        Raises:
            ConfigError: If the file exists but can't be parsed
        """
        fname = Path(os.path.expandvars(str(config_filename))).expanduser() if config_filename else CONFIG_FILE
        section = self._load_config_file(fname).get(SECTION, {})
        if not isinstance(section, dict):
            msg = f"{fname}: [{SECTION}] must be a table"
            self.log.error(msg)
            raise ConfigError(msg)

        validator = ConfigValidator(section, SECTION, self.log)
        self.errors = validator.validate(ENGINE_SCHEMA)
        self.warnings = validator.warn_unknown_keys(ENGINE_SCHEMA)
        for error in self.errors:
            self.log.error(error)
        return Configuration(section, logger=self.log, schema=ENGINE_SCHEMA)

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single configuration file.

        Args:
            fname: Path to the configuration file

        Returns:
            Decoded content (empty if the file does not exist)

        Raises:
            ConfigError: If the file can't be read or has syntax errors
        """
        if not fname.exists():
            self.log.debug("No config file at %s, using defaults", fname)
            return {}
        self.log.info("Loading %s", fname)
        try:
            with fname.open("rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            self.log.error("Problem reading %s: %s", fname, e)  # noqa: TRY400
            msg = f"{fname}: {e}"
            raise ConfigError(msg) from e
