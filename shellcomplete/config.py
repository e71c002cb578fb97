"""Typed access to the `[shellcomplete]` settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_STRINGS", "BOOL_TRUE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Read a loosely typed boolean.

    Any non-empty string is true, except the words of BOOL_FALSE_STRINGS.
    """
    if value is None:
        return default
    if not isinstance(value, str):
        return bool(value)
    text = value.strip().lower()
    return bool(text) and text not in BOOL_FALSE_STRINGS


class Configuration(dict):
    """The settings read from the file, falling back to the schema defaults.

    Getters never raise: a value of the wrong type is logged and replaced
    by the default, so a half-broken config file still gives a working engine.
    """

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Initialize the configuration object.

        Args:
            *args: Arguments for dict
            logger: Logger instance to use for warnings
            schema: ConfigField definitions providing the defaults
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger
        self.defaults: dict[str, ConfigValueType] = {}
        if schema:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Take the defaults declared by `schema`."""
        self.defaults = {item.name: item.default for item in schema if item.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Return the value set in the file, else the schema default, else `default`."""
        if name in self:
            return self[name]
        return self.defaults.get(name, default)

    def _invalid(self, name: str, value: Any, expected: str, default: Any) -> Any:  # noqa: ANN401
        self.log.warning("Invalid %s value for %s: %r, using %r", expected, name, value, default)
        return default

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean, accepting "yes", "off"... as well."""
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        """Get an integer, `default` if missing or invalid."""
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            return self._invalid(name, value, "integer", default)

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else str(value)

    def get_dict(self, name: str) -> dict[str, str]:
        """Get a table of strings, such as the aliases."""
        value = self.get(name)
        if value is None:
            return {}
        if not isinstance(value, dict):
            return self._invalid(name, value, "table", {})
        return {str(key): str(item) for key, item in value.items()}

    def get_path(self, name: str) -> Path:
        """Get a path, `~` and environment variables expanded."""
        return Path(os.path.expandvars(self.get_str(name))).expanduser()
