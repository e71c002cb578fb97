"""Schema of the `[shellcomplete]` section and its checks.

Messages name the section and the key, and suggest a fix when one is
obvious: a close key name, or the list of valid choices.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS
from .constants import DEFAULT_DEFINITIONS_DIR, DEFAULT_MAX_PATH_ENTRIES, RELOAD_POLICIES

__all__ = [
    "ENGINE_SCHEMA",
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One accepted key.

    Attributes:
        name: The key
        field_type: Expected type (str, int, bool, dict)
        default: Value used when the key is missing
        description: What the key controls
        choices: Valid values for enum-like keys
        minimum: Lowest accepted value for int keys
    """

    name: str
    field_type: type = str
    default: Any = None
    description: str = ""
    choices: list | None = None
    minimum: int | None = None

    def type_problem(self, value: Any) -> tuple[str, str] | None:  # noqa: ANN401
        """Return (message, hint) when `value` can't be read as `field_type`."""
        got = f"Expected {self.field_type.__name__}, got {type(value).__name__}"
        if self.field_type is bool:
            if isinstance(value, bool) or (isinstance(value, str) and value.strip().lower() in BOOL_STRINGS):
                return None
            return got, "Use true/false (without quotes)"
        if self.field_type is int:
            if isinstance(value, bool):
                return got, f"Use {self.name} = 42"
            try:
                number = int(value)
            except (ValueError, TypeError):
                return got, f"Use {self.name} = 42 (without quotes)"
            if self.minimum is not None and number < self.minimum:
                return f"Expected a value >= {self.minimum}, got {number}", f"Use {self.name} = {self.minimum} or more"
            return None
        return None if isinstance(value, self.field_type) else (got, "")


class ConfigItems(list):
    """The fields of a section, looked up by name with `get`."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def get(self, name: str) -> ConfigField | None:
        return next((item for item in self if item.name == name), None)


ENGINE_SCHEMA = ConfigItems(
    ConfigField("definitions_dir", str, default=str(DEFAULT_DEFINITIONS_DIR), description="Directory of per-command definition files"),
    ConfigField("reload", str, default="on_demand", description="When user definitions are re-read", choices=list(RELOAD_POLICIES)),
    ConfigField("show_hidden", bool, default=False, description="Offer dot-files without a leading dot"),
    ConfigField("max_path_entries", int, default=DEFAULT_MAX_PATH_ENTRIES, minimum=0, description="Directory entries read per path completion"),
    ConfigField("aliases", dict, description="Shell aliases applied to the first word"),
)


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Return the known key closest to a misspelled one, if any."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Section name
        field: Key having the error
        message: Error description
        suggestion: Optional hint to fix it

    Returns:
        The message, hint appended after an arrow
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    return f"{msg} -> {suggestion}" if suggestion else msg


class ConfigValidator:
    """Check a loaded section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The section to check
            section: Section name for the messages
            logger: Logger instance for warnings
        """
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return one error message per key holding an unusable value."""
        errors = []
        for item in schema:
            value = self.config.get(item.name)
            if value is None:
                continue
            problem = item.type_problem(value)
            if problem is None and item.choices is not None and value not in item.choices:
                problem = (f"Invalid value {value!r}", "Valid options: " + ", ".join(repr(choice) for choice in item.choices))
            if problem is not None:
                errors.append(format_config_error(self.section, item.name, *problem))
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log and return a warning for each key the schema does not declare."""
        known_keys = [item.name for item in schema]
        warnings = []
        for key in self.config:
            if key in known_keys:
                continue
            similar = _find_similar_key(key, known_keys)
            hint = f"did you mean '{similar}'?" if similar else "will be ignored"
            msg = f"[{self.section}] Unknown option '{key}' ({hint})"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
