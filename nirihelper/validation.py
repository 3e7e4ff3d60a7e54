"""Configuration validation with schema definitions.

Provides declarative schema definitions (ConfigField, ConfigItems) used to
check the configuration file: type checking and fuzzy matching for typo
detection.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import Any

__all__ = [
    "BOOL_STRINGS",
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "find_similar_key",
    "format_config_error",
]

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS


@dataclass
class ConfigField:
    """Describes an expected configuration field for validation.

    Attributes:
        name: The configuration key name
        field_type: Expected type (str, int, float, bool) or tuple of types for union
        default: Default value if not provided
        description: Human-readable description
    """

    name: str
    field_type: type | tuple[type, ...] = str
    default: Any = None
    description: str = ""

    @property
    def type_name(self) -> str:
        """Return human-readable type name (e.g., 'float or int')."""
        if isinstance(self.field_type, tuple):
            return " or ".join(typ.__name__ for typ in self.field_type)
        return self.field_type.__name__


class ConfigItems(list):
    """A list of ConfigField items."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)


def find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Find a similar key using fuzzy matching."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Section name
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates one configuration section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate configuration against schema.

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)
            if value is None:
                continue

            type_error = self._check_type(field_def, value)
            if type_error:
                errors.append(type_error)

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:  # noqa: ANN401
        expected = field_def.field_type if isinstance(field_def.field_type, tuple) else (field_def.field_type,)
        for single_type in expected:
            if single_type is bool:
                if isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS):
                    return None
            elif single_type in {int, float}:
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    return None
            elif isinstance(value, single_type):
                return None

        suggestion = ""
        if bool in expected:
            suggestion = "Use true/false (without quotes)"
        elif int in expected or float in expected:
            suggestion = f"Use {field_def.name} = 42 (without quotes)"
        elif str in expected:
            suggestion = f'Use {field_def.name} = "value"'
        return format_config_error(
            self.section,
            field_def.name,
            f"Expected {field_def.type_name}, got {type(value).__name__}",
            suggestion,
        )

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = [f.name for f in schema]

        for key in self.config:
            if key in known_keys:
                continue

            similar = find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings
