"""Configuration file loading and typed access.

The file is optional: without it every command behaves with the built-in
defaults. Layout::

    [margins]
    bottom = 48

    [follow_mode]
    helper = "nirius"

    [consume]
    strict = false
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles

from .constants import (
    CONFIG_FILE,
    DEFAULT_BOTTOM_MARGIN,
    DEFAULT_FOLLOW_MODE_HELPER,
    DEFAULT_FOLLOW_MODE_SUBCOMMAND,
    DEFAULT_LEFT_MARGIN,
    DEFAULT_RIGHT_MARGIN,
    DEFAULT_TOP_MARGIN,
)
from .logging_setup import get_logger
from .models import ConfigError
from .validation import BOOL_FALSE_STRINGS, ConfigField, ConfigItems, ConfigValidator, find_similar_key

if TYPE_CHECKING:
    import logging

__all__ = ["CONFIG_SCHEMA", "Configuration", "Margins", "coerce_to_bool", "default_config", "load_config"]

ConfigValueType = float | bool | str | list | dict

CONFIG_SCHEMA: dict[str, ConfigItems] = {
    "margins": ConfigItems(
        ConfigField("left", (int, float), default=DEFAULT_LEFT_MARGIN, description="Gap kept on the left edge"),
        ConfigField("right", (int, float), default=DEFAULT_RIGHT_MARGIN, description="Gap kept on the right edge"),
        ConfigField("top", (int, float), default=DEFAULT_TOP_MARGIN, description="Gap kept on the top edge"),
        ConfigField("bottom", (int, float), default=DEFAULT_BOTTOM_MARGIN, description="Gap kept on the bottom edge (panel height)"),
    ),
    "follow_mode": ConfigItems(
        ConfigField("helper", str, default=DEFAULT_FOLLOW_MODE_HELPER, description="Program implementing follow mode"),
        ConfigField("subcommand", str, default=DEFAULT_FOLLOW_MODE_SUBCOMMAND, description="Argument passed to the helper"),
    ),
    "consume": ConfigItems(
        ConfigField("strict", bool, default=False, description="Fail when niri rejects one of the final consume actions"),
    ),
}


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """One configuration section, with schema-aware defaults and typed accessors."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        super().__init__(*args, **kwargs)
        self.log = logger
        self._schema_defaults: dict[str, ConfigValueType] = {}
        if schema:
            self._schema_defaults = {field.name: field.default for field in schema if field.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Get a value, falling back to the schema default then to `default`."""
        if name in self:
            return dict.get(self, name)  # type: ignore[return-value]
        if name in self._schema_defaults:
            return self._schema_defaults[name]
        return default

    def get_bool(self, name: str, default: bool = False) -> bool:
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            self.log.warning("Invalid integer value for %s: %s", name, value)
            return default

    def get_float(self, name: str, default: float = 0.0) -> float:
        value = self.get(name)
        if value is None:
            return default
        try:
            return float(value)  # type: ignore[arg-type]
        except (ValueError, TypeError):
            self.log.warning("Invalid float value for %s: %s", name, value)
            return default

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        if value is None:
            return default
        return str(value)


@dataclass(frozen=True)
class Margins:
    """Gaps kept between a snapped floating window and the output edges."""

    left: float = DEFAULT_LEFT_MARGIN
    right: float = DEFAULT_RIGHT_MARGIN
    top: float = DEFAULT_TOP_MARGIN
    bottom: float = DEFAULT_BOTTOM_MARGIN

    @classmethod
    def from_config(cls, section: Configuration) -> Margins:
        return cls(
            left=section.get_float("left"),
            right=section.get_float("right"),
            top=section.get_float("top"),
            bottom=section.get_float("bottom"),
        )


def _build_sections(raw: dict[str, Any], logger: logging.Logger) -> dict[str, Configuration]:
    """Validate `raw` and wrap every known section.

    Raises:
        ConfigError: on type errors
    """
    errors: list[str] = []
    sections: dict[str, Configuration] = {}
    for name, schema in CONFIG_SCHEMA.items():
        content = raw.get(name, {})
        if not isinstance(content, dict):
            errors.append(f"[{name}] Expected a section, got {type(content).__name__}")
            continue
        validator = ConfigValidator(content, name, logger)
        errors.extend(validator.validate(schema))
        validator.warn_unknown_keys(schema)
        sections[name] = Configuration(content, logger=logger, schema=schema)

    for name in raw:
        if name not in CONFIG_SCHEMA:
            similar = find_similar_key(name, list(CONFIG_SCHEMA))
            hint = f" (did you mean [{similar}]?)" if similar else " - will be ignored"
            logger.warning("Unknown section [%s]%s", name, hint)

    if errors:
        raise ConfigError("\n".join(errors))
    return sections


def default_config(logger: logging.Logger | None = None) -> dict[str, Configuration]:
    """Return the configuration used when no file exists."""
    return _build_sections({}, logger or get_logger("config"))


async def load_config(filename: str | Path | None = None, logger: logging.Logger | None = None) -> dict[str, Configuration]:
    """Load the configuration file.

    Args:
        filename: explicit file; if None the default location is used and may be missing
        logger: logger to use, defaults to the "config" logger

    Returns:
        Mapping of section name to Configuration, every known section present

    Raises:
        ConfigError: if an explicit file is missing, or any file is invalid
    """
    logger = logger or get_logger("config")
    path = Path(filename).expanduser() if filename else CONFIG_FILE

    if not path.exists():
        if filename:
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        logger.debug("No config file at %s, using defaults", path)
        return default_config(logger)

    logger.info("Loading %s", path)
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
    except OSError as e:
        msg = f"Problem reading {path}: {e}"
        raise ConfigError(msg) from e
    try:
        raw = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        msg = f"Problem reading {path}: {e}"
        raise ConfigError(msg) from e
    return _build_sections(raw, logger)
