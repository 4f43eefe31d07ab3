"""Typed access to the `[helpdoc]` settings and `[tools.*]` tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .constants import DEFAULT_HELP_ARGS, DEFAULT_MAX_DEPTH

if TYPE_CHECKING:
    import logging

__all__ = ["BOOL_FALSE_STRINGS", "SETTINGS_SCHEMA", "TOOL_SCHEMA", "ConfigField", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Interpret a loosely typed TOML value as a boolean.

    Strings are false when empty or listed in BOOL_FALSE_STRINGS, true
    otherwise; None gives `default`.
    """
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        return bool(text) and text not in BOOL_FALSE_STRINGS
    return bool(value)


@dataclass
class ConfigField:
    """A known key, its default and what it is for."""

    name: str
    default: Any = None
    description: str = ""


ConfigItems = list[ConfigField]

SETTINGS_SCHEMA: ConfigItems = [
    ConfigField("max_depth", DEFAULT_MAX_DEPTH, "Subcommand levels to document below the top-level help"),
    ConfigField("help_args", list(DEFAULT_HELP_ARGS), "Arguments requesting top-level help"),
    ConfigField("timeout", 0.0, "Seconds before a help invocation is stopped (0 disables)"),
    ConfigField("probe", True, "Probe for a subcommand help convention when none is configured"),
]

TOOL_SCHEMA: ConfigItems = [
    ConfigField("enabled", True, "Whether the tool is documented"),
    ConfigField("command_help_args", [], "Subcommand help template, with a {command} placeholder"),
]


class Configuration(dict):
    """A TOML table with typed getters.

    Missing keys fall back to the schema defaults, then to the getter's
    `default` argument. Values of the wrong type are logged and replaced by
    the default.
    """

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        super().__init__(*args, **kwargs)
        self.log = logger
        self._defaults: dict[str, Any] = {item.name: item.default for item in schema or [] if item.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Return the value of name, its schema default, or `default`."""
        if name in self:
            return dict.get(self, name)  # type: ignore[no-any-return]
        return self._defaults.get(name, default)  # type: ignore[no-any-return]

    def _convert(self, name: str, default: Any, kind: Callable[[Any], Any]) -> Any:  # noqa: ANN401
        value = self.get(name)
        if value is None:
            return default
        try:
            return kind(value)
        except (ValueError, TypeError):
            self.log.warning("Invalid %s value for %s: %s", kind.__name__, name, value)
            return default

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean, accepting strings such as "no" or "off"."""
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        """Get an integer, `default` if missing or not a number."""
        return int(self._convert(name, default, int))

    def get_float(self, name: str, default: float = 0.0) -> float:
        """Get a float, `default` if missing or not a number."""
        return float(self._convert(name, default, float))

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else str(value)

    def get_list(self, name: str, default: list[str] | None = None) -> list[str]:
        """Get a list of strings.

        A plain string is split on whitespace, so `help_args = "-h"` works.

        Args:
            name: The key name
            default: Returned when the key is missing or holds another type

        Returns:
            A new list
        """
        value = self.get(name)
        if isinstance(value, str):
            return value.split()
        if isinstance(value, list):
            return [str(item) for item in value]
        if value is not None:
            self.log.warning("Invalid list value for %s: %s", name, value)
        return list(default or [])
