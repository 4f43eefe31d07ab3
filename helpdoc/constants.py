"""Shared constants for helpdoc."""

import os
from pathlib import Path

__all__ = [
    "COMMAND_PLACEHOLDER",
    "CONFIG_FILE",
    "DEFAULT_HELP_ARGS",
    "DEFAULT_MAX_DEPTH",
    "FALLBACK_HELP_ARGS",
    "NO_COMMANDS_WARNING",
    "NO_OPTIONS_WARNING",
    "PROBE_TEMPLATES",
    "RUN_ENVIRONMENT",
]

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "helpdoc" / "config.toml"

DEFAULT_HELP_ARGS: tuple[str, ...] = ("--help",)

# Tried in order when the requested top-level help shows nothing useful
FALLBACK_HELP_ARGS: tuple[tuple[str, ...], ...] = (("help",), ("-h",), ())

COMMAND_PLACEHOLDER = "{command}"

# Subcommand help conventions, in probing order
PROBE_TEMPLATES: tuple[tuple[str, ...], ...] = (
    (COMMAND_PLACEHOLDER, "--help"),
    (COMMAND_PLACEHOLDER, "-h"),
    ("help", COMMAND_PLACEHOLDER),
)

# Levels below the top-level help (top-level commands are depth 1)
DEFAULT_MAX_DEPTH = 2

NO_COMMANDS_WARNING = "No commands detected."
NO_OPTIONS_WARNING = "No options detected."

# Applied on top of the inherited environment so help output is stable
RUN_ENVIRONMENT: dict[str, str] = {
    "LANG": "C",
    "LC_ALL": "C",
    "TERM": "dumb",
    "NO_COLOR": "1",
    "CLICOLOR": "0",
    "PAGER": "cat",
    "GIT_PAGER": "cat",
    "MANPAGER": "cat",
    "LESS": "FRX",
}
