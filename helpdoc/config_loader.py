"""Loading of the helpdoc TOML configuration.

The `[helpdoc]` table holds the run settings, each `[tools.<id>]` table one
program to document. Files listed in `[helpdoc] include` are merged in, and a
directory path merges every `.toml` file it contains, in name order.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles

from .config import SETTINGS_SCHEMA, TOOL_SCHEMA, Configuration
from .constants import CONFIG_FILE
from .discovery.models import HelpPattern, ToolSpec
from .models import HelpdocError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Reads configuration files and exposes settings and tools."""

    def __init__(self, log: logging.Logger) -> None:
        self.log = log
        self._config: dict[str, Any] = {}

    @property
    def config(self) -> dict[str, Any]:
        """The merged raw tables."""
        return self._config

    async def load(self, config_filename: str = "") -> dict[str, Any]:
        """Read a file or directory and merge it into the loaded tables.

        Args:
            config_filename: Path to a TOML file or a directory of them;
                CONFIG_FILE when empty. `~` and `$VARS` are expanded.

        Returns:
            The merged tables

        Raises:
            HelpdocError: A file is missing or is not valid TOML (already logged)
        """
        config = await self._open_config(config_filename)
        merge(self._config, config, replace=True)
        return self._config

    async def _open_config(self, config_filename: str = "") -> dict[str, Any]:
        fname = Path(os.path.expandvars(config_filename)).expanduser() if config_filename else CONFIG_FILE
        if fname.is_dir():
            config = await self._load_config_directory(fname)
        else:
            config = await self._load_config_file(fname)

        for extra_config in list(config.get("helpdoc", {}).get("include", [])):
            merge(config, await self._open_config(extra_config))
        return config

    async def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, await self._load_config_file(directory / toml_file))
        return config

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        if not fname.exists():
            self.log.critical("Config file not found! Please create %s", fname)
            raise HelpdocError(f"Config file not found: {fname}")
        self.log.info("Loading %s", fname)
        async with aiofiles.open(fname, encoding="utf-8") as f:
            content = await f.read()
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise HelpdocError(f"Invalid TOML in {fname}") from e

    def settings(self) -> Configuration:
        """Return the `[helpdoc]` table with schema defaults applied."""
        return Configuration(self._config.get("helpdoc", {}), logger=self.log, schema=SETTINGS_SCHEMA)

    def tools(self) -> list[ToolSpec]:
        """Return one ToolSpec per `[tools.<id>]` table, sorted by id.

        A `command_help_args` template without exactly one {command} placeholder
        is logged and dropped, leaving the tool to probing.
        """
        settings = self.settings()
        tools: list[ToolSpec] = []
        for tool_id, table in sorted(self._config.get("tools", {}).items()):
            if not isinstance(table, dict):
                self.log.warning("Ignoring tools.%s: expected a table", tool_id)
                continue
            conf = Configuration(table, logger=self.log, schema=TOOL_SCHEMA)
            command_help_args = conf.get_list("command_help_args")
            if command_help_args:
                try:
                    HelpPattern.from_args(command_help_args)
                except ValueError as e:
                    self.log.warning("Ignoring tools.%s.command_help_args: %s", tool_id, e)
                    command_help_args = []
            tools.append(
                ToolSpec(
                    id=tool_id,
                    binary=conf.get_str("binary", tool_id),
                    display_name=conf.get_str("display_name", tool_id),
                    description=conf.get_str("description") or None,
                    help_args=tuple(conf.get_list("help_args", settings.get_list("help_args"))),
                    command_help_args=tuple(command_help_args) if command_help_args else None,
                    enabled=conf.get_bool("enabled", True),
                )
            )
        return tools
