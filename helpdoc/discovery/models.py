"""Data models for discovered documentation trees."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from ..constants import COMMAND_PLACEHOLDER, DEFAULT_HELP_ARGS

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..parsing.models import CommandSummary, EnvDoc, OptionDoc, UsageDoc

__all__ = ["CommandDoc", "Documentation", "HelpPattern", "ToolDoc", "ToolSpec"]


@dataclass(frozen=True)
class HelpPattern:
    """How to request help for any subcommand of a binary.

    `args` holds exactly one COMMAND_PLACEHOLDER, e.g. ("help", "{command}").
    """

    args: tuple[str, ...]

    def __post_init__(self) -> None:
        if sum(COMMAND_PLACEHOLDER in arg for arg in self.args) != 1:
            msg = f"Help pattern needs exactly one {COMMAND_PLACEHOLDER} placeholder: {list(self.args)}"
            raise ValueError(msg)

    @classmethod
    def from_args(cls, args: Iterable[str]) -> HelpPattern:
        """Build a pattern from a token list such as ["help", "{command}"]."""
        return cls(tuple(args))

    def expand(self, path: Sequence[str]) -> list[str]:
        """Return the arguments requesting help for a command path.

        A standalone placeholder is replaced by the path tokens; a placeholder
        embedded in a larger argument gets the space-joined path.

        Eg:
            HelpPattern(("help", "{command}")).expand(["remote", "add"]) == ["help", "remote", "add"]
        """
        args: list[str] = []
        for arg in self.args:
            if arg == COMMAND_PLACEHOLDER:
                args.extend(path)
            else:
                args.append(arg.replace(COMMAND_PLACEHOLDER, " ".join(path)))
        return args


@dataclass(frozen=True)
class ToolSpec:
    """A program to document, as configured by the caller."""

    id: str
    binary: str
    display_name: str = ""
    description: str | None = None
    help_args: tuple[str, ...] = DEFAULT_HELP_ARGS
    command_help_args: tuple[str, ...] | None = None
    enabled: bool = True


def _commands_as_dicts(data: dict[str, Any], key: str, commands: list[CommandSummary]) -> dict[str, Any]:
    data[key] = [command.to_dict() for command in commands]
    return data


@dataclass(frozen=True)
class ToolDoc:
    """Root node: the top-level help of a tool."""

    id: str
    display_name: str
    binary: str
    generated_at: str
    help_args: list[str]
    help_exit_code: int | None
    help_hash: str
    usage: UsageDoc
    commands: list[CommandSummary]
    options: list[OptionDoc]
    examples: list[str]
    env: list[EnvDoc]
    warnings: list[str]
    description: str | None = None
    kind: Literal["tool"] = "tool"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict."""
        return _commands_as_dicts(dataclasses.asdict(self), "commands", self.commands)


@dataclass(frozen=True)
class CommandDoc:
    """Non-root node: the help of one command path.

    Children are referenced through `subcommands` (name, summary and doc
    path), never embedded.
    """

    tool_id: str
    command: str  # space-joined path, e.g. "remote add"
    slug: str
    depth: int
    binary: str
    generated_at: str
    help_args: list[str]
    help_exit_code: int | None
    usage: UsageDoc
    options: list[OptionDoc]
    examples: list[str]
    env: list[EnvDoc]
    warnings: list[str]
    summary: str | None = None
    subcommands: list[CommandSummary] = field(default_factory=list)
    kind: Literal["command"] = "command"

    @property
    def path(self) -> list[str]:
        """Return the command path tokens."""
        return self.command.split(" ")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict."""
        return _commands_as_dicts(dataclasses.asdict(self), "subcommands", self.subcommands)


@dataclass(frozen=True)
class Documentation:
    """Everything discovered for one tool."""

    tool: ToolDoc
    commands: list[CommandDoc] = field(default_factory=list)
    pattern: HelpPattern | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict."""
        return {
            "tool": self.tool.to_dict(),
            "commands": [command.to_dict() for command in self.commands],
            "command_help_args": list(self.pattern.args) if self.pattern else None,
        }
