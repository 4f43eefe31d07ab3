"""Data models for parsed help text."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "CommandSummary",
    "EnvDoc",
    "OptionDoc",
    "ParsedHelp",
    "Section",
    "SplitHelp",
    "UsageDoc",
    "UsageTokens",
]


@dataclass
class Section:
    """A run of lines introduced by a recognised header."""

    name: str  # header text without trailing colon, e.g. "CORE COMMANDS"
    lines: list[str] = field(default_factory=list)


@dataclass
class SplitHelp:
    """Help text cut into sections, usage lines and the headerless preamble."""

    sections: list[Section]
    usage_lines: list[str]
    preamble: list[str]


@dataclass
class CommandSummary:
    """A command listed in help output.

    `has_subcommands` is only set when the listing line itself contained a
    subcommand placeholder such as `<command>`.
    """

    name: str
    summary: str
    has_subcommands: bool | None = None
    doc_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict, omitting unset optional fields."""
        data: dict[str, Any] = {"name": self.name, "summary": self.summary}
        if self.has_subcommands is not None:
            data["has_subcommands"] = self.has_subcommands
        if self.doc_path is not None:
            data["doc_path"] = self.doc_path
        return data


@dataclass
class OptionDoc:
    """A flag specification (e.g. "-i, --ignore-case") and its description."""

    flags: str
    description: str


@dataclass
class EnvDoc:
    """An environment variable and its description."""

    name: str
    description: str


@dataclass
class UsageDoc:
    """Positional arguments from the usage lines."""

    required_args: list[str] = field(default_factory=list)
    optional_args: list[str] = field(default_factory=list)


@dataclass
class UsageTokens:
    """Everything extracted from the usage lines, flags included."""

    required_args: list[str] = field(default_factory=list)
    optional_args: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)

    def to_usage_doc(self) -> UsageDoc:
        """Drop the flags."""
        return UsageDoc(required_args=list(self.required_args), optional_args=list(self.optional_args))


@dataclass
class ParsedHelp:
    """Structured content of one help text.

    `warnings` holds diagnostics rather than errors: parsing never fails.
    """

    usage_lines: list[str] = field(default_factory=list)
    commands: list[CommandSummary] = field(default_factory=list)
    options: list[OptionDoc] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    env: list[EnvDoc] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict."""
        data = dataclasses.asdict(self)
        data["commands"] = [command.to_dict() for command in self.commands]
        return data
