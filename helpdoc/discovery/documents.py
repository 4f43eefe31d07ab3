"""Building ToolDoc and CommandDoc records from help invocations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ..constants import NO_OPTIONS_WARNING
from ..parsing import parse_help
from ..parsing.models import CommandSummary, OptionDoc, ParsedHelp, UsageTokens
from ..parsing.usage import extract_usage_tokens
from ..utils import compute_hash, slugify
from .models import CommandDoc, ToolDoc

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..models import RunResult
    from .models import ToolSpec

__all__ = ["NodeHelp", "build_command_doc", "build_tool_doc", "command_doc_path", "read_node_help", "utc_now_iso"]


def utc_now_iso() -> str:
    """Return the current UTC time in ISO 8601 format."""
    return datetime.now(UTC).isoformat()


def command_doc_path(path: Sequence[str]) -> str:
    """Return the relative document path of a command path."""
    return f"commands/{slugify(' '.join(path))}/command.md"


@dataclass
class NodeHelp:
    """A parsed help invocation with its usage tokens and final warnings."""

    parsed: ParsedHelp
    tokens: UsageTokens
    options: list[OptionDoc]
    warnings: list[str]


def read_node_help(result: RunResult, binary: str) -> NodeHelp:
    """Parse a run result, falling back to usage flags for the option list.

    A failed run still has whatever output it produced parsed; the failure
    itself becomes a warning.

    Args:
        result: The captured invocation
        binary: The program, stripped from the usage arguments

    Returns:
        The assembled help of the node
    """
    parsed = parse_help(result.output)
    tokens = extract_usage_tokens(parsed.usage_lines, binary)
    warnings = list(parsed.warnings)
    options = list(parsed.options)

    if not options and tokens.flags:
        options = [OptionDoc(flags=flag, description="") for flag in tokens.flags]
        if NO_OPTIONS_WARNING in warnings:
            warnings.remove(NO_OPTIONS_WARNING)

    failure = result.describe_failure()
    if failure:
        warnings.append(failure)
    return NodeHelp(parsed=parsed, tokens=tokens, options=options, warnings=warnings)


def build_tool_doc(
    tool: ToolSpec,
    help_args: Sequence[str],
    result: RunResult,
    link_commands: bool = False,
    generated_at: str | None = None,
) -> ToolDoc:
    """Build the root node of a tool.

    Args:
        tool: The documented tool
        help_args: The arguments that produced `result`
        result: The top-level help invocation
        link_commands: Set `doc_path` on every command (when subcommand docs exist)
        generated_at: Timestamp override

    Returns:
        The root document
    """
    node = read_node_help(result, tool.binary)
    commands = [
        CommandSummary(
            name=command.name,
            summary=command.summary,
            has_subcommands=command.has_subcommands,
            doc_path=command_doc_path([command.name]) if link_commands else None,
        )
        for command in node.parsed.commands
    ]
    return ToolDoc(
        id=tool.id,
        display_name=tool.display_name or tool.id,
        binary=tool.binary,
        description=tool.description,
        generated_at=generated_at or utc_now_iso(),
        help_args=list(help_args),
        help_exit_code=result.exit_code,
        help_hash=compute_hash(result.output),
        usage=node.tokens.to_usage_doc(),
        commands=commands,
        options=node.options,
        examples=node.parsed.examples,
        env=node.parsed.env,
        warnings=node.warnings,
    )


def build_command_doc(
    tool_id: str,
    binary: str,
    path: Sequence[str],
    help_args: Sequence[str],
    result: RunResult,
    summary: str | None = None,
    generated_at: str | None = None,
) -> CommandDoc:
    """Build the node of one command path.

    The subcommands this node's own help lists become references carrying
    their doc path.

    Args:
        tool_id: Identifier of the documented tool
        binary: The program
        path: Command path tokens, e.g. ["remote", "add"]
        help_args: The arguments that produced `result`
        result: The command's help invocation
        summary: The summary the parent listing gave for this command
        generated_at: Timestamp override

    Returns:
        The command document
    """
    node = read_node_help(result, binary)
    command = " ".join(path)
    subcommands = [
        CommandSummary(
            name=child.name,
            summary=child.summary,
            has_subcommands=child.has_subcommands,
            doc_path=command_doc_path([*path, child.name]),
        )
        for child in node.parsed.commands
    ]
    return CommandDoc(
        tool_id=tool_id,
        command=command,
        slug=slugify(command),
        depth=len(path),
        summary=summary,
        binary=binary,
        generated_at=generated_at or utc_now_iso(),
        help_args=list(help_args),
        help_exit_code=result.exit_code,
        usage=node.tokens.to_usage_doc(),
        options=node.options,
        examples=node.parsed.examples,
        env=node.parsed.env,
        warnings=node.warnings,
        subcommands=subcommands,
    )
