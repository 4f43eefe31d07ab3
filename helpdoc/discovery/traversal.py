"""Depth-bounded walk of a tool's command tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import DEFAULT_MAX_DEPTH
from ..logging_setup import get_logger
from .documents import build_command_doc

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..models import RunFunction
    from ..parsing.models import CommandSummary
    from .models import CommandDoc, HelpPattern

__all__ = ["traverse_commands"]

log = get_logger("helpdoc.traversal")


async def traverse_commands(
    tool_id: str,
    binary: str,
    commands: Sequence[CommandSummary],
    pattern: HelpPattern,
    run: RunFunction,
    max_depth: int = DEFAULT_MAX_DEPTH,
    generated_at: str | None = None,
) -> list[CommandDoc]:
    """Document every command reachable within max_depth levels.

    Top-level commands are depth 1. A node only follows the subcommands its
    own help listed, so the walk cannot revisit a path except through a CLI
    listing itself, which max_depth bounds. Invocations run one at a time.

    Args:
        tool_id: Identifier of the documented tool
        binary: The program
        commands: The top-level command list
        pattern: The subcommand help template
        run: The invocation primitive
        max_depth: Deepest level to document
        generated_at: Timestamp override

    Returns:
        One CommandDoc per visited path, in document pre-order
    """
    docs: list[CommandDoc] = []
    if max_depth < 1:
        return docs

    # (path, summary from the parent listing, depth); reversed so pops follow listing order
    worklist: list[tuple[tuple[str, ...], str | None, int]] = [((command.name,), command.summary, 1) for command in reversed(commands)]

    while worklist:
        path, summary, depth = worklist.pop()
        args = pattern.expand(path)
        result = await run(binary, args)
        if result.failed:
            log.warning("%s %s: %s", binary, " ".join(args), result.describe_failure())

        doc = build_command_doc(tool_id, binary, path, args, result, summary=summary, generated_at=generated_at)
        docs.append(doc)

        if depth < max_depth:
            worklist.extend(((*path, child.name), child.summary, depth + 1) for child in reversed(doc.subcommands))
        elif doc.subcommands:
            log.debug("%s: not descending below depth %d", doc.command, depth)

    return docs
