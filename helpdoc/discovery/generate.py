"""End-to-end documentation of configured tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import DEFAULT_MAX_DEPTH
from ..logging_setup import get_logger
from ..process import make_runner
from .documents import build_tool_doc
from .models import Documentation, HelpPattern
from .prober import detect_help_pattern, resolve_top_level_help
from .traversal import traverse_commands

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from ..config import Configuration
    from ..models import RunFunction
    from .models import ToolSpec

__all__ = ["document_tool", "document_tools", "runner_from_settings"]

log = get_logger("helpdoc.generate")


def runner_from_settings(settings: Configuration) -> RunFunction:
    """Return the subprocess runner honouring the `timeout` setting."""
    timeout = settings.get_float("timeout")
    return make_runner(timeout=timeout if timeout > 0 else None)


async def document_tool(
    tool: ToolSpec,
    run: RunFunction,
    settings: Configuration | None = None,
    previous_pattern: HelpPattern | Sequence[str] | None = None,
    generated_at: str | None = None,
) -> Documentation:
    """Document a tool: top-level help, then its command tree when reachable.

    A valid configured `command_help_args` template is used as is; otherwise the
    convention is probed, seeded with `previous_pattern`. Without a template
    no command documents are produced.

    Args:
        tool: The tool to document
        run: The invocation primitive
        settings: The `[helpdoc]` settings (max_depth, probe)
        previous_pattern: Template discovered by an earlier run
        generated_at: Timestamp override for every record

    Returns:
        The root document, command documents and the template used
    """
    max_depth = settings.get_int("max_depth", DEFAULT_MAX_DEPTH) if settings is not None else DEFAULT_MAX_DEPTH
    probe = settings.get_bool("probe", True) if settings is not None else True

    top = await resolve_top_level_help(tool.binary, tool.help_args, run)

    pattern: HelpPattern | None = None
    if tool.command_help_args:
        try:
            pattern = HelpPattern.from_args(tool.command_help_args)
        except ValueError as e:
            log.warning("%s: ignoring command_help_args: %s", tool.id, e)
    if pattern is None and probe and top.parsed.commands:
        pattern = await detect_help_pattern(tool.binary, top.parsed.commands, run, previous=previous_pattern)

    tool_doc = build_tool_doc(tool, top.help_args, top.result, link_commands=pattern is not None, generated_at=generated_at)
    if pattern is None:
        return Documentation(tool=tool_doc)

    commands = await traverse_commands(
        tool.id,
        tool.binary,
        tool_doc.commands,
        pattern,
        run,
        max_depth=max_depth,
        generated_at=generated_at,
    )
    log.info("%s: documented %d command(s)", tool.id, len(commands))
    return Documentation(tool=tool_doc, commands=commands, pattern=pattern)


async def document_tools(
    tools: Iterable[ToolSpec],
    run: RunFunction,
    settings: Configuration | None = None,
    previous_patterns: Mapping[str, Sequence[str]] | None = None,
) -> list[Documentation]:
    """Document enabled tools one after the other, sorted by id.

    Args:
        tools: The configured tools
        run: The invocation primitive
        settings: The `[helpdoc]` settings
        previous_patterns: Earlier templates by tool id

    Returns:
        One Documentation per enabled tool
    """
    previous_patterns = previous_patterns or {}
    results: list[Documentation] = []
    for tool in sorted(tools, key=lambda t: t.id):
        if not tool.enabled:
            log.debug("Skipping disabled tool %s", tool.id)
            continue
        results.append(await document_tool(tool, run, settings, previous_pattern=previous_patterns.get(tool.id)))
    return results
