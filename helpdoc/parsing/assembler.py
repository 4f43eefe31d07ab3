"""Assemble a ParsedHelp from raw help text."""

from __future__ import annotations

from ..constants import NO_COMMANDS_WARNING, NO_OPTIONS_WARNING
from .commands import COMMAND_SECTION_RE, extract_commands
from .models import ParsedHelp
from .options import OPTION_SECTION_RE, extract_options, parse_env
from .sections import ENV_SECTION_NAMES, EXAMPLE_SECTION_NAMES, find_section, select_sections, split_sections, trim_empty

__all__ = ["parse_help"]


def parse_help(raw_help: str) -> ParsedHelp:
    """Parse help output into usage, commands, options, examples and env.

    Never raises: unrecognised text yields empty lists and diagnostics in
    `warnings`.

    Args:
        raw_help: The captured help text

    Returns:
        The structured help
    """
    split = split_sections(raw_help)
    commands = extract_commands(split)
    options = extract_options(split)

    examples_section = find_section(split.sections, EXAMPLE_SECTION_NAMES)
    env_section = find_section(split.sections, ENV_SECTION_NAMES)

    warnings: list[str] = []
    if not commands and not select_sections(split.sections, COMMAND_SECTION_RE):
        warnings.append(NO_COMMANDS_WARNING)
    if not options and not select_sections(split.sections, OPTION_SECTION_RE):
        warnings.append(NO_OPTIONS_WARNING)

    return ParsedHelp(
        usage_lines=split.usage_lines,
        commands=commands,
        options=options,
        examples=trim_empty(examples_section.lines) if examples_section else [],
        env=parse_env(env_section.lines) if env_section else [],
        warnings=warnings,
    )
