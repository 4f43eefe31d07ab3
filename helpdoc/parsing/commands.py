"""Command listing extraction.

Recognised line shapes, tried in order on every indented candidate line:

- two-column: ``  name  Summary text`` (tab or 2+ spaces between the columns)
- bullet: ``  o name`` (man-page style service lists)
- two-line: a signature holding ``(``, ``[`` or ``<``, followed by a deeper
  indented description line
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..utils import indentation
from .models import CommandSummary, Section
from .sections import ENV_SECTION_NAMES, EXAMPLE_SECTION_NAMES, select_sections

if TYPE_CHECKING:
    from .models import SplitHelp

__all__ = ["COMMAND_RULES", "COMMAND_SECTION_RE", "CommandRule", "candidate_command_lines", "extract_commands"]

COMMAND_SECTION_RE = re.compile(r"command|service", re.IGNORECASE)

_TWO_COLUMN_RE = re.compile(r"^(\S+(?:\s+\S+)*)(?:\t|\s{2,})(.+)$")
_BULLET_RE = re.compile(r"^o\s+([a-z][a-z0-9-]*)\s*$")
_SIGNATURE_MARKERS_RE = re.compile(r"[(\[<]")
_LEADING_IDENTIFIER_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9_-]*)")
_SUBCOMMAND_PLACEHOLDER_RE = re.compile(r"<(?:sub)?command>|<cmd>", re.IGNORECASE)
_NON_COMMAND_SECTION_RE = re.compile(r"option|flag|usage", re.IGNORECASE)
_DOCUMENT_SECTION_NAMES = frozenset(name.lower() for name in (*EXAMPLE_SECTION_NAMES, *ENV_SECTION_NAMES))

# (lines, index) -> (command or None, index of the last consumed line)
RuleFunction = Callable[[list[str], int], tuple[CommandSummary | None, int]]


@dataclass(frozen=True)
class CommandRule:
    """A named line-shape matcher."""

    tag: str
    apply: RuleFunction


def _two_column(lines: list[str], index: int) -> tuple[CommandSummary | None, int]:
    match = _TWO_COLUMN_RE.match(lines[index].strip())
    if not match:
        return None, index
    name = match.group(1).strip().removesuffix(":")
    if not name:
        return None, index
    return CommandSummary(name=name, summary=match.group(2).strip()), index


def _bullet(lines: list[str], index: int) -> tuple[CommandSummary | None, int]:
    match = _BULLET_RE.match(lines[index].strip())
    if not match:
        return None, index
    return CommandSummary(name=match.group(1), summary=""), index


def _two_line(lines: list[str], index: int) -> tuple[CommandSummary | None, int]:
    line = lines[index]
    signature = line.strip()
    if not _SIGNATURE_MARKERS_RE.search(signature):
        return None, index

    next_index = index + 1
    while next_index < len(lines) and not lines[next_index].strip():
        next_index += 1
    if next_index >= len(lines) or indentation(lines[next_index]) <= indentation(line):
        return None, index

    name_match = _LEADING_IDENTIFIER_RE.match(signature)
    if not name_match:
        return None, index

    command = CommandSummary(name=name_match.group(1), summary=lines[next_index].strip())
    if _SUBCOMMAND_PLACEHOLDER_RE.search(signature):
        command.has_subcommands = True
    return command, next_index


COMMAND_RULES: tuple[CommandRule, ...] = (
    CommandRule("two-column", _two_column),
    CommandRule("bullet", _bullet),
    CommandRule("two-line", _two_line),
)


def _is_category_section(section: Section) -> bool:
    """Return True for a section that may group commands under a category name (e.g. "STORAGE")."""
    if COMMAND_SECTION_RE.search(section.name) or _NON_COMMAND_SECTION_RE.search(section.name):
        return False
    return section.name.lower() not in _DOCUMENT_SECTION_NAMES


def candidate_command_lines(split: SplitHelp) -> list[str]:
    """Pick the lines that may hold command listings.

    Command-like sections first, followed by the category sections (anything
    but options, usage, examples and environment); any section when no
    command-like one exists; the preamble when the text has no header at all.
    """
    command_sections = select_sections(split.sections, COMMAND_SECTION_RE)
    if command_sections:
        sections = command_sections + [section for section in split.sections if _is_category_section(section)]
        return [line for section in sections for line in section.lines]
    if split.sections:
        return [line for section in split.sections for line in section.lines]
    return list(split.preamble)


def parse_command_lines(lines: list[str]) -> list[CommandSummary]:
    """Apply COMMAND_RULES to every indented, non-flag line.

    Args:
        lines: Raw (right-stripped) lines, indentation preserved

    Returns:
        The commands in document order
    """
    commands: list[CommandSummary] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        trimmed = line.strip()
        if trimmed and line[0].isspace() and not trimmed.startswith("-"):
            for rule in COMMAND_RULES:
                command, last = rule.apply(lines, index)
                if command is not None:
                    commands.append(command)
                    index = last
                    break
        index += 1
    return commands


def extract_commands(split: SplitHelp) -> list[CommandSummary]:
    """Extract the command list from split help text."""
    return parse_command_lines(candidate_command_lines(split))
