"""Header classification and section splitting of raw help text."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..ansi import strip_ansi
from ..utils import normalize_line_endings
from .models import Section, SplitHelp

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "ENV_SECTION_NAMES",
    "EXAMPLE_SECTION_NAMES",
    "HEADER_RULES",
    "USAGE_SECTION_NAMES",
    "find_section",
    "match_header",
    "normalize_help",
    "select_sections",
    "split_sections",
    "trim_empty",
]

# Ordered, first match wins: "Commands:" style, then "CORE COMMANDS" style
HEADER_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("colon", re.compile(r"^([A-Z][A-Za-z0-9 /_-]*):$")),
    ("all-caps", re.compile(r"^([A-Z][A-Z0-9 /_-]*)$")),
)

_INLINE_USAGE_RE = re.compile(r"^\s*usage:\s*(.*)$", re.IGNORECASE)

USAGE_SECTION_NAMES = ("Usage", "USAGE")
EXAMPLE_SECTION_NAMES = ("Examples", "Example")
ENV_SECTION_NAMES = ("Environment", "Environment Variables", "Env", "ENV")


def match_header(line: str) -> str | None:
    """Return the section name if the trimmed line is a header, else None.

    Args:
        line: A line with surrounding whitespace already removed

    Returns:
        The header name without its trailing colon, or None
    """
    for _tag, pattern in HEADER_RULES:
        match = pattern.match(line)
        if match:
            return match.group(1)
    return None


def normalize_help(raw_help: str) -> list[str]:
    """Split raw help output into right-stripped printable lines."""
    text = strip_ansi(normalize_line_endings(raw_help))
    return [line.rstrip() for line in text.split("\n")]


def trim_empty(lines: Iterable[str]) -> list[str]:
    """Right-strip every line and drop leading and trailing blank lines."""
    trimmed = [line.rstrip() for line in lines]
    start = 0
    while start < len(trimmed) and not trimmed[start].strip():
        start += 1
    end = len(trimmed)
    while end > start and not trimmed[end - 1].strip():
        end -= 1
    return trimmed[start:end]


def _collect_indented(lines: list[str], start: int) -> tuple[list[str], int]:
    """Collect the usage continuation lines following an inline `Usage:`.

    Blank lines before the first continuation are skipped; afterwards a blank
    line, an unindented line or a header ends the block.

    Returns:
        Tuple of (collected lines, index of the first unconsumed line)
    """
    collected: list[str] = []
    index = start
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            if collected:
                break
            index += 1
            continue
        if not line[0].isspace() or match_header(line.strip()) is not None:
            break
        collected.append(line.strip())
        index += 1
    if not collected:
        return collected, start
    return collected, index


def split_sections(raw_help: str) -> SplitHelp:
    """Split help text into ordered sections plus a usage line stream.

    Args:
        raw_help: The captured help output

    Returns:
        A SplitHelp with the sections in document order, the usage lines and
        the lines seen before the first header
    """
    lines = normalize_help(raw_help)
    sections: list[Section] = []
    usage_lines: list[str] = []
    preamble: list[str] = []
    current: Section | None = None

    index = 0
    while index < len(lines):
        line = lines[index]
        index += 1

        inline_usage = _INLINE_USAGE_RE.match(line)
        if inline_usage:
            if inline_usage.group(1):
                usage_lines.append(inline_usage.group(1).strip())
            continuation, index = _collect_indented(lines, index)
            usage_lines.extend(continuation)
            continue

        header = match_header(line.strip())
        if header:
            current = Section(name=header)
            sections.append(current)
            continue

        if current is not None:
            current.lines.append(line)
        else:
            preamble.append(line)

    if not usage_lines:
        usage_section = find_section(sections, USAGE_SECTION_NAMES)
        if usage_section:
            usage_lines.extend(line.strip() for line in trim_empty(usage_section.lines))

    return SplitHelp(sections=sections, usage_lines=trim_empty(usage_lines), preamble=preamble)


def find_section(sections: Iterable[Section], names: Iterable[str]) -> Section | None:
    """Return the first section whose name matches one of names, ignoring case."""
    wanted = {name.lower() for name in names}
    for section in sections:
        if section.name.lower() in wanted:
            return section
    return None


def select_sections(sections: Iterable[Section], pattern: re.Pattern[str]) -> list[Section]:
    """Return all sections whose name matches pattern (searched, not anchored)."""
    return [section for section in sections if pattern.search(section.name)]
