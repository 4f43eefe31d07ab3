"""Option (flag) and environment variable block parsing."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..utils import indentation
from .models import EnvDoc, OptionDoc
from .sections import select_sections

if TYPE_CHECKING:
    from .models import SplitHelp

__all__ = ["OPTION_SECTION_RE", "candidate_option_lines", "extract_options", "parse_env", "parse_option_lines"]

OPTION_SECTION_RE = re.compile(r"option|flag", re.IGNORECASE)

# Non-greedy flags part: the description starts at the first 2+ space gap or tab
_FLAG_LINE_RE = re.compile(r"^(\S.*?)(?:\s{2,}|\t)(.+)$")
_ENV_LINE_RE = re.compile(r"^(\S+)\s{2,}(.+)$")


class _OptionAccumulator:
    """The option being built, collecting wrapped description lines."""

    def __init__(self, line: str) -> None:
        trimmed = line.strip()
        match = _FLAG_LINE_RE.match(trimmed)
        if match:
            self.flags = match.group(1).strip()
            self.description = [match.group(2).strip()]
        else:
            self.flags = trimmed
            self.description = []
        self.column = indentation(line)

    def accepts(self, line: str) -> bool:
        """Return True if line continues this option's description."""
        return indentation(line) > self.column

    def build(self) -> OptionDoc:
        return OptionDoc(flags=self.flags, description=" ".join(self.description).strip())


def parse_option_lines(lines: list[str]) -> list[OptionDoc]:
    """Parse flag lines and their continuation lines.

    A line starting with `-` opens a new option. A following line belongs to
    it only while indented deeper than the flag line; anything else closes it.

    Args:
        lines: Raw (right-stripped) lines, indentation preserved

    Returns:
        The options in document order
    """
    options: list[OptionDoc] = []
    current: _OptionAccumulator | None = None

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.startswith("-"):
            if current is not None:
                options.append(current.build())
            current = _OptionAccumulator(line)
            continue

        if current is not None:
            if current.accepts(line):
                current.description.append(trimmed)
            else:
                options.append(current.build())
                current = None

    if current is not None:
        options.append(current.build())
    return options


def candidate_option_lines(split: SplitHelp) -> list[str]:
    """Pick option-like section lines, or the preamble of headerless text."""
    option_sections = select_sections(split.sections, OPTION_SECTION_RE)
    if option_sections:
        return [line for section in option_sections for line in section.lines]
    if not split.sections:
        return list(split.preamble)
    return []


def extract_options(split: SplitHelp) -> list[OptionDoc]:
    """Extract the option list from split help text."""
    return parse_option_lines(candidate_option_lines(split))


def parse_env(lines: list[str]) -> list[EnvDoc]:
    """Parse `NAME  description` lines of an environment section."""
    env: list[EnvDoc] = []
    for line in lines:
        match = _ENV_LINE_RE.match(line.strip())
        if match:
            env.append(EnvDoc(name=match.group(1).strip(), description=match.group(2).strip()))
    return env
