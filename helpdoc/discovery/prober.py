"""Live probing of a binary's help conventions.

Two questions are answered by trial invocation:

- which arguments produce a useful top-level help (resolve_top_level_help)
- which argument template produces help for a subcommand
  (detect_help_pattern), e.g. ``{command} --help`` or ``help {command}``

Finding no subcommand convention is a normal outcome, reported as None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..constants import FALLBACK_HELP_ARGS, PROBE_TEMPLATES
from ..logging_setup import get_logger
from ..parsing import parse_help
from ..parsing.sections import select_sections, split_sections
from .models import HelpPattern

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..models import RunFunction, RunResult
    from ..parsing.models import CommandSummary, ParsedHelp

__all__ = [
    "TopLevelHelp",
    "detect_help_pattern",
    "has_subcommand_section",
    "is_keyword_candidate",
    "resolve_top_level_help",
    "select_candidates",
]

log = get_logger("helpdoc.prober")

_CANDIDATE_WORD_RE = re.compile(r"\b(?:manage|control)\b", re.IGNORECASE)
SUBCOMMAND_SECTION_RE = re.compile(r"command", re.IGNORECASE)

DEFAULT_PATTERNS = tuple(HelpPattern(template) for template in PROBE_TEMPLATES)


class _ProbeCache:
    """Runs each distinct invocation of one binary at most once."""

    def __init__(self, binary: str, run: RunFunction) -> None:
        self.binary = binary
        self._run = run
        self._results: dict[tuple[str, ...], RunResult] = {}

    async def __call__(self, args: Sequence[str]) -> RunResult:
        key = tuple(args)
        if key not in self._results:
            log.debug("Probing %s %s", self.binary, " ".join(key))
            self._results[key] = await self._run(self.binary, list(key))
        return self._results[key]


def is_keyword_candidate(command: CommandSummary) -> bool:
    """Return True if the listing itself suggests the command has subcommands.

    Either its summary holds the word "manage" or "control", or its
    signature carried a subcommand placeholder.
    """
    return bool(command.has_subcommands) or bool(_CANDIDATE_WORD_RE.search(command.summary))


def has_subcommand_section(text: str) -> bool:
    """Return True if help text has a commands/subcommands section."""
    return bool(select_sections(split_sections(text).sections, SUBCOMMAND_SECTION_RE))


async def _select(commands: Iterable[CommandSummary], probe: _ProbeCache | None, limit: int | None) -> list[CommandSummary]:
    candidates: list[CommandSummary] = []
    for command in commands:
        if limit is not None and len(candidates) >= limit:
            break
        if is_keyword_candidate(command):
            candidates.append(command)
            continue
        if probe is not None:
            result = await probe(DEFAULT_PATTERNS[0].expand([command.name]))
            if has_subcommand_section(result.output):
                candidates.append(command)
    return candidates


async def select_candidates(
    binary: str,
    commands: Iterable[CommandSummary],
    run: RunFunction | None = None,
    limit: int | None = None,
) -> list[CommandSummary]:
    """Return the top-level commands likely to expose their own subcommands.

    Args:
        binary: The program
        commands: The top-level command list
        run: When given, `binary <command> --help` is tried for commands the
             keyword check does not select
        limit: Stop after this many candidates

    Returns:
        The candidates in listing order
    """
    probe = _ProbeCache(binary, run) if run is not None else None
    return await _select(commands, probe, limit)


def _pattern_order(previous: HelpPattern | Sequence[str] | None) -> list[HelpPattern]:
    patterns: list[HelpPattern] = []
    if isinstance(previous, HelpPattern):
        patterns.append(previous)
    elif previous:
        try:
            patterns.append(HelpPattern.from_args(previous))
        except ValueError as e:
            log.warning("Ignoring previous help template: %s", e)
    patterns.extend(pattern for pattern in DEFAULT_PATTERNS if pattern not in patterns)
    return patterns


async def detect_help_pattern(
    binary: str,
    commands: Iterable[CommandSummary],
    run: RunFunction,
    previous: HelpPattern | Sequence[str] | None = None,
) -> HelpPattern | None:
    """Find the argument template revealing subcommand help.

    Only the first candidate command is probed. A previously discovered
    template is tried before the built-in ones.

    Args:
        binary: The program
        commands: The top-level command list
        run: The invocation primitive
        previous: A template known to have worked before

    Returns:
        The first template whose output has a commands section, or None when
        there is no candidate or no template works
    """
    probe = _ProbeCache(binary, run)
    candidates = await _select(commands, probe, limit=1)
    if not candidates:
        log.info("%s: no command looks like it has subcommands", binary)
        return None

    candidate = candidates[0]
    for pattern in _pattern_order(previous):
        result = await probe(pattern.expand([candidate.name]))
        if has_subcommand_section(result.output):
            log.info("%s: subcommand help via %s", binary, " ".join(pattern.args))
            return pattern

    log.info("%s: no subcommand help convention found (tried with %s)", binary, candidate.name)
    return None


@dataclass
class TopLevelHelp:
    """The top-level help invocation finally adopted."""

    help_args: list[str]
    result: RunResult
    parsed: ParsedHelp

    @property
    def score(self) -> int:
        """Return the number of commands and options found."""
        return len(self.parsed.commands) + len(self.parsed.options)


async def resolve_top_level_help(binary: str, help_args: Sequence[str], run: RunFunction) -> TopLevelHelp:
    """Run the requested top-level help, trying alternatives if it shows nothing.

    When the requested arguments yield neither commands nor options, `help`,
    `-h` and no arguments are tried; the strictly best scoring one wins, the
    requested arguments otherwise.

    Args:
        binary: The program
        help_args: The requested arguments, e.g. ["--help"]
        run: The invocation primitive

    Returns:
        The adopted invocation with its parse
    """
    requested = list(help_args)
    result = await run(binary, requested)
    best = TopLevelHelp(help_args=requested, result=result, parsed=parse_help(result.output))
    if best.score:
        return best

    for fallback in FALLBACK_HELP_ARGS:
        args = list(fallback)
        if args == requested:
            continue
        result = await run(binary, args)
        attempt = TopLevelHelp(help_args=args, result=result, parsed=parse_help(result.output))
        log.debug("%s %s: %d commands and options", binary, " ".join(args), attempt.score)
        if attempt.score > best.score:
            best = attempt

    if best.help_args != requested:
        log.info("%s: using `%s` for top-level help", binary, " ".join([binary, *best.help_args]))
    return best
