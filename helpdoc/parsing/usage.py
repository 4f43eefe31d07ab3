"""Usage line tokenizing.

Turns lines such as ``git [-C <path>] <command> [<args>]`` into required
positionals, optional positionals and flags:

1. split into required / optional segments at structural brackets
2. whitespace-tokenize each segment
3. join a flag with its value (``-C <path>``)
4. collapse ``a | b`` alternatives to one canonical token
5. route flags and positionals, then drop the binary's own name
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..utils import unique
from .models import UsageDoc, UsageTokens

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = ["build_usage_doc", "extract_usage_tokens", "parse_usage_line", "split_optional_segments"]

_ALTERNATIVE = "|"
_GROUP_PAIRS = {"(": ")", "{": "}"}


@dataclass
class Segment:
    """A stretch of a usage line, inside or outside optional brackets."""

    text: str
    optional: bool


def _is_boundary(char: str) -> bool:
    return char == "" or char.isspace()


def _is_flag(token: str) -> bool:
    return token.startswith("-")


def split_optional_segments(line: str) -> list[Segment]:
    """Split a usage line into required and optional segments.

    Only brackets at token boundaries are structural: ``[`` preceded by
    whitespace (or the line start) opens, ``]`` followed by whitespace (or the
    line end) closes. Nested brackets stay in the segment text.
    """
    segments: list[Segment] = []
    current: list[str] = []
    optional = False
    depth = 0

    def close() -> None:
        text = "".join(current).strip()
        if text:
            segments.append(Segment(text=text, optional=optional))
        current.clear()

    for index, char in enumerate(line):
        prev = line[index - 1] if index > 0 else ""
        nxt = line[index + 1] if index + 1 < len(line) else ""

        if char == "[" and depth == 0 and _is_boundary(prev):
            close()
            optional = True
            depth = 1
            continue
        if char == "]" and depth == 1 and _is_boundary(nxt):
            close()
            optional = False
            depth = 0
            continue

        if char == "[" and depth > 0:
            depth += 1
        elif char == "]" and depth > 0:
            depth -= 1
        current.append(char)

    close()
    return segments


def _split_inline_alternatives(token: str) -> list[str]:
    """Expand ``(start|stop)`` or ``-v|--verbose`` into separate alternatives."""
    if _ALTERNATIVE not in token or token == _ALTERNATIVE or "=" in token or token[0] in "<[":
        return [token]
    inner = token
    if inner[0] in _GROUP_PAIRS and inner.endswith(_GROUP_PAIRS[inner[0]]):
        inner = inner[1:-1]
    alternatives = [alt for alt in inner.split(_ALTERNATIVE) if alt]
    if len(alternatives) < 2:
        return [token]
    expanded: list[str] = []
    for alt in alternatives:
        if expanded:
            expanded.append(_ALTERNATIVE)
        expanded.append(alt)
    return expanded


def _tokenize(text: str) -> list[str]:
    tokens: list[str] = []
    for token in text.split():
        tokens.extend(_split_inline_alternatives(token))
    return tokens


def _coalesce_flags(tokens: list[str]) -> list[str]:
    """Join each flag with an immediately following value token."""
    result: list[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        nxt = tokens[index + 1] if index + 1 < len(tokens) else None
        if _is_flag(token) and nxt is not None and not _is_flag(nxt) and nxt != _ALTERNATIVE:
            result.append(f"{token} {nxt}")
            index += 2
            continue
        result.append(token)
        index += 1
    return result


def _select_canonical(alternatives: list[str]) -> str:
    """Prefer a long flag spelling, else the first alternative."""
    for token in alternatives:
        if token.startswith("--"):
            return token
    return alternatives[0]


def _collapse_alternatives(tokens: list[str]) -> list[str]:
    result: list[str] = []
    group: list[str] = []
    for index, token in enumerate(tokens):
        if token == _ALTERNATIVE:
            continue
        group.append(token)
        nxt = tokens[index + 1] if index + 1 < len(tokens) else None
        if nxt != _ALTERNATIVE:
            result.append(_select_canonical(group))
            group = []
    if group:
        result.append(_select_canonical(group))
    return result


def _as_placeholder(token: str) -> str:
    """Render an optional positional as ``<name>`` unless already delimited."""
    if token[0] in "<({":
        return token
    return f"<{token}>"


def parse_usage_line(line: str, binary: str) -> UsageTokens:
    """Tokenize a single usage line.

    Args:
        line: One usage line, e.g. "tool [--verbose] <path> [extra...]"
        binary: The program name or path, dropped from the required args

    Returns:
        The line's tokens, each list ordered and unique
    """
    required: list[str] = []
    optional: list[str] = []
    flags: list[str] = []

    for segment in split_optional_segments(line.strip()):
        for token in _collapse_alternatives(_coalesce_flags(_tokenize(segment.text))):
            if _is_flag(token):
                flags.append(token)
            elif segment.optional:
                optional.append(_as_placeholder(token))
            else:
                required.append(token)

    own_names = {binary, os.path.basename(binary)}
    return UsageTokens(
        required_args=unique(token for token in required if token not in own_names),
        optional_args=unique(optional),
        flags=unique(flags),
    )


def extract_usage_tokens(lines: Iterable[str], binary: str) -> UsageTokens:
    """Merge the tokens of several usage lines.

    Args:
        lines: Usage lines as captured by the section splitter
        binary: The program name or path

    Returns:
        Ordered unique required args, optional args and flags across all lines
    """
    required: list[str] = []
    optional: list[str] = []
    flags: list[str] = []
    for line in lines:
        if not line.strip():
            continue
        tokens = parse_usage_line(line, binary)
        required.extend(tokens.required_args)
        optional.extend(tokens.optional_args)
        flags.extend(tokens.flags)
    return UsageTokens(required_args=unique(required), optional_args=unique(optional), flags=unique(flags))


def build_usage_doc(lines: Iterable[str], binary: str) -> UsageDoc:
    """Return the positional arguments of the usage lines."""
    return extract_usage_tokens(lines, binary).to_usage_doc()
