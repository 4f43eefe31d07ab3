"""Utilities."""

__all__ = ["compute_hash", "indentation", "merge", "normalize_line_endings", "slugify", "unique"]

import hashlib
import re
from collections.abc import Iterable
from typing import Any

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def indentation(line: str) -> int:
    """Return the column of the first non-whitespace character (0 for blank lines)."""
    stripped = line.lstrip()
    if not stripped:
        return 0
    return len(line) - len(stripped)


def unique(items: Iterable[str]) -> list[str]:
    """Return items without duplicates, keeping the first occurrence order."""
    return list(dict.fromkeys(items))


def slugify(text: str) -> str:
    """Make a lowercase, hyphen-delimited, filesystem-safe identifier.

    Eg:
        slugify("Remote Add") == "remote-add"
        slugify("--foo__bar") == "foo-bar"
    """
    return _NON_SLUG_RE.sub("-", text.lower()).strip("-")


def compute_hash(text: str) -> str:
    """Return the SHA-256 hex digest of text (UTF-8)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def merge(merged: dict[str, Any], obj2: dict[str, Any], replace: bool = False) -> dict[str, Any]:
    """Merge the content of obj2 into merged.

    Args:
        merged (dict): Dictionary to merge into
        obj2 (dict): Dictionary to merge from
        replace (bool): Replace lists instead of concatenating them

    Returns:
        `merged` dictionary with the merged content

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value, replace)
        elif not replace and key in merged and isinstance(merged[key], list) and isinstance(value, list):
            merged[key] += value
        else:
            merged[key] = value
    return merged
