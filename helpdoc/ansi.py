"""Terminal escape sequences, both ways.

Log output gets SGR styles (honouring NO_COLOR, FORCE_COLOR and TTY
detection); captured help text gets every escape sequence and man-page
overstrike removed before it is parsed.
"""

import os
import re
import sys
from typing import TextIO

__all__ = ["BOLD", "DIM", "RED", "RESET", "YELLOW", "LogStyles", "make_style", "should_colorize", "strip_ansi"]

CSI = "\x1b["
RESET = CSI + "0m"

# SGR parameters
BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"

# CSI sequences (colours, cursor moves) and OSC sequences (hyperlinks, titles)
_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")
# "X\bX" (bold) and "_\bX" (underline) as emitted by nroff
_OVERSTRIKE_RE = re.compile(r".\x08")


def should_colorize(stream: TextIO | None = None) -> bool:
    """Return True if styles should be written to stream (sys.stderr by default).

    NO_COLOR wins over FORCE_COLOR; without either, only terminals get colours.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    target = sys.stderr if stream is None else stream
    return bool(getattr(target, "isatty", None)) and target.isatty()


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) pair wrapping text in the given SGR codes."""
    prefix = f"{CSI}{';'.join(codes)}m" if codes else ""
    return prefix, RESET


def strip_ansi(text: str) -> str:
    """Remove escape sequences and backspace overstrikes from text.

    Args:
        text: Raw terminal output

    Returns:
        The printable text only
    """
    if "\x1b" in text:
        text = _ESCAPE_RE.sub("", text)
    if "\x08" in text:
        text = _OVERSTRIKE_RE.sub("", text)
    return text


class LogStyles:
    """SGR codes per log level."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)
