"""Debug mode flag, initially taken from the HELPDOC_DEBUG environment variable."""

import os

__all__ = ["DEBUG", "is_debug", "set_debug"]

DEBUG = bool(os.environ.get("HELPDOC_DEBUG"))


class _DebugState:
    """Holds the flag so it can change without a global statement."""

    value: bool = DEBUG


_debug_state = _DebugState()


def is_debug() -> bool:
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Turn debug mode on or off (loggers created afterwards follow it)."""
    _debug_state.value = value
