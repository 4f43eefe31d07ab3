"""Shared types: subprocess results and package errors."""

from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Protocol

__all__ = ["HelpdocError", "RunFunction", "RunResult"]


@dataclass(frozen=True)
class RunResult:
    """Captured text of one help invocation.

    `output` holds stdout followed by stderr. `exit_code` is None when the
    process never started or was killed; `error` then describes why.
    """

    output: str
    exit_code: int | None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Return True if the process could not run or exited non-zero."""
        return self.error is not None or self.exit_code not in (0, None)

    def describe_failure(self) -> str | None:
        """Return a one-line description of the failure, if any."""
        if self.error is not None:
            return self.error
        if self.exit_code not in (0, None):
            return f"exited with code {self.exit_code}"
        return None


class RunFunction(Protocol):
    """Caller-supplied primitive running `binary args...` and capturing its text.

    Must return a RunResult for every failure it can anticipate. Anything it
    raises propagates out of the probing and traversal functions untouched.
    """

    def __call__(self, binary: str, args: Sequence[str]) -> Awaitable[RunResult]: ...


class HelpdocError(Exception):
    """Used for errors which already triggered logging."""
