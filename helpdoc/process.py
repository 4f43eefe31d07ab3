"""Help invocation runners.

run_command:
    Runs ``binary args...`` as a subprocess in a stable locale and returns
    its combined output as a RunResult. Launch failures and timeouts are
    reported in the result instead of being raised.

ReplayRunner:
    Serves previously recorded help outputs from a directory, one text file
    per invocation, for deterministic offline runs.
"""

__all__ = ["ReplayRunner", "make_runner", "recording_name", "run_command"]

import asyncio
import contextlib
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

import aiofiles
import aiofiles.os

from .constants import RUN_ENVIRONMENT
from .logging_setup import get_logger
from .models import RunFunction, RunResult

log = get_logger("helpdoc.process")

GRACEFUL_TIMEOUT = 1.0


def _build_env(extra_env: Mapping[str, str] | None) -> dict[str, str]:
    env = dict(os.environ)
    env.update(RUN_ENVIRONMENT)
    if extra_env:
        env.update(extra_env)
    return env


async def _stop(proc: asyncio.subprocess.Process) -> None:
    """Terminate, then kill if still alive after GRACEFUL_TIMEOUT; always reap."""
    with contextlib.suppress(ProcessLookupError):
        proc.terminate()
    try:
        await asyncio.wait_for(proc.wait(), timeout=GRACEFUL_TIMEOUT)
    except TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()


async def run_command(
    binary: str,
    args: Sequence[str],
    timeout: float | None = None,
    extra_env: Mapping[str, str] | None = None,
) -> RunResult:
    """Run a help invocation and capture stdout followed by stderr.

    Args:
        binary: Program name or path
        args: Arguments, e.g. ["--help"]
        timeout: Seconds before the process is stopped (None waits forever)
        extra_env: Variables applied on top of RUN_ENVIRONMENT

    Returns:
        The captured result; `error` is set when the process could not be
        started or was stopped on timeout
    """
    log.debug("Running %s %s", binary, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            binary,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_build_env(extra_env),
        )
    except OSError as e:
        log.warning("Failed to run %s: %s", binary, e)
        return RunResult(output="", exit_code=None, error=str(e))

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except TimeoutError:
        await _stop(proc)
        log.warning("%s %s timed out after %ss", binary, " ".join(args), timeout)
        return RunResult(output="", exit_code=None, error=f"timed out after {timeout}s")

    out_text = stdout.decode("utf-8", errors="replace")
    err_text = stderr.decode("utf-8", errors="replace")
    # keep the last stdout line and the first stderr line apart
    separator = "\n" if out_text and err_text and not out_text.endswith("\n") else ""
    return RunResult(output=out_text + separator + err_text, exit_code=proc.returncode)


def make_runner(timeout: float | None = None, extra_env: Mapping[str, str] | None = None) -> RunFunction:
    """Bind run_command settings into a RunFunction."""

    async def run(binary: str, args: Sequence[str]) -> RunResult:
        return await run_command(binary, args, timeout=timeout, extra_env=extra_env)

    return run


def recording_name(binary: str, args: Sequence[str]) -> str:
    """Return the file name holding the recorded output of an invocation.

    Eg:
        recording_name("/usr/bin/git", ["help", "remote"]) == "git help remote.txt"
    """
    parts = [os.path.basename(binary), *args]
    return " ".join(parts).replace("/", "%2F") + ".txt"


class ReplayRunner:
    """Replays recorded help outputs.

    Usage:
        run = ReplayRunner("tests/fixtures/git")
        result = await run("git", ["--help"])  # reads "git --help.txt"

    Invocations without a recording return an error result. Every call is
    appended to `calls`.
    """

    def __init__(self, directory: str | Path) -> None:
        """Initialize.

        Args:
            directory: Folder containing the recordings
        """
        self.directory = Path(directory)
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    async def __call__(self, binary: str, args: Sequence[str]) -> RunResult:
        self.calls.append((binary, tuple(args)))
        path = self.directory / recording_name(binary, args)
        if not await aiofiles.os.path.exists(path):
            log.debug("No recording %s", path)
            return RunResult(output="", exit_code=None, error=f"no recording for: {binary} {' '.join(args)}".rstrip())
        async with aiofiles.open(path, encoding="utf-8") as f:
            output = await f.read()
        return RunResult(output=output, exit_code=0)
