"""Command Executor — the single capability that runs native utilities.

Invariants:
    - execute() never raises for process-level failures: missing binary, non-zero exit
      and timeout are all reported in the returned CommandResult
    - Commands run as argv lists with no shell; stdin is /dev/null
    - A timed-out child is killed and reaped before execute() returns

Design Decisions:
    - Protocol over ABC: tests pass any object with a matching execute() coroutine
    - Exit code 127 for "not found" and 126 for "not executable" follow shell convention
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126
EXIT_TIMED_OUT = -1


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external-process invocation."""
    command: tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class CommandExecutor(Protocol):
    async def execute(
        self, command: str, args: Sequence[str] = (), timeout: float | None = None,
    ) -> CommandResult:
        ...


class SubprocessExecutor:
    """Runs commands with asyncio subprocesses, bounded by a timeout."""

    def __init__(self, default_timeout: float = 30.0):
        self.default_timeout = default_timeout

    async def execute(
        self, command: str, args: Sequence[str] = (), timeout: float | None = None,
    ) -> CommandResult:
        argv = (command, *args)
        limit = timeout if timeout is not None else self.default_timeout
        started = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return CommandResult(
                argv, "", f"Command not found: {command}", EXIT_NOT_FOUND,
            )
        except PermissionError:
            return CommandResult(
                argv, "", f"Permission denied: {command}", EXIT_NOT_EXECUTABLE,
            )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=limit,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.warning(
                f"Command timed out after {limit}s: {command}",
                extra={"command": " ".join(argv), "timed_out": True},
            )
            return CommandResult(
                argv, "", f"Command timed out after {limit:g}s: {command}",
                EXIT_TIMED_OUT, timed_out=True,
            )

        result = CommandResult(
            argv,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
            process.returncode,
        )
        logger.debug(
            f"Ran {command} (exit {result.exit_code})",
            extra={
                "command": " ".join(argv),
                "exit_code": result.exit_code,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return result
