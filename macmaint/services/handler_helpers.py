"""Handler Helpers — command running and the in-band error boundary shared by all handlers.

Invariants:
    - CommandRunner.run() returns stdout of a successful command or raises
      ExternalCommandError; it never returns partial results silently unless asked
    - tool_boundary converts every handler-level fault into {"error": msg} (+ "note")
    - Dispatch-level errors (MacMaintError other than ExternalCommandError) are NOT
      caught by tool_boundary
    - Commands issued through one runner run strictly one after another

Design Decisions:
    - Directory emptying goes through the executor (find -exec rm) rather than shutil,
      so a scripted executor observes every destructive action
"""

import functools
import logging
from typing import Any, Awaitable, Callable

from macmaint.core.errors import ExternalCommandError
from macmaint.core.parse_disk import first_field, parse_df_line, parse_du_kilobytes
from macmaint.infrastructure.command_executor import CommandExecutor, CommandResult

logger = logging.getLogger(__name__)

# Faults a handler absorbs: failed commands, unparseable output, filesystem errors
HANDLER_FAULTS = (ExternalCommandError, ValueError, OSError)


def _describe_failure(result: CommandResult) -> str:
    detail = result.stderr.strip() or result.stdout.strip()
    message = f"Command failed: {' '.join(result.command)} (exit {result.exit_code})"
    return f"{message}: {detail}" if detail else message


class CommandRunner:
    """Executor + timeouts, raising ExternalCommandError on failure."""

    def __init__(
        self,
        executor: CommandExecutor,
        timeout: float = 30.0,
        cleanup_timeout: float = 300.0,
    ):
        self.executor = executor
        self.timeout = timeout
        self.cleanup_timeout = cleanup_timeout

    async def execute(
        self, command: str, *args: str, timeout: float | None = None,
    ) -> CommandResult:
        return await self.executor.execute(
            command, list(args), timeout if timeout is not None else self.timeout,
        )

    async def run(
        self,
        command: str,
        *args: str,
        timeout: float | None = None,
        allow_partial: bool = False,
        merge_stderr: bool = False,
    ) -> str:
        """Run and return stdout.

        allow_partial: accept a non-zero exit when stdout is non-empty (du over
        unreadable subfolders still reports the readable total).
        merge_stderr: append stderr to the returned text (`2>&1`).
        """
        result = await self.execute(command, *args, timeout=timeout)
        if result.timed_out:
            raise ExternalCommandError(
                result.stderr or f"Command timed out: {command}",
                command=list(result.command), timed_out=True,
            )
        if result.exit_code != 0 and not (allow_partial and result.stdout.strip()):
            raise ExternalCommandError(
                _describe_failure(result), command=list(result.command),
            )
        if merge_stderr and result.stderr:
            return result.stdout + result.stderr
        return result.stdout

    async def size_of(self, path: str) -> str:
        """Human-readable size of path (`du -sh`)."""
        return first_field(await self.run("du", "-sh", path, allow_partial=True))

    async def size_kb(self, path: str) -> int:
        return parse_du_kilobytes(
            await self.run("du", "-sk", path, allow_partial=True),
        )

    async def empty_directory(self, path: str) -> None:
        """Delete everything inside path, keeping path itself (`rm -rf path/*`)."""
        await self.run(
            "find", path, "-mindepth", "1", "-maxdepth", "1",
            "-exec", "rm", "-rf", "{}", "+",
            timeout=self.cleanup_timeout,
        )

    async def root_filesystem(self) -> dict:
        """Parsed last line of `df -h /`."""
        return parse_df_line(await self.run("df", "-h", "/"))


def handler_error(exc: Exception, note: str | None = None) -> dict:
    payload: dict[str, Any] = {"error": str(exc)}
    if note:
        payload["note"] = note
    return payload


def tool_boundary(note: str | None = None):
    """Decorate an async handler method so handler-level faults come back in-band."""

    def decorator(
        func: Callable[..., Awaitable[dict]],
    ) -> Callable[..., Awaitable[dict]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> dict:
            try:
                return await func(*args, **kwargs)
            except HANDLER_FAULTS as e:
                logger.warning(
                    f"{func.__name__} failed: {e}",
                    extra={"tool_name": func.__name__},
                )
                return handler_error(e, note)

        return wrapper

    return decorator
