"""External command execution with timeouts.

``run_command()`` runs one executable, captures stdout/stderr as text and
returns a ``CommandResult``. Three failure kinds are kept apart so callers can
report them differently:

- ``ExecutableNotFoundError``: the process could not be started
- ``CommandTimeoutError``: the process exceeded its time limit and was killed
- ``CommandFailedError``: the process exited with a non-zero status
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

from symsize.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "CommandTimeoutError",
    "ExecutableNotFoundError",
    "ToolchainError",
    "run_command",
]


class ToolchainError(RuntimeError):
    """Base class for failures of external toolchain commands."""

    def __init__(self, message: str, command: str, args: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = command
        self.args_list: Tuple[str, ...] = tuple(args)


class ExecutableNotFoundError(ToolchainError):
    """The executable does not exist or cannot be executed."""


class CommandTimeoutError(ToolchainError):
    """The command did not finish within its timeout."""

    def __init__(self, command: str, args: Sequence[str], timeout: float) -> None:
        super().__init__(
            f"Command timed out after {timeout:g}s: {_format_command(command, args)}",
            command,
            args,
        )
        self.timeout = timeout


class CommandFailedError(ToolchainError):
    """The command exited with a non-zero status."""

    def __init__(self, result: CommandResult) -> None:
        message = (
            f"Command exited with status {result.exit_code}: "
            f"{_format_command(result.command, result.args)}"
        )
        stderr = result.stderr.strip()
        if stderr:
            message = f"{message}\n{stderr}"
        super().__init__(message, result.command, result.args)
        self.result = result


def _format_command(command: str, args: Sequence[str]) -> str:
    return " ".join([command, *args])


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command.

    Attributes:
        command: Executable that was run.
        args: Arguments passed to it.
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        exit_code: Process exit status.
    """

    command: str
    args: Tuple[str, ...]
    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def check(self) -> CommandResult:
        """Return self, or raise CommandFailedError for a non-zero exit."""
        if self.exit_code != 0:
            raise CommandFailedError(self)
        return self


def run_command(
    command: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[str | os.PathLike[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    input_text: Optional[str] = None,
    timeout: Optional[float] = None,
    check: bool = False,
) -> CommandResult:
    """Run ``command`` with ``args`` and capture its output.

    Args:
        command: Executable path or name resolved via PATH.
        args: Command-line arguments.
        cwd: Working directory for the child process.
        env: Environment for the child process (inherits when None).
        input_text: Text written to the child's stdin, which is closed after.
        timeout: Seconds before the child is killed; None waits indefinitely.
        check: Raise CommandFailedError on a non-zero exit status.

    Returns:
        CommandResult with decoded output and the exit status.

    Raises:
        ExecutableNotFoundError: If the executable cannot be started.
        CommandTimeoutError: If ``timeout`` elapses first.
        CommandFailedError: If ``check`` is set and the exit status is non-zero.
    """
    arg_tuple = tuple(str(a) for a in args)
    logger.debug("Running %s", _format_command(command, arg_tuple))
    try:
        completed = subprocess.run(
            [command, *arg_tuple],
            cwd=cwd,
            env=dict(env) if env is not None else None,
            input=input_text if input_text is not None else "",
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(command, arg_tuple, float(exc.timeout)) from exc
    except (FileNotFoundError, PermissionError) as exc:
        raise ExecutableNotFoundError(
            f"Cannot execute {command}: {exc.strerror or exc}", command, arg_tuple
        ) from exc

    result = CommandResult(
        command=command,
        args=arg_tuple,
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
    )
    if check:
        result.check()
    return result
