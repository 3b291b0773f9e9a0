"""Locating and running external binutils-style tools."""

from __future__ import annotations

from .exec import (
    CommandFailedError,
    CommandResult,
    CommandTimeoutError,
    ExecutableNotFoundError,
    ToolchainError,
    run_command,
)
from .resolver import (
    TOOL_NAMES,
    ToolchainCommands,
    resolve_command_path,
    resolve_toolchain,
)

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "CommandTimeoutError",
    "ExecutableNotFoundError",
    "TOOL_NAMES",
    "ToolchainCommands",
    "ToolchainError",
    "resolve_command_path",
    "resolve_toolchain",
    "run_command",
]
