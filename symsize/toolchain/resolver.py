"""Toolchain executable resolution.

Maps the binutils-style tools the pipeline needs (``nm``, ``readelf``, ...) to
concrete command strings. A configured directory is probed first, trying the
bare name and then the platform executable suffix; tools not found there fall
back to their prefixed name, leaving PATH lookup to process start-up.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from symsize.config import TOOLCHAIN_CONFIG, ToolchainConfig
from symsize.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "TOOL_NAMES",
    "ToolchainCommands",
    "resolve_command_path",
    "resolve_toolchain",
]

TOOL_NAMES = ("nm", "objdump", "size", "readelf", "strings")


@dataclass(frozen=True)
class ToolchainCommands:
    """Resolved command strings, one per tool."""

    nm: str
    objdump: str
    size: str
    readelf: str
    strings: str

    def as_dict(self) -> Dict[str, str]:
        return {tool: getattr(self, tool) for tool in TOOL_NAMES}


def _is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def resolve_command_path(
    command_name: str, directory: Optional[str], executable_suffix: str = ".exe"
) -> Optional[str]:
    """Return the path of ``command_name`` inside ``directory``, if present.

    Tries ``<directory>/<command_name>`` then the same with
    ``executable_suffix`` appended. Returns None when ``directory`` is unset
    or neither candidate is an executable file.
    """
    if not directory:
        return None

    candidate = os.path.join(directory, command_name)
    if _is_executable_file(candidate):
        return candidate

    if executable_suffix:
        suffixed = f"{candidate}{executable_suffix}"
        if _is_executable_file(suffixed):
            return suffixed

    return None


def resolve_toolchain(config: Optional[ToolchainConfig] = None) -> ToolchainCommands:
    """Resolve every tool in ``TOOL_NAMES`` according to ``config``.

    Args:
        config: Toolchain settings; the package default when None.

    Returns:
        ToolchainCommands holding directory paths for tools found in
        ``config.directory`` and bare prefixed names for the rest.
    """
    cfg = config or TOOLCHAIN_CONFIG
    resolved: Dict[str, str] = {}
    for tool in TOOL_NAMES:
        command_name = cfg.command_name(tool)
        path = resolve_command_path(command_name, cfg.directory, cfg.executable_suffix)
        if path is not None:
            resolved[tool] = path
            continue
        if cfg.directory:
            logger.debug(
                "%s not found in %s; falling back to PATH lookup",
                command_name,
                cfg.directory,
            )
        resolved[tool] = command_name
    return ToolchainCommands(**resolved)
