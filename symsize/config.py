"""Configuration classes for SymSize components."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass
class ToolchainConfig:
    """Configuration for locating and running binutils-style tools."""

    # Prepended to every tool name, e.g. "arm-none-eabi-" + "nm"
    prefix: str = "arm-none-eabi-"

    # Directory probed for the prefixed tools before falling back to PATH
    directory: Optional[str] = None

    # Tried after the bare name when probing ``directory`` (Windows builds)
    executable_suffix: str = ".exe"

    # Seconds each external command may run; None disables the limit
    timeout: Optional[float] = 60.0

    # Arguments passed to nm ahead of the ELF path
    nm_args: Tuple[str, ...] = field(
        default=("--print-size", "--size-sort", "--numeric-sort", "--demangle")
    )

    def command_name(self, tool: str) -> str:
        """Return the prefixed command name for ``tool``."""
        return f"{self.prefix}{tool}"


# Global configuration instance
TOOLCHAIN_CONFIG = ToolchainConfig()
