"""ELF symbol collection pipeline.

Runs ``readelf -S -W`` and ``nm`` on a linked image, parses their output and
returns located ``Symbol`` records ready for ``build_template_groups``. Tool
failures surface as ``ToolchainError`` subclasses before any analysis runs.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from symsize.analysis.symbol_assignment import assign_symbols_to_sections
from symsize.analysis.template_groups import build_template_groups
from symsize.config import TOOLCHAIN_CONFIG, ToolchainConfig
from symsize.logging import get_logger
from symsize.model.symbol import Symbol
from symsize.parsers.nm import parse_nm_output
from symsize.parsers.readelf import parse_readelf_sections
from symsize.results.template_groups import TemplateGroupSummary
from symsize.toolchain.exec import run_command
from symsize.toolchain.resolver import resolve_toolchain

logger = get_logger(__name__)

__all__ = ["analyze_template_groups", "collect_symbols"]


def collect_symbols(
    elf_path: str | os.PathLike[str], config: Optional[ToolchainConfig] = None
) -> List[Symbol]:
    """Collect located symbols from ``elf_path`` using external tools.

    Args:
        elf_path: Path to the linked ELF image.
        config: Toolchain settings; the package default when None.

    Returns:
        Symbols in nm order.

    Raises:
        FileNotFoundError: If ``elf_path`` does not exist.
        ExecutableNotFoundError: If a tool cannot be started.
        CommandTimeoutError: If a tool exceeds ``config.timeout``.
        CommandFailedError: If a tool exits with a non-zero status.
    """
    cfg = config or TOOLCHAIN_CONFIG
    path = Path(elf_path).resolve()
    if not path.is_file():
        raise FileNotFoundError(f"ELF file not found: {path}")

    tools = resolve_toolchain(cfg)

    sections_result = run_command(
        tools.readelf, ["-S", "-W", str(path)], timeout=cfg.timeout, check=True
    )
    sections = parse_readelf_sections(sections_result.stdout)
    logger.debug("Parsed %d sections from %s", len(sections), path)

    nm_result = run_command(
        tools.nm, [*cfg.nm_args, str(path)], timeout=cfg.timeout, check=True
    )
    nm_symbols = parse_nm_output(nm_result.stdout)

    assignment = assign_symbols_to_sections(nm_symbols, sections)
    for warning in assignment.warnings:
        logger.warning(warning)

    logger.info("Collected %d symbols from %s", len(assignment.symbols), path.name)
    return assignment.symbols


def analyze_template_groups(
    elf_path: str | os.PathLike[str], config: Optional[ToolchainConfig] = None
) -> List[TemplateGroupSummary]:
    """Collect symbols from ``elf_path`` and roll them up by template family."""
    return build_template_groups(collect_symbols(elf_path, config))
