"""SymSize: symbol size analysis by C++ template family.

SymSize groups the symbols of a linked binary by template family and
specialization and reports their sizes, correcting for symbols that alias the
same memory location.

Primary API:
    build_template_groups() - Roll up a symbol collection by template family
    parse_template_signature() - Split a name into family and argument list
    collect_symbols() - Gather located symbols from an ELF via binutils
    load_symbols() - Read symbols from a YAML/JSON symbol file

Example:
    from symsize import Symbol, build_template_groups

    groups = build_template_groups(
        [
            Symbol(id="a", name="Vec<int>::push", section_id="S", addr=100, size=16),
            Symbol(id="b", name="Vec<int>::pop", section_id="S", addr=100, size=16),
        ]
    )
    vec = groups[0]
    assert vec.totals.size_bytes == 32
    assert vec.totals.unique_size_bytes == 16
"""

from __future__ import annotations

from symsize import cli, logging
from symsize._version import __version__
from symsize.analysis import (
    NON_TEMPLATE_GROUP_PREFIX,
    TemplateSignature,
    UniqueSizeTracker,
    analyze_template_groups,
    build_template_groups,
    collect_symbols,
    location_key,
    parse_template_signature,
)
from symsize.config import TOOLCHAIN_CONFIG, ToolchainConfig
from symsize.io import load_symbols, load_symbols_yaml
from symsize.model import Section, SourceLocation, Symbol, SymbolLocation
from symsize.results import (
    SpecializationTotals,
    TemplateGroupSpecializationSummary,
    TemplateGroupSummary,
    TemplateGroupSymbolSummary,
    TemplateGroupTotals,
    template_groups_frame,
)
from symsize.toolchain import (
    CommandFailedError,
    CommandTimeoutError,
    ExecutableNotFoundError,
    ToolchainError,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "Symbol",
    "SymbolLocation",
    "SourceLocation",
    "Section",
    # Analysis (primary API)
    "build_template_groups",
    "parse_template_signature",
    "TemplateSignature",
    "UniqueSizeTracker",
    "location_key",
    "NON_TEMPLATE_GROUP_PREFIX",
    "collect_symbols",
    "analyze_template_groups",
    # Results
    "TemplateGroupSummary",
    "TemplateGroupSpecializationSummary",
    "TemplateGroupSymbolSummary",
    "TemplateGroupTotals",
    "SpecializationTotals",
    "template_groups_frame",
    # Input files
    "load_symbols",
    "load_symbols_yaml",
    # Configuration and errors
    "ToolchainConfig",
    "TOOLCHAIN_CONFIG",
    "ToolchainError",
    "ExecutableNotFoundError",
    "CommandTimeoutError",
    "CommandFailedError",
    # Utilities
    "cli",
    "logging",
]
