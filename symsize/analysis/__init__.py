"""Symbol analyses: template signature parsing and size rollups.

Primary entry points:
    build_template_groups() - Roll up symbols by template family
    parse_template_signature() - Classify one symbol name
    collect_symbols() - Gather located symbols from an ELF via binutils
"""

from __future__ import annotations

from .pipeline import analyze_template_groups, collect_symbols
from .signature import (
    NON_TEMPLATE_GROUP_PREFIX,
    TemplateSignature,
    parse_template_signature,
)
from .symbol_assignment import (
    SymbolAssignmentResult,
    assign_symbols_to_sections,
    classify_symbol_kind,
)
from .template_groups import build_template_groups
from .unique_sizes import (
    UNKNOWN_ADDRESS,
    UNKNOWN_SECTION,
    UniqueSizeTracker,
    location_key,
)

__all__ = [
    "NON_TEMPLATE_GROUP_PREFIX",
    "SymbolAssignmentResult",
    "TemplateSignature",
    "UNKNOWN_ADDRESS",
    "UNKNOWN_SECTION",
    "UniqueSizeTracker",
    "analyze_template_groups",
    "assign_symbols_to_sections",
    "build_template_groups",
    "classify_symbol_kind",
    "collect_symbols",
    "location_key",
    "parse_template_signature",
]
