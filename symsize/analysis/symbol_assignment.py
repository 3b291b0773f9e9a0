"""Turn parsed nm rows into located ``Symbol`` records.

Each nm row is placed into the section whose address range contains it and
classified by its nm type letter. Rows reported more than once for the same
(address, size, name) are merged so one entity is counted once; differing
mangled names are kept as aliases of the first row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from symsize.model.symbol import Section, Symbol
from symsize.parsers.nm import NmSymbolInfo

__all__ = [
    "SymbolAssignmentResult",
    "assign_symbols_to_sections",
    "classify_symbol_kind",
]

_OBJECT_TYPE_CODES = {"D", "B", "R", "G", "S"}


@dataclass
class SymbolAssignmentResult:
    """Symbols plus the warnings raised while placing them.

    Attributes:
        symbols: Located symbols in nm order, duplicates merged.
        warnings: Human-readable messages for rows outside every section.
    """

    symbols: List[Symbol] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def classify_symbol_kind(type_code: str) -> str:
    """Map an nm type letter to a symbol kind."""
    upper = type_code.upper()
    if upper in ("T", "W"):
        return "func"
    if upper in _OBJECT_TYPE_CODES:
        return "object"
    if upper == "N":
        return "section"
    return "other"


def _find_section(sections: Sequence[Section], address: int) -> Optional[Section]:
    for section in sections:
        if section.contains(address):
            return section
    return None


def _merge_into(existing: Symbol, duplicate: Symbol) -> None:
    existing.is_weak = existing.is_weak or duplicate.is_weak
    existing.is_static = existing.is_static or duplicate.is_static
    if (
        duplicate.name_mangled
        and duplicate.name_mangled != existing.name_mangled
        and duplicate.name_mangled not in existing.aliases
    ):
        existing.aliases.append(duplicate.name_mangled)
    if existing.source is None and duplicate.source is not None:
        existing.source = duplicate.source


def assign_symbols_to_sections(
    nm_symbols: Iterable[NmSymbolInfo], sections: Sequence[Section]
) -> SymbolAssignmentResult:
    """Locate nm rows in ``sections`` and build Symbol records.

    Args:
        nm_symbols: Rows from ``parse_nm_output``.
        sections: Sections from ``parse_readelf_sections``.

    Returns:
        SymbolAssignmentResult. Symbols outside every section keep
        ``section_id=None`` and produce a warning.
    """
    result = SymbolAssignmentResult()
    seen: Dict[Tuple[int, int, str], Symbol] = {}

    for index, info in enumerate(nm_symbols):
        section = _find_section(sections, info.address)
        if section is None:
            result.warnings.append(
                f"Symbol {info.name} at 0x{info.address:x} does not fall within "
                "any known section."
            )

        symbol = Symbol(
            id=f"sym_{index}",
            name=info.name,
            name_mangled=info.raw_name,
            kind=classify_symbol_kind(info.type_code),
            addr=info.address,
            size=info.size,
            section_id=section.id if section is not None else None,
            is_weak=info.type_code in ("w", "W"),
            is_static=info.type_code == info.type_code.lower(),
            source=info.source,
        )

        key = (info.address, info.size, info.name)
        existing = seen.get(key)
        if existing is not None:
            _merge_into(existing, symbol)
            continue
        seen[key] = symbol
        result.symbols.append(symbol)

    return result
