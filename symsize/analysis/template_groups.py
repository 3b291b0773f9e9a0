"""Template-family rollup of linked symbols.

``build_template_groups()`` classifies each symbol with
``parse_template_signature()`` and folds it into a per-family accumulator and,
within that, a per-specialization accumulator. After the pass the accumulators
are frozen into ``TemplateGroupSummary`` records.

Accumulators live only for one call; the function keeps no state between
calls and is safe to run concurrently on independent inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from symsize.analysis.signature import (
    NON_TEMPLATE_GROUP_PREFIX,
    parse_template_signature,
)
from symsize.analysis.unique_sizes import UniqueSizeTracker, location_key
from symsize.logging import get_logger
from symsize.model.symbol import Symbol, SymbolLocation
from symsize.results.template_groups import (
    SpecializationTotals,
    TemplateGroupSpecializationSummary,
    TemplateGroupSummary,
    TemplateGroupSymbolSummary,
    TemplateGroupTotals,
)

logger = get_logger(__name__)

__all__ = ["build_template_groups"]


@dataclass
class _SpecializationAccumulator:
    key: Optional[str]
    symbols: List[TemplateGroupSymbolSummary] = field(default_factory=list)
    unique_sizes: UniqueSizeTracker = field(default_factory=UniqueSizeTracker)


@dataclass
class _GroupAccumulator:
    id: str
    display_name: str
    is_template: bool
    symbols: List[TemplateGroupSymbolSummary] = field(default_factory=list)
    specializations: Dict[Optional[str], _SpecializationAccumulator] = field(
        default_factory=dict
    )
    unique_sizes: UniqueSizeTracker = field(default_factory=UniqueSizeTracker)
    largest_size: float = 0
    smallest_size: float = math.inf


def _normalize_size(size: Optional[float]) -> float:
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return 0
    if not math.isfinite(size) or size < 0:
        return 0
    return size


def _normalize_addr(addr: Optional[float]) -> Optional[float]:
    if isinstance(addr, bool) or not isinstance(addr, (int, float)):
        return None
    if not math.isfinite(addr):
        return None
    return addr


def _normalize_location(
    location: Optional[SymbolLocation],
) -> Optional[SymbolLocation]:
    if location is None or location.addr is None:
        return location
    addr = _normalize_addr(location.addr)
    if addr == location.addr:
        return location
    return replace(location, addr=addr)


def _symbol_summary(
    symbol: Symbol, specialization_key: Optional[str]
) -> TemplateGroupSymbolSummary:
    return TemplateGroupSymbolSummary(
        symbol_id=symbol.id,
        name=symbol.name,
        mangled_name=symbol.name_mangled or None,
        size_bytes=_normalize_size(symbol.size),
        specialization_key=specialization_key,
        section_id=symbol.section_id,
        block_id=symbol.block_id,
        window_id=symbol.window_id,
        addr=_normalize_addr(symbol.addr),
        primary_location=_normalize_location(symbol.primary_location),
    )


def _finalize_specialization(
    acc: _SpecializationAccumulator,
) -> TemplateGroupSpecializationSummary:
    return TemplateGroupSpecializationSummary(
        key=acc.key,
        symbols=tuple(acc.symbols),
        totals=SpecializationTotals(
            symbol_count=len(acc.symbols),
            size_bytes=sum(entry.size_bytes for entry in acc.symbols),
            unique_size_bytes=acc.unique_sizes.total(),
        ),
    )


def _finalize_group(acc: _GroupAccumulator) -> TemplateGroupSummary:
    specializations = tuple(
        _finalize_specialization(spec) for spec in acc.specializations.values()
    )
    smallest = acc.smallest_size if math.isfinite(acc.smallest_size) else 0
    return TemplateGroupSummary(
        id=acc.id,
        display_name=acc.display_name,
        is_template=acc.is_template,
        symbols=tuple(acc.symbols),
        specializations=specializations,
        totals=TemplateGroupTotals(
            symbol_count=len(acc.symbols),
            specialization_count=len(specializations),
            size_bytes=sum(entry.size_bytes for entry in acc.symbols),
            unique_size_bytes=acc.unique_sizes.total(),
            largest_symbol_size_bytes=acc.largest_size,
            smallest_symbol_size_bytes=smallest,
        ),
    )


def build_template_groups(symbols: Iterable[Symbol]) -> List[TemplateGroupSummary]:
    """Group symbols by template family and specialization.

    Each symbol lands in exactly one group and one specialization. Groups and
    specializations are returned in order of first occurrence. Non-template
    symbols are grouped by their exact display name, so two non-template
    symbols with the same name merge regardless of location.

    Args:
        symbols: Symbols in the order they should be folded.

    Returns:
        List of immutable group summaries; empty for empty input.
    """
    groups: Dict[str, _GroupAccumulator] = {}
    symbol_count = 0

    for symbol in symbols:
        symbol_count += 1
        name = symbol.name or ""
        parsed = parse_template_signature(name)
        if parsed is not None:
            group_id = parsed.group_name
            display_name = parsed.group_name
            specialization_key = parsed.specialization_key
        else:
            group_id = f"{NON_TEMPLATE_GROUP_PREFIX} {name}"
            display_name = name
            specialization_key = None

        group = groups.get(group_id)
        if group is None:
            group = _GroupAccumulator(
                id=group_id, display_name=display_name, is_template=parsed is not None
            )
            groups[group_id] = group

        summary = _symbol_summary(symbol, specialization_key)
        group.symbols.append(summary)

        key = location_key(symbol)
        group.unique_sizes.add(key, summary.size_bytes)
        if summary.size_bytes > group.largest_size:
            group.largest_size = summary.size_bytes
        if summary.size_bytes < group.smallest_size:
            group.smallest_size = summary.size_bytes

        specialization = group.specializations.get(specialization_key)
        if specialization is None:
            specialization = _SpecializationAccumulator(key=specialization_key)
            group.specializations[specialization_key] = specialization
        specialization.symbols.append(summary)
        specialization.unique_sizes.add(key, summary.size_bytes)

    result = [_finalize_group(group) for group in groups.values()]
    logger.debug(
        "Built %d template groups from %d symbols", len(result), symbol_count
    )
    return result
