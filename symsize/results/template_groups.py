"""Immutable template-group summaries.

Defines the frozen dataclasses returned by
``symsize.analysis.template_groups.build_template_groups``:

- ``TemplateGroupSymbolSummary``: one member symbol
- ``TemplateGroupSpecializationSummary``: one specialization bucket
- ``TemplateGroupSummary``: one template family (or one non-template name)

Objects expose ``to_dict()`` returning JSON-safe primitives. The helper
``template_groups_frame()`` flattens group totals into a pandas DataFrame for
sorting and tabular display.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

import pandas as pd

from symsize.logging import get_logger
from symsize.model.symbol import SymbolLocation

logger = get_logger(__name__)

__all__ = [
    "SpecializationTotals",
    "TemplateGroupSpecializationSummary",
    "TemplateGroupSummary",
    "TemplateGroupSymbolSummary",
    "TemplateGroupTotals",
    "template_groups_frame",
]

FRAME_COLUMNS = [
    "id",
    "display_name",
    "is_template",
    "symbol_count",
    "specialization_count",
    "size_bytes",
    "unique_size_bytes",
    "largest_symbol_size_bytes",
    "smallest_symbol_size_bytes",
]


@dataclass(frozen=True)
class TemplateGroupSymbolSummary:
    """Per-symbol record stored in group and specialization member lists.

    Attributes:
        symbol_id: Identifier of the source symbol.
        name: Display name of the source symbol.
        mangled_name: Raw linker name, None when the symbol had none.
        size_bytes: Size, already normalized to 0 when non-finite.
        specialization_key: Specialization the symbol was routed into.
        section_id: Containing section, if known.
        block_id: Logical block, if known.
        window_id: Address window, if known.
        addr: Symbol address, if known.
        primary_location: Preferred placement, if known.
    """

    symbol_id: str
    name: Optional[str]
    mangled_name: Optional[str]
    size_bytes: float
    specialization_key: Optional[str]
    section_id: Optional[str] = None
    block_id: Optional[str] = None
    window_id: Optional[str] = None
    addr: Optional[float] = None
    primary_location: Optional[SymbolLocation] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)


def _check_unique_not_above_plain(owner: str, size: float, unique: float) -> None:
    # Tolerate float summation noise
    if unique - size > 1e-9:
        logger.error(
            "%s.unique_size_bytes (%r) exceeds size_bytes (%r)", owner, unique, size
        )
        raise ValueError(f"{owner}.unique_size_bytes must not exceed size_bytes")


@dataclass(frozen=True)
class SpecializationTotals:
    """Aggregates over one specialization's members.

    Attributes:
        symbol_count: Number of member symbols.
        size_bytes: Plain sum of member sizes (aliases counted repeatedly).
        unique_size_bytes: Sum over distinct locations of the largest size.
    """

    symbol_count: int
    size_bytes: float
    unique_size_bytes: float

    def __post_init__(self) -> None:
        _check_unique_not_above_plain(
            "SpecializationTotals", self.size_bytes, self.unique_size_bytes
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)


@dataclass(frozen=True)
class TemplateGroupTotals:
    """Aggregates over one group's members.

    Attributes:
        symbol_count: Number of member symbols.
        specialization_count: Number of distinct specialization keys.
        size_bytes: Plain sum of member sizes.
        unique_size_bytes: Location-deduplicated sum of member sizes.
        largest_symbol_size_bytes: Largest member size (0 for no members).
        smallest_symbol_size_bytes: Smallest member size (0 for no members).
    """

    symbol_count: int
    specialization_count: int
    size_bytes: float
    unique_size_bytes: float
    largest_symbol_size_bytes: float
    smallest_symbol_size_bytes: float

    def __post_init__(self) -> None:
        _check_unique_not_above_plain(
            "TemplateGroupTotals", self.size_bytes, self.unique_size_bytes
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)


@dataclass(frozen=True)
class TemplateGroupSpecializationSummary:
    """Symbols of one template family sharing one argument list.

    Attributes:
        key: Argument-list text, or None for non-template symbols and empty
            argument lists.
        symbols: Member symbols in input order.
        totals: Aggregates over ``symbols``.
    """

    key: Optional[str]
    symbols: Tuple[TemplateGroupSymbolSummary, ...]
    totals: SpecializationTotals

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "key": self.key,
            "symbols": [s.to_dict() for s in self.symbols],
            "totals": self.totals.to_dict(),
        }


@dataclass(frozen=True)
class TemplateGroupSummary:
    """Rollup of every symbol belonging to one template family.

    Non-template symbols form single-name groups whose ``id`` carries the
    ``[non-template]`` prefix so they never collide with a template family.

    Attributes:
        id: Group key.
        display_name: Template base name, or the symbol name for non-templates.
        is_template: Whether the group is a template family.
        symbols: All member symbols in input order.
        specializations: Specializations in first-encountered order.
        totals: Aggregates over ``symbols``.
    """

    id: str
    display_name: str
    is_template: bool
    symbols: Tuple[TemplateGroupSymbolSummary, ...]
    specializations: Tuple[TemplateGroupSpecializationSummary, ...]
    totals: TemplateGroupTotals

    def specialization(self, key: Optional[str]) -> TemplateGroupSpecializationSummary:
        """Return the specialization with ``key``.

        Raises:
            KeyError: If the group has no such specialization.
        """
        for spec in self.specializations:
            if spec.key == key:
                return spec
        raise KeyError(key)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "is_template": self.is_template,
            "symbols": [s.to_dict() for s in self.symbols],
            "specializations": [s.to_dict() for s in self.specializations],
            "totals": self.totals.to_dict(),
        }


def template_groups_frame(groups: Iterable[TemplateGroupSummary]) -> pd.DataFrame:
    """Return one row per group with its totals.

    Rows keep the order of ``groups``; the frame has ``FRAME_COLUMNS`` even
    when ``groups`` is empty.
    """
    rows = []
    for group in groups:
        row = {
            "id": group.id,
            "display_name": group.display_name,
            "is_template": group.is_template,
        }
        row.update(group.totals.to_dict())
        rows.append(row)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
