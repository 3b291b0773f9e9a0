"""Location-keyed size deduplication.

Linkers often emit several symbols for one piece of memory (aliases, ICF-folded
functions, constructor variants). Summing their sizes overstates the footprint.
``UniqueSizeTracker`` counts each (section, address) location once, using the
largest size reported for it.
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from symsize.model.symbol import Symbol

__all__ = [
    "UNKNOWN_ADDRESS",
    "UNKNOWN_SECTION",
    "UniqueSizeTracker",
    "location_key",
]

UNKNOWN_SECTION = "unknown-section"
UNKNOWN_ADDRESS = "unknown-addr"


class UniqueSizeTracker:
    """Accumulates the maximum size seen per location key."""

    def __init__(self) -> None:
        self._sizes: Dict[str, float] = {}

    def add(self, key: str, size: float) -> None:
        """Record ``size`` for ``key``; keeps the existing value unless larger."""
        existing = self._sizes.get(key)
        if existing is None or size > existing:
            self._sizes[key] = size

    def total(self) -> float:
        """Return the sum of per-key maxima."""
        return sum(self._sizes.values())

    def __len__(self) -> int:
        return len(self._sizes)


def _format_address(addr: Optional[float]) -> str:
    if isinstance(addr, bool) or not isinstance(addr, (int, float)):
        return UNKNOWN_ADDRESS
    if not math.isfinite(addr):
        return UNKNOWN_ADDRESS
    if isinstance(addr, float) and addr.is_integer():
        return str(int(addr))
    return str(addr)


def location_key(symbol: Symbol) -> str:
    """Return the ``section:address`` key used to detect aliased symbols.

    The address comes from ``symbol.primary_location`` when it carries one,
    else from ``symbol.addr``. Missing parts become ``UNKNOWN_SECTION`` /
    ``UNKNOWN_ADDRESS``, so symbols without location metadata share a key.
    """
    section_id = symbol.section_id
    if section_id is None:
        section_id = UNKNOWN_SECTION
    addr = None
    if symbol.primary_location is not None:
        addr = symbol.primary_location.addr
    if addr is None:
        addr = symbol.addr
    return f"{section_id}:{_format_address(addr)}"
