"""Parser for ``nm --print-size`` output.

Handles the GNU nm row format ``<addr> <size> <type> <name>`` with optional
source locations appended by ``--line-numbers`` (either on the same row after
a tab, or on the following line).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from symsize.model.symbol import SourceLocation

__all__ = ["NmSymbolInfo", "parse_location", "parse_nm_output"]

_NM_LINE_REGEX = re.compile(r"^\s*([0-9a-fA-F]+)\s+([0-9a-fA-F]+)\s+(\S)\s+(.+)$")
_LOCATION_REGEX = re.compile(r"^(.*?):(\d+)(?::\d+)?(?:\s+\(.*\))?$")
_NAME_BOUNDARY_REGEX = re.compile(r"^(.*\S)\s+(.+)$")


@dataclass
class NmSymbolInfo:
    """One defined symbol row from nm.

    Attributes:
        address: Symbol value.
        size: Symbol size in bytes.
        type_code: nm type letter (``T``, ``t``, ``D``, ``W`` ...).
        name: Display name with any location suffix removed.
        raw_name: Name as it will be recorded for the mangled-name field.
        source: Source location, if nm reported one.
    """

    address: int
    size: int
    type_code: str
    name: str
    raw_name: str
    source: Optional[SourceLocation] = None


def parse_location(value: str) -> Optional[SourceLocation]:
    """Parse ``file:line[:column] [(discriminator N)]`` into a SourceLocation.

    Returns None for anything else, including nm's ``??:0`` placeholder.
    """
    match = _LOCATION_REGEX.match(value.strip())
    if not match:
        return None

    file_part = match.group(1).strip()
    line_number = int(match.group(2))
    if not file_part or (file_part == "??" and line_number == 0):
        return None

    return SourceLocation(file=os.path.normpath(file_part), line=line_number)


def _split_name_and_location(raw: str) -> Tuple[str, Optional[SourceLocation]]:
    normalized = raw.rstrip()
    if "\t" in normalized:
        name_part, _, suffix = normalized.rpartition("\t")
        location = parse_location(suffix)
        if location is not None and name_part.strip():
            return name_part.rstrip(), location

    match = _NAME_BOUNDARY_REGEX.match(normalized)
    if not match:
        return normalized, None

    location = parse_location(match.group(2))
    if location is None:
        return normalized, None
    return match.group(1).rstrip(), location


def parse_nm_output(stdout: str) -> List[NmSymbolInfo]:
    """Parse nm output into defined, sized symbols.

    Skips blank lines, ``Archive`` headers, debug-section rows, undefined
    (``U``) symbols and rows without a size column.

    Args:
        stdout: Text produced by ``nm --print-size [--line-numbers] ...``.

    Returns:
        Symbols in output order.
    """
    symbols: List[NmSymbolInfo] = []
    pending: Optional[NmSymbolInfo] = None

    for line in stdout.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("Archive ") or " .debug" in trimmed:
            continue

        match = _NM_LINE_REGEX.match(trimmed)
        if not match:
            if pending is not None:
                location = parse_location(trimmed)
                if location is not None:
                    pending.source = location
                    pending = None
            continue

        addr_hex, size_hex, type_code, name_raw = match.groups()
        if type_code.upper() == "U":
            continue

        name, location = _split_name_and_location(name_raw)
        symbol = NmSymbolInfo(
            address=int(addr_hex, 16),
            size=int(size_hex, 16),
            type_code=type_code,
            name=name,
            raw_name=name,
            source=location,
        )
        symbols.append(symbol)
        pending = None if location is not None else symbol

    return symbols
