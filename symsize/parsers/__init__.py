"""Text parsers for binutils output."""

from __future__ import annotations

from .nm import NmSymbolInfo, parse_location, parse_nm_output
from .readelf import parse_readelf_sections, parse_section_flags

__all__ = [
    "NmSymbolInfo",
    "parse_location",
    "parse_nm_output",
    "parse_readelf_sections",
    "parse_section_flags",
]
