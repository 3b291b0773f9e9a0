"""Parser for ``readelf -S`` section header tables."""

from __future__ import annotations

import re
from typing import List, Optional

from symsize.model.symbol import Section, SectionFlags

__all__ = ["parse_readelf_sections", "parse_section_flags"]

_INDEX_REGEX = re.compile(r"^\[\s*(\d+)\]")


def parse_section_flags(raw: str) -> SectionFlags:
    """Map readelf flag letters (``WAX`` ...) to SectionFlags."""
    return SectionFlags(
        alloc="A" in raw,
        exec="X" in raw,
        write="W" in raw,
        tls="T" in raw,
    )


def _parse_line(line: str) -> Optional[Section]:
    match = _INDEX_REGEX.match(line)
    if not match:
        return None

    parts = line[match.end() :].split()
    # Name Type Addr Off Size ES [Flg] Lk Inf Al
    if len(parts) < 9:
        return None

    name, type_, addr_hex, _off_hex, size_hex = parts[:5]
    rest = parts[6:]
    flags = rest[0] if len(rest) == 4 else ""

    try:
        addr = int(addr_hex, 16)
        size = int(size_hex, 16)
    except ValueError:
        return None

    return Section(
        id=f"sec_{match.group(1)}",
        name=name,
        vma_start=addr,
        size=size,
        flags=parse_section_flags(flags),
        type=type_,
    )


def parse_readelf_sections(stdout: str) -> List[Section]:
    """Parse the section table printed by ``readelf -S -W``.

    Rows that do not start with ``[<index>]`` (headers, key to flags) are
    ignored. Section ids are ``sec_<index>``.
    """
    sections: List[Section] = []
    for line in stdout.splitlines():
        section = _parse_line(line.strip())
        if section is not None:
            sections.append(section)
    return sections
