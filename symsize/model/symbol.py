"""Symbol and section records produced by the binary-inspection pipeline.

These dataclasses are the input vocabulary of the analysis layer. They are
created by ``symsize.analysis.symbol_assignment`` (from nm/readelf output) or
by ``symsize.io`` (from symbol files) and are treated as read-only afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

SYMBOL_KINDS = ("func", "object", "section", "file", "other")


@dataclass(frozen=True)
class SourceLocation:
    """Source file and line reported for a symbol.

    Attributes:
        file (str): Normalized source path.
        line (int): 1-based line number.
    """

    file: str
    line: int


@dataclass(frozen=True)
class SymbolLocation:
    """One placement of a symbol in an address window.

    Attributes:
        addr (Optional[float]): Address of the symbol within the window.
        window_id (Optional[str]): Address window identifier.
        block_id (Optional[str]): Logical block identifier.
        address_type (Optional[str]): ``exec``, ``load`` or ``runtime``.
    """

    addr: Optional[float] = None
    window_id: Optional[str] = None
    block_id: Optional[str] = None
    address_type: Optional[str] = None


@dataclass
class Symbol:
    """A named, sized, located entity from a linked binary.

    ``size`` and ``addr`` may be missing or non-finite when the upstream tool
    did not report them; consumers normalize these themselves.

    Attributes:
        id (str): Identifier, unique within one collection by convention only.
        name (Optional[str]): Display (demangled) name.
        size (Optional[float]): Size in bytes.
        addr (Optional[float]): Virtual address.
        name_mangled (Optional[str]): Raw linker name.
        kind (str): One of ``SYMBOL_KINDS``.
        section_id (Optional[str]): Identifier of the containing section.
        block_id (Optional[str]): Logical block identifier.
        window_id (Optional[str]): Address window identifier.
        primary_location (Optional[SymbolLocation]): Preferred placement.
        is_weak (bool): Weak linkage.
        is_static (bool): Local (file-scope) linkage.
        aliases (List[str]): Other mangled names found at the same location.
        source (Optional[SourceLocation]): Source file and line, if known.
    """

    id: str
    name: Optional[str] = None
    size: Optional[float] = 0
    addr: Optional[float] = None
    name_mangled: Optional[str] = None
    kind: str = "other"
    section_id: Optional[str] = None
    block_id: Optional[str] = None
    window_id: Optional[str] = None
    primary_location: Optional[SymbolLocation] = None
    is_weak: bool = False
    is_static: bool = False
    aliases: List[str] = field(default_factory=list)
    source: Optional[SourceLocation] = None


@dataclass(frozen=True)
class SectionFlags:
    """Allocation flags of an ELF section."""

    alloc: bool = False
    exec: bool = False
    write: bool = False
    tls: bool = False


@dataclass(frozen=True)
class Section:
    """An ELF section header as reported by ``readelf -S``.

    Attributes:
        id (str): Identifier of the form ``sec_<index>``.
        name (str): Section name, e.g. ``.text``.
        vma_start (int): Virtual start address.
        size (int): Size in bytes.
        flags (SectionFlags): Allocation flags.
        type (str): Section type column, e.g. ``PROGBITS``.
    """

    id: str
    name: str
    vma_start: int
    size: int
    flags: SectionFlags = field(default_factory=SectionFlags)
    type: str = ""

    def contains(self, address: int) -> bool:
        """Return True when ``address`` falls inside this section."""
        return self.vma_start <= address < self.vma_start + self.size
