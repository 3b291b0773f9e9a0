"""Input data model for symbol analysis."""

from __future__ import annotations

from .symbol import (
    SYMBOL_KINDS,
    Section,
    SectionFlags,
    SourceLocation,
    Symbol,
    SymbolLocation,
)

__all__ = [
    "SYMBOL_KINDS",
    "Section",
    "SectionFlags",
    "SourceLocation",
    "Symbol",
    "SymbolLocation",
]
