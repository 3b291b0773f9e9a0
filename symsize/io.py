"""Symbol file loading and result writing.

Symbol files are YAML (JSON is accepted as a YAML subset) with a top-level
``symbols`` list. They are validated against the packaged schema
``symsize/schemas/symbols.json`` before being turned into ``Symbol`` records.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import jsonschema
import yaml

from symsize.logging import get_logger
from symsize.model.symbol import SourceLocation, Symbol, SymbolLocation

logger = get_logger(__name__)

__all__ = [
    "dump_symbols",
    "load_symbols",
    "load_symbols_yaml",
    "symbol_from_dict",
    "write_json",
    "write_symbols",
]


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("symsize.schemas")
            .joinpath("symbols.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except (OSError, ValueError) as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to load packaged schema 'symsize/schemas/symbols.json'."
        ) from exc


def symbol_from_dict(data: Dict[str, Any], index: int = 0) -> Symbol:
    """Build a Symbol from one validated symbol-file entry.

    Missing ids default to ``sym_<index>``.
    """
    location = data.get("primary_location")
    source = data.get("source")
    return Symbol(
        id=data.get("id") or f"sym_{index}",
        name=data.get("name"),
        size=data.get("size", 0),
        addr=data.get("addr"),
        name_mangled=data.get("name_mangled"),
        kind=data.get("kind", "other"),
        section_id=data.get("section_id"),
        block_id=data.get("block_id"),
        window_id=data.get("window_id"),
        primary_location=SymbolLocation(**location) if location else None,
        is_weak=bool(data.get("is_weak", False)),
        is_static=bool(data.get("is_static", False)),
        aliases=list(data.get("aliases") or []),
        source=SourceLocation(**source) if source else None,
    )


def load_symbols_yaml(yaml_str: str) -> List[Symbol]:
    """Parse and validate a symbol file given as a string.

    Raises:
        ValueError: If the document is not a mapping or violates the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided symbol file must map to a dictionary.")

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ValueError(f"Invalid symbol file at {location}: {exc.message}") from exc

    return [
        symbol_from_dict(entry, index)
        for index, entry in enumerate(data.get("symbols", []))
    ]


def load_symbols(path: str | os.PathLike[str]) -> List[Symbol]:
    """Load symbols from a YAML or JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    symbols = load_symbols_yaml(text)
    logger.debug("Loaded %d symbols from %s", len(symbols), path)
    return symbols


def dump_symbols(
    symbols: Iterable[Symbol], source: Optional[str] = None
) -> Dict[str, Any]:
    """Return the symbol-file mapping for ``symbols``.

    The result can be written with ``yaml.safe_dump`` or ``json.dump`` and
    read back with ``load_symbols_yaml``.
    """
    payload: Dict[str, Any] = {"symbols": [asdict(s) for s in symbols]}
    if source is not None:
        payload["source"] = source
    return payload


def write_json(path: str | os.PathLike[str], payload: Any) -> Path:
    """Write ``payload`` as indented JSON, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    return out


def write_symbols(
    path: str | os.PathLike[str],
    symbols: Iterable[Symbol],
    source: Optional[str] = None,
) -> Path:
    """Write a symbol file; ``.json`` paths get JSON, anything else YAML."""
    out = Path(path)
    payload = dump_symbols(symbols, source=source)
    if out.suffix.lower() == ".json":
        return write_json(out, payload)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return out
