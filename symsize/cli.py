"""Command-line interface for SymSize."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from symsize.analysis.pipeline import collect_symbols
from symsize.analysis.template_groups import build_template_groups
from symsize.config import TOOLCHAIN_CONFIG, ToolchainConfig
from symsize.io import dump_symbols, load_symbols, write_json, write_symbols
from symsize.logging import get_logger, set_global_log_level
from symsize.model.symbol import Symbol
from symsize.results.template_groups import (
    TemplateGroupSummary,
    template_groups_frame,
)
from symsize.toolchain.exec import ToolchainError

logger = get_logger(__name__)

# --sort choice -> (frame column, ascending)
_SORT_COLUMNS = {
    "size": ("size_bytes", False),
    "unique": ("unique_size_bytes", False),
    "count": ("symbol_count", False),
    "name": ("display_name", True),
}


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Cells longer than this are clipped with "..."

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = []
    for col_idx in range(len(clipped_headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = []
    lines.append(format_row(clipped_headers))
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in clipped_rows:
        lines.append(format_row(row))

    return "\n".join(lines)


def _format_bytes(value: Any) -> str:
    """Return a byte count with thousands separators.

    Integral values print without decimals; fractional ones keep up to two.

    Examples:
        1234 -> "1,234"; 1234.5 -> "1,234.5".
    """
    v = float(value)
    if v.is_integer():
        return f"{int(v):,}"
    s = f"{v:,.2f}"
    return s.rstrip("0").rstrip(".")


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _positive_int(value: str) -> int:
    """Argparse type accepting integers of at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _toolchain_config(args: argparse.Namespace) -> ToolchainConfig:
    """Build a ToolchainConfig from CLI flags over the package defaults."""
    return ToolchainConfig(
        prefix=(
            args.toolchain_prefix
            if args.toolchain_prefix is not None
            else TOOLCHAIN_CONFIG.prefix
        ),
        directory=args.toolchain_dir or TOOLCHAIN_CONFIG.directory,
        executable_suffix=TOOLCHAIN_CONFIG.executable_suffix,
        timeout=(
            args.timeout if args.timeout is not None else TOOLCHAIN_CONFIG.timeout
        ),
        nm_args=TOOLCHAIN_CONFIG.nm_args,
    )


def _print_groups_table(
    groups: List[TemplateGroupSummary],
    sort: str,
    top: Optional[int],
    templates_only: bool,
) -> None:
    frame = template_groups_frame(groups)
    total_symbols = int(frame["symbol_count"].sum()) if not frame.empty else 0
    total_size = frame["size_bytes"].sum() if not frame.empty else 0
    total_unique = frame["unique_size_bytes"].sum() if not frame.empty else 0
    template_count = int(frame["is_template"].sum()) if not frame.empty else 0

    families = _plural(template_count, "family", "families")
    print(
        f"Template groups: {template_count} {families}"
        f" across {len(groups)} {_plural(len(groups), 'group')},"
        f" {total_symbols} {_plural(total_symbols, 'symbol')},"
        f" {_format_bytes(total_size)} bytes ({_format_bytes(total_unique)} unique)"
    )

    if templates_only:
        frame = frame[frame["is_template"].astype(bool)]
    column, ascending = _SORT_COLUMNS[sort]
    frame = frame.sort_values(by=[column, "id"], ascending=[ascending, True])
    if top is not None:
        frame = frame.head(top)

    rows = [
        [
            row.display_name,
            "yes" if row.is_template else "no",
            str(row.symbol_count),
            str(row.specialization_count),
            _format_bytes(row.size_bytes),
            _format_bytes(row.unique_size_bytes),
            _format_bytes(row.largest_symbol_size_bytes),
        ]
        for row in frame.itertuples(index=False)
    ]
    table = _format_table(
        ["Group", "Template", "Symbols", "Specs", "Size", "Unique", "Largest"],
        rows,
        max_col_width=60,
    )
    if table:
        print(table)


def _load_input_symbols(args: argparse.Namespace) -> List[Symbol]:
    if args.symbols is not None:
        logger.info(f"Loading symbols from: {args.symbols}")
        return load_symbols(args.symbols)
    logger.info(f"Collecting symbols from: {args.elf}")
    return collect_symbols(args.elf, _toolchain_config(args))


def _run_groups(args: argparse.Namespace) -> None:
    """Build template groups and print or export them."""
    _start_time = perf_counter()
    try:
        symbols = _load_input_symbols(args)
        groups = build_template_groups(symbols)
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e}")
        print(f"❌ ERROR: Input file not found: {e}")
        sys.exit(1)
    except (ToolchainError, ValueError, OSError) as e:
        logger.error(f"Failed to analyze symbols: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to analyze symbols: {type(e).__name__}: {e}")
        sys.exit(1)

    payload = {"groups": [g.to_dict() for g in groups]}
    if args.output is not None:
        out = write_json(args.output, payload)
        logger.info(f"Writing results to: {out}")
        print(f"✅ Results written to: {out}")

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        _print_groups_table(groups, args.sort, args.top, args.templates_only)

    _elapsed = perf_counter() - _start_time
    logger.info(
        f"Grouped {len(symbols)} symbols into {len(groups)} groups"
        f" in {_format_duration(_elapsed)}"
    )


def _run_symbols(args: argparse.Namespace) -> None:
    """Collect symbols from an ELF and print or export them as a symbol file."""
    try:
        symbols = collect_symbols(args.elf, _toolchain_config(args))
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e}")
        print(f"❌ ERROR: Input file not found: {e}")
        sys.exit(1)
    except (ToolchainError, OSError) as e:
        logger.error(f"Failed to collect symbols: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to collect symbols: {type(e).__name__}: {e}")
        sys.exit(1)

    source = str(Path(args.elf).name)
    if args.output is not None:
        out = write_symbols(args.output, symbols, source=source)
        print(f"✅ Symbols written to: {out}")
    else:
        print(json.dumps(dump_symbols(symbols, source=source), indent=2))


def _add_toolchain_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--toolchain-dir",
        default=None,
        help="Directory containing the prefixed binutils executables",
    )
    p.add_argument(
        "--toolchain-prefix",
        default=None,
        help=f"Prefix for toolchain commands (default: {TOOLCHAIN_CONFIG.prefix})",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds each toolchain command may run",
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``symsize`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="symsize",
        description="Roll up linked symbol sizes by C++ template family.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{groups,symbols}",
        help="Available commands",
    )

    groups_parser = subparsers.add_parser(
        "groups", help="Summarize symbol sizes per template family"
    )
    source_group = groups_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--elf", type=Path, help="Linked ELF image to inspect")
    source_group.add_argument(
        "--symbols", type=Path, help="Symbol file (YAML or JSON) to analyze"
    )
    groups_parser.add_argument(
        "--json", action="store_true", help="Print full summaries as JSON"
    )
    groups_parser.add_argument(
        "--sort",
        choices=sorted(_SORT_COLUMNS),
        default="size",
        help="Table sort order (default: size)",
    )
    groups_parser.add_argument(
        "--top",
        type=_positive_int,
        default=None,
        help="Show only the first N table rows",
    )
    groups_parser.add_argument(
        "--templates-only",
        action="store_true",
        help="Hide non-template groups in the table",
    )

    symbols_parser = subparsers.add_parser(
        "symbols", help="Collect symbols from an ELF into a symbol file"
    )
    symbols_parser.add_argument(
        "--elf", type=Path, required=True, help="Linked ELF image to inspect"
    )

    for p in (groups_parser, symbols_parser):
        _add_toolchain_arguments(p)
        p.add_argument(
            "--output",
            "-o",
            type=Path,
            default=None,
            help="Write results to this file instead of only printing them",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "groups":
        _run_groups(args)
    elif args.command == "symbols":
        _run_symbols(args)


if __name__ == "__main__":
    main()
