"""The ``memio`` command line tool.

Usage::

    memio types
    memio bases 1234
    memio read 1234 "heap + 0x10" -n 4 -t u64
    memio read 1234 0x7ffe539ca250 -t cpp/string
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from memio.core.config import MemioConfig, load_config
from memio.core.errors import MemioError
from memio.core.process import Process
from memio.core.registry import registry

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        return repr(value)
    return f"{value:#x} ({value})"


def hexdump(data: bytes, address: int, config: MemioConfig) -> Text:
    """Render *data* as ``address  hex bytes  ascii`` rows."""
    width = config.display.bytes_per_row
    out = Text()
    for offset in range(0, len(data), width):
        chunk = data[offset : offset + width]
        out.append(f"{address + offset:0{config.display.address_width}x}  ", style="cyan")
        out.append(" ".join(f"{b:02x}" for b in chunk).ljust(width * 3 - 1))
        out.append("  ")
        out.append("".join(chr(b) if 0x20 <= b < 0x7F else "." for b in chunk), style="dim")
        out.append("\n")
    return out


# -- commands ------------------------------------------------------------


def cmd_types(args: argparse.Namespace, config: MemioConfig, console: Console) -> int:
    table = Table(title="Registered codecs")
    table.add_column("Keys", style="bold")
    table.add_column("Codec")
    table.add_column("Description")
    for entry in registry.entries():
        table.add_row(
            escape(", ".join(entry.keys)),
            escape(repr(entry.obj)),
            escape(entry.doc.strip().splitlines()[0] if entry.doc.strip() else ""),
        )
    console.print(table)
    return 0


def cmd_bases(args: argparse.Namespace, config: MemioConfig, console: Console) -> int:
    process = Process(args.pid, config.process.proc_root)
    table = Table(title=f"Base addresses of {args.pid}")
    table.add_column("Name", style="bold")
    table.add_column("Address", justify="right", style="cyan")
    for name, address in sorted(process.bases.items(), key=lambda item: item[1]):
        table.add_row(escape(name), f"{address:#0{config.display.address_width + 2}x}")
    console.print(table)
    return 0


def cmd_read(args: argparse.Namespace, config: MemioConfig, console: Console) -> int:
    process = Process(args.pid, config.process.proc_root)
    address = process.resolve(args.address)
    logger.debug("Reading %d element(s) at %#x", args.count, address)
    if args.type is None:
        console.print(hexdump(process.read(address, args.count), address, config), end="")
        return 0

    result = process.read(address, args.count, as_=args.type, force_array=args.force_array)
    if not isinstance(result, list):
        console.print(escape(_format_value(result)))
        return 0
    for index, value in enumerate(result):
        console.print(f"[dim]{index}[/dim]  {escape(_format_value(value))}")
    return 0


# -- entry point ---------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="memio", description="Read typed values from the memory of a running process."
    )
    parser.add_argument("--config", default=None, help="Path to memio.toml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    types_parser = sub.add_parser("types", help="List registered codecs")
    types_parser.set_defaults(func=cmd_types)

    bases_parser = sub.add_parser("bases", help="Show base addresses of mapped regions")
    bases_parser.add_argument("pid", help="Process id (or 'self')")
    bases_parser.set_defaults(func=cmd_bases)

    read_parser = sub.add_parser("read", help="Read values from process memory")
    read_parser.add_argument("pid", help="Process id (or 'self')")
    read_parser.add_argument("address", help="Address or expression, e.g. 'heap + 0x10'")
    read_parser.add_argument("-n", "--count", type=int, default=1, help="Number of elements")
    read_parser.add_argument("-t", "--type", default=None, help="Codec key, e.g. u64 or cpp/string")
    read_parser.add_argument(
        "--force-array", action="store_true", help="Print a list even for a single element"
    )
    read_parser.set_defaults(func=cmd_read)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)
    verbose = args.verbose or config.verbose
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    # All codecs are defined by now.
    registry.freeze()

    console = Console()
    try:
        return args.func(args, config, console)
    except (MemioError, OSError, ValueError) as exc:
        Console(stderr=True).print(f"[red]error:[/red] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
