"""Main CLI entry point for docgraph.

Provides commands: extract
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from docgraph.cli.extract import extract_command

logger = logging.getLogger("docgraph.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description="Docgraph - Documentation graph extraction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    extract_parser = subparsers.add_parser(
        "extract",
        help="Build the documentation graph of an analysis snapshot",
    )
    extract_parser.add_argument(
        "snapshot",
        help="Analysis snapshot (JSON) produced by a static-analysis front end",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output documentation graph file (JSON)",
    )
    extract_parser.add_argument(
        "-p",
        "--package",
        help=(
            "Package name shown as the index page '/'. Defaults to the "
            "configured name, then the snapshot's package, then the first root."
        ),
    )
    extract_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional extraction configuration. Can be a path to a TOML/JSON "
            "file (e.g. docgraph.toml) or an inline TOML/JSON string. When "
            "omitted, built-in defaults are used."
        ),
    )
    extract_parser.add_argument(
        "--modules-only",
        action="store_true",
        help="Only collect modules and namespaces (cheap export maps)",
    )
    extract_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when an export does not resolve to a symbol",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "extract":
        return extract_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
