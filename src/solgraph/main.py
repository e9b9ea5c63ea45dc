# solgraph/main.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
CLI entry point for solgraph.

Usage:
    python -m solgraph contracts/*.sol --output graph.dot
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .builder import SimpleGraphBuilder
from .config import COLOR_SCHEMES, GraphOptions, get_color_scheme, load_options
from .errors import SolGraphError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solgraph",
        description="Generate a contract-level call graph (DOT) for Solidity sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Print the graph for a set of files
    python -m solgraph contracts/Token.sol contracts/Vault.sol

    # Follow imports, dark theme, write to a file
    python -m solgraph contracts/Vault.sol --importer --color-scheme dark -o vault.dot

    # Options from YAML (command-line flags take precedence)
    python -m solgraph contracts/*.sol --config solgraph.yaml
        """,
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Solidity source files to analyze",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to options YAML file (defaults to SOLGRAPH_* environment variables)",
    )
    parser.add_argument(
        "--color-scheme",
        choices=sorted(COLOR_SCHEMES),
        help="Preset colour scheme",
    )
    parser.add_argument(
        "--importer",
        action="store_true",
        help="Follow import directives to discover dependency files",
    )
    parser.add_argument(
        "--libraries",
        action="store_true",
        help="Suppress edges to libraries attached with using-for",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write DOT to this file instead of stdout",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser


def resolve_options(args: argparse.Namespace) -> GraphOptions:
    """Merge config file (or environment) options with command-line flags."""
    if args.config is not None:
        options = load_options(args.config)
    else:
        options = GraphOptions.from_env()

    if args.color_scheme:
        options.color_scheme = get_color_scheme(args.color_scheme)
    if args.importer:
        options.importer = True
    if args.libraries:
        options.libraries = True
    return options


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for solgraph CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.config is not None and not args.config.exists():
        logger.error(f"Config file not found: {args.config}")
        return 1

    try:
        options = resolve_options(args)
        dot = SimpleGraphBuilder(options).run(args.files)
    except (SolGraphError, OSError) as e:
        logger.error(f"Graph generation failed: {e}")
        return 1

    if args.output is not None:
        args.output.write_text(dot, encoding="utf-8")
        logger.info(f"Graph written to {args.output}")
    else:
        print(dot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
