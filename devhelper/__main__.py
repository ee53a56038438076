"""CLI entry point for ``python -m devhelper`` / ``devhelper-mcp``.

Usage::

    python -m devhelper                      # serve MCP over stdio
    python -m devhelper --list-tools         # print the tool catalog and exit
    python -m devhelper --install-timeout 300 --log-level DEBUG
    python -m devhelper --save-config devhelper.json  # write current settings
    python -m devhelper --config devhelper.json       # serve with saved settings
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from devhelper.catalog import list_capabilities
from devhelper.config import Config
from devhelper.scaffolder import TemplateRenderer
from devhelper.server import serve
from devhelper.utils import print_catalog_table, print_error, print_success, setup_logging

logger = logging.getLogger("devhelper")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devhelper-mcp",
        description="Dev Helper MCP server -- MERN scaffolding tools over stdio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment variables (DEVHELPER_*) set defaults; flags override them.\n"
            "Examples:\n"
            "  devhelper-mcp\n"
            "  devhelper-mcp --list-tools\n"
            "  devhelper-mcp --install-timeout 300\n"
            "  devhelper-mcp --config devhelper.json\n"
        ),
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level written to stderr (default: INFO)",
    )
    parser.add_argument(
        "--install-timeout",
        type=int,
        default=None,
        help="Seconds before 'npm install' is killed (default: no limit)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Load settings from a JSON file instead of DEVHELPER_* variables",
    )
    parser.add_argument(
        "--save-config",
        type=Path,
        default=None,
        help="Write the effective settings to a JSON file and exit",
    )
    parser.add_argument(
        "--list-tools",
        action="store_true",
        help="Print the tool catalog and exit",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(args.config) if args.config else Config.from_env()
        overrides = {}
        if args.log_level:
            overrides["log_level"] = args.log_level
        if args.install_timeout is not None:
            overrides["install_timeout"] = args.install_timeout
        if overrides:
            config = Config.model_validate({**config.model_dump(), **overrides})
    except (ValidationError, ValueError, OSError) as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(2)

    if args.save_config:
        path = config.save(args.save_config)
        print_success(f"Configuration written to {path}")
        return

    if args.list_tools:
        print_catalog_table(list_capabilities(), title=config.server_name)
        templates = TemplateRenderer().list_templates()
        print_success(f"{len(list_capabilities())} tools, {len(templates)} templates available")
        return

    setup_logging(config.log_level)
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
