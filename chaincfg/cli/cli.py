#!/usr/bin/env python3
"""
chaincfg CLI - inspect and validate chain definition files.

Usage:
    chaincfg show etc/chain.yaml --format json
    chaincfg validate
    chaincfg network development --url
    chaincfg --help
"""

import argparse
import sys

import chaincfg
from chaincfg.cli.output import OutputWriter
from chaincfg.cli.tools import Tool
from chaincfg.cli.tools.config_tool import ConfigTool
from chaincfg.cli.tools.network_tool import NetworkTool
from chaincfg.cli.tools.validate_tool import ValidateTool
from chaincfg.cli.tools.version_tool import VersionTool
from chaincfg.log import LogConstants, setup_logging

# All CLI tools
_TOOLS = [
    ConfigTool,
    ValidateTool,
    NetworkTool,
    VersionTool,
]


def build_parser(out: OutputWriter | None = None) -> argparse.ArgumentParser:
    """Build the argument parser with all tools registered as subcommands."""
    parser = argparse.ArgumentParser(
        prog="chaincfg",
        description="Inspect and validate smart-contract toolchain configuration",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"chaincfg {chaincfg.__version__}"
    )
    parser.add_argument(
        "--log-level",
        "-l",
        default="warning",
        choices=list(LogConstants.LEVEL_NAMES),
        help="Log level (default: warning)",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only log errors"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    for tool_cls in _TOOLS:
        tool: Tool = tool_cls(out)
        tool.register(subparsers)
    return parser


def main(argv: list[str] | None = None, out: OutputWriter | None = None) -> int:
    """Main entry point for the chaincfg CLI."""
    parser = build_parser(out)
    args = parser.parse_args(argv)
    setup_logging("error" if args.quiet else args.log_level)
    return args.tool.run(args)  # type: ignore[no-any-return]


if __name__ == "__main__":
    sys.exit(main())
