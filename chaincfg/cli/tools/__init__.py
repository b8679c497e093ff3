"""
Base class and shared helpers for chaincfg CLI tools.

Each tool registers one subcommand: it declares its arguments in add_args()
and does its work in run(), returning the process exit code.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any

from ...config import ConfigurationDescriptor, load
from ...exceptions import ChainConfigError
from ..output import ConsoleOutput, OutputWriter


@dataclass(frozen=True)
class ToolConfig:
    """Static description of a CLI tool."""

    name: str
    help_text: str = ""
    description: str | None = None
    aliases: list[str] = field(default_factory=list)


class Tool:
    """
    Base class for a chaincfg subcommand.

    Subclasses pass a ToolConfig to __init__, override add_args() and run().
    """

    def __init__(self, config: ToolConfig, out: OutputWriter | None = None) -> None:
        self.config = config
        self.out: OutputWriter = out if out is not None else ConsoleOutput()
        self.lg = logging.getLogger(f"chaincfg.cli.{config.name}")

    @property
    def name(self) -> str:
        return self.config.name

    def register(self, subparsers: Any) -> argparse.ArgumentParser:
        """Create this tool's subparser and bind it to the tool."""
        parser = subparsers.add_parser(
            self.config.name,
            aliases=self.config.aliases,
            help=self.config.help_text,
            description=self.config.description or self.config.help_text,
        )
        self.add_args(parser)
        parser.set_defaults(tool=self)
        return parser

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments (none by default)."""

    def run(self, args: argparse.Namespace) -> int:
        raise NotImplementedError


def add_config_args(parser: argparse.ArgumentParser, env: bool = True) -> None:
    """Add the optional positional definition path (and --no-env)."""
    parser.add_argument(
        "config_file",
        nargs="?",
        default=None,
        help="Path to the chain definition (default: search for etc/chain.yaml)",
    )
    if env:
        parser.add_argument(
            "--no-env",
            action="store_true",
            help="Disable environment variable overrides",
        )


def load_descriptor(tool: Tool, args: argparse.Namespace) -> ConfigurationDescriptor | None:
    """
    Load the definition named on the command line, logging failures.

    Returns:
        The descriptor, or None if it could not be loaded
    """
    try:
        return load(
            args.config_file,
            enable_env_overrides=not getattr(args, "no_env", False),
        )
    except FileNotFoundError as e:
        tool.lg.error("config file not found", extra={"exception": e})
    except ChainConfigError as e:
        tool.lg.error("failed to load config", extra={"exception": e})
    return None
