"""Definition validation tool."""

import argparse
from pathlib import Path

from ...config import find_config_file, load
from ...exceptions import MalformedConfigError
from ..output import OutputWriter
from . import Tool, ToolConfig, add_config_args


class ValidateTool(Tool):
    """Check a chain definition and report every schema violation."""

    def __init__(self, out: OutputWriter | None = None) -> None:
        config = ToolConfig(
            name="validate",
            aliases=["v", "check"],
            help_text="Validate a chain definition",
            description=(
                "Load the chain definition and report whether it is valid. "
                "Prints one line per problem and exits 1 when it is not."
            ),
        )
        super().__init__(config, out)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        add_config_args(parser)

    def run(self, args: argparse.Namespace) -> int:
        try:
            path = Path(args.config_file) if args.config_file else find_config_file()
            load(path, enable_env_overrides=not args.no_env)
        except FileNotFoundError as e:
            self.out.write(f"ERROR {e}")
            return 1
        except MalformedConfigError as e:
            self.out.write(f"INVALID {e.context.get('path', args.config_file)}")
            if e.errors:
                for loc, msg in e.errors:
                    self.out.write(f"  {loc}: {msg}")
            else:
                self.out.write(f"  {e.message}")
            return 1

        self.out.write(f"OK {path}")
        return 0
