"""Version information tool."""

import argparse
import json
import platform

import pydantic
import yaml  # type: ignore[import-untyped]

import chaincfg

from ..output import OutputWriter
from . import Tool, ToolConfig


def _get_versions() -> dict[str, str]:
    """Versions of chaincfg and the libraries that parse and validate definitions."""
    return {
        "semver": chaincfg.__version__,
        "python": platform.python_version(),
        "pydantic": pydantic.VERSION,
        "pyyaml": yaml.__version__,
    }


class VersionTool(Tool):
    """Display version information."""

    def __init__(self, out: OutputWriter | None = None) -> None:
        config = ToolConfig(
            name="version",
            help_text="Show version info",
            description="Display the chaincfg version and its parser library versions.",
        )
        super().__init__(config, out)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--json", dest="as_json", action="store_true", help="Output as JSON"
        )

    def run(self, args: argparse.Namespace) -> int:
        versions = _get_versions()
        if args.as_json:
            self.out.write(json.dumps(versions, indent=2))
            return 0

        self.out.write(f"chaincfg {versions['semver']}")
        self.out.write(
            f"python {versions['python']}, pydantic {versions['pydantic']}, "
            f"pyyaml {versions['pyyaml']}"
        )
        return 0
