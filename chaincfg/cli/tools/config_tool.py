"""
Configuration display tool for the chaincfg CLI.

Displays the validated, normalized definition with environment overrides and
variable substitutions applied.
"""

import argparse
import json
from typing import Any

from ... import yaml as chain_yaml
from ...config import flatten, to_dict
from ..output import OutputWriter
from . import Tool, ToolConfig, add_config_args, load_descriptor


class ConfigTool(Tool):
    """
    CLI tool to display the resolved chain definition.

    Supports three output formats:
    - yaml: YAML format (default, human-readable)
    - json: JSON format (for programmatic consumption)
    - flat: key=value format (for shell scripts, grep, etc.)
    """

    def __init__(self, out: OutputWriter | None = None) -> None:
        config = ToolConfig(
            name="show",
            aliases=["s", "config"],
            help_text="Display the resolved chain definition",
            description=(
                "Load, validate and display the chain definition with "
                "environment overrides and ${} references applied."
            ),
        )
        super().__init__(config, out)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        add_config_args(parser)
        parser.add_argument(
            "--format",
            "-f",
            choices=["yaml", "json", "flat"],
            default="yaml",
            help="Output format (default: yaml)",
        )
        parser.add_argument(
            "--section",
            "-s",
            default=None,
            help="Show only a specific section (e.g., 'networks.development')",
        )

    def run(self, args: argparse.Namespace) -> int:
        descriptor = load_descriptor(self, args)
        if descriptor is None:
            return 1

        data = self._filter_section(to_dict(descriptor), args.section)
        if data is None:
            return 1

        for line in self._format_output(data, args.format).splitlines():
            self.out.write(line)
        return 0

    def _filter_section(
        self, data: dict[str, Any], section: str | None
    ) -> dict[str, Any] | None:
        """Filter to a specific section if requested."""
        if section is None:
            return data

        current: Any = data
        for part in section.split("."):
            if not isinstance(current, dict) or part not in current:
                self.lg.error("section not found", extra={"section": section})
                return None
            current = current[part]

        if isinstance(current, dict):
            return current
        return {section.split(".")[-1]: current}

    def _format_output(self, data: dict[str, Any], output_format: str) -> str:
        if output_format == "json":
            return json.dumps(data, indent=2)
        if output_format == "flat":
            return "\n".join(
                f"{key}={self._flat_value(value)}" for key, value in flatten(data)
            )
        return (chain_yaml.dump(data) or "").rstrip()

    @staticmethod
    def _flat_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)
