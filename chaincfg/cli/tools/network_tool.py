"""Network profile lookup tool."""

import argparse

from ...exceptions import NotFoundError
from ..output import OutputWriter
from . import Tool, ToolConfig, add_config_args, load_descriptor


class NetworkTool(Tool):
    """Print one network profile, or just its RPC URL."""

    def __init__(self, out: OutputWriter | None = None) -> None:
        config = ToolConfig(
            name="network",
            aliases=["n", "net"],
            help_text="Show a network profile",
            description="Look up a network profile by exact, case-sensitive name.",
        )
        super().__init__(config, out)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("name", help="Network profile name (e.g. development)")
        add_config_args(parser)
        parser.add_argument(
            "--url", action="store_true", help="Print only the node's RPC URL"
        )

    def run(self, args: argparse.Namespace) -> int:
        descriptor = load_descriptor(self, args)
        if descriptor is None:
            return 1

        try:
            profile = descriptor.get_network(args.name)
        except NotFoundError as e:
            self.lg.error("unknown network", extra={"exception": e})
            return 1

        if args.url:
            self.out.write(profile.url)
            return 0

        self.out.write(f"name={profile.name}")
        self.out.write(f"host={profile.host}")
        self.out.write(f"port={profile.port}")
        self.out.write(f"network_id={profile.network_id}")
        self.out.write(f"url={profile.url}")
        return 0
