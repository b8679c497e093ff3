"""
Serialization of a ConfigurationDescriptor back to the definition format.

The output has the same shape and key order as a hand-written definition
file, so loading what was dumped yields an equal descriptor.
"""

import json
from pathlib import Path
from typing import Any

from .. import yaml as chain_yaml
from .constants import SOLC_COMPILER
from .schemas import ConfigurationDescriptor


def to_dict(descriptor: ConfigurationDescriptor) -> dict[str, Any]:
    """
    Convert a descriptor to plain data in definition-file layout.

    Network names become the keys of the 'networks' mapping again.
    """
    solc = descriptor.get_compiler_settings()
    layout = descriptor.get_directory_layout()
    return {
        "networks": {
            profile.name: {
                "host": profile.host,
                "port": profile.port,
                "network_id": profile.network_id,
            }
            for profile in descriptor.networks
        },
        "compilers": {
            SOLC_COMPILER: {
                "version": solc.version,
                "settings": {
                    "optimizer": {
                        "enabled": solc.optimizer.enabled,
                        "runs": solc.optimizer.runs,
                    }
                },
            }
        },
        "contracts_directory": layout.contracts_directory,
        "contracts_build_directory": layout.contracts_build_directory,
        "migrations_directory": layout.migrations_directory,
    }


def flatten(data: dict[str, Any], prefix: str = "") -> list[tuple[str, Any]]:
    """Flatten nested data into (dotted.key, value) pairs."""
    items: list[tuple[str, Any]] = []
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.extend(flatten(value, full_key))
        else:
            items.append((full_key, value))
    return items


def dumps(descriptor: ConfigurationDescriptor, fmt: str = "yaml") -> str:
    """
    Serialize a descriptor as YAML (default) or JSON text.

    Raises:
        ValueError: If fmt is not 'yaml' or 'json'
    """
    data = to_dict(descriptor)
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return chain_yaml.dump(data)  # type: ignore[return-value]
    raise ValueError(f"Unsupported format '{fmt}'. Use 'yaml' or 'json'")


def save(descriptor: ConfigurationDescriptor, path: str | Path) -> Path:
    """
    Write a descriptor to `path`, choosing JSON for .json and YAML otherwise.

    Returns:
        The path written
    """
    target = Path(path)
    fmt = "json" if target.suffix.lower() == ".json" else "yaml"
    target.write_text(dumps(descriptor, fmt), encoding="utf-8")
    return target
