"""
Configuration schemas using Pydantic for validation.

These models are the typed, immutable form of a chain definition file. Every
model is frozen and forbids unknown keys, so a definition that is missing a
field, carries a stray one, or holds a value of the wrong type is rejected
when it is loaded rather than when a collaborator first reads it.
"""

import ipaddress
import os
import re
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationInfo,
    field_validator,
)

from ..exceptions import NotFoundError
from .constants import WILDCARD_NETWORK_ID

# MAJOR.MINOR.PATCH with optional pre-release and build metadata (semver 2.0)
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)

_MODEL_CONFIG = ConfigDict(frozen=True, extra="forbid")


def _require_text(value: str, what: str) -> str:
    if not value.strip():
        raise ValueError(f"{what} must not be empty")
    return value


class NetworkProfile(BaseModel):
    """Connection parameters for one named blockchain node."""

    name: StrictStr = Field(..., description="Profile name (the key in 'networks')")
    host: StrictStr = Field(..., description="IP address or hostname of the node")
    port: int = Field(..., strict=True, ge=1, le=65535, description="RPC port")
    network_id: str = Field(
        ..., description="Network identifier, or '*' to accept any network"
    )

    model_config = _MODEL_CONFIG

    @field_validator("name", "host")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        """Reject empty or whitespace-only names and hosts."""
        return _require_text(v, info.field_name)

    @field_validator("network_id", mode="before")
    @classmethod
    def normalize_network_id(cls, v: Any) -> str:
        """Accept strings and integer ids; integers are kept in decimal form."""
        if isinstance(v, bool) or not isinstance(v, (str, int)):
            raise ValueError(
                f"network_id must be a string, an integer or "
                f"'{WILDCARD_NETWORK_ID}', got {type(v).__name__}"
            )
        return _require_text(str(v), "network_id")

    @property
    def accepts_any_network(self) -> bool:
        """True when network_id is the wildcard."""
        return self.network_id == WILDCARD_NETWORK_ID

    def matches(self, network_id: int | str) -> bool:
        """
        Check whether a node reporting `network_id` satisfies this profile.

        Args:
            network_id: Identifier reported by the node

        Returns:
            True for the wildcard profile, or when the ids are equal
        """
        return self.accepts_any_network or str(network_id) == self.network_id

    @property
    def url(self) -> str:
        """HTTP endpoint of the node, with IPv6 hosts bracketed."""
        host = self.host
        try:
            if ipaddress.ip_address(host).version == 6:
                host = f"[{host}]"
        except ValueError:
            pass  # hostname
        return f"http://{host}:{self.port}"


class OptimizerSettings(BaseModel):
    """Compiler optimizer switch and tuning."""

    enabled: StrictBool = Field(..., description="Enable the bytecode optimizer")
    runs: int = Field(
        ...,
        strict=True,
        ge=0,
        description="Expected executions per opcode; ignored when disabled",
    )

    model_config = _MODEL_CONFIG

    @property
    def effective_runs(self) -> int | None:
        """Runs value the compiler will honour, or None when disabled."""
        return self.runs if self.enabled else None


class SolcSettings(BaseModel):
    """The 'settings' block of the solc compiler entry."""

    optimizer: OptimizerSettings

    model_config = _MODEL_CONFIG


class CompilerSettings(BaseModel):
    """Version and settings for the solc compiler."""

    version: StrictStr = Field(..., description="Exact solc version, e.g. 0.8.19")
    settings: SolcSettings

    model_config = _MODEL_CONFIG

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version is a semantic version string."""
        if not _SEMVER_RE.match(v):
            raise ValueError(
                f"Invalid compiler version '{v}'. Must be a semantic version "
                "such as '0.8.19'"
            )
        return v

    @property
    def optimizer(self) -> OptimizerSettings:
        return self.settings.optimizer

    @property
    def version_info(self) -> tuple[int, int, int]:
        """(major, minor, patch) of the version, ignoring suffixes."""
        core = re.split(r"[-+]", self.version, maxsplit=1)[0]
        major, minor, patch = (int(part) for part in core.split("."))
        return major, minor, patch

    def to_solc_settings(self) -> dict[str, Any]:
        """
        Build the standard-JSON 'settings' fragment passed to the compiler.

        The runs value is only emitted when the optimizer is enabled; a
        disabled optimizer with any runs value yields the same fragment.

        Returns:
            dict: e.g. {"optimizer": {"enabled": True, "runs": 200}}
        """
        optimizer: dict[str, Any] = {"enabled": self.optimizer.enabled}
        if self.optimizer.effective_runs is not None:
            optimizer["runs"] = self.optimizer.effective_runs
        return {"optimizer": optimizer}


class CompilersConfig(BaseModel):
    """The 'compilers' section; exactly one solc entry."""

    solc: CompilerSettings

    model_config = _MODEL_CONFIG


class DirectoryLayout(BaseModel):
    """Locations of contract sources, build artifacts and migrations."""

    contracts_directory: StrictStr
    contracts_build_directory: StrictStr
    migrations_directory: StrictStr

    model_config = _MODEL_CONFIG

    @field_validator(
        "contracts_directory", "contracts_build_directory", "migrations_directory"
    )
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        return _require_text(v, info.field_name)

    def resolve(self, base_dir: str | Path) -> "DirectoryLayout":
        """
        Return a layout with every path made absolute against base_dir.

        Relative paths are joined to base_dir (normally the directory of the
        definition file), '~' is expanded and the result is normalized.
        Nothing is read from or created on disk.

        Args:
            base_dir: Directory relative paths are resolved against

        Returns:
            New DirectoryLayout holding absolute paths
        """
        base = Path(base_dir).expanduser()

        def _abs(p: str) -> str:
            path = Path(p).expanduser()
            if not path.is_absolute():
                path = base / path
            return os.path.normpath(path.absolute())

        return DirectoryLayout(
            contracts_directory=_abs(self.contracts_directory),
            contracts_build_directory=_abs(self.contracts_build_directory),
            migrations_directory=_abs(self.migrations_directory),
        )


class ConfigurationDescriptor(BaseModel):
    """
    Complete, validated chain configuration.

    Built once per tool invocation (see chaincfg.config.load) and passed to
    the compiler, migration runner and RPC client that need it.

    Example:
        descriptor = load("etc/chain.yaml")
        dev = descriptor.get_network("development")
        solc = descriptor.get_compiler_settings()
    """

    networks: tuple[NetworkProfile, ...] = Field(
        ..., description="Profiles in definition order, named by their mapping key"
    )
    compilers: CompilersConfig
    contracts_directory: StrictStr
    contracts_build_directory: StrictStr
    migrations_directory: StrictStr

    model_config = _MODEL_CONFIG

    @field_validator("networks", mode="before")
    @classmethod
    def networks_from_mapping(cls, v: Any) -> Any:
        """
        Turn the file's {name: {...}} mapping into named profiles.

        Mapping keys are unique, so profile names are too. A body may repeat
        its own key as 'name' but not declare a different one.
        """
        if not isinstance(v, dict):
            raise ValueError(
                "networks must be a mapping of profile name to settings, "
                f"got {type(v).__name__}"
            )
        if not v:
            raise ValueError("at least one network profile is required")
        profiles = []
        for name, body in v.items():
            if isinstance(body, dict):
                if "name" in body and body["name"] != name:
                    raise ValueError(
                        f"network '{name}' declares a different name '{body['name']}'"
                    )
                body = {"name": name, **body}
            profiles.append(body)
        return profiles

    @field_validator(
        "contracts_directory", "contracts_build_directory", "migrations_directory"
    )
    @classmethod
    def validate_directories(cls, v: str, info: ValidationInfo) -> str:
        return _require_text(v, info.field_name)

    def network_names(self) -> tuple[str, ...]:
        """Names of all network profiles, in definition order."""
        return tuple(profile.name for profile in self.networks)

    def has_network(self, name: str) -> bool:
        return name in self.network_names()

    def get_network(self, name: str) -> NetworkProfile:
        """
        Look up a network profile by exact, case-sensitive name.

        Raises:
            NotFoundError: If no profile has that name
        """
        for profile in self.networks:
            if profile.name == name:
                return profile
        raise NotFoundError(
            f"Unknown network '{name}'",
            name=name,
            known=", ".join(self.network_names()),
        )

    def get_compiler_settings(self) -> CompilerSettings:
        return self.compilers.solc

    def get_directory_layout(self) -> DirectoryLayout:
        return DirectoryLayout(
            contracts_directory=self.contracts_directory,
            contracts_build_directory=self.contracts_build_directory,
            migrations_directory=self.migrations_directory,
        )


__all__ = [
    "NetworkProfile",
    "OptimizerSettings",
    "SolcSettings",
    "CompilerSettings",
    "CompilersConfig",
    "DirectoryLayout",
    "ConfigurationDescriptor",
]
