"""
Chain configuration package.

This module provides:
- load()/loads()/from_dict() for turning a definition into a descriptor
- Pydantic schemas for the descriptor and its parts
- dumps()/save()/to_dict() for writing a descriptor back out
"""

from .constants import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_ENV_PREFIX,
    MAX_CONFIG_SIZE_BYTES,
    WILDCARD_NETWORK_ID,
)
from .loader import (
    apply_env_overrides,
    find_config_file,
    from_dict,
    get_env_overrides,
    load,
    loads,
    resolve_references,
)
from .schemas import (
    CompilerSettings,
    CompilersConfig,
    ConfigurationDescriptor,
    DirectoryLayout,
    NetworkProfile,
    OptimizerSettings,
    SolcSettings,
)
from .serializer import dumps, flatten, save, to_dict

__all__ = [
    # Loading
    "load",
    "loads",
    "from_dict",
    "find_config_file",
    "apply_env_overrides",
    "get_env_overrides",
    "resolve_references",
    # Schemas
    "ConfigurationDescriptor",
    "NetworkProfile",
    "CompilerSettings",
    "CompilersConfig",
    "SolcSettings",
    "OptimizerSettings",
    "DirectoryLayout",
    # Serialization
    "to_dict",
    "dumps",
    "save",
    "flatten",
    # Constants
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_ENV_PREFIX",
    "MAX_CONFIG_SIZE_BYTES",
    "WILDCARD_NETWORK_ID",
]
