from importlib.metadata import PackageNotFoundError, version

from .config import (
    CompilerSettings,
    ConfigurationDescriptor,
    DirectoryLayout,
    NetworkProfile,
    OptimizerSettings,
    dumps,
    load,
    loads,
    save,
)
from .exceptions import ChainConfigError, MalformedConfigError, NotFoundError

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("chaincfg")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Loading and serialization
    "load",
    "loads",
    "dumps",
    "save",
    # Descriptor types
    "ConfigurationDescriptor",
    "NetworkProfile",
    "CompilerSettings",
    "OptimizerSettings",
    "DirectoryLayout",
    # Exceptions
    "ChainConfigError",
    "MalformedConfigError",
    "NotFoundError",
]
