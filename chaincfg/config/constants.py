"""
Configuration-related constants and resource limits.
"""

# Maximum definition file size (1MB); real definitions are a few hundred bytes
MAX_CONFIG_SIZE_BYTES = 1024 * 1024

# Default definition filename, searched under etc/ and then the directory itself
DEFAULT_CONFIG_FILENAME = "chain.yaml"

# Environment variable naming an explicit definition path
CONFIG_PATH_ENV = "CHAINCFG_CONFIG"

# Prefix and nesting separator for environment overrides
DEFAULT_ENV_PREFIX = "CHAINCFG_"
ENV_PATH_SEPARATOR = "__"

# network_id value meaning "accept any network"
WILDCARD_NETWORK_ID = "*"

# The only compiler entry the definition may carry
SOLC_COMPILER = "solc"
