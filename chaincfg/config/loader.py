"""
Loading of chain definition files into a ConfigurationDescriptor.

The loader reads a single YAML or JSON definition, applies environment
variable overrides and ${dotted.key} substitutions, and validates the result.
All failures surface here at load time: a definition either yields a complete
descriptor or raises.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import pydantic
import yaml  # type: ignore[import-untyped]

from .. import yaml as chain_yaml
from ..exceptions import MalformedConfigError
from .constants import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_ENV_PREFIX,
    ENV_PATH_SEPARATOR,
    MAX_CONFIG_SIZE_BYTES,
)
from .schemas import ConfigurationDescriptor

lg = logging.getLogger(__name__)

# Restrict to valid config keys (alphanumeric + dot + underscore) to prevent ReDoS
_VAR_RE = re.compile(r"\$\{([a-zA-Z0-9_.]+)\}")

# Helper functions for load()


def _check_file_size(path: Path) -> None:
    """Reject definitions larger than MAX_CONFIG_SIZE_BYTES."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise MalformedConfigError(
            f"Configuration file is {file_size} bytes, exceeding maximum size "
            f"of {MAX_CONFIG_SIZE_BYTES} bytes",
            path=str(path),
        )


def _format_for(path: Path) -> str:
    """Pick the parser from the file extension; YAML unless it ends in .json."""
    return "json" if path.suffix.lower() == ".json" else "yaml"


def _reject_duplicate_pairs(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """object_pairs_hook for json that refuses repeated keys."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"found duplicate key '{key}'")
        result[key] = value
    return result


def _parse(text: str, fmt: str, source: str) -> dict[str, Any]:
    """
    Parse definition text into a plain mapping.

    Args:
        text: Definition file content
        fmt: 'yaml' or 'json'
        source: Path or label used in error context

    Raises:
        MalformedConfigError: On syntax errors, duplicate keys, scalars the
            parser cannot construct, or a top level that is not a mapping
        ValueError: If fmt is not 'yaml' or 'json'
    """
    if fmt not in ("yaml", "json"):
        raise ValueError(f"Unsupported format '{fmt}'. Use 'yaml' or 'json'")

    try:
        if fmt == "json":
            data = json.loads(text, object_pairs_hook=_reject_duplicate_pairs)
        else:
            data = chain_yaml.load(text)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        # PyYAML raises plain ValueError for impossible timestamps (2023-13-45)
        raise MalformedConfigError(
            f"Could not parse {fmt.upper()} definition: {e}", path=source
        ) from e

    if not isinstance(data, dict):
        raise MalformedConfigError(
            "Definition must be a mapping at the top level",
            path=source,
            got=type(data).__name__,
        )
    return data


def find_config_file(start: str | Path | None = None) -> Path:
    """
    Locate the definition file when no explicit path is given.

    Uses CHAINCFG_CONFIG if set; otherwise searches upward from `start`
    (default: current directory) for etc/chain.yaml, then chain.yaml.

    Returns:
        Path to the definition file

    Raises:
        FileNotFoundError: If no definition can be found
    """
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    current = Path(start if start is not None else os.getcwd()).resolve()
    for directory in (current, *current.parents):
        for candidate in (
            directory / "etc" / DEFAULT_CONFIG_FILENAME,
            directory / DEFAULT_CONFIG_FILENAME,
        ):
            if candidate.is_file():
                return candidate

    raise FileNotFoundError(
        f"Could not find etc/{DEFAULT_CONFIG_FILENAME} or {DEFAULT_CONFIG_FILENAME} "
        f"in {current} or any parent directory. "
        f"Pass a path explicitly or set {CONFIG_PATH_ENV}."
    )


# Environment overrides


def _convert_env_value(value: str) -> bool | int | float | str:
    """
    Convert environment variable string to appropriate type.

    Args:
        value: Environment variable value as string

    Returns:
        Converted value with appropriate type
    """
    if value.lower() in ("true", "false"):
        return value.lower() == "true"

    try:
        if "." in value:
            # Versions such as 0.8.19 are not floats and stay strings
            return float(value) if value.count(".") == 1 else value
        return int(value)
    except ValueError:
        return value


def _collect_env_overrides(env_prefix: str) -> dict[str, str]:
    """Collect override variables, skipping the path selector."""
    return {
        key: value
        for key, value in os.environ.items()
        if key.startswith(env_prefix) and key != CONFIG_PATH_ENV
    }


def _match_key(current: dict[str, Any], part: str) -> str:
    """Return the existing key equal to `part` ignoring case, else part lowered."""
    for key in current:
        if isinstance(key, str) and key.lower() == part.lower():
            return key
    return part.lower()


def _set_nested_value(data: dict[str, Any], path: list[str], value: Any) -> None:
    """
    Set a nested value in the definition mapping, creating sections as needed.

    Args:
        data: Definition mapping to modify
        path: Path components from the variable name
        value: Converted value to set
    """
    current = data
    for part in path[:-1]:
        key = _match_key(current, part)
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[_match_key(current, path[-1])] = value


def env_key_to_path(env_key: str, env_prefix: str = DEFAULT_ENV_PREFIX) -> list[str]:
    """
    Convert an override variable name to its path components.

    Example:
        CHAINCFG_NETWORKS__DEVELOPMENT__PORT -> ['networks', 'development', 'port']
    """
    return [p for p in env_key[len(env_prefix) :].split(ENV_PATH_SEPARATOR) if p]


def apply_env_overrides(
    data: dict[str, Any], env_prefix: str = DEFAULT_ENV_PREFIX
) -> dict[str, Any]:
    """
    Apply <prefix>SECTION__SUB__KEY=value environment overrides in place.

    Returns:
        The same mapping, for chaining
    """
    for env_key, env_value in sorted(_collect_env_overrides(env_prefix).items()):
        path = env_key_to_path(env_key, env_prefix)
        if not path:
            continue
        _set_nested_value(data, path, _convert_env_value(env_value))
        lg.debug(
            "applied env override",
            extra={"var": env_key, "key": ".".join(p.lower() for p in path)},
        )
    return data


def get_env_overrides(env_prefix: str = DEFAULT_ENV_PREFIX) -> dict[str, Any]:
    """
    Get all environment variable overrides that would be applied.

    Returns:
        Mapping of dotted (lower-cased) key path to converted value
    """
    overrides = {}
    for env_key, env_value in _collect_env_overrides(env_prefix).items():
        path = env_key_to_path(env_key, env_prefix)
        if path:
            overrides[".".join(p.lower() for p in path)] = _convert_env_value(
                env_value
            )
    return overrides


# Variable substitution


def _lookup(data: dict[str, Any], dotted: str) -> Any:
    current: Any = data
    for part in dotted.split("."):
        if not isinstance(current, dict) or part not in current:
            raise KeyError(dotted)
        current = current[part]
    return current


def resolve_references(data: dict[str, Any], source: str = "<string>") -> dict[str, Any]:
    """
    Recursively replace ${dotted.key} references in string values.

    A referenced value that itself holds references is expanded first, so
    chains resolve completely and the result contains no references.
    Containers shared through YAML aliases are resolved once and stay shared.

    Raises:
        MalformedConfigError: If a reference names a key that does not exist
            or a section, or if references form a cycle
    """
    expanded: dict[str, str] = {}

    def _expand(text: str, chain: tuple[str, ...]) -> str:
        def _substitute(match: re.Match) -> str:
            var_name = match.group(1)
            if var_name in chain:
                cycle = " -> ".join((*chain[chain.index(var_name) :], var_name))
                raise MalformedConfigError(
                    f"Circular reference: {cycle}", path=source
                )
            if var_name not in expanded:
                try:
                    value = _lookup(data, var_name)
                except KeyError:
                    raise MalformedConfigError(
                        f"Undefined reference '${{{var_name}}}'", path=source
                    ) from None
                if isinstance(value, (dict, list)):
                    raise MalformedConfigError(
                        f"Reference '${{{var_name}}}' names a section, not a value",
                        path=source,
                    )
                if isinstance(value, str):
                    expanded[var_name] = _expand(value, (*chain, var_name))
                else:
                    expanded[var_name] = str(value)
            return expanded[var_name]

        return _VAR_RE.sub(_substitute, text)

    resolved: dict[int, Any] = {}

    def _resolve(content: Any) -> Any:
        if isinstance(content, str):
            result = _expand(content, ())
            if result != content and _VAR_RE.search(result):
                raise MalformedConfigError(
                    f"Substitution produced a new reference: '{result}'",
                    path=source,
                )
            return result
        if not isinstance(content, (dict, list)):
            return content
        if id(content) in resolved:
            return resolved[id(content)]
        out: Any
        if isinstance(content, dict):
            out = {}
            resolved[id(content)] = out
            out.update((k, _resolve(v)) for k, v in content.items())
        else:
            out = []
            resolved[id(content)] = out
            out.extend(_resolve(v) for v in content)
        return out

    return _resolve(data)  # type: ignore[no-any-return]


# Validation


def _format_loc(loc: tuple[Any, ...], data: dict[str, Any]) -> str:
    """Render a pydantic error location using network names instead of indexes."""
    parts = [str(p) for p in loc]
    networks = data.get("networks")
    if len(loc) >= 2 and loc[0] == "networks" and isinstance(loc[1], int):
        if isinstance(networks, dict) and loc[1] < len(networks):
            parts[1] = list(networks)[loc[1]]
    return ".".join(parts)


def from_dict(data: dict[str, Any], source: str = "<dict>") -> ConfigurationDescriptor:
    """
    Validate an already-parsed definition mapping.

    Args:
        data: Parsed definition (the shape of the definition file)
        source: Path or label used in error context

    Returns:
        The validated, immutable descriptor

    Raises:
        MalformedConfigError: If the mapping violates the schema
    """
    try:
        return ConfigurationDescriptor.model_validate(data)
    except pydantic.ValidationError as e:
        errors = [(_format_loc(err["loc"], data), err["msg"]) for err in e.errors()]
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in errors)
        raise MalformedConfigError(
            f"Invalid chain configuration: {summary}", errors=errors, path=source
        ) from e


def loads(text: str, fmt: str = "yaml", source: str = "<string>") -> ConfigurationDescriptor:
    """
    Parse and validate a definition held in a string.

    No environment overrides are applied; references are resolved.

    Args:
        text: Definition content
        fmt: 'yaml' (default) or 'json'
        source: Label used in error context

    Raises:
        MalformedConfigError: On parse or schema errors
    """
    data = _parse(text, fmt, source)
    return from_dict(resolve_references(data, source), source)


def load(
    path: str | Path | None = None,
    *,
    enable_env_overrides: bool = True,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> ConfigurationDescriptor:
    """
    Load, resolve and validate a chain definition file.

    Args:
        path: Definition file; if None it is located with find_config_file()
        enable_env_overrides: Whether to apply environment variable overrides
        env_prefix: Prefix for override variables (default: 'CHAINCFG_')

    Returns:
        The validated, immutable descriptor

    Raises:
        FileNotFoundError: If the definition file does not exist
        MalformedConfigError: If it cannot be parsed or violates the schema

    Example:
        descriptor = load("etc/chain.yaml")
        port = descriptor.get_network("development").port
    """
    config_path = Path(path) if path is not None else find_config_file()
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    config_path = config_path.resolve()
    _check_file_size(config_path)
    source = str(config_path)

    try:
        text = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedConfigError(
            f"Definition is not valid UTF-8: {e}", path=source
        ) from e

    data = _parse(text, _format_for(config_path), source)
    if enable_env_overrides:
        data = apply_env_overrides(data, env_prefix)

    descriptor = from_dict(resolve_references(data, source), source)
    lg.info(
        "loaded chain config",
        extra={
            "path": source,
            "networks": list(descriptor.network_names()),
            "solc": descriptor.get_compiler_settings().version,
        },
    )
    return descriptor
