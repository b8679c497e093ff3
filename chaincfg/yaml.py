"""
YAML codec for chain definition files.

Provides a safe loader that rejects duplicate mapping keys (PyYAML silently
keeps the last one) and normalizes keys to strings, plus a block-style dumper
that keeps key order so a written definition reads like a hand-written one.
"""

from collections.abc import Hashable
from typing import IO, Any

import yaml  # type: ignore[import-untyped]

_MERGE_TAG = "tag:yaml.org,2002:merge"


class Loader(yaml.SafeLoader):
    """
    Safe YAML loader with duplicate-key detection.

    Duplicate keys are checked among the explicit keys of each mapping.
    Keys pulled in through a merge key (<<: *anchor) may still be overridden
    by explicit ones, as YAML intends.
    """

    def _check_duplicate_keys(self, node: yaml.MappingNode) -> None:
        """Raise ConstructorError if a mapping repeats an explicit key."""
        seen: dict[str, Any] = {}
        for key_node, _ in node.value:
            if key_node.tag == _MERGE_TAG:
                continue
            key = self._convert_key_to_string(self.construct_object(key_node))
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key '{key}'",
                    key_node.start_mark,
                )
            seen[key] = key_node

    @staticmethod
    def _convert_key_to_string(key: Any) -> Any:
        """Convert numeric and boolean keys to strings."""
        if isinstance(key, (bool, int, float)):
            return str(key)
        return key

    def construct_mapping(self, node: Any, deep: bool = False) -> dict[Hashable, Any]:
        """
        Construct a mapping with duplicate-key rejection and string keys.

        Args:
            node: YAML mapping node to construct
            deep: Whether to construct nested structures deeply

        Returns:
            dict: Mapping with converted keys

        Raises:
            yaml.constructor.ConstructorError: If an explicit key is repeated
        """
        if isinstance(node, yaml.MappingNode):
            self._check_duplicate_keys(node)
        mapping = super().construct_mapping(node, deep=deep)
        return {self._convert_key_to_string(k): v for k, v in mapping.items()}


class Dumper(yaml.SafeDumper):
    """Safe dumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> Any:
        return super().increase_indent(flow, False)


def load(stream: str | IO[str]) -> Any:
    """
    Parse a YAML document with the duplicate-rejecting loader.

    Args:
        stream: YAML text or a readable text stream

    Returns:
        The parsed document (None for an empty document)

    Raises:
        yaml.YAMLError: On syntax errors or duplicate keys
    """
    return yaml.load(stream, Loader=Loader)  # noqa: S506


def dump(data: Any, stream: IO[str] | None = None) -> str | None:
    """
    Serialize data as block-style YAML, preserving key order.

    Args:
        data: Plain Python data (dicts, lists, scalars)
        stream: Optional stream to write to; if None, the text is returned

    Returns:
        The YAML text when no stream is given, otherwise None
    """
    return yaml.dump(  # type: ignore[no-any-return]
        data,
        stream,
        Dumper=Dumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        indent=2,
    )
