"""
Exception hierarchy for chain configuration errors.

Every error raised while loading or querying a configuration descriptor
derives from ChainConfigError, so a consuming tool can abort its startup with
a single except clause. A missing definition file is reported with the
builtin FileNotFoundError.
"""

from typing import Any


class ChainConfigError(Exception):
    """
    Base exception for all chaincfg errors.

    Example:
        try:
            descriptor = chaincfg.load("etc/chain.yaml")
        except ChainConfigError as e:
            lg.error("invalid chain config", extra={"exception": e})
            raise SystemExit(1)
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class MalformedConfigError(ChainConfigError):
    """
    The definition could not be parsed or violates the schema.

    Examples:
        - Invalid YAML or JSON syntax
        - Required key missing (e.g. compilers.solc.version)
        - Value of the wrong type (e.g. port given as a string)
        - Unknown key or duplicate network name
    """

    def __init__(
        self,
        message: str,
        errors: list[tuple[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """
        Args:
            message: Human-readable error message
            errors: (location, message) pairs, one per schema violation
            **context: Additional context information
        """
        super().__init__(message, **context)
        self.errors = list(errors or [])


class NotFoundError(ChainConfigError, LookupError):
    """A network profile was requested by a name the descriptor does not define."""

    pass
