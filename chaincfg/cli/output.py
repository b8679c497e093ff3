"""
Output abstraction for CLI tools.

Tools write through an OutputWriter instead of print(), so tests can capture
what a command printed without redirecting stdout.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...


class ConsoleOutput:
    """
    Default output writer that writes to a stream (stdout by default).

    Example:
        out = ConsoleOutput()
        out.write("OK etc/chain.yaml")
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Args:
            stream: Output stream (defaults to sys.stdout)
        """
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str = "") -> None:
        print(text, file=self._stream)


class BufferedOutput:
    """
    Output writer that captures output to a list.

    Example:
        out = BufferedOutput()
        out.write("Line 1")
        out.write("Line 2")
        assert out.lines == ["Line 1", "Line 2"]
        assert out.text == "Line 1\\nLine 2\\n"
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, text: str = "") -> None:
        self._lines.append(text)

    @property
    def lines(self) -> list[str]:
        """Get all output lines."""
        return self._lines.copy()

    @property
    def text(self) -> str:
        """Get all output as a single string with newlines."""
        return "\n".join(self._lines) + ("\n" if self._lines else "")
