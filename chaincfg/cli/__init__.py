"""Command-line interface for inspecting chain definitions."""

from .cli import main

__all__ = ["main"]
