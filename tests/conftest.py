"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the chaincfg test suite.
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (filesystem, subprocess)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")
    config.addinivalue_line(
        "markers", "security: Hostile-input tests for parsing and overrides"
    )


def pytest_collection_modifyitems(config, items):
    """Add 'unit' marker to tests without other markers."""
    for item in items:
        if not any(
            mark.name in ["integration", "property"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Shared Fixtures
# =============================================================================

CHAIN_YAML = """
networks:
  development:
    host: 127.0.0.1
    port: 7545
    network_id: "*"

compilers:
  solc:
    version: 0.8.19
    settings:
      optimizer:
        enabled: true
        runs: 200

contracts_directory: ./contracts
contracts_build_directory: ./build/contracts
migrations_directory: ./migrations
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove CHAINCFG_* variables so the host environment cannot leak in."""
    import os

    for key in list(os.environ):
        if key.startswith("CHAINCFG_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Restore root logger handlers and level after each test."""
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level
    yield
    logging.root.handlers = original_handlers
    logging.root.setLevel(original_level)


@pytest.fixture
def chain_yaml() -> str:
    """Reference definition text (development node on Ganache GUI)."""
    return CHAIN_YAML


@pytest.fixture
def chain_dict() -> dict:
    """Reference definition as parsed data."""
    return {
        "networks": {
            "development": {
                "host": "127.0.0.1",
                "port": 7545,
                "network_id": "*",
            }
        },
        "compilers": {
            "solc": {
                "version": "0.8.19",
                "settings": {"optimizer": {"enabled": True, "runs": 200}},
            }
        },
        "contracts_directory": "./contracts",
        "contracts_build_directory": "./build/contracts",
        "migrations_directory": "./migrations",
    }


@pytest.fixture
def chain_file(tmp_path: Path, chain_yaml: str) -> Path:
    """Reference definition written to tmp_path/chain.yaml."""
    path = tmp_path / "chain.yaml"
    path.write_text(chain_yaml)
    return path


@pytest.fixture
def write_config(tmp_path: Path):
    """Factory writing arbitrary definition text to a file under tmp_path."""

    def _write(content: str, name: str = "chain.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
