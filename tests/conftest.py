"""Shared test fixtures for discoverkit.

Provides reusable fixtures for loading discovery document fixtures, parsing
them into views, isolating config and cache directories, managing output
state, and running CLI commands. These fixtures are discovered by pytest
automatically.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from discoverkit.discovery import RestDiscovery, RpcDiscovery
from discoverkit.output import OutputFormat, OutputManager, reset_output, set_output
from discoverkit.parser import parse_rest_document, parse_rpc_document


FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict[str, Any]:
    """Read a JSON fixture from ``tests/fixtures``."""
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager holds references to sys.stdout/sys.stderr from its
    creation time; CliRunner swaps those streams, so a stale manager would
    write to closed files in the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def urlshortener_raw() -> dict[str, Any]:
    """Raw RPC-style URL Shortener document."""
    return load_fixture("urlshortener-v1-rpc.json")


@pytest.fixture
def tasks_raw() -> dict[str, Any]:
    """Raw REST-style Tasks document."""
    return load_fixture("tasks-v1-rest.json")


@pytest.fixture
def all_types_raw() -> dict[str, Any]:
    """Raw document whose single schema has one property per kind."""
    return load_fixture("all-types.json")


@pytest.fixture
def directory_raw() -> dict[str, Any]:
    """Raw directory listing with three APIs."""
    return load_fixture("directory.json")


# ---------------------------------------------------------------------------
# Parsed document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def urlshortener(urlshortener_raw: dict[str, Any]) -> RpcDiscovery:
    return parse_rpc_document(urlshortener_raw)


@pytest.fixture
def tasks(tasks_raw: dict[str, Any]) -> RestDiscovery:
    return parse_rest_document(tasks_raw)


@pytest.fixture
def all_types(all_types_raw: dict[str, Any]) -> dict:
    """Resolved properties of the ``AllTypes`` schema, keyed by property name."""
    discovery = parse_rpc_document(all_types_raw)
    return discovery.schemas["AllTypes"].as_object().properties


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and cache to a temporary directory.

    Points HOME, XDG_CONFIG_HOME and XDG_CACHE_HOME below tmp_path and
    clears all DISCOVERKIT_* environment variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))

    for var in [
        "DISCOVERKIT_DISCOVERY_URL",
        "DISCOVERKIT_TIMEOUT",
        "DISCOVERKIT_NO_CACHE",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager for the duration of the test."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
