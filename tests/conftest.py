"""Shared test fixtures for httpbutler.

Provides fixtures for isolating configuration, managing global output and
resolver state, and running CLI commands. These fixtures are discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from httpbutler.output import OutputFormat, OutputManager, reset_output, set_output
from httpbutler.routing import reset_resolver


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals_between_tests() -> None:
    """Reset the global OutputManager and RouteResolver after every test.

    An OutputManager binds the sys.stdout/sys.stderr it saw at
    creation time, and the default resolver carries populated caches;
    neither may leak from one test into the next.
    """
    yield
    reset_output()
    reset_resolver()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every config layer at an empty temporary location.

    Points XDG_CONFIG_HOME at a subdirectory of tmp_path, forces the XDG
    code path, clears all HTTPBUTLER_* environment variables, and changes
    the working directory to tmp_path so no project config leaks in.

    Returns:
        tmp_path, which is also the working directory for project files.
    """
    monkeypatch.setattr("httpbutler.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in [
        "HTTPBUTLER_STRICT_TEMPLATES",
        "HTTPBUTLER_APPEND_UNCONSUMED",
        "HTTPBUTLER_LOWERCASE_BOOLEANS",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a PLAIN-format, verbose OutputManager so debug lines reach stderr."""
    output = OutputManager(format=OutputFormat.PLAIN, verbose=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Typer CLI test runner."""
    return CliRunner()
