"""Shared test fixtures for omprender tests."""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest
from rich.console import Console

from omprender.context import Context, default_context

FIXED_NOW = datetime(2024, 3, 9, 14, 5, 7, 123456, tzinfo=UTC)


@pytest.fixture
def context() -> Context:
    """Mock context with a fixed clock."""
    return default_context(now=FIXED_NOW)


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration discovery and logging from the real user.

    Clears OMPRENDER_* variables, points the user config file into
    `tmp_path`, sends CLI logs to `tmp_path/cli.log` and makes `tmp_path`
    the working directory.

    Returns:
        The temporary working directory.
    """
    for key in [k for k in os.environ if k.startswith("OMPRENDER_")]:
        monkeypatch.delenv(key)

    monkeypatch.setattr(
        "omprender.config._discovery.get_user_config_file",
        lambda: tmp_path / "user" / "config.toml",
    )
    monkeypatch.setenv("OMPRENDER_LOGGING__FILE", str(tmp_path / "cli.log"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
