"""Shared pytest fixtures for bootkit tests.

Bootstrapping mutates process-global state (env vars, warning filters,
``sys.pycache_prefix``, root logging handlers). The autouse fixture below
snapshots and restores all of it so tests stay independent.
"""

from __future__ import annotations

import logging
import os
import sys
import warnings
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from bootkit.config.settings import BootSettings
from bootkit.services import bootstrap as bootstrap_module

BOOT_ENV_VARS = (
    "BOOTKIT_MANIFEST_PATH",
    "BOOTKIT_CONFIG",
    "BUNDLE_GEMFILE",
    "PYTHONPYCACHEPREFIX",
)


@pytest.fixture(autouse=True)
def _isolated_boot(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Fresh, fully restored boot state for every test."""
    saved_environ = os.environ.copy()
    for name in BOOT_ENV_VARS:
        os.environ.pop(name, None)
    monkeypatch.setattr(sys, "pycache_prefix", sys.pycache_prefix)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    boot_logger = logging.getLogger("bootkit")
    boot_level = boot_logger.level
    boot_handlers = boot_logger.handlers[:]
    boot_propagate = boot_logger.propagate

    bootstrap_module._reset_for_testing()
    with warnings.catch_warnings():
        yield
    bootstrap_module._reset_for_testing()

    os.environ.clear()
    os.environ.update(saved_environ)
    root.handlers = original_handlers
    root.setLevel(original_level)
    boot_logger.setLevel(boot_level)
    boot_logger.handlers = boot_handlers
    boot_logger.propagate = boot_propagate


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Application tree with a ``config/`` directory and an empty lock file."""
    (tmp_path / "config").mkdir()
    (tmp_path / "requirements.lock").write_text("# nothing pinned\n")
    return tmp_path


@pytest.fixture
def settings(app_root: Path) -> BootSettings:
    """Settings anchored at ``app_root/config`` with no TOML file."""
    return BootSettings.from_cli(config_dir=app_root / "config")


@pytest.fixture
def _in_app_root(app_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the application root so discovery finds its config."""
    monkeypatch.chdir(app_root)
