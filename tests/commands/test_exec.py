"""Tests for the exec CLI command."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from bootkit.cli import cli

APP_MODULE = """\
import os
import sys
from pathlib import Path

Path(sys.argv[1]).write_text(" ".join(sys.argv[2:]) + "|" + os.environ["BOOTKIT_MANIFEST_PATH"])
"""


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """An importable module that records its argv and the pinned manifest."""
    src = tmp_path / "appsrc"
    src.mkdir()
    (src / "bootkit_demo_app.py").write_text(APP_MODULE)
    monkeypatch.syspath_prepend(str(src))
    monkeypatch.setattr(sys, "argv", list(sys.argv))
    return "bootkit_demo_app"


@pytest.mark.usefixtures("_in_app_root")
class TestExecCommand:
    def test_runs_module_after_boot(
        self, cli_runner: CliRunner, app_module: str, app_root: Path, tmp_path: Path
    ) -> None:
        record = tmp_path / "record.txt"
        result = cli_runner.invoke(
            cli, ["exec", app_module, str(record), "--workers", "4"]
        )
        assert result.exit_code == 0, result.output
        args, manifest = record.read_text().split("|")
        assert args == "--workers 4"
        assert manifest == str(app_root.resolve() / "requirements.lock")

    def test_module_not_run_when_boot_fails(
        self, cli_runner: CliRunner, app_module: str, app_root: Path, tmp_path: Path
    ) -> None:
        (app_root / "requirements.lock").write_text("bootkit-no-such-dist==1.0\n")
        record = tmp_path / "record.txt"
        result = cli_runner.invoke(cli, ["exec", app_module, str(record)])
        assert result.exit_code == 1
        assert not record.exists()
        assert "DEPENDENCY_RESOLUTION" in result.stderr
