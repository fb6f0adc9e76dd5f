"""Tests for the persistent bytecode cache."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from bootkit.domain.errors import StartupCacheError
from bootkit.infrastructure.bytecode_cache import (
    PYCACHE_ENV_VAR,
    activate_cache,
    clear_cache,
)


class TestActivateCache:
    def test_routes_bytecode_to_cache_dir(self, tmp_path: Path) -> None:
        cache_dir = tmp_path / "cache" / "pycache"
        env: dict[str, str] = {}
        state = activate_cache(cache_dir, environ=env)
        assert cache_dir.is_dir()
        assert sys.pycache_prefix == str(cache_dir)
        assert env[PYCACHE_ENV_VAR] == str(cache_dir)
        assert state.enabled is True
        assert state.cache_dir == cache_dir

    def test_existing_env_prefix_is_kept(self, tmp_path: Path) -> None:
        env = {PYCACHE_ENV_VAR: "/elsewhere"}
        activate_cache(tmp_path / "pycache", environ=env)
        assert env[PYCACHE_ENV_VAR] == "/elsewhere"

    def test_export_can_be_disabled(self, tmp_path: Path) -> None:
        env: dict[str, str] = {}
        activate_cache(tmp_path / "pycache", export_env=False, environ=env)
        assert env == {}

    def test_precompile_warms_cache(self, tmp_path: Path) -> None:
        src = tmp_path / "app"
        src.mkdir()
        (src / "views.py").write_text("VALUE = 1\n")
        cache_dir = tmp_path / "pycache"
        state = activate_cache(cache_dir, precompile=[src], environ={})
        assert state.compiled == [src]
        assert list(cache_dir.rglob("views.*.pyc"))

    def test_precompile_single_file(self, tmp_path: Path) -> None:
        module = tmp_path / "settings.py"
        module.write_text("DEBUG = False\n")
        cache_dir = tmp_path / "pycache"
        activate_cache(cache_dir, precompile=[module], environ={})
        assert list(cache_dir.rglob("settings.*.pyc"))

    def test_precompile_syntax_error_is_fatal(self, tmp_path: Path) -> None:
        src = tmp_path / "app"
        src.mkdir()
        (src / "broken.py").write_text("def (:\n")
        with pytest.raises(StartupCacheError, match="Byte-compilation failed"):
            activate_cache(tmp_path / "pycache", precompile=[src], environ={})

    def test_failed_warm_up_leaves_no_trace(self, tmp_path: Path) -> None:
        prefix_before = sys.pycache_prefix
        env: dict[str, str] = {}
        with pytest.raises(StartupCacheError):
            activate_cache(tmp_path / "pycache", precompile=[tmp_path / "nope"], environ=env)
        assert sys.pycache_prefix == prefix_before
        assert env == {}

    def test_missing_precompile_source_is_fatal(self, tmp_path: Path) -> None:
        with pytest.raises(StartupCacheError) as exc_info:
            activate_cache(tmp_path / "pycache", precompile=[tmp_path / "nope"], environ={})
        assert exc_info.value.code == "STARTUP_CACHE"

    def test_uncreatable_cache_dir_is_fatal(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(StartupCacheError, match="Cannot create cache directory"):
            activate_cache(blocker / "pycache", environ={})

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_read_only_cache_dir_is_fatal(self, tmp_path: Path) -> None:
        cache_dir = tmp_path / "pycache"
        cache_dir.mkdir()
        cache_dir.chmod(0o500)
        try:
            with pytest.raises(StartupCacheError, match="not writable"):
                activate_cache(cache_dir, environ={})
        finally:
            cache_dir.chmod(0o700)


class TestClearCache:
    def test_removes_cache(self, tmp_path: Path) -> None:
        cache_dir = tmp_path / "pycache"
        (cache_dir / "nested").mkdir(parents=True)
        assert clear_cache(cache_dir) is True
        assert not cache_dir.exists()

    def test_missing_cache(self, tmp_path: Path) -> None:
        assert clear_cache(tmp_path / "pycache") is False
