"""Tests for result formatting."""

import json

from bootkit.output.formatters import format_result
from bootkit.services.result import ServiceError, ServiceResult

BOOT_DATA = {
    "manifest": {"env_var": "BUNDLE_GEMFILE", "path": "/app/Gemfile", "preset": True},
    "logging": {"status": "unavailable", "module": "structlog", "reason": "missing"},
    "lock": {"manifest": "/app/Gemfile", "pins": [{"name": "click", "version": "8.1.7"}]},
    "cache": {"enabled": True, "cache_dir": "/app/.cache", "compiled": ["/app/src"]},
    "deprecations_silenced": False,
    "python_version": "2.7",
}


class TestFormatResult:
    def test_json(self) -> None:
        result = ServiceResult(ok=True, op="lock", data={"count": 2})
        parsed = json.loads(format_result(result, json_output=True))
        assert parsed["data"] == {"count": 2}

    def test_boot_report(self) -> None:
        result = ServiceResult(ok=True, op="bootstrap", data=BOOT_DATA)
        output = format_result(result)
        assert output.startswith("OK: bootstrap")
        assert "BUNDLE_GEMFILE=/app/Gemfile (preset)" in output
        assert "structlog unavailable" in output
        assert "1 locked from /app/Gemfile" in output
        assert "1 trees warmed" in output
        assert "left on (Python 2.7)" in output

    def test_disabled_cache(self) -> None:
        data = {**BOOT_DATA, "cache": {"enabled": False, "cache_dir": None, "compiled": []}}
        output = format_result(ServiceResult(ok=True, op="bootstrap", data=data))
        assert "disabled" in output

    def test_quiet(self) -> None:
        result = ServiceResult(ok=True, op="bootstrap", data=BOOT_DATA)
        assert format_result(result, quiet=True) == "OK: bootstrap"

    def test_generic_data(self) -> None:
        result = ServiceResult(ok=True, op="lock", data={"manifest": "/app/x.lock", "count": 3})
        output = format_result(result)
        assert "manifest: /app/x.lock" in output
        assert "count: 3" in output

    def test_error(self) -> None:
        error = ServiceError(code="STARTUP_CACHE", message="Cache directory is not writable")
        output = format_result(ServiceResult(ok=False, op="bootstrap", error=error))
        assert output == "ERROR: bootstrap [STARTUP_CACHE] Cache directory is not writable"
