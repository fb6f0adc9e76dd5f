"""Tests for ServiceResult and ServiceError."""

import json

from bootkit.domain.errors import StartupCacheError
from bootkit.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="lock", data={"count": 3})
        assert result.ok is True
        assert result.warnings == []
        assert result.error is None

    def test_error_from_boot_error(self) -> None:
        exc = StartupCacheError("Cache directory is not writable", detail={"cache_dir": "/x"})
        error = ServiceError.from_boot_error(exc)
        assert error.code == "STARTUP_CACHE"
        assert error.message == "Cache directory is not writable"
        assert error.detail == {"cache_dir": "/x"}

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=False, op="bootstrap", error=ServiceError(code="E", message="boom")
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["error"] == {"code": "E", "message": "boom", "detail": {}}
