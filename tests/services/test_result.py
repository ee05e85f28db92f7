"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ifsctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_ok_defaults(self) -> None:
        result = ServiceResult(ok=True, op="generate")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("add_rule", "NOT_IN_FRONTIER", "nope", cell=[0, 0, 0])
        assert not result.ok
        assert result.error == ServiceError(
            code="NOT_IN_FRONTIER", message="nope", detail={"cell": [0, 0, 0]}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=True, op="frontier", data={"frontier_count": 6}, warnings=["w"])
        restored = ServiceResult.model_validate_json(result.model_dump_json())
        assert restored == result
