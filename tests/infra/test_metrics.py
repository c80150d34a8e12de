from unittest.mock import MagicMock, patch

import pytest
from prometheus_client import REGISTRY

from s3service.common.config import Settings
from s3service.infra.observability.metrics import track_operation
from s3service.infra.storage.s3_client import S3Service


def _count(operation: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "s3_operations_total", {"operation": operation, "outcome": outcome}
    )
    return value or 0.0


def _latency_count(operation: str) -> float:
    value = REGISTRY.get_sample_value(
        "s3_operation_duration_seconds_count", {"operation": operation}
    )
    return value or 0.0


def test_track_operation_records_success():
    before = _count("test_success", "success")
    before_latency = _latency_count("test_success")

    with track_operation("test_success"):
        pass

    assert _count("test_success", "success") == before + 1
    assert _latency_count("test_success") == before_latency + 1


def test_track_operation_records_error_and_reraises():
    before = _count("test_error", "error")

    with pytest.raises(RuntimeError):
        with track_operation("test_error"):
            raise RuntimeError("boom")

    assert _count("test_error", "error") == before + 1


def test_track_operation_disabled_records_nothing():
    before = _count("test_disabled", "success")

    with track_operation("test_disabled", enabled=False):
        pass

    assert _count("test_disabled", "success") == before


def test_service_records_operations_when_enabled():
    before = _count("delete_file", "success")
    with patch.object(S3Service, "_build_client", return_value=MagicMock()):
        service = S3Service(
            settings=Settings(ENABLE_METRICS=True), default_bucket="bucket"
        )

    service.delete_file("key")

    assert _count("delete_file", "success") == before + 1


def test_service_skips_metrics_when_disabled():
    before = _count("get_presigned_url", "success")
    with patch.object(S3Service, "_build_client", return_value=MagicMock()):
        service = S3Service(
            settings=Settings(ENABLE_METRICS=False), default_bucket="bucket"
        )

    service.get_presigned_url("key")

    assert _count("get_presigned_url", "success") == before
