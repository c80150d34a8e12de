from __future__ import annotations

import pytest

from s3service.common.config import Settings, get_settings

S3_ENV_VARS = (
    "S3Access",
    "S3Secret",
    "S3Region",
    "S3_DEFAULT_BUCKET",
    "S3_ENDPOINT_URL",
    "S3_ADDRESSING_STYLE",
    "S3_USE_SSL",
    "S3_PRESIGN_EXPIRES_MINUTES",
    "LOG_LEVEL",
    "ENABLE_METRICS",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run each test without S3 variables or a stray .env file."""
    for name in S3_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture
def settings() -> Settings:
    return Settings(ENABLE_METRICS=False)
