from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

ADDRESSING_STYLES: tuple[str, ...] = ("auto", "path", "virtual")


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _as_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    return float(value)


def _non_empty(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass
class Settings:
    # Implicit credentials; only used when all three are present.
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: str | None = None
    S3_REGION: str | None = None
    S3_DEFAULT_BUCKET: str | None = None
    S3_ENDPOINT_URL: str | None = None
    S3_ADDRESSING_STYLE: str = "auto"
    S3_USE_SSL: bool = True
    S3_PRESIGN_EXPIRES_MINUTES: float = 1.0
    LOG_LEVEL: str = "INFO"
    ENABLE_METRICS: bool = True

    def __post_init__(self) -> None:
        style = (self.S3_ADDRESSING_STYLE or "auto").strip().lower()
        if style not in ADDRESSING_STYLES:
            raise ValueError(
                f"S3_ADDRESSING_STYLE must be one of {', '.join(ADDRESSING_STYLES)}."
            )
        self.S3_ADDRESSING_STYLE = style
        if self.S3_PRESIGN_EXPIRES_MINUTES <= 0:
            raise ValueError("S3_PRESIGN_EXPIRES_MINUTES must be positive.")

    @property
    def has_environment_credentials(self) -> bool:
        return bool(
            self.S3_ACCESS_KEY_ID and self.S3_SECRET_ACCESS_KEY and self.S3_REGION
        )

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            S3_ACCESS_KEY_ID=_non_empty(os.environ.get("S3Access")),
            S3_SECRET_ACCESS_KEY=_non_empty(os.environ.get("S3Secret")),
            S3_REGION=_non_empty(os.environ.get("S3Region")),
            S3_DEFAULT_BUCKET=_non_empty(os.environ.get("S3_DEFAULT_BUCKET")),
            S3_ENDPOINT_URL=_non_empty(os.environ.get("S3_ENDPOINT_URL")),
            S3_ADDRESSING_STYLE=os.environ.get(
                "S3_ADDRESSING_STYLE", cls.S3_ADDRESSING_STYLE
            ),
            S3_USE_SSL=_as_bool(os.environ.get("S3_USE_SSL"), cls.S3_USE_SSL),
            S3_PRESIGN_EXPIRES_MINUTES=_as_float(
                os.environ.get("S3_PRESIGN_EXPIRES_MINUTES"),
                cls.S3_PRESIGN_EXPIRES_MINUTES,
            ),
            LOG_LEVEL=os.environ.get("LOG_LEVEL", cls.LOG_LEVEL).upper(),
            ENABLE_METRICS=_as_bool(
                os.environ.get("ENABLE_METRICS"), cls.ENABLE_METRICS
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
