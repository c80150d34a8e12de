"""Convenience wrapper around the boto3 S3 client."""

from s3service.common.config import Settings, get_settings
from s3service.common.logging import setup_logging
from s3service.infra.storage import (
    BucketRequiredError,
    ByteRange,
    ObjectStorage,
    RegionNotFoundError,
    S3Service,
    StorageConfigurationError,
    StorageCredentials,
    StorageError,
    StorageOptions,
)

__version__ = "0.1.0"

__all__ = [
    "BucketRequiredError",
    "ByteRange",
    "ObjectStorage",
    "RegionNotFoundError",
    "S3Service",
    "Settings",
    "StorageConfigurationError",
    "StorageCredentials",
    "StorageError",
    "StorageOptions",
    "get_settings",
    "setup_logging",
]
