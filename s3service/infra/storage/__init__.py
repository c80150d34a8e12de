"""Object storage layer.

This module wraps the boto3 S3 client behind a small protocol so callers
can depend on ``ObjectStorage`` and swap in fakes for testing.
"""

from .client import (
    BucketRequiredError,
    ByteRange,
    ObjectStorage,
    RegionNotFoundError,
    StorageConfigurationError,
    StorageCredentials,
    StorageError,
    StorageOptions,
)
from .s3_client import S3Service

__all__ = [
    "BucketRequiredError",
    "ByteRange",
    "ObjectStorage",
    "RegionNotFoundError",
    "S3Service",
    "StorageConfigurationError",
    "StorageCredentials",
    "StorageError",
    "StorageOptions",
]
