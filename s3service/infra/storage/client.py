"""Storage client protocol and data types.

This module defines the interface of the S3 wrapper, the options used to
construct it, and the errors it raises itself. Failures coming from the
SDK (network, auth, ``ClientError``) are not wrapped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Any, Protocol


class StorageError(RuntimeError):
    """Base class for errors raised by the storage wrapper itself."""


class StorageConfigurationError(StorageError):
    """Raised when the wrapper is missing required configuration."""


class RegionNotFoundError(StorageConfigurationError):
    """Raised at construction when a region name is blank or unknown."""


class BucketRequiredError(StorageConfigurationError):
    """Raised when neither a bucket argument nor a default bucket is set."""


@dataclass(frozen=True, slots=True)
class StorageCredentials:
    """Static credentials for the S3 client."""

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None

    def __repr__(self) -> str:
        return (
            f"StorageCredentials(access_key_id={self.access_key_id!r}, "
            "secret_access_key='***')"
        )


@dataclass(frozen=True, slots=True)
class StorageOptions:
    """Explicit client options; take priority over environment variables."""

    credentials: StorageCredentials | None = None
    region: str | None = None


@dataclass(frozen=True, slots=True)
class ByteRange:
    """Inclusive byte range of an object."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start must be non-negative")
        if self.end < self.start:
            raise ValueError("end must not be before start")

    @property
    def header(self) -> str:
        return f"bytes={self.start}-{self.end}"


class ObjectStorage(Protocol):
    """Protocol defining the operations of the S3 wrapper.

    Every operation takes an object key and an optional bucket; when the
    bucket is ``None`` the ``default_bucket`` is used instead.
    """

    default_bucket: str | None

    def stream_file_download(self, path: str, bucket: str | None = None) -> Any:
        """Open a read stream over an object.

        Returns:
            A file-like streaming body; the caller reads and closes it.

        Raises:
            BucketRequiredError: If no bucket is available.
        """
        ...

    def get_partial_file(
        self,
        path: str,
        start: int,
        end: int,
        bucket: str | None = None,
    ) -> Any:
        """Open a read stream over the inclusive byte range ``[start, end]``.

        Raises:
            BucketRequiredError: If no bucket is available.
            ValueError: If the range is invalid.
        """
        ...

    def stream_file_upload(
        self,
        source: IO[bytes],
        path: str,
        bucket: str | None = None,
        is_public: bool = False,
    ) -> None:
        """Upload a binary stream, optionally with public-read visibility.

        Raises:
            BucketRequiredError: If no bucket is available.
        """
        ...

    def stream_file_upload_with_content_type(
        self,
        source: IO[bytes],
        path: str,
        content_type: str,
        bucket: str | None = None,
        is_public: bool = False,
    ) -> None:
        """Upload a binary stream with an explicit ``Content-Type``.

        Raises:
            BucketRequiredError: If no bucket is available.
        """
        ...

    def delete_file(self, path: str, bucket: str | None = None) -> None:
        """Delete an object.

        Raises:
            BucketRequiredError: If no bucket is available.
        """
        ...

    def get_presigned_url(
        self,
        path: str,
        bucket: str | None = None,
        expires_in_minutes: float | None = None,
    ) -> str:
        """Generate a time-limited GET URL for an object.

        Raises:
            BucketRequiredError: If no bucket is available.
            ValueError: If the expiry is not positive.
        """
        ...

    def close(self) -> None:
        """Release the underlying client's network resources."""
        ...
