"""S3 storage client implementation.

This module provides ``S3Service``, a thin wrapper that builds a boto3 S3
client once and delegates each operation straight to it. Errors raised by
boto3/botocore propagate unchanged.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import IO, TYPE_CHECKING, Any, ContextManager

import boto3
from botocore.config import Config

from s3service.common.config import get_settings
from s3service.infra.observability.metrics import track_operation
from s3service.infra.storage.client import (
    BucketRequiredError,
    ByteRange,
    StorageCredentials,
    StorageOptions,
)
from s3service.infra.storage.regions import resolve_region

if TYPE_CHECKING:
    from s3service.common.config import Settings

logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"


class S3Service:
    """Convenience wrapper around a boto3 S3 client.

    Credentials and region are resolved once, in priority order:

    1. ``options`` carrying credentials;
    2. the ``S3Access`` / ``S3Secret`` / ``S3Region`` environment variables,
       when all three are set;
    3. boto3's default credential chain.

    Each operation takes an object key and an optional bucket; ``None``
    falls back to ``default_bucket``.
    """

    def __init__(
        self,
        *,
        options: StorageOptions | None = None,
        settings: "Settings | None" = None,
        default_bucket: str | None = None,
        use_environment: bool = True,
    ) -> None:
        """Build the underlying S3 client.

        Args:
            options: Explicit credentials and/or region.
            settings: Configuration; defaults to ``get_settings()``, which is
                cached for the process, so environment changes made after the
                first call are not seen. Pass ``Settings.from_environment()``
                to re-read the environment for this instance.
            default_bucket: Bucket used when an operation gets none; defaults
                to ``settings.S3_DEFAULT_BUCKET``.
            use_environment: Consult the ``S3Access``/``S3Secret``/``S3Region``
                variables when ``options`` has no credentials.

        Raises:
            RegionNotFoundError: If an explicitly supplied region is blank, or
                unknown to botocore while no ``S3_ENDPOINT_URL`` is set.
        """
        self._settings = settings or get_settings()
        self.default_bucket = (
            default_bucket
            if default_bucket is not None
            else self._settings.S3_DEFAULT_BUCKET
        )
        self._closed = False
        try:
            credentials, region, source = self._resolve(options, use_environment)
            self._client = self._build_client(
                self._settings, credentials=credentials, region=region
            )
        except Exception:
            logger.exception("Error starting S3 service")
            raise
        self.credential_source = source
        logger.info(
            "S3 service started",
            extra={"credential_source": source, "region": region},
        )

    @classmethod
    def from_credentials(
        cls,
        access_key_id: str,
        secret_access_key: str,
        region: str,
        **kwargs: Any,
    ) -> "S3Service":
        """Create a service from static credentials and a region name."""
        settings = kwargs.get("settings") or get_settings()
        options = StorageOptions(
            credentials=StorageCredentials(
                access_key_id=access_key_id,
                secret_access_key=secret_access_key,
            ),
            region=resolve_region(region, endpoint_url=settings.S3_ENDPOINT_URL),
        )
        return cls(options=options, **kwargs)

    @classmethod
    def from_region(cls, region: str, **kwargs: Any) -> "S3Service":
        """Create a service using the default credential chain in ``region``."""
        settings = kwargs.get("settings") or get_settings()
        options = StorageOptions(
            region=resolve_region(region, endpoint_url=settings.S3_ENDPOINT_URL)
        )
        return cls(options=options, use_environment=False, **kwargs)

    def _check_region(self, region: str | None) -> str:
        return resolve_region(region, endpoint_url=self._settings.S3_ENDPOINT_URL)

    def _resolve(
        self, options: StorageOptions | None, use_environment: bool
    ) -> tuple[StorageCredentials | None, str | None, str]:
        if options is not None and options.credentials is not None:
            region = self._check_region(options.region) if options.region else None
            return options.credentials, region, "options"

        settings = self._settings
        if use_environment and settings.has_environment_credentials:
            credentials = StorageCredentials(
                access_key_id=settings.S3_ACCESS_KEY_ID,
                secret_access_key=settings.S3_SECRET_ACCESS_KEY,
            )
            return credentials, self._check_region(settings.S3_REGION), "environment"

        region = None
        if options is not None and options.region:
            region = self._check_region(options.region)
        return None, region, "default"

    @staticmethod
    def _build_client(
        settings: "Settings",
        *,
        credentials: StorageCredentials | None,
        region: str | None,
    ) -> Any:
        """Create a boto3 S3 client; ``None`` values defer to boto3's own lookup."""
        config = Config(s3={"addressing_style": settings.S3_ADDRESSING_STYLE})
        params: dict[str, Any] = {
            "endpoint_url": settings.S3_ENDPOINT_URL,
            "use_ssl": bool(settings.S3_USE_SSL),
            "config": config,
        }
        if region:
            params["region_name"] = region
        if credentials is not None:
            params["aws_access_key_id"] = credentials.access_key_id
            params["aws_secret_access_key"] = credentials.secret_access_key
            if credentials.session_token:
                params["aws_session_token"] = credentials.session_token
        return boto3.client("s3", **params)

    @property
    def client(self) -> Any:
        """The underlying boto3 client."""
        return self._client

    def _resolve_bucket(self, bucket: str | None) -> str:
        final_bucket = bucket if bucket is not None else self.default_bucket
        if final_bucket is None or not final_bucket.strip():
            raise BucketRequiredError("S3 Bucket Is Required")
        return final_bucket

    def _track(self, operation: str) -> ContextManager[None]:
        return track_operation(operation, enabled=self._settings.ENABLE_METRICS)

    def stream_file_download(self, path: str, bucket: str | None = None) -> Any:
        """Open a read stream over an object; the caller closes it."""
        final_bucket = self._resolve_bucket(bucket)
        logger.debug(
            "Opening download stream", extra={"bucket": final_bucket, "key": path}
        )
        with self._track("stream_file_download"):
            response = self._client.get_object(Bucket=final_bucket, Key=path)
        return response["Body"]

    def get_partial_file(
        self,
        path: str,
        start: int,
        end: int,
        bucket: str | None = None,
    ) -> Any:
        """Open a read stream over the inclusive byte range ``[start, end]``."""
        final_bucket = self._resolve_bucket(bucket)
        byte_range = ByteRange(start=start, end=end)
        logger.debug(
            "Fetching byte range",
            extra={"bucket": final_bucket, "key": path, "range": byte_range.header},
        )
        with self._track("get_partial_file"):
            response = self._client.get_object(
                Bucket=final_bucket, Key=path, Range=byte_range.header
            )
        return response["Body"]

    def stream_file_upload(
        self,
        source: IO[bytes],
        path: str,
        bucket: str | None = None,
        is_public: bool = False,
    ) -> None:
        """Upload a binary stream through boto3's managed transfer."""
        self._upload(
            "stream_file_upload",
            source,
            path,
            bucket=bucket,
            is_public=is_public,
        )

    def stream_file_upload_with_content_type(
        self,
        source: IO[bytes],
        path: str,
        content_type: str,
        bucket: str | None = None,
        is_public: bool = False,
    ) -> None:
        """Upload a binary stream with an explicit ``Content-Type``."""
        self._upload(
            "stream_file_upload_with_content_type",
            source,
            path,
            bucket=bucket,
            is_public=is_public,
            content_type=content_type,
        )

    def _upload(
        self,
        operation: str,
        source: IO[bytes],
        path: str,
        *,
        bucket: str | None,
        is_public: bool,
        content_type: str | None = None,
    ) -> None:
        final_bucket = self._resolve_bucket(bucket)
        extra_args: dict[str, str] = {}
        if content_type:
            extra_args["ContentType"] = content_type
        if is_public:
            extra_args["ACL"] = PUBLIC_READ_ACL
        logger.debug(
            "Uploading object",
            extra={"bucket": final_bucket, "key": path, "public": is_public},
        )
        with self._track(operation):
            self._client.upload_fileobj(
                source, final_bucket, path, ExtraArgs=extra_args or None
            )

    def delete_file(self, path: str, bucket: str | None = None) -> None:
        """Delete an object."""
        final_bucket = self._resolve_bucket(bucket)
        logger.debug("Deleting object", extra={"bucket": final_bucket, "key": path})
        with self._track("delete_file"):
            self._client.delete_object(Bucket=final_bucket, Key=path)

    def get_presigned_url(
        self,
        path: str,
        bucket: str | None = None,
        expires_in_minutes: float | None = None,
    ) -> str:
        """Generate a GET URL for an object, valid for ``expires_in_minutes``.

        The expiry defaults to ``S3_PRESIGN_EXPIRES_MINUTES`` and is rounded
        to whole seconds, at least one.
        """
        final_bucket = self._resolve_bucket(bucket)
        minutes = (
            expires_in_minutes
            if expires_in_minutes is not None
            else self._settings.S3_PRESIGN_EXPIRES_MINUTES
        )
        if minutes <= 0:
            raise ValueError("expires_in_minutes must be positive")
        expires_in = max(1, round(minutes * 60))
        with self._track("get_presigned_url"):
            url = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": final_bucket, "Key": path},
                ExpiresIn=expires_in,
            )
        return str(url)

    def close(self) -> None:
        """Release the client's connection pool. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._client.close()

    def __enter__(self) -> "S3Service":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
