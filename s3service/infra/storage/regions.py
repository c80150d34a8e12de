"""Region name validation against botocore's endpoint data."""

from __future__ import annotations

from functools import lru_cache

from botocore.session import get_session

from s3service.infra.storage.client import RegionNotFoundError


@lru_cache(maxsize=1)
def known_regions() -> frozenset[str]:
    """Return every S3 region botocore knows about, across all partitions."""
    session = get_session()
    regions: set[str] = set()
    for partition in session.get_available_partitions():
        regions.update(
            session.get_available_regions("s3", partition_name=partition)
        )
    return frozenset(regions)


def resolve_region(name: str | None, *, endpoint_url: str | None = None) -> str:
    """Validate a region system name such as ``eu-west-1``.

    With a custom ``endpoint_url`` (MinIO and other S3-compatible services)
    any non-blank name is accepted as given, since those services define
    their own region names.

    Raises:
        RegionNotFoundError: If the name is blank, or not a known S3 region
            when talking to AWS.
    """
    region = (name or "").strip()
    if not region:
        raise RegionNotFoundError("Region Not Found")
    if endpoint_url:
        return region
    region = region.lower()
    if region not in known_regions():
        raise RegionNotFoundError("Region Not Found")
    return region
