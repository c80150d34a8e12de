import pytest

from s3service.infra.storage.client import ByteRange, StorageCredentials


def test_byte_range_header_is_inclusive():
    assert ByteRange(start=0, end=0).header == "bytes=0-0"
    assert ByteRange(start=100, end=199).header == "bytes=100-199"


@pytest.mark.parametrize("start, end", [(-1, 5), (5, 4)])
def test_byte_range_rejects_invalid_bounds(start, end):
    with pytest.raises(ValueError):
        ByteRange(start=start, end=end)


def test_credentials_repr_hides_secret():
    credentials = StorageCredentials("AKIDEXAMPLE", "very-secret")

    assert "very-secret" not in repr(credentials)
    assert "AKIDEXAMPLE" in repr(credentials)
