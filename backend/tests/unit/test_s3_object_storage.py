"""Unit tests for the S3ObjectStorage adapter."""

from urllib.parse import parse_qs, urlparse

import boto3
import pytest
from botocore.config import Config
from botocore.exceptions import ClientError

from document_gateway.domain.exceptions import StorageError
from document_gateway.infrastructure.storage.s3_object_storage import LazyObjectStorage, S3ObjectStorage


# ── Helpers ──


def _offline_client():
    """Real boto3 client with static credentials; presigning needs no network."""
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="AKIAEXAMPLEKEY",
        aws_secret_access_key="example-secret",
        config=Config(signature_version="s3v4"),
    )


class _RefusingClient:
    def generate_presigned_url(self, operation, Params, ExpiresIn):
        raise ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            operation,
        )


# ── Tests ──


def test_presigned_url_targets_bucket_key_and_expiry():
    storage = S3ObjectStorage("historical-documents", "us-east-1", client=_offline_client())

    url = storage.generate_download_url("4-12.pdf", 120)

    parsed = urlparse(url)
    assert "historical-documents" in parsed.netloc + parsed.path
    assert parsed.path.endswith("/4-12.pdf")
    query = parse_qs(parsed.query)
    assert query["X-Amz-Expires"] == ["120"]
    assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]


def test_presign_failure_raises_storage_error():
    storage = S3ObjectStorage("historical-documents", "us-east-1", client=_RefusingClient())

    with pytest.raises(StorageError, match="4-12.pdf"):
        storage.generate_download_url("4-12.pdf", 120)


def test_default_client_presigns_with_given_credentials():
    storage = S3ObjectStorage(
        "historical-documents",
        "us-west-2",
        access_key_id="AKIAEXAMPLEKEY",
        secret_access_key="example-secret",
    )

    assert storage.bucket_name == "historical-documents"
    assert "X-Amz-Expires=60" in storage.generate_download_url("3-1.pdf", 60)


def test_empty_bucket_name_is_rejected():
    with pytest.raises(ValueError):
        S3ObjectStorage("", "us-east-1", client=_offline_client())


# ── Lazy construction ──


def test_lazy_storage_builds_adapter_on_first_url():
    built: list[S3ObjectStorage] = []

    def factory() -> S3ObjectStorage:
        built.append(S3ObjectStorage("historical-documents", "us-east-1", client=_offline_client()))
        return built[-1]

    storage = LazyObjectStorage(factory)
    assert built == []

    url = storage.generate_download_url("4-12.pdf", 120)

    assert len(built) == 1
    assert "/4-12.pdf?" in url


def test_lazy_storage_turns_construction_failure_into_storage_error():
    storage = LazyObjectStorage(lambda: S3ObjectStorage("", "us-east-1"))

    with pytest.raises(StorageError, match="not configured"):
        storage.generate_download_url("4-12.pdf", 120)
