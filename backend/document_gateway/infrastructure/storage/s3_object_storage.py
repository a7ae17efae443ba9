"""S3-backed object storage — issues presigned GET URLs for scanned documents."""

import logging
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from document_gateway.application.interfaces.object_storage import ObjectStorage
from document_gateway.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class S3ObjectStorage(ObjectStorage):
    """Infrastructure adapter for the document bucket.

    The boto3 client is created once and reused; boto3 clients are safe to
    share between concurrent requests.
    """

    def __init__(
        self,
        bucket_name: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any | None = None,
    ):
        if not bucket_name:
            raise ValueError("S3 bucket name is not configured")
        self._bucket_name = bucket_name
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
            config=Config(signature_version="s3v4"),
        )

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    def generate_download_url(self, key: str, expires_in: int) -> str:
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket_name, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 presign failed for s3://{self._bucket_name}/{key}: {exc}") from exc


class LazyObjectStorage(ObjectStorage):
    """Defers building the storage adapter until a URL is requested.

    A misconfigured bucket then only fails the download that needs it,
    as a ``StorageError``.
    """

    def __init__(self, factory: Callable[[], ObjectStorage]):
        self._factory = factory

    def generate_download_url(self, key: str, expires_in: int) -> str:
        try:
            storage = self._factory()
        except (ValueError, BotoCoreError) as exc:
            raise StorageError(f"Object storage is not configured: {exc}") from exc
        return storage.generate_download_url(key, expires_in)
