"""S3 object store implementation (boto3)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from bucketlog.config import Credentials, Region
from bucketlog.core.logging import get_logger
from bucketlog.exceptions import ConfigurationError
from bucketlog.store.base import ObjectStore

log = get_logger("bucketlog.store")

_CONTENT_TYPE = "text/plain; charset=utf-8"
_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3ObjectStore(ObjectStore):
    """Thin wrapper around a boto3 S3 client bound to one bucket.

    Client errors are not caught here; callers decide whether they mean a
    configuration or an upload failure.
    """

    def __init__(self, bucket: str, client: BaseClient) -> None:
        self.bucket = bucket
        self._client = client

    @classmethod
    def connect(
        cls,
        bucket: str,
        region: Region | str,
        credentials: Credentials | Mapping[str, Any],
        endpoint_url: str | None = None,
    ) -> S3ObjectStore:
        """Build the boto3 client. Raises ConfigurationError on bad input."""
        if not bucket or not bucket.strip():
            raise ConfigurationError("bucket name must not be empty")
        region = Region.parse(region)
        credentials = Credentials.parse(credentials)
        endpoint_url = endpoint_url or os.getenv("BUCKETLOG_S3_ENDPOINT") or None
        try:
            client = boto3.client(
                "s3",
                region_name=region.value,
                endpoint_url=endpoint_url,
                **credentials.as_client_kwargs(),
            )
        except (BotoCoreError, ValueError) as exc:
            raise ConfigurationError(f"cannot create S3 client: {exc}") from exc
        log.debug("store.connected", bucket=bucket, region=region.value, endpoint=endpoint_url)
        return cls(bucket, client)

    def head_object(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return False
            raise
        return True

    def put_object(self, key: str, body: bytes) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=_CONTENT_TYPE,
        )
