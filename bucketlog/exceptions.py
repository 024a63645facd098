"""Custom exceptions for bucketlog."""

from __future__ import annotations


class BucketLogError(Exception):
    """Base exception for all bucketlog errors."""


class ConfigurationError(BucketLogError):
    """Raised when a logger cannot be built from the given region/credentials."""


class UploadError(BucketLogError):
    """Raised when a flush fails to put the buffer into the bucket.

    The underlying store error is chained as ``__cause__``.
    """

    def __init__(self, bucket: str, key: str, reason: object):
        self.bucket = bucket
        self.key = key
        super().__init__(f"upload to s3://{bucket}/{key} failed: {reason}")
