"""bucketlog: buffered line logger backed by an S3 object."""

__version__ = "0.1.0"

from bucketlog.config import Credentials, Region
from bucketlog.core.logging import get_logger, setup_logging
from bucketlog.exceptions import BucketLogError, ConfigurationError, UploadError
from bucketlog.logger import AsyncLogger, Logger, TimestampMode
from bucketlog.store.base import ObjectStore
from bucketlog.store.s3 import S3ObjectStore

__all__ = [
    "AsyncLogger",
    "BucketLogError",
    "ConfigurationError",
    "Credentials",
    "Logger",
    "ObjectStore",
    "Region",
    "S3ObjectStore",
    "TimestampMode",
    "UploadError",
    "get_logger",
    "setup_logging",
]
