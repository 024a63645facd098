"""Buffered line logger that mirrors its buffer into a bucket object.

Lines are echoed to stdout and appended to an in-memory buffer. A flush
uploads the whole buffer as the object body, replacing the previous object.

The buffer is cumulative: flush does not clear it, so every upload carries
every line logged since construction and the object always holds the full
session log.
"""

from __future__ import annotations

import asyncio
import contextlib
import io
import os
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from bucketlog.config import Credentials, Region
from bucketlog.core.logging import get_logger
from bucketlog.exceptions import ConfigurationError, UploadError
from bucketlog.store.base import ObjectStore
from bucketlog.store.s3 import S3ObjectStore

log = get_logger("bucketlog.logger")


class TimestampMode(Enum):
    """Where timestamps are added. NONE keeps lines verbatim."""

    NONE = "none"
    LOG = "log"  # prefix each line when it is logged
    FLUSH = "flush"  # header line on each uploaded body


def _ensure_object(store: ObjectStore, key: str) -> None:
    """Create an empty object at *key* if none exists yet."""
    if not key or not key.strip():
        raise ConfigurationError("object key must not be empty")
    try:
        if not store.head_object(key):
            store.put_object(key, b"")
            log.info("logger.object_created", bucket=store.bucket, key=key)
    except Exception as exc:
        raise ConfigurationError(
            f"cannot prepare s3://{store.bucket}/{key}: {exc}"
        ) from exc


class _BufferedLogger:
    """Buffering and formatting shared by the blocking and async loggers."""

    def __init__(
        self,
        store: ObjectStore,
        key: str,
        *,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        local_copy: str | os.PathLike[str] | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self._buffer = io.StringIO()
        self.timestamp_mode = timestamp_mode
        self.local_copy = Path(local_copy) if local_copy is not None else None

    @property
    def bucket(self) -> str:
        return self._store.bucket

    @property
    def key(self) -> str:
        return self._key

    @property
    def contents(self) -> str:
        """Everything logged since construction."""
        return self._buffer.getvalue()

    def set_timestamp_mode(self, timestamp_mode: TimestampMode) -> None:
        self.timestamp_mode = timestamp_mode

    def save_local_copy(self, path: str | os.PathLike[str] | None) -> None:
        """Mirror each uploaded body to *path*; ``None`` turns mirroring off."""
        self.local_copy = Path(path) if path is not None else None

    def log(self, line: str) -> None:
        """Echo *line* to the console and append it to the buffer."""
        if self.timestamp_mode is TimestampMode.LOG:
            entry = f"{datetime.now().isoformat(sep=' ')}: {line}\n"
        else:
            entry = f"{line}\n"
        self._echo(entry)
        self._buffer.write(entry)

    def _echo(self, entry: str) -> None:
        # best effort: a closed or non-UTF-8 stdout must not fail log()
        with contextlib.suppress(OSError, ValueError):
            print(entry, end="")

    def _payload(self) -> bytes:
        text = self._buffer.getvalue()
        if self.timestamp_mode is TimestampMode.FLUSH:
            text = f"{datetime.now():%Y-%m-%d %H:%M:%S}\n{text}"
        return text.encode("utf-8", errors="replace")

    def _upload_failed(self, exc: Exception) -> UploadError:
        log.warning("logger.flush_failed", bucket=self.bucket, key=self._key, error=str(exc))
        return UploadError(self.bucket, self._key, exc)

    def _uploaded(self, payload: bytes) -> None:
        log.debug("logger.flushed", bucket=self.bucket, key=self._key, size=len(payload))
        if self.local_copy is not None:
            self.local_copy.write_bytes(payload)


class Logger(_BufferedLogger):
    """Blocking logger: setup and flush run on the calling thread."""

    @classmethod
    def new(
        cls,
        bucket: str,
        key: str,
        region: Region | str,
        credentials: Credentials | Mapping[str, Any],
        *,
        endpoint_url: str | None = None,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        local_copy: str | os.PathLike[str] | None = None,
    ) -> Logger:
        store = S3ObjectStore.connect(bucket, region, credentials, endpoint_url)
        return cls.from_store(
            store, key, timestamp_mode=timestamp_mode, local_copy=local_copy
        )

    @classmethod
    def from_store(
        cls,
        store: ObjectStore,
        key: str,
        *,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        local_copy: str | os.PathLike[str] | None = None,
    ) -> Logger:
        _ensure_object(store, key)
        return cls(store, key, timestamp_mode=timestamp_mode, local_copy=local_copy)

    def flush(self) -> None:
        """Upload the buffer as the object body. One attempt, no retry."""
        payload = self._payload()
        try:
            self._store.put_object(self._key, payload)
        except Exception as exc:
            raise self._upload_failed(exc) from exc
        self._uploaded(payload)

    flush_blocking = flush


class AsyncLogger(_BufferedLogger):
    """Async logger: store calls run in a worker thread via asyncio.to_thread."""

    @classmethod
    async def new(
        cls,
        bucket: str,
        key: str,
        region: Region | str,
        credentials: Credentials | Mapping[str, Any],
        *,
        endpoint_url: str | None = None,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        local_copy: str | os.PathLike[str] | None = None,
    ) -> AsyncLogger:
        store = await asyncio.to_thread(
            S3ObjectStore.connect, bucket, region, credentials, endpoint_url
        )
        return await cls.from_store(
            store, key, timestamp_mode=timestamp_mode, local_copy=local_copy
        )

    @classmethod
    async def from_store(
        cls,
        store: ObjectStore,
        key: str,
        *,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        local_copy: str | os.PathLike[str] | None = None,
    ) -> AsyncLogger:
        await asyncio.to_thread(_ensure_object, store, key)
        return cls(store, key, timestamp_mode=timestamp_mode, local_copy=local_copy)

    async def flush(self) -> None:
        """Upload the buffer as it stood when flush was called."""
        payload = self._payload()
        try:
            await asyncio.to_thread(self._store.put_object, self._key, payload)
        except Exception as exc:
            raise self._upload_failed(exc) from exc
        await asyncio.to_thread(self._uploaded, payload)
