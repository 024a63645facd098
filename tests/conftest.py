"""Shared pytest fixtures for bucketlog tests."""

from __future__ import annotations

import pytest

from bucketlog.store.base import ObjectStore

BUCKET = "my-bucket"
KEY = "my-logs.txt"


class MemoryStore(ObjectStore):
    """In-memory bucket that records every put."""

    def __init__(self, bucket: str = BUCKET, objects: dict[str, bytes] | None = None):
        self.bucket = bucket
        self.objects = dict(objects or {})
        self.heads: list[str] = []
        self.puts: list[tuple[str, str, bytes]] = []

    def head_object(self, key: str) -> bool:
        self.heads.append(key)
        return key in self.objects

    def put_object(self, key: str, body: bytes) -> None:
        self.puts.append((self.bucket, key, body))
        self.objects[key] = body


class FailingStore(MemoryStore):
    """Object already exists, but every put is rejected."""

    def __init__(self) -> None:
        super().__init__(objects={KEY: b""})

    def put_object(self, key: str, body: bytes) -> None:
        self.puts.append((self.bucket, key, body))
        raise PermissionError("AccessDenied")


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def failing_store():
    return FailingStore()
