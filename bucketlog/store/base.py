"""Object store abstract interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ObjectStore(ABC):
    """A single bucket holding whole-object text logs."""

    bucket: str

    @abstractmethod
    def head_object(self, key: str) -> bool:
        """Return True if an object exists at *key*."""
        ...

    @abstractmethod
    def put_object(self, key: str, body: bytes) -> None:
        """Write *body* as the full object at *key*, replacing any previous one."""
        ...
