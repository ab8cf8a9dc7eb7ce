"""Remote store adapter contract.

A remote store is an opaque document database reachable through four
operations: subscribe to a collection, subscribe to a document, upsert
with merge, and delete.  It may be entirely absent; ``available`` tells
callers whether anything behind the adapter can be reached.
"""

from __future__ import annotations

import secrets
import string
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Unsubscribe = Callable[[], None]

_ID_ALPHABET = string.ascii_lowercase + string.digits


class RemoteRecord(BaseModel):
    """One document of a collection snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    data: dict[str, Any] = Field(default_factory=dict)


class DocumentSnapshot(BaseModel):
    """Result of a document subscription: existence plus raw fields."""

    model_config = ConfigDict(frozen=True)

    exists: bool
    data: dict[str, Any] = Field(default_factory=dict)


CollectionCallback = Callable[[list[RemoteRecord]], None]
DocumentCallback = Callable[[DocumentSnapshot], None]
ErrorCallback = Callable[[Exception], None]


def local_id(length: int = 9) -> str:
    """Process-local random identifier for records created without a store."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class RemoteStore(ABC):
    """Base class for remote document store adapters."""

    name: str = "remote"
    available: bool = True

    @abstractmethod
    def subscribe_collection(
        self,
        name: str,
        on_snapshot: CollectionCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Deliver every snapshot of a collection until unsubscribed."""

    @abstractmethod
    def subscribe_document(
        self,
        path: str,
        on_snapshot: DocumentCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Deliver every snapshot of one document until unsubscribed."""

    @abstractmethod
    async def upsert(self, path: str, data: dict[str, Any], *, merge: bool = True) -> None:
        """Write *data* to *path*, merging into an existing document by default."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete the document at *path*."""

    def new_id(self, collection: str) -> str:
        """Allocate an identifier for a new document in *collection*."""
        return local_id(20)

    async def ensure_session(self) -> None:
        """Establish whatever session the store needs before the first write."""
        return None

    def close(self) -> None:
        """Release client resources."""
        return None
