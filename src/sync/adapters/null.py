"""Null store: the absent variant of the remote store adapter."""

from __future__ import annotations

import logging
from typing import Any

from sitesync.sync.adapters.base import (
    CollectionCallback,
    DocumentCallback,
    ErrorCallback,
    RemoteStore,
    Unsubscribe,
    local_id,
)

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


class NullStore(RemoteStore):
    """Stands in when no store is configured or the client failed to start.

    Subscriptions are skipped and writes are dropped with a warning;
    nothing here raises.
    """

    name = "none"
    available = False

    def __init__(self, reason: str = "not configured") -> None:
        self.reason = reason

    def subscribe_collection(
        self, name: str, on_snapshot: CollectionCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        return _noop

    def subscribe_document(
        self, path: str, on_snapshot: DocumentCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        return _noop

    async def upsert(self, path: str, data: dict[str, Any], *, merge: bool = True) -> None:
        logger.warning("Remote store %s; skipping write to %s", self.reason, path)

    async def delete(self, path: str) -> None:
        logger.warning("Remote store %s; skipping delete of %s", self.reason, path)

    def new_id(self, collection: str) -> str:
        return local_id()
