"""In-process document store with live subscriptions.

Useful for local development, previews and tests.  Snapshots are
delivered synchronously: once on subscribe, then after every write that
touches the subscribed collection or document.  Writes merge nested
maps the way a document database does with ``merge=True``.
"""

from __future__ import annotations

import copy
import logging
from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from sitesync.sync.adapters.base import (
    CollectionCallback,
    DocumentCallback,
    DocumentSnapshot,
    ErrorCallback,
    RemoteRecord,
    RemoteStore,
    Unsubscribe,
)
from sitesync.sync.paths import split_path

logger = logging.getLogger(__name__)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge nested maps; lists and scalars in *override* replace."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class MemoryStore(RemoteStore):
    """Dict-backed store: collection -> document id -> fields."""

    name = "memory"

    def __init__(self, documents: Mapping[str, Mapping[str, Mapping[str, Any]]] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        for collection, docs in (documents or {}).items():
            for doc_id, data in docs.items():
                self._collections[collection][doc_id] = copy.deepcopy(dict(data))
        self._collection_subs: dict[str, list[tuple[CollectionCallback, ErrorCallback]]] = defaultdict(list)
        self._document_subs: dict[str, list[tuple[DocumentCallback, ErrorCallback]]] = defaultdict(list)

    # ── Subscriptions ────────────────────────────────────────────

    def subscribe_collection(
        self, name: str, on_snapshot: CollectionCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        entry = (on_snapshot, on_error)
        self._collection_subs[name].append(entry)
        on_snapshot(self._collection_snapshot(name))
        return self._remover(self._collection_subs[name], entry)

    def subscribe_document(
        self, path: str, on_snapshot: DocumentCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        split_path(path)
        entry = (on_snapshot, on_error)
        self._document_subs[path].append(entry)
        on_snapshot(self._document_snapshot(path))
        return self._remover(self._document_subs[path], entry)

    @property
    def subscription_count(self) -> int:
        """Number of live subscriptions across all collections and documents."""
        return sum(len(subs) for subs in self._collection_subs.values()) + sum(
            len(subs) for subs in self._document_subs.values()
        )

    def emit_error(self, target: str, error: Exception) -> None:
        """Report *error* to every subscriber of a collection or document path."""
        subs = self._document_subs.get(target) or self._collection_subs.get(target) or []
        for _, on_error in list(subs):
            on_error(error)

    # ── Writes ───────────────────────────────────────────────────

    async def upsert(self, path: str, data: dict[str, Any], *, merge: bool = True) -> None:
        collection, doc_id = split_path(path)
        docs = self._collections[collection]
        if merge and doc_id in docs:
            docs[doc_id] = deep_merge(docs[doc_id], data)
        else:
            docs[doc_id] = copy.deepcopy(dict(data))
        self._publish(collection, path)

    async def delete(self, path: str) -> None:
        collection, doc_id = split_path(path)
        if self._collections[collection].pop(doc_id, None) is None:
            logger.debug("Delete of missing document %s", path)
        self._publish(collection, path)

    def get(self, path: str) -> dict[str, Any] | None:
        """Return a copy of the document at *path*, or None."""
        collection, doc_id = split_path(path)
        data = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    def documents(self, collection: str) -> dict[str, dict[str, Any]]:
        """Return a copy of every document in *collection*."""
        return copy.deepcopy(dict(self._collections.get(collection, {})))

    # ── Private helpers ──────────────────────────────────────────

    def _collection_snapshot(self, name: str) -> list[RemoteRecord]:
        return [
            RemoteRecord(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(name, {}).items()
        ]

    def _document_snapshot(self, path: str) -> DocumentSnapshot:
        data = self.get(path)
        if data is None:
            return DocumentSnapshot(exists=False)
        return DocumentSnapshot(exists=True, data=data)

    def _publish(self, collection: str, path: str) -> None:
        for on_snapshot, _ in list(self._collection_subs.get(collection, [])):
            on_snapshot(self._collection_snapshot(collection))
        for on_snapshot, _ in list(self._document_subs.get(path, [])):
            on_snapshot(self._document_snapshot(path))

    @staticmethod
    def _remover(subs: list[Any], entry: Any) -> Unsubscribe:
        def _unsubscribe() -> None:
            if entry in subs:
                subs.remove(entry)

        return _unsubscribe
