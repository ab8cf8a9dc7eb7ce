"""Google Cloud Firestore adapter.

Snapshot listeners run on the Firestore client's watch thread; every
callback is handed back to the event loop that opened the subscription,
so the synchronization core only ever runs on one thread.  Blocking
writes are pushed to a worker thread with ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from sitesync.errors import RemoteWriteError, StoreUnavailableError, SubscriptionError
from sitesync.sync.adapters.base import (
    CollectionCallback,
    DocumentCallback,
    DocumentSnapshot,
    ErrorCallback,
    RemoteRecord,
    RemoteStore,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

# Optional dependency
try:
    from google.cloud import firestore
    from google.oauth2 import service_account

    _HAS_FIRESTORE = True
except ImportError:
    firestore = None  # type: ignore[assignment]
    service_account = None  # type: ignore[assignment]
    _HAS_FIRESTORE = False


def is_installed() -> bool:
    """Check whether the google-cloud-firestore client library is importable."""
    return _HAS_FIRESTORE


class FirestoreStore(RemoteStore):
    """Remote store backed by a Firestore database."""

    name = "firestore"

    def __init__(
        self,
        project_id: str,
        *,
        database: str = "(default)",
        credentials_file: str = "",
        client: Any | None = None,
    ) -> None:
        if client is None:
            if not _HAS_FIRESTORE:
                raise StoreUnavailableError("google-cloud-firestore is not installed")
            credentials = None
            if credentials_file:
                credentials = service_account.Credentials.from_service_account_file(credentials_file)  # type: ignore[union-attr]
            client = firestore.Client(  # type: ignore[union-attr]
                project=project_id, database=database, credentials=credentials
            )
        self._client = client
        self.project_id = project_id

    # ── Subscriptions ────────────────────────────────────────────

    def subscribe_collection(
        self, name: str, on_snapshot: CollectionCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        deliver = self._dispatcher()

        def _callback(docs: list[Any], changes: Any, read_time: Any) -> None:
            try:
                records = [RemoteRecord(id=d.id, data=d.to_dict() or {}) for d in docs]
            except Exception as exc:
                deliver(on_error, SubscriptionError(name, str(exc)))
                return
            deliver(on_snapshot, records)

        watch = self._client.collection(name).on_snapshot(_callback)
        return self._unsubscriber(watch, name)

    def subscribe_document(
        self, path: str, on_snapshot: DocumentCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        deliver = self._dispatcher()

        def _callback(docs: list[Any], changes: Any, read_time: Any) -> None:
            try:
                snap = docs[0] if docs else None
                if snap is None or not snap.exists:
                    result = DocumentSnapshot(exists=False)
                else:
                    result = DocumentSnapshot(exists=True, data=snap.to_dict() or {})
            except Exception as exc:
                deliver(on_error, SubscriptionError(path, str(exc)))
                return
            deliver(on_snapshot, result)

        watch = self._client.document(path).on_snapshot(_callback)
        return self._unsubscriber(watch, path)

    # ── Writes ───────────────────────────────────────────────────

    async def upsert(self, path: str, data: dict[str, Any], *, merge: bool = True) -> None:
        ref = self._client.document(path)
        try:
            await asyncio.to_thread(ref.set, data, merge=merge)
        except Exception as exc:
            raise RemoteWriteError(path, str(exc)) from exc

    async def delete(self, path: str) -> None:
        ref = self._client.document(path)
        try:
            await asyncio.to_thread(ref.delete)
        except Exception as exc:
            raise RemoteWriteError(path, str(exc)) from exc

    def new_id(self, collection: str) -> str:
        return self._client.collection(collection).document().id

    def close(self) -> None:
        self._client.close()

    # ── Private helpers ──────────────────────────────────────────

    @staticmethod
    def _dispatcher() -> Callable[..., None]:
        """Return a function that runs callbacks on the subscribing event loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        def _deliver(callback: Callable[..., None], *args: Any) -> None:
            if loop is None:
                callback(*args)
            elif not loop.is_closed():
                loop.call_soon_threadsafe(callback, *args)

        return _deliver

    @staticmethod
    def _unsubscriber(watch: Any, target: str) -> Unsubscribe:
        def _unsubscribe() -> None:
            try:
                watch.unsubscribe()
            except Exception:
                logger.warning("Failed to close Firestore listener for %s", target, exc_info=True)

        return _unsubscribe
