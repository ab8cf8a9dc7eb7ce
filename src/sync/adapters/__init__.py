"""Remote store adapter factory and registry."""

from __future__ import annotations

import logging
from pathlib import Path

from sitesync.config import StoreBackend, StoreSectionConfig
from sitesync.sync.adapters.base import DocumentSnapshot, RemoteRecord, RemoteStore
from sitesync.sync.adapters.json_file import JsonFileStore
from sitesync.sync.adapters.memory import MemoryStore
from sitesync.sync.adapters.null import NullStore

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentSnapshot",
    "JsonFileStore",
    "MemoryStore",
    "NullStore",
    "RemoteRecord",
    "RemoteStore",
    "create_store",
]


def create_store(config: StoreSectionConfig) -> RemoteStore:
    """Create the remote store adapter selected by *config*.

    ``auto`` prefers Firestore when a project id is configured, then a
    JSON store file when a path is set.  Any backend that cannot start
    yields a ``NullStore`` so the caller can still activate in
    local-only mode.

    Args:
        config: The ``[store]`` configuration section.

    Returns:
        A RemoteStore; never raises for configuration problems.
    """
    backend = config.backend
    if backend == StoreBackend.AUTO:
        if config.is_firestore_configured:
            backend = StoreBackend.FIRESTORE
        elif config.json_path:
            backend = StoreBackend.JSON
        else:
            return NullStore("not configured")

    if backend == StoreBackend.NONE:
        return NullStore("disabled")
    if backend == StoreBackend.MEMORY:
        return MemoryStore()
    if backend == StoreBackend.JSON:
        if not config.json_path:
            logger.warning("JSON store selected but no store path set; running local-only")
            return NullStore("not configured")
        return JsonFileStore(Path(config.json_path).expanduser())

    if not config.is_firestore_configured:
        logger.warning("Firestore selected but no project id set; running local-only")
        return NullStore("not configured")
    try:
        from sitesync.sync.adapters.firestore import FirestoreStore

        return FirestoreStore(
            config.project_id,
            database=config.database,
            credentials_file=config.credentials_file,
        )
    except Exception:
        logger.error("Firestore initialization failed; running local-only", exc_info=True)
        return NullStore("unavailable")
