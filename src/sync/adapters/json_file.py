"""JSON-file-backed document store.

Persists every collection in a single JSON file, loaded on init and
saved after every write.  Subscriptions behave like ``MemoryStore``
within one process; other processes see changes on their next start.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from sitesync.sync.adapters.memory import MemoryStore

logger = logging.getLogger(__name__)

STORE_FILENAME = ".sitesync-store.json"


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    collections: dict[str, dict[str, dict[str, Any]]] = Field(default_factory=dict)


class JsonFileStore(MemoryStore):
    """Document store persisted to one JSON file."""

    name = "json"

    def __init__(self, path: Path) -> None:
        self._path = path / STORE_FILENAME if path.is_dir() else path
        super().__init__(self._load().collections)

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt store file at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = _StoreData(collections={name: docs for name, docs in self._collections.items() if docs})
        self._path.write_text(data.model_dump_json(indent=2), encoding="utf-8")

    # ── Writes ───────────────────────────────────────────────────

    async def upsert(self, path: str, data: dict[str, Any], *, merge: bool = True) -> None:
        await super().upsert(path, data, merge=merge)
        self._save()

    async def delete(self, path: str) -> None:
        await super().delete(path)
        self._save()
