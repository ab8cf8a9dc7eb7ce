"""Tests for remote store adapters and the adapter factory."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sitesync.config import StoreBackend, StoreSectionConfig
from sitesync.errors import RemoteWriteError
from sitesync.sync.adapters import create_store
from sitesync.sync.adapters.base import DocumentSnapshot, RemoteRecord, local_id
from sitesync.sync.adapters.firestore import FirestoreStore
from sitesync.sync.adapters.json_file import STORE_FILENAME, JsonFileStore
from sitesync.sync.adapters.memory import MemoryStore, deep_merge
from sitesync.sync.adapters.null import NullStore
from sitesync.sync.paths import doc_path, split_path


class TestPaths:
    def test_split_path(self):
        assert split_path("services/web") == ("services", "web")

    @pytest.mark.parametrize("path", ["services", "a/b/c", "services/", ""])
    def test_split_path_rejects_bad_paths(self, path: str):
        with pytest.raises(ValueError):
            split_path(path)


class TestLocalId:
    def test_length_and_alphabet(self):
        value = local_id()
        assert len(value) == 9
        assert value.isalnum()
        assert value == value.lower()

    def test_ids_differ(self):
        assert local_id() != local_id()


class TestDeepMerge:
    def test_nested_maps_merge(self):
        merged = deep_merge({"hero": {"a": 1, "b": 2}, "x": 1}, {"hero": {"b": 3}})
        assert merged == {"hero": {"a": 1, "b": 3}, "x": 1}

    def test_lists_replace(self):
        assert deep_merge({"tags": ["a", "b"]}, {"tags": ["c"]}) == {"tags": ["c"]}


class TestMemoryStore:
    def test_collection_subscription_delivers_immediately(self):
        store = MemoryStore({"faqs": {"f1": {"question": "Q"}}})
        received: list[list[RemoteRecord]] = []
        store.subscribe_collection("faqs", received.append, MagicMock())

        assert len(received) == 1
        assert received[0][0].id == "f1"
        assert received[0][0].data == {"question": "Q"}

    @pytest.mark.asyncio
    async def test_upsert_merges_and_publishes(self):
        store = MemoryStore({"faqs": {"f1": {"question": "Q", "answer": "A"}}})
        received: list[list[RemoteRecord]] = []
        store.subscribe_collection("faqs", received.append, MagicMock())

        await store.upsert("faqs/f1", {"answer": "B"})

        assert store.get("faqs/f1") == {"question": "Q", "answer": "B"}
        assert received[-1][0].data["answer"] == "B"

    @pytest.mark.asyncio
    async def test_upsert_without_merge_replaces(self):
        store = MemoryStore({"faqs": {"f1": {"question": "Q", "answer": "A"}}})
        await store.upsert("faqs/f1", {"answer": "B"}, merge=False)
        assert store.get("faqs/f1") == {"answer": "B"}

    @pytest.mark.asyncio
    async def test_document_subscription(self):
        store = MemoryStore()
        received: list[DocumentSnapshot] = []
        store.subscribe_document("siteSettings/homepage", received.append, MagicMock())

        await store.upsert("siteSettings/homepage", {"showFaq": False})

        assert received[0].exists is False
        assert received[-1].exists is True
        assert received[-1].data == {"showFaq": False}

    @pytest.mark.asyncio
    async def test_delete(self):
        store = MemoryStore({"projects": {"p1": {"title": "A"}}})
        await store.delete("projects/p1")
        assert store.get("projects/p1") is None
        assert store.documents("projects") == {}

    def test_unsubscribe(self):
        store = MemoryStore()
        unsubscribe = store.subscribe_collection("faqs", MagicMock(), MagicMock())
        assert store.subscription_count == 1
        unsubscribe()
        assert store.subscription_count == 0

    def test_emit_error(self):
        store = MemoryStore()
        on_error = MagicMock()
        store.subscribe_collection("services", MagicMock(), on_error)
        error = RuntimeError("permission denied")

        store.emit_error("services", error)

        on_error.assert_called_once_with(error)

    def test_returned_documents_are_copies(self):
        store = MemoryStore({"faqs": {"f1": {"tags": ["a"]}}})
        store.get("faqs/f1")["tags"].append("b")
        assert store.get("faqs/f1") == {"tags": ["a"]}


class TestJsonFileStore:
    @pytest.mark.asyncio
    async def test_persists_writes(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        await store.upsert(doc_path("projects", "p1"), {"title": "Shop"})

        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert data["collections"]["projects"]["p1"] == {"title": "Shop"}

    @pytest.mark.asyncio
    async def test_reloads_from_disk(self, tmp_path: Path):
        path = tmp_path / "content.json"
        await JsonFileStore(path).upsert("faqs/f9", {"question": "Q"})

        reopened = JsonFileStore(path)
        assert reopened.get("faqs/f9") == {"question": "Q"}

    @pytest.mark.asyncio
    async def test_delete_persists(self, tmp_path: Path):
        store = JsonFileStore(tmp_path)
        await store.upsert("faqs/f1", {"question": "Q"})
        await store.delete("faqs/f1")
        assert JsonFileStore(tmp_path).get("faqs/f1") is None

    def test_corrupt_file_starts_fresh(self, tmp_path: Path):
        (tmp_path / STORE_FILENAME).write_text("{not json", encoding="utf-8")
        store = JsonFileStore(tmp_path)
        assert store.documents("faqs") == {}


class TestNullStore:
    def test_is_unavailable(self):
        assert NullStore().available is False

    def test_subscriptions_are_noops(self):
        on_snapshot = MagicMock()
        unsubscribe = NullStore().subscribe_collection("faqs", on_snapshot, MagicMock())
        unsubscribe()
        on_snapshot.assert_not_called()

    @pytest.mark.asyncio
    async def test_writes_do_not_raise(self):
        store = NullStore()
        await store.upsert("faqs/f1", {"question": "Q"})
        await store.delete("faqs/f1")

    def test_new_id_is_local(self):
        assert len(NullStore().new_id("projects")) == 9


class TestFirestoreStore:
    def test_collection_snapshot_maps_documents(self):
        client = MagicMock()
        store = FirestoreStore("proj", client=client)
        received: list[list[RemoteRecord]] = []

        store.subscribe_collection("faqs", received.append, MagicMock())
        callback = client.collection.return_value.on_snapshot.call_args.args[0]
        doc = MagicMock(id="f1")
        doc.to_dict.return_value = {"question": "Q"}
        callback([doc], [], None)

        assert received == [[RemoteRecord(id="f1", data={"question": "Q"})]]

    def test_missing_document_snapshot(self):
        client = MagicMock()
        store = FirestoreStore("proj", client=client)
        received: list[DocumentSnapshot] = []

        store.subscribe_document("siteSettings/homepage", received.append, MagicMock())
        callback = client.document.return_value.on_snapshot.call_args.args[0]
        callback([MagicMock(exists=False)], [], None)

        assert received == [DocumentSnapshot(exists=False)]

    def test_unsubscribe_closes_watch(self):
        client = MagicMock()
        unsubscribe = FirestoreStore("proj", client=client).subscribe_collection("faqs", MagicMock(), MagicMock())
        unsubscribe()
        client.collection.return_value.on_snapshot.return_value.unsubscribe.assert_called_once()

    @pytest.mark.asyncio
    async def test_upsert_uses_merge(self):
        client = MagicMock()
        await FirestoreStore("proj", client=client).upsert("faqs/f1", {"answer": "A"})
        client.document.assert_called_with("faqs/f1")
        client.document.return_value.set.assert_called_once_with({"answer": "A"}, merge=True)

    @pytest.mark.asyncio
    async def test_write_failure_is_wrapped(self):
        client = MagicMock()
        client.document.return_value.delete.side_effect = RuntimeError("denied")

        with pytest.raises(RemoteWriteError) as exc_info:
            await FirestoreStore("proj", client=client).delete("projects/p1")
        assert exc_info.value.path == "projects/p1"

    def test_new_id_from_client(self):
        client = MagicMock()
        client.collection.return_value.document.return_value.id = "abc123"
        assert FirestoreStore("proj", client=client).new_id("projects") == "abc123"


class TestCreateStore:
    def test_auto_without_configuration_is_null(self):
        store = create_store(StoreSectionConfig())
        assert isinstance(store, NullStore)
        assert store.available is False

    def test_placeholder_project_is_not_configured(self):
        store = create_store(StoreSectionConfig(project_id="demo-project"))
        assert isinstance(store, NullStore)

    def test_auto_with_json_path(self, tmp_path: Path):
        store = create_store(StoreSectionConfig(json_path=str(tmp_path)))
        assert isinstance(store, JsonFileStore)

    def test_memory_backend(self):
        assert isinstance(create_store(StoreSectionConfig(backend=StoreBackend.MEMORY)), MemoryStore)

    def test_none_backend(self):
        store = create_store(StoreSectionConfig(backend=StoreBackend.NONE, json_path="x.json"))
        assert isinstance(store, NullStore)

    def test_json_backend_without_path(self):
        assert isinstance(create_store(StoreSectionConfig(backend=StoreBackend.JSON)), NullStore)

    def test_firestore_failure_degrades_to_null(self, monkeypatch: pytest.MonkeyPatch):
        def _fail(*args: object, **kwargs: object) -> None:
            raise RuntimeError("no credentials")

        monkeypatch.setattr("sitesync.sync.adapters.firestore.FirestoreStore.__init__", _fail)
        store = create_store(StoreSectionConfig(project_id="real-project"))
        assert isinstance(store, NullStore)
        assert store.reason == "unavailable"
