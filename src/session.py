"""Content session — one store, one model, one sync core, one gateway.

Typical use inside an async application::

    async with ContentSession(load_config()) as session:
        session.model.snapshot.services
        await session.gateway.update_faq("f1", {"answer": "..."})
"""

from __future__ import annotations

import logging
from pathlib import Path

from sitesync.config import SiteSyncConfig
from sitesync.content.store import ContentModelStore
from sitesync.state import LocalState, load_local_state, save_local_state
from sitesync.sync.adapters import create_store
from sitesync.sync.adapters.base import RemoteStore
from sitesync.sync.core import SyncCore
from sitesync.sync.gateway import MutationGateway
from sitesync.sync.policy import DEFAULT_POLICIES, EntityGroup, GroupPolicy, resolve_policies

logger = logging.getLogger(__name__)


class ContentSession:
    """Wires the remote store, content model, sync core and mutation gateway.

    Works as a plain or async context manager; either form activates the
    subscriptions on entry and closes them (and the store) on exit.
    """

    def __init__(self, config: SiteSyncConfig | None = None, *, store: RemoteStore | None = None) -> None:
        self.config = config or SiteSyncConfig()
        self.store = store if store is not None else create_store(self.config.store)
        self.model = ContentModelStore()
        self.core = SyncCore(self.store, self.model)
        self.gateway = MutationGateway(
            self.store,
            self.model,
            policies=_policies_from_config(self.config),
            state_dir=self.state_dir,
        )

    @property
    def state_dir(self) -> Path:
        return self.config.state_dir

    @property
    def remote_enabled(self) -> bool:
        return self.store.available

    # ── Lifecycle ────────────────────────────────────────────────

    def open(self) -> ContentSession:
        logger.debug("Opening content session on %s store", self.store.name)
        self.core.activate()
        return self

    def close(self) -> None:
        self.core.deactivate()
        try:
            self.store.close()
        except Exception:
            logger.warning("Failed to close %s store", self.store.name, exc_info=True)

    def __enter__(self) -> ContentSession:
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> ContentSession:
        return self.open()

    async def __aexit__(self, *exc_info: object) -> None:
        await self.gateway.drain()
        self.close()

    # ── Local-only state ─────────────────────────────────────────

    def load_state(self) -> LocalState:
        return load_local_state(self.state_dir)

    def record_marker(self, key: str, status: str) -> LocalState:
        """Persist a local-only marker, e.g. the email capture outcome."""
        state = self.load_state()
        state.mark(key, status)
        save_local_state(state, self.state_dir)
        return state


def _policies_from_config(config: SiteSyncConfig) -> dict[EntityGroup, GroupPolicy]:
    try:
        return resolve_policies(config.sync.groups)
    except ValueError as exc:
        logger.warning("Ignoring invalid [sync.groups] overrides: %s", exc)
        return dict(DEFAULT_POLICIES)
