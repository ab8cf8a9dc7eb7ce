"""Content model store — the published, read-only view of all content.

Holds exactly one ``ContentModel`` at a time.  Every change replaces the
whole snapshot, so readers either see the previous value or the next
one, never a slice in between.  Listeners are notified after each
replacement.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sitesync.content.defaults import default_content_model
from sitesync.content.models import ContentModel

logger = logging.getLogger(__name__)

Listener = Callable[[ContentModel], None]
Unsubscribe = Callable[[], None]

SLICES: tuple[str, ...] = tuple(ContentModel.model_fields)


class ContentModelStore:
    """Snapshot holder with change listeners.

    Seeded with the compiled-in defaults, so it is fully populated from
    construction onward.
    """

    def __init__(self, initial: ContentModel | None = None) -> None:
        self._snapshot = initial if initial is not None else default_content_model()
        self._listeners: list[Listener] = []

    # ── Read operations ──────────────────────────────────────────

    @property
    def snapshot(self) -> ContentModel:
        """The current content model."""
        return self._snapshot

    def __getattr__(self, name: str) -> Any:
        # Convenience read access: ``store.services`` == ``store.snapshot.services``
        if name in SLICES:
            return getattr(self._snapshot, name)
        raise AttributeError(name)

    # ── Write operations ─────────────────────────────────────────

    def replace(self, **slices: Any) -> ContentModel:
        """Replace one or more slices atomically and notify listeners.

        Raises KeyError for an unknown slice name.
        """
        unknown = set(slices) - set(SLICES)
        if unknown:
            raise KeyError(", ".join(sorted(unknown)))
        self._snapshot = self._snapshot.model_copy(update=slices)
        self._notify()
        return self._snapshot

    def reset(self) -> ContentModel:
        """Restore every slice to its compiled-in default."""
        self._snapshot = default_content_model()
        self._notify()
        return self._snapshot

    # ── Listeners ────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snapshot = self._snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.warning("Content listener %r failed", listener, exc_info=True)
