"""Synchronization core — live subscriptions feeding the content model.

On activation the core opens one subscription per tracked collection
and singleton document.  Every snapshot is run through the merge engine
and replaces the matching slice of the content model in one step.
Subscription errors are logged and leave the last good slice in place.
Deactivation closes every subscription exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic import BaseModel

from sitesync.content import defaults
from sitesync.content.merge import (
    coerce_blog_post,
    coerce_entity,
    coerce_project,
    merge_pricing_page,
    merge_service_detail,
    merge_setting,
    service_detail_base,
    sort_blog_posts,
    sort_projects,
)
from sitesync.content.models import (
    FaqItem,
    PricingPageId,
    PricingTier,
    ServiceItem,
    Testimonial,
)
from sitesync.content.store import ContentModelStore
from sitesync.sync.adapters.base import DocumentSnapshot, RemoteRecord, RemoteStore, Unsubscribe
from sitesync.sync.paths import Collection, SettingKey, setting_path

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)
T = TypeVar("T")


class SyncCore:
    """Owns the live subscriptions for one session.

    Usable as a context manager::

        with SyncCore(store, model):
            ...  # model tracks the remote store
    """

    def __init__(self, store: RemoteStore, model: ContentModelStore) -> None:
        self._store = store
        self._model = model
        self._unsubscribers: list[tuple[str, Unsubscribe]] = []
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def subscription_count(self) -> int:
        return len(self._unsubscribers)

    # ── Lifecycle ────────────────────────────────────────────────

    def activate(self) -> None:
        """Open one subscription per tracked collection and setting.

        With an unavailable store no subscription is opened and the
        model keeps serving the compiled-in defaults.
        """
        if self._active:
            return
        self._active = True
        if not self._store.available:
            logger.info("Remote store unavailable; serving compiled-in defaults only")
            return

        collections: list[tuple[Collection, Callable[[list[RemoteRecord]], None]]] = [
            (Collection.SERVICES, self._on_services),
            (Collection.SERVICE_DETAILS, self._on_service_details),
            (Collection.TESTIMONIALS, self._on_testimonials),
            (Collection.PRICING_TIERS, self._on_pricing_tiers),
            (Collection.FAQS, self._on_faqs),
            (Collection.PRICING_PAGES, self._on_pricing_pages),
            (Collection.PROJECTS, self._on_projects),
            (Collection.BLOG_POSTS, self._on_blog_posts),
        ]
        settings: list[tuple[SettingKey, str, BaseModel]] = [
            (SettingKey.HOMEPAGE, "homepage_settings", defaults.DEFAULT_HOMEPAGE_SETTINGS),
            (SettingKey.HOMEPAGE_CONTENT, "homepage_content", defaults.DEFAULT_HOMEPAGE_CONTENT),
            (SettingKey.SOCIAL_LINKS, "social_links", defaults.DEFAULT_SOCIAL_LINKS),
            (SettingKey.ABOUT_PAGE, "about_page_settings", defaults.DEFAULT_ABOUT_PAGE_SETTINGS),
        ]

        for collection, handler in collections:
            self._open(str(collection), self._store.subscribe_collection, handler)
        for key, slice_name, default in settings:
            self._open(setting_path(key), self._store.subscribe_document, self._setting_handler(slice_name, default))
        logger.debug("Opened %d subscriptions", len(self._unsubscribers))

    def deactivate(self) -> None:
        """Close every open subscription."""
        self._active = False
        while self._unsubscribers:
            target, unsubscribe = self._unsubscribers.pop()
            try:
                unsubscribe()
            except Exception:
                logger.warning("Failed to unsubscribe from %s", target, exc_info=True)

    def __enter__(self) -> SyncCore:
        self.activate()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.deactivate()

    # ── Private helpers ──────────────────────────────────────────

    def _open(
        self,
        target: str,
        subscribe: Callable[[str, Callable[[Any], None], Callable[[Exception], None]], Unsubscribe],
        handler: Callable[[Any], None],
    ) -> None:
        try:
            unsubscribe = subscribe(target, self._guard(target, handler), self._on_error(target))
        except Exception:
            logger.warning("Unable to subscribe to %s", target, exc_info=True)
            return
        self._unsubscribers.append((target, unsubscribe))

    def _guard(self, target: str, handler: Callable[[Any], None]) -> Callable[[Any], None]:
        def _callback(snapshot: Any) -> None:
            if not self._active:
                logger.debug("Dropping %s snapshot after deactivation", target)
                return
            try:
                handler(snapshot)
            except Exception:
                logger.warning("Failed to apply %s snapshot; keeping previous content", target, exc_info=True)

        return _callback

    def _on_error(self, target: str) -> Callable[[Exception], None]:
        def _callback(error: Exception) -> None:
            logger.warning("Unable to load %s: %s", target, error)

        return _callback

    @staticmethod
    def _map_records(records: Iterable[RemoteRecord], build: Callable[[RemoteRecord], T]) -> list[T]:
        """Build one entity per record; a record that cannot be built is skipped."""
        items: list[T] = []
        for record in records:
            try:
                items.append(build(record))
            except Exception:
                logger.warning("Skipping malformed record %s", record.id, exc_info=True)
        return items

    def _catalog(self, records: list[RemoteRecord], model_cls: type[E]) -> tuple[E, ...]:
        """The remote collection verbatim; an empty snapshot clears the slice."""
        return tuple(self._map_records(records, lambda r: coerce_entity(model_cls, r.id, r.data)))

    # ── Snapshot handlers ────────────────────────────────────────

    def _on_services(self, records: list[RemoteRecord]) -> None:
        self._model.replace(services=self._catalog(records, ServiceItem))

    def _on_testimonials(self, records: list[RemoteRecord]) -> None:
        self._model.replace(testimonials=self._catalog(records, Testimonial))

    def _on_pricing_tiers(self, records: list[RemoteRecord]) -> None:
        self._model.replace(pricing=self._catalog(records, PricingTier))

    def _on_faqs(self, records: list[RemoteRecord]) -> None:
        self._model.replace(faqs=self._catalog(records, FaqItem))

    # Keyed pages start from the in-memory slice: a page absent from the
    # snapshot keeps its current value, a present one merges onto it.

    def _on_service_details(self, records: list[RemoteRecord]) -> None:
        snapshot = self._model.snapshot
        services = (*snapshot.services, *defaults.SERVICES)
        merged = dict(snapshot.service_details)
        for record in records:
            base = service_detail_base(record.id, snapshot.service_details, defaults.SERVICE_DETAILS, services)
            if base is None:
                logger.debug("Ignoring service detail for unknown service %s", record.id)
                continue
            try:
                merged[record.id] = merge_service_detail(base, record.data)
            except Exception:
                logger.warning("Skipping malformed service detail %s", record.id, exc_info=True)
        self._model.replace(service_details=merged)

    def _on_pricing_pages(self, records: list[RemoteRecord]) -> None:
        merged = {**defaults.DEFAULT_PRICING_PAGE_CONTENT, **self._model.snapshot.pricing_pages}
        for record in records:
            try:
                page_id = PricingPageId(record.id)
            except ValueError:
                logger.debug("Ignoring unknown pricing page %s", record.id)
                continue
            try:
                merged[page_id] = merge_pricing_page(merged[page_id], record.data)
            except Exception:
                logger.warning("Skipping malformed pricing page %s", record.id, exc_info=True)
        self._model.replace(pricing_pages=merged)

    def _on_projects(self, records: list[RemoteRecord]) -> None:
        projects = self._map_records(records, lambda r: coerce_project(r.id, r.data))
        self._model.replace(projects=sort_projects(projects))

    def _on_blog_posts(self, records: list[RemoteRecord]) -> None:
        posts = self._map_records(records, lambda r: coerce_blog_post(r.id, r.data))
        self._model.replace(blog_posts=sort_blog_posts(posts))

    def _setting_handler(self, slice_name: str, default: BaseModel) -> Callable[[DocumentSnapshot], None]:
        def _handler(snapshot: DocumentSnapshot) -> None:
            value = merge_setting(default, snapshot.data) if snapshot.exists else default
            self._model.replace(**{slice_name: value})

        return _handler
