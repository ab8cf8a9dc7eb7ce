"""Mutation gateway — optimistic local writes followed by remote persistence.

Every mutation method is a plain method, not a coroutine.  It applies
the change to the content model before returning, then schedules the
remote write and hands back the ``asyncio.Task`` for it:

    task = gateway.update_service("web-development", {"benefits": ["Fast"]})
    model.snapshot.service_details["web-development"].benefits  # ("Fast",) already
    await task  # raises if the remote write failed and the group re-raises

Local changes are never rolled back.  Until the next snapshot arrives
the optimistic value is treated as the truth, whatever the remote write
did.  Methods must be called from inside a running event loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

from sitesync.content import defaults
from sitesync.content.merge import (
    changed_payload,
    coerce_entity,
    merge_model,
    merge_pricing_page,
    merge_service_detail,
    service_detail_base,
    slugify,
    sort_blog_posts,
    sort_projects,
    to_document,
    to_raw,
    utc_now_iso,
)
from sitesync.content.models import (
    BlogPost,
    FaqItem,
    PortfolioProject,
    PricingPageId,
    Testimonial,
)
from sitesync.content.store import ContentModelStore
from sitesync.state import clear_local_state
from sitesync.sync.adapters.base import RemoteStore, local_id
from sitesync.sync.paths import Collection, SettingKey, doc_path, setting_path
from sitesync.sync.policy import EntityGroup, GroupPolicy, resolve_policies

logger = logging.getLogger(__name__)

Data = Mapping[str, Any]
WriteFactory = Callable[[], Awaitable[Any]]


class MutationGateway:
    """Typed update/add/delete operations over the content model."""

    def __init__(
        self,
        store: RemoteStore,
        model: ContentModelStore,
        *,
        policies: Mapping[EntityGroup, GroupPolicy] | None = None,
        state_dir: Path | None = None,
    ) -> None:
        self._store = store
        self._model = model
        self._policies = dict(policies) if policies is not None else resolve_policies()
        self._state_dir = state_dir
        self._warned: set[tuple[EntityGroup, str]] = set()
        self._session_ready = False
        self._session_lock: asyncio.Lock | None = None
        self._pending: set[asyncio.Task[None]] = set()

    def policy(self, group: EntityGroup) -> GroupPolicy:
        return self._policies.get(group, GroupPolicy())

    @property
    def pending(self) -> int:
        """Number of remote writes still in flight."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every in-flight remote write.

        Failures are not raised here; they were logged when they happened
        and are still available from the task returned by the mutation.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ── Services ─────────────────────────────────────────────────

    def update_service(self, service_id: str, data: Data) -> asyncio.Task[None]:
        """Update a service summary and its detail page.

        The same payload is written to ``services/{id}`` and
        ``serviceDetails/{id}``.
        """
        raw = to_raw(data)
        snapshot = self._model.snapshot
        services = tuple(
            merge_model(item, raw) if item.id == service_id else item for item in snapshot.services
        )
        details = dict(snapshot.service_details)
        base = service_detail_base(
            service_id, details, defaults.SERVICE_DETAILS, (*snapshot.services, *defaults.SERVICES)
        )
        if base is not None:
            details[service_id] = merge_service_detail(base, raw)
        self._model.replace(services=services, service_details=details)

        source = details.get(service_id) or next((s for s in services if s.id == service_id), None)
        payload = changed_payload(source, raw) if source is not None else raw

        async def _write() -> None:
            await asyncio.gather(
                self._store.upsert(doc_path(Collection.SERVICES, service_id), payload),
                self._store.upsert(doc_path(Collection.SERVICE_DETAILS, service_id), payload),
            )

        return self._commit(EntityGroup.SERVICES, "update", f"service {service_id}", _write)

    # ── Testimonials ─────────────────────────────────────────────

    def add_testimonial(self, data: Data) -> asyncio.Task[None]:
        return self._add_catalog(EntityGroup.TESTIMONIALS, "testimonials", Testimonial, Collection.TESTIMONIALS, data)

    def update_testimonial(self, testimonial_id: str, data: Data) -> asyncio.Task[None]:
        return self._update_catalog(
            EntityGroup.TESTIMONIALS, "testimonials", Collection.TESTIMONIALS, testimonial_id, data
        )

    def delete_testimonial(self, testimonial_id: str) -> asyncio.Task[None]:
        return self._delete_catalog(EntityGroup.TESTIMONIALS, "testimonials", Collection.TESTIMONIALS, testimonial_id)

    # ── Pricing tiers ────────────────────────────────────────────

    def update_pricing(self, tier_id: str, data: Data) -> asyncio.Task[None]:
        return self._update_catalog(EntityGroup.PRICING, "pricing", Collection.PRICING_TIERS, tier_id, data)

    # ── FAQs ─────────────────────────────────────────────────────

    def add_faq(self, data: Data) -> asyncio.Task[None]:
        return self._add_catalog(EntityGroup.FAQS, "faqs", FaqItem, Collection.FAQS, data)

    def update_faq(self, faq_id: str, data: Data) -> asyncio.Task[None]:
        return self._update_catalog(EntityGroup.FAQS, "faqs", Collection.FAQS, faq_id, data)

    def delete_faq(self, faq_id: str) -> asyncio.Task[None]:
        return self._delete_catalog(EntityGroup.FAQS, "faqs", Collection.FAQS, faq_id)

    # ── Pricing pages ────────────────────────────────────────────

    def update_pricing_page(self, page_id: PricingPageId | str, data: Data) -> asyncio.Task[None]:
        """Merge *data* into one pricing page and stamp its ``updatedAt``.

        Raises ValueError for an unknown page id.
        """
        page_id = PricingPageId(page_id)
        raw = to_raw(data)
        timestamp = utc_now_iso()
        pages = dict(self._model.snapshot.pricing_pages)
        current = pages.get(page_id, defaults.DEFAULT_PRICING_PAGE_CONTENT[page_id])
        updated = merge_pricing_page(current, raw).model_copy(update={"updated_at": timestamp})
        pages[page_id] = updated
        self._model.replace(pricing_pages=pages)

        payload = changed_payload(updated, raw, "updated_at")
        return self._commit(
            EntityGroup.PRICING_PAGES,
            "update",
            f"pricing page {page_id}",
            lambda: self._store.upsert(doc_path(Collection.PRICING_PAGES, page_id), payload),
        )

    # ── Singleton settings ───────────────────────────────────────

    def update_homepage_settings(self, data: Data) -> asyncio.Task[None]:
        return self._update_setting(EntityGroup.HOMEPAGE_SETTINGS, "homepage_settings", SettingKey.HOMEPAGE, data)

    def update_homepage_content(self, data: Data) -> asyncio.Task[None]:
        return self._update_setting(
            EntityGroup.HOMEPAGE_CONTENT, "homepage_content", SettingKey.HOMEPAGE_CONTENT, data
        )

    def update_social_links(self, data: Data) -> asyncio.Task[None]:
        return self._update_setting(EntityGroup.SOCIAL_LINKS, "social_links", SettingKey.SOCIAL_LINKS, data)

    def update_about_page_settings(self, data: Data) -> asyncio.Task[None]:
        return self._update_setting(
            EntityGroup.ABOUT_PAGE_SETTINGS, "about_page_settings", SettingKey.ABOUT_PAGE, data
        )

    # ── Projects ─────────────────────────────────────────────────

    def add_project(self, data: Data) -> asyncio.Task[None]:
        """Insert a project; ``order`` defaults to the current project count."""
        projects = self._model.snapshot.projects
        project_id = self._new_id(EntityGroup.PROJECTS, Collection.PROJECTS)
        project = coerce_entity(PortfolioProject, project_id, to_raw(data), base=PortfolioProject(
            id=project_id, order=len(projects)
        ))
        self._model.replace(projects=sort_projects((*projects, project)))

        document = to_document(project)
        return self._commit(
            EntityGroup.PROJECTS,
            "add",
            f"project {project_id}",
            lambda: self._store.upsert(doc_path(Collection.PROJECTS, project_id), document),
        )

    def update_project(self, project_id: str, data: Data) -> asyncio.Task[None]:
        raw = to_raw(data)
        projects = self._model.snapshot.projects
        updated = tuple(merge_model(p, raw) if p.id == project_id else p for p in projects)
        self._model.replace(projects=sort_projects(updated))

        target = next((p for p in updated if p.id == project_id), None)
        payload = changed_payload(target, raw) if target is not None else raw
        return self._commit(
            EntityGroup.PROJECTS,
            "update",
            f"project {project_id}",
            lambda: self._store.upsert(doc_path(Collection.PROJECTS, project_id), payload),
        )

    def delete_project(self, project_id: str) -> asyncio.Task[None]:
        projects = self._model.snapshot.projects
        self._model.replace(projects=tuple(p for p in projects if p.id != project_id))
        return self._commit(
            EntityGroup.PROJECTS,
            "delete",
            f"project {project_id}",
            lambda: self._store.delete(doc_path(Collection.PROJECTS, project_id)),
        )

    # ── Blog posts ───────────────────────────────────────────────

    def add_blog_post(self, data: Data) -> asyncio.Task[None]:
        """Insert a post, deriving its slug and timestamps before either write."""
        raw = to_raw(data)
        post_id = self._new_id(EntityGroup.BLOG_POSTS, Collection.BLOG_POSTS)
        timestamp = utc_now_iso()
        post = coerce_entity(BlogPost, post_id, raw)
        slug = post.slug.strip() or slugify(post.title or post_id) or post_id
        post = post.model_copy(update={"slug": slug, "created_at": timestamp, "updated_at": timestamp})
        self._model.replace(blog_posts=sort_blog_posts((*self._model.snapshot.blog_posts, post)))

        document = to_document(post)
        return self._commit(
            EntityGroup.BLOG_POSTS,
            "add",
            f"blog post {post_id}",
            lambda: self._store.upsert(doc_path(Collection.BLOG_POSTS, post_id), document),
        )

    def update_blog_post(self, post_id: str, data: Data) -> asyncio.Task[None]:
        """Update a post; a blank slug keeps the current one, ``updatedAt`` is restamped."""
        raw = to_raw(data)
        timestamp = utc_now_iso()
        slug_given = str(raw.get("slug") or "").strip()
        updated_post: BlogPost | None = None
        posts = []
        for post in self._model.snapshot.blog_posts:
            if post.id == post_id:
                current_slug = post.slug
                post = merge_model(post, raw)
                post = post.model_copy(update={"slug": slug_given or current_slug, "updated_at": timestamp})
                updated_post = post
            posts.append(post)
        self._model.replace(blog_posts=sort_blog_posts(posts))

        if updated_post is not None:
            payload = changed_payload(updated_post, raw, "updated_at")
        else:
            payload = {**raw, "updatedAt": timestamp}
        if not slug_given:
            payload.pop("slug", None)
        return self._commit(
            EntityGroup.BLOG_POSTS,
            "update",
            f"blog post {post_id}",
            lambda: self._store.upsert(doc_path(Collection.BLOG_POSTS, post_id), payload),
        )

    def delete_blog_post(self, post_id: str) -> asyncio.Task[None]:
        posts = self._model.snapshot.blog_posts
        self._model.replace(blog_posts=tuple(p for p in posts if p.id != post_id))
        return self._commit(
            EntityGroup.BLOG_POSTS,
            "delete",
            f"blog post {post_id}",
            lambda: self._store.delete(doc_path(Collection.BLOG_POSTS, post_id)),
        )

    # ── Reset ────────────────────────────────────────────────────

    def reset_data(self) -> None:
        """Restore every slice to its default and clear persisted local-only state."""
        self._model.reset()
        if self._state_dir is not None:
            clear_local_state(self._state_dir)
        logger.info("Content reset to compiled-in defaults")

    # ── Private helpers ──────────────────────────────────────────

    def _new_id(self, group: EntityGroup, collection: Collection) -> str:
        if self._store.available and self.policy(group).persist:
            return self._store.new_id(collection)
        return local_id()

    def _add_catalog(
        self, group: EntityGroup, slice_name: str, model_cls: type, collection: Collection, data: Data
    ) -> asyncio.Task[None]:
        entity_id = self._new_id(group, collection)
        entity = coerce_entity(model_cls, entity_id, to_raw(data))
        items = getattr(self._model.snapshot, slice_name)
        self._model.replace(**{slice_name: (*items, entity)})

        document = to_document(entity)
        return self._commit(
            group,
            "add",
            f"{slice_name} {entity_id}",
            lambda: self._store.upsert(doc_path(collection, entity_id), document),
        )

    def _update_catalog(
        self, group: EntityGroup, slice_name: str, collection: Collection, entity_id: str, data: Data
    ) -> asyncio.Task[None]:
        raw = to_raw(data)
        items = tuple(
            merge_model(item, raw) if item.id == entity_id else item
            for item in getattr(self._model.snapshot, slice_name)
        )
        self._model.replace(**{slice_name: items})

        target = next((item for item in items if item.id == entity_id), None)
        payload = changed_payload(target, raw) if target is not None else raw
        return self._commit(
            group,
            "update",
            f"{slice_name} {entity_id}",
            lambda: self._store.upsert(doc_path(collection, entity_id), payload),
        )

    def _delete_catalog(
        self, group: EntityGroup, slice_name: str, collection: Collection, entity_id: str
    ) -> asyncio.Task[None]:
        items = getattr(self._model.snapshot, slice_name)
        self._model.replace(**{slice_name: tuple(item for item in items if item.id != entity_id)})
        return self._commit(
            group,
            "delete",
            f"{slice_name} {entity_id}",
            lambda: self._store.delete(doc_path(collection, entity_id)),
        )

    def _update_setting(
        self, group: EntityGroup, slice_name: str, key: SettingKey, data: Data
    ) -> asyncio.Task[None]:
        raw = to_raw(data)
        updated = merge_model(getattr(self._model.snapshot, slice_name), raw)
        self._model.replace(**{slice_name: updated})

        payload = changed_payload(updated, raw)
        return self._commit(
            group,
            "update",
            slice_name.replace("_", " "),
            lambda: self._store.upsert(setting_path(key), payload),
        )

    def _commit(self, group: EntityGroup, operation: str, label: str, write: WriteFactory) -> asyncio.Task[None]:
        """Schedule the remote half of a mutation whose local half is already applied."""
        loop = asyncio.get_running_loop()
        task = loop.create_task(self._persist(group, operation, label, write))
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        # Failures were already logged by _persist; retrieving the
        # exception keeps dropped tasks from being reported again.
        if not task.cancelled():
            task.exception()

    async def _persist(self, group: EntityGroup, operation: str, label: str, write: WriteFactory) -> None:
        policy = self.policy(group)
        if not policy.persist:
            logger.debug("%s is local-only; not persisting %s", group, label)
            return
        if not self._store.available:
            if (group, operation) not in self._warned:
                self._warned.add((group, operation))
                logger.warning("Remote store is not configured. %s changes are only applied locally.", group)
            return

        try:
            await self._ensure_session()
            await write()
        except Exception:
            logger.warning("Unable to persist %s", label, exc_info=True)
            if policy.raise_on_failure:
                raise

    async def _ensure_session(self) -> None:
        if self._session_ready:
            return
        if self._session_lock is None:
            self._session_lock = asyncio.Lock()
        async with self._session_lock:
            if not self._session_ready:
                await self._store.ensure_session()
                self._session_ready = True
