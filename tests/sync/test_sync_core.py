"""Tests for the synchronization core."""

from unittest.mock import MagicMock

import pytest

from sitesync.content import defaults
from sitesync.content.models import PricingPageId
from sitesync.content.store import ContentModelStore
from sitesync.sync.adapters.base import RemoteRecord
from sitesync.sync.adapters.memory import MemoryStore
from sitesync.sync.adapters.null import NullStore
from sitesync.sync.core import SyncCore

TRACKED_TARGETS = 12


def _core(documents: dict | None = None) -> tuple[SyncCore, MemoryStore, ContentModelStore]:
    store = MemoryStore(documents)
    model = ContentModelStore()
    return SyncCore(store, model), store, model


class TestLifecycle:
    def test_activate_opens_every_subscription(self):
        core, store, _ = _core()
        core.activate()
        assert core.active
        assert core.subscription_count == TRACKED_TARGETS
        assert store.subscription_count == TRACKED_TARGETS

    def test_activate_is_idempotent(self):
        core, store, _ = _core()
        core.activate()
        core.activate()
        assert store.subscription_count == TRACKED_TARGETS

    def test_deactivate_closes_every_subscription(self):
        core, store, _ = _core()
        core.activate()
        core.deactivate()
        assert not core.active
        assert store.subscription_count == 0
        core.deactivate()

    def test_context_manager(self):
        core, store, _ = _core()
        with core:
            assert store.subscription_count == TRACKED_TARGETS
        assert store.subscription_count == 0

    def test_unavailable_store_opens_nothing(self):
        model = ContentModelStore()
        core = SyncCore(NullStore(), model)
        core.activate()
        assert core.subscription_count == 0
        assert model.snapshot.services == defaults.SERVICES

    def test_failed_unsubscribe_is_logged(self, caplog):
        store = MagicMock()
        store.available = True
        broken = MagicMock(side_effect=RuntimeError("gone"))
        store.subscribe_collection.return_value = broken
        store.subscribe_document.return_value = broken
        core = SyncCore(store, ContentModelStore())
        core.activate()
        core.deactivate()
        assert broken.call_count == TRACKED_TARGETS
        assert "Failed to unsubscribe" in caplog.text

    @pytest.mark.asyncio
    async def test_snapshots_after_deactivate_are_dropped(self):
        core, store, model = _core()
        core.activate()
        callback = store._collection_subs["faqs"][0][0]
        core.deactivate()

        callback([RemoteRecord(id="late", data={"question": "Late"})])
        await store.upsert("faqs/late", {"question": "Late"})

        assert "late" not in [f.id for f in model.snapshot.faqs]


class TestCatalogSnapshots:
    def test_seeded_defaults_until_first_snapshot(self):
        model = ContentModelStore()
        assert model.snapshot.services == defaults.SERVICES
        assert "late" not in [f.id for f in model.snapshot.faqs]

    def test_empty_collections_clear_catalog(self):
        core, _, model = _core()
        core.activate()
        assert model.snapshot.services == ()
        assert model.snapshot.testimonials == ()
        assert model.snapshot.pricing == ()
        assert model.snapshot.faqs == ()

    def test_remote_records_replace_catalog(self):
        core, _, model = _core({"faqs": {"q1": {"question": "Remote?", "answer": "Yes"}}})
        core.activate()
        assert [f.id for f in model.snapshot.faqs] == ["q1"]
        assert model.snapshot.faqs[0].category == "general"

    def test_fields_missing_remotely_take_model_defaults(self):
        core, _, model = _core(
            {
                "services": {"web-development": {"title": "Websites"}},
                "testimonials": {"t1": {"name": "Remote"}},
            }
        )
        core.activate()
        (service,) = model.snapshot.services
        assert service.title == "Websites"
        assert service.features == ()
        (testimonial,) = model.snapshot.testimonials
        assert testimonial.name == "Remote"
        assert testimonial.content == ""

    @pytest.mark.asyncio
    async def test_deleting_last_remote_record_empties_catalog(self):
        core, store, model = _core({"pricingTiers": {"solo": {"name": "Solo"}}})
        core.activate()
        assert [t.id for t in model.snapshot.pricing] == ["solo"]

        await store.delete("pricingTiers/solo")
        assert model.snapshot.pricing == ()

    def test_services_error_before_first_snapshot_keeps_defaults(self):
        store = MagicMock()
        store.available = True
        model = ContentModelStore()
        core = SyncCore(store, model)
        core.activate()

        on_error = next(
            call.args[2] for call in store.subscribe_collection.call_args_list if call.args[0] == "services"
        )
        on_error(RuntimeError("permission denied"))
        assert model.snapshot.services == defaults.SERVICES

    def test_error_after_update_keeps_last_good_value(self):
        core, store, model = _core({"faqs": {"q1": {"question": "Remote?"}}})
        core.activate()
        store.emit_error("faqs", RuntimeError("offline"))
        assert [f.id for f in model.snapshot.faqs] == ["q1"]


class TestServiceDetails:
    def test_partial_hero_override_keeps_sibling_fields(self):
        core, _, model = _core({"serviceDetails": {"web-development": {"heroContent": {"badge": "X"}}}})
        core.activate()
        hero = model.snapshot.service_details["web-development"].hero_content
        assert hero.badge == "X"
        assert hero.headline == defaults.SERVICE_DETAILS["web-development"].hero_content.headline

    def test_detail_for_service_without_default_is_derived(self):
        core, _, model = _core({"serviceDetails": {"mobile-apps": {"tagline": "Apps"}}})
        core.activate()
        detail = model.snapshot.service_details["mobile-apps"]
        assert detail.tagline == "Apps"
        assert detail.technologies == defaults.SERVICES[3].features

    def test_detail_for_unknown_service_is_ignored(self):
        core, _, model = _core({"serviceDetails": {"ghost": {"tagline": "Boo"}}})
        core.activate()
        assert "ghost" not in model.snapshot.service_details
        assert set(model.snapshot.service_details) == set(defaults.SERVICE_DETAILS)

    @pytest.mark.asyncio
    async def test_detail_missing_from_snapshot_keeps_local_value(self):
        core, store, model = _core()
        core.activate()
        details = dict(model.snapshot.service_details)
        details["web-development"] = details["web-development"].model_copy(update={"tagline": "Local"})
        model.replace(service_details=details)

        await store.upsert("serviceDetails/ai-automation", {"tagline": "Remote"})

        assert model.snapshot.service_details["web-development"].tagline == "Local"
        assert model.snapshot.service_details["ai-automation"].tagline == "Remote"


class TestPricingPages:
    def test_known_page_merges(self):
        core, _, model = _core({"pricingPages": {"ai": {"hero": {"title": "Remote title"}}}})
        core.activate()
        page = model.snapshot.pricing_pages[PricingPageId.AI]
        assert page.hero.title == "Remote title"
        assert page.hero.eyebrow == "MAGNETIC AI PODS"

    def test_unknown_page_is_ignored(self):
        core, _, model = _core({"pricingPages": {"crypto": {"hero": {"title": "No"}}}})
        core.activate()
        assert set(model.snapshot.pricing_pages) == set(PricingPageId)

    @pytest.mark.asyncio
    async def test_snapshot_merges_onto_in_memory_page(self):
        core, store, model = _core({"pricingPages": {"web": {"hero": {"title": "Remote"}}}})
        core.activate()
        pages = dict(model.snapshot.pricing_pages)
        pages[PricingPageId.WEB] = pages[PricingPageId.WEB].model_copy(update={"updated_at": "local"})
        pages[PricingPageId.AI] = pages[PricingPageId.AI].model_copy(update={"updated_at": "local"})
        model.replace(pricing_pages=pages)

        await store.upsert("pricingPages/web", {"hero": {"subtitle": "Sub"}})

        web = model.snapshot.pricing_pages[PricingPageId.WEB]
        assert web.hero.title == "Remote"
        assert web.hero.subtitle == "Sub"
        assert web.updated_at == "local"
        assert model.snapshot.pricing_pages[PricingPageId.AI].updated_at == "local"


class TestProjectsAndPosts:
    def test_projects_sorted_by_order(self):
        core, _, model = _core(
            {
                "projects": {
                    "b": {"title": "B", "order": 2},
                    "a": {"title": "A", "order": 1},
                    "c": {"title": "C"},
                }
            }
        )
        core.activate()
        assert [p.id for p in model.snapshot.projects] == ["a", "b", "c"]

    def test_empty_projects_collection_is_empty(self):
        core, _, model = _core()
        core.activate()
        assert model.snapshot.projects == ()

    def test_blog_posts_newest_first_with_defaults(self):
        core, _, model = _core(
            {
                "blogPosts": {
                    "old": {"title": "Old", "createdAt": "2023-01-01T00:00:00.000Z"},
                    "new": {"createdAt": "2024-06-01T00:00:00.000Z"},
                }
            }
        )
        core.activate()
        posts = model.snapshot.blog_posts
        assert [p.id for p in posts] == ["new", "old"]
        assert posts[0].title == "Untitled Post"
        assert posts[0].slug == "new"
        assert posts[0].updated_at == "2024-06-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_remote_delete_is_reflected(self):
        core, store, model = _core({"projects": {"p1": {"title": "A"}}})
        core.activate()
        await store.delete("projects/p1")
        assert model.snapshot.projects == ()


class TestSettings:
    def test_missing_setting_document_uses_default(self):
        core, _, model = _core()
        core.activate()
        assert model.snapshot.homepage_settings == defaults.DEFAULT_HOMEPAGE_SETTINGS
        assert model.snapshot.social_links == defaults.DEFAULT_SOCIAL_LINKS

    def test_setting_document_merges_over_default(self):
        core, _, model = _core({"siteSettings": {"homepage": {"showFaq": False}}})
        core.activate()
        settings = model.snapshot.homepage_settings
        assert settings.show_faq is False
        assert settings.show_hero is True

    @pytest.mark.asyncio
    async def test_deleted_setting_falls_back_to_default(self):
        core, store, model = _core({"siteSettings": {"socialLinks": {"instagram": "https://ig.example"}}})
        core.activate()
        assert model.snapshot.social_links.instagram == "https://ig.example"

        await store.delete("siteSettings/socialLinks")
        assert model.snapshot.social_links == defaults.DEFAULT_SOCIAL_LINKS
