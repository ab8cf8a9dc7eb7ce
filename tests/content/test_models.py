"""Tests for content entity models and the default catalog."""

import pytest
from pydantic import ValidationError

from sitesync.content import defaults
from sitesync.content.models import (
    BlogPost,
    BlogPostStatus,
    ContentModel,
    PortfolioProject,
    PricingPageId,
    ProjectCategory,
    ServiceCTAContent,
    ServiceChallengeContent,
    ServiceDetailContent,
    ServiceItem,
)


class TestEntityAliases:
    def test_accepts_camel_case_keys(self):
        post = BlogPost.model_validate({"id": "p1", "imageUrl": "/a.png", "createdAt": "2024-01-01T00:00:00.000Z"})
        assert post.image_url == "/a.png"
        assert post.created_at == "2024-01-01T00:00:00.000Z"

    def test_accepts_snake_case_keys(self):
        project = PortfolioProject(id="x", duration_days=14, showcase_images=["a.png"])
        assert project.duration_days == 14
        assert project.showcase_images == ("a.png",)

    def test_dumps_by_alias(self):
        data = PortfolioProject(id="x", duration_days=3).model_dump(by_alias=True)
        assert "durationDays" in data
        assert "duration_days" not in data

    def test_entities_are_frozen(self):
        item = ServiceItem(id="s")
        with pytest.raises(ValidationError):
            item.title = "changed"  # type: ignore[misc]


class TestLiteralFallbacks:
    def test_blog_post_defaults(self):
        post = BlogPost(id="p1")
        assert post.title == "Untitled Post"
        assert post.author == "Aurexis Solution"
        assert post.status == BlogPostStatus.DRAFT

    def test_project_defaults(self):
        project = PortfolioProject(id="x")
        assert project.category == ProjectCategory.WEB
        assert project.order is None
        assert project.featured is False

    def test_challenge_title_fallback(self):
        assert ServiceChallengeContent().title == "Challenges we solve"

    def test_cta_always_has_banner(self):
        banner = ServiceCTAContent().banner
        assert banner.heading == "Book a strategy call"
        assert banner.body == ""
        assert banner.primary_label == "Chat with us"
        assert banner.primary_link == "/contact"


class TestServiceDetailFromItem:
    def test_derives_detail_from_summary(self):
        item = ServiceItem(id="seo", title="SEO", description="Rank higher", features=["Audit", "Content"])
        detail = ServiceDetailContent.from_service_item(item)
        assert detail.id == "seo"
        assert detail.title == "SEO"
        assert detail.tagline == "Rank higher"
        assert detail.long_description == "Rank higher"
        assert detail.technologies == ("Audit", "Content")
        assert detail.benefits == ()
        assert detail.process == ()


class TestDefaultCatalog:
    def test_default_model_is_complete(self):
        model = defaults.default_content_model()
        assert isinstance(model, ContentModel)
        assert [s.id for s in model.services] == [s.id for s in defaults.SERVICES]
        assert len(model.testimonials) == 3
        assert len(model.pricing) == 3
        assert len(model.faqs) == 4
        assert model.projects == ()
        assert model.blog_posts == ()

    def test_every_pricing_page_has_a_default(self):
        model = defaults.default_content_model()
        assert set(model.pricing_pages) == set(PricingPageId)

    def test_ai_pricing_page_literals(self):
        page = defaults.DEFAULT_PRICING_PAGE_CONTENT[PricingPageId.AI]
        assert page.hero.eyebrow == "MAGNETIC AI PODS"
        assert page.hero.title == "Magnetic AI Automation"
        assert len(page.roi.sliders) == 4

    def test_service_details_match_services(self):
        service_ids = {s.id for s in defaults.SERVICES}
        assert set(defaults.SERVICE_DETAILS) <= service_ids

    def test_default_model_builds_fresh_containers(self):
        first = defaults.default_content_model()
        second = defaults.default_content_model()
        assert first.service_details is not second.service_details
        assert first.pricing_pages is not second.pricing_pages

    def test_nested_sequences_are_immutable(self):
        model = defaults.default_content_model()
        with pytest.raises(AttributeError):
            model.services[0].features.append("Leaked")  # type: ignore[attr-defined]
        with pytest.raises(AttributeError):
            model.pricing_pages[PricingPageId.AI].plans.append(None)  # type: ignore[attr-defined]
