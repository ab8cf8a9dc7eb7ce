"""Content domain models — pure Pydantic v2 data types.

Every entity the marketing site renders lives here: catalog entities
(services, pricing tiers, FAQs, testimonials, portfolio projects, blog
posts), singleton settings, and keyed pricing-page content.  Remote
documents use camelCase keys, so every model carries camelCase aliases
and accepts either spelling on input.

Models are frozen.  The content model is replaced, never mutated, so a
reader holding a snapshot never observes a half-applied change.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContentEntity(BaseModel):
    """Base for every content type: frozen, camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PricingPageId(StrEnum):
    """Fixed identifiers of the keyed pricing pages."""

    AI = "ai"
    WEB = "web"
    MARKETING = "marketing"


class BlogPostStatus(StrEnum):
    """Publication status of a blog post."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ProjectCategory(StrEnum):
    """Portfolio project category."""

    WEB = "web"
    MOBILE = "mobile"
    AI = "ai"
    AUTOMATION = "automation"


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


class ServiceItem(ContentEntity):
    """A service summary card."""

    id: str
    title: str = ""
    description: str = ""
    icon: str = ""
    features: tuple[str, ...] = ()
    price: str | None = None


class ProcessStep(ContentEntity):
    title: str = ""
    description: str = ""


class StatItem(ContentEntity):
    label: str = ""
    value: str = ""


class ContentCard(ContentEntity):
    title: str = ""
    description: str = ""
    icon: str | None = None


class ServiceHeroContent(ContentEntity):
    """Hero block of a service detail page."""

    badge: str | None = None
    headline: str | None = None
    highlight: str | None = None
    subheadline: str | None = None
    description: str | None = None
    stats: tuple[StatItem, ...] | None = None


class ServiceChallengeContent(ContentEntity):
    """Challenge block of a service detail page."""

    eyebrow: str | None = None
    title: str = "Challenges we solve"
    highlight: str | None = None
    description: str | None = None
    cards: tuple[ContentCard, ...] = ()


class ServiceCTABanner(ContentEntity):
    """Call-to-action banner; every required field has a literal fallback."""

    eyebrow: str | None = None
    heading: str = "Book a strategy call"
    body: str = ""
    primary_label: str = "Chat with us"
    primary_link: str = "/contact"
    secondary_label: str | None = None
    secondary_link: str | None = None


class ServiceCTAContent(ContentEntity):
    eyebrow: str | None = None
    title: str | None = None
    subtitle: str | None = None
    cards: tuple[ContentCard, ...] = ()
    banner: ServiceCTABanner = Field(default_factory=ServiceCTABanner)


class ServiceDetailContent(ServiceItem):
    """Full service detail page content."""

    tagline: str = ""
    long_description: str = ""
    benefits: tuple[str, ...] = ()
    process: tuple[ProcessStep, ...] = ()
    technologies: tuple[str, ...] = ()
    hero_content: ServiceHeroContent | None = None
    challenge_content: ServiceChallengeContent | None = None
    cta_content: ServiceCTAContent | None = None

    @classmethod
    def from_service_item(cls, item: ServiceItem) -> ServiceDetailContent:
        """Derive a minimal detail page from a service summary."""
        return cls(
            **item.model_dump(),
            tagline=item.description,
            long_description=item.description,
            benefits=(),
            process=(),
            technologies=tuple(item.features),
        )


# ---------------------------------------------------------------------------
# Other catalog entities
# ---------------------------------------------------------------------------


class Testimonial(ContentEntity):
    id: str
    name: str = ""
    role: str = ""
    company: str = ""
    content: str = ""
    rating: int = 5
    image: str = ""


class PricingTier(ContentEntity):
    id: str
    name: str = ""
    price: str = ""
    description: str = ""
    features: tuple[str, ...] = ()
    recommended: bool = False
    cta_label: str = "Get started"


class FaqItem(ContentEntity):
    id: str
    question: str = ""
    answer: str = ""
    category: str = "general"


class PortfolioProject(ContentEntity):
    """A portfolio case study.  ``order`` is None when never set."""

    id: str
    title: str = ""
    summary: str = ""
    category: ProjectCategory = ProjectCategory.WEB
    tech: tuple[str, ...] = ()
    duration_days: float = 0
    link: str = ""
    image: str = ""
    showcase_images: tuple[str, ...] = ()
    featured: bool = False
    order: float | None = None


class BlogPost(ContentEntity):
    """A blog post.  Timestamps are ISO-8601 strings, as stored remotely."""

    id: str
    title: str = "Untitled Post"
    slug: str = ""
    content: str = ""
    excerpt: str = ""
    author: str = "Aurexis Solution"
    image_url: str = ""
    status: BlogPostStatus = BlogPostStatus.DRAFT
    tags: tuple[str, ...] = ()
    generated_from: str = ""
    created_at: str = ""
    updated_at: str = ""


# ---------------------------------------------------------------------------
# Singleton settings
# ---------------------------------------------------------------------------


class HomepageSettings(ContentEntity):
    """Section toggles and layout flags for the homepage."""

    show_hero: bool = True
    show_services: bool = True
    show_portfolio: bool = True
    show_testimonials: bool = True
    show_pricing: bool = True
    show_faq: bool = True
    show_email_capture: bool = True
    email_capture_delay_seconds: int = 20
    featured_project_limit: int = 3


class HomepageContent(ContentEntity):
    """Editable homepage copy."""

    hero_badge: str = ""
    hero_title: str = ""
    hero_highlight: str = ""
    hero_subtitle: str = ""
    primary_cta_label: str = ""
    primary_cta_link: str = ""
    secondary_cta_label: str = ""
    secondary_cta_link: str = ""
    stats: tuple[StatItem, ...] = ()


class SocialLinks(ContentEntity):
    facebook: str = ""
    instagram: str = ""
    linkedin: str = ""
    twitter: str = ""
    youtube: str = ""
    tiktok: str = ""
    whatsapp: str = ""
    email: str = ""


class AboutPageSettings(ContentEntity):
    hero_title: str = ""
    hero_subtitle: str = ""
    story: str = ""
    mission: str = ""
    vision: str = ""
    values: tuple[ContentCard, ...] = ()
    stats: tuple[StatItem, ...] = ()
    team_image: str = ""
    show_team: bool = True


# ---------------------------------------------------------------------------
# Pricing pages
# ---------------------------------------------------------------------------


class PricingHeroCtas(ContentEntity):
    primary_label: str | None = None
    primary_link: str | None = None
    secondary_label: str | None = None
    secondary_link: str | None = None


class PricingHero(ContentEntity):
    eyebrow: str | None = None
    badge: str | None = None
    title: str | None = None
    highlight: str | None = None
    subtitle: str | None = None
    bullets: tuple[str, ...] = ()
    chips: tuple[str, ...] = ()
    metrics: tuple[StatItem, ...] = ()
    ctas: PricingHeroCtas = Field(default_factory=PricingHeroCtas)


class PricingMetricBubble(ContentEntity):
    label: str = ""
    value: str = ""
    caption: str = ""


class PricingPlan(ContentEntity):
    id: str = ""
    name: str = ""
    price: str = ""
    period: str = ""
    description: str = ""
    features: tuple[str, ...] = ()
    highlighted: bool = False
    cta_label: str = ""
    cta_link: str = ""


class PricingFaqItem(ContentEntity):
    question: str = ""
    answer: str = ""


class RoiSlider(ContentEntity):
    id: str
    label: str = ""
    min: float = 0
    max: float = 100
    step: float = 1
    default_value: float | None = None
    unit_prefix: str | None = None
    unit_suffix: str | None = None
    format: str | None = None


class RoiConfig(ContentEntity):
    title: str | None = None
    description: str | None = None
    sliders: tuple[RoiSlider, ...] = ()


class PricingPageContent(ContentEntity):
    """Content aggregate for one keyed pricing page."""

    hero: PricingHero = Field(default_factory=PricingHero)
    metric_bubbles: tuple[PricingMetricBubble, ...] = ()
    plans: tuple[PricingPlan, ...] = ()
    faqs: tuple[PricingFaqItem, ...] = ()
    roi: RoiConfig = Field(default_factory=RoiConfig)
    updated_at: str = ""


# ---------------------------------------------------------------------------
# Published snapshot
# ---------------------------------------------------------------------------


class ContentModel(ContentEntity):
    """The published, always-complete snapshot of every tracked entity group."""

    services: tuple[ServiceItem, ...] = ()
    testimonials: tuple[Testimonial, ...] = ()
    pricing: tuple[PricingTier, ...] = ()
    faqs: tuple[FaqItem, ...] = ()
    service_details: dict[str, ServiceDetailContent] = Field(default_factory=dict)
    homepage_settings: HomepageSettings = Field(default_factory=HomepageSettings)
    homepage_content: HomepageContent = Field(default_factory=HomepageContent)
    social_links: SocialLinks = Field(default_factory=SocialLinks)
    about_page_settings: AboutPageSettings = Field(default_factory=AboutPageSettings)
    pricing_pages: dict[PricingPageId, PricingPageContent] = Field(default_factory=dict)
    projects: tuple[PortfolioProject, ...] = ()
    blog_posts: tuple[BlogPost, ...] = ()
