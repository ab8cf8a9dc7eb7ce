"""Default content catalog compiled into the package.

Every singleton setting and keyed pricing page has a complete default
here, so the content model is renderable before (or without) any remote
store.  Services, testimonials, pricing tiers and FAQs also ship a
starter set that is shown until the remote store supplies its own.
"""

from __future__ import annotations

from sitesync.content.models import (
    AboutPageSettings,
    ContentCard,
    ContentModel,
    FaqItem,
    HomepageContent,
    HomepageSettings,
    PricingFaqItem,
    PricingHero,
    PricingHeroCtas,
    PricingMetricBubble,
    PricingPageContent,
    PricingPageId,
    PricingPlan,
    PricingTier,
    ProcessStep,
    RoiConfig,
    RoiSlider,
    ServiceChallengeContent,
    ServiceCTABanner,
    ServiceCTAContent,
    ServiceDetailContent,
    ServiceHeroContent,
    ServiceItem,
    SocialLinks,
    StatItem,
    Testimonial,
)

BOOKING_LINK = "https://calendly.com/admin-aurexissolution/30min"

# ---------------------------------------------------------------------------
# Catalog entities
# ---------------------------------------------------------------------------

SERVICES: tuple[ServiceItem, ...] = (
    ServiceItem(
        id="web-development",
        title="Web Development",
        description="Conversion-focused websites and web apps built for speed and scale.",
        icon="Code",
        features=["React & Next.js", "Headless CMS", "Core Web Vitals tuning", "Analytics setup"],
        price="From RM 3,500",
    ),
    ServiceItem(
        id="ai-automation",
        title="AI Automation",
        description="Agent pods that qualify leads, answer customers and run back-office workflows.",
        icon="Bot",
        features=["WhatsApp & web chat agents", "CRM integrations", "Workflow orchestration"],
        price="From RM 4,999",
    ),
    ServiceItem(
        id="digital-marketing",
        title="Digital Marketing",
        description="Performance campaigns and content engines that turn traffic into pipeline.",
        icon="Megaphone",
        features=["Paid social", "Search ads", "SEO content", "Monthly reporting"],
        price="From RM 2,200 / month",
    ),
    ServiceItem(
        id="mobile-apps",
        title="Mobile Apps",
        description="Cross-platform mobile apps with offline support and push engagement.",
        icon="Smartphone",
        features=["React Native", "App store launch", "Push notifications"],
    ),
)

SERVICE_DETAILS: dict[str, ServiceDetailContent] = {
    "web-development": ServiceDetailContent(
        **SERVICES[0].model_dump(),
        tagline="Websites that load fast and sell faster.",
        long_description=(
            "We design and build marketing sites and web applications that are easy "
            "to edit, rank well and convert visitors into booked calls."
        ),
        benefits=[
            "Sub-second page loads on mobile",
            "Editable content without a developer",
            "Built-in lead capture and analytics",
        ],
        process=[
            ProcessStep(title="Discovery", description="Goals, audience and content audit."),
            ProcessStep(title="Design", description="Wireframes and a clickable prototype."),
            ProcessStep(title="Build", description="Component library and CMS wiring."),
            ProcessStep(title="Launch", description="QA, performance pass and handover."),
        ],
        technologies=["React", "TypeScript", "Tailwind CSS", "Firebase"],
        hero_content=ServiceHeroContent(
            badge="Web Development",
            headline="Websites engineered",
            highlight="to convert",
            subheadline="From landing pages to full web platforms.",
            description="Design, build and launch in weeks, not quarters.",
            stats=[
                StatItem(label="Avg. load time", value="0.8s"),
                StatItem(label="Projects shipped", value="60+"),
            ],
        ),
        challenge_content=ServiceChallengeContent(
            eyebrow="Why teams call us",
            title="Challenges we solve",
            cards=[
                ContentCard(title="Slow sites", description="Visitors leave before the page paints."),
                ContentCard(title="Locked content", description="Every copy change needs a developer."),
            ],
        ),
        cta_content=ServiceCTAContent(
            title="Ready to rebuild?",
            banner=ServiceCTABanner(
                heading="Book a strategy call",
                body="Walk us through your current site and goals.",
                primary_label="Chat with us",
                primary_link="/contact",
            ),
        ),
    ),
    "ai-automation": ServiceDetailContent(
        **SERVICES[1].model_dump(),
        tagline="Automation that works the night shift.",
        long_description=(
            "We deploy AI agents across your sales and operations channels, wired "
            "into the tools you already use and governed by human approvals."
        ),
        benefits=[
            "Leads answered in seconds, around the clock",
            "Fewer manual handoffs between tools",
            "Audit trail for every automated action",
        ],
        process=[
            ProcessStep(title="Blueprint", description="Map workflows worth automating."),
            ProcessStep(title="Pilot", description="One agent pod live in two weeks."),
            ProcessStep(title="Scale", description="Roll out across channels with guardrails."),
        ],
        technologies=["OpenAI", "n8n", "HubSpot", "WhatsApp Business API"],
        hero_content=ServiceHeroContent(
            badge="AI Automation",
            headline="Agent pods for",
            highlight="revenue teams",
            subheadline="Qualify, follow up and report without adding headcount.",
        ),
        challenge_content=ServiceChallengeContent(
            cards=[
                ContentCard(title="Missed leads", description="Enquiries arrive after hours."),
                ContentCard(title="Copy-paste ops", description="Data moved by hand between tools."),
            ],
        ),
        cta_content=ServiceCTAContent(
            banner=ServiceCTABanner(
                heading="See an agent pod live",
                primary_label="Book AI Pricing Lab",
                primary_link=BOOKING_LINK,
            ),
        ),
    ),
}

TESTIMONIALS: tuple[Testimonial, ...] = (
    Testimonial(
        id="t1",
        name="Aisha Rahman",
        role="Founder",
        company="Bloom Botanics",
        content="Our new site doubled enquiries in the first month.",
        rating=5,
    ),
    Testimonial(
        id="t2",
        name="Daniel Tan",
        role="Head of Sales",
        company="Northwind Logistics",
        content="The WhatsApp agent answers leads before our team is awake.",
        rating=5,
    ),
    Testimonial(
        id="t3",
        name="Priya Nair",
        role="Marketing Lead",
        company="Kopi & Co",
        content="Clear reporting and campaigns that actually hit target.",
        rating=4,
    ),
)

PRICING_TIERS: tuple[PricingTier, ...] = (
    PricingTier(
        id="starter",
        name="Starter",
        price="RM 3,500",
        description="A fast, editable marketing site.",
        features=["Up to 5 pages", "CMS editing", "Contact form", "Basic SEO"],
    ),
    PricingTier(
        id="growth",
        name="Growth",
        price="RM 7,900",
        description="Site plus lead automation.",
        features=["Up to 12 pages", "Blog & portfolio", "Lead capture automation", "Analytics"],
        recommended=True,
    ),
    PricingTier(
        id="scale",
        name="Scale",
        price="Custom",
        description="Web platform with AI agents.",
        features=["Unlimited pages", "AI agent pod", "Integrations", "Priority support"],
        cta_label="Talk to us",
    ),
)

FAQ_ITEMS: tuple[FaqItem, ...] = (
    FaqItem(
        id="f1",
        question="How long does a website take?",
        answer="Most marketing sites launch in three to five weeks.",
    ),
    FaqItem(
        id="f2",
        question="Can I edit the content myself?",
        answer="Yes. Every page is editable from the admin panel.",
    ),
    FaqItem(
        id="f3",
        question="Do you offer maintenance?",
        answer="Monthly care plans cover updates, backups and small changes.",
        category="support",
    ),
    FaqItem(
        id="f4",
        question="Which tools can the AI agents connect to?",
        answer="CRMs, spreadsheets, WhatsApp, email and most tools with an API.",
        category="automation",
    ),
)

# ---------------------------------------------------------------------------
# Singleton settings
# ---------------------------------------------------------------------------

DEFAULT_HOMEPAGE_SETTINGS = HomepageSettings()

DEFAULT_HOMEPAGE_CONTENT = HomepageContent(
    hero_badge="Digital agency · Kuala Lumpur",
    hero_title="We build websites and AI automation",
    hero_highlight="that grow revenue",
    hero_subtitle="Strategy, design, engineering and automation under one roof.",
    primary_cta_label="Book a strategy call",
    primary_cta_link=BOOKING_LINK,
    secondary_cta_label="See our work",
    secondary_cta_link="/portfolio",
    stats=[
        StatItem(label="Projects delivered", value="60+"),
        StatItem(label="Client retention", value="92%"),
        StatItem(label="Avg. launch time", value="4 weeks"),
    ],
)

DEFAULT_SOCIAL_LINKS = SocialLinks(
    facebook="https://facebook.com/aurexissolution",
    instagram="https://instagram.com/aurexissolution",
    linkedin="https://linkedin.com/company/aurexissolution",
    email="hello@aurexissolution.com",
)

DEFAULT_ABOUT_PAGE_SETTINGS = AboutPageSettings(
    hero_title="About Aurexis Solution",
    hero_subtitle="A small senior team shipping web and automation work for growing businesses.",
    story="Started as a two-person studio, now a cross-functional team of designers and engineers.",
    mission="Give every growing business the digital leverage of a large one.",
    vision="Websites and automation that pay for themselves.",
    values=[
        ContentCard(title="Clarity", description="Plain language, visible progress."),
        ContentCard(title="Craft", description="Details that make products feel fast."),
        ContentCard(title="Ownership", description="We treat outcomes as our own."),
    ],
    stats=[
        StatItem(label="Years operating", value="5"),
        StatItem(label="Team members", value="12"),
    ],
)

# ---------------------------------------------------------------------------
# Pricing pages
# ---------------------------------------------------------------------------

_AI_PRICING_PAGE = PricingPageContent(
    hero=PricingHero(
        eyebrow="MAGNETIC AI PODS",
        badge="RM 4,999 LAUNCH",
        title="Magnetic AI Automation",
        highlight="Pricing Hero",
        subtitle=(
            "Asymmetric hero built for revenue teams adopting AI pods. Plug in automation "
            "blueprints, surface live ROI, and let prospects experience the demo bot mid-scroll."
        ),
        bullets=[
            "3-7 agent pods orchestrated across WhatsApp, HubSpot, and Sheets",
            "SOC2-ready guardrails with human-in-loop approvals",
            "Live KPI cockpit + anomaly nudges every dawn",
        ],
        chips=["Lead Concierge", "Ops Pilot", "Insights Copilot"],
        metrics=[
            StatItem(label="Avg. Hours Saved", value="62 /week"),
            StatItem(label="Sales Speed Increase", value="3.4× faster"),
            StatItem(label="Lead Qualification Boost", value="+48%"),
            StatItem(label="Payback Period", value="under 6 weeks"),
        ],
        ctas=PricingHeroCtas(
            primary_label="Book AI Pricing Lab",
            primary_link=BOOKING_LINK,
            secondary_label="Download Playbook",
        ),
    ),
    metric_bubbles=[
        PricingMetricBubble(label="Workflow blueprint", value="48 hrs"),
        PricingMetricBubble(label="Automation uptime", value="99.9%"),
    ],
    plans=[
        PricingPlan(
            id="pilot",
            name="Pilot Pod",
            price="RM 4,999",
            period="one-time",
            description="One agent pod live on a single channel.",
            features=["1 agent pod", "1 channel", "Weekly KPI report"],
            cta_label="Start pilot",
            cta_link=BOOKING_LINK,
        ),
        PricingPlan(
            id="growth",
            name="Growth Pods",
            price="RM 9,800",
            period="per month",
            description="Multi-channel pods with CRM sync.",
            features=["3 agent pods", "CRM + WhatsApp", "Live KPI cockpit"],
            highlighted=True,
            cta_label="Book a call",
            cta_link=BOOKING_LINK,
        ),
        PricingPlan(
            id="enterprise",
            name="Enterprise",
            price="Custom",
            description="Fine-tuned agents with audit and guardrails.",
            features=["Up to 7 pods", "Custom fine-tuning", "Audit + guardrails"],
            cta_label="Talk to us",
            cta_link="/contact",
        ),
    ],
    faqs=[
        PricingFaqItem(
            question="How fast can a pilot go live?",
            answer="Most pilots are live within two weeks of the blueprint session.",
        ),
        PricingFaqItem(
            question="Do humans stay in the loop?",
            answer="Yes. Sensitive actions route through approval queues.",
        ),
    ],
    roi=RoiConfig(
        title="See AI automation ROI before you buy",
        description="Drag the sliders, watch automation lift and ROI update instantly.",
        sliders=[
            RoiSlider(id="dailyLeads", label="Daily qualified leads", min=20, max=200, step=1, default_value=80),
            RoiSlider(
                id="closeRate", label="Close rate (%)", min=5, max=60, step=1,
                default_value=18, unit_suffix="%", format="percent",
            ),
            RoiSlider(
                id="avgDealValue", label="Average deal (RM)", min=800, max=6000, step=100,
                default_value=2200, unit_prefix="RM ", format="currency",
            ),
            RoiSlider(
                id="hoursSaved", label="Hours saved / week", min=10, max=120, step=5,
                default_value=55, unit_suffix="hrs", format="hours",
            ),
        ],
    ),
)

_WEB_PRICING_PAGE = PricingPageContent(
    hero=PricingHero(
        eyebrow="WEBSITES THAT SELL",
        badge="FROM RM 3,500",
        title="Website Packages",
        highlight="built to convert",
        subtitle="Fixed-scope packages with editable content and launch support.",
        bullets=["Mobile-first design", "CMS editing included", "Launch in weeks"],
        ctas=PricingHeroCtas(primary_label="Book a strategy call", primary_link=BOOKING_LINK),
    ),
    plans=[
        PricingPlan(id="starter", name="Starter", price="RM 3,500", features=["Up to 5 pages"]),
        PricingPlan(id="growth", name="Growth", price="RM 7,900", features=["Up to 12 pages"], highlighted=True),
    ],
    faqs=[
        PricingFaqItem(question="Is hosting included?", answer="The first year of hosting is included."),
    ],
)

_MARKETING_PRICING_PAGE = PricingPageContent(
    hero=PricingHero(
        eyebrow="PERFORMANCE MARKETING",
        badge="MONTHLY RETAINERS",
        title="Marketing Plans",
        highlight="measured in pipeline",
        subtitle="Paid, search and content programs with transparent reporting.",
        ctas=PricingHeroCtas(primary_label="Get a proposal", primary_link="/contact"),
    ),
    plans=[
        PricingPlan(id="launch", name="Launch", price="RM 2,200", period="per month", features=["1 channel"]),
        PricingPlan(
            id="accelerate", name="Accelerate", price="RM 4,800", period="per month",
            features=["3 channels", "Content calendar"], highlighted=True,
        ),
    ],
)

DEFAULT_PRICING_PAGE_CONTENT: dict[PricingPageId, PricingPageContent] = {
    PricingPageId.AI: _AI_PRICING_PAGE,
    PricingPageId.WEB: _WEB_PRICING_PAGE,
    PricingPageId.MARKETING: _MARKETING_PRICING_PAGE,
}


def default_content_model() -> ContentModel:
    """Build a fully populated content model from the compiled-in defaults."""
    return ContentModel(
        services=SERVICES,
        testimonials=TESTIMONIALS,
        pricing=PRICING_TIERS,
        faqs=FAQ_ITEMS,
        service_details=dict(SERVICE_DETAILS),
        homepage_settings=DEFAULT_HOMEPAGE_SETTINGS,
        homepage_content=DEFAULT_HOMEPAGE_CONTENT,
        social_links=DEFAULT_SOCIAL_LINKS,
        about_page_settings=DEFAULT_ABOUT_PAGE_SETTINGS,
        pricing_pages=dict(DEFAULT_PRICING_PAGE_CONTENT),
        projects=(),
        blog_posts=(),
    )
