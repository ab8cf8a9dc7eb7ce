"""Content domain — entity models, default catalog, merge engine and model store.

The content model is the always-complete, render-ready view that pages
and admin screens read from.  Remote documents are reconciled against
the compiled-in defaults by the merge engine before they land here.
"""

from sitesync.content.models import (
    AboutPageSettings,
    BlogPost,
    BlogPostStatus,
    ContentModel,
    FaqItem,
    HomepageContent,
    HomepageSettings,
    PortfolioProject,
    PricingPageContent,
    PricingPageId,
    PricingTier,
    ProjectCategory,
    ServiceDetailContent,
    ServiceItem,
    SocialLinks,
    Testimonial,
)
from sitesync.content.store import ContentModelStore

__all__ = [
    "AboutPageSettings",
    "BlogPost",
    "BlogPostStatus",
    "ContentModel",
    "ContentModelStore",
    "FaqItem",
    "HomepageContent",
    "HomepageSettings",
    "PortfolioProject",
    "PricingPageContent",
    "PricingPageId",
    "PricingTier",
    "ProjectCategory",
    "ServiceDetailContent",
    "ServiceItem",
    "SocialLinks",
    "Testimonial",
]
