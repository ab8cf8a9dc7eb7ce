"""Collection names and document paths shared with the remote store."""

from __future__ import annotations

from enum import StrEnum


class Collection(StrEnum):
    """Remote collections, one per entity group."""

    SERVICES = "services"
    SERVICE_DETAILS = "serviceDetails"
    TESTIMONIALS = "testimonials"
    PRICING_TIERS = "pricingTiers"
    FAQS = "faqs"
    PRICING_PAGES = "pricingPages"
    PROJECTS = "projects"
    BLOG_POSTS = "blogPosts"


SETTINGS_COLLECTION = "siteSettings"


class SettingKey(StrEnum):
    """Document ids of the singleton settings under ``siteSettings``."""

    HOMEPAGE = "homepage"
    HOMEPAGE_CONTENT = "homepageContent"
    SOCIAL_LINKS = "socialLinks"
    ABOUT_PAGE = "aboutPage"


def doc_path(collection: str, doc_id: str) -> str:
    """Join a collection name and document id into a store path."""
    return f"{collection}/{doc_id}"


def setting_path(key: SettingKey) -> str:
    return doc_path(SETTINGS_COLLECTION, key)


def split_path(path: str) -> tuple[str, str]:
    """Split ``collection/doc`` into its parts.

    Raises ValueError for anything other than a two-segment path.
    """
    parts = path.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Expected 'collection/document' path, got {path!r}")
    return parts[0], parts[1]
