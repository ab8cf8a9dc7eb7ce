"""Per-entity-group persistence policy for the mutation gateway."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class EntityGroup(StrEnum):
    """Entity groups the gateway mutates."""

    SERVICES = "services"
    TESTIMONIALS = "testimonials"
    PRICING = "pricing"
    FAQS = "faqs"
    PRICING_PAGES = "pricing_pages"
    HOMEPAGE_SETTINGS = "homepage_settings"
    HOMEPAGE_CONTENT = "homepage_content"
    SOCIAL_LINKS = "social_links"
    ABOUT_PAGE_SETTINGS = "about_page_settings"
    PROJECTS = "projects"
    BLOG_POSTS = "blog_posts"


class GroupPolicy(BaseModel):
    """How a group's mutations reach the remote store.

    ``persist``: issue remote writes at all.
    ``raise_on_failure``: re-raise write failures to the caller instead of
    only logging them.
    """

    model_config = ConfigDict(frozen=True)

    persist: bool = True
    raise_on_failure: bool = True


DEFAULT_POLICIES: dict[EntityGroup, GroupPolicy] = {
    group: GroupPolicy() for group in EntityGroup
} | {
    EntityGroup.TESTIMONIALS: GroupPolicy(persist=False),
    EntityGroup.FAQS: GroupPolicy(persist=False),
    EntityGroup.HOMEPAGE_SETTINGS: GroupPolicy(raise_on_failure=False),
    EntityGroup.HOMEPAGE_CONTENT: GroupPolicy(raise_on_failure=False),
    EntityGroup.SOCIAL_LINKS: GroupPolicy(raise_on_failure=False),
}


def resolve_policies(
    overrides: Mapping[str, GroupPolicy] | None = None,
) -> dict[EntityGroup, GroupPolicy]:
    """Overlay configured policies onto the defaults.

    Raises ValueError for an unknown group name.
    """
    policies = dict(DEFAULT_POLICIES)
    for name, policy in (overrides or {}).items():
        policies[EntityGroup(name)] = policy
    return policies
