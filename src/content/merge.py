"""Merge engine — combine compiled-in defaults with partial remote overrides.

All functions are pure: they take a base entity and a raw mapping (a
remote document or a partial update) and return a new entity.  Field
precedence is *override if present and not None, else base*.  Nested
blocks (service hero/challenge/CTA, pricing hero/ROI) are merged one
level at a time with the same rule instead of being replaced wholesale.
Lists always replace.

Malformed fields are coerced where possible and otherwise ignored, one
field at a time, so a single bad value never rejects a whole record.
"""

from __future__ import annotations

import logging
import re
import types
import typing
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from functools import cache
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from sitesync.content.models import (
    BlogPost,
    PortfolioProject,
    PricingPageContent,
    ServiceDetailContent,
    ServiceItem,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")

# Keys that identify a record; the document id always wins over the payload.
_IDENTITY_FIELDS = frozenset({"id"})


# ---------------------------------------------------------------------------
# Field introspection
# ---------------------------------------------------------------------------


@cache
def _field_adapter(model_cls: type[BaseModel], name: str) -> TypeAdapter[Any]:
    return TypeAdapter(model_cls.model_fields[name].annotation)


@cache
def _nested_model(model_cls: type[BaseModel], name: str) -> type[BaseModel] | None:
    """Return the model class of a nested-block field, or None for plain fields."""
    annotation = model_cls.model_fields[name].annotation
    candidates = (
        typing.get_args(annotation)
        if isinstance(annotation, types.UnionType) or typing.get_origin(annotation) is typing.Union
        else (annotation,)
    )
    for candidate in candidates:
        if typing.get_origin(candidate) is None and isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


@cache
def _is_bool_field(model_cls: type[BaseModel], name: str) -> bool:
    return model_cls.model_fields[name].annotation is bool


@cache
def _accepts_str(model_cls: type[BaseModel], name: str) -> bool:
    annotation = model_cls.model_fields[name].annotation
    return annotation is str or str in typing.get_args(annotation)


def _lookup(raw: Mapping[str, Any], model_cls: type[BaseModel], name: str) -> tuple[bool, Any]:
    """Find a field in *raw* by alias first, then by attribute name."""
    alias = model_cls.model_fields[name].alias or name
    if alias in raw:
        return True, raw[alias]
    if name in raw:
        return True, raw[name]
    return False, None


def to_raw(data: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Normalize a partial update into a plain dict.

    Model instances contribute only the fields that were explicitly set,
    so a partial block never overwrites siblings with its defaults.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True, by_alias=True)
    return {
        key: (value.model_dump(exclude_unset=True, by_alias=True) if isinstance(value, BaseModel) else value)
        for key, value in data.items()
    }


def _coerce(model_cls: type[BaseModel], name: str, value: Any) -> Any:
    if _is_bool_field(model_cls, name):
        return bool(value)
    try:
        return _field_adapter(model_cls, name).validate_python(value)
    except ValidationError:
        if _accepts_str(model_cls, name) and isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        raise


# ---------------------------------------------------------------------------
# Generic merge
# ---------------------------------------------------------------------------


def merge_model(base: M, raw: Mapping[str, Any] | BaseModel | None) -> M:
    """Overlay *raw* onto *base* field by field.

    - Fields absent from *raw*, or present as None, keep the base value.
    - Nested model fields given as a mapping are merged recursively
      against the base block (or the block's defaults when the base has
      none), so setting ``heroContent.badge`` keeps ``heroContent.headline``.
    - Values that fail validation are dropped with a debug log.
    """
    if raw is None:
        return base
    if not isinstance(raw, Mapping | BaseModel):
        logger.debug("Ignoring non-mapping override for %s", type(base).__name__)
        return base
    raw = to_raw(raw)
    model_cls = type(base)
    updates: dict[str, Any] = {}

    for name in model_cls.model_fields:
        if name in _IDENTITY_FIELDS:
            continue
        present, value = _lookup(raw, model_cls, name)
        if not present or value is None:
            continue

        nested_cls = _nested_model(model_cls, name)
        if nested_cls is not None and isinstance(value, Mapping):
            current = getattr(base, name)
            nested_base = current if current is not None else nested_cls()
            updates[name] = merge_model(nested_base, value)
            continue

        try:
            updates[name] = _coerce(model_cls, name, value)
        except ValidationError:
            logger.debug(
                "Dropping malformed field %s.%s=%r", model_cls.__name__, name, value
            )

    if not updates:
        return base
    return base.model_copy(update=updates)


def coerce_entity(model_cls: type[M], entity_id: str, raw: Mapping[str, Any], base: M | None = None) -> M:
    """Build a catalog entity from a remote record.

    Structurally required fields take their model defaults (empty lists,
    zero numbers, draft status) unless *base* supplies better ones.
    """
    start = base.model_copy(update={"id": entity_id}) if base is not None else model_cls(id=entity_id)
    return merge_model(start, raw)


def changed_payload(entity: BaseModel, raw: Mapping[str, Any], *extra: str) -> dict[str, Any]:
    """Serialize only the fields named in *raw* (plus *extra*) from *entity*.

    Used to build remote writes from the already-merged local value, so
    the optimistic copy and the persisted copy carry identical data.
    """
    model_cls = type(entity)
    dumped = entity.model_dump(by_alias=True, mode="json")
    payload: dict[str, Any] = {}
    for name, field in model_cls.model_fields.items():
        alias = field.alias or name
        if name in extra or alias in extra:
            payload[alias] = dumped[alias]
            continue
        present, value = _lookup(raw, model_cls, name)
        if present and value is not None:
            payload[alias] = dumped[alias]
    return payload


def to_document(entity: BaseModel) -> dict[str, Any]:
    """Serialize a whole entity for a remote write."""
    return entity.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Per-entity merges
# ---------------------------------------------------------------------------


def merge_service_detail(
    base: ServiceDetailContent, override: Mapping[str, Any] | None
) -> ServiceDetailContent:
    """Merge a service detail override; hero, challenge and CTA blocks merge per field."""
    return merge_model(base, override)


def service_detail_base(
    service_id: str,
    current: Mapping[str, ServiceDetailContent],
    defaults: Mapping[str, ServiceDetailContent],
    services: Iterable[ServiceItem],
) -> ServiceDetailContent | None:
    """Pick the base for a service detail: in-memory, then default, then derived."""
    if service_id in current:
        return current[service_id]
    if service_id in defaults:
        return defaults[service_id]
    for item in services:
        if item.id == service_id:
            return ServiceDetailContent.from_service_item(item)
    return None


def merge_pricing_page(
    base: PricingPageContent, override: Mapping[str, Any] | None
) -> PricingPageContent:
    """Merge a pricing page override; hero (and its CTAs) and ROI merge per field."""
    return merge_model(base, override)


def merge_setting(base: M, override: Mapping[str, Any] | None) -> M:
    """Merge a singleton setting document onto its default."""
    return merge_model(base, override)


def coerce_project(project_id: str, raw: Mapping[str, Any]) -> PortfolioProject:
    return coerce_entity(PortfolioProject, project_id, raw)


def coerce_blog_post(post_id: str, raw: Mapping[str, Any], *, now: str | None = None) -> BlogPost:
    """Build a blog post, defaulting slug to the id and timestamps to now."""
    post = coerce_entity(BlogPost, post_id, raw)
    created_at = post.created_at or now or utc_now_iso()
    return post.model_copy(
        update={
            "slug": post.slug or post_id,
            "created_at": created_at,
            "updated_at": post.updated_at or created_at,
        }
    )


# ---------------------------------------------------------------------------
# Ordering and derived values
# ---------------------------------------------------------------------------


def sort_projects(projects: Iterable[PortfolioProject]) -> tuple[PortfolioProject, ...]:
    """Order by ``order`` ascending; ties keep input order, unset order sorts last."""
    return tuple(sorted(projects, key=lambda p: (p.order is None, p.order or 0)))


def sort_blog_posts(posts: Iterable[BlogPost]) -> tuple[BlogPost, ...]:
    """Newest first by creation timestamp."""
    return tuple(sorted(posts, key=lambda p: p.created_at, reverse=True))


def slugify(value: str) -> str:
    return _SLUG_STRIP_RE.sub("-", value.lower().strip()).strip("-")


def utc_now_iso() -> str:
    """Current UTC time in the ISO-8601 form stored on documents."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
