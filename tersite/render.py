"""Assemble render contexts and invoke the view renderer for each output."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

from .breadcrumbs import page_breadcrumbs, tag_breadcrumbs
from .config import Config
from .content.models import IndexItem, Page, TagPage, join_url
from .listing import index_items, readable_date
from .relations import backlink_pages, child_pages, child_tags
from .store import PageStore
from .tags import tagged_pages_for

logger = logging.getLogger(__name__)


class ViewRenderer(Protocol):
    def render(self, view: str, context: Mapping[str, Any]) -> str:
        ...


class OutcomeKind(str, Enum):
    PRODUCED = "produced"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RenderOutcome:
    """Result of rendering one output: content, a deliberate skip, or a failure."""

    label: str
    kind: OutcomeKind
    content: str | None = None
    reason: str | None = None
    error: BaseException | None = None

    @classmethod
    def produced(cls, label: str, content: str) -> "RenderOutcome":
        return cls(label=label, kind=OutcomeKind.PRODUCED, content=content)

    @classmethod
    def skipped(cls, label: str, reason: str) -> "RenderOutcome":
        return cls(label=label, kind=OutcomeKind.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, label: str, error: BaseException) -> "RenderOutcome":
        return cls(label=label, kind=OutcomeKind.FAILED, reason=str(error), error=error)

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.PRODUCED


def site_context(config: Config) -> dict[str, Any]:
    """Site metadata for views, plus the site-relative feed location."""
    context = config.site.model_dump()
    context["feed_url"] = join_url(config.feed_path.as_posix())
    return context


def _items(items: Sequence[IndexItem]) -> list[dict[str, Any]]:
    return [item.to_template_dict() for item in items]


def build_page_context(store: PageStore, page: Page, config: Config) -> dict[str, Any]:
    """Collect everything the page view needs for ``page``."""
    pinned_key = config.pinned_key
    tagged = tagged_pages_for(store, page)
    return {
        "page": {
            "title": page.title,
            "description": page.description,
            "content": page.content,
            "date": page.date,
            "tags": list(page.tags),
            "readableDate": readable_date(page.date),
            "url": page.url,
        },
        "breadcrumbs": [crumb.to_template_dict() for crumb in page_breadcrumbs(page, config.home_label)],
        "indexLinks": _items(index_items(child_pages(store, page), pinned_key=pinned_key)),
        "backLinks": _items(
            index_items(backlink_pages(store, page, site_url=config.site.url), pinned_key=pinned_key)
        ),
        "taggedIndexLinks": {
            tag: _items(index_items(members, pinned_key=pinned_key)) for tag, members in tagged.items()
        },
        "childTags": child_tags(store, page),
        "site": site_context(config),
    }


def build_tag_context(tag_page: TagPage, config: Config) -> dict[str, Any]:
    name = tag_page.name
    return {
        "page": {
            "title": f"#{name}",
            "description": f"Pages tagged #{name}",
        },
        "name": name,
        "breadcrumbs": [crumb.to_template_dict() for crumb in tag_breadcrumbs(name, config.home_label)],
        "indexLinks": _items(index_items(tag_page.pages, pinned_key=config.pinned_key)),
        "site": site_context(config),
    }


def render_page(store: PageStore, page: Page, renderer: ViewRenderer, config: Config) -> RenderOutcome:
    # Relationship errors are programmer errors and propagate.
    context = build_page_context(store, page, config)
    return invoke(renderer, "page", context, label=page.path)


def render_tag_page(tag_page: TagPage, renderer: ViewRenderer, config: Config) -> RenderOutcome:
    context = build_tag_context(tag_page, config)
    return invoke(renderer, "tag", context, label=f"#{tag_page.name}")


def invoke(renderer: ViewRenderer, view: str, context: Mapping[str, Any], *, label: str) -> RenderOutcome:
    """Call the renderer, turning its failures into outcomes instead of exceptions."""
    try:
        result = renderer.render(view, context)
    except Exception as exc:  # noqa: BLE001
        logger.error("Rendering %s with view '%s' failed: %s", label, view, exc)
        return RenderOutcome.failed(label, exc)
    if not isinstance(result, str):
        logger.warning("View '%s' returned %s for %s; skipping.", view, type(result).__name__, label)
        return RenderOutcome.skipped(label, f"view returned {type(result).__name__}")
    if not result.strip():
        logger.info("View '%s' produced no output for %s; skipping.", view, label)
        return RenderOutcome.skipped(label, "view produced empty output")
    return RenderOutcome.produced(label, result)
