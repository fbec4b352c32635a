"""Select feed entries and render the syndication feed view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from .config import Config
from .content.models import Page
from .render import RenderOutcome, ViewRenderer, invoke, site_context


@dataclass(slots=True)
class FeedEntry:
    """Normalized feed entry derived from a dated page."""

    title: str
    url: str
    summary: str | None
    content: str
    tags: list[str]
    published: datetime

    @property
    def identifier(self) -> str:
        return self.url


def collect_entries(pages: Iterable[Page], *, limit: int, base_url: str | None) -> list[FeedEntry]:
    """Newest dated, non-hub pages first, capped at ``limit``."""
    base = _normalize_base_url(base_url)
    collected = [
        FeedEntry(
            title=page.title or page.slug,
            url=_make_absolute(page.url, base),
            summary=page.description,
            content=page.content,
            tags=list(page.tags),
            published=page.date,
        )
        for page in pages
        if page.date is not None and not page.is_index
    ]
    collected.sort(key=lambda entry: entry.published, reverse=True)
    return collected[:limit]


def build_feed_context(pages: Iterable[Page], config: Config) -> dict[str, Any]:
    base = _normalize_base_url(config.site.url)
    entries = collect_entries(pages, limit=config.feed_limit, base_url=base)
    updated = entries[0].published if entries else datetime.now(timezone.utc)
    return {
        "entries": entries,
        "updated": updated,
        "feed_url": _make_absolute(config.feed_path.as_posix(), base),
        "home_url": _make_absolute("/", base),
        "site": site_context(config),
    }


def render_feed(pages: Iterable[Page], renderer: ViewRenderer, config: Config) -> RenderOutcome:
    context = build_feed_context(pages, config)
    return invoke(renderer, "feed", context, label=config.feed_path.as_posix())


def _normalize_base_url(base_url: str | None) -> str | None:
    if not base_url:
        return None
    text = base_url.strip()
    if not text:
        return None
    return text.rstrip("/")


def _make_absolute(path: str, base_url: str | None) -> str:
    if path.startswith("http://") or path.startswith("https://"):
        return path
    normalized = f"/{path.lstrip('/')}"
    if base_url:
        return f"{base_url}{normalized}"
    return normalized
