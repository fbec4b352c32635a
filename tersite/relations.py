"""Derive hierarchy, backlink and tag relationships between stored pages."""

from __future__ import annotations

from functools import lru_cache
from html.parser import HTMLParser
from typing import List, Tuple
from urllib.parse import unquote, urljoin, urlsplit

from .content.models import Page, parent_url
from .store import PageStore


class _LinkCollector(HTMLParser):
    """Collect anchor targets from rendered HTML."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.targets: list[str] = []

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, str | None]]) -> None:
        if tag != "a":
            return
        for name, value in attrs:
            if name == "href" and value:
                self.targets.append(value)


@lru_cache(maxsize=4096)
def link_targets(html: str, site_url: str | None = None, base_url: str = "/") -> frozenset[str]:
    """Return the normalized site paths that ``html`` links to.

    External links are dropped unless they point at ``site_url``, in which case
    they are reduced to their path. Relative links resolve against ``base_url``,
    the url of the page that holds them.
    """
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    collector = _LinkCollector()
    collector.feed(html)
    collector.close()

    site = urlsplit(site_url) if site_url else None
    targets: set[str] = set()
    for raw in collector.targets:
        parsed = urlsplit(raw.strip())
        if parsed.scheme or parsed.netloc:
            if site is None or parsed.netloc != site.netloc:
                continue
        path = unquote(parsed.path)
        if not path:
            continue
        if not path.startswith("/"):
            path = urljoin(base, path)
        if path != "/":
            path = path.rstrip("/")
        targets.add(path)
    return frozenset(targets)


def child_pages(store: PageStore, subject: Page) -> list[Page]:
    """Pages one level below a hub page; non-hub pages have no children."""
    store.require(subject)
    if not subject.is_index:
        return []
    url = subject.url
    return [
        page
        for page in store
        if page.path != subject.path and page.url != url and parent_url(page.url) == url
    ]


def backlink_pages(store: PageStore, subject: Page, *, site_url: str | None = None) -> list[Page]:
    """Pages whose rendered body links to ``subject``."""
    store.require(subject)
    url = subject.url
    return [
        page
        for page in store
        if page.path != subject.path and url in link_targets(page.content, site_url, page.url)
    ]


def child_tags(store: PageStore, subject: Page) -> list[str]:
    """Deduplicated tags used by the children of ``subject``."""
    seen: dict[str, None] = {}
    for page in child_pages(store, subject):
        for tag in page.tags:
            seen.setdefault(tag, None)
    return list(seen)


def pages_by_tag(store: PageStore, tag: str) -> list[Page]:
    """Every stored page carrying ``tag``, in store order."""
    return [page for page in store if tag in page.tags]
