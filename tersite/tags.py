"""Group stored pages by tag for per-page context and standalone tag pages."""

from __future__ import annotations

from .content.models import Page, TagPage
from .relations import pages_by_tag
from .store import PageStore


def tagged_pages_for(store: PageStore, subject: Page) -> dict[str, list[Page]]:
    """Other pages sharing each tag, as shown on ``subject``'s own page.

    The subject never lists itself, and tags left empty by that exclusion are
    dropped.
    """
    store.require(subject)
    grouped: dict[str, list[Page]] = {}
    for tag in store.tags():
        members = [page for page in pages_by_tag(store, tag) if page.path != subject.path]
        if members:
            grouped[tag] = members
    return grouped


def tag_pages(store: PageStore) -> list[TagPage]:
    """One tag page per tag in use, listing every member."""
    return [TagPage(name=tag, pages=tuple(pages_by_tag(store, tag))) for tag in store.tags()]
