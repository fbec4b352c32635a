"""Immutable, path-indexed collection of the pages loaded for one build."""

from __future__ import annotations

from typing import Iterable, Iterator

from .content.models import Page
from .errors import DuplicatePageError, PageNotFoundError


class PageStore:
    """Ordered pages with O(1) lookup by source path.

    The store is built once per run and never mutated afterwards; iteration
    follows the order pages were supplied in.
    """

    __slots__ = ("_pages", "_path_index")

    def __init__(self, pages: Iterable[Page]) -> None:
        ordered = tuple(pages)
        index: dict[str, int] = {}
        for position, page in enumerate(ordered):
            if page.path in index:
                raise DuplicatePageError(page.path)
            index[page.path] = position
        self._pages = ordered
        self._path_index = index

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Page):
            position = self._path_index.get(item.path)
            return position is not None and self._pages[position] == item
        if isinstance(item, str):
            return item in self._path_index
        return False

    @property
    def pages(self) -> tuple[Page, ...]:
        return self._pages

    def get(self, path: str) -> Page | None:
        position = self._path_index.get(path.strip("/"))
        if position is None:
            return None
        return self._pages[position]

    def require(self, page: Page) -> Page:
        """Return the stored page for ``page``, failing loudly when it is absent."""
        if page not in self:
            raise PageNotFoundError(page.path)
        return page

    def tags(self) -> list[str]:
        """Every tag used by any page, in first-seen order."""
        seen: dict[str, None] = {}
        for page in self._pages:
            for tag in page.tags:
                seen.setdefault(tag, None)
        return list(seen)
