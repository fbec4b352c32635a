"""Build navigation trails from a page's location."""

from __future__ import annotations

import posixpath

from .config import DEFAULT_ROOT_CRUMB
from .content.models import Breadcrumb, Page, join_url


def home_breadcrumb(home_label: str | None = None) -> Breadcrumb:
    label = home_label.strip() if home_label else ""
    return Breadcrumb(slug=label or DEFAULT_ROOT_CRUMB, url="/", current=False)


def directory_segments(path: str) -> list[str]:
    """Directory names above ``path``, skipping empty and ``.`` segments."""
    directory = posixpath.dirname(path.strip("/"))
    return [segment for segment in directory.split("/") if segment not in {"", "."}]


def page_breadcrumbs(page: Page, home_label: str | None = None) -> list[Breadcrumb]:
    """Trail from the site root through each parent directory to ``page``.

    Hub pages (empty slug) end at their deepest directory crumb; every other
    page gets a trailing ``current`` crumb with an empty url.
    """
    segments = directory_segments(page.path)
    trail = [home_breadcrumb(home_label)]
    trail.extend(
        Breadcrumb(slug=segment, url=join_url(*segments[: depth + 1]))
        for depth, segment in enumerate(segments)
    )
    if page.slug:
        trail.append(Breadcrumb(slug=page.slug, url="", current=True))
    return trail


def tag_breadcrumbs(name: str, home_label: str | None = None) -> list[Breadcrumb]:
    return [
        home_breadcrumb(home_label),
        Breadcrumb(slug=f"#{name}", url="", current=True, is_tag=True),
    ]
