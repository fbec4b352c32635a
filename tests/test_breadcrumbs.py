from __future__ import annotations

from tersite.breadcrumbs import page_breadcrumbs, tag_breadcrumbs
from tersite.content.models import Page


def _dump(page: Page, home: str | None = None) -> list[dict[str, object]]:
    return [crumb.model_dump(exclude={"is_tag"}) for crumb in page_breadcrumbs(page, home)]


def test_nested_page_trail_ends_with_current_entry() -> None:
    page = Page(path="notes/deno/ter.md", slug="ter")

    assert _dump(page, "home") == [
        {"slug": "home", "url": "/", "current": False},
        {"slug": "notes", "url": "/notes", "current": False},
        {"slug": "deno", "url": "/notes/deno", "current": False},
        {"slug": "ter", "url": "", "current": True},
    ]


def test_root_page_has_only_home_crumb() -> None:
    page = Page(path="", slug="")

    assert _dump(page) == [{"slug": "index", "url": "/", "current": False}]


def test_root_index_file_has_only_home_crumb() -> None:
    page = Page(path="index.md", slug="", is_index=True)

    assert _dump(page, "") == [{"slug": "index", "url": "/", "current": False}]


def test_hub_page_ends_at_its_directory() -> None:
    page = Page(path="notes/index.md", slug="", is_index=True)

    assert _dump(page, "Start") == [
        {"slug": "Start", "url": "/", "current": False},
        {"slug": "notes", "url": "/notes", "current": False},
    ]


def test_top_level_page() -> None:
    page = Page(path="about.md", slug="about")

    crumbs = page_breadcrumbs(page)

    assert [crumb.slug for crumb in crumbs] == ["index", "about"]
    assert crumbs[-1].current is True
    assert not any(crumb.is_tag for crumb in crumbs)


def test_tag_breadcrumbs() -> None:
    crumbs = tag_breadcrumbs("python", "home")

    assert [crumb.to_template_dict() for crumb in crumbs] == [
        {"slug": "home", "url": "/", "current": False, "isTag": False},
        {"slug": "#python", "url": "", "current": True, "isTag": True},
    ]
