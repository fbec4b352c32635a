from __future__ import annotations

import pytest

from tersite.content.models import Page
from tersite.errors import PageNotFoundError
from tersite.store import PageStore
from tersite.tags import tag_pages, tagged_pages_for


def _store() -> PageStore:
    return PageStore(
        [
            Page(path="one.md", slug="one", tags=["x", "solo"]),
            Page(path="two.md", slug="two", tags=["x", "y"]),
            Page(path="three.md", slug="three", tags=["y"]),
            Page(path="untagged.md", slug="untagged"),
        ]
    )


def test_subject_is_excluded_from_its_own_tag_listing() -> None:
    store = _store()
    one = store.get("one.md")
    assert one is not None

    grouped = tagged_pages_for(store, one)

    assert [page.path for page in grouped["x"]] == ["two.md"]
    assert "solo" not in grouped
    assert all(page.path != "one.md" for members in grouped.values() for page in members)


def test_tag_context_covers_every_tag_in_the_store() -> None:
    store = _store()
    untagged = store.get("untagged.md")
    assert untagged is not None

    grouped = tagged_pages_for(store, untagged)

    assert list(grouped) == ["x", "solo", "y"]
    assert [page.path for page in grouped["y"]] == ["two.md", "three.md"]


def test_tag_pages_list_full_membership() -> None:
    store = _store()

    pages = {tag.name: [page.path for page in tag.pages] for tag in tag_pages(store)}

    assert pages == {
        "x": ["one.md", "two.md"],
        "solo": ["one.md"],
        "y": ["two.md", "three.md"],
    }


def test_unknown_subject_is_rejected() -> None:
    with pytest.raises(PageNotFoundError):
        tagged_pages_for(_store(), Page(path="ghost.md", slug="ghost"))
