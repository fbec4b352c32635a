from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from tersite.config import Config
from tersite.content.models import Page
from tersite.feeds import build_feed_context, collect_entries, render_feed
from tersite.render import OutcomeKind


def _pages() -> list[Page]:
    return [
        Page(path="old.md", slug="old", title="Old", date=datetime(2021, 1, 1, tzinfo=timezone.utc)),
        Page(path="undated.md", slug="undated", title="Undated"),
        Page(
            path="notes/index.md",
            slug="",
            title="Notes",
            is_index=True,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        Page(
            path="notes/new.md",
            slug="new",
            title="New",
            description="Fresh",
            tags=["deno"],
            content="<p>hi</p>",
            date=datetime(2023, 5, 1, tzinfo=timezone.utc),
        ),
    ]


def test_entries_are_dated_non_hub_pages_newest_first() -> None:
    entries = collect_entries(_pages(), limit=10, base_url="https://example.com/")

    assert [entry.title for entry in entries] == ["New", "Old"]
    assert entries[0].url == "https://example.com/notes/new"
    assert entries[0].identifier == entries[0].url
    assert entries[0].summary == "Fresh"
    assert entries[0].tags == ["deno"]


def test_entries_respect_limit_and_relative_urls() -> None:
    entries = collect_entries(_pages(), limit=1, base_url=None)

    assert [entry.url for entry in entries] == ["/notes/new"]


def test_feed_context_uses_site_url_and_feed_path() -> None:
    config = Config(feed_path=Path("feeds/atom.xml"), site={"url": "https://garden.example.org/"})

    context = build_feed_context(_pages(), config)

    assert context["feed_url"] == "https://garden.example.org/feeds/atom.xml"
    assert context["home_url"] == "https://garden.example.org/"
    assert context["updated"] == datetime(2023, 5, 1, tzinfo=timezone.utc)
    assert context["site"]["url"] == "https://garden.example.org/"


class _FeedRenderer:
    def render(self, view: str, context: Mapping[str, Any]) -> str:
        assert view == "feed"
        return "".join(entry.title for entry in context["entries"])


def test_render_feed_labels_outcome_with_feed_path() -> None:
    outcome = render_feed(_pages(), _FeedRenderer(), Config())

    assert outcome.kind is OutcomeKind.PRODUCED
    assert outcome.label == "feed.xml"
    assert outcome.content == "NewOld"
