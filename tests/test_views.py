from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from tersite.errors import ViewError
from tersite.scaffold import init_project
from tersite.views import REQUIRED_VIEWS, RenderSession


def _views(tmp_path: Path, files: dict[str, str]) -> Path:
    views = tmp_path / "views"
    views.mkdir()
    for name, source in files.items():
        (views / name).write_text(source, encoding="utf-8")
    return views


def test_render_uses_named_view_and_fragments(tmp_path: Path) -> None:
    views = _views(tmp_path, {"page.html": "[{% include 'head' %}] {{ page.title }}"})
    session = RenderSession(views)
    session.define("head", "<title>{{ page.title }}</title>")

    html = session.render("page", {"page": {"title": "Ter & Co"}})

    assert html == "[<title>Ter &amp; Co</title>] Ter &amp; Co"


def test_sessions_do_not_share_fragments(tmp_path: Path) -> None:
    views = _views(tmp_path, {"page.html": "{% include 'head' %}"})
    first = RenderSession(views)
    second = RenderSession(views)
    first.define("head", "first")
    second.define("head", "second")

    assert first.render("page", {}) == "first"
    assert second.render("page", {}) == "second"


def test_fragment_redefinition_is_picked_up(tmp_path: Path) -> None:
    views = _views(tmp_path, {"page.html": "{% include 'head' %}"})
    session = RenderSession(views)
    session.define("head", "old")
    assert session.render("page", {}) == "old"

    session.define("head", "new")

    assert session.render("page", {}) == "new"


def test_missing_views_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(ViewError):
        RenderSession(tmp_path / "absent")


def test_from_views_dir_requires_every_view(tmp_path: Path) -> None:
    views = _views(tmp_path, {"page.html": "x"})

    with pytest.raises(ViewError):
        RenderSession.from_views_dir(views)


def test_default_views_render_with_head_include(tmp_path: Path) -> None:
    config, _ = init_project(tmp_path)
    assert all((config.views_dir / name).exists() for name in REQUIRED_VIEWS)

    session = RenderSession.from_views_dir(config.views_dir)
    html = session.render(
        "tag",
        {
            "page": {"title": "#deno", "description": "Pages tagged #deno"},
            "name": "deno",
            "breadcrumbs": [],
            "indexLinks": [],
            "site": config.site.model_dump(),
        },
    )

    assert "<title>#deno | " in html
    assert "<h1>#deno</h1>" in html


def test_date_filters(tmp_path: Path) -> None:
    views = _views(tmp_path, {"page.html": "{{ when | readable_date }}|{{ when | isodate }}|{{ when | rfc2822 }}"})
    session = RenderSession(views)

    html = session.render("page", {"when": datetime(2023, 3, 7, 9, 30, tzinfo=timezone.utc)})

    assert html == "Mar 07, 2023|2023-03-07T09:30:00Z|Tue, 07 Mar 2023 09:30:00 +0000"
