"""Jinja2 rendering sessions for the page, tag and feed views."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import format_datetime as format_rfc2822
from pathlib import Path
from typing import Any, Mapping

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    select_autoescape,
)

from .errors import ViewError
from .listing import readable_date

logger = logging.getLogger(__name__)

VIEW_FILES: dict[str, str] = {
    "base": "base.html",
    "page": "page.html",
    "tag": "tag.html",
    "feed": "feed.xml",
}
HEAD_VIEW = "head.html"
REQUIRED_VIEWS: tuple[str, ...] = (*VIEW_FILES.values(), HEAD_VIEW)


class RenderSession:
    """An isolated Jinja environment plus the fragments shared by its views.

    Each session owns its fragment registry, so two sessions never see each
    other's definitions. Views reference fragments by name, e.g.
    ``{% include "head" %}``.
    """

    def __init__(self, views_dir: Path, *, fragments: Mapping[str, str] | None = None) -> None:
        if not views_dir.is_dir():
            raise ViewError(f"Views directory '{views_dir}' does not exist.")
        self._views_dir = views_dir
        self._fragments: dict[str, str] = dict(fragments or {})
        self._environment = Environment(
            loader=ChoiceLoader([DictLoader(self._fragments), FileSystemLoader(str(views_dir))]),
            autoescape=select_autoescape(["html", "xml"], default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._environment.filters["readable_date"] = readable_date
        self._environment.filters["rfc2822"] = _format_rfc2822
        self._environment.filters["isodate"] = _format_iso

    @classmethod
    def from_views_dir(cls, views_dir: Path) -> "RenderSession":
        """Open a session over ``views_dir`` with its head include registered."""
        session = cls(views_dir)
        session.ensure_views(REQUIRED_VIEWS)
        head_path = views_dir / HEAD_VIEW
        try:
            session.define("head", head_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ViewError(f"Unable to read head include {head_path}: {exc}") from exc
        return session

    @property
    def views_dir(self) -> Path:
        return self._views_dir

    @property
    def environment(self) -> Environment:
        return self._environment

    def define(self, name: str, source: str) -> None:
        """Register a reusable fragment for this session only."""
        # The DictLoader shares this mapping, so redefinitions are picked up on reload.
        self._fragments[name] = source

    def render(self, view: str, context: Mapping[str, Any]) -> str:
        template_name = VIEW_FILES.get(view, view)
        template = self._environment.get_template(template_name)
        return template.render(**context)

    def ensure_views(self, names: tuple[str, ...]) -> None:
        for name in names:
            try:
                self._environment.get_template(name)
            except TemplateNotFound as exc:
                raise ViewError(
                    f"Required view '{name}' not found in '{self._views_dir}'. Run 'tersite init' to create it."
                ) from exc


def _format_rfc2822(value: datetime | None) -> str:
    if value is None:
        return ""
    normalized = value
    if normalized.tzinfo is None:
        normalized = normalized.replace(tzinfo=timezone.utc)
    return format_rfc2822(normalized.astimezone(timezone.utc))


def _format_iso(value: datetime | None) -> str:
    if value is None:
        return ""
    normalized = value
    if normalized.tzinfo is None:
        normalized = normalized.replace(tzinfo=timezone.utc)
    return normalized.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
