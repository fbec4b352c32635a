"""Typed representations of pages and the projections derived from them."""

from __future__ import annotations

import posixpath
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def join_url(*segments: str) -> str:
    """Join path segments into an absolute site path without a trailing slash."""
    parts = [part.strip("/") for part in segments if part and part.strip("/") not in {"", "."}]
    return "/" + "/".join(parts)


def parent_url(url: str) -> str:
    return posixpath.dirname(url.rstrip("/")) or "/"


class Page(BaseModel):
    """A single content document, parsed and pre-rendered."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Slash-separated source path relative to the content root.")
    slug: str = Field(default="", description="Final URL segment; empty for hub pages.")
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    tags: tuple[str, ...] = Field(default_factory=tuple)
    date: Optional[datetime] = Field(default=None)
    attributes: dict[str, Any] = Field(default_factory=dict)
    content: str = Field(default="", description="Pre-rendered HTML body.")
    is_index: bool = Field(default=False)

    @field_validator("path")
    def _normalize_path(cls, value: str) -> str:
        return value.replace("\\", "/").strip("/")

    @field_validator("slug")
    def _strip_slug(cls, value: str) -> str:
        return value.strip().strip("/")

    @field_validator("tags", mode="before")
    def _unique_tags(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: dict[str, None] = {}
        for tag in value:
            text = str(tag).strip()
            if text:
                seen.setdefault(text, None)
        return tuple(seen)

    @field_validator("date")
    def _ensure_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path)

    @property
    def url(self) -> str:
        return join_url(self.directory, self.slug)

    def has_attribute(self, key: str) -> bool:
        return key in self.attributes

    def is_pinned(self, key: str = "pinned") -> bool:
        return self.has_attribute(key)


class IndexItem(BaseModel):
    """Lightweight projection of a page used in any listing."""

    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    is_index_page: bool = False
    pinned: bool = False
    date: Optional[datetime] = None
    readable_date: Optional[str] = None

    def to_template_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "isIndexPage": self.is_index_page,
            "pinned": self.pinned,
            "date": self.date,
            "readableDate": self.readable_date,
        }


class Breadcrumb(BaseModel):
    """One step of a navigation trail."""

    slug: str
    url: str
    current: bool = False
    is_tag: bool = False

    def to_template_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "url": self.url,
            "current": self.current,
            "isTag": self.is_tag,
        }


class TagPage(BaseModel):
    """A synthesized listing of every page carrying one tag."""

    name: str
    pages: tuple[Page, ...] = Field(default_factory=tuple)
