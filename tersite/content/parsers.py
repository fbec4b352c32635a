"""Parse Markdown source files into `Page` instances."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import FrontMatterError
from ..markdown import render_markdown
from ..utils import slugify, title_from_stem
from .models import Page

INDEX_STEM = "index"
TAG_SPLIT_RE = re.compile(r"[,\s]+")


def load_page(path: str | Path, content_root: str | Path) -> Page:
    """Load a markdown file with YAML front matter into a page.

    ``path`` must live under ``content_root``; the page's key is its
    slash-separated location relative to that root.
    """
    source_path = Path(path)
    relative = source_path.resolve().relative_to(Path(content_root).resolve()).as_posix()
    try:
        text = source_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontMatterError(f"{source_path} is not valid UTF-8 text.") from exc

    try:
        attributes, body = _split_front_matter(text)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML front matter in {source_path}: {exc}") from exc
    except FrontMatterError as exc:
        raise FrontMatterError(f"{exc} ({source_path})") from exc

    try:
        return parse_page(relative, attributes, body)
    except (ValidationError, ValueError, TypeError) as exc:
        raise FrontMatterError(f"Invalid metadata in {source_path}: {exc}") from exc


def parse_page(relative_path: str, attributes: dict[str, Any], body: str) -> Page:
    """Build a page from already-split front matter and Markdown body."""
    stem = Path(relative_path).stem
    is_index = stem == INDEX_STEM
    directory = Path(relative_path).parent.name

    if is_index:
        slug = ""
    elif attributes.get("slug"):
        slug = slugify(str(attributes["slug"]))
    else:
        slug = slugify(stem) or stem

    title = attributes.get("title")
    if not title:
        title = title_from_stem(directory) if is_index and directory else title_from_stem(stem)

    description = attributes.get("description")
    return Page(
        path=relative_path,
        slug=slug,
        title=str(title),
        description=str(description) if description is not None else None,
        tags=_parse_tags(attributes.get("tags")),
        date=_parse_date(attributes.get("date")),
        attributes=attributes,
        content=render_markdown(body),
        is_index=is_index,
    )


def _split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    lines = text.splitlines()
    if not lines:
        return {}, ""
    if lines[0].strip() != "---":
        return {}, text

    front_lines: list[str] = []
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            raw_front_matter = "\n".join(front_lines)
            body = "\n".join(lines[idx + 1 :])
            data = yaml.safe_load(raw_front_matter) or {}
            if not isinstance(data, dict):
                raise FrontMatterError("Front matter must be a mapping.")
            return data, body
        front_lines.append(line)
    raise FrontMatterError("Closing front matter delimiter '---' missing.")


def _parse_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [tag for tag in TAG_SPLIT_RE.split(value) if tag]
    if isinstance(value, (list, tuple, set)):
        return [str(tag).strip() for tag in value if str(tag).strip()]
    raise TypeError(f"tags must be a list or a string, got {type(value).__name__}")


def _parse_date(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise TypeError(f"date must be an ISO date, got {type(value).__name__}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
