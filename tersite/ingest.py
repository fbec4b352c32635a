"""Walk the content tree and load pages and static assets from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .config import Config
from .content import Page, load_page
from .utils import is_hidden

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".md", ".markdown"}


@dataclass(slots=True)
class ContentInventory:
    """Source files discovered under the content root."""

    documents: list[Path] = field(default_factory=list)
    static: list[Path] = field(default_factory=list)


@dataclass(slots=True)
class LoadResult:
    """Pages admitted to the build plus the drafts held back."""

    pages: list[Page] = field(default_factory=list)
    drafts: list[Page] = field(default_factory=list)


def discover_content(config: Config) -> ContentInventory:
    """Collect Markdown documents and static assets below ``content_dir``.

    Hidden entries, the output directory, and the views/assets directories
    are never treated as content.
    """
    root = config.content_dir
    inventory = ContentInventory()
    if not root.exists():
        logger.warning("Content directory %s does not exist.", root)
        return inventory

    excluded = {path.resolve() for path in (config.output_dir, config.views_dir, config.assets_dir)}
    for path in _iter_files(root, excluded):
        if path.suffix.lower() in SUPPORTED_SUFFIXES:
            inventory.documents.append(path)
        elif config.is_static(path):
            inventory.static.append(path)
    return inventory


def load_pages(config: Config, documents: Iterable[Path]) -> LoadResult:
    """Parse every document, holding back pages flagged with an ignore key."""
    result = LoadResult()
    for path in documents:
        page = load_page(path, config.content_dir)
        if not config.render_drafts and is_draft(page, config.ignore_keys):
            logger.debug("Skipping draft %s", page.path)
            result.drafts.append(page)
            continue
        result.pages.append(page)
    return result


def is_draft(page: Page, ignore_keys: Iterable[str]) -> bool:
    return any(page.has_attribute(key) for key in ignore_keys)


def list_assets(config: Config) -> list[Path]:
    """Files under the configured assets directory, in a stable order."""
    root = config.assets_dir
    if not root.is_dir():
        return []
    return sorted(path for path in root.rglob("*") if path.is_file())


def _iter_files(root: Path, excluded: set[Path]) -> Iterator[Path]:
    for path in sorted(root.iterdir()):
        if is_hidden(path.name):
            continue
        if path.is_dir():
            if path.resolve() in excluded:
                continue
            yield from _iter_files(path, excluded)
        elif path.is_file():
            yield path
