"""End-to-end build: load pages, render every output, write the site tree."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .config import Config
from .content.models import Page, TagPage
from .errors import ConfigError
from .feeds import render_feed
from .ingest import discover_content, list_assets, load_pages
from .output import (
    OutputFile,
    copy_files,
    find_collisions,
    plan_content_files,
    plan_feed_file,
    plan_static_files,
    plan_tag_files,
    write_files,
)
from .render import RenderOutcome, ViewRenderer, render_page, render_tag_page
from .reporting import BuildReport, assemble_report, build_render_stats
from .store import PageStore
from .tags import tag_pages
from .utils import is_single_segment
from .views import RenderSession

logger = logging.getLogger(__name__)

ASSETS_SEGMENT = "assets"

FileCallback = Callable[[OutputFile], None]


@dataclass(slots=True)
class BuildResult:
    """Everything a build produced, for reporting and tests."""

    report: BuildReport
    store: PageStore
    page_outcomes: list[tuple[Page, RenderOutcome]] = field(default_factory=list)
    tag_outcomes: list[tuple[TagPage, RenderOutcome]] = field(default_factory=list)
    feed_outcome: RenderOutcome | None = None
    files: list[OutputFile] = field(default_factory=list)


def check_output_directory(config: Config) -> Path:
    """Return the resolved output directory, refusing one that is or contains the content root."""
    output = config.output_dir.resolve()
    content = config.content_dir.resolve()
    if output == content or output in content.parents:
        raise ConfigError(f"Output directory {output} overlaps the content directory {content}.")
    return output


def reset_output_directory(config: Config) -> None:
    """Remove and recreate the output directory."""
    output = check_output_directory(config)
    if output.exists():
        shutil.rmtree(output)
    output.mkdir(parents=True, exist_ok=True)


def build_site(
    config: Config,
    *,
    renderer: ViewRenderer | None = None,
    on_write: FileCallback | None = None,
    on_copy: FileCallback | None = None,
) -> BuildResult:
    """Run a full build of ``config`` into its output directory."""
    start = time.perf_counter()
    inventory = discover_content(config)
    loaded = load_pages(config, inventory.documents)
    store = PageStore(loaded.pages)
    session = renderer if renderer is not None else RenderSession.from_views_dir(config.views_dir)
    output_root = config.output_dir

    warnings: list[str] = []
    page_outcomes = [(page, render_page(store, page, session, config)) for page in store]
    tags: list[TagPage] = []
    for tag in tag_pages(store):
        if not is_single_segment(tag.name):
            message = f"Tag '{tag.name}' cannot be used as a directory name; its tag page was not written."
            logger.warning(message)
            warnings.append(message)
            continue
        tags.append(tag)
    tag_outcomes = [(tag, render_tag_page(tag, session, config)) for tag in tags]
    feed_outcome = render_feed(store, session, config)

    files: list[OutputFile] = []
    files.extend(plan_content_files(page_outcomes, output_root))
    files.extend(plan_tag_files(tag_outcomes, output_root))
    feed_file = plan_feed_file(feed_outcome, output_root, config.feed_path)
    if feed_file is not None:
        files.append(feed_file)
    files.extend(plan_static_files(inventory.static, config.content_dir, output_root))
    files.extend(plan_static_files(list_assets(config), config.assets_dir, output_root / ASSETS_SEGMENT))

    for path, count in find_collisions(files).items():
        message = f"{count} outputs target {path}; the last one written wins."
        logger.warning(message)
        warnings.append(message)

    written = write_files(files, on_write)
    copied = copy_files(files, on_copy)

    outcomes = [outcome for _, outcome in page_outcomes]
    outcomes.extend(outcome for _, outcome in tag_outcomes)
    outcomes.append(feed_outcome)
    report = assemble_report(
        duration_seconds=time.perf_counter() - start,
        pages=len(store),
        drafts_skipped=len(loaded.drafts),
        tags=len(tags),
        files_written=written,
        assets_copied=copied,
        renders=build_render_stats(outcomes),
        warnings=warnings,
    )
    return BuildResult(
        report=report,
        store=store,
        page_outcomes=page_outcomes,
        tag_outcomes=tag_outcomes,
        feed_outcome=feed_outcome,
        files=files,
    )
