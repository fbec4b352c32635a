"""Plan destination paths for rendered outputs and perform the file I/O."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

from .content.models import Page, TagPage
from .errors import OutputWriteError
from .render import RenderOutcome
from .utils import is_single_segment

INDEX_FILENAME = "index.html"
TAG_SEGMENT = "tag"


@dataclass(frozen=True, slots=True)
class OutputFile:
    """A file to write (``file_content``) or to copy verbatim (``input_path``)."""

    file_path: Path
    file_content: str | None = None
    input_path: Path | None = None

    def __post_init__(self) -> None:
        if (self.file_content is None) == (self.input_path is None):
            raise ValueError("OutputFile needs exactly one of file_content or input_path.")

    @property
    def is_copy(self) -> bool:
        return self.input_path is not None


def page_destination(output_root: Path, url: str) -> Path:
    """``/a/b`` becomes ``<output_root>/a/b/index.html``."""
    relative = url.strip("/")
    return (output_root / relative / INDEX_FILENAME) if relative else output_root / INDEX_FILENAME


def tag_destination(output_root: Path, name: str) -> Path:
    if not is_single_segment(name):
        raise ValueError(f"Tag '{name}' cannot be used as a directory name.")
    return output_root / TAG_SEGMENT / name / INDEX_FILENAME


def plan_content_files(
    rendered: Iterable[tuple[Page, RenderOutcome]],
    output_root: Path,
) -> list[OutputFile]:
    return _plan(
        ((page_destination(output_root, page.url), outcome) for page, outcome in rendered),
    )


def plan_tag_files(
    rendered: Iterable[tuple[TagPage, RenderOutcome]],
    output_root: Path,
) -> list[OutputFile]:
    return _plan(((tag_destination(output_root, tag.name), outcome) for tag, outcome in rendered))


def plan_feed_file(outcome: RenderOutcome, output_root: Path, feed_path: Path) -> OutputFile | None:
    planned = _plan([(output_root / feed_path, outcome)])
    return planned[0] if planned else None


def plan_static_files(entries: Iterable[Path], input_root: Path, output_root: Path) -> list[OutputFile]:
    """Mirror each asset's path relative to ``input_root`` under ``output_root``."""
    files: list[OutputFile] = []
    for entry in entries:
        relative = entry.relative_to(input_root)
        files.append(OutputFile(file_path=output_root / relative, input_path=entry))
    return files


def _plan(destinations: Iterable[tuple[Path, RenderOutcome]]) -> list[OutputFile]:
    files: list[OutputFile] = []
    for destination, outcome in destinations:
        if not outcome.ok or outcome.content is None:
            continue
        files.append(OutputFile(file_path=destination, file_content=outcome.content))
    return files


def find_collisions(files: Sequence[OutputFile]) -> dict[Path, int]:
    """Destinations claimed by more than one output, with their claim counts."""
    counts: dict[Path, int] = {}
    for file in files:
        counts[file.file_path] = counts.get(file.file_path, 0) + 1
    return {path: count for path, count in counts.items() if count > 1}


def write_files(files: Iterable[OutputFile], on_write: Callable[[OutputFile], None] | None = None) -> int:
    """Write every rendered output; the last write to a path wins."""
    written = 0
    for file in files:
        if file.file_content is None:
            continue
        _write_one(file.file_path, file.file_content)
        written += 1
        if on_write is not None:
            on_write(file)
    return written


def copy_files(files: Iterable[OutputFile], on_copy: Callable[[OutputFile], None] | None = None) -> int:
    """Copy every static asset verbatim."""
    copied = 0
    for file in files:
        if file.input_path is None:
            continue
        _copy_one(file.input_path, file.file_path)
        copied += 1
        if on_copy is not None:
            on_copy(file)
    return copied


def _write_one(destination: Path, content: str) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(str(destination), exc) from exc


def _copy_one(source: Path, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    except OSError as exc:
        raise OutputWriteError(str(destination), exc) from exc
