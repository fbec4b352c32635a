"""Build reporting helpers for tersite."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field

from .render import OutcomeKind, RenderOutcome


class RenderStats(BaseModel):
    produced: int = 0
    skipped: int = 0
    failed: int = 0
    skipped_labels: list[str] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)


class BuildReport(BaseModel):
    generated_at: datetime
    duration_seconds: float
    pages: int
    drafts_skipped: int
    tags: int
    files_written: int
    assets_copied: int
    renders: RenderStats
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return self.renders.failed > 0


def build_render_stats(outcomes: Iterable[RenderOutcome]) -> RenderStats:
    stats = RenderStats()
    for outcome in outcomes:
        if outcome.kind is OutcomeKind.PRODUCED:
            stats.produced += 1
        elif outcome.kind is OutcomeKind.SKIPPED:
            stats.skipped += 1
            stats.skipped_labels.append(outcome.label)
        else:
            stats.failed += 1
            stats.failures[outcome.label] = outcome.reason or "unknown error"
    return stats


def assemble_report(
    *,
    duration_seconds: float,
    pages: int,
    drafts_skipped: int,
    tags: int,
    files_written: int,
    assets_copied: int,
    renders: RenderStats,
    warnings: Iterable[str] = (),
) -> BuildReport:
    collected = list(warnings)
    for label in renders.skipped_labels:
        collected.append(f"No output rendered for {label}")
    for label, reason in renders.failures.items():
        collected.append(f"Render failed for {label}: {reason}")

    return BuildReport(
        generated_at=datetime.now(timezone.utc),
        duration_seconds=duration_seconds,
        pages=pages,
        drafts_skipped=drafts_skipped,
        tags=tags,
        files_written=files_written,
        assets_copied=assets_copied,
        renders=renders,
        warnings=collected,
    )


def write_report(report: BuildReport, target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report.model_dump(mode="json"), handle, ensure_ascii=False, indent=2)
    return target
