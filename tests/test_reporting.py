from __future__ import annotations

import json
from pathlib import Path

from tersite.render import RenderOutcome
from tersite.reporting import assemble_report, build_render_stats, write_report


def _outcomes() -> list[RenderOutcome]:
    return [
        RenderOutcome.produced("a.md", "<p>a</p>"),
        RenderOutcome.skipped("b.md", "view produced empty output"),
        RenderOutcome.failed("c.md", RuntimeError("boom")),
    ]


def test_render_stats_count_each_outcome() -> None:
    stats = build_render_stats(_outcomes())

    assert (stats.produced, stats.skipped, stats.failed) == (1, 1, 1)
    assert stats.skipped_labels == ["b.md"]
    assert stats.failures == {"c.md": "boom"}


def test_report_collects_warnings_and_writes_json(tmp_path: Path) -> None:
    report = assemble_report(
        duration_seconds=0.5,
        pages=3,
        drafts_skipped=1,
        tags=2,
        files_written=1,
        assets_copied=0,
        renders=build_render_stats(_outcomes()),
        warnings=["2 outputs target x"],
    )

    assert report.has_failures
    assert report.warnings == [
        "2 outputs target x",
        "No output rendered for b.md",
        "Render failed for c.md: boom",
    ]

    target = write_report(report, tmp_path / "reports" / "build.json")
    payload = json.loads(target.read_text(encoding="utf-8"))

    assert payload["pages"] == 3
    assert payload["renders"]["failed"] == 1
    assert payload["warnings"][0] == "2 outputs target x"


def test_clean_build_has_no_failures() -> None:
    report = assemble_report(
        duration_seconds=0.1,
        pages=1,
        drafts_skipped=0,
        tags=0,
        files_written=1,
        assets_copied=0,
        renders=build_render_stats([RenderOutcome.produced("a.md", "x")]),
    )

    assert not report.has_failures
    assert report.warnings == []
