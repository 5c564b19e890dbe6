from __future__ import annotations

from result import Err, Ok
from rich.console import Console

from devreclaim.models.enums import Category, SafetyLevel
from devreclaim.models.finding import FindingBundle
from devreclaim.models.removal import RemovalOutcome, RemovalSummary
from devreclaim.services.report import (
    render_dry_run,
    render_outcome,
    render_removal_summary,
    render_scan_report,
)
from tests.factories import MB, make_finding


def _console() -> Console:
    return Console(record=True, width=200, color_system=None)


def test_scan_report_groups_by_category_largest_first() -> None:
    bundle = FindingBundle(
        findings=[
            make_finding("/h/.gradle/caches", 300 * MB, category=Category.ANDROID, description="Gradle caches"),
            make_finding("/h/.gemini/brain", 5 * MB, SafetyLevel.CAUTION, description="AI memory cache"),
            make_finding("/h/.gemini/rec", 50 * MB, description="Session recordings"),
        ]
    )
    console = _console()
    render_scan_report(console, bundle)
    out = console.export_text()

    assert out.index("Android (300.0 MB)") < out.index("Antigravity (55.0 MB)")
    assert out.index("Session recordings") < out.index("AI memory cache")
    assert "Total cleanable: 355.0 MB" in out
    assert "Legend" in out


def test_scan_report_mentions_skipped_entries() -> None:
    bundle = FindingBundle(findings=[make_finding("/h/x", 10)], skipped_entries=3)
    console = _console()
    render_scan_report(console, bundle)
    assert "3 unreadable entries were skipped" in console.export_text()


def test_scan_report_empty() -> None:
    console = _console()
    render_scan_report(console, FindingBundle())
    assert "No cleanable items found" in console.export_text()


def test_dry_run_lists_paths_and_total() -> None:
    findings = [
        make_finding("/h/a", 700 * MB, description="Alpha"),
        make_finding("/h/b", 400 * MB, description="Beta"),
        make_finding("/h/c", 129 * MB, description="Gamma"),
    ]
    console = _console()
    render_dry_run(console, findings)
    out = console.export_text()

    for item in findings:
        assert item.path in out
        assert item.description in out
    assert "Would free: 1.2 GB" in out


def test_outcome_lines() -> None:
    console = _console()
    render_outcome(console, RemovalOutcome(make_finding("/h/a", MB, description="Alpha"), Ok(MB)))
    render_outcome(console, RemovalOutcome(make_finding("/h/b", MB, description="Beta"), Err("busy")))
    out = console.export_text()
    assert "Removing Alpha... ✓ 1.0 MB freed" in out
    assert "Removing Beta... ❌ Failed: busy" in out


def test_removal_summary() -> None:
    summary = RemovalSummary(
        outcomes=[
            RemovalOutcome(make_finding("/h/a", 500 * MB), Ok(500 * MB)),
            RemovalOutcome(make_finding("/h/b", 10 * MB), Err("denied")),
        ],
        purge=Err("no xcrun"),
    )
    console = _console()
    render_removal_summary(console, summary)
    out = console.export_text()
    assert "Cleaned 1 items, freed 500.0 MB" in out
    assert "1 items failed to clean" in out
    assert "Removing unavailable devices... ❌ Failed: no xcrun" in out


def test_scan_report_shortens_home() -> None:
    bundle = FindingBundle(findings=[make_finding("/home/dev/.gradle/caches", 300 * MB, category=Category.ANDROID)])
    console = _console()
    render_scan_report(console, bundle, home="/home/dev")
    assert "~/.gradle/caches" in console.export_text()
