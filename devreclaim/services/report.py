from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from devreclaim.models.enums import Category, SafetyLevel
from devreclaim.models.finding import Finding, FindingBundle, sort_findings
from devreclaim.models.removal import RemovalOutcome, RemovalSummary
from devreclaim.services.formatting import format_bytes, shorten_home

LEGEND = "Legend: ✓ Safe  ⚠ Caution  ⛔ Warning"


def _level(safety: SafetyLevel) -> Text:
    return Text(safety.icon, style=safety.style)


def _category_table(category: Category, findings: list[Finding], home: str) -> Table:
    total = sum(item.size_bytes for item in findings)
    table = Table(title=f"{category.label} ({format_bytes(total)})", title_justify="left", header_style="bold yellow")
    table.add_column("", width=2)
    table.add_column("Description")
    table.add_column("Path", overflow="fold")
    table.add_column("Size", justify="right")
    for item in findings:
        table.add_row(
            _level(item.safety),
            Text(item.description, style=item.safety.style),
            shorten_home(item.path, home),
            format_bytes(item.size_bytes),
        )
    return table


def render_scan_report(console: Console, bundle: FindingBundle, home: str = "") -> None:
    """Group findings by category, largest category first, largest item first."""
    if not bundle.findings:
        console.print("[green]✨ No cleanable items found![/green]")
        return

    ordered = sort_findings(bundle.findings)
    grouped: dict[Category, list[Finding]] = {}
    for item in ordered:
        grouped.setdefault(item.category, []).append(item)

    console.print("[bold magenta]🔍 Scan Results[/bold magenta]")
    for category, findings in sorted(grouped.items(), key=lambda kv: sum(i.size_bytes for i in kv[1]), reverse=True):
        console.print(_category_table(category, findings, home))

    console.print(Rule())
    console.print(f"📊 Total cleanable: [bold]{format_bytes(bundle.total_bytes)}[/bold]")
    if bundle.skipped_entries:
        console.print(f"[dim]{bundle.skipped_entries} unreadable entries were skipped; sizes may be understated.[/dim]")
    console.print(f"[dim]{LEGEND}[/dim]")
    console.print("[dim]Run 'devreclaim clean' to interactively select items to clean[/dim]")


def render_dry_run(console: Console, findings: list[Finding]) -> None:
    console.print("[bold magenta]🔍 Dry Run - Would clean:[/bold magenta]")
    for item in findings:
        console.print(f"  • {escape(item.description)} ({format_bytes(item.size_bytes)})")
        console.print(f"    {escape(item.path)}", highlight=False)
    console.print(Rule())
    console.print(f"📊 Would free: [bold]{format_bytes(sum(i.size_bytes for i in findings))}[/bold]")


def render_outcome(console: Console, outcome: RemovalOutcome) -> None:
    """One line per attempted deletion, printed as the executor goes."""
    description = escape(outcome.finding.description)
    if outcome.ok:
        console.print(f"  Removing {description}... [green]✓ {format_bytes(outcome.result.unwrap())} freed[/green]")
    else:
        console.print(f"  Removing {description}... [red]❌ Failed: {escape(outcome.result.unwrap_err())}[/red]")


def render_removal_summary(console: Console, summary: RemovalSummary) -> None:
    if summary.purge is not None:
        if summary.purge.is_ok():
            console.print("  Removing unavailable devices... [green]✓[/green]")
        else:
            console.print(f"  Removing unavailable devices... [red]❌ Failed: {escape(summary.purge.unwrap_err())}[/red]")
    console.print()
    console.print(f"✨ Done! Cleaned {summary.succeeded} items, freed [bold]{format_bytes(summary.freed_bytes)}[/bold]")
    if summary.failed:
        console.print(f"[yellow]⚠️  {summary.failed} items failed to clean[/yellow]")
