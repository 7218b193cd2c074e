"""Rich terminal reporter — colour, icons, severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from secretguard.findings.models import ScanReport
from secretguard.findings.redactor import mask

_SEVERITY_STYLE = {
    "high": "bold white on dark_orange",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "high": "🟠",
    "medium": "🟡",
    "low": "🔵",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def _location(line: int, column: int) -> str:
    if line <= 0:
        return "-"
    return f"{line}:{column}" if column > 0 else str(line)


def render(
    report: ScanReport,
    *,
    full_redaction: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    for failed in report.errors:
        console.print(f"[bold red]✗[/bold red] {escape(failed.file)}: {escape(failed.error or '')}")

    findings = report.findings
    if not findings:
        console.print()
        console.print("[bold green]✅ No secrets detected.[/bold green]")
        if show_summary:
            _print_summary(console, report)
        return

    console.print()
    table = Table(
        title="SecretGuard Findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Rule", style="cyan", min_width=20)
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Match", min_width=15)
    table.add_column("Confidence", justify="right")

    for finding in findings:
        table.add_row(
            _severity_pill(finding.severity),
            finding.type,
            Text(finding.file),
            _location(finding.line_start, finding.start_column),
            Text(mask(finding.match, full=full_redaction)),
            f"{finding.confidence:.2f}",
        )

    console.print(table)

    if show_summary:
        _print_summary(console, report)

    console.print()
    console.print(
        f"[bold red]❌ {len(findings)} potential secret(s) detected.[/bold red]"
    )


def _print_summary(console: Console, report: ScanReport) -> None:
    stats = report.stats
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {stats.files_scanned}")
    console.print(f"[dim]Findings:[/dim]       {report.total_findings}")
    console.print(f"[dim]Suppressed:[/dim]     {stats.findings_suppressed}")
    console.print(f"[dim]Errors:[/dim]         {len(report.errors)}")
    console.print(f"[dim]Avg scan time:[/dim]  {stats.avg_scan_time_ms:.1f}ms")
