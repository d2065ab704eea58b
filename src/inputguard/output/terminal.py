"""Rich terminal reporter — colour, icons, severity pills."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from inputguard.findings.models import ScanResult
from inputguard.findings.redactor import display_match

_SEVERITY_STYLE = {
    "HIGH": "bold white on red",
    "MEDIUM": "bold black on yellow",
    "LOW": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "HIGH": "🔴",
    "MEDIUM": "🟡",
    "LOW": "🔵",
}

_MAX_MATCH_WIDTH = 60


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity} ", style=style)


def _shorten(text: str) -> str:
    text = text.replace("\n", "\\n")
    if len(text) <= _MAX_MATCH_WIDTH:
        return text
    return text[: _MAX_MATCH_WIDTH - 3] + "..."


def render(
    result: ScanResult,
    *,
    redact_tokens: bool = True,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if result.passed:
        console.print()
        console.print("[bold green]✅ No threats detected — input is clean.[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title=f"inputguard threats ({result.scanner_label})",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Field", style="magenta")
    table.add_column("Type", style="cyan", min_width=18)
    table.add_column("Pos", justify="right", style="green")
    table.add_column("Match", min_width=15)
    table.add_column("Recommendation", style="dim")

    for field in result.fields:
        for threat in field.threats:
            matched = display_match(
                threat.matched_text, threat.category, redact_tokens=redact_tokens
            )
            table.add_row(
                _severity_pill(threat.severity),
                field.name,
                threat.subtype,
                str(threat.offset),
                Text(_shorten(matched)),
                threat.recommendation,
            )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]❌ FAILED — {len(result.failed_fields)} field(s) look unsafe.[/bold red]"
    )


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Fields scanned:[/dim] {len(result.fields)}")
    console.print(f"[dim]Threats:[/dim]        {result.total_threats}")
    console.print(f"[dim]Failed fields:[/dim]  {len(result.failed_fields)}")
    console.print(f"[dim]Score:[/dim]          {result.security_score:.2f}")
    console.print(f"[dim]Duration:[/dim]       {result.duration_ms:.0f}ms")
