"""inputguard CLI — Typer application with scan, patterns, and init commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from inputguard import __version__

app = typer.Typer(
    name="inputguard",
    help="Scan untrusted input for injection payloads and leaked credentials.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _read_fields_file(path: Path) -> List[Any]:
    """Read a JSON or YAML list of field records (or ``{fields: [...]}``)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Input error:[/bold red] cannot read {path}: {exc}")
        raise typer.Exit(code=2) from exc

    if isinstance(data, dict) and "fields" in data:
        data = data["fields"]
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        console.print(f"[bold red]Input error:[/bold red] {path} must hold a list of fields")
        raise typer.Exit(code=2)
    return data


def _parse_field_option(raw: str) -> dict:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        console.print(f"[bold red]Invalid --field:[/bold red] {raw!r} (expected NAME=VALUE)")
        raise typer.Exit(code=2)
    return {"name": name, "value": value}


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    input_file: Optional[Path] = typer.Argument(None, help="JSON or YAML file with a list of fields"),
    field: List[str] = typer.Option([], "--field", "-f", help="Inline field as NAME=VALUE (repeatable)"),
    category: List[str] = typer.Option([], "--category", "-k", help="Category to scan (repeatable, default: all)"),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict", help="Report MEDIUM threats as HIGH"),
    stop_on_first: Optional[bool] = typer.Option(None, "--stop-on-first/--no-stop-on-first", help="Stop at the first threat"),
    include_values: Optional[bool] = typer.Option(None, "--include-values/--no-include-values", help="Echo field values in results"),
    format: Optional[str] = typer.Option(None, "--format", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .inputguard.toml"),
    patterns_dir: Optional[Path] = typer.Option(None, "--patterns-dir", help="Directory of custom pattern YAML files"),
    show_tokens: bool = typer.Option(False, "--show-tokens", help="Do not redact leaked credentials in reports"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Scan field values for SQL/NoSQL injection, XSS, path traversal and token leaks."""
    from inputguard.config.loader import ConfigError, load_config
    from inputguard.config.schema import InvalidCategoryError, parse_category
    from inputguard.output import json_report, terminal
    from inputguard.rules.registry import load_pattern_files
    from inputguard.scanner.engine import ScanError, Scanner

    _configure_logging(debug)
    project_root = Path.cwd()

    # --- Load config ---
    try:
        cfg = load_config(project_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if strict is not None:
        cfg.scanner.strict_mode = strict
    if stop_on_first is not None:
        cfg.scanner.stop_on_first_threat = stop_on_first
    if include_values is not None:
        cfg.scanner.include_value_in_response = include_values
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if category:
        cfg.scanner.categories = list(category)

    try:
        categories = list(dict.fromkeys(parse_category(c) for c in cfg.scanner.categories))
    except InvalidCategoryError as exc:
        console.print(f"[bold red]Invalid category:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Custom patterns ---
    directory = patterns_dir or project_root / cfg.patterns.directory
    try:
        custom = load_pattern_files(directory)
    except ConfigError as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    scanner = Scanner(cfg.to_scanner_config(custom))

    # --- Collect fields ---
    records: List[Any] = []
    if input_file is not None:
        records.extend(_read_fields_file(input_file))
    records.extend(_parse_field_option(raw) for raw in field)

    if not records:
        console.print("[dim]No fields to scan.[/dim]")
        raise typer.Exit(code=0)

    if verbose or debug:
        console.print(f"[dim]Patterns loaded: {len(scanner.registry)}[/dim]")
        console.print(f"[dim]Fields: {len(records)}[/dim]")
        labels = ", ".join(c.value for c in categories) or "all"
        console.print(f"[dim]Categories: {labels}[/dim]")

    # --- Run scan ---
    try:
        if not categories:
            result = scanner.scan_all(records)
        elif len(categories) == 1:
            result = scanner.scan(records, categories[0])
        else:
            result = scanner.scan_multiple(records, categories)
    except (ScanError, TypeError) as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    redact_tokens = cfg.output.redact_tokens and not show_tokens
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(result, redact_tokens=redact_tokens, show_summary=cfg.output.show_summary)
    else:
        report_text = json_report.render(result, redact_tokens=redact_tokens)
        print(report_text)

    if output:
        if report_text is None:
            report_text = json_report.render(result, redact_tokens=redact_tokens)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    raise typer.Exit(code=0 if result.passed else 1)


# ── patterns ──────────────────────────────────────────────────────────────────


@app.command()
def patterns(
    category: Optional[str] = typer.Option(None, "--category", "-k", help="Only list this category"),
    patterns_dir: Optional[Path] = typer.Option(None, "--patterns-dir", help="Directory of custom pattern YAML files"),
) -> None:
    """List the built-in and custom detection patterns."""
    from inputguard.config.loader import ConfigError
    from inputguard.config.schema import InvalidCategoryError, parse_category
    from inputguard.rules.registry import PatternRegistry, load_pattern_files

    try:
        wanted = parse_category(category) if category else None
    except InvalidCategoryError as exc:
        console.print(f"[bold red]Invalid category:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    try:
        custom = load_pattern_files(patterns_dir) if patterns_dir else {}
    except ConfigError as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    registry = PatternRegistry(custom)
    table = Table(title="inputguard patterns", border_style="dim")
    table.add_column("Category", style="magenta")
    table.add_column("Type", style="cyan")
    table.add_column("Severity", justify="center")
    table.add_column("Pattern", overflow="fold")

    for cat, pattern in registry.items():
        if wanted is not None and cat is not wanted:
            continue
        table.add_row(cat.value, pattern.subtype, pattern.severity, pattern.source)

    Console().print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .inputguard.toml in the current directory."""
    from inputguard.config.defaults import DEFAULT_TOML
    from inputguard.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"inputguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """inputguard — scan untrusted input for injection payloads and leaked credentials."""
