"""secretguard CLI — Typer application with scan, redact, validate and init commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape

from secretguard import __version__

app = typer.Typer(
    name="secretguard",
    help="Keep credentials, keys and tokens out of text before it leaves your machine.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(config: Optional[str]):
    """Load config from the working directory, exit 2 on failure."""
    from secretguard.config.loader import load_config
    from secretguard.errors import ConfigError

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_files(paths: List[Path]) -> List[Tuple[str, Optional[str], Optional[str]]]:
    """Return ``(path, content, error)`` per input path, in order."""
    entries: List[Tuple[str, Optional[str], Optional[str]]] = []
    for p in paths:
        try:
            entries.append((str(p), p.read_text(encoding="utf-8", errors="replace"), None))
        except OSError as exc:
            entries.append((str(p), None, f"Cannot read file: {exc.strerror or exc}"))
    return entries


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    files: List[Path] = typer.Argument(..., help="Files to scan"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .secretguard.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    aggressive: bool = typer.Option(False, "--aggressive", help="Bypass entropy thresholds"),
    full_redaction: bool = typer.Option(False, "--full-redaction", help="Never reveal any part of a match"),
) -> None:
    """Scan files for secrets. Exits 1 when findings remain after the allowlist."""
    from secretguard.errors import PatternError
    from secretguard.findings.models import BatchResult, ScanReport
    from secretguard.output import json_report, terminal
    from secretguard.scanner.engine import create_detector_from_config

    cfg = _load_config(config)
    if aggressive:
        cfg.detector.aggressive = True
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    try:
        detector = create_detector_from_config(cfg)
    except (PatternError, ValueError) as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    entries = _read_files(files)
    readable = [{"path": path, "content": content} for path, content, error in entries if error is None]
    scanned = iter(detector.scan_batch(readable))
    results = [
        next(scanned) if error is None else BatchResult(file=path, error=error)
        for path, _, error in entries
    ]
    report = ScanReport(results=results, stats=detector.get_stats())

    if cfg.output.format == "json":
        print(json_report.render(report, full_redaction=True))
    else:
        terminal.render(report, full_redaction=full_redaction, show_summary=cfg.output.show_summary)

    if output:
        Path(output).write_text(json_report.render(report, full_redaction=True), encoding="utf-8")

    if report.total_findings:
        raise typer.Exit(code=1)


# ── redact ────────────────────────────────────────────────────────────────────


@app.command()
def redact(
    files: List[Path] = typer.Argument(..., help="Files to redact"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .secretguard.toml"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Marker style: typed | generic | hash"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Write redacted files here instead of stdout"
    ),
) -> None:
    """Redact secrets, dropping high-risk files. Prints to stdout unless --output-dir is given."""
    from secretguard.errors import PatternError, SecretsDetectedError
    from secretguard.guard.stage import SecretsGuard

    cfg = _load_config(config)
    if mode:
        if mode not in ("typed", "generic", "hash"):
            console.print(f"[bold red]Invalid mode:[/bold red] {mode}")
            raise typer.Exit(code=2)
        cfg.redaction.mode = mode  # type: ignore[assignment]

    try:
        guard = SecretsGuard.from_config(cfg)
    except (PatternError, ValueError) as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    records = []
    for path, content, error in _read_files(files):
        if error is not None:
            console.print(f"[bold red]✗[/bold red] {escape(path)}: {escape(error)}")
            continue
        records.append({"path": path, "content": content})

    try:
        result = guard.process(records)
    except SecretsDetectedError as exc:
        console.print(f"[bold red]❌ {exc}[/bold red]")
        for f in exc.findings:
            console.print(f"  [magenta]{escape(f['file'])}[/magenta]:[green]{f['line']}[/green]  [cyan]{f['rule']}[/cyan]")
        raise typer.Exit(code=1) from exc

    for path in result.excluded:
        console.print(f"[yellow]⚠[/yellow]  Excluded {escape(path)}")

    for record in result.files:
        if output_dir is not None:
            source = Path(record["path"])
            flatten = source.is_absolute() or ".." in source.parts
            target = output_dir / (source.name if flatten else source)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(record["content"], encoding="utf-8")
        else:
            if len(result.files) > 1:
                print(f"==> {record['path']} <==")
            print(record["content"], end="" if record["content"].endswith("\n") else "\n")

    stats = result.stats
    console.print(
        f"[dim]{stats['secrets_redacted']} secret(s) redacted, "
        f"{stats['files_excluded']} file(s) excluded[/dim]"
    )


# ── validate ──────────────────────────────────────────────────────────────────


@app.command()
def validate(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .secretguard.toml"),
) -> None:
    """Validate allowlist, denylist and custom patterns before any scan runs."""
    from secretguard.errors import PatternError
    from secretguard.rules.registry import build_registry
    from secretguard.scanner.filters import validate_allowlist, validate_denylist

    cfg = _load_config(config)

    errors: List[str] = []
    errors.extend(validate_allowlist(cfg.allowlist.rules).errors)
    denylist_result = validate_denylist(cfg.denylist)
    errors.extend(denylist_result.errors)

    # Denylist errors are already listed per entry; custom patterns are still checked.
    denylist = cfg.denylist if denylist_result.valid else None
    pattern_count = 0
    try:
        registry = build_registry(cfg.custom_patterns, denylist)
    except PatternError as exc:
        errors.append(str(exc))
    else:
        pattern_count = len(registry)

    if errors:
        console.print(f"[bold red]✗ {len(errors)} configuration error(s):[/bold red]")
        for err in errors:
            console.print(f"  [red]•[/red] {escape(err)}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Configuration valid ({pattern_count} patterns)")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .secretguard.toml in the current directory."""
    from secretguard.config.defaults import DEFAULT_TOML
    from secretguard.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"secretguard {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG | INFO | WARNING | ERROR"),
    log_json: bool = typer.Option(False, "--log-json", help="Emit logs as JSON lines"),
) -> None:
    """secretguard — Keep secrets out of the text you share."""
    from secretguard.utils.logger import configure_logging

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        console.print(f"[bold red]Invalid log level:[/bold red] {log_level}")
        raise typer.Exit(code=2)
    configure_logging(log_level.upper(), json_output=log_json)
