"""
CLI utility helpers — settings overrides and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from regen.core.config import RegenSettings, get_settings
from regen.core.errors import RegenError
from regen.incremental.records import FingerprintRecord

console = Console()
err_console = Console(stderr=True)


def load_settings(
    *,
    cache_dir: Path | None = None,
    incremental: bool | None = None,
) -> RegenSettings:
    """Return the cached settings with command-line overrides applied."""
    settings = get_settings()
    updates: dict[str, Any] = {}
    if cache_dir is not None:
        updates["cache_dir"] = cache_dir
    if incremental is not None:
        updates["incremental"] = incremental
    return settings.model_copy(update=updates) if updates else settings


def fail(error: RegenError) -> NoReturn:
    """Print a regen error and exit non-zero."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


def output_records(records: dict[str, FingerprintRecord], *, as_json: bool = False) -> None:
    """Render fingerprint records as a table or JSON."""
    if as_json:
        payload = {path: record.to_dict() for path, record in sorted(records.items())}
        console.print_json(json.dumps(payload))
        return

    if not records:
        console.print("[dim]No fingerprints recorded.[/dim]")
        return

    table = Table(title="Fingerprints", show_lines=False)
    table.add_column("Path", style="cyan")
    table.add_column("Last modified", justify="right")
    table.add_column("Dynamic")
    table.add_column("Seen")
    table.add_column("Forced")
    table.add_column("Dependencies")

    for path, record in sorted(records.items()):
        table.add_row(
            path,
            f"{record.last_modified:.3f}",
            _flag(record.dynamic),
            _flag(record.seen_before),
            _flag(record.forced),
            ", ".join(sorted(record.dependencies)) or "—",
        )
    console.print(table)


def output_decisions(decisions: dict[str, bool], *, as_json: bool = False) -> None:
    """Render per-path rebuild decisions."""
    if as_json:
        console.print_json(json.dumps(decisions))
        return

    table = Table(title="Rebuild decisions")
    table.add_column("Path", style="cyan")
    table.add_column("Rebuild")
    for path, rebuild in decisions.items():
        table.add_row(path, "[yellow]yes[/yellow]" if rebuild else "[green]no[/green]")
    console.print(table)


def _flag(value: bool) -> str:
    return "✓" if value else ""
