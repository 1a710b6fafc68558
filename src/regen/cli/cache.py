"""
CLI: ``regen cache`` — inspect and reset the persisted fingerprint store.
"""

from __future__ import annotations

from pathlib import Path

import typer

from regen.cli.utils import console, fail, load_settings, output_records
from regen.core.errors import RegenError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show(
    cache_dir: Path | None = typer.Option(None, "--cache-dir", "-c", help="File cache directory."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """List persisted fingerprint records."""
    from regen.incremental.regenerator import Regenerator

    try:
        regenerator = Regenerator.from_settings(load_settings(cache_dir=cache_dir))
        records = regenerator.store.load()
    except RegenError as exc:
        fail(exc)
    output_records(records, as_json=json_out)


@app.command("clear")
def clear(
    cache_dir: Path | None = typer.Option(None, "--cache-dir", "-c", help="File cache directory."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete every persisted fingerprint record."""
    from regen.incremental.regenerator import Regenerator

    if not yes:
        typer.confirm("Delete all fingerprints?", abort=True)
    try:
        Regenerator.from_settings(load_settings(cache_dir=cache_dir)).clear()
    except RegenError as exc:
        fail(exc)
    console.print("[green]Fingerprint cache cleared.[/green]")
