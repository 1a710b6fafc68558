"""
CLI: ``regen check`` — evaluate source paths and persist their fingerprints.
"""

from __future__ import annotations

from pathlib import Path

import typer

from regen.cli.utils import fail, load_settings, output_decisions
from regen.core.errors import RegenError


def check(
    paths: list[str] = typer.Argument(..., help="Source paths to evaluate."),
    incremental: bool | None = typer.Option(
        None,
        "--incremental/--no-incremental",
        help="Persist fingerprints afterwards (defaults to REGEN_INCREMENTAL).",
    ),
    cache_dir: Path | None = typer.Option(None, "--cache-dir", "-c", help="File cache directory."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Report whether each PATH needs a rebuild."""
    from regen.incremental.protocols import SourceArtifact
    from regen.incremental.regenerator import Regenerator

    try:
        regenerator = Regenerator.from_settings(
            load_settings(cache_dir=cache_dir, incremental=incremental)
        )
        with regenerator.run():
            decisions = {path: regenerator.should_rebuild(SourceArtifact(path)) for path in paths}
    except RegenError as exc:
        fail(exc)
    output_decisions(decisions, as_json=json_out)
