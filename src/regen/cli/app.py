"""
Root Typer application for the regen CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="regen",
    help="regen — incremental rebuild decisions for content pipelines.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from regen import __version__

        typer.echo(f"regen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """regen CLI — check artifacts and manage the fingerprint cache."""
    from regen.cli.utils import fail
    from regen.core.config import LogFormat, get_settings
    from regen.core.errors import ConfigError
    from regen.core.logging import configure_logging

    try:
        settings = get_settings()
    except ConfigError as exc:
        fail(exc)
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_format == LogFormat.JSON,
        service="regen",
    )


# ── Sub-command registration ─────────────────────────────────────────────

from regen.cli.cache import app as cache_app  # noqa: E402
from regen.cli.check import check  # noqa: E402

app.command("check")(check)
app.add_typer(cache_app, name="cache", help="Fingerprint cache operations.")


if __name__ == "__main__":
    app()
