"""Typer CLI entry point for sitemap-cli."""

from __future__ import annotations

import typer

from sitemap_cli import __version__
from sitemap_cli.cli import generate as generate_cmd

app = typer.Typer(
    name="sitemap-cli",
    help="Generate sitemaps.org sitemap files and sitemap indexes.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sitemap-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate sitemaps.org sitemap files and sitemap indexes."""


generate_cmd.register(app)
