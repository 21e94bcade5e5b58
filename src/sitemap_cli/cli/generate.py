"""Generate command: write sitemap files (and an index) from a list of URLs."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from sitemap_cli.core.errors import SitemapError
from sitemap_cli.core.generator import generator_for
from sitemap_cli.core.loader import load_records
from sitemap_cli.core.models import (
    MAX_SITEMAP_BYTES,
    DatePrecision,
    GeneratorConfig,
    OutputFormat,
    Variant,
)
from sitemap_cli.formatters.csv import format_written_files_csv
from sitemap_cli.formatters.rich_output import build_files_table

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def register(app: typer.Typer) -> None:
    """Register the generate command onto the Typer app."""

    @app.command()
    def generate(
        file: Path = typer.Argument(
            ..., exists=True, dir_okay=False, help="Path to .txt or .csv file with URLs"
        ),
        base_url: str = typer.Option(
            ..., "--base-url", "-b", help="Every URL must live under this base URL"
        ),
        output_dir: Path = typer.Option(
            Path("."), "--output-dir", "-o", help="Directory to write sitemap files"
        ),
        variant: Variant = typer.Option(
            Variant.web, "--variant", help="Sitemap flavor: web, news, or image"
        ),
        max_urls: int = typer.Option(
            None, "--max-urls", help="Max URLs per file (defaults to the variant ceiling)"
        ),
        max_bytes: int = typer.Option(
            MAX_SITEMAP_BYTES, "--max-bytes", help="Max uncompressed bytes per file"
        ),
        prefix: str = typer.Option(
            "sitemap", "--prefix", help="File name prefix for generated sitemaps"
        ),
        precision: DatePrecision = typer.Option(
            DatePrecision.second, "--precision", help="W3C date precision for <lastmod>"
        ),
        no_index: bool = typer.Option(
            False, "--no-index", help="Skip writing sitemap_index.xml for multi-file output"
        ),
        no_validate: bool = typer.Option(
            False, "--no-validate", help="Accept URLs outside the base URL"
        ),
        format: OutputFormat = typer.Option(
            OutputFormat.table, "--format", "-f", help="Output format: table, json, or csv"
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Log every file written"
        ),
    ) -> None:
        """Generate sitemap files for the URLs listed in FILE."""
        _configure_logging(verbose)

        try:
            config = GeneratorConfig(
                base_url=base_url,
                output_dir=output_dir,
                max_urls_per_file=max_urls,
                max_bytes_per_file=max_bytes,
                file_name_prefix=prefix,
                date_precision=precision,
                write_index=not no_index,
                validate_urls=not no_validate,
            )
            output_dir.mkdir(parents=True, exist_ok=True)
            generator = generator_for(variant, config)
            generator.add_urls(load_records(file, variant))
            files = generator.finalize()
        except (SitemapError, ValidationError, OSError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)

        index_file = generator.index_file

        if format == OutputFormat.json:
            payload = {
                "files": [json.loads(f.model_dump_json()) for f in files],
                "index": json.loads(index_file.model_dump_json()) if index_file else None,
            }
            typer.echo(json.dumps(payload, indent=2))
            return

        if format == OutputFormat.csv:
            typer.echo(format_written_files_csv(files, index_file), nl=False)
            return

        if not files:
            console.print("[yellow]No URLs found; nothing written.[/yellow]")
            return

        console.print(build_files_table(files))
        if index_file is not None:
            console.print(f"  [bold]Index:[/bold] {index_file.path}")
        console.print(
            f"\n[bold green]Wrote {len(files)} sitemap file(s) "
            f"with {sum(f.url_count for f in files)} URL(s)[/bold green]"
        )
