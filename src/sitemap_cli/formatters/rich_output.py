"""Rich table rendering for sitemap generation results."""

from __future__ import annotations

from rich.table import Table

from sitemap_cli.core.models import WrittenFile


def build_files_table(files: list[WrittenFile]) -> Table:
    """Build a Rich table with one row per written sitemap file."""
    table = Table(title="Sitemap files")
    table.add_column("#", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Public URL")
    table.add_column("URLs", justify="right")
    table.add_column("Bytes", justify="right")

    for written in files:
        table.add_row(
            str(written.sequence_number),
            written.path.name,
            written.public_url,
            str(written.url_count),
            str(written.byte_size),
        )
    return table
