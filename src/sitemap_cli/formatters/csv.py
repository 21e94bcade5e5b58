"""CSV formatter for sitemap generation results."""

from __future__ import annotations

import csv
import io

from sitemap_cli.core.models import IndexFile, WrittenFile


def format_written_files_csv(
    files: list[WrittenFile], index_file: IndexFile | None = None
) -> str:
    """Format written sitemap files as CSV, with the index as a trailing row."""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["sequence", "path", "public_url", "lastmod", "urls", "bytes"])
    for written in files:
        writer.writerow([
            written.sequence_number,
            str(written.path),
            written.public_url,
            written.lastmod.isoformat(),
            written.url_count,
            written.byte_size,
        ])

    if index_file is not None:
        writer.writerow([])
        writer.writerow(["INDEX", "path", "public_url", "sitemaps"])
        writer.writerow([
            "",
            str(index_file.path),
            index_file.public_url,
            index_file.sitemap_count,
        ])

    return output.getvalue()
