"""Sitemap index builder: lists every sitemap file a session produced."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sitemap_cli.core.dates import format_timestamp
from sitemap_cli.core.errors import SitemapError, SitemapOverflowError
from sitemap_cli.core.models import (
    MAX_SITEMAPS_PER_INDEX,
    DatePrecision,
    GeneratorConfig,
    IndexFile,
    WrittenFile,
)
from sitemap_cli.core.renderers import INDENT, render_tag
from sitemap_cli.core.urls import public_url
from sitemap_cli.core.writer import (
    SITEMAP_NAMESPACE,
    XML_DECLARATION,
    Opener,
    open_file_for_writing,
    write_document,
)

logger = logging.getLogger(__name__)


def render_sitemap_index(
    files: Sequence[WrittenFile],
    precision: DatePrecision = DatePrecision.second,
    include_lastmod: bool = True,
) -> str:
    """Render a ``<sitemapindex>`` document, one entry per file in sequence order."""
    parts = [XML_DECLARATION, f"<sitemapindex {SITEMAP_NAMESPACE}>\n"]
    for written in sorted(files, key=lambda f: f.sequence_number):
        parts.append(f"{INDENT}<sitemap>\n")
        parts.append(render_tag("loc", written.public_url, 2))
        if include_lastmod:
            parts.append(render_tag("lastmod", format_timestamp(written.lastmod, precision), 2))
        parts.append(f"{INDENT}</sitemap>\n")
    parts.append("</sitemapindex>")
    return "".join(parts)


def write_sitemap_index(
    files: Sequence[WrittenFile],
    config: GeneratorConfig,
    opener: Opener = open_file_for_writing,
) -> IndexFile:
    """Write the index for *files* to ``config.index_file_name``."""
    if not files:
        raise SitemapError("No sitemaps to index")
    if len(files) > MAX_SITEMAPS_PER_INDEX:
        raise SitemapOverflowError(
            f"A sitemap index can list at most {MAX_SITEMAPS_PER_INDEX} sitemaps, "
            f"got {len(files)}"
        )

    path = config.output_dir / config.index_file_name
    content = render_sitemap_index(files, config.date_precision, config.index_lastmod)
    write_document(path, content, opener)
    logger.debug("Wrote sitemap index %s (%d sitemaps)", path, len(files))
    return IndexFile(
        path=path,
        public_url=config.sitemap_index_url
        or public_url(config.base_url, config.index_file_name),
        sitemap_count=len(files),
    )
