"""Serialize batches into ``<urlset>`` documents and write them to disk."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from sitemap_cli.core.errors import SitemapIOError
from sitemap_cli.core.models import GeneratorConfig, WrittenFile
from sitemap_cli.core.urls import public_url

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
SITEMAP_NAMESPACE = 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"'
URLSET_FOOTER = "</urlset>"

Opener = Callable[[Path], BinaryIO]


def open_file_for_writing(path: Path) -> BinaryIO:
    """Default byte sink: truncate-and-write the file at *path*."""
    return open(path, "wb")


def urlset_header(namespaces: Iterable[str] = ()) -> str:
    """XML declaration plus the opening ``<urlset>`` tag."""
    attrs = " ".join([SITEMAP_NAMESPACE, *namespaces])
    return f"{XML_DECLARATION}<urlset {attrs} >\n"


def render_urlset(fragments: Iterable[str], namespaces: Iterable[str] = ()) -> str:
    """Assemble a complete sitemap document from rendered ``<url>`` fragments."""
    return urlset_header(namespaces) + "".join(fragments) + URLSET_FOOTER


@dataclass
class Batch:
    """Records destined for one sitemap file, with a running size estimate.

    ``byte_size`` counts the fragments only; the header and footer are added
    by :meth:`projected_size` because the header grows with the namespaces.
    """

    fragments: list[str] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    byte_size: int = 0

    @property
    def count(self) -> int:
        return len(self.fragments)

    def merged_namespaces(self, extra: Iterable[str] = ()) -> list[str]:
        merged = list(self.namespaces)
        for ns in extra:
            if ns not in merged:
                merged.append(ns)
        return merged

    def projected_size(self, fragment: str = "", namespaces: Iterable[str] = ()) -> int:
        """Serialized size of the document if *fragment* were appended."""
        header = urlset_header(self.merged_namespaces(namespaces))
        return (
            len(header.encode("utf-8"))
            + self.byte_size
            + len(fragment.encode("utf-8"))
            + len(URLSET_FOOTER)
        )

    def append(self, fragment: str, namespaces: Iterable[str] = ()) -> None:
        self.namespaces = self.merged_namespaces(namespaces)
        self.fragments.append(fragment)
        self.byte_size += len(fragment.encode("utf-8"))

    def render(self) -> str:
        return render_urlset(self.fragments, self.namespaces)


def write_document(path: Path, content: str, opener: Opener = open_file_for_writing) -> int:
    """Write *content* as UTF-8 to *path* and return the number of bytes written.

    The sink is closed on every exit path. On failure the partial file is
    removed and the error is re-raised as :class:`SitemapIOError`.
    """
    data = content.encode("utf-8")
    try:
        with opener(path) as sink:
            sink.write(data)
    except OSError as exc:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove partial file %s", path)
        raise SitemapIOError(f"Failed to write {path}: {exc}") from exc
    return len(data)


def sequential_name(config: GeneratorConfig, sequence_number: int) -> str:
    return f"{config.file_name_prefix}{sequence_number}.xml"


def single_name(config: GeneratorConfig) -> str:
    return f"{config.file_name_prefix}.xml"


def write_batch(
    batch: Batch,
    sequence_number: int,
    config: GeneratorConfig,
    lastmod: datetime,
    opener: Opener = open_file_for_writing,
) -> WrittenFile:
    """Write *batch* to ``{prefix}{sequence_number}.xml`` in the output directory."""
    name = sequential_name(config, sequence_number)
    path = config.output_dir / name
    size = write_document(path, batch.render(), opener)
    logger.debug("Wrote %s (%d urls, %d bytes)", path, batch.count, size)
    return WrittenFile(
        sequence_number=sequence_number,
        path=path,
        public_url=public_url(config.base_url, name),
        lastmod=lastmod,
        url_count=batch.count,
        byte_size=size,
    )


def rename_single(written: WrittenFile, config: GeneratorConfig) -> WrittenFile:
    """Rename the only file of a session to ``{prefix}.xml``."""
    name = single_name(config)
    target = config.output_dir / name
    try:
        os.replace(written.path, target)
    except OSError as exc:
        raise SitemapIOError(f"Failed to rename {written.path} to {target}: {exc}") from exc
    logger.debug("Renamed %s to %s", written.path, target)
    return written.model_copy(
        update={"path": target, "public_url": public_url(config.base_url, name)}
    )
