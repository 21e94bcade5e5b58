"""Batching engine: splits a stream of URL records across sitemap files.

Records are rendered once on submission and appended to the open batch. When
the next record would push the batch past the URL-count or byte-size limit,
the batch is written out first. :meth:`SitemapGenerator.finalize` flushes the
last batch, names a lone file ``{prefix}.xml``, and writes a sitemap index
when the session produced several files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from sitemap_cli.core.dates import W3CDateFormat
from sitemap_cli.core.errors import (
    ConfigError,
    SessionStateError,
    SitemapOverflowError,
    UrlValidationError,
)
from sitemap_cli.core.index import write_sitemap_index
from sitemap_cli.core.models import (
    MAX_SITEMAP_BYTES,
    GeneratorConfig,
    IndexFile,
    Variant,
    WebUrl,
    WrittenFile,
)
from sitemap_cli.core.renderers import (
    ImageRenderer,
    NewsRenderer,
    SitemapRenderer,
    WebRenderer,
    renderer_for,
)
from sitemap_cli.core.urls import check_under_base
from sitemap_cli.core.writer import (
    Batch,
    Opener,
    open_file_for_writing,
    rename_single,
    write_batch,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SitemapGenerator:
    """Accumulates records for one variant and writes them as sitemap files.

    Not thread-safe: callers feeding one generator from several threads must
    serialize their calls.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        renderer: SitemapRenderer,
        *,
        opener: Opener | None = None,
        clock: Clock | None = None,
    ) -> None:
        max_urls = config.max_urls_per_file or renderer.max_urls
        if max_urls > renderer.max_urls:
            raise ConfigError(
                f"{renderer.variant.value} sitemaps can have only "
                f"{renderer.max_urls} URLs per sitemap: {max_urls}"
            )
        if config.max_bytes_per_file > MAX_SITEMAP_BYTES:
            raise ConfigError(
                f"Sitemaps can be at most {MAX_SITEMAP_BYTES} bytes: "
                f"{config.max_bytes_per_file}"
            )

        self.config = config
        self.renderer = renderer
        self.max_urls = max_urls
        self.date_format = W3CDateFormat(config.date_precision)
        self._opener = opener or open_file_for_writing
        self._clock = clock or _utcnow
        self.reset()

    @property
    def variant(self) -> Variant:
        return self.renderer.variant

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def files(self) -> list[WrittenFile]:
        return list(self._files)

    def reset(self) -> None:
        """Start a fresh session: empty batch, no written files, sequence 1."""
        self._batch = Batch()
        self._files: list[WrittenFile] = []
        self._finalized = False
        self.index_file: IndexFile | None = None

    # ── Submission ───────────────────────────────────────────────────────

    def _validate(self, record: WebUrl) -> None:
        if not isinstance(record, self.renderer.url_type):
            raise UrlValidationError(
                f"{self.variant.value} generator cannot accept "
                f"{type(record).__name__} records"
            )
        if self.config.validate_urls:
            check_under_base(record.url, self.config.base_url)

    def _is_full(self, fragment: str, namespaces: tuple[str, ...]) -> bool:
        batch = self._batch
        if batch.count == 0:
            return False
        if batch.count + 1 > self.max_urls:
            return True
        return batch.projected_size(fragment, namespaces) > self.config.max_bytes_per_file

    def add_url(self, record: WebUrl) -> SitemapGenerator:
        """Add one record, flushing the open batch first if it is full."""
        if self._finalized:
            raise SessionStateError(
                "Sitemap session already finalized; call reset() to start again"
            )
        self._validate(record)

        fragment = self.renderer.render(record, self.date_format)
        namespaces = self.renderer.namespaces_for(record)

        if self._is_full(fragment, namespaces):
            if not self.config.auto_flush:
                raise SitemapOverflowError(
                    f"More than one sitemap file is needed (limit {self.max_urls} URLs, "
                    f"{self.config.max_bytes_per_file} bytes) and auto_flush is disabled"
                )
            self._flush()
        elif self._batch.count == 0 and (
            self._batch.projected_size(fragment, namespaces) > self.config.max_bytes_per_file
        ):
            logger.warning(
                "Entry %s exceeds %d bytes on its own; writing it alone",
                record.url,
                self.config.max_bytes_per_file,
            )

        self._batch.append(fragment, namespaces)
        return self

    def add_urls(self, records: Iterable[WebUrl]) -> SitemapGenerator:
        for record in records:
            self.add_url(record)
        return self

    # ── Flushing ─────────────────────────────────────────────────────────

    def _flush(self) -> None:
        batch, self._batch = self._batch, Batch()
        if batch.count == 0:
            return
        written = write_batch(
            batch,
            len(self._files) + 1,
            self.config,
            self._clock(),
            self._opener,
        )
        self._files.append(written)

    def finalize(self) -> list[WrittenFile]:
        """Flush the open batch and close the session.

        Returns the written sitemap files in sequence order. An empty session
        writes nothing and returns an empty list.
        """
        if self._finalized:
            raise SessionStateError("Sitemap session already finalized")
        self._finalized = True
        self._flush()

        if len(self._files) == 1:
            self._files[0] = rename_single(self._files[0], self.config)
        elif len(self._files) > 1 and self.config.write_index:
            self.index_file = write_sitemap_index(self._files, self.config, self._opener)

        logger.info(
            "Finalized %s sitemap session: %d file(s), %d URL(s)",
            self.variant.value,
            len(self._files),
            sum(f.url_count for f in self._files),
        )
        return list(self._files)


# ── Factories ────────────────────────────────────────────────────────────────


def generator_for(
    variant: Variant,
    config: GeneratorConfig,
    *,
    opener: Opener | None = None,
    clock: Clock | None = None,
) -> SitemapGenerator:
    """Build a generator whose renderer is selected by *variant*."""
    return SitemapGenerator(config, renderer_for(variant), opener=opener, clock=clock)


def web_sitemap_generator(config: GeneratorConfig, **kwargs) -> SitemapGenerator:
    return SitemapGenerator(config, WebRenderer(), **kwargs)


def news_sitemap_generator(config: GeneratorConfig, **kwargs) -> SitemapGenerator:
    return SitemapGenerator(config, NewsRenderer(), **kwargs)


def image_sitemap_generator(config: GeneratorConfig, **kwargs) -> SitemapGenerator:
    return SitemapGenerator(config, ImageRenderer(), **kwargs)
