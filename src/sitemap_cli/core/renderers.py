"""Per-variant XML renderers for sitemap ``<url>`` entries.

A renderer turns one record into a ``<url>`` fragment and declares the extra
XML namespaces that record needs. The batching engine and file writer only
talk to this interface, so they never special-case a variant.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from enum import Enum
from typing import ClassVar
from xml.sax.saxutils import escape

from sitemap_cli.core.models import (
    MAX_NEWS_URLS_PER_SITEMAP,
    MAX_URLS_PER_SITEMAP,
    ImageUrl,
    NewsUrl,
    Variant,
    WebUrl,
)

INDENT = "  "
SEPARATOR = ","
PRIORITY_DIGITS = 2

NEWS_NAMESPACE = 'xmlns:news="http://www.google.com/schemas/sitemap-news/0.9"'
IMAGE_NAMESPACE = 'xmlns:image="http://www.google.com/schemas/sitemap-image/1.1"'

DateFormat = Callable[[datetime], str]


def render_tag(tag: str, value: object, depth: int) -> str:
    """Render ``<tag>value</tag>`` on its own line, or "" when value is empty."""
    if value is None or value == "":
        return ""
    text = escape(value.value if isinstance(value, Enum) else str(value))
    return f"{INDENT * depth}<{tag}>{text}</{tag}>\n"


def format_priority(value: float) -> str:
    """Priority text rounded to two decimals: ``0.1 + 0.2`` renders as ``0.3``."""
    return str(round(value, PRIORITY_DIGITS))


def join(values: Iterable[str], separator: str = SEPARATOR) -> str:
    return separator.join(values)


class SitemapRenderer:
    """Renders the common ``<url>`` shape; subclasses add extension blocks."""

    variant: ClassVar[Variant] = Variant.web
    url_type: ClassVar[type[WebUrl]] = WebUrl
    max_urls: ClassVar[int] = MAX_URLS_PER_SITEMAP
    xml_namespaces: ClassVar[tuple[str, ...]] = ()

    def namespaces_for(self, record: WebUrl) -> tuple[str, ...]:
        """Namespace declarations *record* needs on the enclosing ``<urlset>``."""
        return self.xml_namespaces

    def extension(self, record: WebUrl, date_format: DateFormat) -> str | None:
        """Variant-specific child markup placed after the standard elements."""
        return None

    def render(self, record: WebUrl, date_format: DateFormat) -> str:
        parts = [
            f"{INDENT}<url>\n",
            render_tag("loc", record.url, 2),
        ]
        if record.lastmod is not None:
            parts.append(render_tag("lastmod", date_format(record.lastmod), 2))
        parts.append(render_tag("changefreq", record.changefreq, 2))
        if record.priority is not None:
            parts.append(render_tag("priority", format_priority(record.priority), 2))
        extra = self.extension(record, date_format)
        if extra:
            parts.append(extra)
        parts.append(f"{INDENT}</url>\n")
        return "".join(parts)


class WebRenderer(SitemapRenderer):
    """Plain sitemaps.org entries."""


class NewsRenderer(SitemapRenderer):
    """Google News entries: a ``<news:news>`` block inside each ``<url>``."""

    variant = Variant.news
    url_type = NewsUrl
    max_urls = MAX_NEWS_URLS_PER_SITEMAP
    xml_namespaces = (NEWS_NAMESPACE,)

    def extension(self, record: NewsUrl, date_format: DateFormat) -> str:  # type: ignore[override]
        pub_date = record.publication_date
        if isinstance(pub_date, datetime):
            pub_date = date_format(pub_date)

        parts = [
            f"{INDENT * 2}<news:news>\n",
            f"{INDENT * 3}<news:publication>\n",
            render_tag("news:name", record.publication_name, 4),
            render_tag("news:language", record.publication_language, 4),
            f"{INDENT * 3}</news:publication>\n",
            render_tag("news:access", record.access, 3),
            render_tag("news:genres", join(record.genres), 3),
            render_tag("news:publication_date", pub_date, 3),
            render_tag("news:title", record.title, 3),
            render_tag("news:keywords", record.keywords, 3),
            render_tag("news:stock_tickers", join(record.stock_tickers), 3),
            f"{INDENT * 2}</news:news>\n",
        ]
        return "".join(parts)


class ImageRenderer(SitemapRenderer):
    """Google image-sitemap entries: one ``<image:image>`` per attached image."""

    variant = Variant.image
    url_type = ImageUrl
    xml_namespaces = (IMAGE_NAMESPACE,)

    def namespaces_for(self, record: ImageUrl) -> tuple[str, ...]:  # type: ignore[override]
        return self.xml_namespaces if record.images else ()

    def extension(self, record: ImageUrl, date_format: DateFormat) -> str:  # type: ignore[override]
        parts = []
        for image in record.images:
            parts.append(f"{INDENT * 2}<image:image>\n")
            parts.append(render_tag("image:loc", image.loc, 3))
            parts.append(render_tag("image:caption", image.caption, 3))
            parts.append(render_tag("image:geo_location", image.geo_location, 3))
            parts.append(render_tag("image:title", image.title, 3))
            parts.append(render_tag("image:license", image.license, 3))
            parts.append(f"{INDENT * 2}</image:image>\n")
        return "".join(parts)


RENDERERS: dict[Variant, type[SitemapRenderer]] = {
    Variant.web: WebRenderer,
    Variant.news: NewsRenderer,
    Variant.image: ImageRenderer,
}


def renderer_for(variant: Variant) -> SitemapRenderer:
    """Return a fresh renderer for *variant*."""
    return RENDERERS[Variant(variant)]()
